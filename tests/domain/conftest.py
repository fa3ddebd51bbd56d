"""Shared resume texts for domain tests."""

import pytest

SCENARIO_TEXT = (
    "Experience\n"
    "2022-2024 Engineer\n"
    "- built scalable systems\n"
    "- increased throughput 20%\n"
    "Skills\n"
    "Python, AWS, Docker"
)

# High ATS (contact info, required sections, many bullets), low category total
ATS_HEAVY_TEXT = (
    "jane@example.com\n"
    "555-123-4567\n"
    "Experience\n"
    "Education\n"
    "Skills\n"
    "Achievements\n" + "- Won hackathon\n" * 10
)

# High category total (skills, projects), no contact info and no bullets
SKILLS_HEAVY_TEXT = """Skills
Python, React, AWS, Docker, Kubernetes, Node, Cloud, ML, AI, Go
Projects
Realtime chat server written with websockets
Distributed key value store implemented in Go
"""


@pytest.fixture
def scenario_text() -> str:
    return SCENARIO_TEXT


@pytest.fixture
def ats_heavy_text() -> str:
    return ATS_HEAVY_TEXT


@pytest.fixture
def skills_heavy_text() -> str:
    return SKILLS_HEAVY_TEXT
