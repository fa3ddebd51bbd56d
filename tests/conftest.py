"""Global pytest fixtures for deterministic test environment."""

from __future__ import annotations

import logging

import pytest


@pytest.fixture(autouse=True)
def _isolate_runtime_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clear local runtime env that can leak into tests on developer machines."""
    for key in (
        "RESUME_BATTLE_CONFIG",
        "RESUME_BATTLE_PROVIDER",
        "RESUME_BATTLE_MODEL",
        "GROQ_API_KEY",
        "OPENAI_API_KEY",
        "DEEPSEEK_API_KEY",
        "KIMI_API_KEY",
    ):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def _reset_package_logger():
    """Drop handlers bound to a test's captured stderr once the test ends."""
    yield
    logger = logging.getLogger("resume_battle")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
