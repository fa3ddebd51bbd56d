"""Pure domain logic for turning raw resume text into a :class:`ParsedDocument`.

All functions operate on strings -- no file I/O.
File reading is the responsibility of the tools layer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from . import features
from .sections import Section, detect_sections


@dataclass(frozen=True)
class ParsedDocument:
    """Structured view of one resume, derived only from ``raw_text``."""

    raw_text: str
    sections: Tuple[Section, ...]
    experience_roles: int
    project_count: int
    skills_list: Tuple[str, ...]
    has_recency: bool
    bullet_point_count: int
    certification_count: int


def parse_document(text: str) -> ParsedDocument:
    """Parse resume *text*.

    Never fails on content: empty or heading-less text yields no sections and
    default feature values (``experience_roles`` is always at least 1).
    Raises :class:`TypeError` if *text* is not a string.
    """
    if not isinstance(text, str):
        raise TypeError(f"resume text must be str, got {type(text).__name__}")

    sections = detect_sections(text)
    return ParsedDocument(
        raw_text=text,
        sections=sections,
        experience_roles=features.count_experience_roles(text),
        project_count=features.count_projects(sections),
        skills_list=features.extract_skills(sections),
        has_recency=features.has_recency(text),
        bullet_point_count=features.count_bullet_points(sections),
        certification_count=features.count_certifications(sections),
    )
