"""Pure domain logic for splitting resume text into titled sections.

All functions operate on strings -- no file I/O.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

#: Ordered heading rules. The first category with a keyword contained in the
#: lower-cased line wins, so the order here is the priority order.
SECTION_KEYWORDS: List[Tuple[str, Tuple[str, ...]]] = [
    ("experience", ("experience", "work history", "employment", "professional experience")),
    ("education", ("education", "academic", "qualification")),
    ("skills", ("skills", "technical skills", "competencies", "technologies")),
    ("projects", ("projects", "portfolio", "work samples")),
    ("achievements", ("achievements", "accomplishments", "awards", "honors")),
    ("summary", ("summary", "objective", "about", "profile")),
    ("certifications", ("certifications", "certificates", "licenses")),
]

_BULLET_RE = re.compile(r"^(?:[•\-*]|\d+\.)\s+", re.ASCII)


@dataclass(frozen=True)
class Section:
    """A titled block of resume text."""

    title: str
    content: str = ""
    bullets: Tuple[str, ...] = ()


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def match_heading(line: str) -> Optional[str]:
    """Return the canonical category for *line*, or ``None`` if it is not a heading."""
    lower_line = line.lower()
    for category, keywords in SECTION_KEYWORDS:
        if any(kw in lower_line for kw in keywords):
            return category
    return None


def strip_bullet(line: str) -> Optional[str]:
    """Return *line* without its list marker, or ``None`` if it is not a bullet."""
    match = _BULLET_RE.match(line)
    if not match:
        return None
    return line[match.end():]


def detect_sections(text: str) -> Tuple[Section, ...]:
    """Split *text* into sections in order of appearance.

    Lines before the first recognised heading are dropped.
    """
    lines = [line.strip() for line in text.split("\n")]
    sections: List[Section] = []
    title: Optional[str] = None
    content: List[str] = []
    bullets: List[str] = []

    for line in lines:
        if not line:
            continue

        category = match_heading(line)
        if category is not None:
            if title is not None:
                sections.append(Section(title, "".join(content), tuple(bullets)))
            title = category.capitalize()
            content = []
            bullets = []
            continue

        if title is None:
            continue

        content.append(line + "\n")
        bullet = strip_bullet(line)
        if bullet is not None:
            bullets.append(bullet)

    if title is not None:
        sections.append(Section(title, "".join(content), tuple(bullets)))

    return tuple(sections)


def find_section(sections: Tuple[Section, ...], title: str) -> Optional[Section]:
    """Return the first section whose title equals *title* (case-insensitive)."""
    wanted = title.lower()
    for section in sections:
        if section.title.lower() == wanted:
            return section
    return None
