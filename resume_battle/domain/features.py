"""Pure feature extractors over resume text and detected sections.

Every function here takes immutable input and returns a primitive or a tuple.
Vocabulary lookups count *distinct* terms present; regex families count every
match.
"""

from __future__ import annotations

import re
from typing import List, Tuple

from .sections import Section, find_section

# ---------------------------------------------------------------------------
# Vocabularies
# ---------------------------------------------------------------------------

ACTION_VERBS: Tuple[str, ...] = (
    "built",
    "created",
    "developed",
    "designed",
    "implemented",
    "led",
    "managed",
    "achieved",
    "improved",
    "increased",
    "reduced",
    "optimized",
    "launched",
    "delivered",
    "established",
    "coordinated",
    "spearheaded",
    "initiated",
)

TECH_KEYWORDS: Tuple[str, ...] = (
    "ai",
    "ml",
    "machine learning",
    "deep learning",
    "neural network",
    "react",
    "node",
    "python",
    "javascript",
    "typescript",
    "java",
    "c++",
    "aws",
    "gcp",
    "azure",
    "cloud",
    "kubernetes",
    "docker",
    "backend",
    "frontend",
    "full-stack",
    "database",
    "api",
    "rest",
    "mongodb",
    "postgresql",
    "sql",
    "nosql",
    "redis",
    "git",
    "ci/cd",
    "devops",
    "microservices",
    "agile",
)

MODERN_TECH: Tuple[str, ...] = ("ai", "ml", "cloud", "react", "node", "python", "aws", "docker", "kubernetes")

KEY_SECTIONS: Tuple[str, ...] = ("experience", "education", "skills", "projects", "summary")
REQUIRED_SECTIONS: Tuple[str, ...] = ("experience", "education", "skills")

# Digits, word boundaries and whitespace are ASCII-only: fullwidth or Arabic-Indic
# numerals are not dates, metrics or phone numbers.
_ROLE_DATE_PATTERNS: List[re.Pattern] = [
    re.compile(r"\b20\d{2}\s*-\s*20\d{2}\b", re.ASCII),
    re.compile(r"\b20\d{2}\s*-\s*present\b", re.IGNORECASE | re.ASCII),
    re.compile(r"\b(?:jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec)\s+20\d{2}\b", re.IGNORECASE | re.ASCII),
]

_METRIC_PATTERNS: List[re.Pattern] = [
    re.compile(r"\b\d+%", re.ASCII),
    re.compile(r"\b\d+x\b", re.IGNORECASE | re.ASCII),
    re.compile(r"\$\d+", re.ASCII),
    re.compile(r"\b\d+\+\b", re.ASCII),
    re.compile(r"increased.*\d+", re.IGNORECASE | re.ASCII),
    re.compile(r"reduced.*\d+", re.IGNORECASE | re.ASCII),
    re.compile(r"improved.*\d+", re.IGNORECASE | re.ASCII),
]

_RECENCY_RE = re.compile(r"\b(?:2023|2024|2025)\b", re.ASCII)
_SKILL_SPLIT_RE = re.compile(r"[,;\n]")
_PHONE_RE = re.compile(r"\d{3}[-.\s]?\d{3}[-.\s]?\d{4}", re.ASCII)
_TABLE_RE = re.compile(r"\|.*\|")
_BOX_DRAWING_CHARS = ("│", "┃")


# ---------------------------------------------------------------------------
# Extractors over raw text
# ---------------------------------------------------------------------------


def count_experience_roles(text: str) -> int:
    """Estimate the number of roles from date ranges; two date tokens bound one role."""
    matches = sum(len(pattern.findall(text)) for pattern in _ROLE_DATE_PATTERNS)
    return max(1, matches // 2)


def has_recency(text: str) -> bool:
    return bool(_RECENCY_RE.search(text))


def count_action_verbs(text: str) -> int:
    """Count distinct action verbs present in *text*."""
    lower_text = text.lower()
    return sum(1 for verb in ACTION_VERBS if verb in lower_text)


def count_tech_keywords(text: str) -> int:
    """Count distinct technology terms present in *text*."""
    lower_text = text.lower()
    return sum(1 for keyword in TECH_KEYWORDS if keyword in lower_text)


def count_metrics(text: str) -> int:
    """Count quantified statements.

    Matches are summed across all pattern families, so ``"increased sales 20%"``
    counts twice.
    """
    return sum(len(pattern.findall(text)) for pattern in _METRIC_PATTERNS)


def has_email(text: str) -> bool:
    return "@" in text


def has_phone(text: str) -> bool:
    return bool(_PHONE_RE.search(text))


def has_table_formatting(text: str) -> bool:
    """True if *text* contains a pipe table row or box-drawing characters."""
    if _TABLE_RE.search(text):
        return True
    return any(ch in text for ch in _BOX_DRAWING_CHARS)


# ---------------------------------------------------------------------------
# Extractors over sections
# ---------------------------------------------------------------------------


def _long_lines(content: str, min_length: int) -> int:
    return sum(1 for line in content.split("\n") if len(line.strip()) > min_length)


def count_projects(sections: Tuple[Section, ...]) -> int:
    section = find_section(sections, "projects")
    if section is None:
        return 0
    return max(len(section.bullets), _long_lines(section.content, 20))


def extract_skills(sections: Tuple[Section, ...]) -> Tuple[str, ...]:
    """Split the Skills section into entries; duplicates are kept."""
    section = find_section(sections, "skills")
    if section is None:
        return ()
    tokens = (token.strip() for token in _SKILL_SPLIT_RE.split(section.content))
    return tuple(token for token in tokens if token)


def count_bullet_points(sections: Tuple[Section, ...]) -> int:
    return sum(len(section.bullets) for section in sections)


def count_certifications(sections: Tuple[Section, ...]) -> int:
    section = find_section(sections, "certifications")
    if section is None:
        return 0
    return max(len(section.bullets), _long_lines(section.content, 5))


def count_section_bullets(sections: Tuple[Section, ...], title: str) -> int:
    section = find_section(sections, title)
    return len(section.bullets) if section is not None else 0


def count_modern_skills(skills: Tuple[str, ...]) -> int:
    """Count skill entries mentioning any modern technology term."""
    return sum(1 for skill in skills if any(tech in skill.lower() for tech in MODERN_TECH))


def _count_sections_named(sections: Tuple[Section, ...], names: Tuple[str, ...]) -> int:
    return sum(1 for section in sections if any(name in section.title.lower() for name in names))


def count_key_sections(sections: Tuple[Section, ...]) -> int:
    return _count_sections_named(sections, KEY_SECTIONS)


def count_required_sections(sections: Tuple[Section, ...]) -> int:
    return _count_sections_named(sections, REQUIRED_SECTIONS)
