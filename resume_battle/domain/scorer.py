"""Pure domain logic for scoring a parsed resume.

Five category scores are each capped at 20 and sum to ``total`` (0-100).
The ATS score is an independent 0-100 estimate of how well the document
would survive an applicant tracking system.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict

from . import features
from .resume_parser import ParsedDocument

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

CATEGORY_CAP = 20
ATS_CAP = 100

CATEGORIES = ("experience", "projects", "skills", "structure", "keywords")

# ATS sub-term weights
ATS_KEYWORD_WEIGHT = 1.5
ATS_KEYWORD_CAP = 30
ATS_SECTION_WEIGHT = 6.67
ATS_CONTACT_BONUS = 5
ATS_BULLET_WEIGHT = 2
ATS_BULLET_CAP = 20
ATS_CERT_WEIGHT = 3
ATS_CERT_CAP = 10
ATS_PLAIN_FORMAT_BONUS = 10


@dataclass(frozen=True)
class ScoreSet:
    """Scores derived from exactly one :class:`ParsedDocument`."""

    experience: int
    projects: int
    skills: int
    structure: int
    keywords: int
    total: int
    ats: int

    def category_scores(self) -> Dict[str, int]:
        return {name: getattr(self, name) for name in CATEGORIES}


# ---------------------------------------------------------------------------
# Feature details (raw values quoted in comparison reasons)
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ExperienceDetails:
    roles: int
    recency: bool
    bullets: int


@dataclass(frozen=True)
class ProjectDetails:
    count: int
    metrics: int
    tech_keywords: int


@dataclass(frozen=True)
class SkillDetails:
    total: int
    modern: int


@dataclass(frozen=True)
class StructureDetails:
    bullets: int
    sections: int


@dataclass(frozen=True)
class KeywordDetails:
    action_verbs: int
    metrics: int


@dataclass(frozen=True)
class ATSDetails:
    keywords: int
    sections: int
    contact: bool
    bullets: int


@dataclass(frozen=True)
class FeatureDetails:
    experience: ExperienceDetails
    projects: ProjectDetails
    skills: SkillDetails
    structure: StructureDetails
    keywords: KeywordDetails
    ats: ATSDetails


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def score_document(doc: ParsedDocument) -> ScoreSet:
    """Score *doc*. Total function: never raises for a valid ParsedDocument."""
    experience = _experience_score(doc)
    projects = _project_score(doc)
    skills = _skills_score(doc)
    structure = _structure_score(doc)
    keywords = _keyword_score(doc)

    return ScoreSet(
        experience=experience,
        projects=projects,
        skills=skills,
        structure=structure,
        keywords=keywords,
        total=experience + projects + skills + structure + keywords,
        ats=_ats_score(doc),
    )


def collect_details(doc: ParsedDocument) -> FeatureDetails:
    """Gather the raw feature values behind each score of *doc*."""
    text = doc.raw_text
    metrics = features.count_metrics(text)
    action_verbs = features.count_action_verbs(text)
    tech_keywords = features.count_tech_keywords(text)

    return FeatureDetails(
        experience=ExperienceDetails(
            roles=doc.experience_roles,
            recency=doc.has_recency,
            bullets=features.count_section_bullets(doc.sections, "experience"),
        ),
        projects=ProjectDetails(count=doc.project_count, metrics=metrics, tech_keywords=tech_keywords),
        skills=SkillDetails(
            total=len(doc.skills_list),
            modern=features.count_modern_skills(doc.skills_list),
        ),
        structure=StructureDetails(
            bullets=doc.bullet_point_count,
            sections=features.count_key_sections(doc.sections),
        ),
        keywords=KeywordDetails(action_verbs=action_verbs, metrics=metrics),
        ats=ATSDetails(
            keywords=action_verbs + tech_keywords,
            sections=features.count_required_sections(doc.sections),
            contact=features.has_email(text) or features.has_phone(text),
            bullets=doc.bullet_point_count,
        ),
    )


# ---------------------------------------------------------------------------
# Private scoring helpers
# ---------------------------------------------------------------------------


def _experience_score(doc: ParsedDocument) -> int:
    score = min(10, doc.experience_roles * 2)
    if doc.has_recency:
        score += 5
    score += min(5, features.count_section_bullets(doc.sections, "experience"))
    return min(CATEGORY_CAP, score)


def _project_score(doc: ParsedDocument) -> int:
    score = min(8, doc.project_count * 2)
    score += min(6, features.count_metrics(doc.raw_text))
    score += min(6, features.count_tech_keywords(doc.raw_text) // 2)
    return min(CATEGORY_CAP, score)


def _skills_score(doc: ParsedDocument) -> int:
    score = min(10, len(doc.skills_list))
    score += min(10, features.count_modern_skills(doc.skills_list) * 2)
    return min(CATEGORY_CAP, score)


def _structure_score(doc: ParsedDocument) -> int:
    score = min(8, doc.bullet_point_count)
    score += features.count_key_sections(doc.sections) * 2
    return min(CATEGORY_CAP, score)


def _keyword_score(doc: ParsedDocument) -> int:
    score = min(10, features.count_action_verbs(doc.raw_text))
    score += min(10, features.count_metrics(doc.raw_text) * 2)
    return min(CATEGORY_CAP, score)


def _ats_score(doc: ParsedDocument) -> int:
    text = doc.raw_text
    score = 0.0

    keyword_hits = features.count_action_verbs(text) + features.count_tech_keywords(text)
    score += min(ATS_KEYWORD_CAP, keyword_hits * ATS_KEYWORD_WEIGHT)
    score += features.count_required_sections(doc.sections) * ATS_SECTION_WEIGHT

    if features.has_email(text):
        score += ATS_CONTACT_BONUS
    if features.has_phone(text):
        score += ATS_CONTACT_BONUS

    score += min(ATS_BULLET_CAP, doc.bullet_point_count * ATS_BULLET_WEIGHT)
    score += min(ATS_CERT_CAP, doc.certification_count * ATS_CERT_WEIGHT)

    if not features.has_table_formatting(text):
        score += ATS_PLAIN_FORMAT_BONUS

    # round half up
    return max(0, min(ATS_CAP, int(math.floor(score + 0.5))))


# ---------------------------------------------------------------------------
# Formatting report (pure string output)
# ---------------------------------------------------------------------------


def format_score_report(scores: ScoreSet, details: FeatureDetails) -> str:
    """Render *scores* as a Markdown report."""
    lines = [
        f"## Resume Score: {scores.total}/100 {score_to_grade(scores.total)}",
        score_bar(scores.total),
        "",
        f"**ATS compatibility:** {scores.ats}/100 {score_to_grade(scores.ats)}",
        "",
        "| Category   | Score | Signals |",
        "|------------|-------|---------|",
        f"| Experience | {scores.experience:2d}/20 | {details.experience.roles} roles, "
        f"{details.experience.bullets} bullets{', recent' if details.experience.recency else ''} |",
        f"| Projects   | {scores.projects:2d}/20 | {details.projects.count} projects, "
        f"{details.projects.metrics} metrics, {details.projects.tech_keywords} tech keywords |",
        f"| Skills     | {scores.skills:2d}/20 | {details.skills.total} skills, {details.skills.modern} modern |",
        f"| Structure  | {scores.structure:2d}/20 | {details.structure.bullets} bullets, "
        f"{details.structure.sections}/5 key sections |",
        f"| Keywords   | {scores.keywords:2d}/20 | {details.keywords.action_verbs} action verbs, "
        f"{details.keywords.metrics} metrics |",
    ]
    return "\n".join(lines)


def score_to_grade(score: int) -> str:
    if score >= 90:
        return "Excellent"
    elif score >= 75:
        return "Good"
    elif score >= 60:
        return "Fair"
    else:
        return "Needs Work"


def score_bar(score: int, width: int = 20) -> str:
    filled = round(score / 100 * width)
    return f"[{'=' * filled}{' ' * (width - filled)}]"
