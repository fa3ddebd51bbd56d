"""Resume Battle Domain - Pure domain logic for resume analysis and comparison.

This package contains pure functions with no file system or LLM dependencies.
All I/O is handled by the tools layer; this package operates on strings.
"""

from .comparator import (
    ComparisonResult,
    MetricComparison,
    compare_documents,
    format_comparison_report,
)
from .features import (
    ACTION_VERBS,
    MODERN_TECH,
    TECH_KEYWORDS,
    count_action_verbs,
    count_bullet_points,
    count_certifications,
    count_experience_roles,
    count_metrics,
    count_projects,
    count_tech_keywords,
    extract_skills,
    has_recency,
)
from .resume_parser import ParsedDocument, parse_document
from .scorer import FeatureDetails, ScoreSet, collect_details, format_score_report, score_document
from .sections import SECTION_KEYWORDS, Section, detect_sections

__all__ = [
    # Sections
    "SECTION_KEYWORDS",
    "Section",
    "detect_sections",
    # Features
    "ACTION_VERBS",
    "TECH_KEYWORDS",
    "MODERN_TECH",
    "count_experience_roles",
    "count_projects",
    "extract_skills",
    "has_recency",
    "count_bullet_points",
    "count_certifications",
    "count_action_verbs",
    "count_tech_keywords",
    "count_metrics",
    # Parser
    "ParsedDocument",
    "parse_document",
    # Scorer
    "ScoreSet",
    "FeatureDetails",
    "score_document",
    "collect_details",
    "format_score_report",
    # Comparator
    "MetricComparison",
    "ComparisonResult",
    "compare_documents",
    "format_comparison_report",
]
