"""Resume Battle - score two resumes and decide which one wins."""

from .domain import (
    ComparisonResult,
    ParsedDocument,
    ScoreSet,
    compare_documents,
    parse_document,
    score_document,
)

__version__ = "0.1.0"

__all__ = [
    "ComparisonResult",
    "ParsedDocument",
    "ScoreSet",
    "compare_documents",
    "parse_document",
    "score_document",
]
