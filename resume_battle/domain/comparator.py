"""Pure domain logic for head-to-head comparison of two parsed resumes.

Each metric is won by the first document on ties. The overall winner is
decided by the ATS score alone, not by the category total; the total-based
decision is exposed separately as ``total_winner``.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Callable, Dict, List, Tuple

from .resume_parser import ParsedDocument
from .scorer import FeatureDetails, ScoreSet, collect_details, score_document

FIRST = "first"
SECOND = "second"


@dataclass(frozen=True)
class MetricComparison:
    """One row of the comparison breakdown."""

    metric: str
    value_first: int
    value_second: int
    winner: str
    reason: str


@dataclass(frozen=True)
class ComparisonResult:
    """Outcome of comparing two documents."""

    winner: str
    scores_first: ScoreSet
    scores_second: ScoreSet
    breakdown: Tuple[MetricComparison, ...]
    details_first: FeatureDetails
    details_second: FeatureDetails

    @property
    def total_winner(self) -> str:
        """Winner by category total (ties favor first)."""
        return _pick(self.scores_first.total, self.scores_second.total)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["breakdown"] = [asdict(row) for row in self.breakdown]
        data["total_winner"] = self.total_winner
        return data


# ---------------------------------------------------------------------------
# Reason templates
# ---------------------------------------------------------------------------


def _experience_reason(d: FeatureDetails) -> str:
    recent = ", recent exp" if d.experience.recency else ""
    return f"{d.experience.roles} roles{recent}, {d.experience.bullets} bullets"


def _projects_reason(d: FeatureDetails) -> str:
    p = d.projects
    return f"{p.count} projects, {p.metrics} metrics, {p.tech_keywords} tech keywords"


def _skills_reason(d: FeatureDetails) -> str:
    return f"{d.skills.total} skills ({d.skills.modern} modern tech)"


def _structure_reason(d: FeatureDetails) -> str:
    return f"{d.structure.bullets} bullets, {d.structure.sections}/5 key sections"


def _keywords_reason(d: FeatureDetails) -> str:
    return f"{d.keywords.action_verbs} action verbs, {d.keywords.metrics} metrics"


def _ats_reason(d: FeatureDetails) -> str:
    contact = "has" if d.ats.contact else "no"
    return f"{d.ats.keywords} keywords, {d.ats.sections}/3 required sections, {contact} contact"


#: (display name, ScoreSet attribute, reason template), in breakdown order.
METRICS: List[Tuple[str, str, Callable[[FeatureDetails], str]]] = [
    ("Experience", "experience", _experience_reason),
    ("Projects", "projects", _projects_reason),
    ("Skills", "skills", _skills_reason),
    ("Structure", "structure", _structure_reason),
    ("Keywords", "keywords", _keywords_reason),
    ("ATS Score", "ats", _ats_reason),
]


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def compare_documents(first: ParsedDocument, second: ParsedDocument) -> ComparisonResult:
    """Score both documents and compare them metric by metric."""
    scores_first = score_document(first)
    scores_second = score_document(second)
    details_first = collect_details(first)
    details_second = collect_details(second)

    breakdown: List[MetricComparison] = []
    for name, attr, reason in METRICS:
        value_first = getattr(scores_first, attr)
        value_second = getattr(scores_second, attr)
        winner = _pick(value_first, value_second)
        breakdown.append(
            MetricComparison(
                metric=name,
                value_first=value_first,
                value_second=value_second,
                winner=winner,
                reason=reason(details_first if winner == FIRST else details_second),
            )
        )

    return ComparisonResult(
        winner=_pick(scores_first.ats, scores_second.ats),
        scores_first=scores_first,
        scores_second=scores_second,
        breakdown=tuple(breakdown),
        details_first=details_first,
        details_second=details_second,
    )


def format_comparison_report(
    result: ComparisonResult,
    first_name: str = "Player 1",
    second_name: str = "Player 2",
) -> str:
    """Render a :class:`ComparisonResult` as a Markdown report."""
    names = {FIRST: first_name, SECOND: second_name}

    lines = [
        f"## Winner: {names[result.winner]}",
        "",
        f"ATS: {first_name} {result.scores_first.ats} vs {second_name} {result.scores_second.ats}  ",
        f"Total: {first_name} {result.scores_first.total} vs {second_name} {result.scores_second.total}",
        "",
        f"| Metric | {first_name} | {second_name} | Winner | Why |",
        "|--------|-----|-----|--------|-----|",
    ]
    for row in result.breakdown:
        lines.append(
            f"| {row.metric} | {row.value_first} | {row.value_second} | {names[row.winner]} | {row.reason} |"
        )

    if result.total_winner != result.winner:
        lines.append("")
        lines.append(f"Note: {names[result.total_winner]} has the higher category total; ATS decides the battle.")

    return "\n".join(lines)


def _pick(value_first: int, value_second: int) -> str:
    return FIRST if value_first >= value_second else SECOND
