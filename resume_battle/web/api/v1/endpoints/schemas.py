"""Request/response models shared by v1 endpoints."""

from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, List

from pydantic import BaseModel, Field

from .....domain import ComparisonResult, ScoreSet


class ScoreSetResponse(BaseModel):
    experience: int
    projects: int
    skills: int
    structure: int
    keywords: int
    total: int
    ats: int

    @classmethod
    def from_scores(cls, scores: ScoreSet) -> "ScoreSetResponse":
        return cls(**asdict(scores))


class MetricComparisonResponse(BaseModel):
    metric: str
    value_first: int
    value_second: int
    winner: str
    reason: str


class BattleRequest(BaseModel):
    first_text: str = Field(min_length=1)
    second_text: str = Field(min_length=1)
    first_name: str = Field(default="Player 1", max_length=80)
    second_name: str = Field(default="Player 2", max_length=80)


class RoastRequest(BattleRequest):
    brutal: bool = False


class BattleResponse(BaseModel):
    first_name: str
    second_name: str
    winner: str
    winner_name: str
    total_winner: str
    scores_first: ScoreSetResponse
    scores_second: ScoreSetResponse
    breakdown: List[MetricComparisonResponse]
    details_first: Dict[str, Any]
    details_second: Dict[str, Any]

    @classmethod
    def from_result(cls, result: ComparisonResult, first_name: str, second_name: str) -> "BattleResponse":
        return cls(
            first_name=first_name,
            second_name=second_name,
            winner=result.winner,
            winner_name=first_name if result.winner == "first" else second_name,
            total_winner=result.total_winner,
            scores_first=ScoreSetResponse.from_scores(result.scores_first),
            scores_second=ScoreSetResponse.from_scores(result.scores_second),
            breakdown=[MetricComparisonResponse(**asdict(row)) for row in result.breakdown],
            details_first=asdict(result.details_first),
            details_second=asdict(result.details_second),
        )


class RoastResponse(BaseModel):
    winner: str
    roast: str
    advice: str
    comparison: BattleResponse
