"""Single-resume scoring endpoint."""

from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, List

from fastapi import APIRouter
from pydantic import BaseModel, Field

from .....domain import collect_details, parse_document, score_document
from ....errors import APIError
from .schemas import ScoreSetResponse

router = APIRouter(tags=["score"])


class ScoreRequest(BaseModel):
    text: str = Field(min_length=1)


class ScoreResponse(BaseModel):
    scores: ScoreSetResponse
    details: Dict[str, Any]
    sections: List[str]


@router.post("/score", response_model=ScoreResponse)
async def score_resume(payload: ScoreRequest) -> ScoreResponse:
    if not payload.text.strip():
        raise APIError(400, "BAD_REQUEST", "Resume text is empty")

    parsed = parse_document(payload.text)
    return ScoreResponse(
        scores=ScoreSetResponse.from_scores(score_document(parsed)),
        details=asdict(collect_details(parsed)),
        sections=[s.title for s in parsed.sections],
    )
