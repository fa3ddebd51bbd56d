"""Head-to-head battle endpoints."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from .....config import BattleConfig
from .....domain import compare_documents, parse_document
from .....observability import BattleObserver
from .....roast import RoastClient, RoastError
from ....errors import APIError
from ..deps import get_config, get_roast_client
from ..upload import upload_to_text
from .schemas import BattleRequest, BattleResponse, RoastRequest, RoastResponse

logger = logging.getLogger("resume_battle.web.api")

router = APIRouter(prefix="/battles", tags=["battles"])


def _require_text(first_text: str, second_text: str) -> None:
    empty = [name for name, text in (("first_text", first_text), ("second_text", second_text)) if not text.strip()]
    if empty:
        raise APIError(400, "BAD_REQUEST", "Resume text is empty", {"fields": empty})


def _run_battle(
    first_text: str,
    second_text: str,
    first_name: str,
    second_name: str,
    observer: Optional[BattleObserver] = None,
):
    observer = observer or BattleObserver()
    with observer.track("parse", documents=2):
        first = parse_document(first_text)
        second = parse_document(second_text)
    with observer.track("compare") as event:
        result = compare_documents(first, second)
        event["winner"] = result.winner
    return result, BattleResponse.from_result(result, first_name, second_name)


@router.post("", response_model=BattleResponse)
async def create_battle(payload: BattleRequest) -> BattleResponse:
    _require_text(payload.first_text, payload.second_text)
    _, response = _run_battle(payload.first_text, payload.second_text, payload.first_name, payload.second_name)
    return response


@router.post("/upload", response_model=BattleResponse)
async def create_battle_from_upload(
    first: UploadFile = File(...),
    second: UploadFile = File(...),
    first_name: str = Form("Player 1"),
    second_name: str = Form("Player 2"),
    config: BattleConfig = Depends(get_config),
) -> BattleResponse:
    first_text = await upload_to_text(first, config.max_upload_bytes)
    second_text = await upload_to_text(second, config.max_upload_bytes)
    _, response = _run_battle(first_text, second_text, first_name, second_name)
    return response


@router.post("/roast", response_model=RoastResponse)
async def roast_battle(
    payload: RoastRequest,
    roast_client: Optional[RoastClient] = Depends(get_roast_client),
) -> RoastResponse:
    _require_text(payload.first_text, payload.second_text)
    if roast_client is None:
        raise APIError(503, "ROAST_DISABLED", "No commentary provider is configured")

    observer = BattleObserver()
    result, response = _run_battle(
        payload.first_text, payload.second_text, payload.first_name, payload.second_name, observer
    )
    try:
        with observer.track("roast", brutal=payload.brutal) as event:
            roast = await roast_client.roast(
                payload.first_text,
                payload.second_text,
                result,
                first_name=payload.first_name,
                second_name=payload.second_name,
                brutal=payload.brutal,
            )
            event["winner"] = roast.winner
    except RoastError as e:
        logger.error("roast_failed error=%s", e)
        raise APIError(502, "AI_SERVICE_ERROR", "AI service error") from e

    return RoastResponse(winner=roast.winner, roast=roast.roast, advice=roast.advice, comparison=response)
