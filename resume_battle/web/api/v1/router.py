"""Top-level v1 API router."""

from __future__ import annotations

from fastapi import APIRouter

from .endpoints.battles import router as battles_router
from .endpoints.score import router as score_router

api_v1_router = APIRouter(prefix="/api/v1")
api_v1_router.include_router(score_router)
api_v1_router.include_router(battles_router)
