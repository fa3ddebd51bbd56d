"""Error envelope for the battle API.

Every failure leaves the API as ``{"error": {"code", "message", "details"}}``.
Codes in use: BAD_REQUEST, UNSUPPORTED_FORMAT, UPLOAD_TOO_LARGE,
EXTRACTION_FAILED, ROAST_DISABLED and AI_SERVICE_ERROR.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


def error_envelope(code: str, message: str, details: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    return {"error": {"code": code, "message": message, "details": details or {}}}


class APIError(Exception):
    """A rejected upload, bad payload or roast failure with its HTTP status."""

    def __init__(
        self,
        status_code: int,
        code: str,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.code = code
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        return error_envelope(self.code, self.message, self.details)


async def api_error_handler(_: Request, exc: APIError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def validation_error_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    """Report missing or mistyped battle fields as BAD_REQUEST."""
    return JSONResponse(
        status_code=400,
        content=error_envelope("BAD_REQUEST", "Invalid request payload", {"errors": jsonable_errors(exc)}),
    )


def jsonable_errors(exc: RequestValidationError) -> List[Dict[str, Any]]:
    # pydantic may put exception objects in "ctx"
    return [
        {"loc": list(err.get("loc", ())), "msg": str(err.get("msg", "")), "type": str(err.get("type", ""))}
        for err in exc.errors()
    ]
