"""FastAPI app entrypoint for Resume Battle web APIs."""

from __future__ import annotations

import logging
from dataclasses import asdict
from time import perf_counter
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError

from .. import __version__
from ..config import BattleConfig, Severity, has_errors, load_config, load_raw_config, validate_config
from ..providers import create_provider
from ..roast import RoastClient
from .api.v1.router import api_v1_router
from .errors import APIError, api_error_handler, validation_error_handler

logger = logging.getLogger("resume_battle.web.api")


def _check_config(raw_config: dict) -> None:
    # warnings are only about the API key, which _default_roast_client reports
    issues = validate_config(raw_config)
    if has_errors(issues):
        errors = "; ".join(f"{i.field}: {i.message}" for i in issues if i.severity == Severity.ERROR)
        raise ValueError(f"Invalid configuration: {errors}")


def _default_roast_client(config: BattleConfig) -> Optional[RoastClient]:
    if not config.roast_enabled:
        logger.warning("No API key for provider %s; roast endpoint disabled", config.provider)
        return None
    return RoastClient(create_provider(config), config=config)


def create_app(
    config: Optional[BattleConfig] = None,
    roast_client: Optional[RoastClient] = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    *roast_client* overrides the provider built from *config*. Raises
    ValueError when the configuration has errors.
    """
    if config is None:
        _check_config(load_raw_config())
        config = load_config()
    else:
        _check_config(asdict(config))
    if roast_client is None:
        roast_client = _default_roast_client(config)

    app = FastAPI(title="Resume Battle API", version=__version__)
    app.state.config = config
    app.state.roast_client = roast_client
    app.include_router(api_v1_router)

    @app.middleware("http")
    async def request_logging_middleware(request: Request, call_next):
        start = perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            duration_ms = (perf_counter() - start) * 1000
            logger.info(
                "api_request method=%s path=%s status=%s duration_ms=%.2f",
                request.method,
                request.url.path,
                500,
                duration_ms,
            )
            raise

        duration_ms = (perf_counter() - start) * 1000
        logger.info(
            "api_request method=%s path=%s status=%s duration_ms=%.2f",
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
        )
        return response

    @app.get("/healthz", tags=["system"])
    async def healthz() -> dict:
        return {"status": "ok", "roast_enabled": app.state.roast_client is not None}

    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    return app


def main(host: str = "127.0.0.1", port: int = 8000, config_path: Optional[str] = None) -> None:
    """Run development API server."""
    import uvicorn

    config = load_config(config_path) if config_path else None
    uvicorn.run(create_app(config), host=host, port=port)
