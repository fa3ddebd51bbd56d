"""Dependency providers for v1 API."""

from __future__ import annotations

from typing import Optional

from fastapi import Request

from ....config import BattleConfig
from ....roast import RoastClient


def get_config(request: Request) -> BattleConfig:
    """Access the loaded configuration from app state."""
    return request.app.state.config


def get_roast_client(request: Request) -> Optional[RoastClient]:
    """Return the roast client, or None when no provider is configured."""
    return request.app.state.roast_client
