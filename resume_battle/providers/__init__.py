"""Provider factory for the roast client."""

from __future__ import annotations

from ..config import PROVIDER_DEFAULTS, BattleConfig
from .base import ChatProvider
from .openai_compat import OpenAICompatibleProvider
from .types import GenerationConfig, LLMResponse, Message


def create_provider(config: BattleConfig) -> ChatProvider:
    """Build a chat provider from *config*.

    Raises ValueError when no API key could be resolved.
    """
    if not config.api_key:
        env_key = PROVIDER_DEFAULTS.get(config.provider, {}).get("env_key", "API key")
        raise ValueError(f"{env_key} not set. Please set the env var or add api_key to config/config.local.yaml")

    base = config.api_base or PROVIDER_DEFAULTS.get(config.provider, {}).get("api_base", "")
    return OpenAICompatibleProvider(api_key=config.api_key, model=config.model, api_base=base)


__all__ = [
    "ChatProvider",
    "GenerationConfig",
    "LLMResponse",
    "Message",
    "OpenAICompatibleProvider",
    "create_provider",
]
