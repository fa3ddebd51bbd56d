"""Provider-agnostic message types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class Message:
    """Provider-agnostic chat message."""

    role: str  # "user" | "assistant"
    text: str

    @classmethod
    def user(cls, text: str) -> "Message":
        return cls(role="user", text=text)

    @classmethod
    def assistant(cls, text: str) -> "Message":
        return cls(role="assistant", text=text)


@dataclass
class GenerationConfig:
    """Common generation settings passed to providers."""

    system_prompt: str = ""
    max_tokens: int = 1024
    temperature: Optional[float] = 0.7
    json_mode: bool = False


@dataclass
class LLMResponse:
    """Normalized response from a provider."""

    text: str = ""
    usage: Optional[Dict[str, int]] = None
    raw: Any = None
