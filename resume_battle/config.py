"""Configuration loading and validation for Resume Battle."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

DEFAULT_CONFIG_PATH = "config/config.yaml"

PROVIDER_DEFAULTS: Dict[str, Dict[str, str]] = {
    "groq": {"api_base": "https://api.groq.com/openai/v1", "env_key": "GROQ_API_KEY"},
    "openai": {"api_base": "https://api.openai.com/v1", "env_key": "OPENAI_API_KEY"},
    "deepseek": {"api_base": "https://api.deepseek.com", "env_key": "DEEPSEEK_API_KEY"},
    "kimi": {"api_base": "https://api.moonshot.cn/v1", "env_key": "KIMI_API_KEY"},
}


@dataclass
class BattleConfig:
    """Runtime settings. Only the roast client needs the provider fields."""

    provider: str = "groq"
    model: str = "llama-3.3-70b-versatile"
    api_key: str = ""
    api_base: str = ""
    temperature: float = 0.7
    max_tokens: int = 1024
    max_upload_bytes: int = 5 * 1024 * 1024
    prompt_char_limit: int = 1500

    @property
    def roast_enabled(self) -> bool:
        return bool(self.api_key)


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass
class ConfigError:
    """A single configuration issue."""
    field: str
    message: str
    severity: Severity


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


def load_raw_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """Read the YAML config merged with ``config.local.yaml``, unvalidated.

    A missing file yields an empty mapping.
    """
    path = Path(config_path or os.environ.get("RESUME_BATTLE_CONFIG", DEFAULT_CONFIG_PATH))
    if not path.exists() and not path.is_absolute():
        path = Path(__file__).parent.parent / path

    data: Dict[str, Any] = {}
    if path.exists():
        data.update(_read_yaml(path))
        local = path.with_name("config.local.yaml")
        if local.exists():
            data.update(_read_yaml(local))
    return data


def load_config(config_path: Optional[str] = None) -> BattleConfig:
    """Load configuration from YAML.

    ``config.local.yaml`` next to the main file overrides it, and
    ``RESUME_BATTLE_PROVIDER`` / ``RESUME_BATTLE_MODEL`` override both.
    A missing file yields defaults. Values are not checked here; run
    :func:`validate_config` on :func:`load_raw_config` output first.
    """
    data = load_raw_config(config_path)

    provider = os.environ.get("RESUME_BATTLE_PROVIDER") or data.get("provider", "groq")
    model = os.environ.get("RESUME_BATTLE_MODEL") or data.get("model", "llama-3.3-70b-versatile")
    provider = str(provider).lower()
    defaults = PROVIDER_DEFAULTS.get(provider, {})

    return BattleConfig(
        provider=provider,
        model=model,
        api_key=resolve_api_key(provider, data.get("api_key", "")),
        api_base=data.get("api_base") or defaults.get("api_base", ""),
        temperature=data.get("temperature", 0.7),
        max_tokens=data.get("max_tokens", 1024),
        max_upload_bytes=data.get("max_upload_bytes", 5 * 1024 * 1024),
        prompt_char_limit=data.get("prompt_char_limit", 1500),
    )


def _read_yaml(path: Path) -> Dict[str, Any]:
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping: {path}")
    return data


def resolve_api_key(provider: str, config_api_key: Any) -> str:
    """Resolve an API key from env or config value without side effects.

    Returns the resolved key string, or empty string if unresolvable.
    Non-string YAML values (``api_key: 12345``) are taken as text.
    """
    env_key = PROVIDER_DEFAULTS.get(provider, {}).get("env_key", "")
    if env_key:
        env_value = os.environ.get(env_key, "")
        if env_value:
            return env_value

    if config_api_key is None or config_api_key == "":
        return ""
    config_api_key = str(config_api_key)

    if not config_api_key.startswith("${"):
        return config_api_key

    # Resolve ${VAR_NAME} placeholder
    if config_api_key.endswith("}"):
        return os.environ.get(config_api_key[2:-1], "")

    return ""


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


def validate_config(raw_config: Dict[str, Any]) -> List[ConfigError]:
    """Validate raw configuration and return a list of issues.

    Args:
        raw_config: Raw config dict from YAML

    Returns:
        List of ConfigError (empty = valid)
    """
    errors: List[ConfigError] = []
    provider = str(raw_config.get("provider", "groq")).lower()

    # --- API Key ---
    if not resolve_api_key(provider, raw_config.get("api_key", "")):
        env_key = PROVIDER_DEFAULTS.get(provider, {}).get("env_key", "an API key")
        errors.append(ConfigError(
            field="api_key",
            message=f"{env_key} not set. Roasts are disabled; scoring and comparison still work",
            severity=Severity.WARNING,
        ))

    # --- Provider ---
    if provider not in PROVIDER_DEFAULTS and not raw_config.get("api_base"):
        errors.append(ConfigError(
            field="api_base",
            message=f"Unknown provider {provider!r} requires an explicit api_base",
            severity=Severity.ERROR,
        ))

    # --- Model ---
    model = raw_config.get("model", "llama-3.3-70b-versatile")
    if not model or not isinstance(model, str):
        errors.append(ConfigError(
            field="model",
            message="model must be a non-empty string",
            severity=Severity.ERROR,
        ))

    # --- Temperature ---
    temperature = raw_config.get("temperature", 0.7)
    if not isinstance(temperature, (int, float)) or temperature < 0 or temperature > 2:
        errors.append(ConfigError(
            field="temperature",
            message=f"temperature must be a number between 0 and 2, got {temperature}",
            severity=Severity.ERROR,
        ))

    # --- Positive integers ---
    for key, default in (("max_tokens", 1024), ("max_upload_bytes", 5 * 1024 * 1024), ("prompt_char_limit", 1500)):
        value = raw_config.get(key, default)
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            errors.append(ConfigError(
                field=key,
                message=f"{key} must be a positive integer, got {value}",
                severity=Severity.ERROR,
            ))

    return errors


def has_errors(issues: List[ConfigError]) -> bool:
    """Check if any issues are errors (not just warnings)."""
    return any(e.severity == Severity.ERROR for e in issues)
