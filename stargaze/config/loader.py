"""YAML config loader with environment fallback and dotted-key access."""

import os
from pathlib import Path
from typing import Any

import yaml

from stargaze.config.schema import StargazeConfig

API_KEY_ENV = "WEATHERAPI_KEY"


def load_config(path: str | Path | None = None) -> StargazeConfig:
    """Load and validate config from a YAML file.

    A missing path yields defaults. When no provider API key is configured,
    the ``WEATHERAPI_KEY`` environment variable is used.
    """
    raw: dict[str, Any] = {}
    if path is not None and Path(path).exists():
        with open(path) as f:
            raw = yaml.safe_load(f) or {}

    provider = raw.get("provider") or {}
    raw["provider"] = provider
    if not provider.get("api_key"):
        env_key = os.environ.get(API_KEY_ENV, "")
        if env_key:
            provider["api_key"] = env_key

    return StargazeConfig(**raw)


def get_config_value(config: StargazeConfig, dotted_key: str) -> Any:
    """Get a config value by dotted key path. E.g. 'cache.forecast_ttl_hours'."""
    obj: Any = config
    for part in dotted_key.split("."):
        if hasattr(obj, part):
            obj = getattr(obj, part)
        elif isinstance(obj, dict):
            obj = obj[part]
        else:
            raise KeyError(f"Config key not found: {dotted_key}")
    return obj


def redacted_dump(config: StargazeConfig) -> str:
    """JSON dump with the provider API key masked."""
    masked = config.model_copy(
        update={
            "provider": config.provider.model_copy(
                update={"api_key": "***" if config.provider.api_key else ""}
            )
        }
    )
    return masked.model_dump_json(indent=2)
