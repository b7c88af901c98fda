"""YAML config loader with environment overrides and dotted-key lookup."""

import json
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel

from skycast.config.schema import AppConfig
from skycast.errors import ConfigError

API_KEY_ENV = "OPENWEATHER_API_KEY"


def load_config(
    path: str | Path | None = None, require_api_key: bool = False
) -> AppConfig:
    """Load and validate config from a YAML file.

    A missing file yields the defaults. ``OPENWEATHER_API_KEY`` overrides
    ``provider.api_key`` when set.
    """
    raw: dict[str, Any] = {}
    if path is not None and Path(path).exists():
        with open(path) as f:
            raw = yaml.safe_load(f) or {}

    env_key = os.environ.get(API_KEY_ENV, "").strip()
    if env_key:
        raw["provider"] = {**(raw.get("provider") or {}), "api_key": env_key}

    config = AppConfig(**raw)
    if require_api_key and not config.provider.api_key:
        raise ConfigError(f"{API_KEY_ENV} not set")
    return config


def get_config_value(config: AppConfig, dotted_key: str) -> Any:
    """Get a config value by dotted key path. E.g. 'provider.timeout_seconds'."""
    parts = dotted_key.split(".")
    obj: Any = config
    for part in parts:
        if isinstance(obj, list):
            obj = obj[int(part)]
        elif hasattr(obj, part):
            obj = getattr(obj, part)
        elif isinstance(obj, dict):
            obj = obj[part]
        else:
            raise KeyError(f"Config key not found: {dotted_key}")
    return obj


def masked_value(value: Any) -> Any:
    """Config value with every api_key field hidden; models become dicts."""
    if isinstance(value, BaseModel):
        value = value.model_dump(mode="json")
    if isinstance(value, dict):
        return {
            k: ("***" if v else "") if k == "api_key" else masked_value(v)
            for k, v in value.items()
        }
    if isinstance(value, list):
        return [masked_value(v) for v in value]
    return value


def masked_dump(config: AppConfig) -> str:
    """Config as JSON with the provider credential hidden."""
    return json.dumps(masked_value(config), indent=2)
