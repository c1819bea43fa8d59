from __future__ import annotations

import json
import os
from dataclasses import replace
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import GeocoderConfig, MapperConfig, RateLimitConfig

"""Config loader.

Responsibilities:
- Load YAML (config/mapper.yml by default)
- Validate against the bundled config_schema.json
- Apply defaults for every missing key
- Let GEOCODER_API_KEY override geocoder.api_key
"""

SCHEMA_PATH = Path(__file__).parent / "config_schema.json"
DEFAULT_CONFIG_PATH = Path("config/mapper.yml")
API_KEY_ENV = "GEOCODER_API_KEY"

__all__ = [
    "ConfigError",
    "load_config",
    "apply_env_overrides",
    "DEFAULT_CONFIG_PATH",
]


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: If the schema file is missing or not valid JSON, or the
            config data fails validation (unknown keys, wrong types, ...).
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def load_config(path: Path) -> MapperConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping, got {type(data).__name__}")

    _validate_config_schema(data)

    defaults = MapperConfig()
    geo_raw = data.get("geocoder") or {}
    rl_raw = data.get("rate_limit") or {}
    geocoder = replace(GeocoderConfig(), **geo_raw)
    rate_limit = replace(RateLimitConfig(), **rl_raw)
    return MapperConfig(
        geocoder=geocoder,
        rate_limit=rate_limit,
        header_min_matches=data.get("header_min_matches", defaults.header_min_matches),
        marker_radius_deg=float(data.get("marker_radius_deg", defaults.marker_radius_deg)),
        logs_directory=data.get("logs_directory", defaults.logs_directory),
    )


def apply_env_overrides(config: MapperConfig) -> MapperConfig:
    """Return config with GEOCODER_API_KEY (if set) as geocoder.api_key."""
    api_key = os.getenv(API_KEY_ENV)
    if not api_key:
        return config
    return replace(config, geocoder=replace(config.geocoder, api_key=api_key))
