from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from lms_csv.models.config_models import PortalConfig

"""Config loader.

Responsibilities:
- Load YAML config (default config/portal.yml, overridable by LMS_CSV_CONFIG)
- Validate against the bundled JSON schema (unknown keys rejected)
- Apply defaults (business_timezone=America/Bogota, max_file_size_mb=150, ...)
"""

__all__ = [
    "ConfigError",
    "DEFAULT_CONFIG_PATH",
    "CONFIG_ENV_VAR",
    "SCHEMA_PATH",
    "resolve_config_path",
    "load_config",
]

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")
DEFAULT_CONFIG_PATH = Path("config/portal.yml")
CONFIG_ENV_VAR = "LMS_CSV_CONFIG"


class ConfigError(Exception):
    pass


def _validate_config_schema(data: Any) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: if the schema file is missing or unreadable, or the data
            violates the schema (missing required keys, wrong types, extra keys)
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


def resolve_config_path(explicit: str | Path | None = None) -> Path:
    """CLI argument > LMS_CSV_CONFIG > config/portal.yml"""
    if explicit:
        return Path(explicit)
    env = os.getenv(CONFIG_ENV_VAR)
    if env:
        return Path(env)
    return DEFAULT_CONFIG_PATH


def load_config(path: Path) -> PortalConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e

    _validate_config_schema(data)

    defaults = PortalConfig(source_directory=data["source_directory"])
    tz = data.get("business_timezone", defaults.business_timezone)
    try:
        ZoneInfo(tz)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ConfigError(f"unknown business_timezone: {tz}") from e

    return PortalConfig(
        source_directory=data["source_directory"],
        business_timezone=tz,
        max_file_size_mb=data.get("max_file_size_mb", defaults.max_file_size_mb),
        max_displayed_errors=data.get("max_displayed_errors", defaults.max_displayed_errors),
        audit_log_directory=data.get("audit_log_directory", defaults.audit_log_directory),
    )
