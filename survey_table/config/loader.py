from __future__ import annotations

import json
import os
from dataclasses import replace
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import TableConfig

"""Config loader for the survey points table.

Responsibilities:
- Load YAML (default config/table.yml)
- Validate against table_schema.json (unknown keys rejected)
- Apply defaults, then environment overrides (SURVEY_TABLE_*)
"""

__all__ = [
    "ConfigError",
    "DEFAULT_CONFIG_PATH",
    "SCHEMA_PATH",
    "load_config",
    "apply_env_overrides",
]

DEFAULT_CONFIG_PATH = Path("config/table.yml")
SCHEMA_PATH = Path(__file__).with_name("table_schema.json")

ENV_STORE = "SURVEY_TABLE_STORE"
ENV_PAGE_SIZE = "SURVEY_TABLE_PAGE_SIZE"


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: schema file missing / unreadable, or validation failure
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


def _check_timezone(name: str | None) -> None:
    if name is None:
        return
    try:
        ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ConfigError(f"unknown timezone: {name}") from e


def apply_env_overrides(config: TableConfig) -> TableConfig:
    """Return ``config`` with SURVEY_TABLE_* environment overrides applied."""
    changes: dict[str, Any] = {}
    store = os.environ.get(ENV_STORE)
    if store:
        changes["store"] = store
    page_size = os.environ.get(ENV_PAGE_SIZE)
    if page_size:
        try:
            value = int(page_size)
        except ValueError as e:
            raise ConfigError(f"{ENV_PAGE_SIZE} must be an integer: {page_size!r}") from e
        if value < 1:
            raise ConfigError(f"{ENV_PAGE_SIZE} must be >= 1: {value}")
        changes["page_size"] = value
    return replace(config, **changes) if changes else config


def load_config(path: Path) -> TableConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping: {path}")

    _validate_config_schema(data)
    _check_timezone(data.get("timezone"))

    defaults = TableConfig()
    config = TableConfig(
        page_size=data.get("page_size", defaults.page_size),
        timezone=data.get("timezone"),
        timestamp_format=data.get("timestamp_format", defaults.timestamp_format),
        columns=dict(data.get("columns") or {}),
        store=data.get("store"),
    )
    return apply_env_overrides(config)
