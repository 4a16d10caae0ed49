"""Settings for the featflags tool. YAML-based with env var expansion and env var overlay.

These settings only govern the tool itself (logging, default schema); the
feature configuration is always built from the argument list passed to
``featflags.parser.parse``.
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


# --- Config Models ---


class LoggingConfig(BaseModel):
    """Logging configuration."""
    format: str = "text"   # "text" or "json"
    level: str = "WARNING"


class SchemaConfig(BaseModel):
    """Schema used by CLI commands when --schema is not given."""
    default: str | None = None  # builtin name or path to a YAML schema


class Config(BaseModel):
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    schema_: SchemaConfig = Field(default_factory=SchemaConfig, alias="schema")

    model_config = {"populate_by_name": True}


# --- Helpers ---

_ENV_PATTERN = re.compile(r"\$\{(\w+)\}")


def get_config_dir() -> Path:
    """Return the featflags config directory (``$FEATFLAGS_HOME`` or ~/.featflags)."""
    override = os.environ.get("FEATFLAGS_HOME")
    if override:
        return Path(os.path.expanduser(override))
    return Path.home() / ".featflags"


def get_config_path() -> Path:
    return get_config_dir() / "config.yaml"


def _expand_env_vars(data: Any) -> Any:
    """Recursively expand ${VAR} in strings."""
    if isinstance(data, str):
        return _ENV_PATTERN.sub(lambda m: os.environ.get(m.group(1), m.group(0)), data)
    if isinstance(data, dict):
        return {k: _expand_env_vars(v) for k, v in data.items()}
    if isinstance(data, list):
        return [_expand_env_vars(v) for v in data]
    return data


# Mapping of FEATFLAGS_* env var suffixes to (section, field) tuples.
_ENV_VAR_MAP: dict[str, tuple[str, str]] = {
    "LOG_FORMAT": ("logging", "format"),
    "LOG_LEVEL": ("logging", "level"),
    "SCHEMA": ("schema", "default"),
}


def _apply_env_overlay(data: dict[str, Any]) -> dict[str, Any]:
    """Apply FEATFLAGS_* environment variables on top of YAML data dict."""
    for env_suffix, (section, field) in _ENV_VAR_MAP.items():
        raw_val = os.environ.get(f"FEATFLAGS_{env_suffix}")
        if raw_val is None:
            continue
        if section not in data or not isinstance(data[section], dict):
            data[section] = {}
        data[section][field] = raw_val
    return data


def load_config(path: Path | None = None) -> Config:
    """Load config from YAML, expanding env vars, then applying FEATFLAGS_* env overlay."""
    config_path = path or get_config_path()
    if config_path.exists():
        with open(config_path) as f:
            raw = yaml.safe_load(f) or {}
        data = _expand_env_vars(raw)
    else:
        data = {}
    data = _apply_env_overlay(data)
    return Config(**data)


def save_config(config: Config, path: Path | None = None) -> None:
    """Save config to YAML."""
    config_path = path or get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    data = config.model_dump(by_alias=True)
    with open(config_path, "w") as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False)


def get_config_value(config: Config, key_path: str) -> Any:
    """Get nested config value via dot notation (e.g. 'logging.level')."""
    obj: Any = config.model_dump(by_alias=True)
    for part in key_path.split("."):
        if isinstance(obj, dict):
            obj = obj.get(part)
        else:
            return None
    return obj


def set_config_value(key_path: str, value: str) -> Config:
    """Set config value via dot notation, save, and return updated config."""
    config_path = get_config_path()
    if config_path.exists():
        with open(config_path) as f:
            raw = yaml.safe_load(f) or {}
    else:
        raw = {}

    parts = key_path.split(".")
    obj = raw
    for part in parts[:-1]:
        if part not in obj or not isinstance(obj[part], dict):
            obj[part] = {}
        obj = obj[part]
    obj[parts[-1]] = value

    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, "w") as f:
        yaml.dump(raw, f, default_flow_style=False, sort_keys=False)

    return load_config(config_path)
