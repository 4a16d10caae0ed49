"""Load and validate YAML feature schemas."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from featflags.errors import SchemaError
from featflags.models import ConfigSchema

BUILTIN_DIR = Path(__file__).parent / "builtin"


def builtin_names() -> list[str]:
    return sorted(p.stem for p in BUILTIN_DIR.glob("*.yaml"))


def _resolve(name_or_path: str) -> Path:
    builtin = BUILTIN_DIR / f"{name_or_path}.yaml"
    if builtin.exists():
        return builtin
    path = Path(name_or_path)
    if path.exists():
        return path
    raise FileNotFoundError(f"Schema not found: {name_or_path}")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        with open(path) as f:
            raw = yaml.safe_load(f) or {}
    except yaml.YAMLError as exc:
        raise SchemaError(f"Schema {path} is not valid YAML: {exc}") from exc
    if not isinstance(raw, dict):
        raise SchemaError(f"Schema {path} must be a mapping, got {type(raw).__name__}")
    return raw


def _format_errors(exc: ValidationError) -> list[str]:
    out = []
    for e in exc.errors():
        loc = ".".join(str(p) for p in e["loc"])
        out.append(f"{loc}: {e['msg']}" if loc else e["msg"])
    return out


def load_schema(name_or_path: str) -> ConfigSchema:
    """Load schema by builtin name or file path."""
    path = _resolve(name_or_path)
    raw = _read_yaml(path)
    try:
        return ConfigSchema.model_validate(raw)
    except ValidationError as exc:
        raise SchemaError(
            f"Invalid schema {path}: {exc.error_count()} error(s)",
            {"errors": _format_errors(exc)},
        ) from exc


def validate_schema(name_or_path: str) -> list[str]:
    """Validate schema file, return list of errors (empty = valid)."""
    try:
        load_schema(name_or_path)
    except SchemaError as exc:
        return exc.details.get("errors", [exc.message])
    return []


def schema_to_text(schema: ConfigSchema) -> str:
    """Format schema as human-readable text."""
    lines: list[str] = []
    if schema.description:
        lines.append(schema.description)
        lines.append("")
    lines.append("Features:")
    for d in schema.features:
        lines.append(f"  -{d.name}  (default: {'on' if d.default else 'off'})")
    if not schema.features:
        lines.append("  (none)")
    lines.append("Targeted features:")
    for d in schema.targeted_features:
        lines.append(f"  -{d.name}  (default: {'on' if d.default else 'off'})")
    if not schema.targeted_features:
        lines.append("  (none)")
    return "\n".join(lines)
