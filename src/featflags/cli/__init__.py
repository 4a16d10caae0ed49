"""featflags CLI - parse feature-flag arguments against a schema."""

from __future__ import annotations

import typer

from featflags.config import (
    Config,
    get_config_value,
    load_config,
    save_config,
    set_config_value,
)
from featflags.logging_setup import setup_logging

# Bootstrap logging from config (respects FEATFLAGS_LOG_FORMAT / FEATFLAGS_LOG_LEVEL)
setup_logging(load_config())

app = typer.Typer(name="featflags", help="Schema-driven feature flags parsed from argument lists")
schema_app = typer.Typer(help="Inspect and validate feature schemas")
config_app = typer.Typer(help="Manage featflags settings")

app.add_typer(schema_app, name="schema")
app.add_typer(config_app, name="config")

_config: Config | None = None


def _get_config() -> Config:
    global _config
    if _config is None:
        _config = load_config()
    return _config


def _set_config_value(key: str, value: str) -> Config:
    global _config
    _config = set_config_value(key, value)
    return _config


# Register commands from sub-modules
from featflags.cli import parse_cmd as _parse_cmd_mod  # noqa: E402
from featflags.cli import config_cmd as _config_cmd_mod  # noqa: E402

_parse_cmd_mod.register(app, _get_config)
_config_cmd_mod.register(
    config_app,
    schema_app,
    _get_config,
    get_config_value,
    _set_config_value,
    save_config,
)

if __name__ == "__main__":
    app()
