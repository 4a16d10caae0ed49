"""CLI commands for settings and schema management."""

from __future__ import annotations

from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

console = Console()


def register(
    config_app: typer.Typer,
    schema_app: typer.Typer,
    get_config,
    get_config_value,
    set_config_value,
    save_config,
) -> None:
    """Register config and schema commands on their respective sub-apps."""

    # --- Config commands ---

    @config_app.command("show")
    def config_show():
        """Show current settings."""
        cfg = get_config()
        console.print_json(cfg.model_dump_json(indent=2, by_alias=True))

    @config_app.command("set")
    def config_set(key: str = typer.Argument(...), value: str = typer.Argument(...)):
        """Set a settings value (dot notation: logging.level)."""
        set_config_value(key, value)
        console.print(f"[green]Set[/green] {key} = {escape(value)}")

    @config_app.command("get")
    def config_get(key: str = typer.Argument(...)):
        """Get a settings value."""
        cfg = get_config()
        val = get_config_value(cfg, key)
        console.print(f"{key} = {escape(str(val))}")

    # --- Schema commands ---

    @schema_app.command("list")
    def schema_list():
        """List builtin schemas."""
        from featflags.schema.loader import builtin_names
        for name in builtin_names():
            console.print(name)

    @schema_app.command("show")
    def schema_show(name: Optional[str] = typer.Argument(None)):
        """Show a schema (default: the configured one)."""
        from featflags.errors import SchemaError
        from featflags.schema.loader import load_schema, schema_to_text
        name = name or get_config().schema_.default
        if not name:
            console.print("[red]Error:[/red] No schema given and schema.default is not set")
            raise typer.Exit(1)
        try:
            schema = load_schema(name)
        except (SchemaError, FileNotFoundError) as exc:
            console.print(f"[red]Error:[/red] {escape(str(exc))}")
            raise typer.Exit(1)
        console.print(escape(schema_to_text(schema)))

    @schema_app.command("use")
    def schema_use(name: str = typer.Argument(..., help="Builtin schema name or path to a YAML schema")):
        """Check a schema and make it the default for parse and check."""
        from featflags.errors import SchemaError
        from featflags.schema.loader import load_schema
        try:
            load_schema(name)
        except (SchemaError, FileNotFoundError) as exc:
            console.print(f"[red]Error:[/red] {escape(str(exc))}")
            raise typer.Exit(1)
        cfg = get_config()
        cfg.schema_.default = name
        save_config(cfg)
        console.print(f"[green]Default schema:[/green] {escape(name)}")

    @schema_app.command("validate")
    def schema_validate(file: str = typer.Argument(...)):
        """Validate a schema file."""
        from featflags.schema.loader import validate_schema
        try:
            errors = validate_schema(file)
        except FileNotFoundError as exc:
            console.print(f"[red]Error:[/red] {escape(str(exc))}")
            raise typer.Exit(1)
        if errors:
            for e in errors:
                console.print(f"[red]Error:[/red] {escape(e)}")
            raise typer.Exit(1)
        console.print("[green]Schema is valid.[/green]")
