"""CLI commands that parse flag arguments: parse, check."""

from __future__ import annotations

import json
from typing import List, NoReturn, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from featflags.compiler import ConfigFactory, compile_schema
from featflags.errors import ErrorResponse, FeatflagsError, SchemaError
from featflags.models import TargetedFeatureRecord
from featflags.parser import ParseResult, parse
from featflags.query import dumping, enabled, test_tracing, tracing

console = Console()

_ARGS_HELP = "Arguments to parse; put them after `--` so they are not read as options."


def _yes(flag: bool) -> str:
    return "[green]yes[/green]" if flag else "[dim]no[/dim]"


def _parse_targets(values: list[str]) -> dict[str, list[str]]:
    """Turn ``FEATURE=t1,t2`` options into a target map."""
    targets: dict[str, list[str]] = {}
    for value in values:
        name, sep, rest = value.partition("=")
        if not sep or not name:
            raise typer.BadParameter(f"expected FEATURE=T1,T2, got {value!r}", param_hint="--target")
        targets.setdefault(name, []).extend(t for t in rest.split(",") if t)
    return targets


def _fail(exc: FeatflagsError, as_json: bool) -> NoReturn:
    if as_json:
        typer.echo(ErrorResponse.from_featflags_error(exc).model_dump_json(indent=2))
    else:
        console.print(f"[red]Error:[/red] {escape(exc.message)}")
    raise typer.Exit(1)


def register(app: typer.Typer, get_config) -> None:
    """Register parse/check commands on the main Typer app."""

    def _factory(schema: Optional[str]) -> ConfigFactory:
        from featflags.schema.loader import load_schema

        name = schema or get_config().schema_.default
        if not name:
            raise SchemaError("No schema given; pass --schema or set schema.default")
        try:
            return compile_schema(load_schema(name))
        except FileNotFoundError as exc:
            raise SchemaError(str(exc), {"schema": name}) from exc

    def _run(schema: Optional[str], args: list[str], target: list[str], as_json: bool) -> ParseResult:
        try:
            factory = _factory(schema)
            return parse(factory, args, targets=_parse_targets(target))
        except FeatflagsError as exc:
            _fail(exc, as_json)

    @app.command("parse")
    def parse_command(
        args: Optional[List[str]] = typer.Argument(None, help=_ARGS_HELP),
        schema: Optional[str] = typer.Option(
            None, "--schema", "-s", help="Builtin schema name or path to a YAML schema"
        ),
        target: List[str] = typer.Option(
            [], "--target", "-t", help="Scope a targeted feature: FEATURE=T1,T2 (repeatable)"
        ),
        as_json: bool = typer.Option(False, "--json", help="Print machine-readable JSON"),
    ):
        """Parse feature-flag arguments and show the resulting configuration."""
        config, remaining = _run(schema, args or [], target, as_json)

        if as_json:
            typer.echo(json.dumps({"features": config.to_dict(), "remaining": remaining}, indent=2))
            return

        table = Table(title="Features")
        table.add_column("Feature", style="cyan")
        table.add_column("Kind")
        table.add_column("Enabled")
        table.add_column("Trace")
        table.add_column("TestTrace")
        table.add_column("Dump")
        table.add_column("Targets")
        views = config.to_dict()
        for name, rec in config.items():
            view = views[name]
            targets = "-"
            if isinstance(rec, TargetedFeatureRecord):
                targets = ", ".join(sorted(rec.targets)) if rec.targets else "all"
            table.add_row(
                name,
                "targeted" if rec.targeted else "feature",
                _yes(view["enabled"]),
                _yes(view["trace"]),
                _yes(view["testtrace"]),
                _yes(view["dump"]),
                escape(targets),
            )
        console.print(table)
        console.print(f"[bold]Remaining:[/bold] {escape(' '.join(remaining)) or '(none)'}")

    @app.command("check")
    def check_command(
        feature: str = typer.Argument(..., help="Feature to query"),
        args: Optional[List[str]] = typer.Argument(None, help=_ARGS_HELP),
        schema: Optional[str] = typer.Option(
            None, "--schema", "-s", help="Builtin schema name or path to a YAML schema"
        ),
        target: List[str] = typer.Option(
            [], "--target", "-t", help="Scope a targeted feature: FEATURE=T1,T2 (repeatable)"
        ),
        query_target: Optional[str] = typer.Option(
            None, "--for", help="Evaluate the predicates for this target"
        ),
        as_json: bool = typer.Option(False, "--json", help="Print machine-readable JSON"),
    ):
        """Show enabled/tracing/test_tracing/dumping for one feature."""
        config, _ = _run(schema, args or [], target, as_json)
        try:
            result = {
                "enabled": enabled(config, feature, query_target),
                "tracing": tracing(config, feature, query_target),
                "test_tracing": test_tracing(config, feature, query_target),
                "dumping": dumping(config, feature, query_target),
            }
        except FeatflagsError as exc:
            _fail(exc, as_json)

        if as_json:
            typer.echo(json.dumps({"feature": feature, "target": query_target, **result}, indent=2))
            return
        for key, value in result.items():
            console.print(f"{key:<13} {_yes(value)}")
