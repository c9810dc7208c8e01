"""
templex command line interface.

Commands:
- render: resolve a template against a JSON context and print the result
- check: parse a template and list its segments, exiting 1 on parse errors
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from templex import __version__
from templex.core.errors import TemplexError
from templex.core.ir import ExpressionSegment
from templex.core.template.display import display
from templex.core.template.template import Template, parse

app = typer.Typer(
    help="Parse and resolve templex templates",
    no_args_is_help=True,
)

console = Console()


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"templex {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = None,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Log parsing details to stderr")
    ] = False,
) -> None:
    """templex CLI main callback for global options."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s"
        )


def _load_context(context: str | None, context_file: Path | None) -> Any:
    """Context from --context or --context-file, as parsed JSON."""
    if context is not None and context_file is not None:
        typer.echo("Use either --context or --context-file, not both", err=True)
        raise typer.Exit(code=2)

    raw = context
    if context_file is not None:
        raw = context_file.read_text()
    if raw is None:
        return {}

    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        typer.echo(f"Invalid JSON context: {e}", err=True)
        raise typer.Exit(code=2)


def _parse_or_exit(source: str, wrap: str | None = None) -> Template:
    try:
        return parse(source, wrap=wrap)
    except TemplexError as e:
        typer.echo(f"Parse error: {e}", err=True)
        raise typer.Exit(code=1)


@app.command("render")
def render_command(
    source: Annotated[str, typer.Argument(help="Template source, e.g. 'Hello {name}'")],
    context: Annotated[
        str | None, typer.Option("--context", "-c", help="Context as a JSON document")
    ] = None,
    context_file: Annotated[
        Path | None,
        typer.Option(
            "--context-file",
            "-f",
            exists=True,
            dir_okay=False,
            help="Read the JSON context from a file",
        ),
    ] = None,
    wrap: Annotated[
        str | None, typer.Option("--wrap", help="Wrap text for nested templates")
    ] = None,
) -> None:
    """Resolve a template and print the result.

    Text results are printed as is; any other value is printed as JSON.
    """
    data = _load_context(context, context_file)
    template = _parse_or_exit(source, wrap)

    result = template.resolve(data)
    if isinstance(result, str):
        typer.echo(result)
        return
    typer.echo(json.dumps(result, default=display))


@app.command("check")
def check_command(
    source: Annotated[str, typer.Argument(help="Template source to validate")],
) -> None:
    """Parse a template and list its segments."""
    template = _parse_or_exit(source)

    if template.is_static:
        console.print("[green]✓[/green] Static template, no expressions")
        return

    table = Table(title="Segments")
    table.add_column("#", justify="right")
    table.add_column("Kind")
    table.add_column("Content")

    for index, segment in enumerate(template.segments, start=1):
        if isinstance(segment, ExpressionSegment):
            kind = "static" if segment.expression.is_static else "expression"
            table.add_row(str(index), kind, escape(str(segment.expression)))
        else:
            table.add_row(str(index), "text", escape(repr(segment.text)))

    console.print(table)
    expressions = sum(isinstance(s, ExpressionSegment) for s in template.segments)
    console.print(f"[green]✓[/green] {expressions} expression(s) parsed")


def main() -> None:
    """Entry point for the ``templex`` console script."""
    app()
