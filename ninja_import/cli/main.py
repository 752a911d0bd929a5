"""
Main CLI application.

Entry point for ninja-import command.
"""

from __future__ import annotations

import logging
from pathlib import Path  # noqa: TC003
from typing import Annotated

import typer

import ninja_import
from ninja_import.cli.context import ExitCode, get_exit_code
from ninja_import.cli.output import OutputFormat, get_output_adapter
from ninja_import.core.config import ConfigError, ImportSettings
from ninja_import.core.log import configure_logging

# Create main app
app = typer.Typer(
    name="ninja-import",
    help="Normalize and inspect CSV uploads of unknown encoding",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"ninja-import {ninja_import.__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log each decoding step to stderr"),
    ] = False,
) -> None:
    """Normalize and inspect CSV uploads of unknown encoding."""
    if verbose:
        configure_logging(level=logging.DEBUG)


def _load_settings(max_bytes: int | None) -> ImportSettings:
    try:
        return ImportSettings.from_env(max_bytes=max_bytes)
    except ConfigError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(ExitCode.CONFIG) from None


def _parse_format(format: str) -> OutputFormat:
    try:
        return OutputFormat(format)
    except ValueError:
        typer.echo(f"Unknown format: {format}", err=True)
        typer.echo("Available formats: terminal, json", err=True)
        raise typer.Exit(ExitCode.USAGE) from None


MaxBytesOption = Annotated[
    int | None,
    typer.Option(
        "--max-bytes",
        help="Maximum input size in bytes (0 = unlimited). Defaults to NINJA_IMPORT_MAX_BYTES or 100MiB.",
    ),
]


# =============================================================================
# Normalize Command
# =============================================================================


@app.command()
def normalize(
    file: Annotated[Path, typer.Argument(help="CSV file to normalize")],
    output: Annotated[
        Path | None,
        typer.Option("--out", "-o", help="Write UTF-8 output to file instead of stdout"),
    ] = None,
    strict: Annotated[
        bool,
        typer.Option("--strict/--lenient", help="Exit non-zero when the output is not clean UTF-8"),
    ] = True,
    max_bytes: MaxBytesOption = None,
) -> None:
    """Convert a CSV file to UTF-8."""
    from ninja_import.core.reader import normalize_file

    settings = _load_settings(max_bytes)
    result = normalize_file(file, settings=settings)

    for issue in result.issues:
        if issue.severity.value != "info":
            typer.echo(str(issue), err=True)

    if result.has_fatal_issues:
        raise typer.Exit(ExitCode.FATAL)

    if output:
        output.write_text(result.text, encoding="utf-8")
    else:
        typer.echo(result.text, nl=False)

    raise typer.Exit(get_exit_code(result, strict=strict))


# =============================================================================
# Inspect Command
# =============================================================================


@app.command()
def inspect(
    file: Annotated[Path, typer.Argument(help="CSV file to inspect")],
    format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: terminal, json"),
    ] = "terminal",
    color: Annotated[
        bool,
        typer.Option("--color/--no-color", help="Enable/disable colored output"),
    ] = True,
    max_bytes: MaxBytesOption = None,
) -> None:
    """Show how a CSV file is decoded and which delimiter it uses."""
    from ninja_import.core.reader import PathSource, detect_delimiter, guess_encoding, normalize_file
    from ninja_import.core.reader.sources import SourceError

    output_format = _parse_format(format)
    settings = _load_settings(max_bytes)

    result = normalize_file(file, settings=settings)
    delimiter = detect_delimiter(result.text)

    charset_hint = None
    if not result.has_fatal_issues:
        try:
            charset_hint = guess_encoding(PathSource(file, max_bytes=settings.max_bytes).read())
        except SourceError:
            charset_hint = None

    adapter = get_output_adapter(output_format, color=color)
    typer.echo(adapter.render_inspection(result, delimiter, charset_hint))

    raise typer.Exit(get_exit_code(result))


# =============================================================================
# Pre-import Command
# =============================================================================


@app.command()
def preimport(
    file: Annotated[Path, typer.Argument(help="CSV file to prepare for import")],
    entity: Annotated[
        str,
        typer.Option("--entity", "-e", help="Entity type, see 'ninja-import entities'"),
    ],
    format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: terminal, json"),
    ] = "terminal",
    color: Annotated[
        bool,
        typer.Option("--color/--no-color", help="Enable/disable colored output"),
    ] = True,
    max_bytes: MaxBytesOption = None,
) -> None:
    """Propose a column mapping for importing a CSV file."""
    from ninja_import.core.reader import UnknownEntityError
    from ninja_import.core.reader import preimport as run_preimport

    output_format = _parse_format(format)
    settings = _load_settings(max_bytes)

    try:
        result = run_preimport(file, entity, settings=settings)
    except UnknownEntityError as e:
        typer.echo(f"[{e.code}] {e}", err=True)
        raise typer.Exit(ExitCode.USAGE) from None

    adapter = get_output_adapter(output_format, color=color)
    typer.echo(adapter.render_preimport(result))

    raise typer.Exit(get_exit_code(result.normalized))


# =============================================================================
# Utility Commands
# =============================================================================


@app.command("entities")
def list_entities() -> None:
    """List entity types that can be imported."""
    from ninja_import.core.reader import get_field_maps

    field_maps = get_field_maps()

    typer.echo("Entity types:\n")
    for entity_type in field_maps.entity_types:
        fields = field_maps.get(entity_type)
        typer.secho(f"  {entity_type}", bold=True, nl=False)
        typer.echo(f" ({len(fields)} fields)")


# =============================================================================
# CLI Entry Point
# =============================================================================


def run() -> None:
    """Run the CLI application."""
    app()


if __name__ == "__main__":
    run()
