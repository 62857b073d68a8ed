"""inkcheck CLI - inspect rule registrations and configurations."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.table import Table

from inkcheck import __version__
from inkcheck.cli_utils import (
    EXIT_USER_ERROR,
    config_path_argument,
    success,
    wire_config,
)
from inkcheck.engine import ValidationEngine
from inkcheck.exceptions import ConfigurationError, ConstructionError
from inkcheck.sinks import ConsoleSink
from inkcheck.validators.registry import get_global_registry, import_plugins

app = typer.Typer(
    name="inkcheck",
    help="inkcheck - rule-driven text inspection.",
    add_completion=False,
)

# Rich consoles for output
console = Console()
err_console = Console(stderr=True)


def _output_error(message: str) -> None:
    err_console.print(f"[red]Error:[/red] {message}")


def _exit_error(message: str, exit_code: int = EXIT_USER_ERROR) -> None:
    """Print error and exit."""
    _output_error(message)
    raise typer.Exit(code=exit_code)


# -----------------------------------------------------------------------------
# Version and Main Callbacks
# -----------------------------------------------------------------------------


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"inkcheck version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log resolution details to stderr.",
    ),
) -> None:
    """inkcheck - rule-driven text inspection."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


# -----------------------------------------------------------------------------
# Rules Command
# -----------------------------------------------------------------------------


@app.command()
def rules(
    plugin: list[str] = typer.Option(
        [],
        "--plugin",
        "-p",
        help="Module to import before listing (repeatable).",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output as JSON.",
    ),
) -> None:
    """List registered rules in resolution order."""
    try:
        import_plugins(plugin)
    except ConfigurationError as e:
        _exit_error(str(e))

    names = get_global_registry().names()

    if json_output:
        console.print_json(
            json.dumps([{"namespace": ns, "name": name} for ns, name in names])
        )
        return

    if not names:
        console.print("No rules registered.")
        return

    table = Table(title="Registered rules")
    table.add_column("Namespace", style="cyan")
    table.add_column("Rule")
    for namespace, name in names:
        table.add_row(namespace, name)
    console.print(table)


# -----------------------------------------------------------------------------
# Check-Config Command
# -----------------------------------------------------------------------------


@app.command("check-config")
def check_config(
    config_path: Path | None = config_path_argument(),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output as JSON.",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Minimal output for CI.",
    ),
) -> None:
    """Resolve every configured rule and report how it would run.

    Exits with code 1 if a rule is unknown or fails to initialize.
    """
    config = wire_config(config_path)

    try:
        import_plugins(config.plugins)
        engine = ValidationEngine(config, ConsoleSink(console))
    except (ConfigurationError, ConstructionError) as e:
        if json_output:
            console.print_json(json.dumps({"valid": False, "error": str(e)}))
            raise typer.Exit(code=EXIT_USER_ERROR) from e
        _exit_error(str(e))
        return

    result: dict[str, Any] = {
        "valid": True,
        "language": config.language,
        "validators": {
            "document": [v.name for v in engine.document_validators],
            "section": [v.name for v in engine.section_validators],
            "sentence": [v.name for v in engine.sentence_validators],
        },
        "sentence_boundary": {
            "terminators": list(engine.sentence_boundary.terminators),
            "closing_quotations": list(engine.sentence_boundary.closing_quotations),
        },
    }

    if json_output:
        console.print_json(json.dumps(result))
        return

    if quiet:
        return

    success(f"{len(config.validator_configs)} rule(s) resolved for language '{config.language}'")
    for target, names in result["validators"].items():
        console.print(f"  [cyan]{target}[/cyan]: {', '.join(names) if names else '-'}")
    boundary = result["sentence_boundary"]
    console.print(f"  terminators: {' '.join(boundary['terminators'])}", highlight=False)
    console.print(f"  closing quotations: {' '.join(boundary['closing_quotations'])}", highlight=False)


if __name__ == "__main__":
    app()
