"""CLI utility functions for inkcheck.

Provides helper functions for:
- Config wiring: Turning CLI options into a loaded Configuration
- Error formatting: Consistent user-friendly error messages with exit codes
"""

from __future__ import annotations

from pathlib import Path
from typing import NoReturn

import typer

from inkcheck.config import Configuration, load_config
from inkcheck.exceptions import ConfigurationError

# Exit code for bad configuration, unknown rules or missing files
EXIT_USER_ERROR = 1


def error(msg: str, *, exit_code: int = EXIT_USER_ERROR) -> NoReturn:
    """Print an error message and exit with the given exit code.

    Raises:
        typer.Exit: Always raises to exit the program.
    """
    styled_prefix = typer.style("Error:", fg=typer.colors.RED, bold=True)
    typer.echo(f"{styled_prefix} {msg}", err=True)
    raise typer.Exit(code=exit_code)


def success(msg: str) -> None:
    styled_prefix = typer.style("Success:", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"{styled_prefix} {msg}")


def config_path_argument() -> Path | None:
    """Create the optional configuration path argument."""
    return typer.Argument(  # type: ignore[no-any-return]
        None,
        help="Configuration file. Defaults to .inkcheckrc or pyproject.toml [tool.inkcheck].",
    )


def wire_config(config_path: Path | None = None, start_dir: Path | None = None) -> Configuration:
    """Load configuration for a CLI command.

    Args:
        config_path: Explicit configuration file given on the command line.
        start_dir: Directory to start searching for config files.

    Returns:
        Fully resolved Configuration instance.

    Raises:
        typer.Exit: If configuration is invalid.
    """
    try:
        return load_config(config_path, start_dir)
    except ConfigurationError as e:
        error(f"Invalid configuration: {e}")
