"""Result sinks receiving findings while a validation run is in progress."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape

from inkcheck.exceptions import SinkError

if TYPE_CHECKING:
    from inkcheck.model import Document
    from inkcheck.validators.base import ValidationError


class ResultSink(ABC):
    """Abstract consumer of run brackets and individual findings."""

    def flush_header(self) -> None:
        """Called once before the first finding of a run."""

    def flush_footer(self) -> None:
        """Called once after the last finding of a run."""

    @abstractmethod
    def flush_error(self, document: Document, error: ValidationError) -> None:
        """Write a single finding.

        Implementations must wrap write failures in SinkError; the engine
        only skips findings that fail that way, anything else ends the run.

        Raises:
            SinkError: If the finding cannot be written.
        """


class ConsoleSink(ResultSink):
    """Prints one line per finding to a rich console.

    Output format: ``<file>:<line>: <validator>: <message>``.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()
        self.count = 0

    def flush_header(self) -> None:
        self.count = 0

    def flush_error(self, document: Document, error: ValidationError) -> None:
        file_name = document.file_name or "<input>"
        line = error.line_number if error.line_number is not None else "-"
        plain = f"{file_name}:{line}: {error.validator_name}: {error.message}"
        try:
            # rich keeps unwritten text buffered after a failed write
            plain.encode(self.console.encoding)
            self.console.print(
                f"[bold]{escape(file_name)}[/bold]:{line}: "
                f"[cyan]{escape(error.validator_name)}[/cyan]: {escape(error.message)}",
                highlight=False,
            )
        except (OSError, UnicodeError) as e:
            raise SinkError(f"Failed to write finding for {file_name}: {e}") from e
        self.count += 1

    def flush_footer(self) -> None:
        try:
            if self.count:
                self.console.print(f"[red]{self.count} issue(s) found[/red]")
            else:
                self.console.print("[green]No issues found[/green]")
        except (OSError, UnicodeError) as e:
            raise SinkError(f"Failed to write summary: {e}") from e
