"""Console output abstraction.

Commands print through ConsoleProtocol so they can be tested with
MockConsole and rendered with Rich in production.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Protocol

from rich.console import Console
from rich.markup import escape
from rich.table import Table

__all__ = [
    "Style",
    "ConsoleProtocol",
    "RichConsole",
    "MockConsole",
    "OutputRecord",
]


class Style(Enum):
    """Text styles for console output."""

    DEFAULT = auto()
    SUCCESS = auto()
    ERROR = auto()
    WARNING = auto()
    INFO = auto()
    DIM = auto()
    HEADER = auto()

    def __str__(self) -> str:
        return self.name.lower()


class ConsoleProtocol(Protocol):
    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        """Print a message with optional styling."""
        ...

    def raw(self, text: str) -> None:
        """Print text verbatim: no markup, no highlighting (for JSON)."""
        ...

    def error(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def info(self, message: str) -> None: ...

    def header(self, message: str) -> None: ...

    def table(self, columns: tuple[str, ...], rows: list[tuple[str, ...]]) -> None:
        """Print rows under the given column headings."""
        ...


class RichConsole:
    """Console implementation using Rich library.

    Messages may carry user input (repository names, server errors), so
    they are escaped before Rich parses markup.
    """

    def __init__(self, stderr: bool = False) -> None:
        self._console = Console(stderr=stderr)
        self._style_map = {
            Style.DEFAULT: "",
            Style.SUCCESS: "green",
            Style.ERROR: "red bold",
            Style.WARNING: "yellow",
            Style.INFO: "cyan",
            Style.DIM: "dim",
            Style.HEADER: "blue bold",
        }

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        rich_style = self._style_map.get(style, "")
        if rich_style:
            self._console.print(escape(message), style=rich_style)
        else:
            self._console.print(escape(message))

    def raw(self, text: str) -> None:
        self._console.print(text, markup=False, highlight=False, soft_wrap=True)

    def error(self, message: str) -> None:
        self._console.print(f"[red bold]error:[/red bold] {escape(message)}")

    def warning(self, message: str) -> None:
        self._console.print(f"[yellow]warning:[/yellow] {escape(message)}")

    def info(self, message: str) -> None:
        self._console.print(f"[cyan]info:[/cyan] {escape(message)}")

    def header(self, message: str) -> None:
        self._console.print(f"[blue bold]{escape(message)}[/blue bold]")

    def table(self, columns: tuple[str, ...], rows: list[tuple[str, ...]]) -> None:
        table = Table(box=None, pad_edge=False)
        for column in columns:
            table.add_column(escape(column), style="bold" if column == columns[0] else "")
        for row in rows:
            table.add_row(*(escape(cell) for cell in row))
        self._console.print(table)


@dataclass
class OutputRecord:
    """A single output record for MockConsole."""

    message: str
    style: Style


def _empty_outputs() -> list[OutputRecord]:
    return []


@dataclass
class MockConsole:
    """Console implementation that captures output for testing."""

    outputs: list[OutputRecord] = field(default_factory=_empty_outputs)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self.outputs.append(OutputRecord(message, style))

    def raw(self, text: str) -> None:
        self.outputs.append(OutputRecord(text, Style.DEFAULT))

    def error(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"error: {message}", Style.ERROR))

    def warning(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"warning: {message}", Style.WARNING))

    def info(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"info: {message}", Style.INFO))

    def header(self, message: str) -> None:
        self.outputs.append(OutputRecord(message, Style.HEADER))

    def table(self, columns: tuple[str, ...], rows: list[tuple[str, ...]]) -> None:
        for row in (columns, *rows):
            self.outputs.append(OutputRecord("  ".join(row), Style.DEFAULT))

    # Test helper methods

    @property
    def messages(self) -> list[str]:
        return [o.message for o in self.outputs]

    @property
    def text(self) -> str:
        """All output as a single newline-separated string."""
        return "\n".join(self.messages)

    def has_error(self) -> bool:
        return any(o.style == Style.ERROR for o in self.outputs)

    def find(self, substring: str) -> list[OutputRecord]:
        return [o for o in self.outputs if substring in o.message]
