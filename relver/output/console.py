"""Console output abstraction.

The resolver reports what it checked (validated channels, computed version,
conflicts) through ``ConsoleProtocol``. The CLI supplies a Rich-backed
console bound to stderr, so stdout carries only the JSON result; tests
supply ``MockConsole`` and assert on the captured records.

Every status line is ``<label> <message>``; the label depends only on the
style, so a captured MockConsole message reads the same as the terminal.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Protocol

__all__ = [
    "Style",
    "ConsoleProtocol",
    "RichConsole",
    "MockConsole",
    "NullConsole",
]


class Style(Enum):
    """Text styles for console output."""

    DEFAULT = auto()
    SUCCESS = auto()
    ERROR = auto()
    WARNING = auto()
    INFO = auto()
    DIM = auto()


# style -> (label, Rich style)
_LOOK: dict[Style, tuple[str, str]] = {
    Style.DEFAULT: ("", ""),
    Style.SUCCESS: ("OK", "green"),
    Style.ERROR: ("error:", "red bold"),
    Style.WARNING: ("warning:", "yellow"),
    Style.INFO: ("info:", "cyan"),
    Style.DIM: ("", "dim"),
}


def label(style: Style, message: str) -> str:
    """Plain-text form of a status line."""
    prefix = _LOOK[style][0]
    return f"{prefix} {message}" if prefix else message


class ConsoleProtocol(Protocol):
    """Protocol for console output."""

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        """Print a message with optional styling."""
        ...

    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def info(self, message: str) -> None: ...


class _StatusMixin:
    """success/error/warning/info in terms of ``_status``."""

    def _status(self, style: Style, message: str) -> None:
        raise NotImplementedError

    def success(self, message: str) -> None:
        self._status(Style.SUCCESS, message)

    def error(self, message: str) -> None:
        self._status(Style.ERROR, message)

    def warning(self, message: str) -> None:
        self._status(Style.WARNING, message)

    def info(self, message: str) -> None:
        self._status(Style.INFO, message)


class RichConsole(_StatusMixin):
    """Console implementation using Rich.

    Args:
        stderr: Write to stderr instead of stdout.
    """

    def __init__(self, *, stderr: bool = True) -> None:
        # Import Rich lazily to avoid import-time dependency
        from rich.console import Console

        self._console = Console(stderr=stderr, highlight=False)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self._console.print(message, style=_LOOK[style][1] or None, markup=False)

    def _status(self, style: Style, message: str) -> None:
        from rich.text import Text

        prefix, rich_style = _LOOK[style]
        # Text keeps tag globs like v[0-9]* from being read as markup.
        line = Text.assemble((prefix, rich_style), " ", message)
        self._console.print(line)


class NullConsole(_StatusMixin):
    """Console that discards everything."""

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        del message, style

    def _status(self, style: Style, message: str) -> None:
        del style, message


@dataclass
class OutputRecord:
    """A single output record for MockConsole."""

    message: str
    style: Style


def _empty_outputs() -> list[OutputRecord]:
    return []


@dataclass
class MockConsole(_StatusMixin):
    """Console implementation that captures output for testing."""

    outputs: list[OutputRecord] = field(default_factory=_empty_outputs)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self.outputs.append(OutputRecord(message, style))

    def _status(self, style: Style, message: str) -> None:
        self.outputs.append(OutputRecord(label(style, message), style))

    @property
    def messages(self) -> list[str]:
        return [o.message for o in self.outputs]

    def has_error(self) -> bool:
        return any(o.style == Style.ERROR for o in self.outputs)

    def has_warning(self) -> bool:
        return any(o.style == Style.WARNING for o in self.outputs)

    def find(self, substring: str) -> list[OutputRecord]:
        """Find all outputs containing a substring."""
        return [o for o in self.outputs if substring in o.message]
