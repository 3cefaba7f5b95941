"""Console output.

Services never print. They report through ``ConsoleProtocol``: the CLI
passes a ``RichConsole``, tests pass a ``MockConsole`` and assert on what
was recorded.

Hook commands are arbitrary shell text, ``[`` and ``]`` included, so
``RichConsole`` escapes every message before adding its own markup.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Protocol

__all__ = [
    "ConsoleProtocol",
    "MockConsole",
    "OutputRecord",
    "RichConsole",
    "Style",
]


class Style(Enum):
    DEFAULT = auto()
    SUCCESS = auto()
    ERROR = auto()
    WARNING = auto()
    INFO = auto()
    DIM = auto()
    BOLD = auto()
    HEADER = auto()
    COMMAND = auto()  # a hook about to run

    def __str__(self) -> str:
        return self.name.lower()


# Prefix printed before messages of the labelled styles.
_LABELS: dict[Style, str] = {
    Style.SUCCESS: "OK",
    Style.ERROR: "error:",
    Style.WARNING: "warning:",
    Style.INFO: "info:",
}

_RICH_STYLES: dict[Style, str] = {
    Style.DEFAULT: "",
    Style.SUCCESS: "green",
    Style.ERROR: "red bold",
    Style.WARNING: "yellow",
    Style.INFO: "cyan",
    Style.DIM: "dim",
    Style.BOLD: "bold",
    Style.HEADER: "blue bold",
    Style.COMMAND: "magenta",
}


class ConsoleProtocol(Protocol):
    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        """Print a whole line in one style."""
        ...

    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def info(self, message: str) -> None: ...

    def header(self, message: str) -> None: ...

    def command(self, label: str, command: str) -> None:
        """Echo a command before it runs, e.g. ``[pre 1/2] git push``."""
        ...

    def newline(self) -> None: ...


class RichConsole:
    def __init__(self, *, stderr: bool = False) -> None:
        from rich.console import Console

        self._console = Console(stderr=stderr, highlight=False)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self._console.print(self._styled(style, message))

    def success(self, message: str) -> None:
        self._labelled(Style.SUCCESS, message)

    def error(self, message: str) -> None:
        self._labelled(Style.ERROR, message)

    def warning(self, message: str) -> None:
        self._labelled(Style.WARNING, message)

    def info(self, message: str) -> None:
        self._labelled(Style.INFO, message)

    def header(self, message: str) -> None:
        self._console.print()
        self.print(message, Style.HEADER)

    def command(self, label: str, command: str) -> None:
        self._console.print(f"{self._styled(Style.DIM, label)} {self._styled(Style.COMMAND, command)}")

    def newline(self) -> None:
        self._console.print()

    def _labelled(self, style: Style, message: str) -> None:
        from rich.markup import escape

        self._console.print(f"{self._styled(style, _LABELS[style])} {escape(message)}")

    @staticmethod
    def _styled(style: Style, text: str) -> str:
        from rich.markup import escape

        rich_style = _RICH_STYLES[style]
        if not rich_style:
            return escape(text)
        return f"[{rich_style}]{escape(text)}[/]"


@dataclass
class OutputRecord:
    message: str
    style: Style


def _no_outputs() -> list[OutputRecord]:
    return []


@dataclass
class MockConsole:
    """Records output instead of printing it.

    Labelled styles are recorded with their prefix (``error: ...``), commands
    as ``"{label} {command}"``.
    """

    outputs: list[OutputRecord] = field(default_factory=_no_outputs)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self.outputs.append(OutputRecord(message, style))

    def success(self, message: str) -> None:
        self._labelled(Style.SUCCESS, message)

    def error(self, message: str) -> None:
        self._labelled(Style.ERROR, message)

    def warning(self, message: str) -> None:
        self._labelled(Style.WARNING, message)

    def info(self, message: str) -> None:
        self._labelled(Style.INFO, message)

    def header(self, message: str) -> None:
        self.print(message, Style.HEADER)

    def command(self, label: str, command: str) -> None:
        self.print(f"{label} {command}", Style.COMMAND)

    def newline(self) -> None:
        self.print("")

    def _labelled(self, style: Style, message: str) -> None:
        self.print(f"{_LABELS[style]} {message}", style)

    # Assertion helpers

    def clear(self) -> None:
        self.outputs.clear()

    @property
    def messages(self) -> list[str]:
        return [o.message for o in self.outputs]

    @property
    def text(self) -> str:
        return "\n".join(self.messages)

    @property
    def commands(self) -> list[str]:
        return self.with_style(Style.COMMAND)

    def with_style(self, style: Style) -> list[str]:
        return [o.message for o in self.outputs if o.style == style]

    def has_error(self) -> bool:
        return bool(self.with_style(Style.ERROR))

    def has_success(self) -> bool:
        return bool(self.with_style(Style.SUCCESS))

    def find(self, substring: str) -> list[OutputRecord]:
        return [o for o in self.outputs if substring in o.message]
