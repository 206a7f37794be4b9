"""
Leveled console output using Rich.

A `Reporter` is created once by the CLI and handed to every component that
needs to talk to the user. Normal output goes to stdout; warnings and errors
go to stderr.
"""

from __future__ import annotations

import sys

from rich.console import Console
from rich.text import Text
from rich.theme import Theme

THEME = Theme(
    {
        "verbose": "dim",
        "debug": "cyan",
        "info": "blue",
        "success": "green",
        "warn": "yellow",
        "error": "bold red",
    }
)


def _detect_color_system() -> str | None:
    """Use truecolor on interactive terminals, let Rich auto-detect otherwise."""
    if sys.stdout.isatty():
        return "truecolor"
    return None


class Reporter:
    """Output sink with note-down style levels."""

    def __init__(self, console: Console | None = None, err_console: Console | None = None) -> None:
        self.console: Console = console or Console(
            theme=THEME, color_system=_detect_color_system(), highlight=False
        )
        self.err_console: Console = err_console or Console(
            theme=THEME, stderr=True, color_system=_detect_color_system(), highlight=False
        )

    def _emit(self, console: Console, message: str | Text, style: str | None) -> None:
        # Paths may contain brackets, so never parse markup; never wrap long paths either.
        text = message if isinstance(message, Text) else Text(message)
        if style:
            text.stylize(style)
        console.print(text, soft_wrap=True)

    def log(self, message: str | Text) -> None:
        self._emit(self.console, message, None)

    def verbose(self, message: str | Text) -> None:
        self._emit(self.console, message, "verbose")

    def debug(self, message: str | Text) -> None:
        self._emit(self.console, message, "debug")

    def info(self, message: str | Text) -> None:
        self._emit(self.console, message, "info")

    def success(self, message: str | Text) -> None:
        self._emit(self.console, message, "success")

    def warn(self, message: str | Text) -> None:
        self._emit(self.err_console, message, "warn")

    def error(self, message: str | Text) -> None:
        self._emit(self.err_console, message, "error")
