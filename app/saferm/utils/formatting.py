"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich. Messages that
contain paths are escaped so bracketed file names are never read as
markup, and printed without wrapping so that each message stays on
its own lines for tools parsing the output.
"""

import sys

from rich.console import Console
from rich.markup import escape

from saferm.core.theme import get_theme


def _detect_color_system() -> str | None:
    """Use truecolor for interactive terminals, let Rich decide otherwise."""
    if sys.stdout.isatty():
        return "truecolor"
    return None


_COLOR_SYSTEM = _detect_color_system()

# stdout carries verdict lines, stderr carries denials and log records
console = Console(theme=get_theme(), color_system=_COLOR_SYSTEM)
err_console = Console(theme=get_theme(), color_system=_COLOR_SYSTEM, stderr=True)


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{escape(message)}[/]", soft_wrap=True)


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {escape(message)}", soft_wrap=True)


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{escape(message)}[/]", soft_wrap=True)
