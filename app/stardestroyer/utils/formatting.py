"""Shared Rich consoles and message helpers for the sd CLI.

Regular output goes to ``console`` (stdout); errors, warnings and log
records go to ``err_console`` (stderr). Messages are escaped, so file
paths and block names containing square brackets print literally.
"""

import sys

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from stardestroyer.core.theme import get_theme


def _color_system() -> str | None:
    # Hex theme colours need truecolor; elsewhere Rich decides
    return "truecolor" if sys.stdout.isatty() else None


console = Console(theme=get_theme(), color_system=_color_system())
err_console = Console(theme=get_theme(), stderr=True, color_system=_color_system())

# Set by the root command for --quiet
_quiet = False


def set_quiet(quiet: bool) -> None:
    """Suppress info and success messages."""
    global _quiet
    _quiet = quiet


def create_table(title: str) -> Table:
    """Create an empty table styled like every other sd table."""
    return Table(
        title=title,
        title_style="bold_header",
        header_style="bold_header",
        border_style="border",
        show_header=True,
    )


def print_info(message: str) -> None:
    """Print an informational line unless quiet."""
    if not _quiet:
        console.print(f"[info]{escape(message)}[/]")


def print_success(message: str) -> None:
    """Print a final success line unless quiet."""
    if not _quiet:
        console.print(f"[success]{escape(message)}[/]")


def print_warning(message: str) -> None:
    """Print a warning to stderr. Never suppressed."""
    err_console.print(f"[warning]Warning:[/] {escape(message)}")


def print_error(message: str) -> None:
    """Print a single-line error to stderr. Never suppressed or wrapped."""
    err_console.print(f"[error]Error:[/] {escape(message)}", soft_wrap=True)
