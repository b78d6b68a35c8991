"""User-facing terminal output.

Diagnostics are plain lines so they stay greppable; the pass/fail summary
goes through Rich with a success/error marker.

Usage::

    from configlint.core.console import status

    status("No errors!", style="success")  # ✓ No errors!
    status("3 errors!", style="error")  # ✗ 3 errors!
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console

if TYPE_CHECKING:
    from structlog.stdlib import BoundLogger

# Console for output
_console = Console(soft_wrap=True)

# Style prefixes
_STYLES = {
    "success": "[green]✓[/green] ",
    "error": "[red]✗[/red] ",
    "warning": "[yellow]![/yellow] ",
    "info": "  ",
    "none": "",
}


def _get_logger() -> BoundLogger:
    """Get logger lazily to respect runtime config."""
    from configlint.core.logging import get_logger

    return get_logger("console")


def get_console() -> Console:
    """Get the shared Rich console instance."""
    return _console


def status(message: str, *, style: str = "info", indent: int = 0) -> None:
    """Print a styled status message."""
    prefix = _STYLES.get(style, "")
    padding = " " * indent
    _console.print(f"{padding}{prefix}{message}", highlight=False)

    _get_logger().debug("status", message=message, style=style)


def pluralize(count: int, singular: str, plural: str | None = None) -> str:
    """Return grammatically correct singular/plural form.

    Args:
        count: The number of items
        singular: Singular form (e.g., "error")
        plural: Plural form (default: singular + "s")

    Returns:
        Formatted string like "1 error" or "3 errors"
    """
    if plural is None:
        plural = singular + "s"
    word = singular if count == 1 else plural
    return f"{count} {word}"
