"""Report rendering for a check result."""

from __future__ import annotations

import json

from configlint.core.console import pluralize
from configlint.lint.models import CheckResult, Diagnostic


def format_location(diagnostic: Diagnostic) -> str:
    if diagnostic.has_line:
        return f"{diagnostic.artifact}:{diagnostic.line}"
    return diagnostic.artifact


def format_text(result: CheckResult) -> list[str]:
    """Render diagnostics as text lines, in discovery order.

    Example::

        IN src/config.cpp:12
          > JSON read "port" missing default value for int
        IN README.md
          > Missing Readme entry for "port"
    """
    lines: list[str] = []
    for diagnostic in result.diagnostics:
        lines.append(f"IN {format_location(diagnostic)}")
        lines.append(f"  > {diagnostic.message}")
    return lines


def format_summary(result: CheckResult) -> tuple[str, str]:
    """Summary line and its status style."""
    if result.passed:
        return "No errors!", "success"
    return f"{pluralize(result.count, 'error')}!", "error"


def format_json(result: CheckResult) -> str:
    return json.dumps(result.to_dict(), indent=2)
