"""Core module exports."""

from configlint.core.console import get_console, pluralize, status
from configlint.core.errors import (
    ConfigLintError,
    ErrorCode,
    InputError,
    SettingsError,
)
from configlint.core.logging import (
    clear_run_id,
    configure_logging,
    get_logger,
    get_run_id,
    set_run_id,
)

__all__ = [
    # Errors
    "ConfigLintError",
    "ErrorCode",
    "InputError",
    "SettingsError",
    # Logging
    "clear_run_id",
    "configure_logging",
    "get_logger",
    "get_run_id",
    "set_run_id",
    # Console
    "get_console",
    "pluralize",
    "status",
]
