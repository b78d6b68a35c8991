"""configlint error types with typed error codes.

Error code ranges:
- 2xxx: Settings
- 3xxx: Input artifacts

These are fatal conditions only. Inconsistencies found in the artifacts are
reported as diagnostics, never raised.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Settings (2xxx)
    SETTINGS_PARSE_ERROR = 2001
    SETTINGS_INVALID_VALUE = 2002

    # Input artifacts (3xxx)
    ARTIFACT_NOT_FOUND = 3001
    ARTIFACT_UNREADABLE = 3002


@dataclass(frozen=True, slots=True)
class ConfigLintError(Exception):
    """Base error with structured context."""

    code: ErrorCode
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'ARTIFACT_NOT_FOUND')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class SettingsError(ConfigLintError):
    """Errors in configlint's own settings."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "SettingsError":
        return cls(
            code=ErrorCode.SETTINGS_PARSE_ERROR,
            message=f"Failed to parse settings at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "SettingsError":
        return cls(
            code=ErrorCode.SETTINGS_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )


class InputError(ConfigLintError):
    """An input artifact could not be read at all."""

    @classmethod
    def not_found(cls, path: str) -> "InputError":
        return cls(
            code=ErrorCode.ARTIFACT_NOT_FOUND,
            message=f"Artifact not found: {path}",
            details={"path": path},
        )

    @classmethod
    def unreadable(cls, path: str, reason: str) -> "InputError":
        return cls(
            code=ErrorCode.ARTIFACT_UNREADABLE,
            message=f"Cannot read artifact {path}: {reason}",
            details={"path": path, "reason": reason},
        )
