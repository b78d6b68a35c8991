"""Lint module - cross-artifact consistency checks for the config struct."""

from configlint.lint.checker import check_artifacts
from configlint.lint.models import (
    UNKNOWN_LINE,
    Artifact,
    ArtifactSet,
    CheckResult,
    Diagnostic,
    DiagnosticKind,
    SchemaField,
    UsageCategory,
    UsageFact,
)
from configlint.lint.ops import LintOps

__all__ = [
    "UNKNOWN_LINE",
    "Artifact",
    "ArtifactSet",
    "CheckResult",
    "Diagnostic",
    "DiagnosticKind",
    "LintOps",
    "SchemaField",
    "UsageCategory",
    "UsageFact",
    "check_artifacts",
]
