"""Settings module exports."""

from configlint.settings.loader import load_settings
from configlint.settings.models import (
    ArtifactsConfig,
    ConfigLintConfig,
    LoggingConfig,
    PatternsConfig,
    ReportConfig,
)

__all__ = [
    "load_settings",
    "ConfigLintConfig",
    "ArtifactsConfig",
    "LoggingConfig",
    "PatternsConfig",
    "ReportConfig",
]
