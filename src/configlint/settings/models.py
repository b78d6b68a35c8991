"""Pydantic settings models with env var support.

Settings Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_settings() (CLI options)
2. Environment variables (CONFIGLINT__SECTION__KEY)
3. Project YAML (.configlint.yaml)
4. Global YAML (~/.config/configlint/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    CONFIGLINT__<SECTION>__<KEY>=<VALUE>

Examples:
    CONFIGLINT__LOGGING__LEVEL=DEBUG
    CONFIGLINT__ARTIFACTS__DOCS_FILE=docs/options.md
    CONFIGLINT__PATTERNS__INSTANCE_NAME=Settings
    CONFIGLINT__REPORT__FORMAT=json
"""

import re
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

_IDENTIFIER = re.compile(r"^[A-Za-z_]\w*$")


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        CONFIGLINT__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="WARNING",
        description="Root log level. DEBUG traces every recognized line.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class ArtifactsConfig(BaseModel):
    """Locations of the checked artifacts, relative to the project root.

    Env vars:
        CONFIGLINT__ARTIFACTS__SCHEMA_FILE: Header declaring the config struct
        CONFIGLINT__ARTIFACTS__PERSISTENCE_FILE: Source reading/writing the JSON document
        CONFIGLINT__ARTIFACTS__RUNTIME_FILE: Source implementing console get/set
        CONFIGLINT__ARTIFACTS__DOCS_FILE: Markdown file holding the options table
    """

    schema_file: str = Field(
        default="config.h",
        description="Header declaring the canonical config struct.",
    )
    persistence_file: str = Field(
        default="src/config.cpp",
        description="Source that loads the struct from JSON and saves it back.",
    )
    runtime_file: str = Field(
        default="src/config.cpp",
        description="Source implementing get/set-by-name console commands. "
        "May be the same file as persistence_file.",
    )
    docs_file: str = Field(
        default="README.md",
        description="Markdown file with the |`key`|Type|Default|Note| table.",
    )


class PatternsConfig(BaseModel):
    """Identifier vocabulary used to build the line recognizers.

    The defaults match the firmware layout the checker was written for;
    projects that name their struct, JSON document or parse helpers
    differently override them here.
    """

    struct_name: str = "ConfigStruct"
    storage_qualifier: str = "extern"
    instance_name: str = "Config"
    document_name: str = "doc"
    option_name: str = "option"
    value_name: str = "value"
    compare_function: str = "strcmp"
    copy_function: str = "strlcpy"
    getter_function: str = "String"
    bool_parser: str = "atob"
    int_parser: str = "atoi"

    @field_validator(
        "struct_name",
        "storage_qualifier",
        "instance_name",
        "document_name",
        "option_name",
        "value_name",
        "compare_function",
        "copy_function",
        "getter_function",
        "bool_parser",
        "int_parser",
    )
    @classmethod
    def validate_identifier(cls, v: str) -> str:
        if not _IDENTIFIER.match(v):
            raise ValueError(f"Must be a plain identifier, got {v!r}")
        return v


class ReportConfig(BaseModel):
    """Report configuration.

    Env vars:
        CONFIGLINT__REPORT__FORMAT: text or json
        CONFIGLINT__REPORT__FLAG_MALFORMED_ROWS: Report doc rows with the wrong shape
    """

    format: Literal["text", "json"] = "text"
    flag_malformed_rows: bool = Field(
        default=True,
        description="Report documentation rows that start like an option row "
        "but do not have four cells. When off they are skipped.",
    )


class ConfigLintConfig(BaseModel):
    """Root configuration model."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    artifacts: ArtifactsConfig = Field(default_factory=ArtifactsConfig)
    patterns: PatternsConfig = Field(default_factory=PatternsConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)
