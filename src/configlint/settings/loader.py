"""Settings loading with pydantic-settings.

Supports loading settings from multiple sources with precedence:
1. Direct kwargs (highest priority)
2. Environment variables (CONFIGLINT__SECTION__KEY)
3. Project settings (.configlint.yaml in the project root)
4. Global settings (~/.config/configlint/config.yaml)
5. Built-in defaults (lowest priority)
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from configlint.core.errors import SettingsError
from configlint.settings.models import (
    ArtifactsConfig,
    ConfigLintConfig,
    LoggingConfig,
    PatternsConfig,
    ReportConfig,
)

GLOBAL_SETTINGS_PATH = Path("~/.config/configlint/config.yaml").expanduser()
PROJECT_SETTINGS_NAME = ".configlint.yaml"


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with path.open() as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise SettingsError.parse_error(str(path), str(e)) from e
    if not isinstance(data, dict):
        raise SettingsError.parse_error(str(path), "top level must be a mapping")
    return data


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


class _YamlSource(PydanticBaseSettingsSource):
    """Settings source that reads from pre-loaded YAML settings."""

    def __init__(self, settings_cls: type[BaseSettings], yaml_config: dict[str, Any]) -> None:
        super().__init__(settings_cls)
        self._yaml_config = yaml_config

    def get_field_value(
        self,
        field: Any,  # noqa: ARG002
        field_name: str,
    ) -> tuple[Any, str, bool]:
        val = self._yaml_config.get(field_name)
        return val, field_name, val is not None

    def __call__(self) -> dict[str, Any]:
        return self._yaml_config


def _make_settings_class(yaml_config: dict[str, Any]) -> type[BaseSettings]:
    """Create a Settings class bound to one set of YAML values."""

    class ConfigLintSettings(BaseSettings):
        """Root settings. Env vars: CONFIGLINT__LOGGING__LEVEL, CONFIGLINT__REPORT__FORMAT, etc."""

        model_config = SettingsConfigDict(
            env_prefix="CONFIGLINT__",
            env_nested_delimiter="__",
            case_sensitive=False,
        )

        logging: LoggingConfig = LoggingConfig()
        artifacts: ArtifactsConfig = ArtifactsConfig()
        patterns: PatternsConfig = PatternsConfig()
        report: ReportConfig = ReportConfig()

        @classmethod
        def settings_customise_sources(
            cls,
            settings_cls: type[BaseSettings],
            init_settings: PydanticBaseSettingsSource,
            env_settings: PydanticBaseSettingsSource,
            dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
            file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        ) -> tuple[PydanticBaseSettingsSource, ...]:
            # Precedence (first wins): init kwargs > env vars > yaml files
            return (init_settings, env_settings, _YamlSource(settings_cls, yaml_config))

    return ConfigLintSettings


def load_settings(project_root: Path | None = None, **kwargs: Any) -> ConfigLintConfig:
    """Load settings: defaults < global yaml < project yaml < env vars < kwargs.

    Args:
        project_root: Directory holding .configlint.yaml.
                      Defaults to current working directory.
        **kwargs: Override values (highest precedence), nested per section,
                  e.g. ``artifacts={"docs_file": "docs/options.md"}``.

    Returns:
        Fully resolved settings.

    Raises:
        SettingsError: On invalid YAML syntax or validation errors.
    """
    project_root = project_root or Path.cwd()

    yaml_config = _load_yaml(project_root / PROJECT_SETTINGS_NAME)

    global_config = _load_yaml(GLOBAL_SETTINGS_PATH)
    if global_config:
        yaml_config = _deep_merge(global_config, yaml_config)

    settings_cls = _make_settings_class(yaml_config)
    try:
        settings = settings_cls(**kwargs)
    except ValidationError as e:
        err = e.errors()[0]
        field = ".".join(str(loc) for loc in err["loc"])
        raise SettingsError.invalid_value(field, err.get("input"), err["msg"]) from e
    return ConfigLintConfig.model_validate(settings.model_dump())
