"""Tests for settings/loader.py module.

Covers:
- _load_yaml() function
- _deep_merge() function
- load_settings() precedence: defaults < global < project < env < kwargs
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from configlint.core.errors import ErrorCode, SettingsError
from configlint.settings.loader import (
    PROJECT_SETTINGS_NAME,
    _deep_merge,
    _load_yaml,
    load_settings,
)


@pytest.fixture(autouse=True)
def isolated_global(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the global settings file somewhere empty and clear env overrides."""
    global_path = tmp_path / "global" / "config.yaml"
    monkeypatch.setattr("configlint.settings.loader.GLOBAL_SETTINGS_PATH", global_path)
    for var in (
        "CONFIGLINT__LOGGING__LEVEL",
        "CONFIGLINT__REPORT__FORMAT",
        "CONFIGLINT__ARTIFACTS__DOCS_FILE",
    ):
        monkeypatch.delenv(var, raising=False)
    return global_path


@pytest.fixture
def project(tmp_path: Path) -> Path:
    root = tmp_path / "project"
    root.mkdir()
    return root


class TestLoadYaml:
    """Tests for _load_yaml function."""

    def test_returns_empty_dict_for_missing_file(self, tmp_path: Path) -> None:
        assert _load_yaml(tmp_path / "nonexistent.yaml") == {}

    def test_loads_valid_yaml(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "config.yaml"
        yaml_file.write_text("artifacts:\n  docs_file: docs/options.md\n")

        assert _load_yaml(yaml_file) == {"artifacts": {"docs_file": "docs/options.md"}}

    def test_returns_empty_for_empty_file(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "empty.yaml"
        yaml_file.write_text("")
        assert _load_yaml(yaml_file) == {}

    def test_raises_settings_error_for_invalid_yaml(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "invalid.yaml"
        yaml_file.write_text("logging:\n  level:\n    - invalid: [unclosed")

        with pytest.raises(SettingsError) as exc_info:
            _load_yaml(yaml_file)
        assert exc_info.value.code == ErrorCode.SETTINGS_PARSE_ERROR

    def test_raises_settings_error_for_non_mapping(self, tmp_path: Path) -> None:
        """A top-level list is not a settings document."""
        yaml_file = tmp_path / "list.yaml"
        yaml_file.write_text("- a\n- b\n")

        with pytest.raises(SettingsError, match="mapping"):
            _load_yaml(yaml_file)


class TestDeepMerge:
    """Tests for _deep_merge function."""

    def test_override_wins(self) -> None:
        assert _deep_merge({"a": 1, "b": 2}, {"b": 3}) == {"a": 1, "b": 3}

    def test_nested_merge(self) -> None:
        base = {"artifacts": {"schema_file": "a.h", "docs_file": "README.md"}}
        override = {"artifacts": {"docs_file": "docs.md"}}
        assert _deep_merge(base, override) == {"artifacts": {"schema_file": "a.h", "docs_file": "docs.md"}}

    def test_override_replaces_non_dict(self) -> None:
        base: dict[str, Any] = {"a": {"nested": 1}}
        assert _deep_merge(base, {"a": "simple"}) == {"a": "simple"}

    def test_does_not_mutate_base(self) -> None:
        base = {"a": 1}
        _deep_merge(base, {"b": 2})
        assert base == {"a": 1}


class TestLoadSettings:
    """Tests for load_settings function."""

    def test_defaults_when_no_files(self, project: Path) -> None:
        settings = load_settings(project)

        assert settings.logging.level == "WARNING"
        assert settings.artifacts.schema_file == "config.h"
        assert settings.artifacts.runtime_file == "src/config.cpp"
        assert settings.patterns.struct_name == "ConfigStruct"
        assert settings.report.format == "text"
        assert settings.report.flag_malformed_rows is True

    def test_project_yaml(self, project: Path) -> None:
        (project / PROJECT_SETTINGS_NAME).write_text(
            "artifacts:\n  runtime_file: src/console.cpp\npatterns:\n  instance_name: Settings\n"
        )

        settings = load_settings(project)

        assert settings.artifacts.runtime_file == "src/console.cpp"
        assert settings.artifacts.schema_file == "config.h"
        assert settings.patterns.instance_name == "Settings"

    def test_project_overrides_global(self, project: Path, isolated_global: Path) -> None:
        isolated_global.parent.mkdir(parents=True)
        isolated_global.write_text("report:\n  format: json\n  flag_malformed_rows: false\n")
        (project / PROJECT_SETTINGS_NAME).write_text("report:\n  format: text\n")

        settings = load_settings(project)

        assert settings.report.format == "text"
        assert settings.report.flag_malformed_rows is False

    def test_env_overrides_yaml(self, project: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (project / PROJECT_SETTINGS_NAME).write_text("report:\n  format: text\n")
        monkeypatch.setenv("CONFIGLINT__REPORT__FORMAT", "json")

        assert load_settings(project).report.format == "json"

    def test_kwargs_override_everything(self, project: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (project / PROJECT_SETTINGS_NAME).write_text("artifacts:\n  docs_file: yaml.md\n")
        monkeypatch.setenv("CONFIGLINT__ARTIFACTS__DOCS_FILE", "env.md")

        settings = load_settings(project, artifacts={"docs_file": "cli.md"})

        assert settings.artifacts.docs_file == "cli.md"

    def test_invalid_value_raises_settings_error(self, project: Path) -> None:
        with pytest.raises(SettingsError) as exc_info:
            load_settings(project, report={"format": "xml"})

        assert exc_info.value.code == ErrorCode.SETTINGS_INVALID_VALUE
        assert "report.format" in exc_info.value.message

    def test_invalid_identifier_raises_settings_error(self, project: Path) -> None:
        (project / PROJECT_SETTINGS_NAME).write_text("patterns:\n  struct_name: 'Config Struct'\n")

        with pytest.raises(SettingsError):
            load_settings(project)

    def test_broken_project_yaml(self, project: Path) -> None:
        (project / PROJECT_SETTINGS_NAME).write_text("report: [unclosed\n")

        with pytest.raises(SettingsError) as exc_info:
            load_settings(project)
        assert exc_info.value.code == ErrorCode.SETTINGS_PARSE_ERROR
