"""Shared artifacts for lint tests.

The sample project has a two-field struct (ssid: char[32], port: int) whose
persistence, console and README artifacts are all consistent.
"""

from __future__ import annotations

from collections.abc import Callable

import pytest

from configlint.lint.models import (
    Artifact,
    ArtifactSet,
    DefaultValueTable,
    DiagnosticsCollector,
    SchemaField,
)
from configlint.lint.recognizers import Recognizers
from configlint.lint.validator import CrossValidator

SCHEMA_TEXT = """\
#pragma once

struct ConfigStruct {
  // Network
  char ssid[32];
  int port;
} extern Config;
"""

PERSISTENCE_TEXT = """\
void loadConfig(JsonDocument &doc) {
  strlcpy(Config.ssid, doc["ssid"] | "ESP", sizeof(Config.ssid));
  Config.port = doc["port"] | 80;
}

void saveConfig(JsonDocument &doc) {
  doc["ssid"] = Config.ssid;
  doc["port"] = Config.port;
}
"""

RUNTIME_TEXT = """\
String getOption(const char *option) {
  if (strcmp(option, "ssid") == 0) {
    return String(Config.ssid);
  } else if (strcmp(option, "port") == 0) {
    return String(Config.port);
  }
  return "";
}

void setOption(const char *option, const char *value) {
  if (strcmp(option, "ssid") == 0) {
    strlcpy(Config.ssid, value, sizeof(Config.ssid));
  } else if (strcmp(option, "port") == 0) {
    Config.port = atoi(value);
  }
}
"""

DOCS_TEXT = """\
# Configuration

|Key|Type|Default|Note|
|---|---|---|---|
|`ssid`|String|"ESP"|WiFi network name|
|`port`|Int|80|HTTP port|
"""

SCHEMA_PATH = "config.h"
PERSISTENCE_PATH = "src/config.cpp"
RUNTIME_PATH = "src/console.cpp"
DOCS_PATH = "README.md"

MakeArtifacts = Callable[..., ArtifactSet]


def build_artifacts(
    *,
    schema: str = SCHEMA_TEXT,
    persistence: str = PERSISTENCE_TEXT,
    runtime: str = RUNTIME_TEXT,
    docs: str = DOCS_TEXT,
) -> ArtifactSet:
    return ArtifactSet(
        schema=Artifact(SCHEMA_PATH, schema),
        persistence=Artifact(PERSISTENCE_PATH, persistence),
        runtime=Artifact(RUNTIME_PATH, runtime),
        docs=Artifact(DOCS_PATH, docs),
    )


@pytest.fixture
def make_artifacts() -> MakeArtifacts:
    """Factory for an ArtifactSet, any artifact text overridable by keyword."""
    return build_artifacts


@pytest.fixture
def recognizers() -> Recognizers:
    return Recognizers()


@pytest.fixture
def schema() -> dict[str, SchemaField]:
    return {
        "ssid": SchemaField(name="ssid", type="char[32]", line=5),
        "port": SchemaField(name="port", type="int", line=6),
        "enabled": SchemaField(name="enabled", type="bool", line=7),
        "ratio": SchemaField(name="ratio", type="float", line=8),
    }


@pytest.fixture
def diagnostics() -> DiagnosticsCollector:
    return DiagnosticsCollector()


@pytest.fixture
def defaults() -> DefaultValueTable:
    return DefaultValueTable()


@pytest.fixture
def validator(
    schema: dict[str, SchemaField],
    recognizers: Recognizers,
    diagnostics: DiagnosticsCollector,
    defaults: DefaultValueTable,
) -> CrossValidator:
    return CrossValidator(schema, build_artifacts(), recognizers, diagnostics, defaults)


@pytest.fixture
def sample_texts() -> dict[str, str]:
    """Texts of the consistent sample project, keyed like make_artifacts()."""
    return {
        "schema": SCHEMA_TEXT,
        "persistence": PERSISTENCE_TEXT,
        "runtime": RUNTIME_TEXT,
        "docs": DOCS_TEXT,
    }
