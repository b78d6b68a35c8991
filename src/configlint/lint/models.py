"""Lint models - schema fields, usage facts, diagnostics and results."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

UNKNOWN_LINE = -1


class UsageCategory(Enum):
    """Kind of recognized reference to a schema field."""

    PERSISTENCE_READ = "persistence_read"
    PERSISTENCE_WRITE = "persistence_write"
    RUNTIME_CHECK = "runtime_check"
    RUNTIME_GET = "runtime_get"
    RUNTIME_SET = "runtime_set"
    DOC_ENTRY = "doc_entry"

    @property
    def label(self) -> str:
        return _CATEGORY_LABELS[self]


_CATEGORY_LABELS = {
    UsageCategory.PERSISTENCE_READ: "JSON read",
    UsageCategory.PERSISTENCE_WRITE: "JSON assignment",
    UsageCategory.RUNTIME_CHECK: "Console check",
    UsageCategory.RUNTIME_GET: "Console get",
    UsageCategory.RUNTIME_SET: "Console set",
    UsageCategory.DOC_ENTRY: "Readme entry",
}


class DiagnosticKind(Enum):
    """Problem class of a diagnostic."""

    STRUCTURAL_MISMATCH = "structural_mismatch"
    MISSING_COVERAGE = "missing_coverage"
    MALFORMED_INPUT = "malformed_input"


@dataclass(frozen=True, slots=True)
class Artifact:
    """One already-loaded input text."""

    path: str
    text: str

    def lines(self) -> Iterator[tuple[int, str]]:
        """Yield (1-based line number, line) pairs."""
        for number, line in enumerate(self.text.splitlines(), start=1):
            yield number, line


@dataclass(frozen=True, slots=True)
class ArtifactSet:
    """The four artifacts a check runs over."""

    schema: Artifact
    persistence: Artifact
    runtime: Artifact
    docs: Artifact

    def path_for(self, category: UsageCategory) -> str:
        """Artifact path that facts of the given category come from."""
        if category in (UsageCategory.PERSISTENCE_READ, UsageCategory.PERSISTENCE_WRITE):
            return self.persistence.path
        if category == UsageCategory.DOC_ENTRY:
            return self.docs.path
        return self.runtime.path


@dataclass(frozen=True, slots=True)
class SchemaField:
    """A named, typed entry of the canonical config struct."""

    name: str
    type: str
    line: int = UNKNOWN_LINE


@dataclass(frozen=True, slots=True)
class SourceLocation:
    artifact: str
    line: int


@dataclass(frozen=True)
class UsageFact:
    """One recognized occurrence of a field in a dependent artifact.

    For PERSISTENCE_WRITE the observed key is the JSON key and the referenced
    key is the struct field; every other category observes the struct field
    (or table key) and references the key it is expected to match.
    """

    category: UsageCategory
    observed_key: str
    referenced_key: str
    location: SourceLocation
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def field_name(self) -> str:
        """Schema field this fact counts towards for completeness."""
        if self.category == UsageCategory.PERSISTENCE_WRITE:
            return self.referenced_key
        return self.observed_key


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A single reported inconsistency."""

    artifact: str
    line: int  # 1-based, UNKNOWN_LINE when no specific line applies
    message: str
    kind: DiagnosticKind = DiagnosticKind.STRUCTURAL_MISMATCH
    code: str | None = None  # "key-mismatch", "missing-default", "missing-coverage"

    @property
    def has_line(self) -> bool:
        return self.line != UNKNOWN_LINE

    def to_dict(self) -> dict[str, Any]:
        return {
            "artifact": self.artifact,
            "line": self.line,
            "message": self.message,
            "kind": self.kind.value,
            "code": self.code,
        }


class DiagnosticsCollector:
    """Append-only, ordered sink for diagnostics.

    No deduplication: a field missing from several categories yields one
    diagnostic per category.
    """

    def __init__(self) -> None:
        self._items: list[Diagnostic] = []

    def add(
        self,
        artifact: str,
        line: int | None,
        message: str,
        *,
        kind: DiagnosticKind = DiagnosticKind.STRUCTURAL_MISMATCH,
        code: str | None = None,
    ) -> Diagnostic:
        diagnostic = Diagnostic(
            artifact=artifact,
            line=UNKNOWN_LINE if line is None else line,
            message=message,
            kind=kind,
            code=code,
        )
        self._items.append(diagnostic)
        return diagnostic

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    @property
    def items(self) -> list[Diagnostic]:
        return list(self._items)

    @property
    def passed(self) -> bool:
        return not self._items


class DefaultValueTable:
    """Default value text per field, first writer wins.

    The persistence artifact is the single source of truth for defaults, so a
    later read of the same field never replaces the recorded value.
    """

    def __init__(self) -> None:
        self._defaults: dict[str, str] = {}

    def record(self, name: str, default_text: str) -> bool:
        """Record a default. Returns False if one was already recorded."""
        if name in self._defaults:
            return False
        self._defaults[name] = default_text
        return True

    def get(self, name: str) -> str | None:
        return self._defaults.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._defaults

    def __len__(self) -> int:
        return len(self._defaults)


@dataclass
class CheckResult:
    """Aggregated result of one checker run."""

    schema: dict[str, SchemaField] = field(default_factory=dict)
    diagnostics: list[Diagnostic] = field(default_factory=list)
    fact_counts: dict[UsageCategory, int] = field(default_factory=dict)

    @property
    def count(self) -> int:
        return len(self.diagnostics)

    @property
    def passed(self) -> bool:
        return not self.diagnostics

    def to_dict(self) -> dict[str, Any]:
        return {
            "passed": self.passed,
            "count": self.count,
            "fields": len(self.schema),
            "diagnostics": [d.to_dict() for d in self.diagnostics],
        }
