"""Cross validation of usage facts against the schema and each other."""

from __future__ import annotations

from configlint.core.logging import get_logger
from configlint.lint.accessors import SetterKind, doc_type_label, is_string_type, setter_kind
from configlint.lint.models import (
    ArtifactSet,
    DefaultValueTable,
    DiagnosticKind,
    DiagnosticsCollector,
    SchemaField,
    UsageCategory,
    UsageFact,
)
from configlint.lint.recognizers import Recognizers

log = get_logger("lint.validator")

# Accessor shapes carried in UsageFact.extra["shape"]
SHAPE_ASSIGN = "assign"
SHAPE_COPY = "copy"

# Order of the completeness pass
COMPLETENESS_ORDER = (
    UsageCategory.PERSISTENCE_WRITE,
    UsageCategory.PERSISTENCE_READ,
    UsageCategory.RUNTIME_CHECK,
    UsageCategory.RUNTIME_GET,
    UsageCategory.RUNTIME_SET,
    UsageCategory.DOC_ENTRY,
)


class CrossValidator:
    """Validates each fact as it is produced, then checks coverage.

    Every fact passed to validate() is counted towards its category; the
    completeness pass reports each schema field missing from a category.
    """

    def __init__(
        self,
        schema: dict[str, SchemaField],
        artifacts: ArtifactSet,
        recognizers: Recognizers,
        diagnostics: DiagnosticsCollector,
        defaults: DefaultValueTable,
    ) -> None:
        self._schema = schema
        self._artifacts = artifacts
        self._recognizers = recognizers
        self._diagnostics = diagnostics
        self._defaults = defaults
        self._seen: dict[UsageCategory, set[str]] = {c: set() for c in UsageCategory}
        self._counts: dict[UsageCategory, int] = dict.fromkeys(UsageCategory, 0)

    @property
    def fact_counts(self) -> dict[UsageCategory, int]:
        return dict(self._counts)

    def seen(self, category: UsageCategory) -> frozenset[str]:
        return frozenset(self._seen[category])

    def validate(self, fact: UsageFact) -> None:
        """Run the per-fact checks for one freshly recognized fact."""
        self._seen[fact.category].add(fact.field_name)
        self._counts[fact.category] += 1

        match fact.category:
            case UsageCategory.PERSISTENCE_READ:
                self._check_persistence_read(fact)
            case UsageCategory.PERSISTENCE_WRITE:
                self._check_persistence_write(fact)
            case UsageCategory.RUNTIME_CHECK:
                self._check_runtime_check(fact)
            case UsageCategory.RUNTIME_GET:
                self._check_runtime_get(fact)
            case UsageCategory.RUNTIME_SET:
                self._check_runtime_set(fact)
            case UsageCategory.DOC_ENTRY:
                self._check_doc_entry(fact)

    def check_completeness(self) -> None:
        """Report every schema field absent from a usage category."""
        missing = 0
        for category in COMPLETENESS_ORDER:
            path = self._artifacts.path_for(category)
            for name in self._schema:
                if name in self._seen[category]:
                    continue
                missing += 1
                self._diagnostics.add(
                    path,
                    None,
                    f'Missing {category.label} for "{name}"',
                    kind=DiagnosticKind.MISSING_COVERAGE,
                    code="missing-coverage",
                )
        log.debug("completeness_checked", fields=len(self._schema), missing=missing)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _report(self, fact: UsageFact, message: str, code: str) -> None:
        self._diagnostics.add(
            fact.location.artifact,
            fact.location.line,
            message,
            kind=DiagnosticKind.STRUCTURAL_MISMATCH,
            code=code,
        )

    def _type_of(self, name: str) -> str | None:
        schema_field = self._schema.get(name)
        return schema_field.type if schema_field else None

    def _check_pending_key(self, fact: UsageFact) -> None:
        if fact.observed_key != fact.referenced_key:
            self._report(
                fact,
                f'Config value "{fact.observed_key}" does not match '
                f'last checked key "{fact.referenced_key}"',
                "key-mismatch",
            )

    def _check_sized_field(self, fact: UsageFact, what: str, key: str) -> None:
        sized = fact.extra.get("sized_field")
        if sized is not None and sized != fact.observed_key:
            self._report(
                fact,
                f'{what} "{key}" has mismatched config key "{sized}" in sizeof() call',
                "sizeof-mismatch",
            )

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    def _check_persistence_read(self, fact: UsageFact) -> None:
        field_name = fact.observed_key
        key = fact.referenced_key
        shape = fact.extra.get("shape", SHAPE_ASSIGN)
        type_name = self._type_of(field_name)

        if field_name != key:
            self._report(
                fact,
                f'JSON read "{key}" does not match config key "{field_name}"',
                "key-mismatch",
            )
        if shape == SHAPE_COPY:
            self._check_sized_field(fact, "JSON read", key)
        if type_name is None:
            self._report(fact, f'JSON read "{key}" to unknown config key "{field_name}"', "unknown-key")
        if not fact.extra.get("default_present"):
            self._report(
                fact,
                f'JSON read "{key}" missing default value for {type_name or "unknown type"}',
                "missing-default",
            )
        if type_name is None:
            return

        copy_function = self._recognizers.patterns.copy_function
        if shape == SHAPE_ASSIGN and is_string_type(type_name):
            self._report(
                fact,
                f'JSON assigns "{key}" to string type! Use {copy_function}!',
                "wrong-accessor",
            )
        elif shape == SHAPE_COPY and not is_string_type(type_name):
            self._report(
                fact,
                f'JSON assigns "{key}" as string, but the type should be {type_name}',
                "wrong-accessor",
            )

    def _check_persistence_write(self, fact: UsageFact) -> None:
        key = fact.observed_key
        field_name = fact.referenced_key
        if key != field_name:
            self._report(
                fact,
                f'JSON assignment "{key}" does not match config key "{field_name}"',
                "key-mismatch",
            )
        if field_name not in self._schema:
            self._report(
                fact,
                f'JSON assignment "{key}" from unknown config key "{field_name}"',
                "unknown-key",
            )

    # -------------------------------------------------------------------------
    # Runtime console
    # -------------------------------------------------------------------------

    def _check_runtime_check(self, fact: UsageFact) -> None:
        if fact.observed_key not in self._schema:
            self._report(fact, f'Console checks unknown config key "{fact.observed_key}"', "unknown-key")

    def _check_runtime_get(self, fact: UsageFact) -> None:
        self._check_pending_key(fact)
        if fact.observed_key not in self._schema:
            self._report(fact, f'Console reads unknown config key "{fact.observed_key}"', "unknown-key")

    def _check_runtime_set(self, fact: UsageFact) -> None:
        field_name = fact.observed_key
        shape = fact.extra.get("shape", SHAPE_ASSIGN)
        type_name = self._type_of(field_name)

        if shape == SHAPE_COPY:
            self._check_sized_field(fact, "Console read", field_name)
        self._check_pending_key(fact)
        if type_name is None:
            self._report(fact, f'Console sets unknown config key "{field_name}"', "unknown-key")
            return

        if shape == SHAPE_COPY:
            if not is_string_type(type_name):
                self._report(
                    fact,
                    f'Console assigns "{field_name}" as string, but the type should be {type_name}',
                    "wrong-accessor",
                )
            return

        patterns = self._recognizers.patterns
        expression = fact.extra.get("expression", "")
        kind = setter_kind(type_name)
        if kind == SetterKind.STRING:
            self._report(
                fact,
                f'Config option "{field_name}" is {type_name}, use {patterns.copy_function}()',
                "wrong-accessor",
            )
        elif kind == SetterKind.BOOLEAN:
            if not self._recognizers.uses_bool_parser(expression):
                self._report(
                    fact,
                    f'Config option "{field_name}" is {type_name}, use {patterns.bool_parser}()',
                    "wrong-setter",
                )
        elif kind == SetterKind.INTEGER:
            if not self._recognizers.uses_int_parser(expression):
                self._report(
                    fact,
                    f'Config option "{field_name}" is {type_name}, use {patterns.int_parser}()',
                    "wrong-setter",
                )
        else:
            self._report(fact, f'Config option "{field_name}" using invalid setter', "invalid-setter")

    # -------------------------------------------------------------------------
    # Documentation
    # -------------------------------------------------------------------------

    def _check_doc_entry(self, fact: UsageFact) -> None:
        key = fact.observed_key
        type_name = self._type_of(key)
        if type_name is None:
            self._report(fact, f'Readme references unknown config key "{key}"', "unknown-key")
            return

        documented_default = fact.extra.get("default_text", "")
        expected_default = self._defaults.get(key)
        if expected_default is None:
            self._report(fact, f'Value "{key}" has no default to compare against', "no-default")
        elif documented_default != expected_default:
            self._report(
                fact,
                f'Default for "{key}" was {documented_default}, expected {expected_default}',
                "default-mismatch",
            )

        documented_type = fact.extra.get("type_text", "")
        expected_type = doc_type_label(type_name)
        if documented_type != expected_type:
            self._report(
                fact,
                f'Type for "{key}" was {documented_type}, expected {expected_type}',
                "type-mismatch",
            )
