"""Usage scanners - one pass per dependent artifact.

Each scanner walks its artifact line by line, turns recognized patterns into
UsageFacts and hands every fact to the CrossValidator immediately, because
the accessor rules depend on the field's declared type.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from configlint.core.logging import get_logger
from configlint.lint.models import (
    Artifact,
    DefaultValueTable,
    DiagnosticKind,
    DiagnosticsCollector,
    SourceLocation,
    UsageCategory,
    UsageFact,
)
from configlint.lint.recognizers import Recognizers
from configlint.lint.validator import SHAPE_ASSIGN, SHAPE_COPY, CrossValidator

log = get_logger("lint.scanners")


# =============================================================================
# Persistence
# =============================================================================


def scan_persistence(
    artifact: Artifact,
    recognizers: Recognizers,
    validator: CrossValidator,
    defaults: DefaultValueTable,
) -> int:
    """Scan JSON reads and writes of the config struct.

    Defaults found on reads are recorded in ``defaults`` (first writer wins).

    Returns:
        Number of facts produced.
    """
    facts = 0
    for number, line in artifact.lines():
        location = SourceLocation(artifact.path, number)

        read = recognizers.document_read(line)
        if read is not None:
            _record_default(defaults, read.field, read.default)
            validator.validate(
                UsageFact(
                    category=UsageCategory.PERSISTENCE_READ,
                    observed_key=read.field,
                    referenced_key=read.key,
                    location=location,
                    extra={
                        "shape": SHAPE_ASSIGN,
                        "default_present": read.default is not None,
                        "default_text": read.default,
                    },
                )
            )
            facts += 1

        copy = recognizers.document_copy(line)
        if copy is not None:
            _record_default(defaults, copy.field, copy.default)
            validator.validate(
                UsageFact(
                    category=UsageCategory.PERSISTENCE_READ,
                    observed_key=copy.field,
                    referenced_key=copy.key,
                    location=location,
                    extra={
                        "shape": SHAPE_COPY,
                        "sized_field": copy.sized_field,
                        "default_present": copy.default is not None,
                        "default_text": copy.default,
                    },
                )
            )
            facts += 1

        write = recognizers.document_write(line)
        if write is not None:
            validator.validate(
                UsageFact(
                    category=UsageCategory.PERSISTENCE_WRITE,
                    observed_key=write.key,
                    referenced_key=write.field,
                    location=location,
                )
            )
            facts += 1

    log.debug("scan_complete", scanner="persistence", artifact=artifact.path, facts=facts)
    return facts


def _record_default(defaults: DefaultValueTable, name: str, default: str | None) -> None:
    if default is not None and not defaults.record(name, default):
        log.debug("default_already_recorded", field=name, ignored=default)


# =============================================================================
# Runtime console
# =============================================================================


class WindowState(Enum):
    IDLE = "idle"
    AWAITING_USAGE = "awaiting_usage"


@dataclass
class _RuntimeState:
    """Pending-key window of the console scanner.

    A check line opens the window for its key (replacing any pending key).
    The next get/set line is attributed to that key and closes the window.
    Blank, comment and brace-only lines leave it open; any other line
    closes it without producing a fact.
    """

    pending_key: str | None = None

    @property
    def state(self) -> WindowState:
        if self.pending_key is None:
            return WindowState.IDLE
        return WindowState.AWAITING_USAGE

    def open(self, key: str) -> None:
        self.pending_key = key

    def close(self) -> None:
        self.pending_key = None


def scan_runtime(
    artifact: Artifact,
    recognizers: Recognizers,
    validator: CrossValidator,
) -> int:
    """Scan console get/set handling keyed by option name.

    Returns:
        Number of facts produced.
    """
    facts = 0
    window = _RuntimeState()

    for number, line in artifact.lines():
        location = SourceLocation(artifact.path, number)

        check = recognizers.option_check(line)
        if check is not None:
            validator.validate(
                UsageFact(
                    category=UsageCategory.RUNTIME_CHECK,
                    observed_key=check.key,
                    referenced_key=check.key,
                    location=location,
                )
            )
            facts += 1
            window.open(check.key)
            continue

        pending = window.pending_key
        if pending is None:
            continue

        consumed = 0

        get = recognizers.value_get(line)
        if get is not None:
            validator.validate(
                UsageFact(
                    category=UsageCategory.RUNTIME_GET,
                    observed_key=get.field,
                    referenced_key=pending,
                    location=location,
                )
            )
            consumed += 1

        assign = recognizers.parsed_assign(line)
        if assign is not None:
            validator.validate(
                UsageFact(
                    category=UsageCategory.RUNTIME_SET,
                    observed_key=assign.field,
                    referenced_key=pending,
                    location=location,
                    extra={"shape": SHAPE_ASSIGN, "expression": assign.expression},
                )
            )
            consumed += 1

        copy = recognizers.value_copy(line)
        if copy is not None:
            validator.validate(
                UsageFact(
                    category=UsageCategory.RUNTIME_SET,
                    observed_key=copy.field,
                    referenced_key=pending,
                    location=location,
                    extra={"shape": SHAPE_COPY, "sized_field": copy.sized_field},
                )
            )
            consumed += 1

        if consumed:
            facts += consumed
            window.close()
        elif not recognizers.is_structural_noise(line):
            log.debug("runtime_window_closed", key=pending, line=number)
            window.close()

    log.debug("scan_complete", scanner="runtime", artifact=artifact.path, facts=facts)
    return facts


# =============================================================================
# Documentation
# =============================================================================


def scan_docs(
    artifact: Artifact,
    recognizers: Recognizers,
    validator: CrossValidator,
    diagnostics: DiagnosticsCollector,
    *,
    flag_malformed_rows: bool = True,
) -> int:
    """Scan the ``|`key`|Type|Default|Note|`` options table.

    Rows that start like an option row but lack the four-cell shape are
    reported as malformed input (or skipped when ``flag_malformed_rows`` is
    off); scanning always continues past them.

    Returns:
        Number of facts produced.
    """
    facts = 0
    for number, line in artifact.lines():
        row = recognizers.doc_row(line)
        if row is None:
            key = recognizers.doc_row_candidate(line)
            if key is None:
                continue
            if flag_malformed_rows:
                diagnostics.add(
                    artifact.path,
                    number,
                    f'Readme row for "{key}" does not have the |key|type|default|note| shape',
                    kind=DiagnosticKind.MALFORMED_INPUT,
                    code="malformed-row",
                )
            else:
                log.debug("malformed_row_skipped", key=key, line=number)
            continue

        validator.validate(
            UsageFact(
                category=UsageCategory.DOC_ENTRY,
                observed_key=row.key,
                referenced_key=row.key,
                location=SourceLocation(artifact.path, number),
                extra={"type_text": row.type, "default_text": row.default, "note": row.note},
            )
        )
        facts += 1

    log.debug("scan_complete", scanner="docs", artifact=artifact.path, facts=facts)
    return facts
