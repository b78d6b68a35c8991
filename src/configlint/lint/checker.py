"""The checker pipeline: schema, scans, completeness."""

from __future__ import annotations

from configlint.core.logging import get_logger
from configlint.lint.models import (
    ArtifactSet,
    CheckResult,
    DefaultValueTable,
    DiagnosticsCollector,
)
from configlint.lint.recognizers import Recognizers
from configlint.lint.scanners import scan_docs, scan_persistence, scan_runtime
from configlint.lint.schema import extract_schema
from configlint.lint.validator import CrossValidator
from configlint.settings.models import PatternsConfig

log = get_logger("lint.checker")


def check_artifacts(
    artifacts: ArtifactSet,
    patterns: PatternsConfig | None = None,
    *,
    flag_malformed_rows: bool = True,
) -> CheckResult:
    """Run every phase over already-loaded artifacts.

    All state (diagnostics, default table, per-category facts) is local to
    this call, so repeated runs over identical inputs give identical results.
    The persistence scan runs before the documentation scan because the
    documented defaults are compared against the ones it records.

    An empty schema stops the run after extraction: without fields every
    fact would only be reported as unknown.
    """
    recognizers = Recognizers(patterns)
    diagnostics = DiagnosticsCollector()
    defaults = DefaultValueTable()

    schema = extract_schema(artifacts.schema, recognizers, diagnostics)
    if not schema:
        log.warning("empty_schema", artifact=artifacts.schema.path)
        return CheckResult(schema=schema, diagnostics=diagnostics.items)

    validator = CrossValidator(schema, artifacts, recognizers, diagnostics, defaults)
    scan_persistence(artifacts.persistence, recognizers, validator, defaults)
    scan_runtime(artifacts.runtime, recognizers, validator)
    scan_docs(
        artifacts.docs,
        recognizers,
        validator,
        diagnostics,
        flag_malformed_rows=flag_malformed_rows,
    )
    validator.check_completeness()

    result = CheckResult(
        schema=schema,
        diagnostics=diagnostics.items,
        fact_counts=validator.fact_counts,
    )
    log.info(
        "check_complete",
        fields=len(schema),
        diagnostics=result.count,
        defaults=len(defaults),
    )
    return result
