"""Schema extraction from the canonical config struct declaration."""

from __future__ import annotations

from configlint.core.logging import get_logger
from configlint.lint.models import Artifact, DiagnosticKind, DiagnosticsCollector, SchemaField
from configlint.lint.recognizers import Recognizers

log = get_logger("lint.schema")


def extract_schema(
    artifact: Artifact,
    recognizers: Recognizers,
    diagnostics: DiagnosticsCollector,
) -> dict[str, SchemaField]:
    """Read the struct block and map field name to declared type.

    The block starts on the ``struct <struct_name>`` line and ends on the
    ``} <storage_qualifier>`` line. Blank and comment lines are skipped, as
    are lines that are not field declarations. A bare ``};`` also ends
    collection, so a separate ``extern`` declaration after it is never read
    as a field, but the block is still reported as unterminated.

    A repeated field name is reported and the first declaration kept. A
    missing block, or one without fields, is reported and yields an empty
    schema, which callers must treat as a hard input error.
    """
    schema: dict[str, SchemaField] = {}
    struct_name = recognizers.patterns.struct_name
    found = False
    inside = False
    bare_close_line: int | None = None

    for number, line in artifact.lines():
        if not inside:
            if recognizers.schema_open(line):
                found = inside = True
            continue

        if recognizers.schema_close(line):
            inside = False
            break

        if recognizers.bare_close(line):
            bare_close_line = number
            break

        if recognizers.is_skippable(line):
            continue

        decl = recognizers.field_declaration(line)
        if decl is None:
            continue

        existing = schema.get(decl.name)
        if existing is not None:
            diagnostics.add(
                artifact.path,
                number,
                f'Duplicate config key "{decl.name}" in {struct_name}, '
                f"first declared on line {existing.line}",
                kind=DiagnosticKind.MALFORMED_INPUT,
                code="duplicate-field",
            )
            continue

        schema[decl.name] = SchemaField(name=decl.name, type=decl.type, line=number)

    if not found:
        diagnostics.add(
            artifact.path,
            None,
            f"Could not find 'struct {struct_name}' declaration",
            kind=DiagnosticKind.MALFORMED_INPUT,
            code="schema-not-found",
        )
    elif inside:
        qualifier = recognizers.patterns.storage_qualifier
        diagnostics.add(
            artifact.path,
            bare_close_line,
            f"'struct {struct_name}' is closed without '}} {qualifier}'"
            if bare_close_line is not None
            else f"'struct {struct_name}' is never closed with '}} {qualifier}'",
            kind=DiagnosticKind.MALFORMED_INPUT,
            code="schema-unterminated",
        )
    elif not schema:
        diagnostics.add(
            artifact.path,
            None,
            f"'struct {struct_name}' declares no fields",
            kind=DiagnosticKind.MALFORMED_INPUT,
            code="schema-empty",
        )

    log.debug("schema_extracted", artifact=artifact.path, fields=len(schema))
    return schema
