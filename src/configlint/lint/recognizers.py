"""Line recognizers for the schema, source and documentation artifacts.

Each recognizer is one compiled pattern behind a named method that returns a
small typed match (or None). Patterns are built from PatternsConfig, so the
identifiers a project uses for its struct, JSON document and parse helpers
can differ from the defaults without touching the scanners.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from configlint.settings.models import PatternsConfig

_TRAILING_SEMICOLON = re.compile(r";\s*$")


def normalize_default(raw: str | None) -> str | None:
    """Strip the source syntax around a default value.

    Examples:
        " | 80;" -> "80"
        '| "ESP"' -> '"ESP"'
        "" -> None
    """
    if raw is None:
        return None
    text = raw.strip()
    if text.startswith("|"):
        text = text[1:]
    text = _TRAILING_SEMICOLON.sub("", text).strip()
    return text or None


@dataclass(frozen=True, slots=True)
class FieldDeclaration:
    type: str
    name: str


@dataclass(frozen=True, slots=True)
class DocumentRead:
    """``Config.field = doc["key"] | default``"""

    field: str
    key: str
    default: str | None


@dataclass(frozen=True, slots=True)
class DocumentCopy:
    """``strlcpy(Config.field, doc["key"] | default, sizeof(Config.sized))``"""

    field: str
    key: str
    sized_field: str
    default: str | None


@dataclass(frozen=True, slots=True)
class DocumentWrite:
    """``doc["key"] = Config.field``"""

    key: str
    field: str


@dataclass(frozen=True, slots=True)
class OptionCheck:
    """``strcmp(option, "key")``"""

    key: str


@dataclass(frozen=True, slots=True)
class ValueGet:
    """``String(Config.field``"""

    field: str


@dataclass(frozen=True, slots=True)
class ParsedAssign:
    """``Config.field = expression;``"""

    field: str
    expression: str


@dataclass(frozen=True, slots=True)
class ValueCopy:
    """``strlcpy(Config.field, value, sizeof(Config.sized))``"""

    field: str
    sized_field: str


@dataclass(frozen=True, slots=True)
class DocRow:
    """``|`key`|type|default|note|`` with whitespace-stripped cells."""

    key: str
    type: str
    default: str
    note: str


class Recognizers:
    """Compiled recognizers for one identifier vocabulary."""

    def __init__(self, patterns: PatternsConfig | None = None) -> None:
        self.patterns = p = patterns or PatternsConfig()

        inst = re.escape(p.instance_name)
        doc = re.escape(p.document_name)
        copy = re.escape(p.copy_function)
        sizeof = rf"sizeof\s*\(\s*{inst}\.(\w+)"

        self._schema_open = re.compile(rf"\bstruct\s+{re.escape(p.struct_name)}\b")
        self._schema_close = re.compile(rf"^\s*}}\s*{re.escape(p.storage_qualifier)}\b")
        self._bare_close = re.compile(r"^\s*}\s*;?\s*(?://.*)?$")
        self._comment = re.compile(r"^\s*//")
        self._blank = re.compile(r"^\s*$")
        self._structural_noise = re.compile(r"^\s*(?:[{}]\s*)*(?://.*)?$")
        self._field = re.compile(
            r"^\s*((?:(?:const|unsigned|signed|volatile|struct)\s+)*\w+)(\s*[*&]\s*|\s+)"
            r"(\w+)\s*(\[\d*\])?"
        )

        self._document_read = re.compile(
            rf"\b{inst}\.(\w+)\s*=(?!=)\s*{doc}\s*\[\s*\"(\w+)\"\s*\](\s*\|\s*\S+)?"
        )
        self._document_copy = re.compile(
            rf"\b{copy}\s*\(\s*{inst}\.(\w+)\s*,\s*{doc}\s*\[\s*\"(\w+)\"\s*\]"
            rf"\s*(.*?),\s*{sizeof}"
        )
        self._document_write = re.compile(
            rf"\b{doc}\s*\[\s*\"(\w+)\"\s*\]\s*=(?!=)\s*{inst}\.(\w+)"
        )

        self._option_check = re.compile(
            rf"\b{re.escape(p.compare_function)}\s*\(\s*{re.escape(p.option_name)}"
            r"\s*,\s*\"(\w+)\""
        )
        self._value_get = re.compile(rf"\b{re.escape(p.getter_function)}\s*\(\s*{inst}\.(\w+)")
        self._parsed_assign = re.compile(rf"\b{inst}\.(\w+)\s*=(?!=)\s*(.*?);")
        self._value_copy = re.compile(
            rf"\b{copy}\s*\(\s*{inst}\.(\w+)\s*,\s*{re.escape(p.value_name)}\s*,\s*{sizeof}"
        )
        self._bool_parse = re.compile(rf"\b{re.escape(p.bool_parser)}\s*\(")
        self._int_parse = re.compile(rf"\b{re.escape(p.int_parser)}\s*\(")

        self._doc_row = re.compile(
            r"^\s*\|\s*`(\w+)`\s*\|([^|]*)\|([^|]*)\|([^|]*)\|\s*$"
        )
        self._doc_row_candidate = re.compile(r"^\s*\|\s*`(\w+)`")

    # -------------------------------------------------------------------------
    # Schema
    # -------------------------------------------------------------------------

    def schema_open(self, line: str) -> bool:
        return self._schema_open.search(line) is not None

    def schema_close(self, line: str) -> bool:
        return self._schema_close.search(line) is not None

    def bare_close(self, line: str) -> bool:
        """Closing brace without the storage qualifier, e.g. ``};``."""
        return self._bare_close.match(line) is not None

    def is_skippable(self, line: str) -> bool:
        """Blank or comment-only line inside the schema block."""
        return self._blank.match(line) is not None or self._comment.match(line) is not None

    def is_structural_noise(self, line: str) -> bool:
        """Blank, comment-only or brace-only line."""
        return self._structural_noise.match(line) is not None

    def field_declaration(self, line: str) -> FieldDeclaration | None:
        m = self._field.match(line)
        if m is None:
            return None
        type_name = re.sub(r"\s", "", m.group(1) + m.group(2) + (m.group(4) or ""))
        return FieldDeclaration(type=type_name, name=m.group(3))

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    def document_read(self, line: str) -> DocumentRead | None:
        m = self._document_read.search(line)
        if m is None:
            return None
        return DocumentRead(field=m.group(1), key=m.group(2), default=normalize_default(m.group(3)))

    def document_copy(self, line: str) -> DocumentCopy | None:
        m = self._document_copy.search(line)
        if m is None:
            return None
        return DocumentCopy(
            field=m.group(1),
            key=m.group(2),
            sized_field=m.group(4),
            default=normalize_default(m.group(3)),
        )

    def document_write(self, line: str) -> DocumentWrite | None:
        m = self._document_write.search(line)
        if m is None:
            return None
        return DocumentWrite(key=m.group(1), field=m.group(2))

    # -------------------------------------------------------------------------
    # Runtime console
    # -------------------------------------------------------------------------

    def option_check(self, line: str) -> OptionCheck | None:
        m = self._option_check.search(line)
        return OptionCheck(key=m.group(1)) if m else None

    def value_get(self, line: str) -> ValueGet | None:
        m = self._value_get.search(line)
        return ValueGet(field=m.group(1)) if m else None

    def parsed_assign(self, line: str) -> ParsedAssign | None:
        m = self._parsed_assign.search(line)
        if m is None:
            return None
        return ParsedAssign(field=m.group(1), expression=m.group(2).strip())

    def value_copy(self, line: str) -> ValueCopy | None:
        m = self._value_copy.search(line)
        return ValueCopy(field=m.group(1), sized_field=m.group(2)) if m else None

    def uses_bool_parser(self, expression: str) -> bool:
        return self._bool_parse.search(expression) is not None

    def uses_int_parser(self, expression: str) -> bool:
        return self._int_parse.search(expression) is not None

    # -------------------------------------------------------------------------
    # Documentation
    # -------------------------------------------------------------------------

    def doc_row(self, line: str) -> DocRow | None:
        m = self._doc_row.match(line)
        if m is None:
            return None
        return DocRow(
            key=m.group(1),
            type=m.group(2).strip(),
            default=m.group(3).strip(),
            note=m.group(4).strip(),
        )

    def doc_row_candidate(self, line: str) -> str | None:
        """Key of a line that starts like an option row, whatever its shape."""
        m = self._doc_row_candidate.match(line)
        return m.group(1) if m else None
