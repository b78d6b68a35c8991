"""Type categories that decide which accessor shape a field must use."""

from __future__ import annotations

import re
from enum import Enum

_STRING_TYPE = re.compile(r"String|char\[\d+\]")
_INTEGER_TYPE = re.compile(r"int|byte|char")


class SetterKind(Enum):
    """Parse call a console setter must use for a field type."""

    BOOLEAN = "boolean"
    INTEGER = "integer"
    STRING = "string"  # bounded copy, no parse call
    NONE = "none"  # no valid setter shape exists


def is_string_type(type_name: str) -> bool:
    """String-like fields are copied with the bounded-copy call, never assigned."""
    return _STRING_TYPE.search(type_name) is not None


def setter_kind(type_name: str) -> SetterKind:
    if is_string_type(type_name):
        return SetterKind.STRING
    if type_name == "bool":
        return SetterKind.BOOLEAN
    if _INTEGER_TYPE.search(type_name):
        return SetterKind.INTEGER
    return SetterKind.NONE


def doc_type_label(type_name: str) -> str:
    """Canonical type label expected in the documentation table.

    Examples:
        char[32] -> String
        bool -> Boolean
        int -> Int
        uint8_t -> Uint8_t
    """
    if is_string_type(type_name):
        return "String"
    if type_name == "bool":
        return "Boolean"
    return type_name.capitalize()
