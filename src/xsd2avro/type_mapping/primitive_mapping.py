"""XSD built-in type and enumeration symbol mapping."""

from __future__ import annotations

import re
from collections.abc import Iterable

from .avro_types import EnumType, PrimitiveKind, PrimitiveType

_BUILTIN_KINDS: dict[str, PrimitiveKind] = {
    "string": PrimitiveKind.STRING,
    "normalizedString": PrimitiveKind.STRING,
    "token": PrimitiveKind.STRING,
    "anyURI": PrimitiveKind.STRING,
    "QName": PrimitiveKind.STRING,
    "boolean": PrimitiveKind.BOOLEAN,
    "float": PrimitiveKind.FLOAT,
    "double": PrimitiveKind.DOUBLE,
    # no logical decimal type: precision and scale are not carried over
    "decimal": PrimitiveKind.STRING,
    "integer": PrimitiveKind.LONG,
    "nonNegativeInteger": PrimitiveKind.LONG,
    "positiveInteger": PrimitiveKind.LONG,
    "nonPositiveInteger": PrimitiveKind.LONG,
    "negativeInteger": PrimitiveKind.LONG,
    "long": PrimitiveKind.LONG,
    "unsignedInt": PrimitiveKind.LONG,
    "int": PrimitiveKind.INT,
    "short": PrimitiveKind.INT,
    "byte": PrimitiveKind.INT,
    "unsignedShort": PrimitiveKind.INT,
    "unsignedByte": PrimitiveKind.INT,
    "base64Binary": PrimitiveKind.BYTES,
    "hexBinary": PrimitiveKind.BYTES,
    "date": PrimitiveKind.STRING,
    "time": PrimitiveKind.STRING,
    "dateTime": PrimitiveKind.STRING,
}

_INVALID_SYMBOL_CHARS = re.compile(r"[^A-Z0-9_]")
_VALID_SYMBOL_CHAR = re.compile(r"[A-Z0-9_]")


def builtin_primitive(local_name: str) -> PrimitiveType:
    """Map an XSD built-in type local name (case-sensitive) to an Avro primitive."""
    return PrimitiveType(_BUILTIN_KINDS.get(local_name, PrimitiveKind.STRING))


def enum_symbol(value: str) -> str:
    """Normalize an enumeration facet value into an Avro enum symbol."""
    upper = value.upper()
    if not _VALID_SYMBOL_CHAR.search(upper):
        return "_"
    return _INVALID_SYMBOL_CHARS.sub("_", upper)


def enum_type(name: str, values: Iterable[str]) -> EnumType:
    """Build an enum keeping facet order and duplicates."""
    return EnumType(name=name, symbols=tuple(enum_symbol(value) for value in values))
