"""Avro schema JSON rendering."""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any

from xsd2avro.type_mapping.avro_types import (
    ArrayType,
    AvroType,
    EnumType,
    Field,
    NullableType,
    PrimitiveType,
    RecordType,
)

_PRETTY_INDENT = 2
_COMPACT_SEPARATORS = (",", ":")


def render(root_name: str, namespace: str, fields: Sequence[Field], pretty: bool) -> str:
    """Render a record schema as JSON text.

    Nested records reuse `namespace`. Compact and pretty output differ only in
    whitespace.
    """
    document = _record_json(root_name, namespace, fields)
    if pretty:
        return json.dumps(document, indent=_PRETTY_INDENT, ensure_ascii=False)
    return json.dumps(document, separators=_COMPACT_SEPARATORS, ensure_ascii=False)


def to_schema_json(root_name: str, namespace: str, fields: Sequence[Field]) -> dict[str, Any]:
    """Return the JSON-compatible structure that `render` serializes."""
    return _record_json(root_name, namespace, fields)


def _record_json(name: str, namespace: str, fields: Sequence[Field]) -> dict[str, Any]:
    return {
        "type": "record",
        "name": name,
        "namespace": namespace,
        "fields": [
            {"name": field.name, "type": _type_json(field.type, namespace)} for field in fields
        ],
    }


def _type_json(avro_type: AvroType, namespace: str) -> Any:
    if isinstance(avro_type, PrimitiveType):
        return avro_type.kind.value
    if isinstance(avro_type, ArrayType):
        return {"type": "array", "items": _type_json(avro_type.items, namespace)}
    if isinstance(avro_type, NullableType):
        return ["null", _type_json(avro_type.inner, namespace)]
    if isinstance(avro_type, RecordType):
        return _record_json(avro_type.name, namespace, avro_type.fields)
    if isinstance(avro_type, EnumType):
        return {"type": "enum", "name": avro_type.name, "symbols": list(avro_type.symbols)}
    raise TypeError(f"Unsupported Avro type: {avro_type!r}")
