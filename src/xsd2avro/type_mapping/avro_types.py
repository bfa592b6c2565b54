"""Avro field and type entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class PrimitiveKind(str, Enum):
    """Avro primitive type names produced by the mapper."""

    STRING = "string"
    INT = "int"
    LONG = "long"
    FLOAT = "float"
    DOUBLE = "double"
    BOOLEAN = "boolean"
    BYTES = "bytes"


@dataclass(frozen=True)
class PrimitiveType:
    kind: PrimitiveKind


@dataclass(frozen=True)
class RecordType:
    name: str
    fields: tuple[Field, ...] = ()


@dataclass(frozen=True)
class ArrayType:
    items: AvroType


@dataclass(frozen=True)
class EnumType:
    name: str
    symbols: tuple[str, ...]


@dataclass(frozen=True)
class NullableType:
    """Absent value or a value of `inner`; rendered as a null union."""

    inner: AvroType


AvroType = PrimitiveType | RecordType | ArrayType | EnumType | NullableType

STRING = PrimitiveType(PrimitiveKind.STRING)


@dataclass(frozen=True)
class Field:
    """Named field of a record."""

    name: str
    type: AvroType


def unwrap_nullable(avro_type: AvroType) -> AvroType:
    """Strip a nullable wrapper, if any."""
    if isinstance(avro_type, NullableType):
        return avro_type.inner
    return avro_type


def record_of(avro_type: AvroType) -> RecordType | None:
    """Return the record reached through nullable/array wrappers, if any."""
    while isinstance(avro_type, NullableType | ArrayType):
        avro_type = avro_type.inner if isinstance(avro_type, NullableType) else avro_type.items
    return avro_type if isinstance(avro_type, RecordType) else None
