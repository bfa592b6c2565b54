"""Type mapping exports."""

from .avro_types import (
    ArrayType,
    AvroType,
    EnumType,
    Field,
    NullableType,
    PrimitiveKind,
    PrimitiveType,
    RecordType,
)
from .primitive_mapping import builtin_primitive, enum_symbol
from .type_mapper import TypeMapper

__all__ = [
    "ArrayType",
    "AvroType",
    "EnumType",
    "Field",
    "NullableType",
    "PrimitiveKind",
    "PrimitiveType",
    "RecordType",
    "TypeMapper",
    "builtin_primitive",
    "enum_symbol",
]
