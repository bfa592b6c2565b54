"""Tree-rewriting passes applied to mapped fields before rendering."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import replace

from xsd2avro.type_mapping.avro_types import (
    STRING,
    ArrayType,
    AvroType,
    Field,
    NullableType,
    RecordType,
    record_of,
)


def shape_fields(
    fields: Sequence[Field],
    *,
    force_string_names: Iterable[str] = (),
    flatten_top_level: bool = False,
) -> tuple[Field, ...]:
    """Apply force-to-string, one-level flattening and de-duplication, in that order."""
    shaped = force_string_fields(fields, force_string_names)
    if flatten_top_level:
        shaped = flatten_top_level_records(shaped)
    return deduplicate_field_names(shaped)


def force_string_fields(fields: Sequence[Field], names: Iterable[str]) -> tuple[Field, ...]:
    """Retype leaf fields whose name is in `names` (case-insensitive) as string.

    Record-typed fields are descended into, never replaced themselves.
    """
    lowered = frozenset(name.lower() for name in names)
    if not lowered:
        return tuple(fields)
    return tuple(_force_string(field, lowered) for field in fields)


def flatten_top_level_records(fields: Sequence[Field]) -> tuple[Field, ...]:
    """Inline the children of top-level non-empty record fields, prefixed by the parent name."""
    flattened: list[Field] = []
    for field in fields:
        if isinstance(field.type, RecordType) and field.type.fields:
            prefix = _lower_first(field.name)
            flattened.extend(
                Field(name=prefix + _upper_first(child.name), type=child.type)
                for child in field.type.fields
            )
        else:
            flattened.append(field)
    return tuple(flattened)


def deduplicate_field_names(fields: Sequence[Field]) -> tuple[Field, ...]:
    """Rename repeated sibling names to `name_1`, `name_2`, ... in every record."""
    seen: set[str] = set()
    counters: dict[str, int] = {}
    unique: list[Field] = []
    for field in fields:
        field = replace(field, type=_rewrite_records(field.type, _deduplicate_record))
        if field.name in seen:
            counter = counters.get(field.name, 0) + 1
            while f"{field.name}_{counter}" in seen:
                counter += 1
            counters[field.name] = counter
            field = replace(field, name=f"{field.name}_{counter}")
        seen.add(field.name)
        unique.append(field)
    return tuple(unique)


def _force_string(field: Field, names: frozenset[str]) -> Field:
    if record_of(field.type) is not None:
        return replace(
            field,
            type=_rewrite_records(
                field.type,
                lambda record: replace(
                    record, fields=tuple(_force_string(child, names) for child in record.fields)
                ),
            ),
        )
    if field.name.lower() in names:
        return replace(field, type=STRING)
    return field


def _deduplicate_record(record: RecordType) -> RecordType:
    return replace(record, fields=deduplicate_field_names(record.fields))


def _rewrite_records(
    avro_type: AvroType, rewrite: Callable[[RecordType], RecordType]
) -> AvroType:
    """Rebuild `avro_type` with `rewrite` applied to the record under its wrappers."""
    if isinstance(avro_type, NullableType):
        return NullableType(inner=_rewrite_records(avro_type.inner, rewrite))
    if isinstance(avro_type, ArrayType):
        return ArrayType(items=_rewrite_records(avro_type.items, rewrite))
    if isinstance(avro_type, RecordType):
        return rewrite(avro_type)
    return avro_type


def _lower_first(name: str) -> str:
    return name[:1].lower() + name[1:]


def _upper_first(name: str) -> str:
    return name[:1].upper() + name[1:]
