"""Shaping pipeline exports."""

from .field_rewrites import (
    deduplicate_field_names,
    flatten_top_level_records,
    force_string_fields,
    shape_fields,
)

__all__ = [
    "deduplicate_field_names",
    "flatten_top_level_records",
    "force_string_fields",
    "shape_fields",
]
