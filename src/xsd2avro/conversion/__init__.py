"""Conversion domain exports."""

from .conversion_contracts import BatchOutcome, ConversionResult, DocumentOutcome
from .conversion_use_case import (
    ConversionError,
    convert_batch,
    convert_file_to_directory,
    convert_schema,
    convert_schema_file,
    discover_schema_files,
    output_name,
    write_schema,
)

__all__ = [
    "BatchOutcome",
    "ConversionError",
    "ConversionResult",
    "DocumentOutcome",
    "convert_batch",
    "convert_file_to_directory",
    "convert_schema",
    "convert_schema_file",
    "discover_schema_files",
    "output_name",
    "write_schema",
]
