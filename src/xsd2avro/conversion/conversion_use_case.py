"""XSD to Avro conversion use-case service."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from xsd2avro.configuration.runtime_settings import (
    Configuration,
    ConversionSettings,
    OutputNaming,
    OutputSettings,
)
from xsd2avro.schema_emission import render
from xsd2avro.schema_index import SchemaIndex, SchemaIndexError
from xsd2avro.shaping import shape_fields
from xsd2avro.type_mapping import Field, RecordType, TypeMapper
from xsd2avro.type_mapping.type_mapper import DEFAULT_RECORD_NAME

from .conversion_contracts import BatchOutcome, ConversionResult, DocumentOutcome

LOGGER = logging.getLogger(__name__)

SCHEMA_FILE_SUFFIX = ".avsc"
_DEFAULT_FILE_BASE = "xsd"


class ConversionError(Exception):
    """Raised when a document set cannot be converted or written."""


def convert_schema(index: SchemaIndex, settings: ConversionSettings) -> ConversionResult:
    """Convert the root element of a loaded document set into Avro schema text."""
    try:
        root = index.select_root(settings.root_name)
    except SchemaIndexError as exc:
        raise ConversionError(str(exc)) from exc

    record_name = settings.record_name or root.name or DEFAULT_RECORD_NAME
    namespace = index.derive_namespace(settings.namespace)
    mapper = TypeMapper(index, nullable_attributes=settings.nullable_attributes)
    root_field = mapper.map_element(root)
    fields = shape_fields(
        _top_level_fields(root_field),
        force_string_names=settings.force_string_fields,
        flatten_top_level=settings.flatten_top_level,
    )
    LOGGER.debug("Mapped root %s into %d top-level fields", root_field.name, len(fields))
    return ConversionResult(
        record_name=record_name,
        namespace=namespace,
        compact_json=render(record_name, namespace, fields, pretty=False),
        pretty_json=render(record_name, namespace, fields, pretty=True),
    )


def convert_schema_file(path: Path | str, settings: ConversionSettings) -> ConversionResult:
    """Load one XSD file (with its includes and imports) and convert it."""
    try:
        index = SchemaIndex.load([path])
    except SchemaIndexError as exc:
        raise ConversionError(str(exc)) from exc
    return convert_schema(index, settings)


def output_name(naming: OutputNaming, file_base: str, record_name: str) -> str:
    """Build the output file name (without suffix) for one conversion."""
    resolved_record = record_name if record_name.strip() else DEFAULT_RECORD_NAME
    resolved_base = file_base if file_base.strip() else _DEFAULT_FILE_BASE
    if naming is OutputNaming.ROOT:
        return resolved_record
    if naming is OutputNaming.FILE:
        return resolved_base
    return f"{resolved_base}__{resolved_record}"


def write_schema(
    result: ConversionResult, *, source: Path, output_dir: Path, output: OutputSettings
) -> Path:
    """Write the rendered schema into `output_dir` and return the written path."""
    destination = output_dir / (
        output_name(output.naming, source.stem, result.record_name) + SCHEMA_FILE_SUFFIX
    )
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_text(result.text(output.pretty), encoding="utf-8")
    except OSError as exc:
        raise ConversionError(f"Cannot write {destination}: {exc}") from exc
    return destination


def convert_file_to_directory(
    source: Path | str, output_dir: Path | str, configuration: Configuration
) -> Path:
    """Convert one XSD file and write its schema into `output_dir`."""
    source_path = Path(source)
    result = convert_schema_file(source_path, configuration.conversion)
    return write_schema(
        result, source=source_path, output_dir=Path(output_dir), output=configuration.output
    )


def discover_schema_files(input_dir: Path | str, pattern: str) -> list[Path]:
    """Return the regular files of `input_dir` matching `pattern`, sorted by name."""
    return sorted(path for path in Path(input_dir).glob(pattern) if path.is_file())


def convert_batch(
    sources: Sequence[Path], output_dir: Path | str, configuration: Configuration
) -> BatchOutcome:
    """Convert each document independently; failures are isolated per document."""
    destination = Path(output_dir)
    with ThreadPoolExecutor(max_workers=configuration.output.workers) as executor:
        futures = [
            executor.submit(_convert_one, source, destination, configuration) for source in sources
        ]
        batch = BatchOutcome(outcomes=tuple(future.result() for future in futures))
    LOGGER.info("Batch finished: %d generated, %d failed", batch.generated, batch.failed)
    return batch


def _convert_one(source: Path, output_dir: Path, configuration: Configuration) -> DocumentOutcome:
    try:
        output_path = convert_file_to_directory(source, output_dir, configuration)
    except Exception as exc:  # pylint: disable=broad-exception-caught
        LOGGER.debug("Conversion of %s failed: %s", source, exc)
        return DocumentOutcome(source=source, error=str(exc) or type(exc).__name__)
    return DocumentOutcome(source=source, output_path=output_path)


def _top_level_fields(root_field: Field) -> tuple[Field, ...]:
    if isinstance(root_field.type, RecordType):
        return root_field.type.fields
    # a simple-typed root becomes a record holding that single field
    return (root_field,)
