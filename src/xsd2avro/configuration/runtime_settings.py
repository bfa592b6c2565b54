"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class OutputNaming(str, Enum):
    """How output schema file names are built."""

    ROOT = "root"
    FILE = "file"
    FILE_AND_ROOT = "file+root"


@dataclass(frozen=True)
class ConversionSettings:
    """Options that shape one XSD to Avro conversion.

    `force_string_fields` holds lower-cased names.
    """

    root_name: str | None = None
    namespace: str | None = None
    record_name: str | None = None
    nullable_attributes: bool = False
    flatten_top_level: bool = False
    force_string_fields: frozenset[str] = field(default_factory=frozenset)


@dataclass(frozen=True)
class OutputSettings:
    """Batch discovery and output file settings."""

    pretty: bool = False
    naming: OutputNaming = OutputNaming.FILE_AND_ROOT
    glob: str = "*.xsd"
    workers: int = 1


@dataclass(frozen=True)
class Configuration:
    """Top-level configuration aggregate."""

    conversion: ConversionSettings
    output: OutputSettings
