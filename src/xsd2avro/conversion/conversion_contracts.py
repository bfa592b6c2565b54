"""Conversion entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class ConversionResult:
    """Rendered Avro schema for one converted document set."""

    record_name: str
    namespace: str
    compact_json: str
    pretty_json: str

    def text(self, pretty: bool) -> str:
        return self.pretty_json if pretty else self.compact_json


@dataclass(frozen=True)
class DocumentOutcome:
    """Result of converting one input document in batch mode."""

    source: Path
    output_path: Path | None = None
    error: str | None = None

    @property
    def is_ok(self) -> bool:
        """Return True when the document produced an output file."""
        return self.error is None


@dataclass(frozen=True)
class BatchOutcome:
    """Per-document outcomes of a batch run, in input order."""

    outcomes: tuple[DocumentOutcome, ...]

    @property
    def generated(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.is_ok)

    @property
    def failed(self) -> int:
        return sum(1 for outcome in self.outcomes if not outcome.is_ok)
