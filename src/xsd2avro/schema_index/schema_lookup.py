"""Schema index: cross-document symbol resolution and root selection."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Generic, TypeVar

from .document_reader import SchemaIndexError, read_schema_file, read_schema_text
from .schema_models import (
    AttributeDecl,
    AttributeGroupDecl,
    ElementDecl,
    GroupDecl,
    QName,
    SchemaDocument,
    TypeDecl,
)

LOGGER = logging.getLogger(__name__)

DEFAULT_NAMESPACE = "xsd2avro.generated"
PREFERRED_ROOT_NAME = "payload"

_SCHEME_PATTERN = re.compile(r"^https?://")
_URN_PATTERN = re.compile(r"^urn:")
_SEGMENT_SEPARATOR = re.compile(r"[/:]+")
_INVALID_SEGMENT_CHARS = re.compile(r"[^A-Za-z0-9_]")

_Decl = TypeVar("_Decl")


class NoGlobalElementsError(SchemaIndexError):
    """Raised when no document of the set declares a global element."""


class RootNotFoundError(SchemaIndexError):
    """Raised when an explicitly requested root element does not exist."""


class _SymbolTable(Generic[_Decl]):
    """First-declaration-wins lookup keyed by exact QName."""

    def __init__(self) -> None:
        self._by_qname: dict[QName, _Decl] = {}

    def add(self, qname: QName, declaration: _Decl) -> None:
        self._by_qname.setdefault(qname, declaration)

    def lookup(self, qname: QName) -> _Decl | None:
        return self._by_qname.get(qname)


class SchemaIndex:
    """Unified, read-only lookup space over a set of schema documents."""

    def __init__(self, documents: Sequence[SchemaDocument]) -> None:
        self._documents = tuple(documents)
        self._elements: _SymbolTable[ElementDecl] = _SymbolTable()
        self._types: _SymbolTable[TypeDecl] = _SymbolTable()
        self._groups: _SymbolTable[GroupDecl] = _SymbolTable()
        self._attribute_groups: _SymbolTable[AttributeGroupDecl] = _SymbolTable()
        self._attributes: _SymbolTable[AttributeDecl] = _SymbolTable()

        for document in self._documents:
            namespace = document.target_namespace
            for element in document.elements:
                if element.name:
                    self._elements.add(QName(namespace, element.name), element)
            for type_decl in document.types:
                if type_decl.name:
                    self._types.add(QName(namespace, type_decl.name), type_decl)
            for group in document.groups:
                self._groups.add(QName(namespace, group.name), group)
            for attribute_group in document.attribute_groups:
                self._attribute_groups.add(QName(namespace, attribute_group.name), attribute_group)
            for attribute in document.attributes:
                if attribute.name:
                    self._attributes.add(QName(namespace, attribute.name), attribute)

    @classmethod
    def load(cls, paths: Iterable[Path | str]) -> SchemaIndex:
        """Load schema files, following their includes, imports and redefines.

        A document reachable from several paths is indexed once.

        Raises:
          SchemaLoadError: If any reachable document fails to load.
        """
        documents: list[SchemaDocument] = []
        seen: set[str] = set()
        for path in paths:
            for document in read_schema_file(path):
                if document.location in seen:
                    continue
                seen.add(document.location)
                documents.append(document)
        return cls(documents)

    @classmethod
    def from_text(cls, text: str | bytes, *, base_dir: Path | None = None) -> SchemaIndex:
        """Build an index from in-memory XSD text."""
        return cls(read_schema_text(text, base_dir=base_dir))

    @property
    def documents(self) -> tuple[SchemaDocument, ...]:
        return self._documents

    @property
    def primary_document(self) -> SchemaDocument | None:
        return self._documents[0] if self._documents else None

    @property
    def global_elements(self) -> tuple[ElementDecl, ...]:
        """All global elements in document order, then declaration order."""
        return tuple(element for document in self._documents for element in document.elements)

    def resolve_type(self, qname: QName) -> TypeDecl | None:
        return self._types.lookup(qname)

    def resolve_element(self, qname: QName) -> ElementDecl | None:
        return self._elements.lookup(qname)

    def resolve_group(self, qname: QName) -> GroupDecl | None:
        return self._groups.lookup(qname)

    def resolve_attribute_group(self, qname: QName) -> AttributeGroupDecl | None:
        return self._attribute_groups.lookup(qname)

    def resolve_attribute(self, qname: QName) -> AttributeDecl | None:
        return self._attributes.lookup(qname)

    def select_root(self, explicit_name: str | None = None) -> ElementDecl:
        """Pick the global element to convert.

        An explicit name must match a global element's local name exactly. Without one,
        the first element named "Payload" (any casing) wins, else the first global element.

        Raises:
          NoGlobalElementsError: If the document set declares no global element.
          RootNotFoundError: If `explicit_name` matches no global element.
        """
        candidates = self.global_elements
        if not candidates:
            raise NoGlobalElementsError("No global elements in XSDs.")

        if explicit_name is not None and explicit_name.strip():
            for element in candidates:
                if element.name == explicit_name:
                    return element
            raise RootNotFoundError(f"Root element '{explicit_name}' not found.")

        for element in candidates:
            if element.name and element.name.lower() == PREFERRED_ROOT_NAME:
                LOGGER.debug("Selected preferred root element %s", element.name)
                return element
        return candidates[0]

    def derive_namespace(self, explicit_namespace: str | None = None) -> str:
        """Return the Avro namespace for this document set."""
        if explicit_namespace is not None and explicit_namespace.strip():
            return explicit_namespace

        primary = self.primary_document
        target_namespace = primary.target_namespace if primary is not None else None
        if target_namespace is None or not target_namespace.strip():
            return DEFAULT_NAMESPACE

        trimmed = _URN_PATTERN.sub("", _SCHEME_PATTERN.sub("", target_namespace, count=1), count=1)
        segments = [
            _INVALID_SEGMENT_CHARS.sub("_", segment)
            for segment in _SEGMENT_SEPARATOR.split(trimmed)
            if segment
        ]
        derived = ".".join(segments)
        LOGGER.debug("Derived namespace %r from %r", derived, target_namespace)
        return derived or DEFAULT_NAMESPACE

