"""Schema index exports."""

from .document_reader import SchemaIndexError, SchemaLoadError, read_schema_file, read_schema_text
from .schema_lookup import (
    DEFAULT_NAMESPACE,
    NoGlobalElementsError,
    RootNotFoundError,
    SchemaIndex,
)
from .schema_models import QName, SchemaDocument

__all__ = [
    "DEFAULT_NAMESPACE",
    "NoGlobalElementsError",
    "QName",
    "RootNotFoundError",
    "SchemaDocument",
    "SchemaIndex",
    "SchemaIndexError",
    "SchemaLoadError",
    "read_schema_file",
    "read_schema_text",
]
