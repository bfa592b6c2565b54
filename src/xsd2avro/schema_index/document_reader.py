"""XSD document reading service on top of the xmlschema component model."""

from __future__ import annotations

import logging
import warnings
from collections import deque
from pathlib import Path
from typing import Any
from urllib.parse import unquote, urlsplit
from xml.etree import ElementTree

import xmlschema
from xmlschema.validators import (
    XsdAnyElement,
    XsdAttribute,
    XsdComplexType,
    XsdElement,
    XsdGroup,
    XsdList,
    XsdUnion,
)

from .schema_models import (
    XSD_NAMESPACE,
    All,
    AttributeDecl,
    AttributeGroupDecl,
    AttributeUse,
    Choice,
    ComplexDerivation,
    ComplexTypeDecl,
    DerivationKind,
    ElementDecl,
    GroupDecl,
    GroupRef,
    Particle,
    QName,
    SchemaDocument,
    Sequence,
    SimpleContentDerivation,
    SimpleTypeDecl,
    TypeDecl,
    Wildcard,
)

LOGGER = logging.getLogger(__name__)

_IN_MEMORY_LOCATION = "<memory>"
_XS_PREFIX = f"{{{XSD_NAMESPACE}}}"
_SCHEMA_TAG = _XS_PREFIX + "schema"
_ANY_TYPE = QName(XSD_NAMESPACE, "anyType")

# Documents xmlschema registers for its own meta-schemas.
_META_NAMESPACES = frozenset(
    {
        XSD_NAMESPACE,
        "http://www.w3.org/XML/1998/namespace",
        "http://www.w3.org/2001/XMLSchema-instance",
        "http://www.w3.org/2007/XMLSchema-versioning",
    }
)


class SchemaIndexError(Exception):
    """Base error for schema loading and root resolution failures."""


class SchemaLoadError(SchemaIndexError):
    """Raised when a schema document is unreadable or not a valid XSD document."""


def read_schema_file(path: Path | str) -> list[SchemaDocument]:
    """Load one XSD file with everything it includes, imports or redefines.

    Returns:
      The loaded documents, the given file first, then referenced documents in
      breadth-first order.

    Raises:
      SchemaLoadError: If the file or an included document cannot be loaded.
    """
    source = Path(path)
    if not source.is_file():
        raise SchemaLoadError(f"Cannot read schema document {source}: no such file")
    return _load(str(source), location=str(source), base_url=None)


def read_schema_text(
    text: str | bytes,
    *,
    location: str = _IN_MEMORY_LOCATION,
    base_dir: Path | None = None,
) -> list[SchemaDocument]:
    """Load in-memory XSD text; relative schema locations resolve against `base_dir`."""
    if isinstance(text, bytes):
        text = text.decode("utf-8")
    base_url = base_dir.as_posix().rstrip("/") + "/" if base_dir is not None else None
    return _load(text, location=location, base_url=base_url)


def _load(source: str, *, location: str, base_url: str | None) -> list[SchemaDocument]:
    try:
        with warnings.catch_warnings():
            warnings.simplefilter("error", xmlschema.XMLSchemaIncludeWarning)
            schema = xmlschema.XMLSchema(
                source, base_url=base_url, validation="lax", allow="local"
            )
    except xmlschema.XMLSchemaIncludeWarning as exc:
        raise SchemaLoadError(
            f"Cannot load included schema document of {location}: {exc}"
        ) from exc
    except ElementTree.ParseError as exc:
        raise SchemaLoadError(f"Failed to parse schema document {location}: {exc}") from exc
    except OSError as exc:
        raise SchemaLoadError(f"Cannot read schema document {location}: {exc}") from exc
    except (xmlschema.XMLSchemaException, ValueError) as exc:
        raise SchemaLoadError(f"Failed to parse schema document {location}: {exc}") from exc

    if schema.root.tag != _SCHEMA_TAG:
        raise SchemaLoadError(
            f"{location} is not an XML Schema document (root <{schema.root.tag}>)."
        )
    for error in schema.all_errors:
        LOGGER.warning("Schema %s: %s", location, error.message)

    builder = _DocumentBuilder(schema.maps)
    documents = [
        builder.build(loaded, _location_of(loaded, location))
        for loaded in _loaded_schemas(schema)
    ]
    LOGGER.debug("Loaded %d schema document(s) from %s", len(documents), location)
    return documents


def _loaded_schemas(schema: Any) -> list[Any]:
    """Return user documents: the main one, its includes, then its imports."""
    ordered: list[Any] = []
    seen: set[int] = set()
    pending = deque([schema])
    while pending:
        current = pending.popleft()
        if id(current) in seen or current.target_namespace in _META_NAMESPACES:
            continue
        seen.add(id(current))
        ordered.append(current)
        pending.extend(current.includes.values())
        pending.extend(imported for imported in current.imports.values() if imported)

    # redefined and overridden documents are not always listed as includes
    for loaded in schema.maps.iter_schemas():
        if id(loaded) not in seen and loaded.target_namespace not in _META_NAMESPACES:
            seen.add(id(loaded))
            ordered.append(loaded)
    return ordered


def _location_of(schema: Any, fallback: str) -> str:
    url = schema.url
    if not url:
        return fallback
    parts = urlsplit(url)
    if parts.scheme in ("", "file"):
        return unquote(parts.path)
    return url


def _qname(name: str) -> QName:
    """Split an xmlschema extended name (`{namespace}local`)."""
    if name.startswith("{"):
        namespace, _, local = name[1:].partition("}")
        return QName(namespace or None, local)
    return QName(None, name.rpartition(":")[2])


def _type_name(xsd_type: Any) -> QName | None:
    name = getattr(xsd_type, "name", None)
    return _qname(name) if name else None


def _is_reference(component: Any) -> bool:
    return component.elem.get("ref") is not None


class _DocumentBuilder:
    """Convert built xmlschema components into immutable declarations."""

    def __init__(self, maps: Any) -> None:
        self._maps = maps
        self._seen: set[int] = set()

    def build(self, schema: Any, location: str) -> SchemaDocument:
        namespace = schema.target_namespace or None
        elements: list[ElementDecl] = []
        types: list[TypeDecl] = []
        groups: list[GroupDecl] = []
        attribute_groups: list[AttributeGroupDecl] = []
        attributes: list[AttributeDecl] = []

        for child in schema.root:
            name = child.get("name")
            if name is None:
                continue
            key = f"{{{namespace}}}{name}" if namespace else name
            tag = child.tag
            if tag == _XS_PREFIX + "element":
                element = self._global(self._maps.elements, key)
                if element is not None:
                    elements.append(self._element(element))
            elif tag in (_XS_PREFIX + "complexType", _XS_PREFIX + "simpleType"):
                xsd_type = self._global(self._maps.types, key)
                if xsd_type is not None:
                    types.append(self._type(xsd_type))
            elif tag == _XS_PREFIX + "group":
                group = self._global(self._maps.groups, key)
                if group is not None:
                    groups.append(GroupDecl(name=name, particle=self._model_group(group)))
            elif tag == _XS_PREFIX + "attributeGroup":
                attribute_group = self._global(self._maps.attribute_groups, key)
                if attribute_group is not None:
                    attribute_groups.append(
                        AttributeGroupDecl(name=name, attributes=self._attributes(attribute_group))
                    )
            elif tag == _XS_PREFIX + "attribute":
                attribute = self._global(self._maps.attributes, key)
                if isinstance(attribute, XsdAttribute):
                    attributes.append(self._attribute(attribute))

        return SchemaDocument(
            location=location,
            target_namespace=namespace,
            elements=tuple(elements),
            types=tuple(types),
            groups=tuple(groups),
            attribute_groups=tuple(attribute_groups),
            attributes=tuple(attributes),
            includes=tuple(_location_of(included, "") for included in schema.includes.values()),
            imports=tuple(
                _location_of(imported, "") for imported in schema.imports.values() if imported
            ),
        )

    def _global(self, global_map: Any, key: str) -> Any:
        component = global_map.get(key)
        if component is None or isinstance(component, tuple) or id(component) in self._seen:
            return None
        self._seen.add(id(component))
        return component

    def _element(self, element: Any) -> ElementDecl:
        min_occurs = element.min_occurs
        max_occurs = element.max_occurs
        if _is_reference(element):
            ref = _qname(element.name or element.elem.get("ref"))
            return ElementDecl(
                name=None, ref=ref, min_occurs=min_occurs, max_occurs=max_occurs
            )

        element_type = element.type
        name = element.local_name
        type_name = _type_name(element_type)
        if type_name is not None:
            return ElementDecl(
                name=name, type_name=type_name, min_occurs=min_occurs, max_occurs=max_occurs
            )
        if isinstance(element_type, XsdComplexType):
            return ElementDecl(
                name=name,
                complex_type=self._complex_type(element_type),
                min_occurs=min_occurs,
                max_occurs=max_occurs,
            )
        return ElementDecl(
            name=name,
            simple_type=self._simple_type(element_type),
            min_occurs=min_occurs,
            max_occurs=max_occurs,
        )

    def _type(self, xsd_type: Any) -> TypeDecl:
        if isinstance(xsd_type, XsdComplexType):
            return self._complex_type(xsd_type)
        return self._simple_type(xsd_type)

    def _complex_type(self, complex_type: Any) -> ComplexTypeDecl:
        name = complex_type.local_name if complex_type.name else None
        base = complex_type.base_type
        base_name = _type_name(base)
        kind = DerivationKind(complex_type.derivation or DerivationKind.EXTENSION.value)

        if complex_type.has_simple_content():
            return ComplexTypeDecl(
                name=name,
                simple_content=SimpleContentDerivation(
                    kind=kind, base=base_name, attributes=self._own_attributes(complex_type)
                ),
            )
        particle = self._own_particle(complex_type)
        # a failed derivation (unknown or circular base) falls back to xs:anyType
        if base_name is None or base_name == _ANY_TYPE or not complex_type.derivation:
            return ComplexTypeDecl(
                name=name,
                attributes=self._attributes(complex_type.attributes),
                particle=particle,
            )
        base_type = None
        redefines_base = base is not complex_type and base_name == _type_name(complex_type)
        if redefines_base and isinstance(base, XsdComplexType):
            base_type = self._complex_type(base)
        return ComplexTypeDecl(
            name=name,
            complex_content=ComplexDerivation(
                kind=kind,
                base=base_name,
                base_type=base_type,
                particle=particle,
                attributes=self._own_attributes(complex_type),
            ),
        )

    def _own_particle(self, complex_type: Any) -> Particle | None:
        content = complex_type.content
        base_content = getattr(complex_type.base_type, "content", None)
        if not isinstance(content, XsdGroup) or content is base_content:
            return None
        # an extended content model is a sequence of the base content and the extension
        if base_content is not None and any(item is base_content for item in content):
            return self._model_group(content, skip=base_content)
        return self._particle(content)

    def _particle(self, item: Any) -> Particle | None:
        if isinstance(item, XsdElement):
            return self._element(item)
        if isinstance(item, XsdAnyElement):
            return Wildcard()
        if isinstance(item, XsdGroup):
            if _is_reference(item):
                return GroupRef(ref=_qname(item.name or item.elem.get("ref")))
            return self._model_group(item)
        return None

    def _model_group(self, group: Any, skip: Any = None) -> Sequence | All | Choice:
        items = []
        for item in group:
            if item is skip:
                continue
            particle = self._particle(item)
            if particle is not None:
                items.append(particle)
        if group.model == "choice":
            return Choice(items=tuple(items))
        if group.model == "all":
            return All(items=tuple(items))
        return Sequence(items=tuple(items))

    def _own_attributes(self, complex_type: Any) -> tuple[AttributeDecl, ...]:
        inherited = getattr(complex_type.base_type, "attributes", None) or {}
        return self._attributes(complex_type.attributes, exclude=frozenset(inherited))

    def _attributes(
        self, attribute_group: Any, exclude: frozenset[Any] = frozenset()
    ) -> tuple[AttributeDecl, ...]:
        return tuple(
            self._attribute(attribute)
            for key, attribute in attribute_group.items()
            if isinstance(attribute, XsdAttribute) and key not in exclude
        )

    def _attribute(self, attribute: Any) -> AttributeDecl:
        use = attribute.use
        if use not in {member.value for member in AttributeUse}:
            LOGGER.warning("Invalid use %r on attribute %s; treating as optional", use, attribute)
            use = AttributeUse.OPTIONAL.value

        attribute_type = attribute.type
        type_name = _type_name(attribute_type)
        simple_type = None
        if type_name is None and attribute_type is not None:
            simple_type = self._simple_type(attribute_type)
        return AttributeDecl(
            name=attribute.local_name,
            type_name=type_name,
            simple_type=simple_type,
            use=AttributeUse(use),
        )

    def _simple_type(self, simple_type: Any) -> SimpleTypeDecl:
        name = simple_type.local_name if simple_type.name else None
        if isinstance(simple_type, XsdList):
            return SimpleTypeDecl(name=name, variety="list")
        if isinstance(simple_type, XsdUnion):
            return SimpleTypeDecl(name=name, variety="union")

        base = getattr(simple_type, "base_type", None)
        base_name = _type_name(base)
        base_type = None
        if base is not None and base_name is None and base.is_simple():
            base_type = self._simple_type(base)
        enumerations = getattr(simple_type, "enumeration", None) or ()
        return SimpleTypeDecl(
            name=name,
            base=base_name,
            base_type=base_type,
            enumerations=tuple(str(value) for value in enumerations),
        )
