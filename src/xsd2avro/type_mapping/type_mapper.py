"""Type mapping service: XSD declarations to Avro fields."""

from __future__ import annotations

import logging

from xsd2avro.schema_index import QName, SchemaIndex
from xsd2avro.schema_index.schema_models import (
    AttributeDecl,
    AttributeUse,
    Choice,
    ComplexDerivation,
    ComplexTypeDecl,
    ElementDecl,
    GroupRef,
    Particle,
    SimpleContentDerivation,
    SimpleTypeDecl,
    Wildcard,
)

from .avro_types import (
    STRING,
    ArrayType,
    AvroType,
    Field,
    NullableType,
    PrimitiveType,
    RecordType,
    unwrap_nullable,
)
from .primitive_mapping import builtin_primitive, enum_type

LOGGER = logging.getLogger(__name__)

DEFAULT_FIELD_NAME = "field"
DEFAULT_ATTRIBUTE_NAME = "attr"
DEFAULT_RECORD_NAME = "Record"
VALUE_FIELD_NAME = "value"
CHOICE_FIELD_NAME = "choice"
ANY_FIELD_NAME = "any"

# Visited-set keys. Complex types use their bare local name; the other kinds are
# prefixed. XSD local names are NCNames and never contain a colon.
_GROUP_KEY = "group:"
_SIMPLE_TYPE_KEY = "simpleType:"


class TypeMapper:
    """Convert element declarations into Avro fields by walking the XSD type graph.

    Every recursive call receives the set of names currently being expanded on its
    path. Sets are immutable and extended per branch, so sibling references to the
    same type expand independently while a re-entry along one path is cut short.
    """

    def __init__(self, index: SchemaIndex, *, nullable_attributes: bool = False) -> None:
        self._index = index
        self._nullable_attributes = nullable_attributes

    def map_element(self, element: ElementDecl, visited: frozenset[str] = frozenset()) -> Field:
        """Map one element declaration to a field with cardinality applied."""
        name = element.name or (element.ref.local if element.ref is not None else None)
        name = name or DEFAULT_FIELD_NAME

        target = element
        if element.ref is not None:
            resolved = self._index.resolve_element(element.ref)
            if resolved is None:
                LOGGER.warning("Unresolved element reference %s; mapping as string", element.ref)
                return Field(name=name, type=_apply_occurs(element, STRING))
            target = resolved

        base = self._element_base_type(target, name, visited)
        return Field(name=name, type=_apply_occurs(element, base))

    def map_complex_type(
        self,
        complex_type: ComplexTypeDecl,
        preferred_name: str | None,
        visited: frozenset[str] = frozenset(),
    ) -> RecordType:
        """Expand a complex type into a record, or a placeholder on re-entry."""
        name = complex_type.name or preferred_name or DEFAULT_RECORD_NAME
        if name in visited:
            LOGGER.debug("Type %s is already being expanded; emitting empty record", name)
            return RecordType(name=name)
        fields = self._harvest_fields(complex_type, visited | {name})
        return RecordType(name=name, fields=tuple(fields))

    def _element_base_type(
        self, element: ElementDecl, preferred_name: str, visited: frozenset[str]
    ) -> AvroType:
        if element.complex_type is not None:
            return self.map_complex_type(element.complex_type, preferred_name, visited)
        if element.simple_type is not None:
            return self._map_simple_type(element.simple_type, preferred_name, visited)
        if element.type_name is not None:
            return self._map_named_type(element.type_name, preferred_name, visited)
        return STRING

    def _map_named_type(
        self, qname: QName, preferred_name: str, visited: frozenset[str]
    ) -> AvroType:
        if qname.is_builtin:
            return builtin_primitive(qname.local)
        resolved = self._index.resolve_type(qname)
        if isinstance(resolved, ComplexTypeDecl):
            return self.map_complex_type(resolved, preferred_name, visited)
        if isinstance(resolved, SimpleTypeDecl):
            return self._map_simple_type(resolved, preferred_name, visited)
        LOGGER.warning("Unresolved type %s; mapping as string", qname)
        return STRING

    def _map_simple_type(
        self, simple_type: SimpleTypeDecl, preferred_name: str, visited: frozenset[str]
    ) -> AvroType:
        if simple_type.enumerations:
            return enum_type(simple_type.name or preferred_name, simple_type.enumerations)
        return self._simple_base_primitive(simple_type, visited)

    def _simple_base_primitive(
        self, simple_type: SimpleTypeDecl, visited: frozenset[str]
    ) -> PrimitiveType:
        if simple_type.variety != "atomic":
            return STRING
        if simple_type.base_type is not None:
            return self._simple_base_primitive(simple_type.base_type, visited)
        if simple_type.base is None:
            return STRING
        return self._primitive_of(simple_type.base, visited)

    def _primitive_of(self, qname: QName, visited: frozenset[str]) -> PrimitiveType:
        """Follow a chain of simple type restrictions down to a built-in type."""
        if qname.is_builtin:
            return builtin_primitive(qname.local)
        key = _SIMPLE_TYPE_KEY + qname.local
        if key in visited:
            return STRING
        resolved = self._index.resolve_type(qname)
        if isinstance(resolved, SimpleTypeDecl):
            return self._simple_base_primitive(resolved, visited | {key})
        LOGGER.warning("Unresolved simple type %s; mapping as string", qname)
        return STRING

    def _harvest_fields(
        self, complex_type: ComplexTypeDecl, visited: frozenset[str]
    ) -> list[Field]:
        fields = self._attribute_fields(complex_type.attributes, visited)
        if complex_type.simple_content is not None:
            fields.extend(self._simple_content_fields(complex_type.simple_content, visited))
        elif complex_type.complex_content is not None:
            fields.extend(self._derived_fields(complex_type.complex_content, visited))
        else:
            fields.extend(self._particle_fields(complex_type.particle, visited))
        return fields

    def _derived_fields(
        self, derivation: ComplexDerivation, visited: frozenset[str]
    ) -> list[Field]:
        # Restrictions are treated as additive, like extensions.
        if derivation.base_type is not None:
            fields = self._harvest_fields(derivation.base_type, visited)
        else:
            fields = self._base_fields(derivation.base, visited)
        fields.extend(self._particle_fields(derivation.particle, visited))
        fields.extend(self._attribute_fields(derivation.attributes, visited))
        return fields

    def _base_fields(self, base: QName | None, visited: frozenset[str]) -> list[Field]:
        if base is None or base.is_builtin:
            return []
        resolved = self._index.resolve_type(base)
        if not isinstance(resolved, ComplexTypeDecl):
            if resolved is None:
                LOGGER.warning("Unresolved base type %s; no inherited fields", base)
            return []
        name = resolved.name or base.local
        if name in visited:
            LOGGER.debug("Base type %s is already being expanded; skipping", name)
            return []
        return self._harvest_fields(resolved, visited | {name})

    def _simple_content_fields(
        self, derivation: SimpleContentDerivation, visited: frozenset[str]
    ) -> list[Field]:
        base = derivation.base
        resolved = None if base is None or base.is_builtin else self._index.resolve_type(base)
        if isinstance(resolved, ComplexTypeDecl):
            fields = self._base_fields(base, visited)
        else:
            value_type = self._primitive_of(base, visited) if base is not None else STRING
            fields = [Field(name=VALUE_FIELD_NAME, type=value_type)]
        fields.extend(self._attribute_fields(derivation.attributes, visited))
        return fields

    def _particle_fields(self, particle: Particle | None, visited: frozenset[str]) -> list[Field]:
        if particle is None:
            return []
        if isinstance(particle, ElementDecl):
            return [self.map_element(particle, visited)]
        if isinstance(particle, Choice):
            # branches are not modeled individually
            return [Field(name=CHOICE_FIELD_NAME, type=STRING)]
        if isinstance(particle, Wildcard):
            return [Field(name=ANY_FIELD_NAME, type=STRING)]
        if isinstance(particle, GroupRef):
            return self._group_fields(particle.ref, visited)
        fields: list[Field] = []
        for item in particle.items:
            fields.extend(self._particle_fields(item, visited))
        return fields

    def _group_fields(self, ref: QName, visited: frozenset[str]) -> list[Field]:
        key = _GROUP_KEY + ref.local
        if key in visited:
            LOGGER.debug("Group %s is already being expanded; skipping", ref)
            return []
        group = self._index.resolve_group(ref)
        if group is None:
            LOGGER.warning("Unresolved group %s; no fields contributed", ref)
            return []
        return self._particle_fields(group.particle, visited | {key})

    def _attribute_fields(
        self, attributes: tuple[AttributeDecl, ...], visited: frozenset[str]
    ) -> list[Field]:
        fields: list[Field] = []
        for attribute in attributes:
            field = self._attribute_field(attribute, visited)
            if field is not None:
                fields.append(field)
        return fields

    def _attribute_field(
        self, attribute: AttributeDecl, visited: frozenset[str]
    ) -> Field | None:
        if attribute.use is AttributeUse.PROHIBITED:
            return None
        name = attribute.name or DEFAULT_ATTRIBUTE_NAME

        attribute_type: AvroType = STRING
        if attribute.simple_type is not None:
            attribute_type = self._map_simple_type(attribute.simple_type, name, visited)
        elif attribute.type_name is not None:
            attribute_type = self._map_named_type(attribute.type_name, name, visited)

        if not attribute.is_required or self._nullable_attributes:
            attribute_type = NullableType(attribute_type)
        return Field(name=name, type=attribute_type)


def _apply_occurs(element: ElementDecl, base: AvroType) -> AvroType:
    result = base
    if element.is_repeated:
        result = ArrayType(items=unwrap_nullable(result))
    if element.is_optional:
        result = NullableType(inner=result)
    return result
