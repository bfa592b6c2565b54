"""Schema index entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

XSD_NAMESPACE = "http://www.w3.org/2001/XMLSchema"


@dataclass(frozen=True)
class QName:
    """Qualified name of a global declaration."""

    namespace: str | None
    local: str

    @property
    def is_builtin(self) -> bool:
        """Return True when the name lives in the XML Schema namespace."""
        return self.namespace == XSD_NAMESPACE

    def __str__(self) -> str:
        if self.namespace:
            return f"{{{self.namespace}}}{self.local}"
        return self.local


class DerivationKind(str, Enum):
    """How a complex type derives from its base."""

    EXTENSION = "extension"
    RESTRICTION = "restriction"


class AttributeUse(str, Enum):
    """Declared use of an attribute."""

    OPTIONAL = "optional"
    REQUIRED = "required"
    PROHIBITED = "prohibited"


@dataclass(frozen=True)
class SimpleTypeDecl:
    """Simple type declaration, global or inline."""

    name: str | None
    base: QName | None = None
    base_type: SimpleTypeDecl | None = None
    enumerations: tuple[str, ...] = ()
    variety: str = "atomic"


@dataclass(frozen=True)
class AttributeDecl:
    """Attribute declaration, with references already resolved."""

    name: str | None
    type_name: QName | None = None
    simple_type: SimpleTypeDecl | None = None
    use: AttributeUse = AttributeUse.OPTIONAL

    @property
    def is_required(self) -> bool:
        return self.use is AttributeUse.REQUIRED


@dataclass(frozen=True)
class AttributeGroupDecl:
    """Named attribute group, nested group references flattened."""

    name: str
    attributes: tuple[AttributeDecl, ...] = ()


@dataclass(frozen=True)
class Sequence:
    """Ordered content model."""

    items: tuple[Particle, ...] = ()


@dataclass(frozen=True)
class All:
    """Unordered content model."""

    items: tuple[Particle, ...] = ()


@dataclass(frozen=True)
class Choice:
    """Alternative content model."""

    items: tuple[Particle, ...] = ()


@dataclass(frozen=True)
class GroupRef:
    """Reference to a named model group."""

    ref: QName


@dataclass(frozen=True)
class Wildcard:
    """`xs:any` content item."""


@dataclass(frozen=True)
class ElementDecl:
    """Element declaration or element reference.

    `max_occurs` is None for `unbounded`.
    """

    name: str | None
    ref: QName | None = None
    type_name: QName | None = None
    complex_type: ComplexTypeDecl | None = None
    simple_type: SimpleTypeDecl | None = None
    min_occurs: int = 1
    max_occurs: int | None = 1

    @property
    def is_reference(self) -> bool:
        """Return True when the element only points to a global element."""
        return self.ref is not None

    @property
    def is_repeated(self) -> bool:
        return self.max_occurs is None or self.max_occurs > 1

    @property
    def is_optional(self) -> bool:
        return self.min_occurs == 0


Particle = ElementDecl | Sequence | All | Choice | GroupRef | Wildcard


@dataclass(frozen=True)
class GroupDecl:
    """Named model group."""

    name: str
    particle: Sequence | All | Choice | None = None


@dataclass(frozen=True)
class ComplexDerivation:
    """`complexContent` extension or restriction.

    `base_type` carries the original declaration when a redefinition derives from
    the type it replaces, since `base` then names the redefinition itself.
    """

    kind: DerivationKind
    base: QName | None
    base_type: ComplexTypeDecl | None = None
    particle: Particle | None = None
    attributes: tuple[AttributeDecl, ...] = ()


@dataclass(frozen=True)
class SimpleContentDerivation:
    """`simpleContent` extension or restriction."""

    kind: DerivationKind
    base: QName | None
    attributes: tuple[AttributeDecl, ...] = ()


@dataclass(frozen=True)
class ComplexTypeDecl:
    """Complex type declaration, global or inline."""

    name: str | None
    attributes: tuple[AttributeDecl, ...] = ()
    particle: Particle | None = None
    complex_content: ComplexDerivation | None = None
    simple_content: SimpleContentDerivation | None = None


TypeDecl = ComplexTypeDecl | SimpleTypeDecl


@dataclass(frozen=True)
class SchemaDocument:
    """Global declarations of one parsed schema document, in declaration order."""

    location: str
    target_namespace: str | None
    elements: tuple[ElementDecl, ...] = ()
    types: tuple[TypeDecl, ...] = ()
    groups: tuple[GroupDecl, ...] = ()
    attribute_groups: tuple[AttributeGroupDecl, ...] = ()
    attributes: tuple[AttributeDecl, ...] = ()
    includes: tuple[str, ...] = ()
    imports: tuple[str, ...] = ()
