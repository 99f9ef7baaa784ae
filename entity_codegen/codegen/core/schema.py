"""
Core schema representation for code generation.

Converts a GraphQL schema AST (the JSON shape produced by graphql-js
``parse()``) into typed nodes that generators can work with consistently.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union


class SchemaError(ValueError):
    """Raised when the schema AST does not have the expected shape."""

    pass


# Type references


@dataclass(frozen=True)
class NamedType:
    """A reference to a scalar, enum or object type by name (``T``)."""

    name: str

    kind = "NamedType"

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class NonNullType:
    """A non-null wrapper around another type reference (``T!``)."""

    type: "TypeReference"

    kind = "NonNullType"

    def __str__(self) -> str:
        return f"{self.type}!"


@dataclass(frozen=True)
class ListType:
    """A list of another type reference (``[T]``)."""

    type: "TypeReference"

    kind = "ListType"

    def __str__(self) -> str:
        return f"[{self.type}]"


TypeReference = Union[NamedType, NonNullType, ListType]


# Definitions


@dataclass(frozen=True)
class Directive:
    """A directive attached to a definition, e.g. ``@entity``."""

    name: str


@dataclass(frozen=True)
class FieldDefinition:
    """A single field of an object type."""

    name: str
    type: TypeReference


@dataclass(frozen=True)
class ObjectTypeDefinition:
    """An object type (``type Token @entity { ... }``)."""

    name: str
    fields: List[FieldDefinition] = field(default_factory=list)
    directives: List[Directive] = field(default_factory=list)

    kind = "ObjectTypeDefinition"

    def has_directive(self, name: str) -> bool:
        """Check whether a directive with this name is attached."""
        return any(directive.name == name for directive in self.directives)

    def get_field(self, name: str) -> Optional[FieldDefinition]:
        """Get field by name."""
        for field_def in self.fields:
            if field_def.name == name:
                return field_def
        return None


@dataclass(frozen=True)
class OtherDefinition:
    """Any top-level definition that is not an object type (enum, scalar, ...)."""

    kind: str
    name: Optional[str] = None


Definition = Union[ObjectTypeDefinition, OtherDefinition]


@dataclass(frozen=True)
class Document:
    """The root of a schema AST."""

    definitions: List[Definition] = field(default_factory=list)

    def object_types(self) -> List[ObjectTypeDefinition]:
        """All object type definitions, in declaration order."""
        return [d for d in self.definitions if isinstance(d, ObjectTypeDefinition)]


# Conversion from the graphql-js JSON AST


def _name_of(node: Dict[str, Any], context: str) -> str:
    name = node.get("name")
    if isinstance(name, dict):
        name = name.get("value")
    if not isinstance(name, str) or not name:
        raise SchemaError(f"Missing name in {context}")
    return name


def convert_type_reference(node: Dict[str, Any]) -> TypeReference:
    """
    Convert a type reference node recursively.

    Args:
        node: Dict with ``kind`` of NamedType, NonNullType or ListType

    Returns:
        TypeReference

    Raises:
        SchemaError: For unknown kinds or missing keys
    """
    if not isinstance(node, dict):
        raise SchemaError(f"Expected a type reference node, got {node!r}")

    kind = node.get("kind")
    if kind == "NamedType":
        return NamedType(_name_of(node, "NamedType"))
    elif kind in ("NonNullType", "ListType"):
        if "type" not in node:
            raise SchemaError(f"{kind} node has no inner type")
        inner = convert_type_reference(node["type"])
        return NonNullType(inner) if kind == "NonNullType" else ListType(inner)
    else:
        raise SchemaError(f"Unsupported type reference kind: {kind!r}")


def convert_field_definition(node: Dict[str, Any]) -> FieldDefinition:
    """Convert a FieldDefinition node."""
    name = _name_of(node, "FieldDefinition")
    if "type" not in node:
        raise SchemaError(f"Field '{name}' has no type")
    return FieldDefinition(name=name, type=convert_type_reference(node["type"]))


def convert_definition(node: Dict[str, Any]) -> Definition:
    """Convert a top-level definition; non-object kinds are kept opaque."""
    if not isinstance(node, dict) or "kind" not in node:
        raise SchemaError(f"Expected a definition node, got {node!r}")

    kind = node["kind"]
    if kind != "ObjectTypeDefinition":
        name = node.get("name")
        if isinstance(name, dict):
            name = name.get("value")
        return OtherDefinition(kind=kind, name=name)

    name = _name_of(node, "ObjectTypeDefinition")
    fields = [convert_field_definition(f) for f in node.get("fields") or []]
    directives = [
        Directive(_name_of(d, f"directive on '{name}'"))
        for d in node.get("directives") or []
    ]
    return ObjectTypeDefinition(name=name, fields=fields, directives=directives)


def load_document(data: Dict[str, Any]) -> Document:
    """
    Convert a graphql-js schema AST into a Document.

    Args:
        data: Parsed JSON of the AST, ``{"kind": "Document", "definitions": [...]}``

    Returns:
        Document with typed definitions in declaration order
    """
    if not isinstance(data, dict):
        raise SchemaError("Schema AST must be a JSON object")

    if data.get("kind", "Document") != "Document":
        raise SchemaError(f"Expected a Document node, got {data.get('kind')!r}")

    definitions = data.get("definitions")
    if not isinstance(definitions, list):
        raise SchemaError("Document has no 'definitions' list")

    return Document(definitions=[convert_definition(d) for d in definitions])
