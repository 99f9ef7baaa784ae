"""
AssemblyScript type system for entity code generation.

Maps GraphQL type references onto two things:

* a *value type* string (``Bytes``, ``[String]``) naming how the field is
  boxed in the store, with non-null wrappers stripped;
* a target type descriptor for the accessor, where nullability is
  structural and primitives are never nullable.

It also knows how to box and unbox a value for a given value type.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional

from ...core.generator import GeneratorError
from ...core.model import (
    Call,
    Expression,
    Identifier,
    MemberAccess,
    TypeDesc,
    array_type,
    named_type,
    nullable_type,
)
from ...core.schema import ListType, NonNullType, TypeReference

# GraphQL scalar -> AssemblyScript type
DEFAULT_SCALAR_TYPES: Dict[str, str] = {
    "Bytes": "Bytes",
    "Boolean": "boolean",
    "Int": "i32",
    "BigInt": "BigInt",
    "BigDecimal": "BigDecimal",
    "ID": "string",
    "String": "string",
}

# AssemblyScript type -> suffix of the Value conversion methods
# (value.toI32() / Value.fromI32(...), value.toI32Array() / ...)
CONVERSION_SUFFIXES: Dict[str, str] = {
    "string": "String",
    "Bytes": "Bytes",
    "boolean": "Boolean",
    "i32": "I32",
    "i64": "I64",
    "f64": "F64",
    "BigInt": "BigInt",
    "BigDecimal": "BigDecimal",
}


@dataclass
class AscTypeConfig:
    """Configuration for GraphQL -> AssemblyScript type mapping."""

    scalar_types: Dict[str, str] = field(
        default_factory=lambda: dict(DEFAULT_SCALAR_TYPES)
    )

    # Type used for names outside the scalar table (entity references, enums).
    # They are stored as their string id or value.
    reference_type: str = "string"

    @classmethod
    def with_overrides(cls, overrides: Optional[Dict[str, str]]) -> "AscTypeConfig":
        """Default table plus configured overrides."""
        config = cls()
        if overrides:
            config.scalar_types.update(overrides)
        return config


def split_value_type(value_type: str) -> tuple[int, str]:
    """Split ``[[Int]]`` into list depth ``2`` and element name ``Int``."""
    depth = 0
    while (
        len(value_type) > 2 * depth
        and value_type[depth] == "["
        and value_type[-1 - depth] == "]"
    ):
        depth += 1
    return depth, value_type[depth : len(value_type) - depth]


class AscTypeMapper:
    """
    Maps GraphQL type references to value types and AssemblyScript types.

    Every result depends only on the reference passed in and the scalar
    table fixed at construction.
    """

    def __init__(self, config: Optional[AscTypeConfig] = None):
        """Initialize with type configuration."""
        self.config = config or AscTypeConfig()

    # Type references

    def value_type_from_graphql(self, type_ref: TypeReference) -> str:
        """
        Value type used to box/unbox a field in the store.

        ``T!`` maps like ``T``; ``[T]`` maps to ``"[" + value_type(T) + "]"``.
        """
        if isinstance(type_ref, NonNullType):
            return self.value_type_from_graphql(type_ref.type)
        elif isinstance(type_ref, ListType):
            return "[" + self.value_type_from_graphql(type_ref.type) + "]"
        else:
            return type_ref.name

    def type_from_graphql(
        self, type_ref: TypeReference, nullable: bool = True
    ) -> TypeDesc:
        """
        Accessor type for a GraphQL type reference.

        Everything is nullable unless wrapped in ``!``. Lists are arrays of
        their mapped element type. Named types are never made nullable when
        they translate to a primitive, which has no null state.
        """
        if isinstance(type_ref, NonNullType):
            return self.type_from_graphql(type_ref.type, False)
        elif isinstance(type_ref, ListType):
            type_desc = array_type(self.type_from_graphql(type_ref.type))
            return nullable_type(type_desc) if nullable else type_desc
        else:
            type_desc = named_type(self.asc_type_for_value(type_ref.name))
            if nullable and not type_desc.is_primitive():
                return nullable_type(type_desc)
            return type_desc

    def asc_type_for_value(self, name: str) -> str:
        """Translate a GraphQL type name to its AssemblyScript type."""
        return self.config.scalar_types.get(name, self.config.reference_type)

    # Boxing

    def _conversion_suffix(self, value_type: str) -> str:
        """
        Suffix of the Value conversion methods for a value type.

        Scalars use ``toX``/``fromX`` and lists of scalars ``toXArray``/
        ``fromXArray``. The store has no typed conversion for lists of lists.
        """
        depth, name = split_value_type(value_type)
        if depth > 1:
            raise GeneratorError(f"No store conversion for value type '{value_type}'")
        asc_type = self.asc_type_for_value(name)
        suffix = CONVERSION_SUFFIXES.get(asc_type)
        if suffix is None:
            raise GeneratorError(
                f"No store conversion for type '{asc_type}' (value type '{value_type}')"
            )
        return suffix + ("Array" if depth else "")

    def value_to_asc(self, expr: Expression, value_type: str) -> Expression:
        """Unbox ``expr`` (a store Value) into the AssemblyScript type."""
        suffix = self._conversion_suffix(value_type)
        return Call(MemberAccess(expr, f"to{suffix}"))

    def value_from_asc(self, expr: Expression, value_type: str) -> Expression:
        """Box an AssemblyScript value into a store Value."""
        suffix = self._conversion_suffix(value_type)
        return Call(MemberAccess(Identifier("Value"), f"from{suffix}"), (expr,))
