"""
Language-neutral code model.

Generators describe classes, methods and method bodies with these nodes;
a renderer turns them into source text. Everything here is immutable so
generated fragments can be compared structurally in tests.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

# Primitive types of the storage layer. They have no null state.
PRIMITIVE_TYPES = frozenset(
    {
        "boolean",
        "u8",
        "i8",
        "u16",
        "i16",
        "u32",
        "i32",
        "u64",
        "i64",
        "f32",
        "f64",
        "usize",
        "isize",
    }
)


# Type descriptors


@dataclass(frozen=True)
class NamedTypeDesc:
    """A plain named target type, e.g. ``string`` or ``Bytes``."""

    name: str

    def is_primitive(self) -> bool:
        return self.name in PRIMITIVE_TYPES

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class ArrayType:
    """An array of another target type."""

    inner: "TypeDesc"

    def __str__(self) -> str:
        return f"Array<{self.inner}>"


@dataclass(frozen=True)
class NullableType:
    """A target type that also admits null."""

    inner: "TypeDesc"

    def __str__(self) -> str:
        return f"{self.inner} | null"


TypeDesc = Union[NamedTypeDesc, ArrayType, NullableType]


def named_type(name: str) -> NamedTypeDesc:
    return NamedTypeDesc(name)


def array_type(inner: TypeDesc) -> ArrayType:
    return ArrayType(inner)


def nullable_type(inner: TypeDesc) -> NullableType:
    return NullableType(inner)


# Expressions


@dataclass(frozen=True)
class Identifier:
    name: str


@dataclass(frozen=True)
class StringLiteral:
    value: str


@dataclass(frozen=True)
class NullLiteral:
    pass


@dataclass(frozen=True)
class MemberAccess:
    """``target.member``"""

    target: "Expression"
    member: str


@dataclass(frozen=True)
class Call:
    callee: "Expression"
    args: Tuple["Expression", ...] = ()


@dataclass(frozen=True)
class NonNullAssertion:
    """Asserts to the compiler that an expression is not null (``value!``)."""

    expr: "Expression"


@dataclass(frozen=True)
class Cast:
    """
    Convert an expression to another static type.

    ``reinterpret`` casts change the type of a reference without a runtime
    check; plain casts narrow a nullable value to its inner type.
    """

    expr: "Expression"
    type: TypeDesc
    reinterpret: bool = False


@dataclass(frozen=True)
class BinaryOp:
    op: str
    left: "Expression"
    right: "Expression"


@dataclass(frozen=True)
class Not:
    expr: "Expression"


@dataclass(frozen=True)
class FieldGet:
    """Read a boxed value from the record by field name."""

    name: str


Expression = Union[
    Identifier,
    StringLiteral,
    NullLiteral,
    MemberAccess,
    Call,
    NonNullAssertion,
    Cast,
    BinaryOp,
    Not,
    FieldGet,
]


# Statements


@dataclass(frozen=True)
class Let:
    name: str
    value: Expression


@dataclass(frozen=True)
class Return:
    value: Optional[Expression] = None


@dataclass(frozen=True)
class ExpressionStatement:
    expr: Expression


@dataclass(frozen=True)
class Assert:
    condition: Expression
    message: str


@dataclass(frozen=True)
class If:
    condition: Expression
    then: Tuple["Statement", ...]
    otherwise: Tuple["Statement", ...] = ()


@dataclass(frozen=True)
class FieldSet:
    """Store a boxed value in the record under a field name."""

    name: str
    value: Expression


@dataclass(frozen=True)
class FieldUnset:
    """Remove a field from the record."""

    name: str


@dataclass(frozen=True)
class SuperCall:
    args: Tuple[Expression, ...] = ()


Statement = Union[
    Let, Return, ExpressionStatement, Assert, If, FieldSet, FieldUnset, SuperCall
]


# Declarations


@dataclass(frozen=True)
class Param:
    name: str
    type: TypeDesc


@dataclass(frozen=True)
class Method:
    """
    A method description.

    ``kind`` is ``"method"`` for ordinary methods, ``"getter"``/``"setter"``
    for property accessors and ``"constructor"`` for the constructor.
    """

    name: str
    params: Tuple[Param, ...] = ()
    return_type: Optional[TypeDesc] = None
    body: Tuple[Statement, ...] = ()
    kind: str = "method"
    static: bool = False


@dataclass
class Klass:
    """A class description with an ordered list of methods."""

    name: str
    extends: Optional[str] = None
    export: bool = True
    methods: List[Method] = field(default_factory=list)

    def add_method(self, method: Method) -> None:
        self.methods.append(method)

    def get_method(self, name: str, kind: Optional[str] = None) -> Optional[Method]:
        """Get the first method with this name (and kind, if given)."""
        for method in self.methods:
            if method.name == name and (kind is None or method.kind == kind):
                return method
        return None


@dataclass(frozen=True)
class ModuleImports:
    """Names imported from one module."""

    names: Tuple[str, ...]
    module: str
