"""
Entity class synthesis.

Turns every ``@entity`` object type of a schema into a class description:
a constructor taking the id, ``save()``/``load()`` store methods and a
typed getter/setter pair per field.
"""

from typing import List, Optional, Tuple

from ....logging_config import get_logger
from ...core.config import GeneratorConfig
from ...core.generator import ConfigurationError
from ...core.model import (
    ArrayType,
    Assert,
    BinaryOp,
    Call,
    Cast,
    ExpressionStatement,
    FieldGet,
    FieldSet,
    FieldUnset,
    Identifier,
    If,
    Klass,
    Let,
    MemberAccess,
    Method,
    ModuleImports,
    NonNullAssertion,
    Not,
    NullableType,
    NullLiteral,
    Param,
    Return,
    StringLiteral,
    SuperCall,
    named_type,
    nullable_type,
)
from ...core.schema import Document, FieldDefinition, ObjectTypeDefinition
from .types import AscTypeConfig, AscTypeMapper

logger = get_logger(__name__)

MODULE_IMPORTS = (
    # Base classes
    "TypedMap",
    "Entity",
    "Value",
    "ValueKind",
    # APIs
    "store",
    # Basic scalar types
    "Bytes",
    "BigInt",
    "BigDecimal",
)

VALUE = Identifier("value")
VALUE_KIND = Identifier("ValueKind")
STORE = Identifier("store")


def _call(target, method: str, *args) -> Call:
    return Call(MemberAccess(target, method), tuple(args))


class SchemaCodeGenerator:
    """Builds class descriptions for the entity types of a schema."""

    def __init__(
        self,
        document: Document,
        config: Optional[GeneratorConfig] = None,
        type_mapper: Optional[AscTypeMapper] = None,
    ):
        self.document = document
        self.config = config or GeneratorConfig()
        self.type_mapper = type_mapper or AscTypeMapper(
            AscTypeConfig.with_overrides(self.config.scalar_overrides)
        )

    def generate_module_imports(self) -> List[ModuleImports]:
        """The imports every generated module needs, independent of the schema."""
        return [ModuleImports(MODULE_IMPORTS, self.config.module_path)]

    def generate_types(self) -> List[Klass]:
        """One class per entity type, in declaration order."""
        return [
            self.generate_entity_type(definition)
            for definition in self.document.object_types()
            if self._is_entity_type_definition(definition)
        ]

    def _is_entity_type_definition(self, definition: ObjectTypeDefinition) -> bool:
        return definition.has_directive(self.config.entity_directive)

    def generate_entity_type(self, definition: ObjectTypeDefinition) -> Klass:
        name = definition.name
        logger.debug("Generating entity class %s", name)

        klass = Klass(name, extends=self.config.base_class, export=True)

        klass.add_method(self._generate_constructor(name))

        for method in self._generate_store_methods(name):
            klass.add_method(method)

        for field_def in definition.fields:
            for method in self._generate_entity_field_methods(definition, field_def):
                klass.add_method(method)

        return klass

    def _generate_constructor(self, entity_name: str) -> Method:
        return Method(
            "constructor",
            params=(Param("id", named_type("string")),),
            body=(
                SuperCall(),
                FieldSet(
                    "id", _call(Identifier("Value"), "fromString", Identifier("id"))
                ),
            ),
            kind="constructor",
        )

    def _generate_store_methods(self, entity_name: str) -> Tuple[Method, Method]:
        entity_id = Identifier("id")

        save = Method(
            "save",
            return_type=named_type("void"),
            body=(
                Let("id", FieldGet("id")),
                Assert(
                    BinaryOp("!=", entity_id, NullLiteral()),
                    f"Cannot save {entity_name} entity without an ID",
                ),
                If(
                    entity_id,
                    (
                        Assert(
                            BinaryOp(
                                "==",
                                MemberAccess(entity_id, "kind"),
                                MemberAccess(VALUE_KIND, "STRING"),
                            ),
                            f"Cannot save {entity_name} entity with non-string ID. "
                            'Considering using .toHex() to convert the "id" to a string.',
                        ),
                        ExpressionStatement(
                            _call(
                                STORE,
                                "set",
                                StringLiteral(entity_name),
                                _call(entity_id, "toString"),
                                Identifier("this"),
                            )
                        ),
                    ),
                ),
            ),
        )

        result_type = nullable_type(named_type(entity_name))
        load = Method(
            "load",
            params=(Param("id", named_type("string")),),
            return_type=result_type,
            body=(
                Return(
                    Cast(
                        _call(STORE, "get", StringLiteral(entity_name), entity_id),
                        result_type,
                        reinterpret=True,
                    )
                ),
            ),
            static=True,
        )

        return save, load

    def _generate_entity_field_methods(
        self, entity_def: ObjectTypeDefinition, field_def: FieldDefinition
    ) -> Tuple[Method, Method]:
        logger.debug(
            "Generating accessors for %s.%s (%s)",
            entity_def.name,
            field_def.name,
            field_def.type,
        )
        self._validate_field_type(field_def)
        return (
            self._generate_entity_field_getter(entity_def, field_def),
            self._generate_entity_field_setter(entity_def, field_def),
        )

    def _validate_field_type(self, field_def: FieldDefinition) -> None:
        """Reject lists whose members may be null."""
        value_type = self.type_mapper.value_type_from_graphql(field_def.type)
        field_type = self.type_mapper.type_from_graphql(field_def.type)

        # A nullable list is NullableType(ArrayType(...)) and is not checked here.
        if isinstance(field_type, ArrayType) and isinstance(
            field_type.inner, NullableType
        ):
            suggested_type = f"{value_type[:-1]}!]"
            raise ConfigurationError(
                "GraphQL schema can't have List's with Nullable members.\n"
                f"Error in '{field_def.name}' field of type '{value_type}'.\n"
                "Suggestion: add an '!' to the member type of the List, "
                f"change from '{value_type}' to '{suggested_type}'",
                field_name=field_def.name,
                value_type=value_type,
                suggested_type=suggested_type,
            )

    def _generate_entity_field_getter(
        self, entity_def: ObjectTypeDefinition, field_def: FieldDefinition
    ) -> Method:
        name = field_def.name
        value_type = self.type_mapper.value_type_from_graphql(field_def.type)
        return_type = self.type_mapper.type_from_graphql(field_def.type)

        if isinstance(return_type, NullableType):
            lookup = If(
                BinaryOp(
                    "||",
                    Not(VALUE),
                    BinaryOp(
                        "==",
                        MemberAccess(VALUE, "kind"),
                        MemberAccess(VALUE_KIND, "NULL"),
                    ),
                ),
                (Return(NullLiteral()),),
                (Return(self.type_mapper.value_to_asc(VALUE, value_type)),),
            )
        else:
            lookup = Return(
                self.type_mapper.value_to_asc(NonNullAssertion(VALUE), value_type)
            )

        return Method(
            name,
            return_type=return_type,
            body=(Let("value", FieldGet(name)), lookup),
            kind="getter",
        )

    def _generate_entity_field_setter(
        self, entity_def: ObjectTypeDefinition, field_def: FieldDefinition
    ) -> Method:
        name = field_def.name
        value_type = self.type_mapper.value_type_from_graphql(field_def.type)
        param_type = self.type_mapper.type_from_graphql(field_def.type)

        if isinstance(param_type, NullableType):
            boxed = self.type_mapper.value_from_asc(
                Cast(VALUE, param_type.inner), value_type
            )
            body = (If(Not(VALUE), (FieldUnset(name),), (FieldSet(name, boxed),)),)
        else:
            body = (FieldSet(name, self.type_mapper.value_from_asc(VALUE, value_type)),)

        return Method(
            name,
            params=(Param("value", param_type),),
            body=body,
            kind="setter",
        )
