"""
Tests for rendering the code model as AssemblyScript text.
"""
import pytest

from entity_codegen.codegen.core.model import (
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
    Let,
    MemberAccess,
    Method,
    ModuleImports,
    NonNullAssertion,
    Not,
    NullLiteral,
    Param,
    Return,
    StringLiteral,
    SuperCall,
    array_type,
    named_type,
    nullable_type,
)
from entity_codegen.codegen.languages.assemblyscript import AssemblyScriptRenderer
from entity_codegen.codegen.languages.assemblyscript.renderer import quote

VALUE = Identifier("value")


@pytest.fixture
def renderer():
    return AssemblyScriptRenderer()


class TestTypes:
    def test_type_descriptors(self):
        assert str(named_type("Bytes")) == "Bytes"
        assert str(array_type(named_type("string"))) == "Array<string>"
        assert str(nullable_type(array_type(named_type("i32")))) == "Array<i32> | null"
        assert (
            str(array_type(array_type(named_type("BigInt"))))
            == "Array<Array<BigInt>>"
        )


class TestExpressions:
    def test_quote_escapes(self):
        assert quote("plain") == "'plain'"
        assert quote("it's") == "'it\\'s'"
        assert quote("a\\b") == "'a\\\\b'"

    def test_quote_escapes_control_characters(self):
        assert quote("a\nb") == "'a\\nb'"
        assert quote("a\r\nb") == "'a\\r\\nb'"
        assert quote("a\tb") == "'a\\tb'"

    def test_entity_name_with_control_characters(self, renderer):
        expr = StringLiteral("Odd\tName\r")
        assert renderer.render_expression(expr) == "'Odd\\tName\\r'"

    @pytest.mark.parametrize(
        "expr,expected",
        [
            (Identifier("id"), "id"),
            (StringLiteral("Token"), "'Token'"),
            (NullLiteral(), "null"),
            (FieldGet("owner"), "this.get('owner')"),
            (Call(MemberAccess(VALUE, "toBytes")), "value.toBytes()"),
            (
                Call(MemberAccess(NonNullAssertion(VALUE), "toString")),
                "value!.toString()",
            ),
            (
                Call(
                    MemberAccess(Identifier("Value"), "fromBytes"),
                    (Cast(VALUE, named_type("Bytes")),),
                ),
                "Value.fromBytes(<Bytes>value)",
            ),
            (
                Cast(
                    Call(
                        MemberAccess(Identifier("store"), "get"),
                        (StringLiteral("Token"), Identifier("id")),
                    ),
                    nullable_type(named_type("Token")),
                    reinterpret=True,
                ),
                "changetype<Token | null>(store.get('Token', id))",
            ),
            (Not(VALUE), "!value"),
            (
                BinaryOp(
                    "||",
                    Not(VALUE),
                    BinaryOp(
                        "==",
                        MemberAccess(VALUE, "kind"),
                        MemberAccess(Identifier("ValueKind"), "NULL"),
                    ),
                ),
                "!value || value.kind == ValueKind.NULL",
            ),
        ],
    )
    def test_render_expression(self, renderer, expr, expected):
        assert renderer.render_expression(expr) == expected

    def test_lower_precedence_operand_is_parenthesized(self, renderer):
        expr = BinaryOp(
            "&&", BinaryOp("||", Identifier("a"), Identifier("b")), Identifier("c")
        )
        assert renderer.render_expression(expr) == "(a || b) && c"

    def test_member_of_cast_is_parenthesized(self, renderer):
        expr = MemberAccess(Cast(VALUE, named_type("Bytes")), "length")
        assert renderer.render_expression(expr) == "(<Bytes>value).length"

    def test_unknown_expression(self, renderer):
        with pytest.raises(TypeError):
            renderer.render_expression(object())


class TestStatements:
    def test_simple_statements(self, renderer):
        assert renderer.render_statement(Let("value", FieldGet("id"))) == [
            "let value = this.get('id')"
        ]
        assert renderer.render_statement(Return()) == ["return"]
        assert renderer.render_statement(Return(NullLiteral())) == ["return null"]
        assert renderer.render_statement(FieldUnset("owner")) == [
            "this.unset('owner')"
        ]
        assert renderer.render_statement(SuperCall()) == ["super()"]
        assert renderer.render_statement(
            ExpressionStatement(Call(Identifier("log")))
        ) == ["log()"]

    def test_assert_quotes_message(self, renderer):
        stmt = Assert(
            BinaryOp("!=", Identifier("id"), NullLiteral()),
            "Cannot save Token entity without an ID",
        )
        assert renderer.render_statement(stmt) == [
            "assert(id != null, 'Cannot save Token entity without an ID')"
        ]

    def test_field_set(self, renderer):
        stmt = FieldSet(
            "id",
            Call(MemberAccess(Identifier("Value"), "fromString"), (Identifier("id"),)),
        )
        assert renderer.render_statement(stmt) == [
            "this.set('id', Value.fromString(id))"
        ]

    def test_if_else(self, renderer):
        stmt = If(Not(VALUE), (FieldUnset("owner"),), (Return(VALUE),))
        assert renderer.render_statement(stmt) == [
            "if (!value) {",
            "  this.unset('owner')",
            "} else {",
            "  return value",
            "}",
        ]

    def test_if_without_else(self, renderer):
        stmt = If(Identifier("id"), (Return(),))
        assert renderer.render_statement(stmt) == ["if (id) {", "  return", "}"]

    def test_nested_blocks_use_indent_size(self):
        renderer = AssemblyScriptRenderer(indent_size=4)
        stmt = If(Identifier("a"), (If(Identifier("b"), (Return(),)),))
        assert renderer.render_statement(stmt) == [
            "if (a) {",
            "    if (b) {",
            "        return",
            "    }",
            "}",
        ]


class TestMethods:
    def test_constructor(self, renderer):
        method = Method(
            "constructor",
            params=(Param("id", named_type("string")),),
            body=(SuperCall(),),
            kind="constructor",
        )
        assert renderer.render_method(method) == (
            "constructor(id: string) {\n  super()\n}"
        )

    def test_getter(self, renderer):
        method = Method(
            "owner",
            return_type=nullable_type(named_type("Bytes")),
            body=(Return(NullLiteral()),),
            kind="getter",
        )
        assert renderer.render_method_signature(method) == "get owner(): Bytes | null"

    def test_setter(self, renderer):
        method = Method(
            "owner",
            params=(Param("value", nullable_type(named_type("Bytes"))),),
            kind="setter",
        )
        assert renderer.render_method_signature(method) == (
            "set owner(value: Bytes | null)"
        )

    def test_static_method(self, renderer):
        method = Method(
            "load",
            params=(Param("id", named_type("string")),),
            return_type=nullable_type(named_type("Token")),
            static=True,
        )
        assert renderer.render_method_signature(method) == (
            "static load(id: string): Token | null"
        )

    def test_empty_body(self, renderer):
        method = Method("save", return_type=named_type("void"))
        assert renderer.render_method(method) == "save(): void {\n}"


class TestImports:
    def test_multiple_names(self, renderer):
        imports = ModuleImports(("Entity", "Value"), "@graphprotocol/graph-ts")
        assert renderer.render_imports(imports) == (
            "import {\n  Entity,\n  Value,\n} from '@graphprotocol/graph-ts'"
        )

    def test_single_name(self, renderer):
        imports = ModuleImports(("store",), "@graphprotocol/graph-ts")
        assert renderer.render_imports(imports) == (
            "import { store } from '@graphprotocol/graph-ts'"
        )
