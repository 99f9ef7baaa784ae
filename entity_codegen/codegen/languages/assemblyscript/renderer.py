"""
Serializes the code model into AssemblyScript source text.
"""

from typing import List

from ...core.model import (
    Assert,
    BinaryOp,
    Call,
    Cast,
    Expression,
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
    Statement,
    StringLiteral,
    SuperCall,
)

# Higher binds tighter
BINARY_PRECEDENCE = {
    "||": 1,
    "&&": 2,
    "==": 3,
    "!=": 3,
    "===": 3,
    "!==": 3,
    "<": 4,
    "<=": 4,
    ">": 4,
    ">=": 4,
    "+": 5,
    "-": 5,
    "*": 6,
    "/": 6,
}


STRING_ESCAPES = str.maketrans(
    {
        "\\": "\\\\",
        "'": "\\'",
        "\n": "\\n",
        "\r": "\\r",
        "\t": "\\t",
    }
)


def quote(value: str) -> str:
    """Single-quoted string literal."""
    return f"'{value.translate(STRING_ESCAPES)}'"


class AssemblyScriptRenderer:
    """Renders expressions, statements and methods as AssemblyScript."""

    def __init__(self, indent_size: int = 2):
        self.indent = " " * indent_size

    # Expressions

    def render_expression(self, expr: Expression) -> str:
        if isinstance(expr, Identifier):
            return expr.name
        elif isinstance(expr, StringLiteral):
            return quote(expr.value)
        elif isinstance(expr, NullLiteral):
            return "null"
        elif isinstance(expr, FieldGet):
            return f"this.get({quote(expr.name)})"
        elif isinstance(expr, MemberAccess):
            return f"{self._operand(expr.target)}.{expr.member}"
        elif isinstance(expr, Call):
            args = ", ".join(self.render_expression(arg) for arg in expr.args)
            return f"{self._operand(expr.callee)}({args})"
        elif isinstance(expr, NonNullAssertion):
            return f"{self._operand(expr.expr)}!"
        elif isinstance(expr, Cast):
            if expr.reinterpret:
                return f"changetype<{expr.type}>({self.render_expression(expr.expr)})"
            return f"<{expr.type}>{self._operand(expr.expr)}"
        elif isinstance(expr, Not):
            return f"!{self._operand(expr.expr)}"
        elif isinstance(expr, BinaryOp):
            precedence = BINARY_PRECEDENCE.get(expr.op, 0)
            left = self._binary_operand(expr.left, precedence)
            right = self._binary_operand(expr.right, precedence)
            return f"{left} {expr.op} {right}"
        raise TypeError(f"Cannot render expression {expr!r}")

    def _operand(self, expr: Expression) -> str:
        """Render an operand of a unary/postfix/member expression."""
        rendered = self.render_expression(expr)
        if isinstance(expr, (BinaryOp, Cast, Not)) and not (
            isinstance(expr, Cast) and expr.reinterpret
        ):
            return f"({rendered})"
        return rendered

    def _binary_operand(self, expr: Expression, parent_precedence: int) -> str:
        rendered = self.render_expression(expr)
        if (
            isinstance(expr, BinaryOp)
            and BINARY_PRECEDENCE.get(expr.op, 0) < parent_precedence
        ):
            return f"({rendered})"
        return rendered

    # Statements

    def render_statement(self, stmt: Statement) -> List[str]:
        """Render a statement as a list of lines (without base indentation)."""
        if isinstance(stmt, Let):
            return [f"let {stmt.name} = {self.render_expression(stmt.value)}"]
        elif isinstance(stmt, Return):
            if stmt.value is None:
                return ["return"]
            return [f"return {self.render_expression(stmt.value)}"]
        elif isinstance(stmt, ExpressionStatement):
            return [self.render_expression(stmt.expr)]
        elif isinstance(stmt, Assert):
            condition = self.render_expression(stmt.condition)
            return [f"assert({condition}, {quote(stmt.message)})"]
        elif isinstance(stmt, FieldSet):
            value = self.render_expression(stmt.value)
            return [f"this.set({quote(stmt.name)}, {value})"]
        elif isinstance(stmt, FieldUnset):
            return [f"this.unset({quote(stmt.name)})"]
        elif isinstance(stmt, SuperCall):
            args = ", ".join(self.render_expression(arg) for arg in stmt.args)
            return [f"super({args})"]
        elif isinstance(stmt, If):
            lines = [f"if ({self.render_expression(stmt.condition)}) {{"]
            lines.extend(self.render_block(stmt.then))
            if stmt.otherwise:
                lines.append("} else {")
                lines.extend(self.render_block(stmt.otherwise))
            lines.append("}")
            return lines
        raise TypeError(f"Cannot render statement {stmt!r}")

    def render_block(self, statements) -> List[str]:
        """Render statements one indentation level deeper."""
        lines = []
        for stmt in statements:
            lines.extend(self.indent + line for line in self.render_statement(stmt))
        return lines

    # Declarations

    def render_param(self, param: Param) -> str:
        return f"{param.name}: {param.type}"

    def render_method_signature(self, method: Method) -> str:
        params = ", ".join(self.render_param(p) for p in method.params)

        if method.kind == "constructor":
            signature = f"constructor({params})"
        elif method.kind == "getter":
            signature = f"get {method.name}({params})"
        elif method.kind == "setter":
            signature = f"set {method.name}({params})"
        else:
            signature = f"{method.name}({params})"

        if method.static:
            signature = f"static {signature}"
        if method.return_type is not None:
            signature = f"{signature}: {method.return_type}"
        return signature

    def render_method(self, method: Method) -> str:
        """Render a whole method, unindented."""
        lines = [f"{self.render_method_signature(method)} {{"]
        lines.extend(self.render_block(method.body))
        lines.append("}")
        return "\n".join(lines)

    def render_imports(self, imports: ModuleImports) -> str:
        if len(imports.names) == 1:
            return f"import {{ {imports.names[0]} }} from {quote(imports.module)}"
        names = "".join(f"{self.indent}{name},\n" for name in imports.names)
        return f"import {{\n{names}}} from {quote(imports.module)}"
