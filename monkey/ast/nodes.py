"""AST node variants for Monkey.

Every node renders a deterministic canonical source string through `str()`.
The rendering is used as a test oracle and for macro introspection; infix
expressions always render fully parenthesized.

Nodes are mutable: `monkey.ast.modify` rewrites child slots in place.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from monkey.token import Token


class Node:
    """Base class of all syntax nodes."""

    __slots__ = ()

    def token_literal(self) -> str:
        tok = getattr(self, "token", None)
        return tok.literal if tok is not None else ""


class Statement(Node):
    __slots__ = ()


class Expression(Node):
    __slots__ = ()


# --- Root ---

@dataclass(eq=False)
class Program(Node):
    statements: list[Statement] = field(default_factory=list)

    def token_literal(self) -> str:
        if self.statements:
            return self.statements[0].token_literal()
        return ""

    def __str__(self) -> str:
        return "".join(str(s) for s in self.statements)


# --- Expressions ---

@dataclass(eq=False)
class Identifier(Expression):
    value: str
    token: Optional[Token] = field(default=None, repr=False)

    def __str__(self) -> str:
        return self.value


@dataclass(eq=False)
class IntegerLiteral(Expression):
    value: int
    token: Optional[Token] = field(default=None, repr=False)

    def __str__(self) -> str:
        return str(self.value)


@dataclass(eq=False)
class BooleanLiteral(Expression):
    value: bool
    token: Optional[Token] = field(default=None, repr=False)

    def __str__(self) -> str:
        return "true" if self.value else "false"


@dataclass(eq=False)
class StringLiteral(Expression):
    value: str
    token: Optional[Token] = field(default=None, repr=False)

    def __str__(self) -> str:
        return self.value


@dataclass(eq=False)
class ArrayLiteral(Expression):
    elements: list[Expression] = field(default_factory=list)
    token: Optional[Token] = field(default=None, repr=False)

    def __str__(self) -> str:
        return "[" + ", ".join(str(e) for e in self.elements) + "]"


@dataclass(eq=False)
class HashLiteral(Expression):
    # Ordered (key, value) pairs; source order is kept for rendering.
    pairs: list[tuple[Expression, Expression]] = field(default_factory=list)
    token: Optional[Token] = field(default=None, repr=False)

    def __str__(self) -> str:
        return "{" + ", ".join(f"{k}:{v}" for k, v in self.pairs) + "}"


@dataclass(eq=False)
class PrefixExpression(Expression):
    operator: str
    right: Optional[Expression]
    token: Optional[Token] = field(default=None, repr=False)

    def __str__(self) -> str:
        return f"({self.operator}{self.right})"


@dataclass(eq=False)
class InfixExpression(Expression):
    left: Optional[Expression]
    operator: str
    right: Optional[Expression]
    token: Optional[Token] = field(default=None, repr=False)

    def __str__(self) -> str:
        return f"({self.left} {self.operator} {self.right})"


@dataclass(eq=False)
class IfExpression(Expression):
    condition: Optional[Expression]
    consequence: BlockStatement
    alternative: Optional[BlockStatement] = None
    token: Optional[Token] = field(default=None, repr=False)

    def __str__(self) -> str:
        out = f"if{self.condition} {self.consequence}"
        if self.alternative is not None:
            out += f"else {self.alternative}"
        return out


@dataclass(eq=False)
class FunctionLiteral(Expression):
    parameters: list[Identifier]
    body: BlockStatement
    token: Optional[Token] = field(default=None, repr=False)

    def __str__(self) -> str:
        params = ", ".join(str(p) for p in self.parameters)
        return f"fn({params}) {self.body}"


@dataclass(eq=False)
class MacroLiteral(Expression):
    parameters: list[Identifier]
    body: BlockStatement
    token: Optional[Token] = field(default=None, repr=False)

    def __str__(self) -> str:
        params = ", ".join(str(p) for p in self.parameters)
        return f"macro({params}) {self.body}"


@dataclass(eq=False)
class CallExpression(Expression):
    function: Expression  # Identifier or FunctionLiteral (or any callee expression)
    arguments: list[Expression] = field(default_factory=list)
    token: Optional[Token] = field(default=None, repr=False)

    def __str__(self) -> str:
        args = ", ".join(str(a) for a in self.arguments)
        return f"{self.function}({args})"


@dataclass(eq=False)
class IndexExpression(Expression):
    left: Expression
    index: Optional[Expression]
    token: Optional[Token] = field(default=None, repr=False)

    def __str__(self) -> str:
        return f"({self.left}[{self.index}])"


# --- Statements ---

@dataclass(eq=False)
class LetStatement(Statement):
    name: Identifier
    value: Optional[Expression]
    token: Optional[Token] = field(default=None, repr=False)

    def __str__(self) -> str:
        value = "" if self.value is None else str(self.value)
        return f"let {self.name} = {value};"


@dataclass(eq=False)
class ReturnStatement(Statement):
    return_value: Optional[Expression]
    token: Optional[Token] = field(default=None, repr=False)

    def __str__(self) -> str:
        value = "" if self.return_value is None else str(self.return_value)
        return f"return {value};"


@dataclass(eq=False)
class ExpressionStatement(Statement):
    expression: Optional[Expression]
    token: Optional[Token] = field(default=None, repr=False)

    def __str__(self) -> str:
        return "" if self.expression is None else str(self.expression)


@dataclass(eq=False)
class BlockStatement(Statement):
    statements: list[Statement] = field(default_factory=list)
    token: Optional[Token] = field(default=None, repr=False)

    def __str__(self) -> str:
        return "".join(str(s) for s in self.statements)


