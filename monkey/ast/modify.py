"""Whole-tree rewrite primitive.

`modify` visits every child slot of a node, replaces each child with its
rewritten result, and then applies the modifier to the node itself (children
before parent). Leaf nodes go straight to the modifier. This is the substrate
for quote/unquote and macro expansion.
"""

from __future__ import annotations

from monkey import ModifierFn
from monkey.ast.nodes import (
    Node,
    Program,
    ExpressionStatement,
    BlockStatement,
    ReturnStatement,
    LetStatement,
    InfixExpression,
    PrefixExpression,
    IfExpression,
    FunctionLiteral,
    MacroLiteral,
    ArrayLiteral,
    HashLiteral,
    IndexExpression,
    CallExpression,
)


def _modify_all(nodes: list, modifier: ModifierFn) -> list:
    return [modify(n, modifier) for n in nodes]


def modify(node: Node | None, modifier: ModifierFn) -> Node | None:
    """Rewrite `node` bottom-up with `modifier` and return the result.

    Child slots are updated in place, so the returned node is usually `node`
    itself unless the modifier replaces it. Null placeholders left behind by
    parse errors are passed through untouched.
    """
    if node is None:
        return None

    match node:
        case Program() | BlockStatement():
            node.statements = _modify_all(node.statements, modifier)
        case ExpressionStatement():
            node.expression = modify(node.expression, modifier)
        case ReturnStatement():
            node.return_value = modify(node.return_value, modifier)
        case LetStatement():
            node.value = modify(node.value, modifier)
        case InfixExpression():
            node.left = modify(node.left, modifier)
            node.right = modify(node.right, modifier)
        case PrefixExpression():
            node.right = modify(node.right, modifier)
        case IfExpression():
            node.condition = modify(node.condition, modifier)
            node.consequence = modify(node.consequence, modifier)
            if node.alternative is not None:
                node.alternative = modify(node.alternative, modifier)
        case FunctionLiteral() | MacroLiteral():
            node.parameters = _modify_all(node.parameters, modifier)
            node.body = modify(node.body, modifier)
        case ArrayLiteral():
            node.elements = _modify_all(node.elements, modifier)
        case HashLiteral():
            node.pairs = [
                (modify(key, modifier), modify(value, modifier))
                for key, value in node.pairs
            ]
        case IndexExpression():
            node.left = modify(node.left, modifier)
            node.index = modify(node.index, modifier)
        case CallExpression():
            node.function = modify(node.function, modifier)
            node.arguments = _modify_all(node.arguments, modifier)

    return modifier(node)
