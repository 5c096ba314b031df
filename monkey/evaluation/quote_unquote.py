"""quote / unquote for the Monkey evaluator.

`quote(x)` produces a Quote wrapping the unevaluated node `x`, after every
nested `unquote(y)` call has been replaced by the AST form of `y`'s value.
Integers and Booleans become fresh literal nodes and Quotes splice in their
wrapped node; anything else is a usage error.
"""

from __future__ import annotations

import copy

from monkey import EvaluatorFn, MonkeyNode
from monkey.token import Token, TokenType
from monkey.ast.modify import modify
from monkey.ast.nodes import (
    Node,
    Expression,
    CallExpression,
    Identifier,
    IntegerLiteral,
    BooleanLiteral,
)
from monkey.types.environment import Environment
from monkey.types.objects import Object, Integer, Boolean, Quote, Error

QUOTE = "quote"
UNQUOTE = "unquote"


def is_call_to(node: MonkeyNode, name: str) -> bool:
    return (
        isinstance(node, CallExpression)
        and isinstance(node.function, Identifier)
        and node.function.value == name
    )


def convert_object_to_node(obj: Object) -> Node | Error:
    """AST form of an evaluated value, for splicing into a quoted fragment."""
    match obj:
        case Error():
            return obj
        case Boolean():
            kind = TokenType.TRUE if obj.value else TokenType.FALSE
            return BooleanLiteral(obj.value, token=Token(kind, obj.inspect()))
        case Integer():
            return IntegerLiteral(obj.value, token=Token(TokenType.INT, str(obj.value)))
        case Quote():
            return obj.node
        case _:
            return Error(f"unquote: cannot convert {obj.type()} to an AST node")


def eval_unquote_calls(
    quoted: Node, env: Environment, evaluate_fn: EvaluatorFn
) -> Node | Error:
    failure: list[Error] = []

    def unquote_call(node: Node) -> Node:
        if failure or not is_call_to(node, UNQUOTE):
            return node
        if len(node.arguments) != 1:
            failure.append(Error(
                f"wrong number of arguments to unquote: want=1, got={len(node.arguments)}"
            ))
            return node
        converted = convert_object_to_node(evaluate_fn(node.arguments[0], env))
        if isinstance(converted, Error):
            failure.append(converted)
            return node
        return converted

    # Rewrite a copy so the function body holding this quote stays intact
    rewritten = modify(copy.deepcopy(quoted), unquote_call)
    return failure[0] if failure else rewritten


def quote_form(
    arguments: list[Expression], env: Environment, evaluate_fn: EvaluatorFn
) -> Object:
    if len(arguments) != 1:
        return Error(f"wrong number of arguments to quote: want=1, got={len(arguments)}")
    node = eval_unquote_calls(arguments[0], env, evaluate_fn)
    if isinstance(node, Error):
        return node
    return Quote(node)
