"""Macro definition and expansion for Monkey.

Two passes run before evaluation:

- `define_macros` moves every top-level `let name = macro(...) {...};` out of
  the program and into the macro environment. Nested macro literals are not
  discovered.
- `expand_macros` rewrites the program bottom-up. Each call to a known macro
  has its arguments wrapped, unevaluated, in Quote objects; the macro body is
  evaluated with those bound to its parameters and must produce a Quote,
  whose node replaces the call.

A macro that produces anything but a Quote is an authoring bug, so expansion
aborts with MacroExpansionError instead of yielding an Error value.
"""

from __future__ import annotations

import logging
from typing import Optional

from monkey.errors import MacroExpansionError
from monkey.ast.modify import modify
from monkey.ast.nodes import (
    Node,
    Program,
    Statement,
    LetStatement,
    MacroLiteral,
    CallExpression,
    Identifier,
)
from monkey.types.environment import Environment, new_enclosed_environment
from monkey.types.objects import Macro, Quote, ReturnValue, Error
from monkey.evaluation.evaluator import evaluate

logger = logging.getLogger(__name__)


def is_macro_definition(statement: Statement) -> bool:
    return isinstance(statement, LetStatement) and isinstance(statement.value, MacroLiteral)


def add_macro(statement: LetStatement, env: Environment) -> Macro:
    literal: MacroLiteral = statement.value
    macro = Macro(literal.parameters, literal.body, env)
    env.set(statement.name.value, macro)
    logger.debug("defined macro %s(%s)", statement.name.value,
                 ", ".join(p.value for p in literal.parameters))
    return macro


def define_macros(program: Program, env: Environment) -> None:
    """Register top-level macro definitions in `env` and remove them from `program`."""
    definitions = [
        i for i, statement in enumerate(program.statements)
        if is_macro_definition(statement)
    ]
    for i in definitions:
        add_macro(program.statements[i], env)
    # Descending order keeps the earlier indices valid
    for i in reversed(definitions):
        del program.statements[i]


def macro_for_call(call: CallExpression, env: Environment) -> Optional[Macro]:
    if not isinstance(call.function, Identifier):
        return None
    obj = env.get(call.function.value)
    if not isinstance(obj, Macro):
        return None
    return obj


def quote_args(call: CallExpression) -> list[Quote]:
    return [Quote(arg) for arg in call.arguments]


def extend_macro_env(name: str, macro: Macro, args: list[Quote]) -> Environment:
    if len(args) != len(macro.parameters):
        raise MacroExpansionError(
            f"macro {name} expects {len(macro.parameters)} argument(s), got {len(args)}"
        )
    extended = new_enclosed_environment(macro.env)
    for param, arg in zip(macro.parameters, args):
        extended.set(param.value, arg)
    return extended


def expand_macro_call(call: CallExpression, macro: Macro) -> Node:
    name = call.function.value
    eval_env = extend_macro_env(name, macro, quote_args(call))
    evaluated = evaluate(macro.body, eval_env)
    if isinstance(evaluated, ReturnValue):
        evaluated = evaluated.value

    if isinstance(evaluated, Error):
        raise MacroExpansionError(f"macro {name} failed: {evaluated.message}")
    if not isinstance(evaluated, Quote):
        raise MacroExpansionError(
            f"macro {name} must return a quoted AST node, got {evaluated.type()}"
        )

    logger.debug("expanded %s -> %s", call, evaluated.node)
    return evaluated.node


def expand_macros(program: Node, env: Environment) -> Node:
    """Replace every call to a macro bound in `env` by the node it returns."""

    def expand(node: Node) -> Node:
        if not isinstance(node, CallExpression):
            return node
        macro = macro_for_call(node, env)
        if macro is None:
            return node
        return expand_macro_call(node, macro)

    return modify(program, expand)
