"""Core tree-walking evaluator for Monkey.

`evaluate(node, env)` dispatches over every node variant that can remain
after macro definitions are stripped. Errors are ordinary Error values: any
sub-evaluation that yields one aborts the enclosing expression and becomes its
result. ReturnValue wrappers short-circuit every enclosing expression the
same way, so they are never bound or stored, and are unwrapped at the
function call (or program) boundary.
"""

from __future__ import annotations

from monkey.ast.nodes import (
    Node,
    Program,
    Statement,
    Expression,
    BlockStatement,
    ExpressionStatement,
    ReturnStatement,
    LetStatement,
    Identifier,
    IntegerLiteral,
    BooleanLiteral,
    StringLiteral,
    ArrayLiteral,
    HashLiteral,
    PrefixExpression,
    InfixExpression,
    IfExpression,
    FunctionLiteral,
    MacroLiteral,
    CallExpression,
    IndexExpression,
)
from monkey.types.environment import Environment, new_enclosed_environment
from monkey.types.objects import (
    Object,
    Integer,
    String,
    Array,
    Hash,
    HashPair,
    HashKey,
    Hashable,
    Function,
    Builtin,
    ReturnValue,
    Error,
    TRUE,
    FALSE,
    NULL,
    native_bool_to_boolean,
    is_error,
    is_control_signal,
)
from monkey.builtin.builtins import lookup_builtin
from monkey.evaluation.quote_unquote import QUOTE, quote_form


def evaluate(node: Node, env: Environment) -> Object:
    match node:
        # Statements
        case Program():
            return eval_program(node.statements, env)
        case BlockStatement():
            return eval_block_statement(node.statements, env)
        case ExpressionStatement():
            return evaluate(node.expression, env)
        case ReturnStatement():
            value = evaluate(node.return_value, env)
            if is_control_signal(value):
                return value
            return ReturnValue(value)
        case LetStatement():
            value = evaluate(node.value, env)
            if is_control_signal(value):
                return value
            env.set(node.name.value, value)
            return NULL

        # Literals
        case IntegerLiteral():
            return Integer(node.value)
        case StringLiteral():
            return String(node.value)
        case BooleanLiteral():
            return native_bool_to_boolean(node.value)
        case ArrayLiteral():
            elements = eval_expressions(node.elements, env)
            if len(elements) == 1 and is_control_signal(elements[0]):
                return elements[0]
            return Array(elements)
        case HashLiteral():
            return eval_hash_literal(node, env)
        case FunctionLiteral():
            return Function(node.parameters, node.body, env)

        # Expressions
        case Identifier():
            return eval_identifier(node, env)
        case PrefixExpression():
            right = evaluate(node.right, env)
            if is_control_signal(right):
                return right
            return eval_prefix_expression(node.operator, right)
        case InfixExpression():
            left = evaluate(node.left, env)
            if is_control_signal(left):
                return left
            right = evaluate(node.right, env)
            if is_control_signal(right):
                return right
            return eval_infix_expression(node.operator, left, right)
        case IfExpression():
            return eval_if_expression(node, env)
        case CallExpression():
            if isinstance(node.function, Identifier) and node.function.value == QUOTE:
                return quote_form(node.arguments, env, evaluate)
            function = evaluate(node.function, env)
            if is_control_signal(function):
                return function
            args = eval_expressions(node.arguments, env)
            if len(args) == 1 and is_control_signal(args[0]):
                return args[0]
            return apply_function(function, args)
        case IndexExpression():
            left = evaluate(node.left, env)
            if is_control_signal(left):
                return left
            index = evaluate(node.index, env)
            if is_control_signal(index):
                return index
            return eval_index_expression(left, index)
        case MacroLiteral():
            # Only top-level `let name = macro(...)` statements define macros
            return Error("macro literal is only allowed in a top-level let statement")

    return Error(f"cannot evaluate node: {type(node).__name__}")


# -------------------------------
# Statements
# -------------------------------
def eval_program(statements: list[Statement], env: Environment) -> Object:
    result: Object = NULL
    for statement in statements:
        result = evaluate(statement, env)
        if isinstance(result, ReturnValue):
            return result.value
        if is_error(result):
            return result
    return result


def eval_block_statement(statements: list[Statement], env: Environment) -> Object:
    """Like eval_program, but a ReturnValue stays wrapped so it can keep unwinding."""
    result: Object = NULL
    for statement in statements:
        result = evaluate(statement, env)
        if is_control_signal(result):
            return result
    return result


def eval_expressions(exprs: list[Expression], env: Environment) -> list[Object]:
    """Evaluate left to right; on the first Error or ReturnValue return a
    list holding only it."""
    result: list[Object] = []
    for expr in exprs:
        evaluated = evaluate(expr, env)
        if is_control_signal(evaluated):
            return [evaluated]
        result.append(evaluated)
    return result


# -------------------------------
# Identifiers
# -------------------------------
def eval_identifier(node: Identifier, env: Environment) -> Object:
    value = env.get(node.value)
    if value is not None:
        return value
    builtin = lookup_builtin(node.value)
    if builtin is not None:
        return builtin
    return Error(f"identifier not found: {node.value}")


# -------------------------------
# Operators
# -------------------------------
def is_truthy(obj: Object) -> bool:
    """Only `false` and null are falsy."""
    return obj is not NULL and obj is not FALSE


def eval_prefix_expression(operator: str, right: Object) -> Object:
    match operator:
        case "!":
            return FALSE if is_truthy(right) else TRUE
        case "-":
            if not isinstance(right, Integer):
                return Error(f"unknown operator: -{right.type()}")
            return Integer(-right.value)
    return Error(f"unknown operator: {operator}{right.type()}")


def _truncated_div(left: int, right: int) -> int:
    quotient = abs(left) // abs(right)
    return quotient if (left < 0) == (right < 0) else -quotient


def eval_integer_infix_expression(operator: str, left: Integer, right: Integer) -> Object:
    lv, rv = left.value, right.value
    match operator:
        case "+":
            return Integer(lv + rv)
        case "-":
            return Integer(lv - rv)
        case "*":
            return Integer(lv * rv)
        case "/":
            if rv == 0:
                return Error("division by zero")
            return Integer(_truncated_div(lv, rv))
        case "<":
            return native_bool_to_boolean(lv < rv)
        case ">":
            return native_bool_to_boolean(lv > rv)
        case "==":
            return native_bool_to_boolean(lv == rv)
        case "!=":
            return native_bool_to_boolean(lv != rv)
    return Error(f"unknown operator: {left.type()} {operator} {right.type()}")


def eval_string_infix_expression(operator: str, left: String, right: String) -> Object:
    if operator != "+":
        return Error(f"unknown operator: {left.type()} {operator} {right.type()}")
    return String(left.value + right.value)


def eval_infix_expression(operator: str, left: Object, right: Object) -> Object:
    if isinstance(left, Integer) and isinstance(right, Integer):
        return eval_integer_infix_expression(operator, left, right)
    if isinstance(left, String) and isinstance(right, String):
        return eval_string_infix_expression(operator, left, right)
    # Identity comparison is sound here: Booleans and NULL are singletons
    if operator == "==":
        return native_bool_to_boolean(left is right)
    if operator == "!=":
        return native_bool_to_boolean(left is not right)
    if left.type() != right.type():
        return Error(f"type mismatch: {left.type()} {operator} {right.type()}")
    return Error(f"unknown operator: {left.type()} {operator} {right.type()}")


# -------------------------------
# Conditionals
# -------------------------------
def eval_if_expression(node: IfExpression, env: Environment) -> Object:
    condition = evaluate(node.condition, env)
    if is_control_signal(condition):
        return condition
    if is_truthy(condition):
        return evaluate(node.consequence, env)
    if node.alternative is not None:
        return evaluate(node.alternative, env)
    return NULL


# -------------------------------
# Application
# -------------------------------
def extend_function_env(fn: Function, args: list[Object]) -> Environment:
    env = new_enclosed_environment(fn.env)
    for param, arg in zip(fn.parameters, args):
        env.set(param.value, arg)
    return env


def unwrap_return_value(obj: Object) -> Object:
    if isinstance(obj, ReturnValue):
        return obj.value
    return obj


def apply_function(fn: Object, args: list[Object]) -> Object:
    """Apply a Function (strict arity) or a Builtin to evaluated arguments."""
    match fn:
        case Function():
            if len(args) != len(fn.parameters):
                return Error(
                    f"wrong number of arguments: want={len(fn.parameters)}, got={len(args)}"
                )
            evaluated = evaluate(fn.body, extend_function_env(fn, args))
            return unwrap_return_value(evaluated)
        case Builtin():
            return fn.fn(args)
    return Error(f"not a function: {fn.type()}")


# -------------------------------
# Index and hash
# -------------------------------
def eval_index_expression(left: Object, index: Object) -> Object:
    match left:
        case Array():
            if not isinstance(index, Integer):
                return NULL
            if index.value < 0 or index.value >= len(left.elements):
                return NULL
            return left.elements[index.value]
        case Hash():
            return eval_hash_index_expression(left, index)
    return Error(f"index operator not supported: {left.type()}")


def eval_hash_index_expression(hash_obj: Hash, index: Object) -> Object:
    if not isinstance(index, Hashable):
        return Error(f"unusable as hash key: {index.type()}")
    pair = hash_obj.pairs.get(index.hash_key())
    if pair is None:
        return NULL
    return pair.value


def eval_hash_literal(node: HashLiteral, env: Environment) -> Object:
    pairs: dict[HashKey, HashPair] = {}
    for key_node, value_node in node.pairs:
        key = evaluate(key_node, env)
        if is_control_signal(key):
            return key
        if not isinstance(key, Hashable):
            return Error(f"unusable as hash key: {key.type()}")
        value = evaluate(value_node, env)
        if is_control_signal(value):
            return value
        pairs[key.hash_key()] = HashPair(key, value)
    return Hash(pairs)
