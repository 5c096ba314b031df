"""Runtime value variants for Monkey.

Every value exposes `type()` (its kind name) and `inspect()` (display form).
`TRUE`, `FALSE` and `NULL` are shared singletons, so equality between two
Booleans may use identity. ReturnValue and Error are control-signal wrappers
used by the evaluator's short-circuit path, not ordinary values.
"""

from __future__ import annotations

from io import StringIO
from typing import Callable, NamedTuple, Optional, TYPE_CHECKING

from monkey.ast.nodes import Node, Identifier, BlockStatement

if TYPE_CHECKING:
    from monkey.types.environment import Environment


INTEGER_OBJ = "INTEGER"
BOOLEAN_OBJ = "BOOLEAN"
NULL_OBJ = "NULL"
STRING_OBJ = "STRING"
ARRAY_OBJ = "ARRAY"
HASH_OBJ = "HASH"
FUNCTION_OBJ = "FUNCTION"
BUILTIN_OBJ = "BUILTIN"
RETURN_VALUE_OBJ = "RETURN_VALUE"
ERROR_OBJ = "ERROR"
QUOTE_OBJ = "QUOTE"
MACRO_OBJ = "MACRO"

_FNV64_OFFSET = 0xCBF29CE484222325
_FNV64_PRIME = 0x100000001B3
_MASK64 = 0xFFFFFFFFFFFFFFFF


def fnv1a_64(data: bytes) -> int:
    h = _FNV64_OFFSET
    for byte in data:
        h ^= byte
        h = (h * _FNV64_PRIME) & _MASK64
    return h


class HashKey(NamedTuple):
    """Digest key `(kind, numeric-hash)` for hashable values."""
    type: str
    value: int


class Object:
    __slots__ = ()

    def type(self) -> str:
        raise NotImplementedError

    def inspect(self) -> str:
        raise NotImplementedError

    def __str__(self) -> str:
        return self.inspect()


class Hashable:
    """Mixin for values usable as Hash keys (Integer, Boolean, String)."""

    __slots__ = ()

    def hash_key(self) -> HashKey:
        raise NotImplementedError


class Integer(Object, Hashable):
    __slots__ = ("value",)

    def __init__(self, value: int):
        self.value = value

    def type(self) -> str:
        return INTEGER_OBJ

    def inspect(self) -> str:
        return str(self.value)

    def hash_key(self) -> HashKey:
        return HashKey(INTEGER_OBJ, self.value)

    def __repr__(self) -> str:
        return f"Integer({self.value})"


class Boolean(Object, Hashable):
    __slots__ = ("value",)

    def __init__(self, value: bool):
        self.value = value

    def type(self) -> str:
        return BOOLEAN_OBJ

    def inspect(self) -> str:
        return "true" if self.value else "false"

    def hash_key(self) -> HashKey:
        return HashKey(BOOLEAN_OBJ, 1 if self.value else 0)

    def __repr__(self) -> str:
        return f"Boolean({self.value})"


class Null(Object):
    __slots__ = ()

    def type(self) -> str:
        return NULL_OBJ

    def inspect(self) -> str:
        return "null"

    def __repr__(self) -> str:
        return "NULL"


class String(Object, Hashable):
    __slots__ = ("value",)

    def __init__(self, value: str):
        self.value = value

    def type(self) -> str:
        return STRING_OBJ

    def inspect(self) -> str:
        return self.value

    def hash_key(self) -> HashKey:
        return HashKey(STRING_OBJ, fnv1a_64(self.value.encode("utf-8")))

    def __repr__(self) -> str:
        return f"String({self.value!r})"


def _inspect_element(obj: Object) -> str:
    # Strings nested in containers show their quotes
    if isinstance(obj, String):
        return f'"{obj.value}"'
    return obj.inspect()


class Array(Object):
    __slots__ = ("elements",)

    def __init__(self, elements: list[Object]):
        self.elements = elements

    def type(self) -> str:
        return ARRAY_OBJ

    def inspect(self) -> str:
        return "[" + ", ".join(_inspect_element(e) for e in self.elements) + "]"

    def __repr__(self) -> str:
        return f"Array({self.elements!r})"


class HashPair(NamedTuple):
    key: Object
    value: Object


class Hash(Object):
    __slots__ = ("pairs",)

    def __init__(self, pairs: dict[HashKey, HashPair]):
        self.pairs = pairs

    def type(self) -> str:
        return HASH_OBJ

    def inspect(self) -> str:
        with StringIO() as buffer:
            buffer.write("{")
            buffer.write(", ".join(
                f"{_inspect_element(p.key)}: {_inspect_element(p.value)}"
                for p in self.pairs.values()
            ))
            buffer.write("}")
            return buffer.getvalue()

    def __repr__(self) -> str:
        return f"Hash({self.inspect()})"


class Function(Object):
    """A first-class function with parameters, body, and closure env."""

    __slots__ = ("parameters", "body", "env")

    def __init__(self, parameters: list[Identifier], body: BlockStatement, env: Environment):
        self.parameters = parameters
        self.body = body
        self.env = env

    def type(self) -> str:
        return FUNCTION_OBJ

    def inspect(self) -> str:
        with StringIO() as buffer:
            buffer.write("fn(")
            buffer.write(", ".join(str(p) for p in self.parameters))
            buffer.write(") {\n")
            buffer.write(str(self.body))
            buffer.write("\n}")
            return buffer.getvalue()

    def __repr__(self) -> str:
        return self.inspect()


BuiltinFn = Callable[..., Object]


class Builtin(Object):
    __slots__ = ("name", "fn")

    def __init__(self, name: str, fn: BuiltinFn):
        self.name = name
        self.fn = fn

    def type(self) -> str:
        return BUILTIN_OBJ

    def inspect(self) -> str:
        return f"builtin function {self.name}"

    def __repr__(self) -> str:
        return f"Builtin({self.name!r})"


class ReturnValue(Object):
    __slots__ = ("value",)

    def __init__(self, value: Object):
        self.value = value

    def type(self) -> str:
        return RETURN_VALUE_OBJ

    def inspect(self) -> str:
        return self.value.inspect()

    def __repr__(self) -> str:
        return f"ReturnValue({self.value!r})"


class Error(Object):
    __slots__ = ("message",)

    def __init__(self, message: str):
        self.message = message

    def type(self) -> str:
        return ERROR_OBJ

    def inspect(self) -> str:
        return f"ERROR: {self.message}"

    def __repr__(self) -> str:
        return f"Error({self.message!r})"


class Quote(Object):
    """A runtime value wrapping an unevaluated program fragment."""

    __slots__ = ("node",)

    def __init__(self, node: Optional[Node]):
        self.node = node

    def type(self) -> str:
        return QUOTE_OBJ

    def inspect(self) -> str:
        return f"QUOTE({self.node})"

    def __repr__(self) -> str:
        return self.inspect()


class Macro(Object):
    """Expansion-time transformer; erased before evaluation starts."""

    __slots__ = ("parameters", "body", "env")

    def __init__(self, parameters: list[Identifier], body: BlockStatement, env: Environment):
        self.parameters = parameters
        self.body = body
        self.env = env

    def type(self) -> str:
        return MACRO_OBJ

    def inspect(self) -> str:
        with StringIO() as buffer:
            buffer.write("macro(")
            buffer.write(", ".join(str(p) for p in self.parameters))
            buffer.write(") {\n")
            buffer.write(str(self.body))
            buffer.write("\n}")
            return buffer.getvalue()

    def __repr__(self) -> str:
        return self.inspect()


TRUE = Boolean(True)
FALSE = Boolean(False)
NULL = Null()


def native_bool_to_boolean(value: bool) -> Boolean:
    return TRUE if value else FALSE


def is_error(obj: Optional[Object]) -> bool:
    return isinstance(obj, Error)


def is_control_signal(obj: Optional[Object]) -> bool:
    """True for the wrappers that must unwind instead of being used as a value."""
    return isinstance(obj, (Error, ReturnValue))
