"""Built-in functions for the Monkey runtime.

The evaluator consults BUILTINS only after the environment chain misses, so
user bindings shadow builtins of the same name. Every builtin takes the list
of already-evaluated arguments and reports misuse as an Error value.
"""
from __future__ import annotations

import sys

from monkey.types.objects import (
    Object,
    Builtin,
    Array,
    String,
    Integer,
    Error,
    NULL,
    ARRAY_OBJ,
)


def _wrong_arg_count(got: int, want: int) -> Error:
    return Error(f"wrong number of arguments. got={got}, want={want}")


def _require_array(name: str, args: list[Object]) -> Array | Error:
    if len(args) != 1:
        return _wrong_arg_count(len(args), 1)
    arr = args[0]
    if not isinstance(arr, Array):
        return Error(f"argument to `{name}` must be {ARRAY_OBJ}, got {arr.type()}")
    return arr


def len_(args: list[Object]) -> Object:
    """Length of a String (in characters) or an Array."""
    if len(args) != 1:
        return _wrong_arg_count(len(args), 1)
    arg = args[0]
    if isinstance(arg, String):
        return Integer(len(arg.value))
    if isinstance(arg, Array):
        return Integer(len(arg.elements))
    return Error(f"argument to `len` not supported, got {arg.type()}")


def first(args: list[Object]) -> Object:
    arr = _require_array("first", args)
    if isinstance(arr, Error):
        return arr
    return arr.elements[0] if arr.elements else NULL


def last(args: list[Object]) -> Object:
    arr = _require_array("last", args)
    if isinstance(arr, Error):
        return arr
    return arr.elements[-1] if arr.elements else NULL


def rest(args: list[Object]) -> Object:
    """A new Array without the first element; NULL for an empty Array."""
    arr = _require_array("rest", args)
    if isinstance(arr, Error):
        return arr
    if not arr.elements:
        return NULL
    return Array(list(arr.elements[1:]))


def push(args: list[Object]) -> Object:
    """A new Array with the element appended; the input is left untouched."""
    if len(args) != 2:
        return _wrong_arg_count(len(args), 2)
    arr, elem = args
    if not isinstance(arr, Array):
        return Error(f"argument to `push` must be {ARRAY_OBJ}, got {arr.type()}")
    return Array(arr.elements + [elem])


def puts(args: list[Object]) -> Object:
    for arg in args:
        print(arg.inspect(), file=sys.stdout)
    return NULL


BUILTINS: dict[str, Builtin] = {
    "len": Builtin("len", len_),
    "first": Builtin("first", first),
    "last": Builtin("last", last),
    "rest": Builtin("rest", rest),
    "push": Builtin("push", push),
    "puts": Builtin("puts", puts),
}


def lookup_builtin(name: str) -> Builtin | None:
    return BUILTINS.get(name)
