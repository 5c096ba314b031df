import pytest

from monkey.builtin.builtins import BUILTINS, lookup_builtin, push
from monkey.types.objects import Array, Integer, Error, NULL


@pytest.mark.parametrize(
    "source,expected",
    [
        ('len("")', 0),
        ('len("four")', 4),
        ('len("hello world")', 11),
        ("len([1, 2, 3])", 3),
        ("len([])", 0),
        ("first([1, 2, 3])", 1),
        ("last([1, 2, 3])", 3),
        ("len(rest([1, 2, 3]))", 2),
        ("first(rest([1, 2, 3]))", 2),
        ("last(push([1, 2], 3))", 3),
        ("len(push([], 1))", 1),
    ],
)
def test_builtin_results(run, source, expected):
    result = run(source)
    assert isinstance(result, Integer)
    assert result.value == expected


@pytest.mark.parametrize(
    "source",
    ["first([])", "last([])", "rest([])"],
)
def test_builtins_on_empty_array_return_null(run, source):
    assert run(source) is NULL


@pytest.mark.parametrize(
    "source,message",
    [
        ("len(1)", "argument to `len` not supported, got INTEGER"),
        ('len("one", "two")', "wrong number of arguments. got=2, want=1"),
        ("len()", "wrong number of arguments. got=0, want=1"),
        ("first(1)", "argument to `first` must be ARRAY, got INTEGER"),
        ('last("abc")', "argument to `last` must be ARRAY, got STRING"),
        ("rest(true)", "argument to `rest` must be ARRAY, got BOOLEAN"),
        ("push(1, 1)", "argument to `push` must be ARRAY, got INTEGER"),
        ("push([1])", "wrong number of arguments. got=1, want=2"),
    ],
)
def test_builtin_errors(run, source, message):
    result = run(source)
    assert isinstance(result, Error)
    assert result.message == message


def test_push_and_rest_do_not_mutate_input(run):
    result = run("let a = [1, 2]; let b = push(a, 3); let c = rest(a); [a, b, c]")
    assert result.inspect() == "[[1, 2], [1, 2, 3], [2]]"


def test_push_returns_new_array():
    original = Array([Integer(1)])
    pushed = push([original, Integer(2)])
    assert pushed is not original
    assert len(original.elements) == 1
    assert [e.value for e in pushed.elements] == [1, 2]


def test_puts_prints_each_argument(run, capsys):
    result = run('puts("hello", 1 + 1, [1, "a"], true)')
    assert result is NULL
    assert capsys.readouterr().out == 'hello\n2\n[1, "a"]\ntrue\n'


def test_lookup_builtin():
    assert set(BUILTINS) == {"len", "first", "last", "rest", "push", "puts"}
    assert lookup_builtin("len").inspect() == "builtin function len"
    assert lookup_builtin("nope") is None
