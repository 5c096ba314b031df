import pytest

from monkey.ast.nodes import IntegerLiteral, InfixExpression
from monkey.types.objects import Quote, Error, Integer, Boolean, String, TRUE
from monkey.evaluation.quote_unquote import convert_object_to_node


@pytest.mark.parametrize(
    "source,expected",
    [
        ("quote(5)", "5"),
        ("quote(5 + 8)", "(5 + 8)"),
        ("quote(foobar)", "foobar"),
        ("quote(foobar + barfoo)", "(foobar + barfoo)"),
    ],
)
def test_quote(run, source, expected):
    result = run(source)
    assert isinstance(result, Quote)
    assert str(result.node) == expected


@pytest.mark.parametrize(
    "source,expected",
    [
        ("quote(unquote(4))", "4"),
        ("quote(unquote(4 + 4))", "8"),
        ("quote(8 + unquote(4 + 4))", "(8 + 8)"),
        ("quote(unquote(4 + 4) + 8)", "(8 + 8)"),
        ("let foobar = 8; quote(foobar)", "foobar"),
        ("let foobar = 8; quote(unquote(foobar))", "8"),
        ("quote(unquote(true))", "true"),
        ("quote(unquote(true == false))", "false"),
        ("quote(unquote(quote(4 + 4)))", "(4 + 4)"),
        (
            "let quotedInfixExpression = quote(4 + 4);"
            "quote(unquote(4 + 4) + unquote(quotedInfixExpression))",
            "(8 + (4 + 4))",
        ),
    ],
)
def test_quote_unquote(run, source, expected):
    result = run(source)
    assert isinstance(result, Quote)
    assert str(result.node) == expected


def test_unquote_inside_nested_structures(run):
    result = run("let x = 3; quote([1, unquote(x), fn(a) { a + unquote(x * 2) }])")
    assert str(result.node) == "[1, 3, fn(a) (a + 6)]"


def test_unquote_uses_the_calling_environment(run):
    source = """
    let make = fn(n) { quote(unquote(n) * unquote(n)) };
    make(7);
    """
    assert str(run(source).node) == "(7 * 7)"


def test_quote_inside_function_is_rebuilt_on_every_call(run):
    source = """
    let make = fn(n) { quote(unquote(n) + 1) };
    let a = make(1);
    let b = make(2);
    [a, b];
    """
    a, b = run(source).elements
    assert str(a.node) == "(1 + 1)"
    assert str(b.node) == "(2 + 1)"


def test_quote_inspect(run):
    assert run("quote(1 + 2)").inspect() == "QUOTE((1 + 2))"


@pytest.mark.parametrize(
    "source,message",
    [
        ("quote(1, 2)", "wrong number of arguments to quote: want=1, got=2"),
        ("quote()", "wrong number of arguments to quote: want=1, got=0"),
        ('quote(unquote("s"))', "unquote: cannot convert STRING to an AST node"),
        ("quote(unquote([1]))", "unquote: cannot convert ARRAY to an AST node"),
        ("quote(unquote(1, 2))", "wrong number of arguments to unquote: want=1, got=2"),
        ("quote(unquote(missing))", "identifier not found: missing"),
    ],
)
def test_quote_errors(run, source, message):
    result = run(source)
    assert isinstance(result, Error)
    assert result.message == message


def test_convert_object_to_node():
    node = convert_object_to_node(Integer(42))
    assert isinstance(node, IntegerLiteral)
    assert node.value == 42 and node.token_literal() == "42"
    assert str(convert_object_to_node(TRUE)) == "true"
    assert str(convert_object_to_node(Boolean(False))) == "false"

    wrapped = InfixExpression(
        IntegerLiteral(1), "+", IntegerLiteral(2)
    )
    assert convert_object_to_node(Quote(wrapped)) is wrapped

    err = convert_object_to_node(String("x"))
    assert isinstance(err, Error)
