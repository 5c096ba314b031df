import pytest
from hypothesis import HealthCheck, given, settings, strategies as st

from monkey.types.objects import (
    Integer,
    String,
    Boolean,
    Array,
    Hash,
    Function,
    Builtin,
    Error,
    TRUE,
    FALSE,
    NULL,
    ReturnValue,
    is_error,
    is_control_signal,
)
from monkey.evaluation.evaluator import evaluate

# -----------------------------------------------------
# Literals and operators
# -----------------------------------------------------

@settings(suppress_health_check=[HealthCheck.function_scoped_fixture])
@given(st.integers(min_value=0, max_value=2**63))
def test_integer_literals_evaluate_to_themselves(run, n):
    result = run(str(n))
    assert isinstance(result, Integer)
    assert result.value == n


@pytest.mark.parametrize(
    "source,expected",
    [
        ("5", 5),
        ("-5", -5),
        ("--10", 10),
        ("5 + 5 + 5 + 5 - 10", 10),
        ("2 * 2 * 2 * 2 * 2", 32),
        ("-50 + 100 + -50", 0),
        ("5 * 2 + 10", 20),
        ("5 + 2 * 10", 25),
        ("50 / 2 * 2 + 10", 60),
        ("2 * (5 + 10)", 30),
        ("3 * 3 * 3 + 10", 37),
        ("(5 + 10 * 2 + 15 / 3) * 2 + -10", 50),
        ("7 / 2", 3),
        ("-7 / 2", -3),
        ("7 / -2", -3),
    ],
)
def test_integer_expressions(run, source, expected):
    result = run(source)
    assert isinstance(result, Integer)
    assert result.value == expected


@pytest.mark.parametrize(
    "source,expected",
    [
        ("true", True),
        ("false", False),
        ("1 < 2", True),
        ("1 > 2", False),
        ("1 == 1", True),
        ("1 != 1", False),
        ("1 != 2", True),
        ("true == true", True),
        ("true != false", True),
        ("false == false", True),
        ("(1 < 2) == true", True),
        ("(1 > 2) == true", False),
        ("1 == true", False),
    ],
)
def test_boolean_expressions(run, source, expected):
    result = run(source)
    assert result is (TRUE if expected else FALSE)


def test_booleans_are_singletons(run):
    assert run("true") is TRUE
    assert run("1 < 2") is TRUE
    assert run("false") is FALSE


@pytest.mark.parametrize(
    "source,expected",
    [
        ("!true", False),
        ("!false", True),
        ("!5", False),
        ("!!true", True),
        ("!!5", True),
        ("!if (false) { 1 }", True),
    ],
)
def test_bang_operator_uses_truthiness(run, source, expected):
    assert run(source) is (TRUE if expected else FALSE)


def test_string_literals_and_concatenation(run):
    assert run('"Hello World!"').value == "Hello World!"
    result = run('"Hello" + " " + "World!"')
    assert isinstance(result, String)
    assert result.value == "Hello World!"


# -----------------------------------------------------
# Conditionals and return
# -----------------------------------------------------

@pytest.mark.parametrize(
    "source,expected",
    [
        ("if (true) { 10 }", 10),
        ("if (false) { 10 }", None),
        ("if (1) { 10 }", 10),
        ("if (1 < 2) { 10 }", 10),
        ("if (1 > 2) { 10 }", None),
        ("if (1 > 2) { 10 } else { 20 }", 20),
        ("if (1 < 2) { 10 } else { 20 }", 10),
    ],
)
def test_if_else_expressions(run, source, expected):
    result = run(source)
    if expected is None:
        assert result is NULL
    else:
        assert result.value == expected


@pytest.mark.parametrize(
    "source,expected",
    [
        ("return 10;", 10),
        ("return 10; 9;", 10),
        ("return 2 * 5; 9;", 10),
        ("9; return 2 * 5; 9;", 10),
        ("if (10 > 1) { if (10 > 1) { return 10; } return 1; }", 10),
        ("let f = fn(x) { return x; x + 10; }; f(10);", 10),
        ("let f = fn(x) { let result = x + 10; return result; return 10; }; f(10);", 20),
    ],
)
def test_return_statements(run, source, expected):
    result = run(source)
    assert isinstance(result, Integer)
    assert result.value == expected


@pytest.mark.parametrize(
    "source,expected",
    [
        ("let x = if (true) { return 5 }; x + 1", 5),
        ("let f = fn() { let a = [if (true) { return 1 }]; a }; f()", 1),
        ("let f = fn() { let h = {1: if (true) { return 2 }}; h }; f()", 2),
        ("let f = fn() { -(if (true) { return 3 }) }; f()", 3),
        ("let f = fn() { 1 + if (true) { return 4 } }; f()", 4),
        ("let f = fn() { [1][if (true) { return 5 }] }; f()", 5),
        ("let f = fn() { if (if (true) { return 6 }) { 0 } }; f()", 6),
        ("let f = fn(x) { x }; let g = fn() { f(if (true) { return 7 }) }; g()", 7),
    ],
)
def test_return_unwinds_through_enclosing_expressions(run, source, expected):
    result = run(source)
    assert isinstance(result, Integer)
    assert result.value == expected


def test_return_inside_if_is_never_bound(env, parse_ok):
    evaluate(parse_ok("let x = if (true) { return 5 };"), env)
    assert env.get("x") is None


def test_error_and_return_wrappers_are_control_signals():
    assert is_error(Error("boom"))
    assert not is_error(None)
    assert not is_error(ReturnValue(Error("boom")))
    assert is_control_signal(Error("boom"))
    assert is_control_signal(ReturnValue(Integer(1)))
    assert not is_control_signal(NULL)
    assert not is_control_signal(None)


# -----------------------------------------------------
# Errors
# -----------------------------------------------------

@pytest.mark.parametrize(
    "source,message",
    [
        ("5 + true;", "type mismatch: INTEGER + BOOLEAN"),
        ("5 + true; 5;", "type mismatch: INTEGER + BOOLEAN"),
        ("-true", "unknown operator: -BOOLEAN"),
        ("true + false;", "unknown operator: BOOLEAN + BOOLEAN"),
        ("5; true + false; 5", "unknown operator: BOOLEAN + BOOLEAN"),
        ("if (10 > 1) { true + false; }", "unknown operator: BOOLEAN + BOOLEAN"),
        ("if (10 > 1) { if (10 > 1) { return true + false; } return 1; }",
         "unknown operator: BOOLEAN + BOOLEAN"),
        ("foobar", "identifier not found: foobar"),
        ('"Hello" - "World"', "unknown operator: STRING - STRING"),
        ('{"name": "Monkey"}[fn(x) { x }];', "unusable as hash key: FUNCTION"),
        ('{fn(x) { x }: 1}', "unusable as hash key: FUNCTION"),
        ("5(1)", "not a function: INTEGER"),
        ("1[0]", "index operator not supported: INTEGER"),
        ("1 / 0", "division by zero"),
        ("let f = fn(a, b) { a }; f(1)", "wrong number of arguments: want=2, got=1"),
        ("let f = fn() { 1 }; f(1)", "wrong number of arguments: want=0, got=1"),
        ("unquote(1)", "identifier not found: unquote"),
        ("[1, foo, 3]", "identifier not found: foo"),
        ("len(1, bar)", "identifier not found: bar"),
        ("let x = -true; 5", "unknown operator: -BOOLEAN"),
    ],
)
def test_error_handling(run, source, message):
    result = run(source)
    assert isinstance(result, Error)
    assert result.message == message


def test_not_found_error_mentions_not_found(run):
    result = run("foobar")
    assert "not found" in result.inspect()


def test_errors_stop_evaluation_of_later_arguments(run, capsys):
    result = run('let f = fn(a, b) { a }; f(nope, puts("never"))')
    assert result.message == "identifier not found: nope"
    assert capsys.readouterr().out == ""


# -----------------------------------------------------
# Bindings, functions and closures
# -----------------------------------------------------

@pytest.mark.parametrize(
    "source,expected",
    [
        ("let a = 5; a;", 5),
        ("let a = 5 * 5; a;", 25),
        ("let a = 5; let b = a; b;", 5),
        ("let a = 5; let b = a; let c = a + b + 5; c;", 15),
    ],
)
def test_let_statements(run, source, expected):
    assert run(source).value == expected


def test_let_statement_evaluates_to_null(run):
    assert run("let x = 5;") is NULL


def test_function_object(run):
    fn = run("fn(x) { x + 2; };")
    assert isinstance(fn, Function)
    assert [p.value for p in fn.parameters] == ["x"]
    assert str(fn.body) == "(x + 2)"


@pytest.mark.parametrize(
    "source,expected",
    [
        ("let identity = fn(x) { x; }; identity(5);", 5),
        ("let identity = fn(x) { return x; }; identity(5);", 5),
        ("let double = fn(x) { x * 2; }; double(5);", 10),
        ("let add = fn(x, y) { x + y; }; add(5, 5);", 10),
        ("let add = fn(x, y) { x + y; }; add(5 + 5, add(5, 5));", 20),
        ("fn(x) { x; }(5)", 5),
    ],
)
def test_function_application(run, source, expected):
    assert run(source).value == expected


def test_closures(run):
    source = """
    let newAdder = fn(x) { fn(y) { x + y } };
    let addTwo = newAdder(2);
    addTwo(3);
    """
    assert run(source).value == 5


def test_parameters_shadow_without_mutating_outer_scope(run):
    source = """
    let x = 10;
    let f = fn(x) { let x = x + 1; x };
    f(1) + x;
    """
    assert run(source).value == 12


def test_recursive_function(run):
    source = """
    let fib = fn(n) { if (n < 2) { n } else { fib(n - 1) + fib(n - 2) } };
    fib(15);
    """
    assert run(source).value == 610


def test_return_does_not_escape_function(run):
    source = "let f = fn() { return 1; }; let g = fn() { f(); 2 }; g();"
    assert run(source).value == 2


def test_user_bindings_shadow_builtins(run):
    assert isinstance(run("len"), Builtin)
    assert run("let len = fn(x) { 42 }; len([1, 2, 3])").value == 42


# -----------------------------------------------------
# Arrays and hashes
# -----------------------------------------------------

def test_array_literal(run):
    result = run("[1, 2 * 2, 3 + 3]")
    assert isinstance(result, Array)
    assert [e.value for e in result.elements] == [1, 4, 6]


@pytest.mark.parametrize(
    "source,expected",
    [
        ("[1, 2, 3][0]", 1),
        ("[1, 2, 3][1]", 2),
        ("[1, 2, 3][2]", 3),
        ("let i = 0; [1][i];", 1),
        ("[1, 2, 3][1 + 1];", 3),
        ("let myArray = [1, 2, 3]; myArray[2];", 3),
        ("let myArray = [1, 2, 3]; myArray[0] + myArray[1] + myArray[2];", 6),
        ("[1, 2, 3][3]", None),
        ("[1, 2, 3][-1]", None),
        ('[1, 2, 3]["0"]', None),
        ("[1, 2, 3][true]", None),
    ],
)
def test_array_index_expressions(run, source, expected):
    result = run(source)
    if expected is None:
        assert result is NULL
    else:
        assert result.value == expected


def test_hash_literals(run):
    source = """
    let two = "two";
    {
        "one": 10 - 9,
        two: 1 + 1,
        "thr" + "ee": 6 / 2,
        4: 4,
        true: 5,
        false: 6
    }
    """
    result = run(source)
    assert isinstance(result, Hash)
    expected = {
        String("one").hash_key(): 1,
        String("two").hash_key(): 2,
        String("three").hash_key(): 3,
        Integer(4).hash_key(): 4,
        TRUE.hash_key(): 5,
        FALSE.hash_key(): 6,
    }
    assert {k: pair.value.value for k, pair in result.pairs.items()} == expected


@pytest.mark.parametrize(
    "source,expected",
    [
        ('{"foo": 5}["foo"]', 5),
        ('{"foo": 5}["bar"]', None),
        ('let key = "foo"; {"foo": 5}[key]', 5),
        ('{}["foo"]', None),
        ("{5: 5}[5]", 5),
        ("{true: 5}[true]", 5),
        ("{false: 5}[false]", 5),
    ],
)
def test_hash_index_expressions(run, source, expected):
    result = run(source)
    if expected is None:
        assert result is NULL
    else:
        assert result.value == expected


def test_hash_keys_of_equal_content_are_equal():
    assert String("Hello World").hash_key() == String("Hello World").hash_key()
    assert String("Hello World").hash_key() != String("My name is johnny").hash_key()
    assert Integer(1).hash_key() == Integer(1).hash_key()
    assert Boolean(True).hash_key() == TRUE.hash_key()
    assert Integer(1).hash_key() != TRUE.hash_key()


def test_inspect_forms(run):
    assert run('[1, "a", true]').inspect() == '[1, "a", true]'
    assert run('{"a": 1}').inspect() == '{"a": 1}'
    assert run("if (false) { 1 }").inspect() == "null"
    assert run("foo").inspect() == "ERROR: identifier not found: foo"
