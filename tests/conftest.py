import pytest

from monkey.reader.parser import parse
from monkey.types.environment import Environment
from monkey.evaluation.evaluator import evaluate
from monkey.evaluation.macro_expansion import define_macros, expand_macros


def _parse_ok(source: str):
    program, errors = parse(source)
    assert errors == [], f"parser errors for {source!r}: {errors}"
    return program


@pytest.fixture
def parse_ok():
    """Parse a source string, failing the test on any syntax error."""
    return _parse_ok


@pytest.fixture
def env():
    """Return a fresh environment for each test."""
    return Environment()


@pytest.fixture
def run():
    """Evaluate a whole source unit (macros included) in a fresh session."""
    def _run(source: str):
        program = _parse_ok(source)
        macro_env = Environment()
        define_macros(program, macro_env)
        expanded = expand_macros(program, macro_env)
        return evaluate(expanded, Environment())
    return _run
