from monkey.types.environment import Environment, new_environment, new_enclosed_environment
from monkey.types.objects import Integer


def test_get_reports_missing_names():
    env = new_environment()
    assert env.get("x") is None
    assert "x" not in env


def test_lookup_walks_outward():
    outer = new_environment()
    outer.set("x", Integer(1))
    inner = new_enclosed_environment(outer)
    assert inner.get("x").value == 1
    assert inner.find("x") is outer


def test_set_always_defines_locally():
    outer = new_environment()
    outer.set("x", Integer(1))
    inner = new_enclosed_environment(outer)
    inner.set("x", Integer(2))
    assert inner.get("x").value == 2
    assert outer.get("x").value == 1


def test_str_and_repr_show_the_chain():
    outer = Environment()
    outer.set("a", Integer(1))
    inner = Environment(outer)
    inner.set("b", Integer(2))
    assert str(inner) == "{b: 2} -> ..."
    assert repr(inner) == "<Environment chain: {b: 2} -> {a: 1}>"
