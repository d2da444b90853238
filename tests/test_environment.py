import pytest

from llama.types.datum import Number, String
from llama.types.environment import Environment, EMPTY_ENVIRONMENT
from llama.types.symbol import Symbol


@pytest.fixture
def outer():
    return Environment({"a": Number("1"), "b": Number("2")})


def test_lookup_in_own_frame(outer):
    assert outer.lookup("a") == Number("1")
    assert outer.lookup(Symbol("b")) == Number("2")


def test_lookup_walks_parent_chain(outer):
    inner = outer.child({"c": String("three")})
    assert inner.lookup("c") == String("three")
    assert inner.lookup("a") == Number("1")


def test_inner_binding_shadows_outer(outer):
    inner = outer.child({"a": String("shadow")})
    assert inner.lookup("a") == String("shadow")
    assert outer.lookup("a") == Number("1")


def test_lookup_not_found_returns_none(outer):
    assert outer.lookup("missing") is None
    assert EMPTY_ENVIRONMENT.lookup("anything") is None


def test_local_only_checks_innermost_frame(outer):
    inner = outer.child({"c": Number("3")})
    assert inner.local("c") == Number("3")
    assert inner.local("a") is None


def test_child_does_not_change_parent(outer):
    outer.child({"z": Number("9")})
    assert "z" not in outer
    assert set(outer.bindings) == {"a", "b"}


def test_bindings_are_read_only(outer):
    with pytest.raises(TypeError):
        outer.bindings["a"] = Number("5")


def test_constructor_copies_bindings():
    source = {"x": Number("1")}
    env = Environment(source)
    source["x"] = Number("2")
    assert env.lookup("x") == Number("1")


def test_symbol_keys_are_normalized():
    env = Environment({Symbol("x"): Number("1")})
    assert env.lookup("x") == Number("1")
    assert env.find(Symbol("x")) is env


def test_str_and_repr(outer):
    inner = outer.child({"c": Number("3")})
    assert str(inner) == "{c: 3} -> ..."
    assert repr(inner) == "<Environment chain: {c: 3} -> {a: 1, b: 2}>"
