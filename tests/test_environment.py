from __future__ import annotations

import pytest

from treelox.environment import Environment
from treelox.errors import LoxRuntimeError
from treelox.tokens import Token, TokenType as TT


def name(lexeme: str, line: int = 1) -> Token:
    return Token(TT.IDENTIFIER, lexeme, line)


def test_define_and_get() -> None:
    env = Environment()
    env.define("a", 1.0)

    assert env.get(name("a")) == 1.0


def test_define_overwrites_in_same_scope() -> None:
    env = Environment()
    env.define("a", 1.0)
    env.define("a", "two")

    assert env.get(name("a")) == "two"


def test_get_walks_enclosing_chain() -> None:
    root = Environment()
    root.define("a", 1.0)
    inner = Environment(Environment(root))

    assert inner.get(name("a")) == 1.0


def test_shadowing_leaves_enclosing_binding_alone() -> None:
    root = Environment()
    root.define("x", 1.0)
    inner = Environment(root)
    inner.define("x", 2.0)

    assert inner.get(name("x")) == 2.0
    assert root.get(name("x")) == 1.0


def test_assign_mutates_nearest_defining_scope() -> None:
    root = Environment()
    root.define("x", 1.0)
    middle = Environment(root)
    middle.define("x", 2.0)
    inner = Environment(middle)

    inner.assign(name("x"), 3.0)

    assert middle.get(name("x")) == 3.0
    assert root.get(name("x")) == 1.0
    assert "x" not in inner.values


def test_nil_binding_counts_as_defined() -> None:
    env = Environment()
    env.define("a", None)

    assert env.get(name("a")) is None
    env.assign(name("a"), 1.0)
    assert env.get(name("a")) == 1.0


def test_get_undefined_raises_with_token() -> None:
    env = Environment(Environment())
    token = name("missing", line=7)

    with pytest.raises(LoxRuntimeError, match=r"^Undefined variable 'missing'\.$") as info:
        env.get(token)

    assert info.value.token is token


def test_assign_undefined_does_not_create_binding() -> None:
    root = Environment()
    inner = Environment(root)

    with pytest.raises(LoxRuntimeError, match="Undefined variable 'ghost'"):
        inner.assign(name("ghost"), 1.0)

    assert "ghost" not in inner.values
    assert "ghost" not in root.values
