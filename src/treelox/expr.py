from dataclasses import dataclass
from typing import Any

from treelox.tokens import Token
from treelox.visitor import Visitable


@dataclass(frozen=True)
class Expr(Visitable):
    ...

@dataclass(frozen=True)
class Assign(Expr):
    name: Token
    value: Expr

@dataclass(frozen=True)
class Binary(Expr):
    left: Expr
    operator: Token
    right: Expr

@dataclass(frozen=True)
class Grouping(Expr):
    expression: Expr

@dataclass(frozen=True)
class Literal(Expr):
    value: Any

@dataclass(frozen=True)
class Logical(Expr):
    left: Expr
    operator: Token
    right: Expr

@dataclass(frozen=True)
class Unary(Expr):
    operator: Token
    right: Expr

@dataclass(frozen=True)
class Variable(Expr):
    name: Token


VARIANTS: tuple[type[Expr], ...] = (
    Assign, Binary, Grouping, Literal, Logical, Unary, Variable,
)
