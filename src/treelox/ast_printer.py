from decimal import Decimal
from functools import singledispatchmethod
from typing import override

import treelox.expr as ex
from treelox import stmt as st
from treelox.visitor import Visitor, Visitable


def format_number(value: float) -> str:
    """Render a number the way the scanner can read it back."""
    if value.is_integer():
        return str(int(value))
    # repr keeps the shortest round-tripping digits, Decimal drops the exponent.
    return format(Decimal(repr(value)), "f")


class AstPrinter(Visitor[str]):
    """Lisp-style dump of a tree, for debugging."""

    def print(self, node: ex.Expr | st.Stmt) -> str:
        return node.accept(self)

    @singledispatchmethod
    @override
    def visit(self, _: Visitable) -> str:
        raise NotImplementedError()

    @visit.register
    def _(self, expr: ex.Assign) -> str:
        return self.parenthesize(f"= {expr.name.lexeme}", expr.value)

    @visit.register
    def _(self, expr: ex.Binary) -> str:
        return self.parenthesize(expr.operator.lexeme, expr.left, expr.right)

    @visit.register
    def _(self, expr: ex.Grouping) -> str:
        return self.parenthesize("group", expr.expression)

    @visit.register
    def _(self, expr: ex.Literal) -> str:
        match expr.value:
            case None:
                return "nil"
            case bool(b):
                return str(b).lower()
            case str(s):
                return f'"{s}"'
            case _:
                return str(expr.value)

    @visit.register
    def _(self, expr: ex.Logical) -> str:
        return self.parenthesize(expr.operator.lexeme, expr.left, expr.right)

    @visit.register
    def _(self, expr: ex.Unary) -> str:
        return self.parenthesize(expr.operator.lexeme, expr.right)

    @visit.register
    def _(self, expr: ex.Variable) -> str:
        return expr.name.lexeme

    @visit.register
    def _(self, stmt: st.Block) -> str:
        return self.parenthesize("block", *stmt.statements)

    @visit.register
    def _(self, stmt: st.Expression) -> str:
        return self.parenthesize(";", stmt.expression)

    @visit.register
    def _(self, stmt: st.If) -> str:
        if stmt.else_branch is None:
            return self.parenthesize("if", stmt.condition, stmt.then_branch)
        return self.parenthesize("if-else", stmt.condition, stmt.then_branch, stmt.else_branch)

    @visit.register
    def _(self, stmt: st.Print) -> str:
        return self.parenthesize("print", stmt.expression)

    @visit.register
    def _(self, stmt: st.Var) -> str:
        if stmt.initializer is None:
            return f"(var {stmt.name.lexeme})"
        return self.parenthesize(f"var {stmt.name.lexeme}", stmt.initializer)

    def parenthesize(self, name: str, *nodes: ex.Expr | st.Stmt) -> str:
        content = " ".join([node.accept(self) for node in nodes])

        return f"({name} {content})" if content else f"({name})"


class SourcePrinter(Visitor[str]):
    """Print a tree back as source text.

    Parentheses come only from Grouping nodes, so parsing the output gives
    back the same tree.
    """

    def print(self, node: ex.Expr | st.Stmt) -> str:
        return node.accept(self)

    @singledispatchmethod
    @override
    def visit(self, _: Visitable) -> str:
        raise NotImplementedError()

    @visit.register
    def _(self, expr: ex.Assign) -> str:
        return f"{expr.name.lexeme} = {expr.value.accept(self)}"

    @visit.register
    def _(self, expr: ex.Binary) -> str:
        return f"{expr.left.accept(self)} {expr.operator.lexeme} {expr.right.accept(self)}"

    @visit.register
    def _(self, expr: ex.Grouping) -> str:
        return f"({expr.expression.accept(self)})"

    @visit.register
    def _(self, expr: ex.Literal) -> str:
        match expr.value:
            case None:
                return "nil"
            case bool(b):
                return str(b).lower()
            case float(num):
                return format_number(num)
            case _:
                return f'"{expr.value}"'

    @visit.register
    def _(self, expr: ex.Logical) -> str:
        return f"{expr.left.accept(self)} {expr.operator.lexeme} {expr.right.accept(self)}"

    @visit.register
    def _(self, expr: ex.Unary) -> str:
        return f"{expr.operator.lexeme}{expr.right.accept(self)}"

    @visit.register
    def _(self, expr: ex.Variable) -> str:
        return expr.name.lexeme

    @visit.register
    def _(self, stmt: st.Block) -> str:
        body = " ".join(statement.accept(self) for statement in stmt.statements)
        return f"{{ {body} }}" if body else "{ }"

    @visit.register
    def _(self, stmt: st.Expression) -> str:
        return f"{stmt.expression.accept(self)};"

    @visit.register
    def _(self, stmt: st.If) -> str:
        text = f"if ({stmt.condition.accept(self)}) {stmt.then_branch.accept(self)}"
        if stmt.else_branch is not None:
            text += f" else {stmt.else_branch.accept(self)}"
        return text

    @visit.register
    def _(self, stmt: st.Print) -> str:
        return f"print {stmt.expression.accept(self)};"

    @visit.register
    def _(self, stmt: st.Var) -> str:
        if stmt.initializer is None:
            return f"var {stmt.name.lexeme};"
        return f"var {stmt.name.lexeme} = {stmt.initializer.accept(self)};"
