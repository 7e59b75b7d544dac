import math
from functools import singledispatchmethod
from typing import Any, TextIO, override

from treelox.environment import Environment
from treelox.errors import Diagnostics, LoxRuntimeError
import treelox.expr as ex
from treelox import stmt as st
from treelox.tokens import Token, TokenType as TT
from treelox.visitor import Visitor, Visitable


class Interpreter(Visitor[Any]):
    globals: Environment
    environment: Environment

    def __init__(self, output: TextIO | None = None) -> None:
        self.globals = Environment()
        self.environment = self.globals
        self.output = output

    def interpret(self, statements: list[st.Stmt], diagnostics: Diagnostics) -> None:
        """Execute ``statements`` in order.

        The first runtime error stops the run and is reported once;
        output already printed by earlier statements stays.
        """
        try:
            for statement in statements:
                self.execute(statement)
        except LoxRuntimeError as error:
            diagnostics.runtime_error(error)
        except RecursionError:
            diagnostics.runtime_error(LoxRuntimeError(None, "Too much nesting."))

    @singledispatchmethod
    @override
    def visit(self, obj: Visitable) -> Any:
        raise NotImplementedError(f"'{obj.__class__.__name__}' could not be dispatched by visit()")

    @visit.register
    def _(self, expr: ex.Literal) -> Any:
        return expr.value

    @visit.register
    def _(self, expr: ex.Unary) -> Any:
        right = self.evaluate(expr.right)

        match expr.operator.type:
            case TT.BANG:
                return not self.is_truthy(right)
            case TT.MINUS:
                self.check_number_operands(expr.operator, right)
                return -right

        raise LoxRuntimeError(expr.operator, f"Unknown unary operator '{expr.operator.lexeme}'.")

    @visit.register
    def _(self, expr: ex.Binary) -> Any:
        left = self.evaluate(expr.left)
        right = self.evaluate(expr.right)

        match expr.operator.type:
            case TT.BANG_EQUAL:
                return not self.is_equal(left, right)
            case TT.EQUAL_EQUAL:
                return self.is_equal(left, right)
            case TT.PLUS:
                if self.is_number(left) and self.is_number(right):
                    return left + right
                if isinstance(left, str) and isinstance(right, str):
                    return left + right
                raise LoxRuntimeError(expr.operator,
                                      "Operands must be two numbers or two strings.")

        self.check_number_operands(expr.operator, left, right)

        match expr.operator.type:
            case TT.GREATER:
                return left > right
            case TT.GREATER_EQUAL:
                return left >= right
            case TT.LESS:
                return left < right
            case TT.LESS_EQUAL:
                return left <= right
            case TT.MINUS:
                return left - right
            case TT.SLASH:
                return self.divide(left, right)
            case TT.STAR:
                return left * right

        raise LoxRuntimeError(expr.operator, f"Unknown binary operator '{expr.operator.lexeme}'.")

    @visit.register
    def _(self, expr: ex.Grouping) -> Any:
        return self.evaluate(expr.expression)

    @visit.register
    def _(self, expr: ex.Variable) -> Any:
        return self.environment.get(expr.name)

    @visit.register
    def _(self, expr: ex.Assign) -> Any:
        value = self.evaluate(expr.value)
        self.environment.assign(expr.name, value)
        return value

    @visit.register
    def _(self, expr: ex.Logical) -> Any:
        left = self.evaluate(expr.left)

        if expr.operator.type == TT.OR:
            if self.is_truthy(left):
                return left
        else:
            if not self.is_truthy(left):
                return left

        return self.evaluate(expr.right)

    @visit.register
    def _(self, stmt: st.Expression) -> None:
        self.evaluate(stmt.expression)

    @visit.register
    def _(self, stmt: st.If) -> None:
        if self.is_truthy(self.evaluate(stmt.condition)):
            self.execute(stmt.then_branch)
        elif stmt.else_branch is not None:
            self.execute(stmt.else_branch)

    @visit.register
    def _(self, stmt: st.Print) -> None:
        value = self.evaluate(stmt.expression)
        print(self.stringify(value), file=self.output)

    @visit.register
    def _(self, stmt: st.Var) -> None:
        value = None
        if stmt.initializer is not None:
            value = self.evaluate(stmt.initializer)

        self.environment.define(stmt.name.lexeme, value)

    @visit.register
    def _(self, stmt: st.Block) -> None:
        self.execute_block(stmt.statements, Environment(self.environment))

    @staticmethod
    def is_truthy(obj: Any) -> bool:
        # Compared by identity so that 0 is not mistaken for false.
        return obj is not None and obj is not False

    @staticmethod
    def is_equal(a: Any, b: Any) -> bool:
        if type(a) is not type(b):
            return False
        # NaN is equal to itself, like every other value.
        return a == b or (a != a and b != b)

    def evaluate(self, expr: ex.Expr) -> Any:
        return expr.accept(self)

    def execute(self, stmt: st.Stmt) -> None:
        stmt.accept(self)

    def execute_block(self, statements: list[st.Stmt], environment: Environment) -> None:
        previous = self.environment

        try:
            self.environment = environment

            for statement in statements:
                self.execute(statement)
        finally:
            self.environment = previous

    @staticmethod
    def is_number(num: Any) -> bool:
        return isinstance(num, float)

    @staticmethod
    def divide(left: float, right: float) -> float:
        if right == 0:
            if left == 0 or math.isnan(left):
                return math.nan
            return math.copysign(math.inf, left) * math.copysign(1.0, right)
        return left / right

    def check_number_operands(self, operator: Token, *operands: Any) -> None:
        if not all(map(self.is_number, operands)):
            if len(operands) > 1:
                raise LoxRuntimeError(operator, "Operands must be numbers.")

            raise LoxRuntimeError(operator, "Operand must be a number.")

    @staticmethod
    def stringify(obj: Any) -> str:
        match obj:
            case None:
                return "nil"
            case bool(b):
                return str(b).lower()
            case float(num) if num.is_integer():
                return f"{num:.0f}"
            case _:
                return str(obj)
