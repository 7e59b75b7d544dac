import sys
from dataclasses import dataclass
from enum import Enum, auto
from typing import Final, TextIO

from treelox.tokens import Token, TokenType as TT


class LoxRuntimeError(Exception):
    token: Final[Token | None]

    def __init__(self, token: Token | None, message: str) -> None:
        super().__init__(message)
        self.token = token


class DiagnosticKind(Enum):
    SYNTAX = auto()
    RUNTIME = auto()


@dataclass(frozen=True)
class Diagnostic:
    kind: DiagnosticKind
    line: int | None
    where: str
    message: str

    def __str__(self) -> str:
        if self.kind is DiagnosticKind.RUNTIME:
            if self.line is None:
                return self.message
            return f"{self.message}\n[line {self.line}]"

        return f"[line {self.line}] Error{self.where}: {self.message}"


class Diagnostics:
    """Collects the errors reported while running one piece of source.

    The scanner and parser report syntax-stage problems through ``error``,
    the interpreter reports at most one ``runtime_error`` per run. Every
    report is printed to ``stream`` (stderr unless given) and recorded, and
    the caller inspects ``had_error``/``had_runtime_error`` afterwards.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self.stream = stream
        self.records: list[Diagnostic] = []
        self.had_error = False
        self.had_runtime_error = False

    def error(self, where: int | Token, message: str) -> None:
        if isinstance(where, int):
            self.report(where, "", message)
        else:
            if where.type == TT.EOF:
                self.report(where.line, " at end", message)
            else:
                self.report(where.line, f" at '{where.lexeme}'", message)

    def report(self, line: int, where: str, message: str) -> None:
        self._emit(Diagnostic(DiagnosticKind.SYNTAX, line, where, message))
        self.had_error = True

    def runtime_error(self, error: LoxRuntimeError) -> None:
        line = error.token.line if error.token is not None else None
        self._emit(Diagnostic(DiagnosticKind.RUNTIME, line, "", str(error)))
        self.had_runtime_error = True

    def _emit(self, diagnostic: Diagnostic) -> None:
        self.records.append(diagnostic)
        print(diagnostic, file=self.stream if self.stream is not None else sys.stderr)
