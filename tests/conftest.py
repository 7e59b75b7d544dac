from __future__ import annotations

import io
from dataclasses import dataclass
from typing import Callable

import pytest

from treelox.errors import Diagnostics
from treelox.lox import Lox
from treelox.parser import Parser
from treelox.scanner import Scanner
from treelox import stmt as st


@dataclass(frozen=True)
class RunResult:
    """Captured effects of one ``Lox.run`` call."""

    output: str
    errors: str
    diagnostics: Diagnostics

    @property
    def lines(self) -> list[str]:
        return self.output.splitlines()


@pytest.fixture
def run() -> Callable[[str], RunResult]:
    """Run sources against one shared Lox instance, like REPL lines."""
    lox = Lox(output=io.StringIO(), errors=io.StringIO())

    def _run(source: str) -> RunResult:
        lox.interpreter.output = io.StringIO()
        lox.errors = io.StringIO()
        diagnostics = lox.run(source)
        return RunResult(
            lox.interpreter.output.getvalue(),
            lox.errors.getvalue(),
            diagnostics,
        )

    return _run


@pytest.fixture
def parse() -> Callable[[str], tuple[list[st.Stmt], Diagnostics]]:
    """Scan and parse a source, collecting diagnostics quietly."""

    def _parse(source: str) -> tuple[list[st.Stmt], Diagnostics]:
        diagnostics = Diagnostics(io.StringIO())
        tokens = Scanner(source, diagnostics).scan_tokens()
        return Parser(tokens, diagnostics).parse(), diagnostics

    return _parse
