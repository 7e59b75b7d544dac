import os
import sys
from contextlib import contextmanager
from typing import TextIO

from treelox.errors import Diagnostics
from treelox.interpreter import Interpreter
from treelox.parser import Parser
from treelox.scanner import Scanner

# The parser and interpreter recurse once per nesting level.
RECURSION_LIMIT = 10_000


@contextmanager
def recursion_limit(limit: int):
    previous = sys.getrecursionlimit()
    try:
        sys.setrecursionlimit(max(limit, previous))
        yield
    finally:
        sys.setrecursionlimit(previous)


class Lox:
    """Runs source text through the scanner, parser and interpreter.

    One interpreter is kept for the lifetime of the instance, so globals
    defined by one ``run`` are visible to the next, as in the REPL.
    """

    def __init__(self, output: TextIO | None = None, errors: TextIO | None = None) -> None:
        self.interpreter = Interpreter(output)
        self.errors = errors

    def run_file(self, path: str | os.PathLike) -> Diagnostics:
        with open(path, "r") as file:
            prog = file.read()
            return self.run(prog)

    def run_prompt(self) -> None:
        try:
            while True:
                line = input("> ")
                self.run(line)
        except EOFError:
            print()

    def run(self, source: str) -> Diagnostics:
        diagnostics = Diagnostics(self.errors)

        scanner = Scanner(source, diagnostics)
        tokens = scanner.scan_tokens()

        with recursion_limit(RECURSION_LIMIT):
            parser = Parser(tokens, diagnostics)
            statements = parser.parse()

            if diagnostics.had_error:
                return diagnostics

            self.interpreter.interpret(statements, diagnostics)

        return diagnostics
