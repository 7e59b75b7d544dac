from __future__ import annotations

import io
import sys

import pytest

from treelox.__main__ import main
from treelox.errors import DiagnosticKind
from treelox.lox import Lox


def run_script(tmp_path, capsys, source: str) -> tuple[int, str, str]:
    script = tmp_path / "script.lox"
    script.write_text(source)

    code = 0
    try:
        main([str(script)])
    except SystemExit as error:
        code = error.code

    captured = capsys.readouterr()
    return code, captured.out, captured.err


def test_script_runs(tmp_path, capsys) -> None:
    code, out, err = run_script(tmp_path, capsys, 'var greeting = "hi";\nprint greeting + "!";\n')

    assert code == 0
    assert out == "hi!\n"
    assert err == ""


def test_syntax_error_exit_code(tmp_path, capsys) -> None:
    code, out, err = run_script(tmp_path, capsys, "print 1;\nprint (;\n")

    assert code == 65
    assert out == ""
    assert err == "[line 2] Error at ';': Expect expression.\n"


def test_runtime_error_exit_code(tmp_path, capsys) -> None:
    code, out, err = run_script(tmp_path, capsys, 'print "ok";\nprint -"no";\n')

    assert code == 70
    assert out == "ok\n"
    assert err == "Operand must be a number.\n[line 2]\n"


def test_usage(capsys) -> None:
    with pytest.raises(SystemExit) as info:
        main(["a.lox", "b.lox"])

    assert info.value.code == 64
    assert capsys.readouterr().out == "Usage: treelox [script]\n"


def test_prompt_shares_state_between_lines(monkeypatch, capsys) -> None:
    lines = iter(["var a = 1;", "print a + 1;", "print missing;", "print a;"])

    def fake_input(prompt: str) -> str:
        try:
            return next(lines)
        except StopIteration:
            raise EOFError

    monkeypatch.setattr("builtins.input", fake_input)

    main([])

    captured = capsys.readouterr()
    assert captured.out == "2\n1\n\n"
    assert captured.err == "Undefined variable 'missing'.\n[line 1]\n"


def test_run_returns_fresh_diagnostics_each_time() -> None:
    lox = Lox(output=io.StringIO(), errors=io.StringIO())

    first = lox.run("print ;")
    second = lox.run("print 1;")

    assert first.had_error
    assert first.records[0].kind is DiagnosticKind.SYNTAX
    assert not second.had_error
    assert second.records == []


def test_run_reports_runtime_kind() -> None:
    lox = Lox(output=io.StringIO(), errors=io.StringIO())

    diagnostics = lox.run("print nil * 2;")

    assert diagnostics.records[0].kind is DiagnosticKind.RUNTIME
    assert diagnostics.records[0].line == 1


def test_run_restores_recursion_limit() -> None:
    before = sys.getrecursionlimit()
    lox = Lox(output=io.StringIO(), errors=io.StringIO())

    lox.run("print ((((1))));")
    lox.run("print ;")

    assert sys.getrecursionlimit() == before
