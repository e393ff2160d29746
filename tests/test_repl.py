import builtins
import io
import json

import pytest

import quill.repl
from quill.errors import VariableNotFound
from quill.repl import HELP_TEXT, Repl, process_line, run_repl
from quill.values import NumberVal


@pytest.fixture
def repl():
    session = Repl()
    yield session
    session.close()


def test_declarations_persist_between_lines(repl):
    repl.eval("fn add(x, y) { x + y }")
    repl.eval("let a = 3;")
    assert repl.eval("add(a, 4)") == NumberVal(7)


def test_empty_line_and_exit_end_the_session(repl):
    out = io.StringIO()
    assert process_line(repl, "", out) is False
    assert process_line(repl, "   ", out) is False
    assert process_line(repl, "exit", out) is False
    assert out.getvalue() == ''


def test_results_are_echoed(repl):
    out = io.StringIO()
    assert process_line(repl, "1 + 2", out)
    assert process_line(repl, "fn f() { 1 }", out)
    assert out.getvalue() == "3\n<fn f>\n"


def test_null_results_are_not_echoed(repl, capsys):
    out = io.StringIO()
    assert process_line(repl, "print(5)", out)
    assert out.getvalue() == ''
    assert capsys.readouterr().out == "5\n"


def test_errors_are_reported_and_session_continues(repl, capsys):
    out = io.StringIO()
    assert process_line(repl, "let a = 1;", out)
    assert process_line(repl, "let a = 2;", out)
    assert process_line(repl, "let b = ;", out)
    err = capsys.readouterr().err
    assert "Error: RedeclareVariable: cannot redeclare variable a" in err
    assert "Error: UnsupportedTokenType" in err
    assert process_line(repl, "a", out)
    assert out.getvalue() == "1\n1\n"


def test_vars_lists_user_declarations(repl):
    out = io.StringIO()
    process_line(repl, ":vars", out)
    assert out.getvalue() == "  (no variables defined)\n"

    repl.eval("let a = 1; const bb = { c: 2 };")
    out = io.StringIO()
    process_line(repl, ":vars", out)
    assert out.getvalue() == "  let   a  = 1\n  const bb = { c: 2 }\n"


def test_ast_command_prints_json(repl):
    out = io.StringIO()
    assert process_line(repl, ":ast x = 2", out)
    assert json.loads(out.getvalue()) == {
        "type": "Program",
        "body": [{
            "type": "AssignmentExpr",
            "assignee": {"type": "Identifier", "symbol": "x"},
            "value": {"type": "NumericLiteral", "value": "2"},
        }],
    }
    # nothing was evaluated
    with pytest.raises(VariableNotFound):
        repl.interpreter.global_env.lookup('x')


def test_reset_discards_declarations(repl):
    out = io.StringIO()
    repl.eval("let a = 1;")
    assert process_line(repl, ":reset", out)
    assert repl.user_variables() == {}
    with pytest.raises(VariableNotFound):
        repl.eval("a")
    assert repl.eval("print") is repl.interpreter.global_env.lookup('print')


def test_help(repl):
    out = io.StringIO()
    assert process_line(repl, ":help", out)
    assert out.getvalue() == HELP_TEXT + "\n"


def test_run_repl_reads_until_exit(monkeypatch, capsys):
    lines = iter(["let a = 2;", "a * 21", "oops", "exit", "never read"])
    monkeypatch.setattr(quill.repl, 'setup_readline', lambda: None)
    monkeypatch.setattr(builtins, 'input', lambda prompt='': next(lines))
    out = io.StringIO()
    run_repl(Repl(), dest=out)
    assert out.getvalue() == "2\n42\n"
    assert "Error: VariableNotFound: cannot resolve oops" in capsys.readouterr().err
    assert next(lines) == "never read"


def test_run_repl_stops_at_end_of_input(monkeypatch):
    def no_more_input(prompt=''):
        raise EOFError

    monkeypatch.setattr(quill.repl, 'setup_readline', lambda: None)
    monkeypatch.setattr(builtins, 'input', no_more_input)
    out = io.StringIO()
    run_repl(Repl(), dest=out)
    assert out.getvalue() == "\n"


def test_deep_nesting_is_reported_and_session_continues(repl, capsys):
    out = io.StringIO()
    assert process_line(repl, "(" * 150 + "1" + ")" * 150, out)
    assert "Error: NestingTooDeep" in capsys.readouterr().err
    assert process_line(repl, "(1 + 1)", out)
    assert out.getvalue() == "2\n"
