"""Command line interface tests."""

import logging

import pytest
from click.testing import CliRunner

from blood import __version__
from blood.cli.main import cli, main
from blood.config import config


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def write_program(tmp_path):
    def _write(source, name="prog.bd"):
        path = tmp_path / name
        path.write_text(source, encoding="utf-8")
        return str(path)
    return _write


def test_run_prints_program_output(runner, write_program):
    path = write_program("""
    fn fact(n) do
        if n <= 1 then return 1 end
        return n * fact(n - 1)
    end
    print(fact(5))
    """)
    result = runner.invoke(cli, ["run", path])
    assert result.exit_code == 0
    assert result.output == "120\n"


def test_run_reports_runtime_error(runner, write_program):
    path = write_program("print(1)\nlet x = 5 / 0\n")
    result = runner.invoke(cli, ["run", path])
    assert result.exit_code == 1
    assert "1\n" in result.output
    assert "DivisionByZero: Division by zero" in result.output
    assert f"{path}:2:11" in result.output


def test_run_reports_parse_error_without_running(runner, write_program):
    path = write_program("print(1)\nwhile true do\n")
    result = runner.invoke(cli, ["run", path])
    assert result.exit_code == 1
    assert "ParseError" in result.output
    assert not result.output.startswith("1\n")


def test_run_reports_lex_error(runner, write_program):
    path = write_program("let x = 1 # 2")
    result = runner.invoke(cli, ["run", path])
    assert result.exit_code == 1
    assert "LexError: Unexpected character '#'" in result.output


def test_run_missing_file(runner, tmp_path):
    result = runner.invoke(cli, ["run", str(tmp_path / "absent.bd")])
    assert result.exit_code != 0


def test_run_rejects_invalid_utf8(runner, tmp_path):
    path = tmp_path / "binary.bd"
    path.write_bytes(b"print(1)\n\xff\xfe")
    for command in ("run", "check", "tokens", "ast"):
        result = runner.invoke(cli, [command, str(path)])
        assert result.exit_code == 1
        assert "SourceError" in result.output
        assert "not valid UTF-8" in result.output
        assert "Traceback" not in result.output
        assert not isinstance(result.exception, UnicodeDecodeError)


def test_run_reports_excessive_nesting(runner, write_program):
    path = write_program("print(" + "-" * 5000 + "1)\n")
    result = runner.invoke(cli, ["run", path])
    assert result.exit_code == 1
    assert "ParseError: Expression nested too deeply" in result.output
    assert not isinstance(result.exception, RecursionError)


def test_run_handles_deep_recursion(runner, write_program):
    path = write_program(
        "fn count(n) do if n == 0 then return 0 end return 1 + count(n - 1) end\n"
        "print(count(1000))\n")
    result = runner.invoke(cli, ["run", path])
    assert result.exit_code == 0
    assert result.output == "1000\n"


def test_run_applies_file_flags(runner, write_program):
    path = write_program("// @blood: show_source_context=false\nprint(missing)\n")
    result = runner.invoke(cli, ["run", path])
    assert result.exit_code == 1
    assert config.show_source_context is False
    assert "print(missing)" not in result.output


def test_check_valid(runner, write_program):
    path = write_program("let x = 1\nprint(x)\n")
    result = runner.invoke(cli, ["check", path])
    assert result.exit_code == 0
    assert "Syntax is valid!" in result.output
    assert "(2 statements)" in result.output


def test_check_invalid(runner, write_program):
    path = write_program("if x then\n")
    result = runner.invoke(cli, ["check", path])
    assert result.exit_code == 1
    assert "Syntax errors found" in result.output


def test_check_does_not_execute(runner, write_program):
    path = write_program("print(1 / 0)\n")
    result = runner.invoke(cli, ["check", path])
    assert result.exit_code == 0


def test_tokens_table(runner, write_program):
    path = write_program("let mod x = 1")
    result = runner.invoke(cli, ["tokens", path])
    assert result.exit_code == 0
    assert "LET" in result.output
    assert "MOD" in result.output
    assert "IDENT" in result.output


def test_ast_tree(runner, write_program):
    path = write_program("fn add(a, b) do return a + b end")
    result = runner.invoke(cli, ["ast", path])
    assert result.exit_code == 0
    assert "FunctionStatement add (a, b)" in result.output
    assert "ReturnStatement" in result.output


def test_repl_evaluates_lines_and_keeps_state(runner):
    result = runner.invoke(cli, ["repl"], input="let mod x = 20\nx = x + 1\nx * 2\nexit\n")
    assert result.exit_code == 0
    assert "42" in result.output


def test_repl_survives_errors(runner):
    result = runner.invoke(cli, ["repl"], input="let x = 1\nx = 2\nprint(x)\n")
    assert result.exit_code == 0
    assert "ImmutableAssignment" in result.output
    assert "Goodbye!" in result.output


def test_version(runner):
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_debug_flag_enables_logging(runner, write_program):
    path = write_program("print(1)")
    blood_logger = logging.getLogger("blood")
    try:
        result = runner.invoke(cli, ["--debug", "run", path])
        assert result.exit_code == 0
        assert config.enable_debug_logs is True
        assert blood_logger.level == logging.DEBUG
        assert "Running" in result.output
    finally:
        blood_logger.handlers.clear()
        blood_logger.setLevel(logging.NOTSET)


def test_main_treats_single_file_as_run(write_program, capsys):
    path = write_program("print(7)")
    with pytest.raises(SystemExit) as excinfo:
        main([path])
    assert excinfo.value.code == 0
    assert capsys.readouterr().out == "7\n"


def test_main_exit_code_on_error(write_program, capsys):
    path = write_program("break")
    with pytest.raises(SystemExit) as excinfo:
        main([path])
    assert excinfo.value.code == 1
    assert "IllegalControlFlowEscape" in capsys.readouterr().err
