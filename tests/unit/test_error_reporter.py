"""Diagnostic rendering shared by lex, parse and runtime errors."""

import io

import pytest
from rich.console import Console

from blood.config import config
from blood.error_reporter import get_error_reporter, print_error, LexError, ParseError
from blood.lexer import tokenize, Lexer
from blood.parser import Parser
from blood.evaluator import evaluate


def test_format_includes_source_line_and_caret():
    source = "let x = 1\nlet y = x @ 2"
    with pytest.raises(LexError) as excinfo:
        tokenize(source, filename="caret.bd")

    text = get_error_reporter().format(excinfo.value)
    lines = text.splitlines()
    assert lines[0] == "LexError: Unexpected character '@'"
    assert lines[1] == "  --> caret.bd:2:11"
    assert "2 | let y = x @ 2" in text
    assert lines[4] == "  |           ^"


def test_format_without_source_context():
    config.show_source_context = False
    with pytest.raises(ParseError) as excinfo:
        Parser(Lexer("let = 1", "nosrc.bd")).parse_program()

    text = get_error_reporter().format(excinfo.value)
    assert text.splitlines() == [
        "ParseError: Expected variable name after 'let', found '='",
        "  --> nosrc.bd:1:5",
    ]


def test_runtime_errors_use_kind_name_and_help():
    source = "let x = 1\nx = 2"
    program = Parser(Lexer(source, "immut.bd")).parse_program()
    result = evaluate(program, filename="immut.bd")

    text = get_error_reporter().format(result)
    assert text.startswith("ImmutableAssignment: Cannot reassign immutable variable 'x'")
    assert "  --> immut.bd:2:1" in text
    assert "help: declare it with 'let mod x'" in text


def test_print_error_writes_to_console():
    buffer = io.StringIO()
    console = Console(file=buffer, width=200)
    print_error(LexError("Unexpected character '$'", 1, 1, "inline.bd"), console)
    assert "LexError: Unexpected character '$'" in buffer.getvalue()
