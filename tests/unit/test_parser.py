"""Parser coverage: statement forms, precedence and syntax errors."""

import pytest

from blood import blood_ast as ast
from blood.error_reporter import ParseError
from blood.lexer import Lexer, tokenize
from blood.parser import Parser, parse


def _parse(code_str):
    return Parser(Lexer(code_str)).parse_program()


def _expr(code_str):
    program = _parse(code_str)
    assert len(program.statements) == 1
    stmt = program.statements[0]
    assert isinstance(stmt, ast.ExpressionStatement)
    return stmt.expression


def _shape(node):
    """Compact nested-tuple rendering of an expression tree."""
    if isinstance(node, ast.InfixExpression):
        return (node.operator, _shape(node.left), _shape(node.right))
    if isinstance(node, ast.PrefixExpression):
        return (node.operator, _shape(node.right))
    if isinstance(node, ast.GroupedExpression):
        return _shape(node.expression)
    if isinstance(node, ast.CallExpression):
        return ("call", _shape(node.function), [_shape(a) for a in node.arguments])
    if isinstance(node, ast.Identifier):
        return node.value
    return node.value


def test_let_and_let_mod():
    program = _parse("let x = 1 let mod y = 2")
    first, second = program.statements
    assert isinstance(first, ast.LetStatement) and not first.mutable
    assert first.name.value == "x"
    assert isinstance(second, ast.LetStatement) and second.mutable
    assert second.name.value == "y"


def test_assignment_statement():
    stmt = _parse("x = x + 1").statements[0]
    assert isinstance(stmt, ast.AssignStatement)
    assert stmt.name.value == "x"
    assert _shape(stmt.value) == ("+", "x", 1)


@pytest.mark.parametrize("source,expected", [
    ("1 + 2 * 3", ("+", 1, ("*", 2, 3))),
    ("10 - 4 - 3", ("-", ("-", 10, 4), 3)),
    ("8 / 4 / 2", ("/", ("/", 8, 4), 2)),
    ("1 + 2 < 4", ("<", ("+", 1, 2), 4)),
    ("a == b != c", ("!=", ("==", "a", "b"), "c")),
    ("-2 * 3", ("*", ("-", 2), 3)),
    ("not a == b", ("==", ("not", "a"), "b")),
    ("not not done", ("not", ("not", "done"))),
    ("not (a < b)", ("not", ("<", "a", "b"))),
    ("(1 + 2) * 3", ("*", ("+", 1, 2), 3)),
    ("7 % 3 + 1", ("+", ("%", 7, 3), 1)),
    ("f(1, g(2)) + 1", ("+", ("call", "f", [1, ("call", "g", [2])]), 1)),
])
def test_expression_precedence(source, expected):
    assert _shape(_expr(source)) == expected


def test_literals():
    assert isinstance(_expr("true"), ast.BooleanLiteral)
    assert _expr("false").value is False
    assert isinstance(_expr("nil"), ast.NilLiteral)
    assert _expr("2.5").value == 2.5


def test_call_without_arguments():
    call = _expr("tick()")
    assert isinstance(call, ast.CallExpression)
    assert call.arguments == []


def test_if_elseif_else():
    stmt = _parse("""
    if x < 0 then
        print(0)
    elseif x == 0 then
        print(1)
    elseif x == 1 then
        print(2)
    else
        print(3)
    end
    """).statements[0]
    assert isinstance(stmt, ast.IfStatement)
    assert len(stmt.branches) == 3
    assert _shape(stmt.branches[1][0]) == ("==", "x", 0)
    assert stmt.alternative is not None
    assert len(stmt.alternative.statements) == 1


def test_if_without_else():
    stmt = _parse("if true then end").statements[0]
    assert stmt.alternative is None
    assert stmt.branches[0][1].statements == []


def test_while_and_loop():
    program = _parse("while i < 5 do i = i + 1 end loop do break end")
    while_stmt, loop_stmt = program.statements
    assert isinstance(while_stmt, ast.WhileStatement)
    assert isinstance(while_stmt.body.statements[0], ast.AssignStatement)
    assert isinstance(loop_stmt, ast.LoopStatement)
    assert isinstance(loop_stmt.body.statements[0], ast.BreakStatement)


def test_function_statement():
    stmt = _parse("fn add(a, b) do return a + b end").statements[0]
    assert isinstance(stmt, ast.FunctionStatement)
    assert stmt.name.value == "add"
    assert [p.value for p in stmt.parameters] == ["a", "b"]
    ret = stmt.body.statements[0]
    assert isinstance(ret, ast.ReturnStatement)
    assert _shape(ret.return_value) == ("+", "a", "b")


def test_bare_return_has_no_value():
    stmt = _parse("fn f() do return end").statements[0]
    ret = stmt.body.statements[0]
    assert isinstance(ret, ast.ReturnStatement)
    assert ret.return_value is None


def test_semicolons_are_optional_separators():
    program = _parse("let a = 1; let b = 2;; print(a);")
    assert len(program.statements) == 3


def test_parse_accepts_token_list():
    program = parse(tokenize("let x = 1"))
    assert isinstance(program.statements[0], ast.LetStatement)


def test_parse_tolerates_missing_eof_token():
    tokens = [t for t in tokenize("print(1)") if t.type != "EOF"]
    program = parse(tokens)
    assert len(program.statements) == 1


def test_node_positions_come_from_tokens():
    stmt = _parse("\n  let x = 1").statements[0]
    assert (stmt.line, stmt.column) == (2, 3)


# === ERRORS ===

def test_unterminated_block_names_the_opener():
    with pytest.raises(ParseError) as excinfo:
        _parse("while true do\n  print(1)\n")
    err = excinfo.value
    assert "Unterminated 'while' block opened at line 1, column 1" in err.message
    assert err.expected == "'end'"
    assert err.found == "end of input"


def test_missing_then():
    with pytest.raises(ParseError) as excinfo:
        _parse("if x print(1) end")
    err = excinfo.value
    assert err.expected == "'then'"
    assert err.found == "identifier 'print'"
    assert (err.line, err.column) == (1, 6)


def test_let_requires_a_name():
    with pytest.raises(ParseError) as excinfo:
        _parse("let = 5")
    assert "variable name" in excinfo.value.message


def test_missing_expression():
    with pytest.raises(ParseError) as excinfo:
        _parse("let x = 1 +")
    assert "Expected expression, found end of input" in excinfo.value.message


def test_stray_end():
    with pytest.raises(ParseError) as excinfo:
        _parse("print(1) end")
    assert "Unexpected 'end'" in excinfo.value.message


def test_duplicate_parameters_rejected():
    with pytest.raises(ParseError) as excinfo:
        _parse("fn f(a, a) do end")
    assert "Duplicate parameter 'a'" in excinfo.value.message


def test_unclosed_call():
    with pytest.raises(ParseError) as excinfo:
        _parse("print(1, 2")
    assert excinfo.value.expected == "')'"


def test_parse_error_carries_filename():
    with pytest.raises(ParseError) as excinfo:
        Parser(Lexer("let", "demo.bd")).parse_program()
    assert excinfo.value.filename == "demo.bd"
    assert str(excinfo.value).startswith("ParseError:")


@pytest.mark.parametrize("source", [
    "print(" + "(" * 10000 + "1" + ")" * 10000 + ")",
    "print(" + "-" * 10000 + "1)",
    "let x = " + "not " * 10000 + "true",
])
def test_excessive_nesting_is_a_parse_error(source):
    with pytest.raises(ParseError) as excinfo:
        _parse(source)
    err = excinfo.value
    assert err.message == "Expression nested too deeply"
    assert err.line == 1


def test_nesting_error_reports_offending_line():
    source = "let a = 1\nprint(" + "(" * 10000 + "1" + ")" * 10000 + ")"
    with pytest.raises(ParseError) as excinfo:
        _parse(source)
    assert excinfo.value.line == 2
