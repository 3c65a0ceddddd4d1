# src/blood/parser/parser.py
import logging

from ..blood_token import *
from ..blood_ast import *
from ..error_reporter import ParseError
from ..config import config

logger = logging.getLogger("blood.parser")

# Precedence constants
LOWEST, COMPARISON, SUM, PRODUCT, PREFIX, CALL = 1, 2, 3, 4, 5, 6

precedences = {
    EQ: COMPARISON, NOT_EQ: COMPARISON,
    LT: COMPARISON, GT: COMPARISON, LTE: COMPARISON, GTE: COMPARISON,
    PLUS: SUM, MINUS: SUM,
    STAR: PRODUCT, SLASH: PRODUCT, MOD: PRODUCT,
    LPAREN: CALL,
}

_KEYWORD_NAMES = {token_type: word for word, token_type in KEYWORDS.items()}

_TYPE_NAMES = {
    IDENT: "identifier",
    INT: "integer",
    FLOAT: "number",
    EOF: "end of input",
}


def describe_type(token_type):
    if token_type in _TYPE_NAMES:
        return _TYPE_NAMES[token_type]
    if token_type in _KEYWORD_NAMES:
        return f"'{_KEYWORD_NAMES[token_type]}'"
    return f"'{token_type}'"


def describe_token(token):
    if token.type in (IDENT, INT, FLOAT):
        return f"{_TYPE_NAMES[token.type]} '{token.literal}'"
    return describe_type(token.type)


def parser_debug(msg, data=None):
    if not config.should_log("debug"):
        return
    if data is not None:
        logger.debug("%s: %s", msg, data)
    else:
        logger.debug(msg)


class Parser:
    """Recursive descent parser producing a ``Program``.

    ``source`` is a ``Lexer`` or any iterable of tokens. Parsing stops at the
    first syntax error, raised as ``ParseError``.
    """

    def __init__(self, source, filename=None):
        self.filename = filename or getattr(source, "filename", "<stdin>")
        self._tokens = iter(source)
        self._last = None
        self.cur_token = None
        self.peek_token = None

        self.statement_parse_fns = {
            LET: self.parse_let_statement,
            IF: self.parse_if_statement,
            WHILE: self.parse_while_statement,
            LOOP: self.parse_loop_statement,
            FUNCTION: self.parse_function_statement,
            RETURN: self.parse_return_statement,
            BREAK: self.parse_break_statement,
            CONTINUE: self.parse_continue_statement,
        }
        self.prefix_parse_fns = {
            IDENT: self.parse_identifier,
            INT: self.parse_integer_literal,
            FLOAT: self.parse_float_literal,
            TRUE: self.parse_boolean,
            FALSE: self.parse_boolean,
            NIL: self.parse_nil,
            MINUS: self.parse_prefix_expression,
            NOT: self.parse_prefix_expression,
            LPAREN: self.parse_grouped_expression,
        }
        self.infix_parse_fns = {
            PLUS: self.parse_infix_expression,
            MINUS: self.parse_infix_expression,
            STAR: self.parse_infix_expression,
            SLASH: self.parse_infix_expression,
            MOD: self.parse_infix_expression,
            EQ: self.parse_infix_expression,
            NOT_EQ: self.parse_infix_expression,
            LT: self.parse_infix_expression,
            GT: self.parse_infix_expression,
            LTE: self.parse_infix_expression,
            GTE: self.parse_infix_expression,
            LPAREN: self.parse_call_expression,
        }
        self.next_token()
        self.next_token()

    def parse_program(self):
        program = Program()
        while not self.cur_token_is(EOF):
            if self.cur_token_is(SEMICOLON):
                self.next_token()
                continue
            try:
                program.statements.append(self.parse_statement())
            except RecursionError:
                raise self.error(
                    "Expression nested too deeply",
                    expected="shallower nesting",
                    token=self.cur_token,
                ) from None
            self.next_token()
        parser_debug("Parsed program", f"{len(program.statements)} statements")
        return program

    # === STATEMENTS ===

    def parse_statement(self):
        """Parse one statement; leaves ``cur_token`` on its last token."""
        token_type = self.cur_token.type
        if token_type in (END, ELSE, ELSEIF):
            raise self.error(
                f"Unexpected {describe_type(token_type)} without an open block",
                expected="statement",
                token=self.cur_token,
            )

        if token_type in self.statement_parse_fns:
            stmt = self.statement_parse_fns[token_type]()
        elif token_type == IDENT and self.peek_token_is(ASSIGN):
            stmt = self.parse_assign_statement()
        else:
            stmt = self.parse_expression_statement()

        if self.peek_token_is(SEMICOLON):
            self.next_token()
        return stmt

    def parse_let_statement(self):
        token = self.cur_token
        mutable = False
        if self.peek_token_is(MUT):
            self.next_token()
            mutable = True

        self.expect_peek(IDENT, "variable name after 'let'")
        name = Identifier(self.cur_token, self.cur_token.literal)

        self.expect_peek(ASSIGN)
        self.next_token()
        value = self.parse_expression(LOWEST)
        return LetStatement(token, name, value, mutable=mutable)

    def parse_assign_statement(self):
        token = self.cur_token
        name = Identifier(token, token.literal)
        self.expect_peek(ASSIGN)
        self.next_token()
        value = self.parse_expression(LOWEST)
        return AssignStatement(token, name, value)

    def parse_expression_statement(self):
        token = self.cur_token
        return ExpressionStatement(token, self.parse_expression(LOWEST))

    def parse_block(self, opener, construct, terminators=(END,)):
        """Parse statements until one of ``terminators``; ``cur_token`` ends on it."""
        block = BlockStatement(token=self.cur_token)
        self.next_token()
        while self.cur_token.type not in terminators:
            if self.cur_token_is(EOF):
                raise self.error(
                    f"Unterminated '{construct}' block opened at line {opener.line}, "
                    f"column {opener.column}: reached end of input",
                    expected="'end'",
                    token=self.cur_token,
                )
            if self.cur_token_is(SEMICOLON):
                self.next_token()
                continue
            block.statements.append(self.parse_statement())
            self.next_token()
        return block

    def parse_if_statement(self):
        token = self.cur_token
        branch_terminators = (ELSEIF, ELSE, END)
        branches = []

        self.next_token()
        condition = self.parse_expression(LOWEST)
        self.expect_peek(THEN)
        branches.append((condition, self.parse_block(token, "if", branch_terminators)))

        while self.cur_token_is(ELSEIF):
            self.next_token()
            condition = self.parse_expression(LOWEST)
            self.expect_peek(THEN)
            branches.append((condition, self.parse_block(token, "if", branch_terminators)))

        alternative = None
        if self.cur_token_is(ELSE):
            alternative = self.parse_block(token, "if")

        parser_debug("Parsed if statement", f"{len(branches)} branches")
        return IfStatement(token, branches, alternative)

    def parse_while_statement(self):
        token = self.cur_token
        self.next_token()
        condition = self.parse_expression(LOWEST)
        self.expect_peek(DO)
        body = self.parse_block(token, "while")
        return WhileStatement(token, condition, body)

    def parse_loop_statement(self):
        token = self.cur_token
        self.expect_peek(DO)
        body = self.parse_block(token, "loop")
        return LoopStatement(token, body)

    def parse_function_statement(self):
        token = self.cur_token
        self.expect_peek(IDENT, "function name after 'fn'")
        name = Identifier(self.cur_token, self.cur_token.literal)

        self.expect_peek(LPAREN)
        parameters = self._parse_parameter_list()
        self.expect_peek(DO)
        body = self.parse_block(token, "fn")
        parser_debug("Parsed function", f"{name.value}/{len(parameters)}")
        return FunctionStatement(token, name, parameters, body)

    def _parse_parameter_list(self):
        """Parse ``(a, b, ...)`` starting on '('; ends on ')'."""
        parameters = []
        if self.peek_token_is(RPAREN):
            self.next_token()
            return parameters

        seen = set()
        while True:
            self.expect_peek(IDENT, "parameter name")
            param = Identifier(self.cur_token, self.cur_token.literal)
            if param.value in seen:
                raise self.error(
                    f"Duplicate parameter '{param.value}'",
                    expected="unique parameter name",
                    token=self.cur_token,
                )
            seen.add(param.value)
            parameters.append(param)
            if not self.peek_token_is(COMMA):
                break
            self.next_token()

        self.expect_peek(RPAREN)
        return parameters

    def parse_return_statement(self):
        token = self.cur_token
        return_value = None
        if self.peek_token.type in self.prefix_parse_fns:
            self.next_token()
            return_value = self.parse_expression(LOWEST)
        return ReturnStatement(token, return_value)

    def parse_break_statement(self):
        return BreakStatement(self.cur_token)

    def parse_continue_statement(self):
        return ContinueStatement(self.cur_token)

    # === EXPRESSIONS ===

    def parse_expression(self, precedence):
        prefix = self.prefix_parse_fns.get(self.cur_token.type)
        if prefix is None:
            raise self.error(
                f"Expected expression, found {describe_token(self.cur_token)}",
                expected="expression",
                token=self.cur_token,
            )
        left_exp = prefix()

        while precedence < self.peek_precedence():
            infix = self.infix_parse_fns.get(self.peek_token.type)
            if infix is None:
                return left_exp
            self.next_token()
            left_exp = infix(left_exp)

        return left_exp

    def parse_identifier(self):
        return Identifier(self.cur_token, self.cur_token.literal)

    def parse_integer_literal(self):
        return IntegerLiteral(self.cur_token, int(self.cur_token.literal))

    def parse_float_literal(self):
        return FloatLiteral(self.cur_token, float(self.cur_token.literal))

    def parse_boolean(self):
        return BooleanLiteral(self.cur_token, self.cur_token_is(TRUE))

    def parse_nil(self):
        return NilLiteral(self.cur_token)

    def parse_prefix_expression(self):
        token = self.cur_token
        self.next_token()
        right = self.parse_expression(PREFIX)
        return PrefixExpression(token, token.literal, right)

    def parse_infix_expression(self, left):
        token = self.cur_token
        precedence = self.cur_precedence()
        self.next_token()
        right = self.parse_expression(precedence)
        return InfixExpression(token, left, token.literal, right)

    def parse_grouped_expression(self):
        token = self.cur_token
        self.next_token()
        expression = self.parse_expression(LOWEST)
        self.expect_peek(RPAREN)
        return GroupedExpression(token, expression)

    def parse_call_expression(self, function):
        token = self.cur_token
        arguments = self.parse_expression_list(RPAREN)
        return CallExpression(token, function, arguments)

    def parse_expression_list(self, end):
        elements = []
        if self.peek_token_is(end):
            self.next_token()
            return elements

        self.next_token()
        elements.append(self.parse_expression(LOWEST))

        while self.peek_token_is(COMMA):
            self.next_token()
            self.next_token()
            elements.append(self.parse_expression(LOWEST))

        self.expect_peek(end)
        return elements

    # === TOKEN UTILITIES ===

    def next_token(self):
        self.cur_token = self.peek_token
        self.peek_token = self._read_token()

    def _read_token(self):
        if self._last is not None and self._last.type == EOF:
            return self._last
        token = next(self._tokens, None)
        if token is None:
            # Token sources without a trailing EOF still terminate cleanly
            line = self._last.line if self._last is not None else 1
            column = self._last.column + len(self._last.literal) if self._last is not None else 1
            token = Token(EOF, "", line, column)
        self._last = token
        return token

    def cur_token_is(self, t):
        return self.cur_token.type == t

    def peek_token_is(self, t):
        return self.peek_token.type == t

    def expect_peek(self, t, what=None):
        if self.peek_token_is(t):
            self.next_token()
            return True
        expected = what or describe_type(t)
        raise self.error(
            f"Expected {expected}, found {describe_token(self.peek_token)}",
            expected=expected,
            token=self.peek_token,
        )

    def peek_precedence(self):
        return precedences.get(self.peek_token.type, LOWEST)

    def cur_precedence(self):
        return precedences.get(self.cur_token.type, LOWEST)

    def error(self, message, expected=None, token=None):
        token = token or self.cur_token
        return ParseError(
            message,
            line=token.line,
            column=token.column,
            filename=self.filename,
            expected=expected,
            found=describe_token(token),
        )


def parse(tokens, filename=None):
    """Parse a token sequence (or a ``Lexer``) into a ``Program``."""
    return Parser(tokens, filename).parse_program()
