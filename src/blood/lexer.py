# src/blood/lexer.py
import logging

from .blood_token import *
from .config import config
from .error_reporter import get_error_reporter, LexError

logger = logging.getLogger("blood.lexer")

_SINGLE_CHAR_TOKENS = {
    "=": ASSIGN,
    "+": PLUS,
    "-": MINUS,
    "*": STAR,
    "/": SLASH,
    "%": MOD,
    "<": LT,
    ">": GT,
    ",": COMMA,
    ";": SEMICOLON,
    "(": LPAREN,
    ")": RPAREN,
}

# Checked before the single character table (longest match)
_TWO_CHAR_TOKENS = {
    "==": EQ,
    "!=": NOT_EQ,
    "<=": LTE,
    ">=": GTE,
}


def _is_letter(ch):
    return ch.isalpha() or ch == "_"


def _is_digit(ch):
    return ch != "" and "0" <= ch <= "9"


class Lexer:
    def __init__(self, source_code, filename="<stdin>"):
        self.input = source_code
        self.position = 0
        self.read_position = 0
        self.ch = ""
        self.line = 1
        self.column = 0
        self.filename = filename

        self.error_reporter = get_error_reporter()
        self.error_reporter.register_source(filename, source_code)

        self.read_char()

    def read_char(self):
        # Position bookkeeping refers to the character being moved onto
        if self.ch == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1

        if self.read_position >= len(self.input):
            self.ch = ""
        else:
            self.ch = self.input[self.read_position]

        self.position = self.read_position
        self.read_position += 1

    def peek_char(self):
        if self.read_position >= len(self.input):
            return ""
        return self.input[self.read_position]

    def next_token(self):
        self.skip_whitespace_and_comments()

        line, column = self.line, self.column

        if self.ch == "":
            return Token(EOF, "", line, column)

        if _is_letter(self.ch):
            literal = self.read_identifier()
            return Token(lookup_ident(literal), literal, line, column)

        if _is_digit(self.ch):
            token_type, literal = self.read_number()
            return Token(token_type, literal, line, column)

        pair = self.ch + self.peek_char()
        if pair in _TWO_CHAR_TOKENS:
            self.read_char()
            self.read_char()
            return Token(_TWO_CHAR_TOKENS[pair], pair, line, column)

        if self.ch in _SINGLE_CHAR_TOKENS:
            ch = self.ch
            self.read_char()
            return Token(_SINGLE_CHAR_TOKENS[ch], ch, line, column)

        suggestion = "Did you mean '!=' for inequality?" if self.ch == "!" else None
        raise self.error_reporter.report_error(
            LexError,
            f"Unexpected character '{self.ch}'",
            line=line,
            column=column,
            filename=self.filename,
            suggestion=suggestion,
        )

    def skip_whitespace_and_comments(self):
        while True:
            if self.ch != "" and self.ch.isspace():
                self.read_char()
            elif self.ch == "/" and self.peek_char() == "/":
                self.skip_line_comment()
            elif self.ch == "/" and self.peek_char() == "*":
                self.skip_block_comment()
            else:
                return

    def skip_line_comment(self):
        while self.ch != "\n" and self.ch != "":
            self.read_char()

    def skip_block_comment(self):
        start_line, start_column = self.line, self.column
        # Consume the opening '/*'
        self.read_char()
        self.read_char()
        while True:
            if self.ch == "":
                raise self.error_reporter.report_error(
                    LexError,
                    "Unterminated block comment",
                    line=start_line,
                    column=start_column,
                    filename=self.filename,
                    suggestion="Close the comment with '*/'",
                )
            if self.ch == "*" and self.peek_char() == "/":
                self.read_char()
                self.read_char()
                return
            self.read_char()

    def read_identifier(self):
        start = self.position
        while _is_letter(self.ch) or _is_digit(self.ch):
            self.read_char()
        return self.input[start:self.position]

    def read_number(self):
        start = self.position
        while _is_digit(self.ch):
            self.read_char()
        if self.ch == "." and _is_digit(self.peek_char()):
            self.read_char()
            while _is_digit(self.ch):
                self.read_char()
            return FLOAT, self.input[start:self.position]
        return INT, self.input[start:self.position]

    def __iter__(self):
        while True:
            token = self.next_token()
            yield token
            if token.type == EOF:
                return


def tokenize(source_code, filename="<stdin>"):
    """Return the full token list for ``source_code``, ending with one EOF token."""
    tokens = list(Lexer(source_code, filename))
    if config.should_log("debug"):
        logger.debug("Tokenized %s: %d tokens", filename, len(tokens))
    return tokens
