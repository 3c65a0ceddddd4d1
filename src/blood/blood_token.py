# src/blood/blood_token.py

ILLEGAL = "ILLEGAL"
EOF = "EOF"

# Identifiers + literals
IDENT = "IDENT"
INT = "INT"
FLOAT = "FLOAT"

# Operators
ASSIGN = "="
PLUS = "+"
MINUS = "-"
STAR = "*"
SLASH = "/"
MOD = "%"
EQ = "=="
NOT_EQ = "!="
LT = "<"
GT = ">"
LTE = "<="
GTE = ">="

# Delimiters
COMMA = ","
SEMICOLON = ";"
LPAREN = "("
RPAREN = ")"

# Keywords
LET = "LET"
MUT = "MOD"
FUNCTION = "FN"
IF = "IF"
ELSEIF = "ELSEIF"
ELSE = "ELSE"
THEN = "THEN"
DO = "DO"
END = "END"
WHILE = "WHILE"
LOOP = "LOOP"
BREAK = "BREAK"
CONTINUE = "CONTINUE"
RETURN = "RETURN"
TRUE = "TRUE"
FALSE = "FALSE"
NIL = "NIL"
NOT = "NOT"

KEYWORDS = {
    "let": LET,
    "mod": MUT,
    "fn": FUNCTION,
    "if": IF,
    "elseif": ELSEIF,
    "else": ELSE,
    "then": THEN,
    "do": DO,
    "end": END,
    "while": WHILE,
    "loop": LOOP,
    "break": BREAK,
    "continue": CONTINUE,
    "return": RETURN,
    "true": TRUE,
    "false": FALSE,
    "nil": NIL,
    "not": NOT,
}


def lookup_ident(literal):
    return KEYWORDS.get(literal, IDENT)


class Token:
    __slots__ = ("type", "literal", "line", "column")

    def __init__(self, type, literal, line=0, column=0):
        self.type = type
        self.literal = literal
        self.line = line
        self.column = column

    def __eq__(self, other):
        if not isinstance(other, Token):
            return NotImplemented
        return (self.type, self.literal, self.line, self.column) == (
            other.type, other.literal, other.line, other.column)

    def __hash__(self):
        return hash((self.type, self.literal, self.line, self.column))

    def __repr__(self):
        return f"Token({self.type}, {self.literal!r}, line={self.line}, column={self.column})"
