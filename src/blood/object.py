# src/blood/object.py
from enum import Enum


class Object:
    def inspect(self):
        raise NotImplementedError("Subclasses must implement this method")

    def type(self):
        raise NotImplementedError("Subclasses must implement this method")


class Integer(Object):
    def __init__(self, value): self.value = value
    def inspect(self): return str(self.value)
    def type(self): return "INTEGER"
    def __repr__(self): return f"Integer({self.value})"


class Float(Object):
    def __init__(self, value): self.value = value
    def inspect(self): return str(self.value)
    def type(self): return "FLOAT"
    def __repr__(self): return f"Float({self.value})"


class Boolean(Object):
    def __init__(self, value): self.value = value
    def inspect(self): return "true" if self.value else "false"
    def type(self): return "BOOLEAN"
    def __repr__(self): return f"Boolean({self.inspect()})"


class Nil(Object):
    value = None
    def inspect(self): return "nil"
    def type(self): return "NIL"
    def __repr__(self): return "Nil()"


class Function(Object):
    """A user function closed over the environment it was declared in."""

    def __init__(self, name, parameters, body, env):
        self.name = name
        self.parameters = parameters
        self.body = body
        self.env = env

    @property
    def arity(self):
        return len(self.parameters)

    def inspect(self): return f"<fn {self.name}>"
    def type(self): return "FUNCTION"
    def __repr__(self): return f"Function({self.name}/{self.arity})"


class Builtin(Object):
    """A host function; ``arity`` of None accepts any argument count."""

    def __init__(self, fn, name="", arity=None):
        self.fn = fn
        self.name = name
        self.arity = arity

    def inspect(self): return f"<built-in function: {self.name}>"
    def type(self): return "BUILTIN"
    def __repr__(self): return f"Builtin({self.name})"


# Control-flow outcomes. These never escape into a binding.

class ReturnValue(Object):
    def __init__(self, value, token=None):
        self.value = value
        self.token = token

    def inspect(self): return self.value.inspect()
    def type(self): return "RETURN_VALUE"
    def __repr__(self): return f"ReturnValue({self.value!r})"


class BreakSignal(Object):
    def __init__(self, token=None): self.token = token
    def inspect(self): return "break"
    def type(self): return "BREAK"
    def __repr__(self): return "BreakSignal()"


class ContinueSignal(Object):
    def __init__(self, token=None): self.token = token
    def inspect(self): return "continue"
    def type(self): return "CONTINUE"
    def __repr__(self): return "ContinueSignal()"


class ErrorKind(Enum):
    UNDEFINED_VARIABLE = "UndefinedVariable"
    IMMUTABLE_ASSIGNMENT = "ImmutableAssignment"
    TYPE_MISMATCH = "TypeMismatch"
    DIVISION_BY_ZERO = "DivisionByZero"
    ARITY_MISMATCH = "ArityMismatch"
    ILLEGAL_CONTROL_FLOW_ESCAPE = "IllegalControlFlowEscape"
    RESOURCE_EXHAUSTED = "ResourceExhausted"


class EvaluationError(Object):
    """A runtime failure, returned (not raised) up the evaluation chain."""

    def __init__(self, kind, message, line=None, column=None, filename=None, suggestion=None):
        self.kind = kind
        self.message = message
        self.line = line
        self.column = column
        self.filename = filename
        self.suggestion = suggestion

    def at(self, node):
        """Attach the position of ``node`` if none has been recorded yet."""
        if self.line is None and node is not None and getattr(node, "token", None) is not None:
            self.line = node.token.line
            self.column = node.token.column
        return self

    def inspect(self):
        return str(self)

    def type(self): return "ERROR"

    def __str__(self):
        where = f" at line {self.line}, column {self.column}" if self.line is not None else ""
        return f"{self.kind.value}: {self.message}{where}"

    def __repr__(self):
        return f"EvaluationError({self.kind.value}, {self.message!r}, line={self.line}, column={self.column})"
