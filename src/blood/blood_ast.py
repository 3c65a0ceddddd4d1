# src/blood/blood_ast.py

# Base classes
class Node:
    token = None

    def __repr__(self):
        return f"{self.__class__.__name__}()"

    def __str__(self):
        return self.__repr__()

    @property
    def line(self):
        return self.token.line if self.token is not None else None

    @property
    def column(self):
        return self.token.column if self.token is not None else None

    def children(self):
        return []


class Statement(Node): pass
class Expression(Node): pass


class Program(Node):
    def __init__(self, statements=None):
        self.statements = statements or []

    def children(self):
        return list(self.statements)

    def __repr__(self):
        return f"Program(statements={len(self.statements)})"


# Statement Nodes
class BlockStatement(Statement):
    def __init__(self, token=None, statements=None):
        self.token = token
        self.statements = statements or []

    def children(self):
        return list(self.statements)

    def __repr__(self):
        return f"BlockStatement(statements={len(self.statements)})"


class LetStatement(Statement):
    """``let [mod] name = value``; ``mutable`` is True only with ``mod``."""

    def __init__(self, token, name, value, mutable=False):
        self.token = token
        self.name = name
        self.value = value
        self.mutable = mutable

    def children(self):
        return [self.value]

    def __repr__(self):
        keyword = "let mod" if self.mutable else "let"
        return f"LetStatement({keyword} {self.name.value} = {self.value})"


class AssignStatement(Statement):
    def __init__(self, token, name, value):
        self.token = token
        self.name = name
        self.value = value

    def children(self):
        return [self.value]

    def __repr__(self):
        return f"AssignStatement({self.name.value} = {self.value})"


class ExpressionStatement(Statement):
    def __init__(self, token, expression):
        self.token = token
        self.expression = expression

    def children(self):
        return [self.expression]

    def __repr__(self):
        return f"ExpressionStatement({self.expression})"


class IfStatement(Statement):
    """Ordered ``(condition, BlockStatement)`` branches plus an optional else block."""

    def __init__(self, token, branches, alternative=None):
        self.token = token
        self.branches = branches
        self.alternative = alternative

    def children(self):
        nodes = []
        for condition, block in self.branches:
            nodes.extend([condition, block])
        if self.alternative is not None:
            nodes.append(self.alternative)
        return nodes

    def __repr__(self):
        has_else = self.alternative is not None
        return f"IfStatement(branches={len(self.branches)}, else={has_else})"


class WhileStatement(Statement):
    def __init__(self, token, condition, body):
        self.token = token
        self.condition = condition
        self.body = body

    def children(self):
        return [self.condition, self.body]

    def __repr__(self):
        return f"WhileStatement(condition={self.condition})"


class LoopStatement(Statement):
    def __init__(self, token, body):
        self.token = token
        self.body = body

    def children(self):
        return [self.body]

    def __repr__(self):
        return "LoopStatement()"


class BreakStatement(Statement):
    def __init__(self, token):
        self.token = token


class ContinueStatement(Statement):
    def __init__(self, token):
        self.token = token


class ReturnStatement(Statement):
    def __init__(self, token, return_value=None):
        self.token = token
        self.return_value = return_value

    def children(self):
        return [self.return_value] if self.return_value is not None else []

    def __repr__(self):
        return f"ReturnStatement(return_value={self.return_value})"


class FunctionStatement(Statement):
    def __init__(self, token, name, parameters, body):
        self.token = token
        self.name = name
        self.parameters = parameters
        self.body = body

    def children(self):
        return [self.body]

    def __repr__(self):
        params = ", ".join(p.value for p in self.parameters)
        return f"FunctionStatement(fn {self.name.value}({params}))"


# Expression Nodes
class Identifier(Expression):
    def __init__(self, token, value):
        self.token = token
        self.value = value

    def __repr__(self):
        return f"Identifier({self.value})"


class IntegerLiteral(Expression):
    def __init__(self, token, value):
        self.token = token
        self.value = value

    def __repr__(self):
        return f"IntegerLiteral({self.value})"


class FloatLiteral(Expression):
    def __init__(self, token, value):
        self.token = token
        self.value = value

    def __repr__(self):
        return f"FloatLiteral({self.value})"


class BooleanLiteral(Expression):
    def __init__(self, token, value):
        self.token = token
        self.value = value

    def __repr__(self):
        return f"BooleanLiteral({'true' if self.value else 'false'})"


class NilLiteral(Expression):
    def __init__(self, token):
        self.token = token

    def __repr__(self):
        return "NilLiteral()"


class PrefixExpression(Expression):
    def __init__(self, token, operator, right):
        self.token = token
        self.operator = operator
        self.right = right

    def children(self):
        return [self.right]

    def __repr__(self):
        return f"PrefixExpression({self.operator}{self.right})"


class InfixExpression(Expression):
    def __init__(self, token, left, operator, right):
        self.token = token
        self.left = left
        self.operator = operator
        self.right = right

    def children(self):
        return [self.left, self.right]

    def __repr__(self):
        return f"InfixExpression({self.left} {self.operator} {self.right})"


class CallExpression(Expression):
    def __init__(self, token, function, arguments):
        self.token = token
        self.function = function
        self.arguments = arguments

    def children(self):
        return [self.function] + list(self.arguments)

    def __repr__(self):
        return f"CallExpression(function={self.function}, arguments={len(self.arguments)})"


class GroupedExpression(Expression):
    def __init__(self, token, expression):
        self.token = token
        self.expression = expression

    def children(self):
        return [self.expression]

    def __repr__(self):
        return f"GroupedExpression({self.expression})"
