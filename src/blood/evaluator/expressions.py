# src/blood/evaluator/expressions.py
import difflib
import math

from ..object import Integer, Float, Boolean, Nil, Function, Builtin, ErrorKind
from .utils import (
    is_error, is_number, debug_log, new_error, type_mismatch, native_bool_to_boolean,
)

_COMPARISONS = {
    "<": lambda a, b: a < b,
    ">": lambda a, b: a > b,
    "<=": lambda a, b: a <= b,
    ">=": lambda a, b: a >= b,
}


def _trunc_div(left_val, right_val):
    quotient = abs(left_val) // abs(right_val)
    return -quotient if (left_val < 0) != (right_val < 0) else quotient


def _trunc_mod(left_val, right_val):
    remainder = abs(left_val) % abs(right_val)
    return -remainder if left_val < 0 else remainder


class ExpressionEvaluatorMixin:
    """Handles evaluation of expressions: literals, identifiers, arithmetic, comparison."""

    def eval_identifier(self, node, env):
        binding = env.resolve(node.value)
        if binding is not None:
            return binding.value

        builtin = self.builtins.get(node.value)
        if builtin is not None:
            return builtin

        debug_log("  Identifier not found", node.value)
        return new_error(ErrorKind.UNDEFINED_VARIABLE,
                         f"Variable '{node.value}' is not defined", node,
                         suggestion=self._suggest_name(node.value, env))

    def _suggest_name(self, name, env):
        known = set(self.builtins)
        scope = env
        while scope is not None:
            known.update(scope.keys())
            scope = scope.outer
        matches = difflib.get_close_matches(name, sorted(known), n=1)
        if matches:
            return f"did you mean '{matches[0]}'?"
        return None

    def eval_prefix_expression(self, node, env):
        right = self.eval_node(node.right, env)
        if is_error(right):
            return right

        if node.operator == "-":
            if isinstance(right, Integer):
                return Integer(-right.value)
            if isinstance(right, Float):
                return Float(-right.value)
            return type_mismatch(f"Unary '-' expects a number, got {right.type()}", node)

        if node.operator == "not":
            if isinstance(right, Boolean):
                return native_bool_to_boolean(not right.value)
            return type_mismatch(f"'not' expects a boolean, got {right.type()}", node)

        return type_mismatch(f"Unknown prefix operator: {node.operator}", node)

    def eval_infix_expression(self, node, env):
        left = self.eval_node(node.left, env)
        if is_error(left):
            return left

        right = self.eval_node(node.right, env)
        if is_error(right):
            return right

        operator = node.operator
        if operator in ("==", "!="):
            return self.eval_equality(operator, left, right, node)

        if not (is_number(left) and is_number(right)):
            return type_mismatch(
                f"Operator '{operator}' expects numbers, got {left.type()} and {right.type()}", node)

        if isinstance(left, Integer) and isinstance(right, Integer):
            return self.eval_integer_infix(operator, left, right, node)
        return self.eval_float_infix(operator, float(left.value), float(right.value), node)

    def eval_integer_infix(self, operator, left, right, node):
        left_val = left.value
        right_val = right.value

        if operator == "+":
            return Integer(left_val + right_val)
        elif operator == "-":
            return Integer(left_val - right_val)
        elif operator == "*":
            return Integer(left_val * right_val)
        elif operator == "/":
            if right_val == 0:
                return new_error(ErrorKind.DIVISION_BY_ZERO, "Division by zero", node)
            return Integer(_trunc_div(left_val, right_val))
        elif operator == "%":
            if right_val == 0:
                return new_error(ErrorKind.DIVISION_BY_ZERO, "Modulo by zero", node)
            return Integer(_trunc_mod(left_val, right_val))
        elif operator in _COMPARISONS:
            return native_bool_to_boolean(_COMPARISONS[operator](left_val, right_val))

        return type_mismatch(f"Unknown integer operator: {operator}", node)

    def eval_float_infix(self, operator, left_val, right_val, node):
        if operator == "+":
            return Float(left_val + right_val)
        elif operator == "-":
            return Float(left_val - right_val)
        elif operator == "*":
            return Float(left_val * right_val)
        elif operator == "/":
            if right_val == 0:
                return new_error(ErrorKind.DIVISION_BY_ZERO, "Division by zero", node)
            return Float(left_val / right_val)
        elif operator == "%":
            if right_val == 0:
                return new_error(ErrorKind.DIVISION_BY_ZERO, "Modulo by zero", node)
            return Float(math.fmod(left_val, right_val))
        elif operator in _COMPARISONS:
            return native_bool_to_boolean(_COMPARISONS[operator](left_val, right_val))

        return type_mismatch(f"Unknown float operator: {operator}", node)

    def eval_equality(self, operator, left, right, node):
        if is_number(left) and is_number(right):
            equal = left.value == right.value
        elif isinstance(left, Boolean) and isinstance(right, Boolean):
            equal = left.value == right.value
        elif isinstance(left, Nil) and isinstance(right, Nil):
            equal = True
        elif isinstance(left, (Function, Builtin)) and isinstance(right, (Function, Builtin)):
            # Callables compare by identity
            equal = left is right
        else:
            return type_mismatch(
                f"Cannot compare {left.type()} and {right.type()} with '{operator}'", node)

        return native_bool_to_boolean(equal if operator == "==" else not equal)

    def eval_grouped_expression(self, node, env):
        return self.eval_node(node.expression, env)

    def eval_expressions(self, expressions, env):
        """Evaluate left to right; returns a list or the first error."""
        values = []
        for expression in expressions:
            value = self.eval_node(expression, env)
            if is_error(value):
                return value
            values.append(value)
        return values
