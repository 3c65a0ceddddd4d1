# src/blood/evaluator/functions.py
from ..environment import Environment
from ..object import (
    Function, Builtin, ReturnValue, BreakSignal, ContinueSignal, ErrorKind,
)
from .utils import is_error, debug_log, new_error, type_mismatch, escape_message, NIL


def _plural(count, word):
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


class FunctionEvaluatorMixin:
    """Handles function application and defines the builtins."""

    def __init__(self, output=None):
        # None means sys.stdout at the moment of writing
        self.output = output
        self.builtins = {}
        self.call_depth = 0
        self._register_core_builtins()

    def eval_call_expression(self, node, env):
        fn = self.eval_node(node.function, env)
        if is_error(fn):
            return fn

        args = self.eval_expressions(node.arguments, env)
        if is_error(args):
            return args

        debug_log("  Arguments evaluated", f"{fn.inspect()} <- {len(args)} args")
        result = self.apply_function(fn, args, node)
        if is_error(result) and result.kind is ErrorKind.RESOURCE_EXHAUSTED:
            # Each enclosing call overwrites this, leaving the outermost call's position
            callee = node.function.token
            result.line, result.column = callee.line, callee.column
        return result

    def apply_function(self, fn, args, node=None):
        if isinstance(fn, Function):
            return self._apply_user_function(fn, args, node)

        if isinstance(fn, Builtin):
            if fn.arity is not None and len(args) != fn.arity:
                return new_error(
                    ErrorKind.ARITY_MISMATCH,
                    f"Built-in '{fn.name}' expects {_plural(fn.arity, 'argument')}, got {len(args)}",
                    node)
            return fn.fn(*args)

        return type_mismatch(f"{fn.type()} value is not callable", node)

    def _apply_user_function(self, fn, args, node):
        if len(args) != fn.arity:
            return new_error(
                ErrorKind.ARITY_MISMATCH,
                f"Function '{fn.name}' expects {_plural(fn.arity, 'argument')}, got {len(args)}",
                node)

        # Lexical scoping: the frame hangs off the closure, not the caller
        call_env = Environment(outer=fn.env)
        for param_name, arg in zip(fn.parameters, args):
            call_env.declare(param_name, arg, mutable=False)

        self.call_depth += 1
        self.summary["calls"] += 1
        self.summary["max_call_depth"] = max(self.summary["max_call_depth"], self.call_depth)
        try:
            result = self.eval_block_statement(fn.body, call_env)
        finally:
            self.call_depth -= 1

        if isinstance(result, ReturnValue):
            return result.value
        if isinstance(result, (BreakSignal, ContinueSignal)):
            return new_error(ErrorKind.ILLEGAL_CONTROL_FLOW_ESCAPE,
                             f"{escape_message(result)} in function '{fn.name}'", result)
        if is_error(result):
            return result
        return NIL

    def _register_core_builtins(self):
        def _print(value):
            print(value.inspect(), file=self.output)
            return NIL

        self.builtins["print"] = Builtin(_print, "print", arity=1)
