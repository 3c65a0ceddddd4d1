# src/blood/evaluator/core.py
import sys
import threading

from .. import blood_ast
from ..config import config
from ..environment import Environment
from ..object import Integer, Float, EvaluationError, ErrorKind
from .utils import debug_log, native_bool_to_boolean, new_error, NIL
from .expressions import ExpressionEvaluatorMixin
from .statements import StatementEvaluatorMixin
from .functions import FunctionEvaluatorMixin


class Evaluator(ExpressionEvaluatorMixin, StatementEvaluatorMixin, FunctionEvaluatorMixin):
    def __init__(self, output=None, filename="<stdin>"):
        # FunctionEvaluatorMixin sets up builtins and the output stream
        FunctionEvaluatorMixin.__init__(self, output)
        self.filename = filename
        self.summary = {
            "evaluated_statements": 0,
            "calls": 0,
            "max_call_depth": 0,
        }

    def eval_node(self, node, env):
        try:
            result = self._dispatch(node, env)
        except RecursionError:
            result = new_error(
                ErrorKind.RESOURCE_EXHAUSTED,
                f"Maximum recursion depth exceeded (call depth {self.call_depth})",
                node)

        if isinstance(result, EvaluationError):
            result.at(node)
            if result.filename is None:
                result.filename = self.filename
        return result

    def _dispatch(self, node, env):
        node_type = type(node)

        # === STATEMENTS ===
        if node_type == blood_ast.Program:
            return self.eval_program(node, env)

        elif node_type == blood_ast.ExpressionStatement:
            return self.eval_node(node.expression, env)

        elif node_type == blood_ast.BlockStatement:
            return self.eval_scoped_block(node, env)

        elif node_type == blood_ast.LetStatement:
            return self.eval_let_statement(node, env)

        elif node_type == blood_ast.AssignStatement:
            return self.eval_assign_statement(node, env)

        elif node_type == blood_ast.IfStatement:
            return self.eval_if_statement(node, env)

        elif node_type == blood_ast.WhileStatement:
            return self.eval_while_statement(node, env)

        elif node_type == blood_ast.LoopStatement:
            return self.eval_loop_statement(node, env)

        elif node_type == blood_ast.BreakStatement:
            return self.eval_break_statement(node, env)

        elif node_type == blood_ast.ContinueStatement:
            return self.eval_continue_statement(node, env)

        elif node_type == blood_ast.ReturnStatement:
            return self.eval_return_statement(node, env)

        elif node_type == blood_ast.FunctionStatement:
            return self.eval_function_statement(node, env)

        # === EXPRESSIONS ===
        elif node_type == blood_ast.Identifier:
            return self.eval_identifier(node, env)

        elif node_type == blood_ast.IntegerLiteral:
            return Integer(node.value)

        elif node_type == blood_ast.FloatLiteral:
            return Float(node.value)

        elif node_type == blood_ast.BooleanLiteral:
            return native_bool_to_boolean(node.value)

        elif node_type == blood_ast.NilLiteral:
            return NIL

        elif node_type == blood_ast.InfixExpression:
            return self.eval_infix_expression(node, env)

        elif node_type == blood_ast.PrefixExpression:
            return self.eval_prefix_expression(node, env)

        elif node_type == blood_ast.GroupedExpression:
            return self.eval_grouped_expression(node, env)

        elif node_type == blood_ast.CallExpression:
            return self.eval_call_expression(node, env)

        raise TypeError(f"Unknown node type: {node_type.__name__}")


# Stack reserved per allowed Python frame on the evaluation thread
_STACK_BYTES_PER_FRAME = 4096
_MAX_STACK_BYTES = 1024 * 1024 * 1024


def run_with_deep_stack(func, *args):
    """Call ``func(*args)`` on a worker thread sized for ``config.recursion_limit`` frames.

    Deep Blood recursion maps onto deep Python recursion, so the host
    recursion limit is raised for the duration of the call and the thread
    stack is made large enough for it. Exceptions are re-raised in the caller.
    """
    limit = config.recursion_limit
    if not limit or limit <= sys.getrecursionlimit():
        return func(*args)

    outcome = {}

    def target():
        previous_limit = sys.getrecursionlimit()
        sys.setrecursionlimit(limit)
        try:
            outcome["value"] = func(*args)
        except BaseException as exc:
            outcome["error"] = exc
        finally:
            sys.setrecursionlimit(previous_limit)

    previous_size = threading.stack_size()
    threading.stack_size(min(limit * _STACK_BYTES_PER_FRAME, _MAX_STACK_BYTES))
    try:
        worker = threading.Thread(target=target, name="blood-evaluator", daemon=True)
        worker.start()
    finally:
        threading.stack_size(previous_size)
    worker.join()

    if "error" in outcome:
        raise outcome["error"]
    return outcome["value"]


def new_global_environment():
    return Environment()


# Global Entry Point
def evaluate(program, env=None, output=None, filename="<stdin>", evaluator=None):
    """Run ``program``; returns the last value or an ``EvaluationError``.

    Passing the same ``env`` (and ``evaluator``) across calls keeps globals
    alive between runs, which is how the REPL works.
    """
    env = env if env is not None else new_global_environment()
    evaluator = evaluator or Evaluator(output=output, filename=filename)

    result = run_with_deep_stack(evaluator.eval_node, program, env)

    debug_log("Evaluation summary", evaluator.summary)
    return result
