# src/blood/evaluator/statements.py
from ..object import (
    Boolean, Function, ReturnValue, BreakSignal, ContinueSignal, EvaluationError, ErrorKind,
)
from .utils import is_error, is_signal, debug_log, new_error, type_mismatch, escape_message, NIL

_BLOCK_INTERRUPTS = (ReturnValue, BreakSignal, ContinueSignal, EvaluationError)


class StatementEvaluatorMixin:
    """Handles evaluation of statements, scoping and control-flow outcomes."""

    def eval_program(self, program, env):
        debug_log("eval_program", f"Processing {len(program.statements)} statements")

        result = NIL
        for stmt in program.statements:
            res = self.eval_node(stmt, env)
            self.summary["evaluated_statements"] += 1

            if is_error(res):
                debug_log("  Error encountered", res)
                return res
            if is_signal(res):
                # A signal reaching the top level was never consumed
                return new_error(ErrorKind.ILLEGAL_CONTROL_FLOW_ESCAPE, escape_message(res), res)
            result = res

        debug_log("eval_program completed", result)
        return result

    def eval_block_statement(self, block, env):
        """Run ``block`` in ``env``; stop at the first non-normal outcome."""
        result = NIL
        for stmt in block.statements:
            res = self.eval_node(stmt, env)
            self.summary["evaluated_statements"] += 1

            if isinstance(res, _BLOCK_INTERRUPTS):
                debug_log("  Block interrupted", res)
                return res
            result = res
        return result

    def eval_scoped_block(self, block, env):
        return self.eval_block_statement(block, env.child())

    # === VARIABLES ===

    def eval_let_statement(self, node, env):
        debug_log("eval_let_statement", f"{'let mod' if node.mutable else 'let'} {node.name.value}")

        value = self.eval_node(node.value, env)
        if is_error(value):
            return value

        env.declare(node.name.value, value, mutable=node.mutable)
        return NIL

    def eval_assign_statement(self, node, env):
        name = node.name.value
        debug_log("eval_assign_statement", f"Assigning to {name}")

        value = self.eval_node(node.value, env)
        if is_error(value):
            return value

        binding = env.resolve(name)
        if binding is None:
            if name in self.builtins:
                return new_error(ErrorKind.IMMUTABLE_ASSIGNMENT,
                                 f"Cannot assign to built-in '{name}'", node)
            return new_error(ErrorKind.UNDEFINED_VARIABLE,
                             f"Cannot assign to undeclared variable '{name}'", node,
                             suggestion=f"declare it first with 'let mod {name} = ...'")
        if not binding.mutable:
            return new_error(ErrorKind.IMMUTABLE_ASSIGNMENT,
                             f"Cannot reassign immutable variable '{name}'", node,
                             suggestion=f"declare it with 'let mod {name}' to allow reassignment")

        binding.value = value
        return NIL

    # === CONTROL FLOW ===

    def _eval_condition(self, condition, env, construct):
        cond = self.eval_node(condition, env)
        if is_error(cond):
            return cond
        if not isinstance(cond, Boolean):
            return type_mismatch(
                f"{construct} condition must be a boolean, got {cond.type()}", condition)
        return cond

    def eval_if_statement(self, node, env):
        for condition, block in node.branches:
            cond = self._eval_condition(condition, env, "if")
            if is_error(cond):
                return cond
            if cond.value:
                return self.eval_scoped_block(block, env)

        if node.alternative is not None:
            return self.eval_scoped_block(node.alternative, env)
        return NIL

    def eval_while_statement(self, node, env):
        return self._run_loop(node.body, env, condition=node.condition)

    def eval_loop_statement(self, node, env):
        return self._run_loop(node.body, env)

    def _run_loop(self, body, env, condition=None):
        while True:
            if condition is not None:
                cond = self._eval_condition(condition, env, "while")
                if is_error(cond):
                    return cond
                if not cond.value:
                    break

            result = self.eval_scoped_block(body, env)
            if isinstance(result, BreakSignal):
                break
            if isinstance(result, ContinueSignal):
                continue
            if isinstance(result, (ReturnValue, EvaluationError)):
                return result

        return NIL

    def eval_break_statement(self, node, env):
        return BreakSignal(node.token)

    def eval_continue_statement(self, node, env):
        return ContinueSignal(node.token)

    def eval_return_statement(self, node, env):
        if node.return_value is None:
            return ReturnValue(NIL, node.token)
        val = self.eval_node(node.return_value, env)
        if is_error(val):
            return val
        return ReturnValue(val, node.token)

    # === FUNCTIONS ===

    def eval_function_statement(self, node, env):
        name = node.name.value
        debug_log("eval_function_statement", f"fn {name}")
        params = [p.value for p in node.parameters]
        # Bound in the defining scope, which the closure captures, so recursion resolves
        env.declare(name, Function(name, params, node.body, env), mutable=False)
        return NIL
