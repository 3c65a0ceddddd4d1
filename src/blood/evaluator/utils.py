# src/blood/evaluator/utils.py
import logging

from ..config import config
from ..object import (
    Nil, Boolean, Integer, Float, ReturnValue, BreakSignal, ContinueSignal,
    EvaluationError, ErrorKind,
)

logger = logging.getLogger("blood.evaluator")

# Shared immutable singletons
NIL, TRUE, FALSE = Nil(), Boolean(True), Boolean(False)

SIGNALS = (ReturnValue, BreakSignal, ContinueSignal)


def debug_log(message, data=None, level="debug"):
    """Conditional debug logging that respects the interpreter config."""
    if not config.should_log(level):
        return
    log = getattr(logger, level, logger.debug)
    if data is not None:
        log("%s: %s", message, data)
    else:
        log(message)


def is_error(obj):
    return isinstance(obj, EvaluationError)


def is_signal(obj):
    return isinstance(obj, SIGNALS)


def is_number(obj):
    return isinstance(obj, (Integer, Float))


def native_bool_to_boolean(value):
    return TRUE if value else FALSE


def new_error(kind, message, node=None, suggestion=None):
    return EvaluationError(kind, message, suggestion=suggestion).at(node)


def type_mismatch(message, node=None):
    return new_error(ErrorKind.TYPE_MISMATCH, message, node)


def escape_message(signal):
    if isinstance(signal, BreakSignal):
        return "'break' used outside of a loop"
    if isinstance(signal, ContinueSignal):
        return "'continue' used outside of a loop"
    return "'return' used outside of a function"
