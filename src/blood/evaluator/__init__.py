# src/blood/evaluator/__init__.py
from .core import Evaluator, evaluate, new_global_environment
from .utils import is_error, NIL, TRUE, FALSE

__all__ = ['Evaluator', 'evaluate', 'new_global_environment', 'is_error', 'NIL', 'TRUE', 'FALSE']
