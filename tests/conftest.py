"""
Pytest configuration for Blood tests.
"""
import io
import os
import sys

import pytest

# Make `import blood` work without installing the package
_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
_SRC_DIR = os.path.join(_ROOT, 'src')

if _SRC_DIR not in sys.path:
	sys.path.insert(0, _SRC_DIR)

from blood.config import config  # noqa: E402
from blood.evaluator import evaluate  # noqa: E402
from blood.lexer import Lexer  # noqa: E402
from blood.parser import Parser  # noqa: E402


@pytest.fixture(autouse=True)
def _restore_config():
	"""CLI flags and file directives mutate the shared config; undo that per test."""
	saved = dict(vars(config))
	yield
	for key, value in saved.items():
		setattr(config, key, value)


@pytest.fixture
def run_blood():
	"""Parse and evaluate a snippet; returns ``(result, printed_output)``."""
	def _run(code_str):
		output = io.StringIO()
		program = Parser(Lexer(code_str)).parse_program()
		result = evaluate(program, output=output)
		return result, output.getvalue()
	return _run
