# src/blood/error_reporter.py
"""Error types and rendering for the Blood front end.

Lexer and parser failures are raised as ``BloodError`` subclasses. Runtime
failures are ``EvaluationError`` values (see object.py) but share the same
rendering through ``ErrorReporter.format``.
"""

from rich.console import Console
from rich.text import Text

from .config import config


class BloodError(Exception):
    """Base class for errors raised by the lexer and parser."""

    kind = "Error"

    def __init__(self, message, line=None, column=None, filename="<stdin>", suggestion=None):
        super().__init__(message)
        self.message = message
        self.line = line
        self.column = column
        self.filename = filename
        self.suggestion = suggestion

    def position(self):
        if self.line is None:
            return self.filename
        return f"{self.filename}:{self.line}:{self.column}"

    def __str__(self):
        return f"{self.kind}: {self.message} at {self.position()}"


class LexError(BloodError):
    kind = "LexError"


class SourceError(BloodError):
    """The source file could not be read or decoded."""

    kind = "SourceError"


class ParseError(BloodError):
    kind = "ParseError"

    def __init__(self, message, line=None, column=None, filename="<stdin>",
                 expected=None, found=None, suggestion=None):
        super().__init__(message, line, column, filename, suggestion)
        self.expected = expected
        self.found = found


class ErrorReporter:
    """Keeps registered sources so errors can quote the offending line."""

    def __init__(self):
        self.sources = {}

    def register_source(self, filename, source):
        self.sources[filename] = source.splitlines()

    def source_line(self, filename, line):
        lines = self.sources.get(filename)
        if not lines or line is None or not 1 <= line <= len(lines):
            return None
        return lines[line - 1]

    def report_error(self, error_class, message, line=None, column=None,
                     filename="<stdin>", **extra):
        """Build an error of ``error_class``; the caller raises it."""
        return error_class(message, line=line, column=column, filename=filename, **extra)

    def format(self, error):
        kind = getattr(error, "kind", type(error).__name__)
        kind = getattr(kind, "value", kind)
        filename = getattr(error, "filename", None) or "<stdin>"
        line = getattr(error, "line", None)
        column = getattr(error, "column", None)

        parts = [f"{kind}: {error.message}"]
        if line is not None:
            parts.append(f"  --> {filename}:{line}:{column}")
            snippet = self.source_line(filename, line) if config.show_source_context else None
            if snippet is not None:
                gutter = " " * len(str(line))
                parts.append(f"{gutter} |")
                parts.append(f"{line} | {snippet}")
                caret = " " * max((column or 1) - 1, 0) + "^"
                parts.append(f"{gutter} | {caret}")
        suggestion = getattr(error, "suggestion", None)
        if suggestion:
            parts.append(f"  help: {suggestion}")
        return "\n".join(parts)


_reporter = ErrorReporter()


def get_error_reporter():
    return _reporter


def print_error(error, console=None):
    console = console or Console(stderr=True)
    console.print(Text(get_error_reporter().format(error), style="bold red"), soft_wrap=True)
