# src/blood/parser/__init__.py
"""
Parser module for the Blood language.
"""

from .parser import Parser, parse, precedences

__all__ = ["Parser", "parse", "precedences"]
