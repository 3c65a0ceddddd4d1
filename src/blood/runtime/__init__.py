"""
Blood Runtime Module
Inline per-file execution flags
"""

from .file_flags import parse_file_flags, apply_file_flags

__all__ = [
    'parse_file_flags',
    'apply_file_flags',
]
