# src/blood/__init__.py
"""Blood: a Lua-flavored scripting language with immutable-by-default bindings."""

__version__ = "0.1.0"
