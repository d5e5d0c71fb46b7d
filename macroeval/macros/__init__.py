"""Compile-time macro handlers.

Each handler takes the call expression and the MacroState and returns a
JSON-compatible value that replaces the call.
"""
