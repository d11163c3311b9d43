"""Public parsing API for shorthand expressions."""

from .parser import ExpressionParser, parse, parse_with_diagnostics

__all__ = [
    "ExpressionParser",
    "parse",
    "parse_with_diagnostics",
]
