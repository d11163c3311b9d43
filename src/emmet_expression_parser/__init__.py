"""Emmet-style shorthand expression parser.

Turns abbreviations such as ``div#id.cls[attr="v"]{text}>child+sibling`` into
a tree of structural nodes for a downstream renderer.

Progressive API Disclosure:
- Level 1: Simple functions - parse(), parse_with_diagnostics()
- Level 2: Configured parser - ExpressionParser with ParserConfig
- Level 3: Building blocks - split_at_top_level(), tokenize(), match_literal(),
  ExpressionTreeBuilder
"""

__version__ = "0.1.0"
__author__ = "Emmet Expression Parser Team"

from .api import ExpressionParser, parse, parse_with_diagnostics
from .literal import match_literal
from .shared import (
    ConfigError,
    ConfigValidationError,
    DuplicateAttributeError,
    ExpressionParseError,
    GroupingExcess,
    MalformedNodeLiteralError,
    NestingTooDeepError,
    ParserConfig,
    UnbalancedGroupingError,
)
from .tokenization import split_at_top_level, tokenize
from .tools import format_tree
from .tree import ExpressionTreeBuilder, Node, ParseResult, validate_tree

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: Simple parsing functions
    "parse",
    "parse_with_diagnostics",

    # Level 2: Configured parser
    "ExpressionParser",
    "ParserConfig",

    # Level 3: Building blocks
    "ExpressionTreeBuilder",
    "match_literal",
    "split_at_top_level",
    "tokenize",

    # Result objects and helpers
    "Node",
    "ParseResult",
    "format_tree",
    "validate_tree",

    # Errors
    "ConfigError",
    "ConfigValidationError",
    "DuplicateAttributeError",
    "ExpressionParseError",
    "GroupingExcess",
    "MalformedNodeLiteralError",
    "NestingTooDeepError",
    "UnbalancedGroupingError",
]
