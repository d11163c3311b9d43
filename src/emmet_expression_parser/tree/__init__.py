"""Tree building for shorthand expression parsing.

Key Components:
    Node: Structural node with tag, id, classes, attributes, content and children
    ExpressionTreeBuilder: Recursive-descent builder over the token stream
    ParseResult: Parse outcome with tree, diagnostics and metrics
    TreeValidator: Structural invariant checks for node trees
"""

from emmet_expression_parser.shared import Node

from .builder import ExpressionTreeBuilder, ParseResult
from .validation import (
    TreeValidator,
    ValidationIssue,
    ValidationIssueType,
    ValidationResult,
    validate_tree,
)

__all__ = [
    "ExpressionTreeBuilder",
    "Node",
    "ParseResult",
    "TreeValidator",
    "ValidationIssue",
    "ValidationIssueType",
    "ValidationResult",
    "validate_tree",
]
