"""Tokenization engine for shorthand expression parsing.

Key Components:
    split_at_top_level: Delimiter splitter aware of content, attribute and
        parenthesis groups
    ExpressionTokenizer: Single-pass scanner producing structural tokens
    Token: Individual token with type, text and position
    TokenType: Enumeration of structural token types
    GroupingState: Group tracking shared by the splitter and the tokenizer
"""

from .grouping import GroupingState
from .splitter import split_at_top_level
from .tokenizer import (
    CHILD_OPERATOR,
    SIBLING_OPERATOR,
    ExpressionTokenizer,
    Token,
    TokenizationResult,
    TokenPosition,
    TokenType,
    tokenize,
)

__all__ = [
    "CHILD_OPERATOR",
    "SIBLING_OPERATOR",
    "ExpressionTokenizer",
    "GroupingState",
    "Token",
    "TokenPosition",
    "TokenType",
    "TokenizationResult",
    "split_at_top_level",
    "tokenize",
]
