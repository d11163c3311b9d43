"""Single-pass tokenizer for shorthand expressions.

The tokenizer scans an expression once and produces a flat stream of
structural tokens: operators, parenthesis groups and runs of literal text.
Content groups ``{...}`` and attribute groups ``[...]`` are always part of a
text run, so operators and parentheses inside them never become tokens.
"""

import logging
import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Dict, List, Optional

from emmet_expression_parser.shared.errors import GroupingExcess, UnbalancedGroupingError

from .grouping import GROUP_CLOSE, GROUP_OPEN, GroupingState

CHILD_OPERATOR = ">"
SIBLING_OPERATOR = "+"

logger = logging.getLogger(__name__)


class TokenType(Enum):
    """Structural token types of a shorthand expression."""

    TEXT = auto()           # Run of node literal characters
    GROUP_OPEN = auto()     # (
    GROUP_CLOSE = auto()    # )
    CHILD = auto()          # >
    SIBLING = auto()        # +
    END = auto()            # End of input


OPERATOR_TYPES = {
    CHILD_OPERATOR: TokenType.CHILD,
    SIBLING_OPERATOR: TokenType.SIBLING,
}


@dataclass(frozen=True)
class TokenPosition:
    """Position information for expression tokens."""

    line: int
    column: int
    offset: int

    def __post_init__(self) -> None:
        """Validate position values."""
        if self.line < 1:
            raise ValueError("Line number must be >= 1")
        if self.column < 1:
            raise ValueError("Column number must be >= 1")
        if self.offset < 0:
            raise ValueError("Offset must be >= 0")


@dataclass(frozen=True)
class Token:
    """Single structural token with its source position."""

    type: TokenType
    value: str
    position: TokenPosition

    @property
    def offset(self) -> int:
        """Offset of the first character of the token."""
        return self.position.offset

    @property
    def end_offset(self) -> int:
        """Offset just past the last character of the token."""
        return self.position.offset + len(self.value)


@dataclass
class TokenizationResult:
    """Token stream of one expression with group matching information."""

    expression: str
    tokens: List[Token]
    group_partners: Dict[int, int] = field(default_factory=dict)
    processing_time_ms: float = 0.0

    @property
    def token_count(self) -> int:
        """Get the total number of tokens, including the END token."""
        return len(self.tokens)

    @property
    def group_count(self) -> int:
        """Get the number of parenthesis groups."""
        return len(self.group_partners)

    def closing_index(self, open_index: int) -> int:
        """Return the index of the ``)`` matching the ``(`` at ``open_index``."""
        try:
            return self.group_partners[open_index]
        except KeyError:
            raise ValueError(f"Token {open_index} does not open a group") from None


class ExpressionTokenizer:
    """Converts an expression into structural tokens in a single scan.

    Balance is judged by the parenthesis depth at the end of input only. While
    the depth is negative, parentheses and operators are plain text, so
    ``a)(b`` is a single text run. Only parentheses that form a matched pair
    become group tokens.
    """

    def __init__(self, correlation_id: Optional[str] = None) -> None:
        self.correlation_id = correlation_id
        self._reset_state("")

    def _reset_state(self, expression: str) -> None:
        """Reset tokenizer state for new processing."""
        self.expression = expression
        self.state = GroupingState()
        self.tokens: List[Token] = []
        self.group_partners: Dict[int, int] = {}
        self.open_groups: List[int] = []
        self.excess_close_offset: Optional[int] = None
        self.text_buffer: List[str] = []
        self.text_start: Optional[TokenPosition] = None
        self.line = 1
        self.column = 1
        self.offset = 0

    def tokenize(self, expression: str) -> TokenizationResult:
        """Tokenize an expression.

        Args:
            expression: Shorthand expression text

        Returns:
            TokenizationResult whose token list always ends with an END token

        Raises:
            UnbalancedGroupingError: If parentheses do not balance
        """
        start_time = time.time()
        self._reset_state(expression)

        for char in expression:
            self._process_character(char)
            self._advance_position(char)
        self._finalize_text()

        if self.state.paren_depth < 0:
            raise UnbalancedGroupingError(
                GroupingExcess.CLOSING, expression, self.excess_close_offset
            )
        if self.open_groups:
            unclosed = self.tokens[self.open_groups[-1]]
            raise UnbalancedGroupingError(
                GroupingExcess.OPENING, expression, unclosed.offset
            )

        self._emit(TokenType.END, "", self._current_position())

        result = TokenizationResult(
            expression=expression,
            tokens=self.tokens,
            group_partners=self.group_partners,
            processing_time_ms=(time.time() - start_time) * 1000,
        )

        logger.debug(
            "Tokenization completed",
            extra={
                "component": "expression_tokenizer",
                "correlation_id": self.correlation_id,
                "token_count": result.token_count,
                "group_count": result.group_count,
            }
        )
        return result

    def _process_character(self, char: str) -> None:
        """Process a single character through the grouping state machine."""
        depth_before = self.state.paren_depth
        self.state.update(char)

        if self.state.in_literal_group:
            self._append_text(char)
        elif char == GROUP_CLOSE and self.state.paren_depth < 0:
            if depth_before == 0:
                self.excess_close_offset = self.offset
            self._append_text(char)
        elif depth_before < 0:
            # Parentheses and operators carry no structure below depth zero.
            self._append_text(char)
        elif char == GROUP_OPEN:
            self._finalize_text()
            self.open_groups.append(len(self.tokens))
            self._emit(TokenType.GROUP_OPEN, char, self._current_position())
        elif char == GROUP_CLOSE:
            self._finalize_text()
            self.group_partners[self.open_groups.pop()] = len(self.tokens)
            self._emit(TokenType.GROUP_CLOSE, char, self._current_position())
        elif char in OPERATOR_TYPES:
            self._finalize_text()
            self._emit(OPERATOR_TYPES[char], char, self._current_position())
        else:
            self._append_text(char)

    def _append_text(self, char: str) -> None:
        if self.text_start is None:
            self.text_start = self._current_position()
        self.text_buffer.append(char)

    def _finalize_text(self) -> None:
        """Emit the pending text run, if any."""
        if self.text_start is None:
            return
        self._emit(TokenType.TEXT, "".join(self.text_buffer), self.text_start)
        self.text_buffer.clear()
        self.text_start = None

    def _emit(self, token_type: TokenType, value: str, position: TokenPosition) -> None:
        self.tokens.append(Token(type=token_type, value=value, position=position))

    def _current_position(self) -> TokenPosition:
        return TokenPosition(self.line, self.column, self.offset)

    def _advance_position(self, char: str) -> None:
        self.offset += 1
        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1


def tokenize(expression: str, correlation_id: Optional[str] = None) -> TokenizationResult:
    """Tokenize ``expression`` with a fresh ``ExpressionTokenizer``."""
    return ExpressionTokenizer(correlation_id=correlation_id).tokenize(expression)
