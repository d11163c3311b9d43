"""Parse error taxonomy for shorthand expression parsing.

All errors abort the whole parse call. They derive from ``ValueError`` because
they always describe a defect in the input text, never in the parser state.
"""

from enum import Enum
from typing import Optional


class GroupingExcess(Enum):
    """Which side of a parenthesis group is unbalanced."""

    OPENING = "opening"
    CLOSING = "closing"


class ExpressionParseError(ValueError):
    """Base exception for every rejection of an expression or node literal."""

    def __init__(
        self,
        reason: str,
        expression: str,
        position: Optional[int] = None
    ) -> None:
        self.reason = reason
        self.expression = expression
        self.position = position
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        location = f" at offset {self.position}" if self.position is not None else ""
        return f"{self.reason}{location} (expression: {self.expression!r})"


class UnbalancedGroupingError(ExpressionParseError):
    """Raised when parenthesis depth is not zero at the end of a scan."""

    def __init__(
        self,
        excess: GroupingExcess,
        expression: str,
        position: Optional[int] = None
    ) -> None:
        self.excess = excess
        super().__init__(
            f"Unbalanced grouping: excess {excess.value} parenthesis",
            expression,
            position,
        )


class MalformedNodeLiteralError(ExpressionParseError):
    """Raised when a node literal does not follow the literal grammar."""

    @property
    def literal(self) -> str:
        """The node literal that failed to scan."""
        return self.expression


class DuplicateAttributeError(ExpressionParseError):
    """Raised when one attribute name repeats inside a single node literal."""

    def __init__(
        self,
        attribute_name: str,
        expression: str,
        position: Optional[int] = None
    ) -> None:
        self.attribute_name = attribute_name
        super().__init__(
            f"Duplicate attribute {attribute_name!r}", expression, position
        )


class NestingTooDeepError(ExpressionParseError):
    """Raised when group nesting exceeds the configured maximum depth."""

    def __init__(
        self,
        max_depth: int,
        expression: str,
        position: Optional[int] = None
    ) -> None:
        self.max_depth = max_depth
        super().__init__(
            f"Group nesting deeper than {max_depth} levels", expression, position
        )
