"""Delimiter-aware splitting of shorthand expressions.

``split_at_top_level`` cuts a string at every occurrence of a delimiter that is
not inside a content group, an attribute group or an open parenthesis group.
Rejoining the segments with the delimiter gives back the original text, except
that a trailing delimiter produces no empty final segment.
"""

import logging
from typing import List

from emmet_expression_parser.shared.errors import GroupingExcess, UnbalancedGroupingError

from .grouping import GroupingState

logger = logging.getLogger(__name__)


def split_at_top_level(text: str, delimiter: str) -> List[str]:
    """Split ``text`` at top-level occurrences of ``delimiter``.

    Args:
        text: Expression or sub-expression to split
        delimiter: Single split character, usually ``>`` or ``+``

    Returns:
        Ordered list of segments; empty segments between adjacent delimiters
        are kept, a trailing empty segment is not

    Raises:
        ValueError: If ``delimiter`` is not exactly one character
        UnbalancedGroupingError: If parentheses do not balance over ``text``

    Examples:
        >>> split_at_top_level("a+(b+c)+d{x+y}", "+")
        ['a', '(b+c)', 'd{x+y}']
    """
    if len(delimiter) != 1:
        raise ValueError("Delimiter must be exactly one character")

    state = GroupingState()
    segments: List[str] = []
    buffer: List[str] = []

    for char in text:
        state.update(char)
        if char == delimiter and state.is_top_level:
            segments.append("".join(buffer))
            buffer.clear()
        else:
            buffer.append(char)

    if buffer:
        segments.append("".join(buffer))

    if state.paren_depth < 0:
        raise UnbalancedGroupingError(GroupingExcess.CLOSING, text)
    if state.paren_depth > 0:
        raise UnbalancedGroupingError(GroupingExcess.OPENING, text)

    logger.debug(
        "Split expression",
        extra={
            "component": "splitter",
            "delimiter": delimiter,
            "segment_count": len(segments),
        }
    )
    return segments
