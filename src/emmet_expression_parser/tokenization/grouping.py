"""Grouping state shared by the delimiter splitter and the tokenizer.

Content groups ``{...}`` and attribute groups ``[...]`` are mutually exclusive
and never nest. Parentheses only count while outside both of them.
"""

from dataclasses import dataclass

CONTENT_OPEN = "{"
CONTENT_CLOSE = "}"
ATTR_OPEN = "["
ATTR_CLOSE = "]"
GROUP_OPEN = "("
GROUP_CLOSE = ")"


@dataclass
class GroupingState:
    """Scan state tracking content, attribute and parenthesis groups."""

    in_content: bool = False
    in_attr: bool = False
    paren_depth: int = 0

    @property
    def in_literal_group(self) -> bool:
        """Check if the scan is inside a content or attribute group."""
        return self.in_content or self.in_attr

    @property
    def is_top_level(self) -> bool:
        """Check if the scan is outside every kind of group."""
        return not self.in_literal_group and self.paren_depth == 0

    def update(self, char: str) -> None:
        """Apply one character to the state, before split decisions are made."""
        if char == CONTENT_OPEN:
            if not self.in_content and not self.in_attr:
                self.in_content = True
        elif char == CONTENT_CLOSE:
            if self.in_content and not self.in_attr:
                self.in_content = False
        elif char == ATTR_OPEN:
            if not self.in_attr and not self.in_content:
                self.in_attr = True
        elif char == ATTR_CLOSE:
            if self.in_attr and not self.in_content:
                self.in_attr = False
        elif char == GROUP_OPEN:
            if not self.in_literal_group:
                self.paren_depth += 1
        elif char == GROUP_CLOSE:
            if not self.in_literal_group:
                self.paren_depth -= 1
