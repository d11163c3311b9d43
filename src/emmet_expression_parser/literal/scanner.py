"""Explicit state-machine scanner for single node literals.

A node literal has the fixed shape::

    tag [#id] [.class ...] [[name name="value" ...]] [{content}]

Every component except the tag is optional and components appear in this
order only. The scanner walks the literal once, left to right, and reports
the offset of the first character it cannot accept.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from functools import lru_cache
from typing import Dict, List, Optional

from emmet_expression_parser.shared import (
    DuplicateAttributeError,
    MalformedNodeLiteralError,
    Node,
)

ID_MARKER = "#"
CLASS_MARKER = "."
ATTRIBUTES_OPEN = "["
ATTRIBUTES_CLOSE = "]"
CONTENT_OPEN = "{"
CONTENT_CLOSE = "}"
VALUE_ASSIGN = "="
VALUE_QUOTE = '"'

TAG_TERMINATORS = frozenset((ID_MARKER, CLASS_MARKER, ATTRIBUTES_OPEN, CONTENT_OPEN))
NAME_TERMINATORS = frozenset((CLASS_MARKER, ATTRIBUTES_OPEN, CONTENT_OPEN))
ATTRIBUTE_NAME_TERMINATORS = frozenset((VALUE_ASSIGN, ATTRIBUTES_CLOSE, VALUE_QUOTE))

logger = logging.getLogger(__name__)


class ScannerState(Enum):
    """States of the node literal scanner."""

    TAG = auto()
    ID = auto()
    CLASS = auto()
    ATTRIBUTES = auto()
    CONTENT = auto()
    DONE = auto()


@dataclass
class _ScanContext:
    """Per-call cursor and collected components of one literal."""

    literal: str
    index: int = 0
    tag: str = ""
    id: str = ""
    class_list: List[str] = field(default_factory=list)
    attributes: Dict[str, Optional[str]] = field(default_factory=dict)
    content: str = ""

    @property
    def at_end(self) -> bool:
        return self.index >= len(self.literal)

    def peek(self) -> str:
        return self.literal[self.index]

    def at_space(self) -> bool:
        return not self.at_end and self.peek().isspace()

    def skip_whitespace(self) -> None:
        while self.at_space():
            self.index += 1


class NodeLiteralScanner:
    """Scans node literals into childless ``Node`` objects.

    The scanner keeps no state between calls; all progress lives in a
    per-call ``_ScanContext``, so a single instance can be shared freely.
    """

    def match(self, literal: str) -> Node:
        """Scan ``literal`` into a node with no children.

        Raises:
            MalformedNodeLiteralError: If the literal does not have the node shape
            DuplicateAttributeError: If an attribute name repeats
        """
        context = _ScanContext(literal)
        state = ScannerState.TAG
        while state is not ScannerState.DONE:
            state = self._process_state(state, context)

        return Node(
            tag=context.tag,
            id=context.id,
            class_list=context.class_list,
            attributes=context.attributes,
            content=context.content,
        )

    def _process_state(self, state: ScannerState, context: _ScanContext) -> ScannerState:
        """Run the handler for ``state`` and return the next state."""
        if state is ScannerState.TAG:
            return self._scan_tag(context)
        if state is ScannerState.ID:
            context.id = self._scan_name(context, "id")
            return self._next_state(context, allow_id=False)
        if state is ScannerState.CLASS:
            context.class_list.append(self._scan_name(context, "class"))
            return self._next_state(context, allow_id=False)
        if state is ScannerState.ATTRIBUTES:
            return self._scan_attributes(context)
        if state is ScannerState.CONTENT:
            return self._scan_content(context)
        raise self._malformed(context, f"unknown scanner state {state.name}")

    def _scan_tag(self, context: _ScanContext) -> ScannerState:
        start = context.index
        while not context.at_end and context.peek() not in TAG_TERMINATORS:
            if context.peek().isspace():
                raise self._malformed(context, "whitespace in tag")
            context.index += 1

        context.tag = context.literal[start:context.index]
        if not context.tag:
            raise self._malformed(context, "empty tag")
        return self._next_state(context, allow_id=True)

    def _scan_name(self, context: _ScanContext, component: str) -> str:
        """Read the run following an id or class marker."""
        context.index += 1
        start = context.index
        while (
            not context.at_end
            and context.peek() not in NAME_TERMINATORS
            and not context.peek().isspace()
        ):
            context.index += 1

        name = context.literal[start:context.index]
        if not name:
            raise self._malformed(context, f"empty {component}")
        return name

    def _next_state(self, context: _ScanContext, allow_id: bool) -> ScannerState:
        if context.at_end:
            return ScannerState.DONE

        char = context.peek()
        if char == ID_MARKER and allow_id:
            return ScannerState.ID
        if char == CLASS_MARKER:
            return ScannerState.CLASS
        if char == ATTRIBUTES_OPEN:
            return ScannerState.ATTRIBUTES
        if char == CONTENT_OPEN:
            return ScannerState.CONTENT
        raise self._malformed(context, f"unexpected character {char!r}")

    def _scan_attributes(self, context: _ScanContext) -> ScannerState:
        context.index += 1
        while True:
            context.skip_whitespace()
            if context.at_end:
                raise self._malformed(context, "unterminated attribute group")
            if context.peek() == ATTRIBUTES_CLOSE:
                context.index += 1
                break
            self._scan_attribute(context)

        if context.at_end:
            return ScannerState.DONE
        if context.peek() == CONTENT_OPEN:
            return ScannerState.CONTENT
        raise self._malformed(context, "unexpected character after attribute group")

    def _scan_attribute(self, context: _ScanContext) -> None:
        """Read one ``name`` or ``name="value"`` token of an attribute group.

        Only the first ``=`` outside quotes separates name from value, so a
        quoted value may contain ``=`` as well as whitespace and ``]``.
        """
        literal = context.literal
        name_start = context.index
        while (
            not context.at_end
            and context.peek() not in ATTRIBUTE_NAME_TERMINATORS
            and not context.peek().isspace()
        ):
            context.index += 1

        name = literal[name_start:context.index]
        if not name:
            raise self._malformed(context, "missing attribute name")

        value: Optional[str] = None
        if not context.at_end and context.peek() == VALUE_ASSIGN:
            context.index += 1
            if context.at_end or context.peek() != VALUE_QUOTE:
                raise self._malformed(context, "attribute value must be double quoted")
            closing_quote = literal.find(VALUE_QUOTE, context.index + 1)
            if closing_quote == -1:
                raise self._malformed(context, "unterminated attribute value")
            value = literal[context.index + 1:closing_quote]
            context.index = closing_quote + 1

        if (
            not context.at_end
            and not context.peek().isspace()
            and context.peek() != ATTRIBUTES_CLOSE
        ):
            raise self._malformed(context, "attributes must be separated by whitespace")

        if name in context.attributes:
            raise DuplicateAttributeError(name, literal, name_start)
        context.attributes[name] = value

    def _scan_content(self, context: _ScanContext) -> ScannerState:
        literal = context.literal
        start = context.index + 1
        if len(literal) - 1 < start or literal[-1] != CONTENT_CLOSE:
            raise self._malformed(context, "content group must close at the end of the literal")
        context.content = literal[start:-1]
        context.index = len(literal)
        return ScannerState.DONE

    def _malformed(self, context: _ScanContext, reason: str) -> MalformedNodeLiteralError:
        logger.debug(
            "Node literal rejected",
            extra={
                "component": "literal_scanner",
                "reason": reason,
                "offset": context.index,
            }
        )
        return MalformedNodeLiteralError(
            f"Malformed node literal: {reason}", context.literal, context.index
        )


@lru_cache(maxsize=None)
def default_scanner() -> NodeLiteralScanner:
    """Return the process-wide scanner, created on first use."""
    return NodeLiteralScanner()


def match_literal(literal: str) -> Node:
    """Scan one node literal with the process-wide scanner.

    Examples:
        >>> node = match_literal('a#top.nav[href="/x?a=b" hidden]{Home}')
        >>> node.tag, node.id, node.class_list
        ('a', 'top', ['nav'])
        >>> node.attributes
        {'href': '/x?a=b', 'hidden': None}
    """
    return default_scanner().match(literal)
