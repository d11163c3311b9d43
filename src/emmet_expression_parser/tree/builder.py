"""Tree building for shorthand expressions.

The builder is a recursive-descent parser over the token stream produced by
``ExpressionTokenizer``. A sub-expression is a span of tokens; it is cut into
descendant levels at ``>`` and each level into sibling items at ``+``, where
operators inside a parenthesis group never cut. ``build_forest`` then works
on the list of levels:

1. No levels give an empty forest.
2. A single level holding a single item is one node literal, taken verbatim
   from the source, parentheses included.
3. Otherwise every item is parsed as a sub-expression of its own, after
   removing one pair of parentheses that wraps the whole item.
4. The forest of the remaining levels becomes the children of the last node
   produced, if any node was produced.

Cutting a span never produces an empty final part, so trailing operators
open nothing.
"""

import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from emmet_expression_parser.literal import NodeLiteralScanner, default_scanner
from emmet_expression_parser.shared import (
    CorrelationLogger,
    DiagnosticEntry,
    DiagnosticSeverity,
    ExpressionParseError,
    NestingTooDeepError,
    Node,
    ParserConfig,
    PerformanceMetrics,
    get_logger,
)
from emmet_expression_parser.tokenization import (
    ExpressionTokenizer,
    TokenizationResult,
    TokenType,
)

COMPONENT_NAME = "tree_builder"


@dataclass
class ParseResult:
    """Outcome of one parse call with diagnostics and metrics.

    On failure ``root`` is ``None`` and ``error`` holds the rejection; a
    partial tree is never exposed.
    """

    expression: str = ""
    root: Optional[Node] = None
    success: bool = True
    error: Optional[ExpressionParseError] = None
    diagnostics: List[DiagnosticEntry] = field(default_factory=list)
    performance: PerformanceMetrics = field(default_factory=PerformanceMetrics)
    correlation_id: Optional[str] = None

    @property
    def node_count(self) -> int:
        """Number of parsed nodes, excluding the synthetic root."""
        if self.root is None:
            return 0
        return self.root.node_count - 1

    @property
    def max_depth(self) -> int:
        """Depth of the deepest parsed node; 0 for an empty forest."""
        if self.root is None:
            return 0
        return self.root.depth - 1

    @property
    def has_warnings(self) -> bool:
        """Check if any diagnostic is a warning."""
        return any(
            diagnostic.severity == DiagnosticSeverity.WARNING
            for diagnostic in self.diagnostics
        )

    def add_diagnostic(
        self,
        severity: DiagnosticSeverity,
        message: str,
        component: str,
        position: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        """Add a diagnostic entry to the result."""
        self.diagnostics.append(DiagnosticEntry(
            severity=severity,
            message=message,
            component=component,
            position=position,
            details=details,
            correlation_id=self.correlation_id,
        ))

    def summary(self) -> Dict[str, Any]:
        """Summarize the result for logging or reporting."""
        return {
            "success": self.success,
            "node_count": self.node_count,
            "max_depth": self.max_depth,
            "error": str(self.error) if self.error else None,
            "diagnostic_count": len(self.diagnostics),
            "processing_time_ms": self.performance.processing_time_ms,
        }


@dataclass(frozen=True)
class _TokenSpan:
    """Half-open range ``[start, end)`` of token indices in one tokenization.

    ``end`` always indexes a real token (an operator, a ``)`` or END), whose
    offset marks where the span's source text stops.
    """

    tokenization: TokenizationResult
    start: int
    end: int

    @property
    def offset(self) -> int:
        return self.tokenization.tokens[self.start].offset

    @property
    def text(self) -> str:
        tokens = self.tokenization.tokens
        return self.tokenization.expression[tokens[self.start].offset:tokens[self.end].offset]

    def operator_indices(self, operator: TokenType) -> List[int]:
        """Indices of ``operator`` tokens outside nested groups."""
        indices = []
        index = self.start
        while index < self.end:
            token_type = self.tokenization.tokens[index].type
            if token_type is TokenType.GROUP_OPEN:
                index = self.tokenization.closing_index(index)
            elif token_type is operator:
                indices.append(index)
            index += 1
        return indices

    def split(self, operator: TokenType) -> List["_TokenSpan"]:
        """Cut the span at top-level ``operator`` tokens.

        Empty parts between operators are kept; an empty final part is not.
        """
        parts = []
        part_start = self.start
        for index in self.operator_indices(operator):
            parts.append(_TokenSpan(self.tokenization, part_start, index))
            part_start = index + 1
        if part_start < self.end:
            parts.append(_TokenSpan(self.tokenization, part_start, self.end))
        return parts

    def unwrap(self) -> Optional["_TokenSpan"]:
        """Return the inside of a parenthesis pair enclosing the whole span."""
        if self.end - self.start < 2:
            return None
        if self.tokenization.tokens[self.start].type is not TokenType.GROUP_OPEN:
            return None
        if self.tokenization.closing_index(self.start) != self.end - 1:
            return None
        return _TokenSpan(self.tokenization, self.start + 1, self.end - 1)


def _whole_span(tokenization: TokenizationResult) -> _TokenSpan:
    return _TokenSpan(tokenization, 0, tokenization.token_count - 1)


class _ForestBuilder:
    """Per-call state of one tree build."""

    def __init__(
        self,
        scanner: NodeLiteralScanner,
        logger: CorrelationLogger,
        max_depth: Optional[int],
        diagnostics: Optional[List[DiagnosticEntry]]
    ) -> None:
        self.scanner = scanner
        self.logger = logger
        self.max_depth = max_depth
        self.diagnostics = diagnostics
        self.nodes_built = 0

    def build_forest(self, levels: Sequence[_TokenSpan], depth: int) -> List[Node]:
        if not levels:
            return []

        siblings = levels[0].split(TokenType.SIBLING)
        if len(levels) == 1 and len(siblings) == 1:
            return [self.match(siblings[0])]

        forest: List[Node] = []
        for sibling in siblings:
            group = sibling.unwrap()
            if group is None:
                forest.extend(self.build_forest(sibling.split(TokenType.CHILD), depth))
            else:
                self._check_depth(sibling, depth + 1)
                forest.extend(self.build_forest(group.split(TokenType.CHILD), depth + 1))

        deeper = levels[1:]
        if forest and deeper:
            anchor = forest[-1]
            if anchor.children:
                self.logger.debug(
                    "Replacing children of grouped node",
                    extra={"tag": anchor.tag, "replaced": len(anchor.children)}
                )
            anchor.children = self.build_forest(deeper, depth)
        elif deeper:
            self._discard(deeper)
        return forest

    def match(self, span: _TokenSpan) -> Node:
        node = self.scanner.match(span.text)
        self.nodes_built += 1
        return node

    def _check_depth(self, group: _TokenSpan, depth: int) -> None:
        if self.max_depth is not None and depth > self.max_depth:
            raise NestingTooDeepError(
                self.max_depth, group.tokenization.expression, group.offset
            )

    def _discard(self, levels: Sequence[_TokenSpan]) -> None:
        """Report levels that have no node to attach to."""
        self.logger.debug(
            "Discarding levels below an empty level",
            extra={"discarded": len(levels)}
        )
        if self.diagnostics is not None:
            self.diagnostics.append(DiagnosticEntry(
                severity=DiagnosticSeverity.WARNING,
                message="Levels below an empty level were discarded",
                component=COMPONENT_NAME,
                position=levels[0].offset,
                details={"discarded_levels": len(levels)},
                correlation_id=self.logger.correlation_id,
            ))


class ExpressionTreeBuilder:
    """Builds node trees from tokenized shorthand expressions.

    The builder holds only configuration; every call works on its own state,
    so one builder can serve concurrent callers.

    Examples:
        >>> from emmet_expression_parser.tokenization import tokenize
        >>> root = ExpressionTreeBuilder().build(tokenize("ul>li.item+li"))
        >>> [child.tag for child in root.children[0].children]
        ['li', 'li']
    """

    def __init__(
        self,
        config: Optional[ParserConfig] = None,
        correlation_id: Optional[str] = None,
        scanner: Optional[NodeLiteralScanner] = None
    ) -> None:
        self.config = config or ParserConfig()
        self.correlation_id = correlation_id or self.config.correlation_id
        self.scanner = scanner or default_scanner()
        self.logger = get_logger(__name__, self.correlation_id, COMPONENT_NAME)

    def build(
        self,
        tokenization: TokenizationResult,
        diagnostics: Optional[List[DiagnosticEntry]] = None
    ) -> Node:
        """Build the tree of a tokenized expression.

        Args:
            tokenization: Token stream of the whole expression
            diagnostics: Optional list receiving warnings about discarded input

        Returns:
            Synthetic root node whose children are the parsed forest

        Raises:
            ExpressionParseError: If any part of the expression is rejected
        """
        start_time = time.time()
        builder = self._forest_builder(diagnostics)
        levels = _whole_span(tokenization).split(TokenType.CHILD)
        forest = builder.build_forest(levels, depth=0)

        root = Node(tag=self.config.root_tag)
        root.children = forest

        self.logger.debug(
            "Tree building completed",
            extra={
                "nodes_built": builder.nodes_built,
                "top_level_nodes": len(forest),
                "build_time_ms": (time.time() - start_time) * 1000,
            }
        )
        return root

    def build_forest(
        self,
        levels: Sequence[str],
        diagnostics: Optional[List[DiagnosticEntry]] = None
    ) -> List[Node]:
        """Build the forest of an expression already split at top-level ``>``.

        Each level may hold siblings and groups but no top-level ``>``.

        Raises:
            ValueError: If a level contains a top-level descendant operator
            ExpressionParseError: If any level is rejected
        """
        tokenizer = ExpressionTokenizer(correlation_id=self.correlation_id)
        spans: List[_TokenSpan] = []
        for level in levels:
            span = _whole_span(tokenizer.tokenize(level))
            if span.operator_indices(TokenType.CHILD):
                raise ValueError(
                    f"Level {level!r} contains a top-level descendant operator"
                )
            spans.append(span)
        return self._forest_builder(diagnostics).build_forest(spans, depth=0)

    def _forest_builder(
        self,
        diagnostics: Optional[List[DiagnosticEntry]]
    ) -> _ForestBuilder:
        return _ForestBuilder(
            self.scanner,
            self.logger,
            self.config.max_nesting_depth,
            diagnostics,
        )
