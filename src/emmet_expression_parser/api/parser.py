"""Core parser API for shorthand expression parsing.

Two levels of use:

- ``parse()`` returns the synthetic root node and raises on malformed input.
- ``ExpressionParser`` adds configuration, and ``parse_with_diagnostics()``
  reports rejections inside a ``ParseResult`` instead of raising.
"""

import time
from typing import Optional

from emmet_expression_parser.shared import (
    DiagnosticSeverity,
    ExpressionParseError,
    ParserConfig,
    get_logger,
)
from emmet_expression_parser.tree import (
    ExpressionTreeBuilder,
    Node,
    ParseResult,
    TreeValidator,
)
from emmet_expression_parser.tokenization import (
    ExpressionTokenizer,
    TokenizationResult,
)

# Max length for expression preview in logs
PREVIEW_LENGTH = 100
MS_PER_SECOND = 1000


def _preview(expression: str) -> str:
    if len(expression) > PREVIEW_LENGTH:
        return expression[:PREVIEW_LENGTH] + "..."
    return expression


def _require_string(expression: object) -> None:
    if not isinstance(expression, str):
        raise TypeError(
            f"Expression must be a string, not {type(expression).__name__}"
        )


class ExpressionParser:
    """Configured parser for shorthand expressions.

    The parser holds only immutable configuration, so one instance can be
    shared between threads.

    Examples:
        >>> parser = ExpressionParser(ParserConfig(root_tag="fragment"))
        >>> root = parser.parse("nav>a.link+a.link")
        >>> root.tag, len(root.children[0].children)
        ('fragment', 2)
    """

    def __init__(
        self,
        config: Optional[ParserConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        self.config = config or ParserConfig()
        self.correlation_id = correlation_id or self.config.correlation_id
        self.logger = get_logger(__name__, self.correlation_id, "expression_parser")
        self.tree_builder = ExpressionTreeBuilder(self.config, self.correlation_id)
        self._minimum_severity = DiagnosticSeverity[self.config.diagnostic_level]

    def tokenize(self, expression: str) -> TokenizationResult:
        """Tokenize ``expression`` without building a tree."""
        _require_string(expression)
        return ExpressionTokenizer(correlation_id=self.correlation_id).tokenize(expression)

    def parse(self, expression: str) -> Node:
        """Parse ``expression`` into a tree under a synthetic root.

        Raises:
            TypeError: If ``expression`` is not a string
            ExpressionParseError: If the expression is rejected
        """
        _require_string(expression)
        self.logger.debug(
            "Starting parse operation",
            extra={"content_length": len(expression)}
        )
        tokenization = self.tokenize(expression)
        return self.tree_builder.build(tokenization)

    def parse_with_diagnostics(self, expression: str) -> ParseResult:
        """Parse ``expression`` and report the outcome as a ``ParseResult``.

        Rejections are returned as a failed result with an ERROR diagnostic
        and no tree.

        Raises:
            TypeError: If ``expression`` is not a string
        """
        _require_string(expression)
        start_time = time.time()
        result = ParseResult(expression=expression, correlation_id=self.correlation_id)
        result.performance.characters_processed = len(expression)

        self.logger.info(
            "Starting parse operation",
            extra={
                "content_length": len(expression),
                "preview": _preview(expression),
            }
        )

        try:
            tokenization = self.tokenize(expression)
            result.performance.tokens_generated = tokenization.token_count
            root = self.tree_builder.build(
                tokenization,
                diagnostics=result.diagnostics if self.config.enable_diagnostics else None,
            )
        except ExpressionParseError as e:
            result.success = False
            result.error = e
            result.add_diagnostic(
                DiagnosticSeverity.ERROR,
                e.reason,
                type(e).__name__,
                position=e.position,
                details={"expression": _preview(e.expression)},
            )
            self.logger.warning(
                "Expression rejected",
                extra={"error": str(e), "error_type": type(e).__name__}
            )
        else:
            result.root = root
            result.performance.nodes_built = result.node_count
            if self.config.validate_tree:
                self._add_validation_diagnostics(result, root)

        result.diagnostics = [
            diagnostic for diagnostic in result.diagnostics
            if diagnostic.severity.value >= self._minimum_severity.value
        ]
        result.performance.processing_time_ms = (time.time() - start_time) * MS_PER_SECOND
        self.logger.info("Parse operation completed", extra=result.summary())
        return result

    def _add_validation_diagnostics(self, result: ParseResult, root: Node) -> None:
        validation = TreeValidator(self.config, self.correlation_id).validate(root)
        for issue in validation.issues:
            result.add_diagnostic(
                issue.severity,
                issue.message,
                "tree_validator",
                details={"node_path": issue.node_path, "issue": issue.issue_type.value},
            )


def parse(expression: str, correlation_id: Optional[str] = None) -> Node:
    """Parse a shorthand expression into a node tree.

    Args:
        expression: Expression such as ``div#id.cls[attr="v"]{text}>child+sibling``
        correlation_id: Optional correlation ID for request tracking

    Returns:
        Synthetic root node tagged ``root`` whose children are the parsed forest

    Raises:
        TypeError: If ``expression`` is not a string
        UnbalancedGroupingError: If parentheses do not balance
        MalformedNodeLiteralError: If a node literal is malformed
        DuplicateAttributeError: If a node literal repeats an attribute name

    Examples:
        >>> root = parse("a+b>c")
        >>> [node.tag for node in root.children]
        ['a', 'b']
        >>> [node.tag for node in root.children[1].children]
        ['c']
    """
    return ExpressionParser(correlation_id=correlation_id).parse(expression)


def parse_with_diagnostics(
    expression: str,
    config: Optional[ParserConfig] = None,
    correlation_id: Optional[str] = None
) -> ParseResult:
    """Parse a shorthand expression without raising on malformed input."""
    return ExpressionParser(config, correlation_id).parse_with_diagnostics(expression)
