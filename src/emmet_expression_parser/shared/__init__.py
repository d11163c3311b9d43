"""Shared utilities for shorthand expression parsing.

This module provides the error taxonomy, configuration objects, result types,
the Node data model and logging helpers used across the tokenization, literal
and tree layers.
"""

from .config import (
    ConfigError,
    ConfigValidationError,
    ParserConfig,
)
from .errors import (
    DuplicateAttributeError,
    ExpressionParseError,
    GroupingExcess,
    MalformedNodeLiteralError,
    NestingTooDeepError,
    UnbalancedGroupingError,
)
from .logging import (
    CorrelationLogger,
    get_logger,
)
from .node import Node
from .result import (
    DiagnosticEntry,
    DiagnosticSeverity,
    PerformanceMetrics,
)

__all__ = [
    "ConfigError",
    "ConfigValidationError",
    "CorrelationLogger",
    "DiagnosticEntry",
    "DiagnosticSeverity",
    "DuplicateAttributeError",
    "ExpressionParseError",
    "GroupingExcess",
    "MalformedNodeLiteralError",
    "NestingTooDeepError",
    "Node",
    "ParserConfig",
    "PerformanceMetrics",
    "UnbalancedGroupingError",
    "get_logger",
]
