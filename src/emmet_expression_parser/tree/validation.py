"""Structural validation of parsed node trees.

The parser only ever produces valid trees. Validation exists for trees that
were built or edited by hand before being handed to a renderer, and as a
post-parse check when ``ParserConfig.validate_tree`` is enabled.
"""

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Set

from emmet_expression_parser.shared import (
    DiagnosticSeverity,
    Node,
    ParserConfig,
    get_logger,
)


class ValidationIssueType(Enum):
    """Types of validation issues that can be detected."""

    EMPTY_TAG = "empty_tag"
    SHARED_NODE = "shared_node"
    ROOT_PAYLOAD = "root_payload"
    EMPTY_CLASS = "empty_class"
    DEPTH_LIMIT = "depth_limit"


@dataclass
class ValidationIssue:
    """Single validation issue with the path of the offending node."""

    issue_type: ValidationIssueType
    severity: DiagnosticSeverity
    message: str
    node_path: Optional[str] = None
    details: Optional[Dict[str, Any]] = None

    def __post_init__(self) -> None:
        """Validate issue data."""
        if not self.message:
            raise ValueError("Validation issue message cannot be empty")


@dataclass
class ValidationResult:
    """Result of validating one tree."""

    issues: List[ValidationIssue] = field(default_factory=list)
    nodes_checked: int = 0
    validation_time_ms: float = 0.0

    @property
    def is_valid(self) -> bool:
        """Check if no error-level issue was found."""
        return not any(
            issue.severity == DiagnosticSeverity.ERROR for issue in self.issues
        )

    @property
    def error_count(self) -> int:
        """Number of error-level issues."""
        return sum(
            1 for issue in self.issues if issue.severity == DiagnosticSeverity.ERROR
        )


class TreeValidator:
    """Checks the structural invariants of a node tree.

    Reported issues:
        - a non-root node with an empty or whitespace tag
        - a node reachable through more than one parent, including cycles
        - a synthetic root carrying id, classes, attributes or content
        - an empty class name
        - nesting deeper than ``max_nesting_depth`` when one is configured
    """

    def __init__(
        self,
        config: Optional[ParserConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        self.config = config or ParserConfig()
        self.logger = get_logger(__name__, correlation_id, "tree_validator")

    def validate(self, root: Node) -> ValidationResult:
        """Validate the tree below ``root``."""
        start_time = time.time()
        result = ValidationResult()

        if root.tag == self.config.root_tag:
            self._check_root_payload(root, result)

        seen: Set[int] = {id(root)}
        stack = [(child, f"{root.tag}/{index}", 1) for index, child in enumerate(root.children)]
        stack.reverse()
        while stack:
            node, path, depth = stack.pop()
            result.nodes_checked += 1

            if id(node) in seen:
                result.issues.append(ValidationIssue(
                    issue_type=ValidationIssueType.SHARED_NODE,
                    severity=DiagnosticSeverity.ERROR,
                    message="Node is reachable through more than one parent",
                    node_path=path,
                ))
                continue
            seen.add(id(node))

            self._check_node(node, path, depth, result)
            children = [
                (child, f"{path}/{index}", depth + 1)
                for index, child in enumerate(node.children)
            ]
            stack.extend(reversed(children))

        result.validation_time_ms = (time.time() - start_time) * 1000
        self.logger.debug(
            "Tree validation completed",
            extra={
                "nodes_checked": result.nodes_checked,
                "issue_count": len(result.issues),
            }
        )
        return result

    def _check_root_payload(self, root: Node, result: ValidationResult) -> None:
        if root.id or root.class_list or root.attributes or root.content:
            result.issues.append(ValidationIssue(
                issue_type=ValidationIssueType.ROOT_PAYLOAD,
                severity=DiagnosticSeverity.WARNING,
                message="Synthetic root carries node data",
                node_path=root.tag,
            ))

    def _check_node(
        self,
        node: Node,
        path: str,
        depth: int,
        result: ValidationResult
    ) -> None:
        if not node.tag or node.tag.isspace():
            result.issues.append(ValidationIssue(
                issue_type=ValidationIssueType.EMPTY_TAG,
                severity=DiagnosticSeverity.ERROR,
                message="Node tag is empty",
                node_path=path,
            ))

        if any(not name for name in node.class_list):
            result.issues.append(ValidationIssue(
                issue_type=ValidationIssueType.EMPTY_CLASS,
                severity=DiagnosticSeverity.WARNING,
                message="Node has an empty class name",
                node_path=path,
            ))

        limit = self.config.max_nesting_depth
        if limit is not None and depth == limit + 1:
            result.issues.append(ValidationIssue(
                issue_type=ValidationIssueType.DEPTH_LIMIT,
                severity=DiagnosticSeverity.WARNING,
                message=f"Node is nested deeper than {limit} levels",
                node_path=path,
                details={"depth": depth},
            ))


def validate_tree(root: Node, config: Optional[ParserConfig] = None) -> ValidationResult:
    """Validate ``root`` with a default ``TreeValidator``."""
    return TreeValidator(config).validate(root)
