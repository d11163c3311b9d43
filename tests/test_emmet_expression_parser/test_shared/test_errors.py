"""Tests for the parse error taxonomy."""

import pytest

from emmet_expression_parser.shared import (
    DuplicateAttributeError,
    ExpressionParseError,
    GroupingExcess,
    MalformedNodeLiteralError,
    NestingTooDeepError,
    UnbalancedGroupingError,
)


class TestErrorHierarchy:
    """Test error classes and their messages."""

    @pytest.mark.parametrize("error", [
        UnbalancedGroupingError(GroupingExcess.OPENING, "(a"),
        MalformedNodeLiteralError("Malformed node literal: empty tag", ""),
        DuplicateAttributeError("x", "a[x x]"),
        NestingTooDeepError(2, "(((a)))"),
    ])
    def test_all_errors_are_parse_errors(self, error):
        """Test every error is an ExpressionParseError and a ValueError."""
        assert isinstance(error, ExpressionParseError)
        assert isinstance(error, ValueError)

    def test_message_with_position(self):
        """Test the message includes reason, offset and expression."""
        error = ExpressionParseError("Bad input", "a)b", position=1)
        assert str(error) == "Bad input at offset 1 (expression: 'a)b')"
        assert error.reason == "Bad input"
        assert error.expression == "a)b"
        assert error.position == 1

    def test_message_without_position(self):
        """Test the offset is omitted when unknown."""
        error = ExpressionParseError("Bad input", "x")
        assert str(error) == "Bad input (expression: 'x')"

    @pytest.mark.parametrize("excess,label", [
        (GroupingExcess.OPENING, "excess opening parenthesis"),
        (GroupingExcess.CLOSING, "excess closing parenthesis"),
    ])
    def test_unbalanced_grouping_labels(self, excess, label):
        """Test the excess side is named in the message."""
        error = UnbalancedGroupingError(excess, "a")
        assert error.excess is excess
        assert error.reason == f"Unbalanced grouping: {label}"

    def test_malformed_literal_exposes_literal(self):
        """Test the rejected literal is available by name."""
        error = MalformedNodeLiteralError("Malformed node literal: empty id", "div#")
        assert error.literal == "div#"

    def test_duplicate_attribute_details(self):
        """Test the repeated attribute name is kept."""
        error = DuplicateAttributeError("href", "a[href href]", position=7)
        assert error.attribute_name == "href"
        assert error.reason == "Duplicate attribute 'href'"

    def test_nesting_too_deep_details(self):
        """Test the configured limit is kept."""
        error = NestingTooDeepError(3, "((((a))))")
        assert error.max_depth == 3
        assert "3 levels" in str(error)
