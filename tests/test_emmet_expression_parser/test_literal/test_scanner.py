"""Tests for the node literal scanner."""

import pytest

from emmet_expression_parser.literal import (
    NodeLiteralScanner,
    default_scanner,
    match_literal,
)
from emmet_expression_parser.shared import (
    DuplicateAttributeError,
    ExpressionParseError,
    MalformedNodeLiteralError,
)


class TestLiteralComponents:
    """Test each literal component is extracted."""

    def test_bare_tag(self):
        """Test a literal with only a tag."""
        node = match_literal("div")
        assert node.tag == "div"
        assert node.id == ""
        assert node.class_list == []
        assert node.attributes == {}
        assert node.content == ""
        assert node.children == []

    def test_id_and_classes(self):
        """Test id and classes are stored without their markers."""
        node = match_literal("div#a.b.c")
        assert node.tag == "div"
        assert node.id == "a"
        assert node.class_list == ["b", "c"]

    def test_classes_keep_order_and_duplicates(self):
        """Test class order and duplicates are preserved."""
        assert match_literal("li.z.a.z").class_list == ["z", "a", "z"]

    def test_attributes_with_and_without_values(self):
        """Test bare names map to None and quoted values are unwrapped."""
        node = match_literal('div[x y="1"]')
        assert node.attributes == {"x": None, "y": "1"}
        assert list(node.attributes) == ["x", "y"]

    def test_content(self):
        """Test content is stored verbatim."""
        assert match_literal("div{hello world}").content == "hello world"

    def test_all_components(self):
        """Test a literal using every component in order."""
        node = match_literal('a#top.nav.main[href="/home" target="_blank" hidden]{Go home}')
        assert node.tag == "a"
        assert node.id == "top"
        assert node.class_list == ["nav", "main"]
        assert node.attributes == {"href": "/home", "target": "_blank", "hidden": None}
        assert node.content == "Go home"

    def test_content_keeps_special_characters(self):
        """Test operators, groups and braces inside content are not interpreted."""
        node = match_literal("p{a > b + (c) [d] {e}}")
        assert node.content == "a > b + (c) [d] {e}"

    def test_empty_content_and_empty_attribute_group(self):
        """Test empty groups are accepted."""
        node = match_literal("p[]{}")
        assert node.attributes == {}
        assert node.content == ""

    def test_attributes_followed_by_content(self):
        """Test content may follow the attribute group."""
        node = match_literal("input[disabled]{x}")
        assert node.attributes == {"disabled": None}
        assert node.content == "x"


class TestAttributeValues:
    """Test quote-aware attribute value extraction."""

    def test_value_containing_equals_sign(self):
        """Test only the first equals sign separates name from value."""
        node = match_literal('a[href="/search?q=a=b"]')
        assert node.attributes == {"href": "/search?q=a=b"}

    def test_value_containing_whitespace_and_bracket(self):
        """Test quoted values may hold whitespace and a closing bracket."""
        node = match_literal('a[title="a ] b" x]')
        assert node.attributes == {"title": "a ] b", "x": None}

    def test_empty_value(self):
        """Test an empty quoted value is kept as an empty string."""
        assert match_literal('a[x=""]').attributes == {"x": ""}

    def test_surrounding_whitespace_inside_group(self):
        """Test any amount of whitespace separates attribute tokens."""
        node = match_literal('a[  x    y="1"  ]')
        assert node.attributes == {"x": None, "y": "1"}


class TestMalformedLiterals:
    """Test rejection of literals that do not have the node shape."""

    @pytest.mark.parametrize("literal,reason", [
        ("", "empty tag"),
        ("#id", "empty tag"),
        (".cls", "empty tag"),
        (" ", "whitespace in tag"),
        ("div ", "whitespace in tag"),
        ("a b", "whitespace in tag"),
        ("div#", "empty id"),
        ("div.", "empty class"),
        ("div..a", "empty class"),
        ("div.a b", "unexpected character"),
        ("div[x", "unterminated attribute group"),
        ('div[x="1]', "unterminated attribute value"),
        ("div[x=1]", "must be double quoted"),
        ("div[=x]", "missing attribute name"),
        ('div[x="1"y]', "separated by whitespace"),
        ("div[x]y", "after attribute group"),
        ("div[x][y]", "after attribute group"),
        ("div{x", "content group must close"),
        ("div{x}y", "content group must close"),
        ("div{a}[x]", "content group must close"),
    ])
    def test_malformed_literal(self, literal, reason):
        """Test malformed literals raise with a specific reason."""
        with pytest.raises(MalformedNodeLiteralError, match=reason) as exc_info:
            match_literal(literal)
        assert exc_info.value.literal == literal

    def test_error_position(self):
        """Test the error offset points at the first rejected character."""
        with pytest.raises(MalformedNodeLiteralError) as exc_info:
            match_literal("div ")
        assert exc_info.value.position == 3

    def test_malformed_literal_is_parse_error(self):
        """Test malformed literals belong to the parse error hierarchy."""
        with pytest.raises(ExpressionParseError):
            match_literal("")
        with pytest.raises(ValueError):
            match_literal("")


class TestDuplicateAttributes:
    """Test rejection of repeated attribute names."""

    def test_duplicate_bare_names(self):
        """Test repeated bare names fail."""
        with pytest.raises(DuplicateAttributeError) as exc_info:
            match_literal("div[x x]")
        assert exc_info.value.attribute_name == "x"
        assert exc_info.value.position == 6

    def test_duplicate_valued_names(self):
        """Test repeated names fail even with different values."""
        with pytest.raises(DuplicateAttributeError, match="Duplicate attribute 'y'"):
            match_literal('div[y="1" y="2"]')


class TestScannerInstances:
    """Test scanner sharing and independence of results."""

    def test_default_scanner_is_shared(self):
        """Test the process-wide scanner is created once."""
        assert default_scanner() is default_scanner()
        assert isinstance(default_scanner(), NodeLiteralScanner)

    def test_results_are_independent(self):
        """Test each call returns freshly allocated nodes."""
        scanner = NodeLiteralScanner()
        first = scanner.match("li.a")
        second = scanner.match("li.a")

        first.class_list.append("b")
        assert second.class_list == ["a"]
        assert first is not second
