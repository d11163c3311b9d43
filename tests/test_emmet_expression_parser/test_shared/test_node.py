"""Tests for the Node data model."""

import pytest

from emmet_expression_parser.shared import Node


def sample_tree() -> Node:
    """Build ``root > (ul > li.a + li.b) + p``."""
    first = Node(tag="li", class_list=["a"])
    second = Node(tag="li", class_list=["b"])
    ul = Node(tag="ul", children=[first, second])
    paragraph = Node(tag="p", content="text")
    return Node(tag="root", children=[ul, paragraph])


class TestNode:
    """Test Node construction and helpers."""

    def test_defaults(self):
        """Test optional fields default to empty values."""
        node = Node(tag="div")
        assert node.id == ""
        assert node.class_list == []
        assert node.attributes == {}
        assert node.content == ""
        assert node.children == []
        assert not node.has_children

    def test_empty_tag_raises_error(self):
        """Test an empty tag is rejected."""
        with pytest.raises(ValueError, match="Node tag cannot be empty"):
            Node(tag="")

    def test_default_containers_are_not_shared(self):
        """Test each node gets its own lists and dictionaries."""
        first = Node(tag="a")
        second = Node(tag="b")
        first.class_list.append("x")
        first.attributes["y"] = None
        assert second.class_list == []
        assert second.attributes == {}

    def test_node_count_and_depth(self):
        """Test subtree size and height."""
        root = sample_tree()
        assert root.node_count == 5
        assert root.depth == 3
        assert Node(tag="leaf").depth == 1

    def test_iter_nodes_is_pre_order(self):
        """Test iteration visits parents before children, left to right."""
        root = sample_tree()
        assert [node.tag for node in root.iter_nodes()] == ["ul", "li", "li", "p"]
        assert [node.tag for node in root.iter_nodes(include_self=True)][0] == "root"

    def test_find_and_find_all(self):
        """Test searching descendants by tag."""
        root = sample_tree()
        assert root.find("li").class_list == ["a"]
        assert [node.class_list for node in root.find_all("li")] == [["a"], ["b"]]
        assert root.find("table") is None
        assert root.find_all("table") == []

    def test_to_dict(self):
        """Test conversion to the plain handoff shape."""
        node = Node(
            tag="a",
            id="x",
            class_list=["c"],
            attributes={"href": "/", "hidden": None},
            content="go",
            children=[Node(tag="span")],
        )
        assert node.to_dict() == {
            "tag": "a",
            "id": "x",
            "class_list": ["c"],
            "attributes": {"href": "/", "hidden": None},
            "content": "go",
            "children": [{
                "tag": "span",
                "id": "",
                "class_list": [],
                "attributes": {},
                "content": "",
                "children": [],
            }],
        }

    def test_equality_compares_whole_subtree(self):
        """Test nodes compare equal by value, children included."""
        assert sample_tree() == sample_tree()
        changed = sample_tree()
        changed.children[0].children[1].class_list.append("c")
        assert changed != sample_tree()
