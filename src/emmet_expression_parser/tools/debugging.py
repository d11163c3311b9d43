"""Debugging helpers for parsed node trees."""

from typing import List

from emmet_expression_parser.shared import Node

INDENT = "  "


def format_node(node: Node) -> str:
    """Render a single node back into shorthand literal form.

    Examples:
        >>> format_node(Node(tag="a", id="x", class_list=["b"], attributes={"y": "1"}))
        'a#x.b[y="1"]'
    """
    parts = [node.tag]
    if node.id:
        parts.append(f"#{node.id}")
    parts.extend(f".{name}" for name in node.class_list)
    if node.attributes:
        attributes = [
            name if value is None else f'{name}="{value}"'
            for name, value in node.attributes.items()
        ]
        parts.append(f"[{' '.join(attributes)}]")
    if node.content:
        parts.append(f"{{{node.content}}}")
    return "".join(parts)


def format_tree(root: Node, indent: str = INDENT) -> str:
    """Render a tree with one node per line, indented by depth."""
    lines: List[str] = []
    stack = [(root, 0)]
    while stack:
        node, depth = stack.pop()
        lines.append(f"{indent * depth}{format_node(node)}")
        stack.extend((child, depth + 1) for child in reversed(node.children))
    return "\n".join(lines)
