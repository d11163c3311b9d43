"""Structural node produced by shorthand expression parsing.

A node is built once from a literal with no children, receives its children
from the tree builder, and is then handed to the caller. Children are owned
exclusively by their parent.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional


@dataclass
class Node:
    """Single node of a parsed expression tree.

    Attributes:
        tag: Tag token, never empty
        id: Identifier without the leading ``#``, empty when absent
        class_list: Class names without the leading ``.``, in textual order
        attributes: Attribute names mapped to their value, ``None`` for bare names
        content: Raw content text, empty when absent
        children: Ordered child nodes
    """

    tag: str
    id: str = ""
    class_list: List[str] = field(default_factory=list)
    attributes: Dict[str, Optional[str]] = field(default_factory=dict)
    content: str = ""
    children: List["Node"] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Validate node values."""
        if not self.tag:
            raise ValueError("Node tag cannot be empty")

    @property
    def has_children(self) -> bool:
        """Check if this node has any children."""
        return len(self.children) > 0

    @property
    def node_count(self) -> int:
        """Number of nodes in this subtree, including this node."""
        return 1 + sum(child.node_count for child in self.children)

    @property
    def depth(self) -> int:
        """Height of this subtree; a leaf has depth 1."""
        if not self.children:
            return 1
        return 1 + max(child.depth for child in self.children)

    def iter_nodes(self, include_self: bool = False) -> Iterator["Node"]:
        """Iterate over the subtree in pre-order."""
        if include_self:
            yield self
        for child in self.children:
            yield from child.iter_nodes(include_self=True)

    def find(self, tag: str) -> Optional["Node"]:
        """Find the first descendant with the given tag."""
        for node in self.iter_nodes():
            if node.tag == tag:
                return node
        return None

    def find_all(self, tag: str) -> List["Node"]:
        """Find all descendants with the given tag, in pre-order."""
        return [node for node in self.iter_nodes() if node.tag == tag]

    def to_dict(self) -> Dict[str, Any]:
        """Convert the subtree into plain dictionaries and lists."""
        return {
            "tag": self.tag,
            "id": self.id,
            "class_list": list(self.class_list),
            "attributes": dict(self.attributes),
            "content": self.content,
            "children": [child.to_dict() for child in self.children],
        }
