"""Node tree model exchanged with the HTML primitive and the Telegraph API.

A node is one of three shapes: a text node (``text`` only), an element
(``tag`` with optional ``attrs`` and ``children``) or a void element (``tag``
without children). The Telegraph wire format represents a text node as a bare
JSON string and an element as an object with ``tag``, ``attrs`` and
``children`` keys.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Union


class NodeShape(Enum):
    """Shapes a node can take."""

    TEXT = "text"
    ELEMENT = "element"
    VOID = "void"


@dataclass
class Node:
    """A single element of the intermediate content tree.

    Attributes:
        tag: Element tag name (None for text nodes)
        text: Text content (text nodes only)
        attrs: Element attributes (None when the element has none)
        children: Child nodes (None for text nodes and void elements)
    """

    tag: Optional[str] = None
    text: Optional[str] = None
    attrs: Optional[Dict[str, str]] = None
    children: Optional[List["Node"]] = None

    @classmethod
    def text_node(cls, text: str) -> "Node":
        """Create a text node."""
        return cls(text=text)

    @classmethod
    def element(
        cls,
        tag: str,
        attrs: Optional[Dict[str, str]] = None,
        children: Optional[List["Node"]] = None,
    ) -> "Node":
        """Create an element node with optional attributes and children."""
        return cls(tag=tag, attrs=attrs or None, children=list(children or []))

    @classmethod
    def void(cls, tag: str, attrs: Optional[Dict[str, str]] = None) -> "Node":
        """Create a void element (img, br, hr, ...)."""
        return cls(tag=tag, attrs=attrs or None)

    @property
    def shape(self) -> NodeShape:
        """Get the shape of this node."""
        if self.tag is None:
            return NodeShape.TEXT
        if self.children is None:
            return NodeShape.VOID
        return NodeShape.ELEMENT

    def get_attr(self, name: str) -> Optional[str]:
        """Get an attribute value, or None if absent."""
        if not self.attrs:
            return None
        return self.attrs.get(name)

    def first_text(self) -> Optional[str]:
        """Return the first descendant text (depth first), or None."""
        if self.text is not None:
            return self.text
        for child in self.children or []:
            text = child.first_text()
            if text is not None:
                return text
        return None

    def to_dict(self) -> Union[str, Dict[str, Any]]:
        """Convert this node to the Telegraph JSON node format.

        Returns:
            A plain string for text nodes, otherwise a dictionary
        """
        if self.tag is None:
            return self.text or ""

        result: Dict[str, Any] = {"tag": self.tag}
        if self.attrs:
            result["attrs"] = dict(self.attrs)
        if self.children:
            result["children"] = [child.to_dict() for child in self.children]
        return result

    @classmethod
    def from_dict(cls, data: Union[str, Dict[str, Any]]) -> "Node":
        """Build a node from the Telegraph JSON node format.

        Args:
            data: A string (text node) or a dictionary with a ``tag`` key

        Returns:
            Parsed Node

        Raises:
            ValueError: If data is neither a string nor a tagged dictionary
        """
        if isinstance(data, str):
            return cls.text_node(data)

        if not isinstance(data, dict) or not data.get("tag"):
            raise ValueError(f"Invalid node data: {data!r}")

        attrs = data.get("attrs") or None
        if attrs is not None:
            attrs = {str(key): str(value) for key, value in attrs.items()}

        children_data = data.get("children")
        if children_data is None:
            return cls.void(data["tag"], attrs)
        return cls.element(
            data["tag"], attrs, [cls.from_dict(child) for child in children_data]
        )


def nodes_from_json(content: Optional[List[Any]]) -> List[Node]:
    """Parse a Telegraph ``content`` array into nodes."""
    return [Node.from_dict(item) for item in content or []]


def nodes_to_json(nodes: List[Node]) -> List[Any]:
    """Serialize nodes to a Telegraph ``content`` array."""
    return [node.to_dict() for node in nodes]
