"""HTML ⇄ node tree conversion.

This module provides the primitive that turns an HTML fragment into the
Telegraph node tree and back. It is a lexical conversion only: it does not
validate the structure of the result (see normalizer.py for that).
"""

from typing import Dict, List, Optional, Union

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PreformattedString

from src.models.node import Node


class HtmlConverter:
    """Converts HTML fragments to nodes and nodes to HTML.

    Fragments are parsed as-is: no ``<html>``/``<body>`` wrapper is added
    and bare top-level text stays a text node.
    """

    def __init__(self):
        """Initialize HtmlConverter with html.parser.

        Uses Python's built-in html.parser instead of lxml, which wraps
        fragments in html/body and bare text in paragraphs.
        """
        self.parser = "html.parser"

    def html_to_nodes(self, html: str) -> List[Node]:
        """Parse an HTML fragment into top-level nodes.

        Comments and whitespace-only text between top-level elements are
        dropped.

        Args:
            html: HTML fragment

        Returns:
            List of top-level nodes in document order
        """
        if not html:
            return []

        soup = BeautifulSoup(html, self.parser)
        nodes = []
        for element in soup.contents:
            node = self._convert_element(element, top_level=True)
            if node is not None:
                nodes.append(node)
        return nodes

    def nodes_to_html(self, nodes: List[Node]) -> str:
        """Serialize nodes to an HTML fragment.

        Args:
            nodes: Nodes to serialize

        Returns:
            HTML string with text and attribute values escaped
        """
        soup = BeautifulSoup("", self.parser)
        for node in nodes:
            soup.append(self._build_element(soup, node))
        return str(soup)

    def _convert_element(
        self, element: Union[Tag, NavigableString], top_level: bool = False
    ) -> Optional[Node]:
        """Convert a BeautifulSoup element into a node.

        Args:
            element: Tag or string from the parse tree
            top_level: True for direct children of the fragment

        Returns:
            Node, or None if the element should be dropped
        """
        if isinstance(element, PreformattedString):
            # Comments, doctypes, CDATA
            return None

        if isinstance(element, NavigableString):
            text = str(element)
            if top_level and not text.strip():
                return None
            return Node.text_node(text)

        attrs = self._convert_attrs(element.attrs)
        if element.can_be_empty_element and not element.contents:
            return Node.void(element.name, attrs)

        children = []
        for child in element.contents:
            node = self._convert_element(child)
            if node is not None:
                children.append(node)
        return Node.element(element.name, attrs, children)

    def _convert_attrs(self, attrs: Dict) -> Optional[Dict[str, str]]:
        """Flatten attribute values (multi-valued attributes become a string)."""
        if not attrs:
            return None
        result = {}
        for key, value in attrs.items():
            if isinstance(value, list):
                value = " ".join(value)
            result[key] = value if value is not None else ""
        return result

    def _build_element(self, soup: BeautifulSoup, node: Node) -> Union[Tag, NavigableString]:
        """Build a BeautifulSoup element for a node."""
        if node.tag is None:
            return NavigableString(node.text or "")

        tag = soup.new_tag(node.tag, attrs=dict(node.attrs or {}))
        if node.text:
            tag.append(NavigableString(node.text))
        for child in node.children or []:
            tag.append(self._build_element(soup, child))
        return tag
