"""Conversion between the node tree and editor formats.

Forward conversion classifies each top-level node by tag and builds one
format per node; figure wrappers collapse into a single media format with
its caption. Reverse conversion renders every format to markup, parses it
back to nodes and normalizes the resulting sequence.

Both directions convert node by node: a node that fails is logged and
reported in the result instead of aborting the whole list.
"""

import logging
from typing import List, Optional, Sequence

from src.models.conversion_result import ConversionIssue, ConversionResult
from src.models.node import Node
from src.page_format.formats import (
    Format,
    FormatType,
    ImageFormat,
    MediaFormat,
    TextFormat,
    VideoFormat,
)
from src.telegraph_client.errors import ConversionError

from .errors import InvalidStructureError, MissingAttributeError, UnrecognizedTagError
from .html_converter import HtmlConverter
from .normalizer import PARAGRAPH_TAG, normalize_nodes

logger = logging.getLogger(__name__)

CAPTION_TAG = "figcaption"


class FormatConverter:
    """Converts node trees to formats and formats to node trees.

    Usage:
        converter = FormatConverter()
        formats = converter.nodes_to_formats(page.nodes.content).items
        nodes = converter.formats_to_nodes(formats).items
    """

    def __init__(self, html_converter: Optional[HtmlConverter] = None):
        """Initialize FormatConverter.

        Args:
            html_converter: HTML primitive. If None, creates a default one.
        """
        self.html_converter = html_converter or HtmlConverter()

    def convert_html(self, html: str) -> ConversionResult[Format]:
        """Parse an HTML fragment and convert it to formats."""
        return self.nodes_to_formats(self.html_converter.html_to_nodes(html))

    def nodes_to_formats(self, nodes: Sequence[Node]) -> ConversionResult[Format]:
        """Convert top-level nodes to formats.

        Args:
            nodes: Top-level nodes of a page body

        Returns:
            ConversionResult with one format per convertible node and an
            issue for every skipped node
        """
        result: ConversionResult[Format] = ConversionResult()
        for index, node in enumerate(nodes):
            try:
                result.items.append(self._convert_node(node))
            except ConversionError as e:
                logger.error(f"Skipping node {index} (tag={node.tag}): {e}")
                result.issues.append(ConversionIssue(index=index, node=node, error=e))
        return result

    def formats_to_nodes(self, formats: Sequence[Format]) -> ConversionResult[Node]:
        """Convert formats to a normalized top-level node sequence.

        Args:
            formats: Page body as edited

        Returns:
            ConversionResult with block-level top-level nodes
        """
        expanded: List[Node] = []
        for item in formats:
            expanded.extend(self.html_converter.html_to_nodes(item.to_html()))
        return normalize_nodes(expanded)

    def _convert_node(self, node: Node) -> Format:
        """Convert a single top-level node.

        Raises:
            ConversionError: If the node cannot be converted
        """
        if node.tag is None and node.text is not None:
            format_type = FormatType.PARAGRAPH
        else:
            format_type = FormatType.find_by_tag(node.tag)

        if format_type is None:
            raise UnrecognizedTagError(node.tag)

        if format_type == FormatType.FIGURE:
            return self._convert_figure(node)
        elif format_type == FormatType.IMAGE:
            return self._convert_image(node, "")
        elif format_type == FormatType.VIDEO:
            return self._convert_video(node, "")
        elif format_type == FormatType.IFRAME:
            return self._convert_iframe(node, "")

        if node.tag is None:
            node = Node.element(PARAGRAPH_TAG, children=[node])
        return TextFormat(format_type, html=self.html_converter.nodes_to_html([node]))

    def _convert_figure(self, node: Node) -> Format:
        """Collapse a figure into one media format with its caption.

        The caption and media children may come in either order.

        Raises:
            InvalidStructureError: If there is not exactly one media child
            UnrecognizedTagError: If the media child is not image/iframe/video
        """
        children = [
            child for child in node.children or []
            if child.tag is not None or (child.text or "").strip()
        ]

        caption_node = next((child for child in children if child.tag == CAPTION_TAG), None)
        media_nodes = [child for child in children if child.tag != CAPTION_TAG]

        if not media_nodes:
            raise InvalidStructureError("figure has no media element", tag="figure")
        if len(media_nodes) > 1:
            raise InvalidStructureError(
                f"expected one media element, found {len(media_nodes)}", tag="figure"
            )

        caption = ""
        if caption_node is not None:
            caption = caption_node.first_text() or ""

        media = media_nodes[0]
        media_type = FormatType.find_by_tag(media.tag)
        if media_type == FormatType.IMAGE:
            return self._convert_image(media, caption)
        elif media_type == FormatType.IFRAME:
            return self._convert_iframe(media, caption)
        elif media_type == FormatType.VIDEO:
            return self._convert_video(media, caption)
        raise UnrecognizedTagError(media.tag)

    def _require_src(self, node: Node) -> str:
        src = node.get_attr("src")
        if not src:
            raise MissingAttributeError(node.tag or "", "src")
        return src

    def _convert_image(self, node: Node, caption: str) -> ImageFormat:
        return ImageFormat(src=self._require_src(node), caption=caption)

    def _convert_iframe(self, node: Node, caption: str) -> MediaFormat:
        src = self._require_src(node)
        html = self.html_converter.nodes_to_html([node])
        return MediaFormat(html=html, src=src, caption=caption)

    def _convert_video(self, node: Node, caption: str) -> VideoFormat:
        src = self._require_src(node)
        html = self.html_converter.nodes_to_html([node])
        return VideoFormat(html=html, src=src, caption=caption)
