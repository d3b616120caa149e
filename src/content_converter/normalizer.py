"""Normalization of top-level node sequences.

Expanding formats back to nodes can leave inline content (a bare ``<b>``,
a text node) at the top level of a page, which Telegraph does not accept.
The normalization pass folds the sequence left to right and moves every
loose node into a paragraph so each top-level node is block-level.
"""

import logging
from dataclasses import replace
from typing import List, Sequence

from src.models.conversion_result import ConversionIssue, ConversionResult
from src.models.node import Node
from src.page_format.formats import FormatType
from src.telegraph_client.errors import ConversionError

from .errors import InvalidStructureError

logger = logging.getLogger(__name__)

PARAGRAPH_TAG = FormatType.PARAGRAPH.tag


def is_paragraph(node: Node) -> bool:
    """Check if a node is a paragraph block."""
    return node.tag == PARAGRAPH_TAG


def is_loose(node: Node) -> bool:
    """Check if a node cannot stand at the top level of a page.

    A node is loose when its kind is inline or cannot be resolved
    (a text node or an unknown tag).

    Raises:
        InvalidStructureError: If the node has neither a tag nor text
    """
    if node.tag is None:
        if node.text is None:
            raise InvalidStructureError("node has neither tag nor text")
        return True

    format_type = FormatType.find_by_tag(node.tag)
    return format_type is None or format_type.is_inline


def _append_child(paragraph: Node, child: Node) -> Node:
    """Return a copy of the paragraph with child appended."""
    return replace(paragraph, children=list(paragraph.children or []) + [child])


def normalize_nodes(nodes: Sequence[Node]) -> ConversionResult[Node]:
    """Move loose inline nodes into paragraph blocks.

    For each loose node, in priority order:

    1. the previous retained node is a paragraph: append to it;
    2. the next node is a paragraph: append to that paragraph;
    3. otherwise wrap the node in a new paragraph.

    The input sequence and its nodes are not modified. A node that cannot
    be classified is logged, recorded as an issue and kept as-is.

    Args:
        nodes: Top-level nodes after expansion

    Returns:
        ConversionResult with the normalized top-level nodes
    """
    result: ConversionResult[Node] = ConversionResult()
    retained = result.items
    carried: List[Node] = []

    for index, node in enumerate(nodes):
        if carried and is_paragraph(node):
            node = replace(node, children=list(node.children or []) + carried)
            carried = []

        try:
            loose = is_loose(node)
        except ConversionError as e:
            logger.error(f"Leaving node {index} as-is: {e}")
            result.issues.append(ConversionIssue(index=index, node=node, error=e))
            retained.append(node)
            continue

        if not loose:
            retained.append(node)
        elif retained and is_paragraph(retained[-1]):
            retained[-1] = _append_child(retained[-1], node)
        elif index + 1 < len(nodes) and is_paragraph(nodes[index + 1]):
            carried.append(node)
        else:
            retained.append(Node.element(PARAGRAPH_TAG, children=[node]))

    return result
