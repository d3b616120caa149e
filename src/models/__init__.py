"""Data models for the node tree, pages and conversion results."""

from src.models.node import Node, NodeShape, nodes_from_json, nodes_to_json
from src.models.page import Page, PageNodes
from src.models.conversion_result import ConversionIssue, ConversionResult

__all__ = [
    'Node',
    'NodeShape',
    'nodes_from_json',
    'nodes_to_json',
    'Page',
    'PageNodes',
    'ConversionIssue',
    'ConversionResult',
]
