"""Content conversion module for node tree ⇄ format conversion.

This module provides the HtmlConverter primitive (HTML ⇄ nodes), the
FormatConverter for node ⇄ format conversion and the normalization pass
that keeps every top-level node block-level.
"""

from .errors import InvalidStructureError, MissingAttributeError, UnrecognizedTagError
from .html_converter import HtmlConverter
from .normalizer import normalize_nodes
from .format_converter import FormatConverter

__all__ = [
    'HtmlConverter',
    'FormatConverter',
    'normalize_nodes',
    'InvalidStructureError',
    'MissingAttributeError',
    'UnrecognizedTagError',
]
