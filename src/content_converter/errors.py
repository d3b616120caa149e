"""Typed exceptions for node ⇄ format conversion failures.

These errors are raised for a single node; the converters catch them,
log them and skip (or keep) that node without aborting the whole list.
"""

from typing import Optional

from src.telegraph_client.errors import ConversionError


class MissingAttributeError(ConversionError):
    """Raised when a media node lacks a required attribute."""

    def __init__(self, tag: str, attribute: str):
        super().__init__(f"Missing required attribute '{attribute}' on <{tag}>")
        self.tag = tag
        self.attribute = attribute


class UnrecognizedTagError(ConversionError):
    """Raised when no format kind exists for a tag."""

    def __init__(self, tag: Optional[str]):
        super().__init__(f"No format type for tag={tag}")
        self.tag = tag


class InvalidStructureError(ConversionError):
    """Raised when a node is malformed (e.g. a figure without media)."""

    def __init__(self, message: str, tag: Optional[str] = None):
        if tag:
            full_message = f"Invalid <{tag}> structure: {message}"
        else:
            full_message = f"Invalid node structure: {message}"
        super().__init__(full_message)
        self.tag = tag
        self.original_message = message
