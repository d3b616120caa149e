"""Conversion result data model."""

from dataclasses import dataclass, field
from typing import Generic, List, TypeVar

from src.models.node import Node

T = TypeVar("T")


@dataclass
class ConversionIssue:
    """A node that could not be converted or classified.

    Attributes:
        index: Position of the node in the input sequence
        node: The offending node
        error: The error raised while handling it
    """
    index: int
    node: Node
    error: Exception


@dataclass
class ConversionResult(Generic[T]):
    """Result of converting a sequence item by item.

    Conversion keeps going when a single item fails: converted items are
    collected in ``items`` and the failures in ``issues``.

    Attributes:
        items: Successfully converted items, in input order
        issues: Items that were skipped or left as-is
    """
    items: List[T] = field(default_factory=list)
    issues: List[ConversionIssue] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """True when every item converted cleanly."""
        return not self.issues
