"""Test helper modules for the page editor.

- virtual_scheduler: deterministic thread roles and virtual clock
- pages: page and node builders
"""

from .pages import make_page, paragraph
from .virtual_scheduler import VirtualScheduler

__all__ = [
    'VirtualScheduler',
    'make_page',
    'paragraph',
]
