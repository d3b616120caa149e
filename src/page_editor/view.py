"""Presentation-layer contract driven by the page editor presenter."""

from typing import List, Protocol

from src.models.page import Page
from src.page_format.formats import Format


class PageEditorView(Protocol):
    """Receives editor state changes. Every call arrives on the interaction thread."""

    def show_content_progress(self, visible: bool) -> None:
        """Show or hide the page body loading indicator."""
        ...

    def show_progress(self, visible: bool) -> None:
        """Show or hide the save/publish indicator."""
        ...

    def show_page(self, page: Page, formats: List[Format]) -> None:
        """Render a loaded page."""
        ...

    def show_error(self, message: str) -> None:
        ...

    def on_page_saved(self) -> None:
        ...

    def show_more(self, page: Page) -> None:
        """Open the page actions for the held page."""
        ...
