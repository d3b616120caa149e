"""Terminal output handling using Rich library.

This module provides the OutputHandler class for all CLI terminal output.
Supports verbosity levels and the --no-color flag.
"""

from contextlib import contextmanager
from typing import Iterator, List, Sequence

from rich.console import Console
from rich.live import Live
from rich.spinner import Spinner
from rich.table import Table
from rich.text import Text

from src.models.conversion_result import ConversionIssue
from src.models.page import Page
from src.page_format.formats import Format, ImageFormat, MediaFormat, TextFormat, VideoFormat


class OutputHandler:
    """Handles all terminal output using Rich library.

    Attributes:
        verbosity: Verbosity level (0=summary, 1=info, 2=debug)
        console: Rich Console instance for output

    Example:
        >>> handler = OutputHandler(verbosity=1, no_color=False)
        >>> handler.success("Operation completed")
        >>> with handler.spinner("Loading page..."):
        ...     pass
    """

    def __init__(self, verbosity: int = 0, no_color: bool = False):
        """Initialize output handler.

        Args:
            verbosity: Verbosity level (0=summary, 1=info, 2=debug)
            no_color: Disable color output if True
        """
        self.verbosity = verbosity
        self.console = Console(
            no_color=no_color,
            highlight=False,
        )

    def success(self, message: str) -> None:
        """Display success message in green."""
        self.console.print(f"[green]✓[/green] {message}")

    def error(self, message: str) -> None:
        """Display error message in red."""
        self.console.print(f"[red]✗[/red] {message}", style="red")

    def warning(self, message: str) -> None:
        """Display warning message in yellow."""
        self.console.print(f"[yellow]⚠[/yellow] {message}", style="yellow")

    def info(self, message: str) -> None:
        """Display info message (only if verbosity >= 1)."""
        if self.verbosity >= 1:
            self.console.print(message)

    def print(self, message: str) -> None:
        """Display message without markup processing."""
        self.console.print(message, markup=False)

    @contextmanager
    def spinner(self, message: str) -> Iterator[None]:
        """Display spinner for single operations."""
        spinner = Spinner("dots", text=message)
        with Live(spinner, console=self.console, refresh_per_second=10, transient=True):
            yield

    def print_formats(self, formats: Sequence[Format]) -> None:
        """Display a format list as a table, one row per content block.

        Args:
            formats: Formats to display
        """
        table = Table(show_header=True, header_style="bold")
        table.add_column("#", justify="right", style="dim")
        table.add_column("Type")
        table.add_column("Content", overflow="fold")

        for index, item in enumerate(formats):
            table.add_row(str(index), item.format_type.name, Text(self._describe(item)))

        self.console.print(table)
        self.console.print(f"[bold]{len(formats)}[/bold] block(s)")

    def print_pages(self, pages: Sequence[Page]) -> None:
        """Display stored pages, one row per page."""
        table = Table(show_header=True, header_style="bold")
        table.add_column("ID", justify="right")
        table.add_column("Title")
        table.add_column("State")
        table.add_column("URL", overflow="fold")

        for page in pages:
            if page.path is None:
                page_state = "local draft"
            elif page.is_draft:
                page_state = "unpublished changes"
            else:
                page_state = "published"
            table.add_row(str(page.id), Text(page.title or "(untitled)"), page_state, page.url or "")

        self.console.print(table)
        self.console.print(f"[bold]{len(pages)}[/bold] page(s)")

    def print_issues(self, issues: List[ConversionIssue]) -> None:
        """Display one warning per node that could not be converted."""
        for issue in issues:
            self.warning(f"Node #{issue.index} skipped: {issue.error}")

    @staticmethod
    def _describe(item: Format) -> str:
        if isinstance(item, TextFormat):
            return item.html
        if isinstance(item, (ImageFormat, VideoFormat, MediaFormat)):
            return f'{item.src} "{item.caption}"' if item.caption else item.src
        return item.to_html()
