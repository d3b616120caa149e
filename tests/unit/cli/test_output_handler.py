"""Unit tests for cli.output module."""

import io

import pytest
from rich.console import Console

from src.cli.output import OutputHandler
from src.content_converter.errors import MissingAttributeError
from src.models.conversion_result import ConversionIssue
from src.models.node import Node
from src.models.page import Page
from src.page_format.formats import FormatType, ImageFormat, MediaFormat, TextFormat


@pytest.fixture
def handler():
    handler = OutputHandler(no_color=True)
    handler.console = Console(file=io.StringIO(), no_color=True, width=120)
    return handler


def output_of(handler):
    return handler.console.file.getvalue()


class TestOutputHandlerInit:
    """Test cases for OutputHandler initialization."""

    def test_init_default_verbosity_and_color(self):
        """Initialize with default verbosity (0) and color enabled."""
        handler = OutputHandler()

        assert handler.verbosity == 0
        assert handler.console.no_color is False

    def test_init_no_color_true(self):
        """Initialize with no_color=True disables colors."""
        assert OutputHandler(no_color=True).console.no_color is True


class TestMessages:
    """Test cases for message helpers."""

    def test_success(self, handler):
        handler.success("Page saved")
        assert "✓ Page saved" in output_of(handler)

    def test_error(self, handler):
        handler.error("Page not found")
        assert "✗ Page not found" in output_of(handler)

    def test_warning(self, handler):
        handler.warning("Careful")
        assert "⚠ Careful" in output_of(handler)

    def test_info_hidden_at_verbosity_0(self, handler):
        handler.info("details")
        assert output_of(handler) == ""

    def test_info_shown_at_verbosity_1(self, handler):
        handler.verbosity = 1
        handler.info("details")
        assert "details" in output_of(handler)

    def test_print_keeps_markup_literal(self, handler):
        handler.print("<p>[b]x[/b]</p>")
        assert "<p>[b]x[/b]</p>" in output_of(handler)


class TestPrintFormats:
    """Test cases for print_formats and print_issues."""

    def test_table(self, handler):
        handler.print_formats([
            TextFormat(FormatType.PARAGRAPH, html="<p>[Hello]</p>"),
            ImageFormat(src="a.png", caption="cap"),
            MediaFormat(html="<iframe></iframe>", src="https://e.com/x"),
        ])

        text = output_of(handler)
        assert "PARAGRAPH" in text
        assert "<p>[Hello]</p>" in text
        assert 'a.png "cap"' in text
        assert "IFRAME" in text
        assert "https://e.com/x" in text
        assert "3 block(s)" in text

    def test_empty(self, handler):
        handler.print_formats([])
        assert "0 block(s)" in output_of(handler)

    def test_pages(self, handler):
        handler.print_pages([
            Page(id=1, title="", is_draft=True),
            Page(id=2, title="Notes", path="Notes-10-19", is_draft=True),
            Page(id=3, title="[Release]", path="Release-10-19", url="https://telegra.ph/Release-10-19"),
        ])

        text = output_of(handler)
        assert "(untitled)" in text
        assert "local draft" in text
        assert "unpublished changes" in text
        assert "[Release]" in text
        assert "https://telegra.ph/Release-10-19" in text
        assert "3 page(s)" in text

    def test_issues(self, handler):
        issue = ConversionIssue(index=2, node=Node.void("img"), error=MissingAttributeError("img", "src"))
        handler.print_issues([issue])
        assert "Node #2 skipped" in output_of(handler)

    def test_spinner_is_transient(self, handler):
        with handler.spinner("Loading..."):
            pass
        handler.print("done")
        assert "done" in output_of(handler)
