"""Unit tests for cli.show_command module."""

import io
from unittest.mock import Mock

import pytest
from rich.console import Console

from src.cli.config import EditorConfig
from src.cli.models import ExitCode
from src.cli.output import OutputHandler
from src.cli.show_command import ConsoleEditorView, ShowCommand, exit_code_for
from src.telegraph_client.errors import (
    APIAccessError,
    APIUnreachableError,
    InvalidCredentialsError,
    PageNotFoundError,
)
from src.telegraph_client.page_interactor import PageInteractor
from src.telegraph_client.page_store import LocalPageStore
from tests.fixtures.sample_html import API_PAGE_RESULT
from tests.helpers.pages import make_page


@pytest.fixture
def output():
    handler = OutputHandler(no_color=True)
    handler.console = Console(file=io.StringIO(), no_color=True, width=120)
    return handler


@pytest.fixture
def config():
    return EditorConfig(load_delay_seconds=0, io_workers=1, computation_workers=1)


@pytest.fixture
def store():
    return LocalPageStore()


def printed(output):
    return output.console.file.getvalue()


class TestShowCommand:
    """Test cases for ShowCommand.run."""

    def test_show_local_draft(self, output, config, store):
        store.put(make_page(page_id=1, title="Notes", is_draft=True))

        exit_code = ShowCommand(output, config, PageInteractor(store)).run(1)

        assert exit_code == ExitCode.SUCCESS
        text = printed(output)
        assert "Notes" in text
        assert "<p>Hello</p>" in text
        assert "1 block(s)" in text

    def test_show_refreshes_published_page(self, output, config, store):
        store.put(make_page(page_id=1, title="Stale", path="Release-notes-10-19"))
        api = Mock()
        api.get_page.return_value = API_PAGE_RESULT

        exit_code = ShowCommand(output, config, PageInteractor(store, api)).run(1)

        assert exit_code == ExitCode.SUCCESS
        text = printed(output)
        assert "Release notes" in text
        assert "https://telegra.ph/Release-notes-10-19" in text
        assert "IMAGE" in text
        assert "2 block(s)" in text

    def test_unknown_page(self, output, config, store):
        exit_code = ShowCommand(output, config, PageInteractor(store)).run(9)

        assert exit_code == ExitCode.NOT_FOUND
        assert "Page not found" in printed(output)

    def test_network_error(self, output, config, store):
        store.put(make_page(page_id=1, path="Release-notes-10-19"))
        api = Mock()
        api.get_page.side_effect = APIUnreachableError("https://api.telegra.ph")

        exit_code = ShowCommand(output, config, PageInteractor(store, api)).run(1)

        assert exit_code == ExitCode.NETWORK_ERROR

    def test_builds_interactor_from_config(self, output, tmp_path):
        config = EditorConfig(store_path=str(tmp_path / "pages.yaml"), load_delay_seconds=0)
        command = ShowCommand(output, config)

        assert command.run(1) == ExitCode.NOT_FOUND
        assert command.interactor is not None


class TestExitCodeFor:
    """Test cases for exit_code_for."""

    @pytest.mark.parametrize("error,code", [
        (PageNotFoundError("1"), ExitCode.NOT_FOUND),
        (InvalidCredentialsError("https://api.telegra.ph"), ExitCode.AUTH_ERROR),
        (APIUnreachableError("https://api.telegra.ph"), ExitCode.NETWORK_ERROR),
        (APIAccessError(), ExitCode.GENERAL_ERROR),
    ])
    def test_mapping(self, error, code):
        assert exit_code_for(error) == code


class TestConsoleEditorView:
    """Test cases for ConsoleEditorView."""

    def test_records_pages(self, output):
        view = ConsoleEditorView(output)
        first, second = make_page(title="a"), make_page(title="b")

        view.show_page(first, [])
        view.show_page(second, [])

        assert view.last_shown == (second, [])

    def test_nothing_shown(self, output):
        assert ConsoleEditorView(output).last_shown is None

    def test_errors(self, output):
        view = ConsoleEditorView(output)

        view.show_error("Page not found")

        assert view.errors == ["Page not found"]
        assert "Page not found" in printed(output)

    def test_show_more_without_url(self, output):
        ConsoleEditorView(output).show_more(make_page(page_id=3))
        assert "page 3 is not published yet" in printed(output)
