"""ShowCommand: open a page through the editor and print its formats.

The command drives a real PageEditorPresenter with a console view, so a
page goes through the same staged load (cached copy, then fresh copy) and
conversion as in the editor.
"""

import logging
from typing import List, Optional, Tuple

from src.models.page import Page
from src.page_editor.presenter import PageEditorPresenter
from src.page_editor.scheduling import ThreadScheduler
from src.page_format.formats import Format
from src.telegraph_client.api_wrapper import APIWrapper
from src.telegraph_client.auth import Authenticator
from src.telegraph_client.errors import (
    APIUnreachableError,
    EditorError,
    InvalidCredentialsError,
    PageNotFoundError,
)
from src.telegraph_client.page_interactor import PageInteractor
from src.telegraph_client.page_store import LocalPageStore

from .config import EditorConfig
from .models import ExitCode
from .output import OutputHandler

logger = logging.getLogger(__name__)


class ConsoleEditorView:
    """PageEditorView writing to the terminal.

    Pages are recorded rather than printed so that only the last delivered
    copy is shown once loading finished.
    """

    def __init__(self, output: OutputHandler):
        self.output = output
        self.shown: List[Tuple[Page, List[Format]]] = []
        self.errors: List[str] = []

    @property
    def last_shown(self) -> Optional[Tuple[Page, List[Format]]]:
        return self.shown[-1] if self.shown else None

    def show_content_progress(self, visible: bool) -> None:
        logger.debug(f"Content progress {'shown' if visible else 'hidden'}")

    def show_progress(self, visible: bool) -> None:
        logger.debug(f"Progress {'shown' if visible else 'hidden'}")

    def show_page(self, page: Page, formats: List[Format]) -> None:
        copy = "draft" if page.is_draft else "page"
        self.output.info(f"Received {copy} {page.id} ({len(formats)} block(s))")
        self.shown.append((page, formats))

    def show_error(self, message: str) -> None:
        self.errors.append(message)
        self.output.error(message)

    def on_page_saved(self) -> None:
        self.output.success("Page saved")

    def show_more(self, page: Page) -> None:
        self.output.print(page.url or f"page {page.id} is not published yet")


class ShowCommand:
    """Loads a page from the local store and Telegraph and prints it.

    Example:
        >>> command = ShowCommand(OutputHandler(), EditorConfig())
        >>> exit_code = command.run(page_id=1)
    """

    def __init__(
        self,
        output: OutputHandler,
        config: EditorConfig,
        interactor: Optional[PageInteractor] = None,
    ):
        """Initialize the command.

        Args:
            output: Terminal output handler
            config: Editor configuration
            interactor: Optional PageInteractor instance for testing
        """
        self.output = output
        self.config = config
        self.interactor = interactor

    def _get_interactor(self) -> PageInteractor:
        if self.interactor is None:
            store = LocalPageStore(self.config.store_path)
            api = APIWrapper(Authenticator(api_url=self.config.api_url))
            self.interactor = PageInteractor(store, api)
        return self.interactor

    def run(self, page_id: int) -> ExitCode:
        """Open a page and print its title and formats.

        Returns:
            ExitCode of the operation
        """
        scheduler = ThreadScheduler(
            io_workers=self.config.io_workers,
            computation_workers=self.config.computation_workers,
        )
        view = ConsoleEditorView(self.output)
        presenter = PageEditorPresenter(
            view,
            self._get_interactor(),
            scheduler=scheduler,
            debounce_seconds=self.config.debounce_seconds,
            load_delay=self.config.load_delay_seconds,
        )

        try:
            with self.output.spinner(f"Loading page {page_id}..."):
                presenter.open_page(page_id).result()
        except EditorError as e:
            logger.info(f"Showing page {page_id} failed: {e}")
            return exit_code_for(e)
        finally:
            presenter.close()
            scheduler.shutdown(wait=False)

        shown = view.last_shown
        if shown is None:
            self.output.warning(f"Page {page_id} has no content")
            return ExitCode.SUCCESS

        page, formats = shown
        self.output.print(page.title or "(untitled)")
        if page.url:
            self.output.print(page.url)
        self.output.print_formats(formats)
        return ExitCode.SUCCESS


def exit_code_for(error: Exception) -> ExitCode:
    """Map an editor error to the exit code of a command."""
    if isinstance(error, PageNotFoundError):
        return ExitCode.NOT_FOUND
    if isinstance(error, InvalidCredentialsError):
        return ExitCode.AUTH_ERROR
    if isinstance(error, APIUnreachableError):
        return ExitCode.NETWORK_ERROR
    return ExitCode.GENERAL_ERROR
