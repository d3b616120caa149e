"""Page editor presenter: loading, autosaving, publishing and discarding pages.

The presenter holds the page being edited and drives a PageEditorView.
Blocking collaborator calls run on I/O workers, conversion runs on
computation workers, and the held page as well as every view notification
is only touched on the interaction thread. Operations return futures that
resolve once their view callbacks have run.
"""

import logging
from concurrent.futures import Future
from typing import Callable, List, Optional, TypeVar

from src.content_converter.format_converter import FormatConverter
from src.models.node import Node
from src.models.page import Page
from src.page_format.formats import Format, page_image_url, pending_upload_count

from .autosave import DEFAULT_DEBOUNCE_SECONDS, DraftAutosaveCoordinator
from .error_handler import ErrorHandler, ignore_message
from .errors import EditorStateError, UploadPendingError
from .models import DraftFields
from .page_loader import DEFAULT_LOAD_DELAY_SECONDS, PageLoadPipeline
from .scheduling import SessionScope, ThreadScheduler
from .view import PageEditorView

logger = logging.getLogger(__name__)

T = TypeVar("T")


class PageEditorPresenter:
    """Presenter of one page editing session.

    Attributes:
        is_draft_needed: True once a page finished loading; draft saves are
            skipped until then and after the page is published
        scope: Cancellation scope of the session, cancelled by close()
    """

    def __init__(
        self,
        view: PageEditorView,
        interactor,
        converter: Optional[FormatConverter] = None,
        error_handler: Optional[ErrorHandler] = None,
        scheduler=None,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
        load_delay: float = DEFAULT_LOAD_DELAY_SECONDS,
    ):
        """Initialize the presenter.

        Args:
            view: Presentation layer receiving state changes
            interactor: Page collaborator (see PageInteractor)
            converter: Format converter (default: FormatConverter())
            error_handler: Error policy (default: ErrorHandler())
            scheduler: Thread roles (default: ThreadScheduler())
            debounce_seconds: Quiet window of background draft saves
            load_delay: Minimum delay before a freshly loaded page is shown
        """
        self._view = view
        self._interactor = interactor
        self._converter = converter or FormatConverter()
        self._error_handler = error_handler or ErrorHandler()
        self._scheduler = scheduler or ThreadScheduler()
        self.scope = SessionScope()

        self._page: Optional[Page] = None
        self.is_draft_needed = False

        self._loader = PageLoadPipeline(
            self._scheduler,
            self.scope,
            interactor,
            self._page_formats,
            load_delay=load_delay,
        )
        self._autosave = DraftAutosaveCoordinator(
            self._scheduler,
            self.scope,
            save=self._save_background_draft,
            on_error=lambda error: self._error_handler.proceed(error, ignore_message),
            debounce_seconds=debounce_seconds,
        )

    @property
    def page(self) -> Optional[Page]:
        """The page currently held by the editor."""
        return self._page

    @property
    def autosave(self) -> DraftAutosaveCoordinator:
        return self._autosave

    def open_page(self, page_id: Optional[int] = None) -> "Future[Optional[Page]]":
        """Load a page (or create a new draft when page_id is None) and show it.

        An existing page is shown twice: first the cached copy, if any, then
        the freshly loaded copy.
        """

        def on_subscribe() -> None:
            if not self._has_content():
                self._view.show_content_progress(True)

        def on_page(page: Page, formats: List[Format]) -> None:
            self._page = page
            if self._has_content():
                self._view.show_content_progress(False)
            self._view.show_page(page, formats)

        def on_complete() -> None:
            self.is_draft_needed = True

        logger.info(f"Opening page {page_id if page_id is not None else '(new draft)'}")
        return self._loader.start(
            page_id,
            on_page,
            on_subscribe=on_subscribe,
            on_complete=on_complete,
            on_error=lambda error: self._error_handler.proceed(error, self._view.show_error),
            on_terminate=lambda: self._view.show_content_progress(False),
        )

    def on_more_clicked(self) -> None:
        if self._page is not None:
            self._view.show_more(self._page)

    def publish_page(
        self,
        title: str,
        author_name: Optional[str],
        author_url: Optional[str],
        formats: List[Format],
    ) -> "Future[None]":
        """Publish the held page with the given fields.

        Publishing is refused while an image upload is in progress; the
        error is shown before any conversion happens.

        Raises:
            EditorStateError: If no page is held
        """
        pending = pending_upload_count(formats)
        if pending:
            error = UploadPendingError(pending)
            self._error_handler.proceed(error, self._view.show_error)
            refused: "Future[None]" = Future()
            refused.set_exception(error)
            return refused

        page = self._page
        if page is None:
            raise EditorStateError("publish")

        def publish() -> None:
            nodes = self._scheduler.computation(self._formats_to_nodes, formats).result()
            self._interactor.publish_page(
                page.id,
                page.path,
                title,
                author_name,
                author_url,
                nodes,
                page_image_url(formats),
            )
            logger.info(f"Published page {page.id}")

        def on_published(_: None) -> None:
            self.is_draft_needed = False
            self._view.on_page_saved()

        self._view.show_progress(True)
        return self._run(
            publish,
            on_success=on_published,
            on_terminate=lambda: self._view.show_progress(False),
        )

    def on_draft_changed(self, draft_fields: DraftFields) -> None:
        """Feed an edit to the background autosave.

        The autosave is armed on the first edit observed after the page
        finished loading; edits before that are ignored.
        """
        if self.is_draft_needed:
            self._autosave.arm()
        self._autosave.submit(draft_fields)

    def save_page_draft_if_needed(self, draft_fields: DraftFields, force: bool = False) -> "Future[bool]":
        """Save the draft now if it differs from the held page (or force is set).

        The view is notified with on_page_saved once the operation completes,
        including when nothing needed saving.

        Returns:
            Future resolved with True if a save was performed
        """
        self._view.show_progress(True)
        return self._run(
            lambda: self._save_draft_if_needed(draft_fields, force),
            on_success=lambda _: self._view.on_page_saved(),
            on_terminate=lambda: self._view.show_progress(False),
        )

    def discard_draft_page_if_needed(self, title: str, formats: List[Format]) -> Optional[Future]:
        """Discard the held draft when the editor was left empty.

        Fire-and-forget: failures are logged and never shown.

        Returns:
            Future of the discard, or None if nothing was discarded
        """
        page = self._page
        if page is None or title or formats:
            return None
        return self._scheduler.io(self._discard, page)

    def convert_html(self, html: str) -> List[Format]:
        """Convert pasted HTML to formats."""
        return self._converter.convert_html(html).items

    def close(self) -> None:
        """End the session, cancelling loads, debounce timers and pending saves."""
        self._autosave.cancel()
        self.scope.cancel()
        logger.debug("Editor session closed")

    def _has_content(self) -> bool:
        return self._page is not None and bool(self._page.nodes.content)

    def _page_formats(self, page: Page) -> List[Format]:
        return self._converter.nodes_to_formats(page.nodes.content).items

    def _formats_to_nodes(self, formats: List[Format]) -> List[Node]:
        return self._converter.formats_to_nodes(formats).items

    def _set_page(self, page: Page) -> None:
        self._page = page

    def _save_background_draft(self, draft_fields: DraftFields) -> None:
        self._save_draft_if_needed(draft_fields, force=False)

    def _save_draft_if_needed(self, draft_fields: DraftFields, force: bool) -> bool:
        page = self._page
        if not self.is_draft_needed or page is None:
            logger.debug("No draft needed, skipping save")
            return False

        nodes = self._scheduler.computation(self._formats_to_nodes, draft_fields.formats).result()
        if not force and draft_fields.title == page.title and nodes == page.nodes.content:
            logger.debug(f"Draft of page {page.id} unchanged, skipping save")
            return False

        saved = self._interactor.save_page_draft(
            page.id,
            draft_fields.title,
            draft_fields.author_name,
            draft_fields.author_url,
            nodes,
            page_image_url(draft_fields.formats),
        )
        self._scheduler.main(self._set_page, saved).result()
        logger.info(f"Saved draft of page {page.id}")
        return True

    def _discard(self, page: Page) -> None:
        try:
            self._interactor.discard_draft_page(page)
            logger.info(f"Discarded empty draft {page.id}")
        except Exception as e:
            self._error_handler.proceed(e, ignore_message)

    def _run(
        self,
        work: Callable[[], T],
        on_success: Callable[[T], None],
        on_terminate: Callable[[], None],
    ) -> "Future[T]":
        """Run work on an I/O worker and report back on the interaction thread.

        Errors are routed through the error handler to view.show_error.
        on_terminate runs after success or failure unless the session was
        closed in the meantime.
        """
        done: "Future[T]" = Future()

        def succeed(result: T) -> None:
            if self.scope.cancelled:
                done.cancel()
                return
            try:
                on_success(result)
            finally:
                on_terminate()
            done.set_result(result)

        def fail(error: Exception) -> None:
            if self.scope.cancelled:
                done.cancel()
                return
            try:
                self._error_handler.proceed(error, self._view.show_error)
            finally:
                on_terminate()
            done.set_exception(error)

        def run() -> None:
            try:
                result = work()
            except Exception as e:
                self._scheduler.main(fail, e)
                return
            self._scheduler.main(succeed, result)

        self._scheduler.io(run)
        return done
