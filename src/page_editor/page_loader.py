"""Staged page loading: cached copy first, fresh copy second.

Opening an existing page emits the locally cached copy (if any) and then
the freshly loaded copy. The fresh copy is delivered no earlier than
``load_delay`` seconds after the pipeline started so that a fast fetch does
not cause a double render right after the cached one. Fetching runs on an
I/O worker, conversion on a computation worker and delivery on the
interaction thread.
"""

import logging
from concurrent.futures import Future
from typing import Callable, List, Optional, Tuple

from src.models.page import Page
from src.page_format.formats import Format
from src.telegraph_client.errors import PersistenceError

from .delivery import ConflatingDelivery
from .models import LoadPhase
from .scheduling import SessionScope

logger = logging.getLogger(__name__)

DEFAULT_LOAD_DELAY_SECONDS = 0.35

LoadedPage = Tuple[Page, List[Format]]


class PageLoadPipeline:
    """Loads a page in two phases and delivers converted results.

    Callbacks run on the interaction thread, except on_subscribe which runs
    on the caller's thread before any work starts. on_terminate runs after
    completion or failure, but not after cancellation.
    """

    def __init__(
        self,
        scheduler,
        scope: SessionScope,
        interactor,
        convert: Callable[[Page], List[Format]],
        load_delay: float = DEFAULT_LOAD_DELAY_SECONDS,
    ):
        """Initialize the pipeline.

        Args:
            scheduler: Scheduler providing io(), computation(), main(), sleep(), now()
            scope: Session scope; cancelling it abandons the load
            interactor: Page collaborator (get_cached_page, get_page_or_create_draft)
            convert: Converts a page body to formats
            load_delay: Minimum delay before the fresh copy is delivered
        """
        self._scheduler = scheduler
        self._scope = scope
        self._interactor = interactor
        self._convert = convert
        self.load_delay = load_delay
        self.phase = LoadPhase.DONE

    def start(
        self,
        page_id: Optional[int],
        on_page: Callable[[Page, List[Format]], None],
        on_subscribe: Optional[Callable[[], None]] = None,
        on_complete: Optional[Callable[[], None]] = None,
        on_error: Optional[Callable[[Exception], None]] = None,
        on_terminate: Optional[Callable[[], None]] = None,
    ) -> "Future[Optional[Page]]":
        """Start loading a page.

        Args:
            page_id: Page to open, or None to create a new draft
            on_page: Receives each delivered page with its formats
            on_subscribe: Called before loading starts
            on_complete: Called after the last delivery
            on_error: Called when loading fails
            on_terminate: Called after completion or failure

        Returns:
            Future resolved with the last delivered page (or the error)
            once the terminal callbacks have run
        """
        done: "Future[Optional[Page]]" = Future()
        if on_subscribe is not None:
            on_subscribe()

        delivered: List[Page] = []

        def deliver(result: LoadedPage) -> None:
            delivered.append(result[0])
            on_page(*result)

        delivery: ConflatingDelivery[LoadedPage] = ConflatingDelivery(
            self._scheduler, self._scope, deliver
        )
        subscribed_at = self._scheduler.now()
        self.phase = LoadPhase.FRESH_PENDING if page_id is None else LoadPhase.CACHE_PENDING

        def finish() -> None:
            if self._scope.cancelled:
                done.cancel()
                return
            try:
                if on_complete is not None:
                    on_complete()
            finally:
                if on_terminate is not None:
                    on_terminate()
            done.set_result(delivered[-1] if delivered else None)

        def fail(error: Exception) -> None:
            try:
                if on_error is not None:
                    on_error(error)
            finally:
                if on_terminate is not None:
                    on_terminate()
            done.set_exception(error)

        def run() -> None:
            try:
                self._load(page_id, delivery, subscribed_at)
            except Exception as e:
                self.phase = LoadPhase.DONE
                logger.error(f"Loading page {page_id} failed: {e}")
                self._scheduler.main(fail, e)
                return
            self.phase = LoadPhase.DONE
            if self._scope.cancelled:
                done.cancel()
                return
            self._scheduler.main(finish)

        self._scheduler.io(run)
        return done

    def _load(
        self,
        page_id: Optional[int],
        delivery: ConflatingDelivery[LoadedPage],
        subscribed_at: float,
    ) -> None:
        if page_id is None:
            self._emit(delivery, 0, self._interactor.get_page_or_create_draft(None))
            return

        cached = None
        try:
            cached = self._interactor.get_cached_page(page_id)
        except PersistenceError as e:
            logger.warning(f"Cached copy of page {page_id} unavailable: {e}")
        if cached is not None:
            self._emit(delivery, 0, cached)

        self.phase = LoadPhase.FRESH_PENDING
        fresh = self._interactor.get_page_or_create_draft(page_id)

        remaining = subscribed_at + self.load_delay - self._scheduler.now()
        if remaining > 0 and not self._scheduler.sleep(remaining, self._scope):
            return
        self._emit(delivery, 1, fresh)

    def _emit(self, delivery: ConflatingDelivery[LoadedPage], sequence: int, page: Page) -> None:
        if self._scope.cancelled:
            return
        formats = self._scheduler.computation(self._convert, page).result()
        delivery.offer(sequence, (page, formats))
