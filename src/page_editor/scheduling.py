"""Thread roles and session-scoped cancellation for editor pipelines.

Editor work runs on three roles: I/O workers (fetch/persist calls),
computation workers (conversion) and a single interaction thread that owns
all editor state and every notification to the view. Every pipeline of an
editing session is registered with one SessionScope; cancelling the scope
stops timers, wakes cancellable sleeps and makes pending deliveries no-ops.
"""

import logging
import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, List, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Cancellable:
    """Handle of a scheduled timer."""

    def __init__(self, timer: Optional[threading.Timer] = None):
        self._timer = timer
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def done(self) -> bool:
        """True once the timer was cancelled or has run."""
        return self._cancelled or (self._timer is not None and self._timer.finished.is_set())

    def cancel(self) -> None:
        """Cancel the timer if it has not fired yet."""
        self._cancelled = True
        if self._timer is not None:
            self._timer.cancel()


class SessionScope:
    """Cancellation token owned by one editing session.

    Example:
        >>> scope = SessionScope()
        >>> handle = scope.track(scheduler.schedule(1.0, save))
        >>> scope.cancel()  # cancels handle and wakes any wait()
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._event = threading.Event()
        self._handles: List[Cancellable] = []

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def track(self, handle: Cancellable) -> Cancellable:
        """Register a timer handle so cancel() also cancels it."""
        with self._lock:
            self._handles = [h for h in self._handles if not h.done]
            self._handles.append(handle)
        if self.cancelled:
            handle.cancel()
        return handle

    def wait(self, seconds: float) -> bool:
        """Sleep for up to seconds, returning early if the scope is cancelled.

        Returns:
            True if the full delay elapsed, False if cancelled
        """
        if seconds <= 0:
            return not self.cancelled
        return not self._event.wait(seconds)

    def cancel(self) -> None:
        """Cancel every tracked timer and mark the scope cancelled."""
        with self._lock:
            handles, self._handles = self._handles, []
        self._event.set()
        for handle in handles:
            handle.cancel()
        logger.debug(f"Session scope cancelled ({len(handles)} pending timers)")


class ThreadScheduler:
    """Schedules editor work on worker pools and the interaction thread.

    Attributes:
        io_workers: Size of the I/O pool
        computation_workers: Size of the conversion pool
    """

    def __init__(self, io_workers: int = 4, computation_workers: int = 2):
        self.io_workers = io_workers
        self.computation_workers = computation_workers
        self._io = ThreadPoolExecutor(max_workers=io_workers, thread_name_prefix="editor-io")
        self._computation = ThreadPoolExecutor(
            max_workers=computation_workers, thread_name_prefix="editor-computation"
        )
        self._main = ThreadPoolExecutor(max_workers=1, thread_name_prefix="editor-main")

    def io(self, func: Callable[..., T], *args, **kwargs) -> "Future[T]":
        """Run a blocking fetch/persist call on an I/O worker."""
        return self._io.submit(func, *args, **kwargs)

    def computation(self, func: Callable[..., T], *args, **kwargs) -> "Future[T]":
        """Run CPU-bound work (conversion) on a computation worker."""
        return self._computation.submit(func, *args, **kwargs)

    def main(self, func: Callable[..., T], *args, **kwargs) -> "Future[T]":
        """Run a callback on the interaction thread."""
        return self._main.submit(func, *args, **kwargs)

    def schedule(self, delay: float, func: Callable[[], None]) -> Cancellable:
        """Run func on a timer thread after delay seconds."""
        timer = threading.Timer(delay, func)
        timer.daemon = True
        handle = Cancellable(timer)
        timer.start()
        return handle

    def sleep(self, seconds: float, scope: SessionScope) -> bool:
        """Block the calling worker, waking early if scope is cancelled."""
        return scope.wait(seconds)

    def now(self) -> float:
        """Monotonic clock in seconds."""
        return time.monotonic()

    def shutdown(self, wait: bool = True) -> None:
        """Stop all pools."""
        self._io.shutdown(wait=wait)
        self._computation.shutdown(wait=wait)
        self._main.shutdown(wait=wait)
