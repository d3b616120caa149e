"""Debounced, single-flight draft autosave.

The coordinator receives every edit of an editing session. Each edit
restarts a quiet window; when the window elapses the latest edit is handed
to the save callback on an I/O worker. Only one save runs at a time: an edit
whose window elapses during a save is persisted right after that save.
"""

import logging
import threading
from functools import partial
from typing import Callable, Optional

from .models import AutosaveState, DraftFields
from .scheduling import Cancellable, SessionScope

logger = logging.getLogger(__name__)

DEFAULT_DEBOUNCE_SECONDS = 1.0


class DraftAutosaveCoordinator:
    """Coordinates background draft saves for one editing session.

    States:
        IDLE: not armed, edits are ignored
        ARMED: armed, no edit pending
        DEBOUNCING: an edit is waiting for the quiet window to elapse
        PERSISTING: a save is in flight

    Example:
        >>> autosave = DraftAutosaveCoordinator(scheduler, scope, save, on_error)
        >>> autosave.arm()
        >>> autosave.submit(fields)  # saved once the user pauses for 1s
    """

    def __init__(
        self,
        scheduler,
        scope: SessionScope,
        save: Callable[[DraftFields], None],
        on_error: Callable[[Exception], None],
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
    ):
        """Initialize the coordinator.

        Args:
            scheduler: Scheduler providing schedule() and io()
            scope: Session scope cancelling the timer on session end
            save: Blocking save callback, called on an I/O worker
            on_error: Receives errors raised by save
            debounce_seconds: Quiet window after the last edit
        """
        self._scheduler = scheduler
        self._scope = scope
        self._save = save
        self._on_error = on_error
        self.debounce_seconds = debounce_seconds

        self._lock = threading.Lock()
        self._state = AutosaveState.IDLE
        self._timer: Optional[Cancellable] = None
        self._latest: Optional[DraftFields] = None
        self._queued: Optional[DraftFields] = None
        self._in_flight = False
        self._generation = 0

    @property
    def state(self) -> AutosaveState:
        return self._state

    @property
    def armed(self) -> bool:
        return self._state != AutosaveState.IDLE

    def arm(self) -> bool:
        """Start accepting edits. Arming twice is a no-op.

        Returns:
            True if this call armed the coordinator
        """
        with self._lock:
            if self._state != AutosaveState.IDLE:
                return False
            self._state = AutosaveState.ARMED
        logger.debug(f"Draft autosave armed (debounce {self.debounce_seconds}s)")
        return True

    def submit(self, fields: DraftFields) -> None:
        """Record an edit and restart the quiet window.

        Edits submitted before arm() or after the session ended are ignored.
        """
        with self._lock:
            if self._state == AutosaveState.IDLE or self._scope.cancelled:
                return
            self._latest = fields
            if self._timer is not None:
                self._timer.cancel()
            self._generation += 1
            self._timer = self._scope.track(
                self._scheduler.schedule(
                    self.debounce_seconds, partial(self._on_quiet, self._generation)
                )
            )
            if self._state != AutosaveState.PERSISTING:
                self._state = AutosaveState.DEBOUNCING

    def cancel(self) -> None:
        """Drop the pending edit and stop the timer."""
        with self._lock:
            self._generation += 1
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            self._latest = None
            self._queued = None
            if not self._in_flight and self._state != AutosaveState.IDLE:
                self._state = AutosaveState.ARMED

    def _on_quiet(self, generation: int) -> None:
        with self._lock:
            # a timer superseded by a later edit may still fire once cancelled
            if generation != self._generation:
                return
            self._timer = None
            if self._scope.cancelled or self._latest is None:
                return
            fields, self._latest = self._latest, None
            if self._in_flight:
                self._queued = fields
                return
            self._in_flight = True
            self._state = AutosaveState.PERSISTING
        self._scheduler.io(self._persist, fields)

    def _persist(self, fields: Optional[DraftFields]) -> None:
        while fields is not None:
            try:
                self._save(fields)
            except Exception as e:
                logger.warning(f"Draft autosave failed: {e}")
                self._on_error(e)

            with self._lock:
                fields, self._queued = self._queued, None
                if self._scope.cancelled:
                    fields = None
                if fields is None:
                    self._in_flight = False
                    if self._timer is not None:
                        self._state = AutosaveState.DEBOUNCING
                    else:
                        self._state = AutosaveState.ARMED
