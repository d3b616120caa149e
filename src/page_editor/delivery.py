"""Conflating hand-off of values from workers to the interaction thread."""

import logging
import threading
from concurrent.futures import Future
from typing import Callable, Generic, Optional, Tuple, TypeVar

from .scheduling import SessionScope

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ConflatingDelivery(Generic[T]):
    """Delivers the newest value to a consumer on the interaction thread.

    While a delivery is pending, newer offers replace the pending value
    instead of queueing behind it. Every value carries a sequence number and
    a value older than one already delivered is dropped, so a slow stale
    value can never overwrite a newer one.

    Attributes:
        delivered: Number of values handed to the consumer
    """

    def __init__(self, scheduler, scope: SessionScope, consumer: Callable[[T], None]):
        self._scheduler = scheduler
        self._scope = scope
        self._consumer = consumer
        self._lock = threading.Lock()
        self._pending: Optional[Tuple[int, T]] = None
        self._drain_scheduled = False
        self._last_sequence = -1
        self.delivered = 0

    def offer(self, sequence: int, value: T) -> Optional[Future]:
        """Offer a value for delivery.

        Args:
            sequence: Emission order of the value (higher is newer)
            value: Value to deliver

        Returns:
            Future of the scheduled drain, or None if the value was merged
            into an already scheduled drain or dropped
        """
        with self._lock:
            if sequence <= self._last_sequence:
                logger.debug(f"Dropping stale value #{sequence}")
                return None
            if self._pending is None or sequence > self._pending[0]:
                self._pending = (sequence, value)
            if self._drain_scheduled:
                return None
            self._drain_scheduled = True
        return self._scheduler.main(self._drain)

    def _drain(self) -> None:
        with self._lock:
            pending, self._pending = self._pending, None
            self._drain_scheduled = False
            if pending is None or self._scope.cancelled:
                return
            self._last_sequence = pending[0]
        self.delivered += 1
        self._consumer(pending[1])
