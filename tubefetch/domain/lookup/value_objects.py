"""
Lookup Value Objects

States of a lookup cycle and the cancellation handle attached to it.
"""

import logging
import threading
from enum import Enum
from typing import Callable, List

logger = logging.getLogger(__name__)


class LookupState(Enum):
    """Lookup cycle state enumeration."""
    IDLE = "idle"
    RESOLVING = "resolving"
    FETCHING = "fetching"
    DONE = "done"

    def is_active(self) -> bool:
        """Check if the cycle is in flight."""
        return self in (LookupState.RESOLVING, LookupState.FETCHING)


class LookupOutcome(Enum):
    """How a DONE cycle ended."""
    SUCCESS = "success"
    FAILURE = "failure"
    CANCELLED = "cancelled"


class CancellationToken:
    """
    Best-effort cancellation handle for one lookup cycle.

    Callbacks registered with ``on_cancel`` run once, on the thread that
    calls ``cancel``. A callback registered after cancellation runs
    immediately.
    """

    def __init__(self):
        self._event = threading.Event()
        self._callbacks: List[Callable[[], None]] = []
        self._lock = threading.Lock()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def on_cancel(self, callback: Callable[[], None]) -> None:
        with self._lock:
            if not self._event.is_set():
                self._callbacks.append(callback)
                return
        self._run(callback)

    def cancel(self) -> bool:
        """
        Cancel the cycle.

        Returns:
            True if this call cancelled it, False if it was already cancelled
        """
        with self._lock:
            if self._event.is_set():
                return False
            self._event.set()
            callbacks, self._callbacks = self._callbacks, []

        for callback in callbacks:
            self._run(callback)
        return True

    @staticmethod
    def _run(callback: Callable[[], None]) -> None:
        try:
            callback()
        except Exception as e:
            # Cancellation is best effort; a failing callback must not
            # break the submission that superseded this cycle
            logger.warning(f"Cancellation callback failed: {e}")
