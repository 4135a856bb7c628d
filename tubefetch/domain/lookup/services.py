"""
Lookup Services

Per-session sequencing of lookup cycles and the in-memory session registry.
"""

import logging
import threading
import uuid
from collections import OrderedDict
from typing import Any, Dict, Optional, Tuple

from ..errors import SessionNotFoundError
from ..events import LookupSupersededEvent
from .entities import LookupCycle
from .value_objects import LookupState

logger = logging.getLogger(__name__)


def _is_pending(cycle: Optional[LookupCycle]) -> bool:
    return cycle is not None and cycle.state != LookupState.DONE


class LookupSession:
    """
    Domain service owning the "current result" slot of one client.

    Every submission gets the next sequence number. Starting a submission
    cancels the one still in flight, and a finished cycle is only written
    to the slot if no newer submission exists, so a slow stale response
    can never overwrite a newer result.
    """

    def __init__(self, session_id: str):
        self.session_id = session_id
        self._lock = threading.Lock()
        self._sequence = 0
        self._in_flight: Optional[LookupCycle] = None
        self._current: Optional[LookupCycle] = None

    @property
    def latest_sequence(self) -> int:
        with self._lock:
            return self._sequence

    @property
    def current(self) -> Optional[LookupCycle]:
        """Last cycle accepted into the result slot."""
        with self._lock:
            return self._current

    @property
    def in_progress(self) -> bool:
        """True from ``begin`` until the in-flight cycle reaches DONE."""
        with self._lock:
            return _is_pending(self._in_flight)

    def begin(self, url: str) -> Tuple[LookupCycle, Optional[LookupSupersededEvent]]:
        """
        Register a new submission.

        Args:
            url: URL as submitted

        Returns:
            Tuple of (new cycle, superseded event for the cancelled
            in-flight cycle or None)
        """
        with self._lock:
            self._sequence += 1
            previous = self._in_flight
            cycle = LookupCycle(
                session_id=self.session_id,
                sequence=self._sequence,
                url=url,
            )
            self._in_flight = cycle

        superseded = None
        if previous is not None:
            superseded = previous.cancel(superseded_by=cycle.sequence)
            if superseded:
                logger.debug(
                    f"Session {self.session_id}: cycle {previous.sequence} "
                    f"superseded by {cycle.sequence}"
                )
        return cycle, superseded

    def complete(self, cycle: LookupCycle) -> bool:
        """
        Offer a finished cycle to the result slot.

        Args:
            cycle: Cycle in DONE state

        Returns:
            True if the cycle became the current result, False if it was stale
        """
        with self._lock:
            if self._in_flight is cycle:
                self._in_flight = None
            if cycle.sequence != self._sequence:
                logger.debug(
                    f"Session {self.session_id}: discarding stale cycle "
                    f"{cycle.sequence} (latest is {self._sequence})"
                )
                return False
            self._current = cycle
            return True

    def snapshot(self) -> Dict[str, Any]:
        """Session state for the presentation layer."""
        with self._lock:
            in_flight = self._in_flight
            current = self._current
            sequence = self._sequence

        pending = _is_pending(in_flight)
        if pending:
            state = in_flight.state
        elif current is not None:
            state = current.state
        else:
            state = LookupState.IDLE

        current_dict = current.to_dict() if current else {}
        return {
            "session_id": self.session_id,
            "in_progress": pending,
            "state": state.value,
            "sequence": sequence,
            "current_sequence": current.sequence if current else None,
            "video_id": current_dict.get("video_id"),
            "result": current_dict.get("result"),
            "error": current_dict.get("error"),
        }


class LookupSessionRegistry:
    """
    In-memory registry of lookup sessions.

    Bounded: when full, the least recently used session is dropped.
    Nothing is persisted.
    """

    def __init__(self, max_sessions: int = 1000):
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1")
        self.max_sessions = max_sessions
        self._sessions: "OrderedDict[str, LookupSession]" = OrderedDict()
        self._lock = threading.Lock()

    def get_or_create(self, session_id: Optional[str] = None) -> LookupSession:
        """
        Return the session for ``session_id``, creating it when needed.

        Args:
            session_id: Client-chosen id; a uuid4 is generated when None

        Returns:
            LookupSession
        """
        session_id = session_id or str(uuid.uuid4())
        with self._lock:
            session = self._sessions.get(session_id)
            if session is not None:
                self._sessions.move_to_end(session_id)
                return session

            session = LookupSession(session_id)
            self._sessions[session_id] = session
            while len(self._sessions) > self.max_sessions:
                evicted_id, _ = self._sessions.popitem(last=False)
                logger.debug(f"Evicted lookup session {evicted_id}")
            return session

    def get(self, session_id: str) -> LookupSession:
        """
        Return an existing session.

        Raises:
            SessionNotFoundError: If the session is unknown or was evicted
        """
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                raise SessionNotFoundError(f"Session {session_id} not found")
            self._sessions.move_to_end(session_id)
            return session

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def __contains__(self, session_id: str) -> bool:
        with self._lock:
            return session_id in self._sessions
