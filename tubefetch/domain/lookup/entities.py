"""
Lookup Entities

A lookup cycle is one resolve -> fetch -> classify run for one submission.
"""

import threading
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional

from ..errors import LookupStateError
from ..events import (
    LookupCompletedEvent,
    LookupFailedEvent,
    LookupStartedEvent,
    LookupSupersededEvent,
    VideoIdResolvedEvent,
)
from ..video_processing.entities import ClassifiedResult
from ..video_processing.value_objects import VideoId
from .value_objects import CancellationToken, LookupOutcome, LookupState


@dataclass
class LookupCycle:
    """
    Entity representing one submission of a URL.

    State machine: IDLE -> RESOLVING -> FETCHING -> DONE. A cycle can be
    cancelled from any non-terminal state; once cancelled, late calls to
    ``succeed`` or ``fail`` from the pipeline are ignored.
    """

    session_id: str
    sequence: int
    url: str
    state: LookupState = LookupState.IDLE
    outcome: Optional[LookupOutcome] = None
    video_id: Optional[str] = None
    result: Optional[ClassifiedResult] = None
    error_message: Optional[str] = None
    error_category: Optional[str] = None
    started_at: datetime = field(default_factory=datetime.utcnow)
    finished_at: Optional[datetime] = None
    cancellation: CancellationToken = field(
        default_factory=CancellationToken, repr=False, compare=False
    )
    _lock: threading.Lock = field(
        default_factory=threading.Lock, init=False, repr=False, compare=False
    )

    @property
    def aggregate_id(self) -> str:
        return f"{self.session_id}#{self.sequence}"

    @property
    def in_progress(self) -> bool:
        return self.state.is_active()

    @property
    def is_cancelled(self) -> bool:
        return self.outcome == LookupOutcome.CANCELLED

    def start_resolving(self) -> Optional[LookupStartedEvent]:
        """
        Transition IDLE -> RESOLVING.

        Returns:
            LookupStartedEvent, or None if the cycle was cancelled before it started

        Raises:
            LookupStateError: If the cycle already started
        """
        with self._lock:
            if self.is_cancelled:
                return None
            self._require(LookupState.IDLE, "start resolving")
            self.state = LookupState.RESOLVING
            return LookupStartedEvent(
                aggregate_id=self.aggregate_id,
                occurred_at=datetime.utcnow(),
                url=self.url,
            )

    def start_fetching(self, video_id: VideoId) -> Optional[VideoIdResolvedEvent]:
        """
        Transition RESOLVING -> FETCHING once the URL resolved.

        Returns:
            VideoIdResolvedEvent, or None if the cycle was cancelled meanwhile

        Raises:
            LookupStateError: If the cycle is not resolving
        """
        with self._lock:
            if self.is_cancelled:
                return None
            self._require(LookupState.RESOLVING, "start fetching")
            self.state = LookupState.FETCHING
            self.video_id = str(video_id)
            return VideoIdResolvedEvent(
                aggregate_id=self.aggregate_id,
                occurred_at=datetime.utcnow(),
                video_id=self.video_id,
            )

    def succeed(self, result: ClassifiedResult) -> Optional[LookupCompletedEvent]:
        """
        Transition FETCHING -> DONE(SUCCESS).

        Returns:
            LookupCompletedEvent, or None if the cycle was cancelled meanwhile

        Raises:
            LookupStateError: If the cycle is not fetching
        """
        with self._lock:
            if self.is_cancelled:
                return None
            self._require(LookupState.FETCHING, "complete")
            self._finish(LookupOutcome.SUCCESS)
            self.result = result
            return LookupCompletedEvent(
                aggregate_id=self.aggregate_id,
                occurred_at=self.finished_at,
                video_id=self.video_id,
                title=result.title,
                video_format_count=len(result.video_formats),
                audio_format_count=len(result.audio_formats),
            )

    def fail(self, error_category: str, error_message: str) -> Optional[LookupFailedEvent]:
        """
        Transition RESOLVING/FETCHING -> DONE(FAILURE).

        Returns:
            LookupFailedEvent, or None if the cycle was cancelled meanwhile

        Raises:
            LookupStateError: If the cycle is not in flight
        """
        with self._lock:
            if self.is_cancelled:
                return None
            if not self.state.is_active():
                raise LookupStateError(
                    f"Cannot fail lookup in {self.state.value} state"
                )
            self._finish(LookupOutcome.FAILURE)
            self.error_category = error_category
            self.error_message = error_message
            return LookupFailedEvent(
                aggregate_id=self.aggregate_id,
                occurred_at=self.finished_at,
                error_message=error_message,
                error_category=error_category,
            )

    def cancel(self, superseded_by: int) -> Optional[LookupSupersededEvent]:
        """
        Abandon the cycle in favour of a newer submission.

        Sets the cancellation token so an in-flight request can abort.

        Returns:
            LookupSupersededEvent, or None if the cycle had already finished
        """
        with self._lock:
            if self.state == LookupState.DONE:
                return None
            self._finish(LookupOutcome.CANCELLED)
        self.cancellation.cancel()
        return LookupSupersededEvent(
            aggregate_id=self.aggregate_id,
            occurred_at=self.finished_at,
            superseded_by=superseded_by,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for the presentation layer."""
        error = None
        if self.outcome == LookupOutcome.FAILURE:
            error = {"category": self.error_category, "message": self.error_message}
        return {
            "sequence": self.sequence,
            "state": self.state.value,
            "outcome": self.outcome.value if self.outcome else None,
            "in_progress": self.in_progress,
            "video_id": self.video_id,
            "result": self.result.to_dict() if self.result else None,
            "error": error,
            "started_at": self.started_at.isoformat(),
            "finished_at": self.finished_at.isoformat() if self.finished_at else None,
        }

    def _require(self, expected: LookupState, action: str) -> None:
        if self.state != expected:
            raise LookupStateError(
                f"Cannot {action} lookup in {self.state.value} state"
            )

    def _finish(self, outcome: LookupOutcome) -> None:
        self.state = LookupState.DONE
        self.outcome = outcome
        self.finished_at = datetime.utcnow()
