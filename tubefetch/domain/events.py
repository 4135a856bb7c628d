"""
Domain Events

Immutable records of significant state changes in the domain.
Events decouple side effects (logging) from the lookup pipeline.
"""

from abc import ABC
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict


@dataclass(frozen=True)
class DomainEvent(ABC):
    """
    Base class for all domain events.

    Attributes:
        aggregate_id: ID of the aggregate that generated the event
            (``<session_id>#<sequence>`` for lookup cycles)
        occurred_at: Timestamp when the event occurred
    """
    aggregate_id: str
    occurred_at: datetime

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert event to dictionary for serialization.

        Returns:
            Dictionary representation of the event
        """
        return {
            "event_type": self.__class__.__name__,
            "aggregate_id": self.aggregate_id,
            "occurred_at": self.occurred_at.isoformat(),
        }


@dataclass(frozen=True)
class LookupStartedEvent(DomainEvent):
    """
    Event emitted when a submission starts resolving its URL.

    Attributes:
        url: URL as submitted by the user
    """
    url: str

    def to_dict(self) -> Dict[str, Any]:
        base_dict = super().to_dict()
        base_dict.update({"url": self.url})
        return base_dict


@dataclass(frozen=True)
class VideoIdResolvedEvent(DomainEvent):
    """
    Event emitted when the URL resolved and the metadata request starts.

    Attributes:
        video_id: Resolved 11-character video ID
    """
    video_id: str

    def to_dict(self) -> Dict[str, Any]:
        base_dict = super().to_dict()
        base_dict.update({"video_id": self.video_id})
        return base_dict


@dataclass(frozen=True)
class LookupCompletedEvent(DomainEvent):
    """
    Event emitted when a cycle produced a classified result.

    Attributes:
        video_id: Resolved video ID
        title: Video title
        video_format_count: Number of video options
        audio_format_count: Number of audio-only options
    """
    video_id: str
    title: str
    video_format_count: int
    audio_format_count: int

    def to_dict(self) -> Dict[str, Any]:
        base_dict = super().to_dict()
        base_dict.update({
            "video_id": self.video_id,
            "title": self.title,
            "video_format_count": self.video_format_count,
            "audio_format_count": self.audio_format_count,
        })
        return base_dict


@dataclass(frozen=True)
class LookupFailedEvent(DomainEvent):
    """
    Event emitted when a cycle ended in failure.

    Attributes:
        error_message: User-facing error message
        error_category: Error category value
    """
    error_message: str
    error_category: str

    def to_dict(self) -> Dict[str, Any]:
        base_dict = super().to_dict()
        base_dict.update({
            "error_message": self.error_message,
            "error_category": self.error_category,
        })
        return base_dict


@dataclass(frozen=True)
class LookupSupersededEvent(DomainEvent):
    """
    Event emitted when a newer submission cancels an in-flight cycle.

    Attributes:
        superseded_by: Sequence number of the newer submission
    """
    superseded_by: int

    def to_dict(self) -> Dict[str, Any]:
        base_dict = super().to_dict()
        base_dict.update({"superseded_by": self.superseded_by})
        return base_dict
