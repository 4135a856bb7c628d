from datetime import datetime

import pytest

from tubefetch.domain.events import (
    LookupCompletedEvent,
    LookupFailedEvent,
    LookupStartedEvent,
    LookupSupersededEvent,
    VideoIdResolvedEvent,
)

NOW = datetime(2024, 1, 1, 12, 0, 0)


class TestDomainEvents:
    def test_started_to_dict(self):
        event = LookupStartedEvent(aggregate_id="s#1", occurred_at=NOW, url="https://youtu.be/x")
        assert event.to_dict() == {
            "event_type": "LookupStartedEvent",
            "aggregate_id": "s#1",
            "occurred_at": NOW.isoformat(),
            "url": "https://youtu.be/x",
        }

    def test_completed_to_dict(self):
        event = LookupCompletedEvent(
            aggregate_id="s#1",
            occurred_at=NOW,
            video_id="dQw4w9WgXcQ",
            title="T",
            video_format_count=2,
            audio_format_count=3,
        )
        data = event.to_dict()
        assert data["video_format_count"] == 2
        assert data["audio_format_count"] == 3
        assert data["title"] == "T"

    def test_other_events_to_dict(self):
        assert VideoIdResolvedEvent("s#1", NOW, "dQw4w9WgXcQ").to_dict()["video_id"] == "dQw4w9WgXcQ"
        assert LookupFailedEvent("s#1", NOW, "bad", "invalid_url").to_dict()["error_category"] == "invalid_url"
        assert LookupSupersededEvent("s#1", NOW, 2).to_dict()["superseded_by"] == 2

    def test_events_are_immutable(self):
        event = LookupSupersededEvent("s#1", NOW, 2)
        with pytest.raises(AttributeError):
            event.superseded_by = 3
