"""
Unit tests for LookupService.

Tests the resolve -> fetch -> classify pipeline with a stubbed metadata
client, error mapping and supersession of overlapping submissions.
"""

import threading
from unittest.mock import Mock

import pytest

from tubefetch.application.lookup_service import LookupResponse, LookupService
from tubefetch.domain.errors import (
    ApplicationError,
    ErrorCategory,
    MetadataTransportError,
)
from tubefetch.domain.events import (
    DomainEvent,
    LookupCompletedEvent,
    LookupFailedEvent,
    LookupStartedEvent,
    LookupSupersededEvent,
    VideoIdResolvedEvent,
)
from tubefetch.domain.lookup import LookupSessionRegistry

from tests.fixtures.domain_fixtures import VIDEO_ID, WATCH_URL, create_metadata_payload
from tests.fixtures.mock_repositories import BlockingMetadataClient, StubMetadataClient


@pytest.fixture
def recorded_events(event_publisher):
    events = []
    event_publisher.subscribe(DomainEvent, events.append)
    return events


def _service(client, event_publisher=None):
    return LookupService(
        metadata_client=client,
        sessions=LookupSessionRegistry(max_sessions=10),
        event_publisher=event_publisher,
    )


class TestSubmitSuccess:
    def test_returns_classified_result(self, lookup_service, stub_client):
        response = lookup_service.submit(WATCH_URL, session_id="s1")

        assert isinstance(response, LookupResponse)
        assert response.session_id == "s1"
        assert response.sequence == 1
        assert str(response.video_id) == VIDEO_ID
        assert response.result.title == "Rick Astley - Never Gonna Give You Up"
        assert stub_client.calls == [VIDEO_ID]

    def test_to_dict_merges_result(self, lookup_service):
        data = lookup_service.submit(WATCH_URL, session_id="s1").to_dict()

        assert data["session_id"] == "s1"
        assert data["video_id"] == VIDEO_ID
        assert data["title"]
        assert data["video_formats"][0]["label"] == "720p"

    def test_generates_session_id(self, lookup_service, sessions):
        response = lookup_service.submit(WATCH_URL)
        assert response.session_id in sessions

    def test_session_holds_result(self, lookup_service):
        lookup_service.submit(WATCH_URL, session_id="s1")
        state = lookup_service.get_session_state("s1")

        assert state["in_progress"] is False
        assert state["state"] == "done"
        assert state["video_id"] == VIDEO_ID
        assert state["result"]["title"] == "Rick Astley - Never Gonna Give You Up"

    def test_publishes_lifecycle_events(self, lookup_service, recorded_events):
        lookup_service.submit(WATCH_URL, session_id="s1")

        assert [type(e) for e in recorded_events] == [
            LookupStartedEvent,
            VideoIdResolvedEvent,
            LookupCompletedEvent,
        ]
        assert {e.aggregate_id for e in recorded_events} == {"s1#1"}

    def test_sequence_grows_per_session(self, lookup_service):
        lookup_service.submit(WATCH_URL, session_id="s1")
        assert lookup_service.submit(WATCH_URL, session_id="s1").sequence == 2
        assert lookup_service.submit(WATCH_URL, session_id="s2").sequence == 1

    def test_works_without_event_publisher(self, stub_client):
        service = _service(stub_client)
        assert service.submit(WATCH_URL).result.title


class TestSubmitFailures:
    def test_invalid_url_skips_network(self, lookup_service, stub_client, recorded_events):
        with pytest.raises(ApplicationError) as exc_info:
            lookup_service.submit("not a url", session_id="s1")

        assert exc_info.value.category == ErrorCategory.INVALID_URL
        assert exc_info.value.message == "Could not extract a valid YouTube video ID from the URL."
        assert stub_client.calls == []
        assert isinstance(recorded_events[-1], LookupFailedEvent)

    def test_transport_error_keeps_its_message(self, event_publisher):
        client = StubMetadataClient(error=MetadataTransportError("You are not subscribed to this API."))
        service = _service(client, event_publisher)

        with pytest.raises(ApplicationError) as exc_info:
            service.submit(WATCH_URL, session_id="s1")

        assert exc_info.value.category == ErrorCategory.NETWORK_ERROR
        assert exc_info.value.message == "You are not subscribed to this API."
        error = service.get_session_state("s1")["error"]
        assert error == {"category": "network_error", "message": "You are not subscribed to this API."}

    def test_missing_title_is_unexpected_response(self):
        service = _service(StubMetadataClient(payload=create_metadata_payload(title=None)))

        with pytest.raises(ApplicationError) as exc_info:
            service.submit(WATCH_URL)

        assert exc_info.value.category == ErrorCategory.UNEXPECTED_RESPONSE
        assert exc_info.value.message == (
            "Could not fetch video details. The API response was not in the expected format."
        )

    def test_unexpected_exception_is_system_error(self):
        service = _service(StubMetadataClient(error=RuntimeError("boom")))

        with pytest.raises(ApplicationError) as exc_info:
            service.submit(WATCH_URL, session_id="s1")

        assert exc_info.value.category == ErrorCategory.SYSTEM_ERROR
        assert "boom" in exc_info.value.technical_message

    def test_session_ready_after_failure(self, sample_payload):
        client = StubMetadataClient(error=MetadataTransportError("Network Error"))
        service = _service(client)
        with pytest.raises(ApplicationError):
            service.submit(WATCH_URL, session_id="s1")

        client.error = None
        client.payload = sample_payload
        response = service.submit(WATCH_URL, session_id="s1")

        assert response.sequence == 2
        assert service.get_session_state("s1")["error"] is None


class TestSupersession:
    def test_newer_submission_cancels_in_flight_fetch(self, sample_payload, event_publisher, recorded_events):
        client = BlockingMetadataClient(payload=sample_payload)
        service = _service(client, event_publisher)
        outcome = {}

        def first_submission():
            try:
                outcome["first"] = service.submit(WATCH_URL, session_id="s1")
            except ApplicationError as e:
                outcome["first"] = e

        worker = threading.Thread(target=first_submission)
        worker.start()
        assert client.started.wait(timeout=5)

        second = service.submit("https://youtu.be/aaaaaaaaaaa", session_id="s1")
        worker.join(timeout=5)

        assert isinstance(outcome["first"], ApplicationError)
        assert outcome["first"].category == ErrorCategory.SUPERSEDED
        assert second.sequence == 2
        assert str(second.video_id) == "aaaaaaaaaaa"

        state = service.get_session_state("s1")
        assert state["current_sequence"] == 2
        assert state["video_id"] == "aaaaaaaaaaa"
        assert any(isinstance(e, LookupSupersededEvent) for e in recorded_events)

    def test_stale_success_is_discarded(self, sample_payload):
        sessions = LookupSessionRegistry()
        client = Mock()
        service = LookupService(metadata_client=client, sessions=sessions)

        def fetch_and_get_overtaken(video_id, cancellation=None):
            # A newer submission arrives while this response is in flight
            sessions.get("s1").begin(WATCH_URL)
            return sample_payload

        client.fetch.side_effect = fetch_and_get_overtaken

        with pytest.raises(ApplicationError) as exc_info:
            service.submit(WATCH_URL, session_id="s1")

        assert exc_info.value.category == ErrorCategory.SUPERSEDED
        assert sessions.get("s1").current is None


class TestResolveUrl:
    def test_returns_shape_and_id(self, lookup_service, stub_client):
        shape, video_id = lookup_service.resolve_url("https://youtu.be/dQw4w9WgXcQ?t=30")

        assert shape == "short_link"
        assert str(video_id) == VIDEO_ID
        assert stub_client.calls == []

    def test_invalid_url(self, lookup_service):
        with pytest.raises(ApplicationError) as exc_info:
            lookup_service.resolve_url("https://vimeo.com/1")
        assert exc_info.value.category == ErrorCategory.INVALID_URL


class TestSessionState:
    def test_unknown_session(self, lookup_service):
        with pytest.raises(ApplicationError) as exc_info:
            lookup_service.get_session_state("missing")
        assert exc_info.value.category == ErrorCategory.SESSION_NOT_FOUND
