"""
Shared pytest fixtures and configuration for the TubeFetch test suite.

This module provides:
- Hypothesis configuration for property-based testing
- Shared fixtures for payloads, domain services and the Flask app
"""

import pytest

# Hypothesis configuration
from hypothesis import HealthCheck, Phase, settings

from tubefetch.app_factory import create_app
from tubefetch.application.event_publisher import EventPublisher
from tubefetch.application.lookup_service import LookupService
from tubefetch.config.settings import AppConfig
from tubefetch.domain.lookup import LookupSessionRegistry
from tubefetch.domain.video_processing import FormatClassifier, IdentifierResolver

from tests.fixtures.domain_fixtures import WATCH_URL, create_metadata_payload
from tests.fixtures.mock_repositories import StubMetadataClient

# Register Hypothesis profiles
settings.register_profile(
    "default",
    max_examples=100,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow],
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.target, Phase.shrink],
)
settings.register_profile(
    "ci",
    max_examples=200,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow],
)
settings.register_profile(
    "dev",
    max_examples=10,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow],
)
settings.load_profile("default")


# =============================================================================
# Domain Fixtures
# =============================================================================

@pytest.fixture
def sample_youtube_url() -> str:
    """Provide a sample valid YouTube URL."""
    return WATCH_URL


@pytest.fixture
def sample_payload() -> dict:
    """Provide a sample metadata API body."""
    return create_metadata_payload()


@pytest.fixture
def resolver() -> IdentifierResolver:
    return IdentifierResolver()


@pytest.fixture
def classifier() -> FormatClassifier:
    return FormatClassifier()


# =============================================================================
# Application Fixtures
# =============================================================================

@pytest.fixture
def stub_client(sample_payload) -> StubMetadataClient:
    """Metadata client returning the sample payload."""
    return StubMetadataClient(payload=sample_payload)


@pytest.fixture
def sessions() -> LookupSessionRegistry:
    return LookupSessionRegistry(max_sessions=10)


@pytest.fixture
def event_publisher() -> EventPublisher:
    return EventPublisher()


@pytest.fixture
def lookup_service(stub_client, sessions, event_publisher) -> LookupService:
    return LookupService(
        metadata_client=stub_client,
        sessions=sessions,
        event_publisher=event_publisher,
    )


@pytest.fixture
def app_config(monkeypatch) -> AppConfig:
    """AppConfig built from a controlled environment."""
    monkeypatch.setenv("RAPIDAPI_KEY", "test-key")
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    monkeypatch.delenv("THUMBNAIL_PLACEHOLDER_URL", raising=False)
    monkeypatch.delenv("METADATA_API_URL", raising=False)
    monkeypatch.delenv("RAPIDAPI_HOST", raising=False)
    return AppConfig()


@pytest.fixture
def flask_app(app_config, stub_client):
    """Create Flask app for testing with a stubbed metadata client."""
    app = create_app(config=app_config, metadata_client=stub_client)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(flask_app):
    """Create test client."""
    return flask_app.test_client()
