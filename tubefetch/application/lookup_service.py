"""
Lookup Application Service

Coordinates the resolve -> fetch -> classify pipeline for one submission.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from ..domain.errors import (
    ApplicationError,
    ErrorCategory,
    InvalidUrlError,
    LookupCancelledError,
    MetadataTransportError,
    SessionNotFoundError,
    UnexpectedResponseShapeError,
)
from ..domain.lookup import LookupCycle, LookupSession, LookupSessionRegistry
from ..domain.video_processing import (
    ClassifiedResult,
    FormatClassifier,
    IdentifierResolver,
    IMetadataClient,
    VideoId,
)
from .event_publisher import EventPublisher

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LookupResponse:
    """Successful outcome of one submission."""
    session_id: str
    sequence: int
    video_id: VideoId
    result: ClassifiedResult

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "session_id": self.session_id,
            "sequence": self.sequence,
            "video_id": str(self.video_id),
        }
        data.update(self.result.to_dict())
        return data


class LookupService:
    """
    Application service for video lookups.

    Every failure kind is terminal for the cycle: it is recorded on the
    cycle, published as an event and re-raised as an ApplicationError
    carrying the user-facing message. The session is ready for a new
    submission right after.
    """

    def __init__(
        self,
        metadata_client: IMetadataClient,
        sessions: LookupSessionRegistry,
        resolver: Optional[IdentifierResolver] = None,
        classifier: Optional[FormatClassifier] = None,
        event_publisher: Optional[EventPublisher] = None,
    ):
        """
        Initialize LookupService.

        Args:
            metadata_client: IMetadataClient implementation (required)
            sessions: Registry holding the per-client result slots
            resolver: URL resolver, default shapes when None
            classifier: Format classifier, default when None
            event_publisher: Optional publisher for lookup events
        """
        self.metadata_client = metadata_client
        self.sessions = sessions
        self.resolver = resolver or IdentifierResolver()
        self.classifier = classifier or FormatClassifier()
        self.event_publisher = event_publisher

    def resolve_url(self, url: str) -> Tuple[str, VideoId]:
        """
        Resolve a URL without touching the network or any session.

        Returns:
            Tuple of (recognized shape name, VideoId)

        Raises:
            ApplicationError: INVALID_URL if nothing recognizable is found
        """
        matched = self.resolver.match(url)
        if matched is None:
            logger.info(f"Invalid URL provided: {url!r}")
            error = InvalidUrlError()
            raise ApplicationError(
                ErrorCategory.INVALID_URL, str(error), message=str(error)
            )
        shape, video_id = matched
        return shape.name, video_id

    def submit(self, url: str, session_id: Optional[str] = None) -> LookupResponse:
        """
        Run one lookup cycle.

        Args:
            url: URL as pasted by the user
            session_id: Client session; a new one is created when None

        Returns:
            LookupResponse for the accepted cycle

        Raises:
            ApplicationError: INVALID_URL, NETWORK_ERROR, UNEXPECTED_RESPONSE,
                SUPERSEDED or SYSTEM_ERROR
        """
        session = self.sessions.get_or_create(session_id)
        cycle, superseded = session.begin(url)
        self._publish(superseded)

        try:
            self._checkpoint(cycle.start_resolving(), cycle)
            video_id = self.resolver.resolve(url)
            self._checkpoint(cycle.start_fetching(video_id), cycle)

            raw = self.metadata_client.fetch(video_id, cycle.cancellation)
            result = self.classifier.classify(raw)
            self._checkpoint(cycle.succeed(result), cycle)
        except LookupCancelledError:
            session.complete(cycle)
            raise self._superseded(cycle)
        except InvalidUrlError as e:
            raise self._fail(session, cycle, ErrorCategory.INVALID_URL, str(e), e)
        except MetadataTransportError as e:
            raise self._fail(session, cycle, ErrorCategory.NETWORK_ERROR, str(e), e)
        except UnexpectedResponseShapeError as e:
            raise self._fail(session, cycle, ErrorCategory.UNEXPECTED_RESPONSE, None, e)
        except Exception as e:
            logger.exception(f"Unexpected error during lookup {cycle.aggregate_id}")
            raise self._fail(session, cycle, ErrorCategory.SYSTEM_ERROR, None, e)

        if not session.complete(cycle):
            raise self._superseded(cycle)

        return LookupResponse(
            session_id=session.session_id,
            sequence=cycle.sequence,
            video_id=video_id,
            result=result,
        )

    def get_session_state(self, session_id: str) -> Dict[str, Any]:
        """
        Snapshot of a session for polling clients.

        Raises:
            ApplicationError: SESSION_NOT_FOUND for unknown ids
        """
        try:
            return self.sessions.get(session_id).snapshot()
        except SessionNotFoundError as e:
            raise ApplicationError(ErrorCategory.SESSION_NOT_FOUND, str(e))

    def _checkpoint(self, event, cycle: LookupCycle) -> None:
        """Publish a transition event; no event means the cycle was cancelled."""
        if event is None:
            raise LookupCancelledError(f"Lookup {cycle.aggregate_id} was superseded")
        self._publish(event)

    def _fail(
        self,
        session: LookupSession,
        cycle: LookupCycle,
        category: ErrorCategory,
        message: Optional[str],
        error: Exception,
    ) -> ApplicationError:
        app_error = ApplicationError(
            category,
            technical_message=str(error),
            context={"cycle": cycle.aggregate_id},
            message=message or None,
        )
        event = cycle.fail(category.value, app_error.message)
        session.complete(cycle)
        if event is None:
            return self._superseded(cycle)
        self._publish(event)
        return app_error

    def _superseded(self, cycle: LookupCycle) -> ApplicationError:
        return ApplicationError(
            ErrorCategory.SUPERSEDED,
            technical_message=f"Lookup {cycle.aggregate_id} was superseded",
            context={"cycle": cycle.aggregate_id},
        )

    def _publish(self, event) -> None:
        if self.event_publisher is not None:
            self.event_publisher.publish(event)
