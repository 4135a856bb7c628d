"""
RapidAPI Metadata Client Infrastructure Service

Infrastructure implementation of IMetadataClient using requests against the
ytstream download API on RapidAPI. Handles all HTTP specifics and error
translation to domain exceptions.
"""

import logging
from typing import Any, Callable, Dict, Optional

import requests

from ..domain.errors import LookupCancelledError, MetadataTransportError
from ..domain.lookup.value_objects import CancellationToken
from ..domain.video_processing.repositories import IMetadataClient
from ..domain.video_processing.value_objects import VideoId

logger = logging.getLogger(__name__)

GENERIC_TRANSPORT_MESSAGE = "An unexpected error occurred."


class RapidApiMetadataClient(IMetadataClient):
    """
    requests based implementation of the metadata client.

    One GET per call, no retry. Each call uses its own requests.Session so
    that a cancellation can close it without touching other lookups.
    """

    def __init__(
        self,
        api_url: str,
        api_key: str,
        api_host: str,
        timeout: Optional[float] = 30.0,
        session_factory: Callable[[], requests.Session] = requests.Session,
    ):
        """
        Initialize the client.

        Args:
            api_url: Full metadata endpoint URL
            api_key: Static RapidAPI key (x-rapidapi-key)
            api_host: RapidAPI host identifier (x-rapidapi-host)
            timeout: Request timeout in seconds, None for no timeout
            session_factory: Callable creating a requests.Session
        """
        self.api_url = api_url
        self.api_key = api_key
        self.api_host = api_host
        self.timeout = timeout
        self._session_factory = session_factory

    @property
    def headers(self) -> Dict[str, str]:
        return {
            "x-rapidapi-key": self.api_key,
            "x-rapidapi-host": self.api_host,
        }

    def fetch(
        self,
        video_id: VideoId,
        cancellation: Optional[CancellationToken] = None,
    ) -> Any:
        """
        Fetch raw metadata for a video.

        Args:
            video_id: Resolved VideoId
            cancellation: Optional token; firing it closes the HTTP session

        Returns:
            Decoded JSON body

        Raises:
            MetadataTransportError: If the request fails, returns a non-2xx
                status or a body that is not JSON
            LookupCancelledError: If the lookup was cancelled
        """
        self._raise_if_cancelled(cancellation, video_id)

        session = self._session_factory()
        if cancellation is not None:
            cancellation.on_cancel(session.close)

        logger.info(f"Requesting metadata for video {video_id}")
        try:
            response = session.get(
                self.api_url,
                params={"id": str(video_id)},
                headers=self.headers,
                timeout=self.timeout,
            )
        except requests.Timeout as e:
            self._raise_if_cancelled(cancellation, video_id, e)
            raise MetadataTransportError(
                f"Request timed out after {self.timeout} seconds",
                original_error=e,
            )
        except requests.ConnectionError as e:
            self._raise_if_cancelled(cancellation, video_id, e)
            raise MetadataTransportError("Network Error", original_error=e)
        except requests.RequestException as e:
            self._raise_if_cancelled(cancellation, video_id, e)
            raise MetadataTransportError(
                str(e) or GENERIC_TRANSPORT_MESSAGE, original_error=e
            )
        finally:
            session.close()

        self._raise_if_cancelled(cancellation, video_id)

        if not response.ok:
            message = (
                self._server_message(response)
                or f"Request failed with status code {response.status_code}"
            )
            logger.warning(
                f"Metadata API returned {response.status_code} for video {video_id}: {message}"
            )
            raise MetadataTransportError(message, status_code=response.status_code)

        try:
            return response.json()
        except ValueError as e:
            logger.warning(f"Metadata API returned malformed JSON for video {video_id}")
            raise MetadataTransportError(
                "The metadata service returned a malformed response.",
                original_error=e,
                status_code=response.status_code,
            )

    @staticmethod
    def _server_message(response: requests.Response) -> Optional[str]:
        """Extract the optional ``message`` field of an error body."""
        try:
            body = response.json()
        except ValueError:
            return None
        if isinstance(body, dict):
            message = body.get("message")
            if isinstance(message, str) and message.strip():
                return message.strip()
        return None

    @staticmethod
    def _raise_if_cancelled(
        cancellation: Optional[CancellationToken],
        video_id: VideoId,
        original_error: Optional[Exception] = None,
    ) -> None:
        if cancellation is not None and cancellation.cancelled:
            raise LookupCancelledError(
                f"Metadata request for video {video_id} was cancelled",
                original_error=original_error,
            )
