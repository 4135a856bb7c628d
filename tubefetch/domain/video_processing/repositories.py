"""
Video Processing Repositories

Interface for the remote metadata service.
Concrete implementations are in the infrastructure layer.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from ..lookup.value_objects import CancellationToken
    from .value_objects import VideoId


class IMetadataClient(ABC):
    """
    Abstract interface for fetching raw download metadata for a video.

    Domain layer defines the contract, infrastructure provides the HTTP
    implementation. The returned value is the decoded JSON body, untouched;
    interpreting it is the FormatClassifier's job.
    """

    @abstractmethod
    def fetch(
        self,
        video_id: "VideoId",
        cancellation: Optional["CancellationToken"] = None,
    ) -> Any:
        """
        Fetch raw metadata for a video.

        Args:
            video_id: Resolved VideoId
            cancellation: Optional token; when set, the call is abandoned

        Returns:
            Decoded JSON body

        Raises:
            MetadataTransportError: If the request fails for any reason
            LookupCancelledError: If the cancellation token fired
        """
        pass  # pragma: no cover
