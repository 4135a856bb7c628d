"""
Logging Event Handler

Infrastructure event handler for logging domain events.
Domain layer remains unaware of logging infrastructure.
"""

import logging

from ...domain.events import (
    DomainEvent,
    LookupCompletedEvent,
    LookupFailedEvent,
    LookupStartedEvent,
    LookupSupersededEvent,
    VideoIdResolvedEvent,
)


class LoggingEventHandler:
    """
    Infrastructure event handler for logging domain events.
    """

    def __init__(self, logger: logging.Logger):
        """
        Initialize with logger instance.

        Args:
            logger: Python logging.Logger instance
        """
        self.logger = logger

    def handle(self, event: DomainEvent) -> None:
        """
        Handle domain event by logging it.

        Args:
            event: Domain event to log
        """
        try:
            if isinstance(event, LookupStartedEvent):
                self._handle_lookup_started(event)
            elif isinstance(event, VideoIdResolvedEvent):
                self._handle_video_id_resolved(event)
            elif isinstance(event, LookupCompletedEvent):
                self._handle_lookup_completed(event)
            elif isinstance(event, LookupFailedEvent):
                self._handle_lookup_failed(event)
            elif isinstance(event, LookupSupersededEvent):
                self._handle_lookup_superseded(event)
            else:
                self.logger.debug(
                    f"Unhandled event: {event.__class__.__name__} "
                    f"(aggregate_id={event.aggregate_id})"
                )
        except Exception as e:
            # Log handler errors but don't fail the operation
            self.logger.error(
                f"Error in logging event handler for {event.__class__.__name__}: {e}",
                exc_info=True,
            )

    def _handle_lookup_started(self, event: LookupStartedEvent) -> None:
        self.logger.info(f"Lookup started: cycle={event.aggregate_id}, url={event.url}")

    def _handle_video_id_resolved(self, event: VideoIdResolvedEvent) -> None:
        self.logger.debug(
            f"Video ID resolved: cycle={event.aggregate_id}, video_id={event.video_id}"
        )

    def _handle_lookup_completed(self, event: LookupCompletedEvent) -> None:
        self.logger.info(
            f"Lookup completed: cycle={event.aggregate_id}, "
            f"video_id={event.video_id}, title={event.title}, "
            f"video_formats={event.video_format_count}, "
            f"audio_formats={event.audio_format_count}"
        )

    def _handle_lookup_failed(self, event: LookupFailedEvent) -> None:
        self.logger.warning(
            f"Lookup failed: cycle={event.aggregate_id}, "
            f"error={event.error_message}, category={event.error_category}"
        )

    def _handle_lookup_superseded(self, event: LookupSupersededEvent) -> None:
        self.logger.info(
            f"Lookup superseded: cycle={event.aggregate_id}, "
            f"superseded_by={event.superseded_by}"
        )
