"""
Infrastructure Layer

Concrete implementations of domain interfaces.
"""

from .event_handlers import LoggingEventHandler
from .rapidapi_metadata_client import RapidApiMetadataClient

__all__ = ["LoggingEventHandler", "RapidApiMetadataClient"]
