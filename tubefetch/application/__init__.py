"""
Application Layer

Use-case orchestration on top of the domain services.
"""

from .dependency_container import DependencyContainer, DependencyNotFoundError
from .event_publisher import EventPublisher
from .lookup_service import LookupResponse, LookupService

__all__ = [
    "DependencyContainer",
    "DependencyNotFoundError",
    "EventPublisher",
    "LookupResponse",
    "LookupService",
]
