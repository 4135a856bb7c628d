"""
Error Handling Module

Defines domain exceptions and error categories for the application.
Domain exceptions are pure and have no external dependencies.
Application exceptions carry the user-facing message for the API layer.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCategory(Enum):
    """Error category enumeration for structured error handling."""

    INVALID_URL = "invalid_url"
    NETWORK_ERROR = "network_error"
    UNEXPECTED_RESPONSE = "unexpected_response"
    SUPERSEDED = "superseded"
    SESSION_NOT_FOUND = "session_not_found"
    INVALID_REQUEST = "invalid_request"
    SYSTEM_ERROR = "system_error"


# User-friendly error messages with actionable guidance
ERROR_MESSAGES: Dict[ErrorCategory, Dict[str, str]] = {
    ErrorCategory.INVALID_URL: {
        "title": "Invalid YouTube URL",
        "message": "Could not extract a valid YouTube video ID from the URL.",
        "action": "Try copying the URL directly from YouTube.",
    },
    ErrorCategory.NETWORK_ERROR: {
        "title": "Metadata Service Unavailable",
        "message": "An unexpected error occurred.",
        "action": "Check your internet connection and try again.",
    },
    ErrorCategory.UNEXPECTED_RESPONSE: {
        "title": "Unexpected Response",
        "message": "Could not fetch video details. The API response was not in the expected format.",
        "action": "Try again later or try a different video.",
    },
    ErrorCategory.SUPERSEDED: {
        "title": "Lookup Superseded",
        "message": "A newer lookup was submitted before this one finished.",
        "action": "Use the result of the most recent lookup.",
    },
    ErrorCategory.SESSION_NOT_FOUND: {
        "title": "Session Not Found",
        "message": "The requested lookup session does not exist or has expired.",
        "action": "Submit a new lookup to start a session.",
    },
    ErrorCategory.INVALID_REQUEST: {
        "title": "Invalid Request",
        "message": "The request is missing required information or contains invalid data.",
        "action": "Please check your input and try again.",
    },
    ErrorCategory.SYSTEM_ERROR: {
        "title": "System Error",
        "message": "An unexpected error occurred while processing your request.",
        "action": "Please try again later. If the problem persists, contact support.",
    },
}


# ============================================================================
# Domain Exceptions (Pure - No External Dependencies)
# ============================================================================

class DomainError(Exception):
    """
    Root of the domain exception tree.

    ``original_error`` keeps the low-level cause (a requests exception, a
    JSON decode error) for logging; the message is what users may see.
    """

    def __init__(self, message: str, original_error: Exception = None):
        super().__init__(message)
        self.original_error = original_error


class InvalidUrlError(DomainError):
    """
    Raised when no recognizable 11-character video ID can be found in a URL.
    """

    def __init__(
        self,
        message: str = ERROR_MESSAGES[ErrorCategory.INVALID_URL]["message"],
        original_error: Exception = None,
    ):
        super().__init__(message, original_error)


class InvalidVideoIdError(DomainError):
    """Raised when a VideoId is constructed from a malformed string."""
    pass


class MetadataTransportError(DomainError):
    """
    Raised when the call to the metadata API fails.

    Covers DNS and connection failures, timeouts, non-2xx responses and
    bodies that are not valid JSON. The message is already suitable for
    display: the server-provided message when there is one, otherwise the
    transport's own description.
    """

    def __init__(
        self,
        message: str,
        original_error: Exception = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message, original_error)
        self.status_code = status_code


class UnexpectedResponseShapeError(DomainError):
    """
    Raised when the metadata API answered but the payload lacks a title.
    """

    def __init__(
        self,
        message: str = "unexpected response shape",
        original_error: Exception = None,
    ):
        super().__init__(message, original_error)


class LookupCancelledError(DomainError):
    """Raised when an in-flight lookup is abandoned for a newer submission."""
    pass


class LookupStateError(DomainError):
    """Raised on an invalid lookup cycle state transition."""
    pass


class SessionNotFoundError(DomainError):
    """Raised when a lookup session id is unknown."""
    pass


# ============================================================================
# Application Layer Exceptions
# ============================================================================

class ApplicationError(Exception):
    """
    Base application error with category and user-friendly messaging.

    Bridges domain errors with user-facing error messages and HTTP responses.
    The category table supplies title and action; ``message`` overrides the
    table's default message when the failure has a more specific one
    (for example, the message returned by the metadata service).
    """

    def __init__(
        self,
        category: ErrorCategory,
        technical_message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        message: Optional[str] = None,
    ):
        """
        Initialize application error.

        Args:
            category: Error category
            technical_message: Technical error details for logging
            context: Additional context information
            message: User-facing message overriding the category default
        """
        self.category = category
        self.technical_message = technical_message or ""
        self.context = context or {}

        error_info = ERROR_MESSAGES.get(
            category, ERROR_MESSAGES[ErrorCategory.SYSTEM_ERROR]
        )
        self.title = error_info["title"]
        self.message = message or error_info["message"]
        self.action = error_info["action"]

        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert error to dictionary for API response.

        Returns:
            Dictionary with error information
        """
        return {
            "error": self.category.value,
            "title": self.title,
            "message": self.message,
            "action": self.action,
        }


def create_error_response(
    category: ErrorCategory,
    technical_message: Optional[str] = None,
    context: Optional[Dict[str, Any]] = None,
    status_code: int = 400,
    message: Optional[str] = None,
) -> tuple[Dict[str, Any], int]:
    """
    Create a structured error response for API endpoints.

    Args:
        category: Error category
        technical_message: Technical error details for logging
        context: Additional context information
        status_code: HTTP status code
        message: User-facing message overriding the category default

    Returns:
        Tuple of (error_dict, status_code)
    """
    error = ApplicationError(category, technical_message, context, message)
    return error.to_dict(), status_code
