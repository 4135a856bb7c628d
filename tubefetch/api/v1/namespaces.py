"""
API Namespaces - Organized endpoint groups
"""

from flask import current_app, request
from flask_restx import Namespace, Resource

from ...application.lookup_service import LookupService
from ...config.settings import DEFAULT_THUMBNAIL_PLACEHOLDER_URL
from ...domain.errors import ApplicationError, ErrorCategory, create_error_response
from .models import (
    error_response,
    lookup_request,
    lookup_response,
    resolve_response,
    session_state_response,
    url_request,
)

# HTTP status per error category
STATUS_CODES = {
    ErrorCategory.INVALID_URL: 400,
    ErrorCategory.INVALID_REQUEST: 400,
    ErrorCategory.SESSION_NOT_FOUND: 404,
    ErrorCategory.SUPERSEDED: 409,
    ErrorCategory.NETWORK_ERROR: 502,
    ErrorCategory.UNEXPECTED_RESPONSE: 502,
    ErrorCategory.SYSTEM_ERROR: 500,
}


def _lookup_service() -> LookupService:
    return current_app.container.resolve(LookupService)


def _application_error_response(error: ApplicationError):
    status_code = STATUS_CODES.get(error.category, 500)
    if status_code >= 500:
        current_app.logger.error(
            f"{error.category.value}: {error.technical_message}"
        )
    else:
        current_app.logger.info(
            f"{error.category.value}: {error.technical_message}"
        )
    return error.to_dict(), status_code


def _unexpected_error_response(where: str, error: Exception):
    current_app.logger.exception(f"Unexpected error in {where}: {str(error)}")
    return create_error_response(
        ErrorCategory.SYSTEM_ERROR,
        f"Unexpected error: {str(error)}",
        status_code=500,
    )


def _request_url():
    data = request.get_json(silent=True) or {}
    url = data.get("url")
    if not isinstance(url, str):
        return data, ""
    return data, url.strip()


# =============================================================================
# Video Namespace - URL resolution and lookups
# =============================================================================

video_ns = Namespace("videos", description="Video lookup operations")


@video_ns.route("/lookup")
class VideoLookup(Resource):
    """Resolve a URL and list its download options"""

    @video_ns.doc("lookup_video")
    @video_ns.expect(lookup_request, validate=True)
    @video_ns.response(200, "Success", lookup_response)
    @video_ns.response(400, "Invalid URL", error_response)
    @video_ns.response(409, "Superseded by a newer lookup", error_response)
    @video_ns.response(502, "Metadata service failure", error_response)
    def post(self):
        """
        Look up download options for a YouTube video

        Resolves the URL to a video ID, fetches its metadata and returns
        the video and audio-only download options. Lookups sharing a
        session_id are sequenced: a newer lookup supersedes an older one
        still in flight.
        """
        data, url = _request_url()
        if not url:
            return create_error_response(
                ErrorCategory.INVALID_REQUEST, "Empty URL provided", status_code=400
            )

        session_id = data.get("session_id") or None

        try:
            response = _lookup_service().submit(url, session_id=session_id)
        except ApplicationError as e:
            return _application_error_response(e)
        except Exception as e:
            return _unexpected_error_response("/videos/lookup", e)

        body = response.to_dict()
        body["display_thumbnail_url"] = body["thumbnail_url"] or current_app.config.get(
            "THUMBNAIL_PLACEHOLDER_URL", DEFAULT_THUMBNAIL_PLACEHOLDER_URL
        )
        return body, 200


@video_ns.route("/resolve")
class VideoResolve(Resource):
    """Extract the video ID from a URL"""

    @video_ns.doc("resolve_video_id")
    @video_ns.expect(url_request, validate=True)
    @video_ns.response(200, "Success", resolve_response)
    @video_ns.response(400, "Invalid URL", error_response)
    def post(self):
        """
        Resolve a YouTube URL to its 11-character video ID

        Pure parsing; the metadata service is not contacted.
        """
        _, url = _request_url()
        if not url:
            return create_error_response(
                ErrorCategory.INVALID_REQUEST, "Empty URL provided", status_code=400
            )

        try:
            shape, video_id = _lookup_service().resolve_url(url)
        except ApplicationError as e:
            return _application_error_response(e)

        return {
            "video_id": str(video_id),
            "watch_url": video_id.watch_url(),
            "shape": shape,
        }, 200


# =============================================================================
# Session Namespace - Polling the current result slot
# =============================================================================

session_ns = Namespace("sessions", description="Lookup session state")


@session_ns.route("/<string:session_id>")
@session_ns.param("session_id", "The session identifier")
class SessionState(Resource):
    """Current state of a lookup session"""

    @session_ns.doc("get_session_state")
    @session_ns.response(200, "Success", session_state_response)
    @session_ns.response(404, "Session Not Found", error_response)
    def get(self, session_id):
        """
        Get the in-progress flag and current result of a session

        Poll this endpoint to drive a loading indicator while a lookup
        is in flight.
        """
        try:
            return _lookup_service().get_session_state(session_id), 200
        except ApplicationError as e:
            return _application_error_response(e)
        except Exception as e:
            return _unexpected_error_response("/sessions", e)
