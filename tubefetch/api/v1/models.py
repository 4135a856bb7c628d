"""
API Models for request/response validation and Swagger documentation
"""

from flask_restx import fields

from . import api

# =============================================================================
# Request Models
# =============================================================================

url_request = api.model(
    "UrlRequest",
    {
        "url": fields.String(
            required=True,
            description="YouTube video URL",
            example="https://www.youtube.com/watch?v=dQw4w9WgXcQ",
        )
    },
)

lookup_request = api.model(
    "LookupRequest",
    {
        "url": fields.String(
            required=True,
            description="YouTube video URL",
            example="https://youtu.be/dQw4w9WgXcQ?t=30",
        ),
        "session_id": fields.String(
            required=False,
            description="Client session; omit to start a new one",
            example="3f2c7a9e-4b1d-4c55-9d6e-0a1b2c3d4e5f",
        ),
    },
)

# =============================================================================
# Response Models
# =============================================================================

download_option = api.model(
    "DownloadOption",
    {
        "label": fields.String(
            description="Quality label (video) or audio quality (audio)",
            allow_null=True,
        ),
        "url": fields.String(description="Direct stream URL"),
    },
)

lookup_response = api.model(
    "LookupResponse",
    {
        "session_id": fields.String(description="Client session identifier"),
        "sequence": fields.Integer(description="Sequence number of this submission"),
        "video_id": fields.String(description="11-character YouTube video ID"),
        "title": fields.String(description="Video title"),
        "thumbnail_url": fields.String(
            description="Thumbnail URL from the metadata service", allow_null=True
        ),
        "display_thumbnail_url": fields.String(
            description="Thumbnail URL, or a placeholder when there is none"
        ),
        "video_formats": fields.List(
            fields.Nested(download_option), description="Video download options"
        ),
        "audio_formats": fields.List(
            fields.Nested(download_option), description="Audio-only download options"
        ),
    },
)

resolve_response = api.model(
    "ResolveResponse",
    {
        "video_id": fields.String(description="11-character YouTube video ID"),
        "watch_url": fields.String(description="Canonical watch URL"),
        "shape": fields.String(description="Recognized URL shape"),
    },
)

session_error = api.model(
    "SessionError",
    {
        "category": fields.String(description="Error category"),
        "message": fields.String(description="User-facing error message"),
    },
)

session_state_response = api.model(
    "SessionStateResponse",
    {
        "session_id": fields.String(description="Client session identifier"),
        "in_progress": fields.Boolean(description="True while a lookup is in flight"),
        "state": fields.String(
            description="Lookup state",
            enum=["idle", "resolving", "fetching", "done"],
        ),
        "sequence": fields.Integer(description="Latest submission sequence number"),
        "current_sequence": fields.Integer(
            description="Sequence number of the result on display", allow_null=True
        ),
        "video_id": fields.String(allow_null=True),
        "result": fields.Raw(description="Classified result", allow_null=True),
        "error": fields.Nested(session_error, allow_null=True),
    },
)

error_response = api.model(
    "ErrorResponse",
    {
        "error": fields.String(description="Error category"),
        "title": fields.String(description="Error title"),
        "message": fields.String(description="User-facing error message"),
        "action": fields.String(description="Suggested action"),
    },
)
