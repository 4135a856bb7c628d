"""
API v1 - TubeFetch REST API

This module contains the versioned API endpoints with OpenAPI/Swagger documentation.
"""

import os

from flask import Blueprint
from flask_restx import Api

# Get API version from environment
API_VERSION = os.getenv("API_VERSION", "v1")

# Create blueprint for API v1
api_v1_bp = Blueprint("api_v1", __name__, url_prefix=f"/api/{API_VERSION}")

# Initialize Flask-RESTX API with Swagger documentation
api = Api(
    api_v1_bp,
    version="1.0",
    title="TubeFetch API",
    description="Resolve YouTube links and list their video and audio-only download options",
    doc="/docs",  # Swagger UI will be available at /api/v1/docs
    contact="TubeFetch Team",
    license="MIT",
)

# Import namespaces after api is created to avoid circular imports
from .namespaces import session_ns, video_ns  # noqa: E402

# Register namespaces
api.add_namespace(video_ns, path="/videos")
api.add_namespace(session_ns, path="/sessions")
