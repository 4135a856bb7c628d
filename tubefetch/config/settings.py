"""
Application Configuration

Reads settings from environment variables.
"""

import os
from functools import lru_cache
from typing import List, Optional

DEFAULT_RAPIDAPI_HOST = "ytstream-download-youtube-videos.p.rapidapi.com"
DEFAULT_THUMBNAIL_PLACEHOLDER_URL = (
    "https://placehold.co/600x400/e2e8f0/4a5568?text=Thumbnail"
)


def _env_float(name: str, default: Optional[float]) -> Optional[float]:
    raw = os.getenv(name)
    if raw is None:
        return default
    raw = raw.strip()
    if not raw:
        return None
    value = float(raw)
    return value if value > 0 else None


class AppConfig:
    """Application configuration."""

    def __init__(self):
        self.api_version = os.getenv("API_VERSION", "v1")
        self.flask_env = os.getenv("FLASK_ENV", "development")
        self.is_production = self.flask_env == "production"
        self.log_level = os.getenv("LOG_LEVEL", "INFO").upper()

        # Metadata API (static credential supplied at startup)
        self.rapidapi_key = os.getenv("RAPIDAPI_KEY", "")
        self.rapidapi_host = os.getenv("RAPIDAPI_HOST", DEFAULT_RAPIDAPI_HOST)
        self.metadata_api_url = os.getenv(
            "METADATA_API_URL", f"https://{self.rapidapi_host}/dl"
        )
        # None disables the timeout
        self.metadata_api_timeout = _env_float("METADATA_API_TIMEOUT", 30.0)

        # Presentation
        self.thumbnail_placeholder_url = os.getenv(
            "THUMBNAIL_PLACEHOLDER_URL", DEFAULT_THUMBNAIL_PLACEHOLDER_URL
        )
        self.cors_origins = self._split(os.getenv("CORS_ORIGINS", "*"))

        # In-memory lookup sessions
        self.max_sessions = int(os.getenv("MAX_SESSIONS", "1000"))

    @property
    def has_api_key(self) -> bool:
        return bool(self.rapidapi_key)

    def validate(self) -> List[str]:
        """Check for missing required settings. Returns list of missing keys."""
        missing = []
        if not self.rapidapi_key:
            missing.append("RAPIDAPI_KEY")
        return missing

    @staticmethod
    def _split(value: str) -> List[str]:
        origins = [origin.strip() for origin in value.split(",") if origin.strip()]
        return origins or ["*"]


@lru_cache()
def get_config() -> AppConfig:
    """Get cached configuration instance."""
    return AppConfig()
