"""
Video Processing Value Objects

Immutable value objects for type safety and validation.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Pattern

from ..errors import InvalidVideoIdError

VIDEO_ID_PATTERN = r"[a-zA-Z0-9_-]{11}"

_VIDEO_ID_RE = re.compile(rf"^{VIDEO_ID_PATTERN}$")

# Optional scheme and www. in front of every recognized host
_PREFIX = r"(?:https?://)?(?:www\.)?"


class FormatType(Enum):
    """Kinds of download options presented to the user."""
    VIDEO = "video"
    AUDIO_ONLY = "audio_only"


@dataclass(frozen=True)
class VideoId:
    """
    Value object representing a canonical 11-character YouTube video ID.

    Letters, digits, hyphen and underscore only.
    """
    value: str

    def __post_init__(self):
        if not isinstance(self.value, str) or not _VIDEO_ID_RE.match(self.value):
            raise InvalidVideoIdError(f"Invalid video ID: {self.value!r}")

    @classmethod
    def is_valid(cls, value: str) -> bool:
        """Check if a string is a well-formed video ID."""
        return isinstance(value, str) and bool(_VIDEO_ID_RE.match(value))

    def watch_url(self) -> str:
        """Build the standard watch URL for this video."""
        return f"https://www.youtube.com/watch?v={self.value}"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class UrlShape:
    """
    A recognized URL shape: a marker pattern followed by the 11-char ID.

    ``marker`` is the regex for everything that must precede the ID.
    """
    name: str
    marker: str
    _compiled: Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        compiled = re.compile(
            rf"{_PREFIX}{self.marker}(?P<video_id>{VIDEO_ID_PATTERN})",
            re.IGNORECASE,
        )
        object.__setattr__(self, "_compiled", compiled)

    def search(self, url: str) -> Optional[re.Match]:
        """Return the leftmost match of this shape in ``url``, if any."""
        return self._compiled.search(url)


# Order matters only for ties (two shapes matching at the same position).
DEFAULT_URL_SHAPES = (
    UrlShape("watch", r"youtube\.com/\S*?[?&]v="),
    UrlShape("short_link", r"youtu\.be/"),
    UrlShape("embed", r"youtube\.com/(?:embed|e)/"),
    UrlShape("legacy_v", r"youtube\.com/v/"),
    UrlShape("shorts", r"youtube\.com/shorts/"),
    UrlShape("live", r"youtube\.com/live/"),
    UrlShape("nested_path", r"youtube\.com/[^/\s]+/\S+/"),
)
