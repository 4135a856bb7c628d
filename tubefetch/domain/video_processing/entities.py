"""
Video Processing Entities

Typed views over the metadata API payload and the classified result
handed to the presentation layer.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .value_objects import FormatType


def _optional_str(data: Dict[str, Any], key: str) -> Optional[str]:
    """Read a string field; missing, null, empty or non-string is None."""
    value = data.get(key)
    if isinstance(value, str) and value:
        return value
    return None


def _string_or_none(data: Dict[str, Any], key: str) -> Optional[str]:
    """Read a string field as is, empty included; missing or non-string is None."""
    value = data.get(key)
    return value if isinstance(value, str) else None


def _object_list(value: Any) -> List[Dict[str, Any]]:
    """Keep only the JSON objects of a list; anything else is an empty list."""
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


@dataclass(frozen=True)
class StreamDescriptor:
    """
    One entry of ``formats`` or ``adaptiveFormats``.

    No field is guaranteed; absence is normal for streams that are
    irrelevant to a given list.
    """
    quality_label: Optional[str] = None
    audio_quality: Optional[str] = None
    mime_type: Optional[str] = None
    url: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StreamDescriptor":
        """Create StreamDescriptor from a decoded JSON object."""
        return cls(
            quality_label=_optional_str(data, "qualityLabel"),
            audio_quality=_string_or_none(data, "audioQuality"),
            mime_type=_optional_str(data, "mimeType"),
            url=_optional_str(data, "url"),
        )

    def is_video_option(self) -> bool:
        """Muxed stream with a human-readable quality label and a direct URL."""
        return bool(self.quality_label and self.url)

    def is_audio_option(self) -> bool:
        """Audio-only stream with a direct URL."""
        return bool(self.mime_type and "audio" in self.mime_type and self.url)


@dataclass(frozen=True)
class Thumbnail:
    """A thumbnail image entry."""
    url: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Thumbnail":
        return cls(url=_optional_str(data, "url"))


@dataclass(frozen=True)
class RawMetadata:
    """
    Entity representing the metadata API response.

    Every field is optional. Defaulting rules:
    - ``title`` is None when missing, null, empty or not a string
    - ``formats``, ``adaptiveFormats`` and ``thumbnail`` become empty tuples
      when missing or not lists
    - stream entries that are not objects are skipped; thumbnail entries that
      are not objects keep their position as thumbnails without a url
    """
    title: Optional[str] = None
    thumbnails: Tuple[Thumbnail, ...] = ()
    formats: Tuple[StreamDescriptor, ...] = ()
    adaptive_formats: Tuple[StreamDescriptor, ...] = ()

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "RawMetadata":
        """
        Build RawMetadata from the decoded JSON body.

        Args:
            payload: Decoded JSON object

        Returns:
            RawMetadata instance
        """
        return cls(
            title=_optional_str(payload, "title"),
            thumbnails=cls._thumbnails(payload.get("thumbnail")),
            formats=tuple(
                StreamDescriptor.from_dict(item)
                for item in _object_list(payload.get("formats"))
            ),
            adaptive_formats=tuple(
                StreamDescriptor.from_dict(item)
                for item in _object_list(payload.get("adaptiveFormats"))
            ),
        )

    @staticmethod
    def _thumbnails(value: Any) -> Tuple[Thumbnail, ...]:
        if not isinstance(value, list):
            return ()
        return tuple(
            Thumbnail.from_dict(item) if isinstance(item, dict) else Thumbnail()
            for item in value
        )

    def has_title(self) -> bool:
        return self.title is not None


@dataclass(frozen=True)
class DownloadOption:
    """
    A single presentable download option.

    ``label`` is the quality label for video, the audio quality for audio
    (which the API may omit).
    """
    label: Optional[str]
    url: str
    format_type: FormatType = FormatType.VIDEO

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {"label": self.label, "url": self.url}


@dataclass(frozen=True)
class ClassifiedResult:
    """
    Entity representing a classified lookup result.

    Option lists keep the order in which the API returned the streams.
    """
    title: str
    thumbnail_url: Optional[str] = None
    video_formats: Tuple[DownloadOption, ...] = field(default_factory=tuple)
    audio_formats: Tuple[DownloadOption, ...] = field(default_factory=tuple)

    def has_thumbnail(self) -> bool:
        return self.thumbnail_url is not None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "title": self.title,
            "thumbnail_url": self.thumbnail_url,
            "video_formats": [option.to_dict() for option in self.video_formats],
            "audio_formats": [option.to_dict() for option in self.audio_formats],
        }
