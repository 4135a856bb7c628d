"""
Video Processing Services

Domain services for turning a pasted URL into a video ID and a raw
metadata payload into presentable download options.
"""

from typing import Any, Iterable, List, Optional, Tuple, Union

from ..errors import InvalidUrlError, UnexpectedResponseShapeError
from .entities import ClassifiedResult, DownloadOption, RawMetadata
from .value_objects import DEFAULT_URL_SHAPES, FormatType, UrlShape, VideoId


class IdentifierResolver:
    """
    Domain service resolving free-form URLs to a canonical VideoId.

    Holds an ordered list of URL shapes. Every shape is searched; the
    match whose ID starts earliest in the string wins, and shapes earlier
    in the list win ties.
    """

    def __init__(self, shapes: Iterable[UrlShape] = DEFAULT_URL_SHAPES):
        self.shapes: Tuple[UrlShape, ...] = tuple(shapes)

    def shape_names(self) -> List[str]:
        """Names of the recognized shapes, in priority order."""
        return [shape.name for shape in self.shapes]

    def match(self, url: Any) -> Optional[Tuple[UrlShape, VideoId]]:
        """
        Find the leftmost recognized shape in ``url``.

        Args:
            url: Any value; non-strings never match

        Returns:
            (shape, video_id) tuple, or None when nothing matches
        """
        if not isinstance(url, str) or not url:
            return None

        best = None
        for shape in self.shapes:
            found = shape.search(url)
            if found is None:
                continue
            position = found.start("video_id")
            if best is None or position < best[0]:
                best = (position, shape, found.group("video_id"))

        if best is None:
            return None

        _, shape, token = best
        return shape, VideoId(token)

    def find_video_id(self, url: Any) -> Optional[VideoId]:
        """
        Extract the video ID, or None. Never raises for malformed input.
        """
        matched = self.match(url)
        return matched[1] if matched else None

    def resolve(self, url: Any) -> VideoId:
        """
        Extract the video ID from a YouTube URL.

        Args:
            url: User-supplied URL string

        Returns:
            VideoId value object

        Raises:
            InvalidUrlError: If no recognized URL shape is present
        """
        video_id = self.find_video_id(url)
        if video_id is None:
            raise InvalidUrlError()
        return video_id


class FormatClassifier:
    """
    Domain service partitioning raw stream lists into download options.

    Pure projection: the input is never mutated, order is preserved and
    duplicate labels are kept as distinct options.
    """

    def classify(self, raw: Union[RawMetadata, Any]) -> ClassifiedResult:
        """
        Classify a metadata payload.

        Args:
            raw: RawMetadata, or the decoded JSON body of the metadata API

        Returns:
            ClassifiedResult with video and audio-only options

        Raises:
            UnexpectedResponseShapeError: If the payload is not an object
                or has no title
        """
        metadata = self.to_raw_metadata(raw)

        if not metadata.has_title():
            raise UnexpectedResponseShapeError()

        thumbnail_url = metadata.thumbnails[0].url if metadata.thumbnails else None

        return ClassifiedResult(
            title=metadata.title,
            thumbnail_url=thumbnail_url,
            video_formats=self.video_options(metadata),
            audio_formats=self.audio_options(metadata),
        )

    @staticmethod
    def to_raw_metadata(raw: Union[RawMetadata, Any]) -> RawMetadata:
        """Normalize a decoded payload into RawMetadata."""
        if isinstance(raw, RawMetadata):
            return raw
        if not isinstance(raw, dict):
            raise UnexpectedResponseShapeError()
        return RawMetadata.from_payload(raw)

    @staticmethod
    def video_options(metadata: RawMetadata) -> Tuple[DownloadOption, ...]:
        """Streams from ``formats`` carrying a quality label and a URL."""
        return tuple(
            DownloadOption(label=stream.quality_label, url=stream.url)
            for stream in metadata.formats
            if stream.is_video_option()
        )

    @staticmethod
    def audio_options(metadata: RawMetadata) -> Tuple[DownloadOption, ...]:
        """Streams from ``adaptiveFormats`` with an audio MIME type and a URL."""
        return tuple(
            DownloadOption(
                label=stream.audio_quality,
                url=stream.url,
                format_type=FormatType.AUDIO_ONLY,
            )
            for stream in metadata.adaptive_formats
            if stream.is_audio_option()
        )
