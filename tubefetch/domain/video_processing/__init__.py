"""
Video Processing Domain

Handles YouTube URL resolution and classification of stream metadata.
"""

from ..errors import InvalidUrlError, InvalidVideoIdError, UnexpectedResponseShapeError
from .entities import (
    ClassifiedResult,
    DownloadOption,
    RawMetadata,
    StreamDescriptor,
    Thumbnail,
)
from .repositories import IMetadataClient
from .services import FormatClassifier, IdentifierResolver
from .value_objects import DEFAULT_URL_SHAPES, FormatType, UrlShape, VideoId

__all__ = [
    "ClassifiedResult",
    "DownloadOption",
    "RawMetadata",
    "StreamDescriptor",
    "Thumbnail",
    "IMetadataClient",
    "FormatClassifier",
    "IdentifierResolver",
    "DEFAULT_URL_SHAPES",
    "FormatType",
    "UrlShape",
    "VideoId",
    "InvalidUrlError",
    "InvalidVideoIdError",
    "UnexpectedResponseShapeError",
]
