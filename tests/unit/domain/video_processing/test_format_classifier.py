"""
Unit tests for FormatClassifier.
"""

import copy

import pytest

from tubefetch.domain.errors import UnexpectedResponseShapeError
from tubefetch.domain.video_processing import (
    DownloadOption,
    FormatClassifier,
    FormatType,
    RawMetadata,
)

from tests.fixtures.domain_fixtures import (
    create_audio_stream,
    create_metadata_payload,
    create_video_stream,
)


class TestClassify:
    def test_canonical_payload(self, classifier):
        payload = {
            "title": "X",
            "formats": [{"qualityLabel": "720p", "url": "u1"}, {"url": "u2"}],
            "adaptiveFormats": [
                {"mimeType": "audio/webm", "url": "u3"},
                {"mimeType": "video/mp4", "url": "u4"},
            ],
        }

        result = classifier.classify(payload)

        assert result.title == "X"
        assert result.video_formats == (DownloadOption(label="720p", url="u1"),)
        assert result.audio_formats == (
            DownloadOption(label=None, url="u3", format_type=FormatType.AUDIO_ONLY),
        )
        assert result.to_dict()["audio_formats"] == [{"label": None, "url": "u3"}]

    def test_sample_payload(self, classifier, sample_payload):
        result = classifier.classify(sample_payload)

        assert result.title == "Rick Astley - Never Gonna Give You Up"
        assert result.thumbnail_url == "https://i.ytimg.com/vi/dQw4w9WgXcQ/default.jpg"
        assert [o.label for o in result.video_formats] == ["720p"]
        assert [o.label for o in result.audio_formats] == ["AUDIO_QUALITY_MEDIUM"]

    def test_accepts_raw_metadata(self, classifier, sample_payload):
        raw = RawMetadata.from_payload(sample_payload)
        assert classifier.classify(raw) == classifier.classify(sample_payload)


class TestTitle:
    @pytest.mark.parametrize("title", [None, "", 42])
    def test_missing_or_unusable_title_is_shape_error(self, classifier, title):
        payload = create_metadata_payload(title=None)
        if title is not None:
            payload["title"] = title
        with pytest.raises(UnexpectedResponseShapeError):
            classifier.classify(payload)

    def test_null_title_is_shape_error(self, classifier):
        payload = create_metadata_payload(title=None)
        payload["title"] = None
        with pytest.raises(UnexpectedResponseShapeError):
            classifier.classify(payload)

    @pytest.mark.parametrize("payload", [None, [], "text", 3])
    def test_non_object_payload_is_shape_error(self, classifier, payload):
        with pytest.raises(UnexpectedResponseShapeError):
            classifier.classify(payload)


class TestLists:
    def test_missing_lists_are_empty(self, classifier):
        result = classifier.classify({"title": "Only a title"})

        assert result.title == "Only a title"
        assert result.thumbnail_url is None
        assert result.video_formats == ()
        assert result.audio_formats == ()

    def test_non_list_fields_are_empty(self, classifier):
        result = classifier.classify({
            "title": "T",
            "formats": {"qualityLabel": "720p"},
            "adaptiveFormats": "nope",
            "thumbnail": None,
        })
        assert result.video_formats == ()
        assert result.audio_formats == ()
        assert not result.has_thumbnail()

    def test_non_object_entries_are_skipped(self, classifier):
        payload = create_metadata_payload(
            formats=[None, "x", create_video_stream(quality_label="1080p")],
        )
        result = classifier.classify(payload)
        assert [o.label for o in result.video_formats] == ["1080p"]


class TestVideoRule:
    def test_requires_quality_label_and_url(self, classifier):
        payload = create_metadata_payload(formats=[
            create_video_stream(quality_label="360p", url="a"),
            create_video_stream(quality_label=None, url="b"),
            create_video_stream(quality_label="480p", url=None),
            create_video_stream(quality_label="", url="c"),
            create_video_stream(quality_label="720p", url=""),
        ])
        result = classifier.classify(payload)
        assert result.video_formats == (DownloadOption(label="360p", url="a"),)

    def test_adaptive_formats_never_produce_video_options(self, classifier):
        payload = create_metadata_payload(
            formats=[],
            adaptive_formats=[{"qualityLabel": "1080p", "mimeType": "video/mp4", "url": "v"}],
        )
        assert classifier.classify(payload).video_formats == ()

    def test_order_and_duplicates_are_kept(self, classifier):
        payload = create_metadata_payload(formats=[
            create_video_stream(quality_label="720p", url="a"),
            create_video_stream(quality_label="360p", url="b"),
            create_video_stream(quality_label="720p", url="c"),
        ])
        result = classifier.classify(payload)
        assert [(o.label, o.url) for o in result.video_formats] == [
            ("720p", "a"), ("360p", "b"), ("720p", "c"),
        ]


class TestAudioRule:
    def test_requires_audio_mime_type_and_url(self, classifier):
        payload = create_metadata_payload(adaptive_formats=[
            create_audio_stream(mime_type="audio/webm; codecs=\"opus\"", url="a"),
            create_audio_stream(mime_type="video/webm", url="b"),
            create_audio_stream(mime_type=None, url="c"),
            create_audio_stream(mime_type="audio/mp4", url=None),
        ])
        result = classifier.classify(payload)
        assert [o.url for o in result.audio_formats] == ["a"]
        assert all(o.format_type == FormatType.AUDIO_ONLY for o in result.audio_formats)

    def test_mime_type_check_is_case_sensitive(self, classifier):
        payload = create_metadata_payload(adaptive_formats=[
            create_audio_stream(mime_type="AUDIO/MP4", url="a"),
        ])
        assert classifier.classify(payload).audio_formats == ()

    def test_formats_list_never_produces_audio_options(self, classifier):
        payload = create_metadata_payload(
            formats=[{"mimeType": "audio/mp4", "url": "x"}],
            adaptive_formats=[],
        )
        assert classifier.classify(payload).audio_formats == ()

    def test_missing_audio_quality_label_is_none(self, classifier):
        payload = create_metadata_payload(adaptive_formats=[
            create_audio_stream(audio_quality=None, url="a"),
        ])
        assert classifier.classify(payload).audio_formats[0].label is None

    def test_empty_audio_quality_label_is_kept(self, classifier):
        payload = create_metadata_payload(adaptive_formats=[
            create_audio_stream(audio_quality="", url="a"),
        ])
        assert classifier.classify(payload).audio_formats[0].label == ""


class TestThumbnail:
    def test_first_thumbnail_is_used(self, classifier):
        payload = create_metadata_payload(thumbnails=[
            {"url": "first.jpg"}, {"url": "second.jpg"},
        ])
        assert classifier.classify(payload).thumbnail_url == "first.jpg"

    def test_first_thumbnail_without_url(self, classifier):
        payload = create_metadata_payload(thumbnails=[{"width": 120}, {"url": "second.jpg"}])
        assert classifier.classify(payload).thumbnail_url is None

    @pytest.mark.parametrize("first", [None, "first.jpg", 3, ["first.jpg"]])
    def test_first_entry_that_is_not_an_object_has_no_url(self, classifier, first):
        payload = {"title": "T", "thumbnail": [first, {"url": "second.jpg"}]}
        assert classifier.classify(payload).thumbnail_url is None


class TestPurity:
    def test_input_is_not_mutated(self, classifier, sample_payload):
        before = copy.deepcopy(sample_payload)
        classifier.classify(sample_payload)
        assert sample_payload == before

    def test_idempotent(self, classifier, sample_payload):
        assert classifier.classify(sample_payload) == classifier.classify(sample_payload)

    def test_static_helpers(self, sample_payload):
        raw = FormatClassifier.to_raw_metadata(sample_payload)
        assert FormatClassifier.to_raw_metadata(raw) is raw
        assert len(FormatClassifier.video_options(raw)) == 1
        assert len(FormatClassifier.audio_options(raw)) == 1
