"""Tests for video source parsing."""

import pytest

from clipfolio.common.errors import DraftValidationError, ValidationErrorKind
from clipfolio.videos.schemas import SourceType
from clipfolio.videos.sources import extract_youtube_id, upload_video_draft, youtube_video_draft


class TestExtractYoutubeId:
    @pytest.mark.parametrize(
        "url",
        [
            "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
            "https://youtube.com/watch?feature=share&v=dQw4w9WgXcQ",
            "https://youtu.be/dQw4w9WgXcQ",
            "https://www.youtube.com/embed/dQw4w9WgXcQ",
            "https://www.youtube.com/v/dQw4w9WgXcQ",
        ],
    )
    def test_extracts_id(self, url):
        assert extract_youtube_id(url) == "dQw4w9WgXcQ"

    @pytest.mark.parametrize("url", ["https://vimeo.com/123456", "not a url", "https://youtu.be/short"])
    def test_rejects_non_youtube(self, url):
        assert extract_youtube_id(url) is None


class TestYoutubeVideoDraft:
    def test_defaults(self):
        draft = youtube_video_draft("https://youtu.be/dQw4w9WgXcQ")
        assert draft.title == "YouTube Video"
        assert draft.source_type == SourceType.YOUTUBE
        assert draft.duration == 0

    def test_keeps_title(self):
        draft = youtube_video_draft("https://youtu.be/dQw4w9WgXcQ", title="Talk")
        assert draft.title == "Talk"

    def test_invalid_url(self):
        with pytest.raises(DraftValidationError) as exc_info:
            youtube_video_draft("https://example.com/video")
        assert exc_info.value.kind == ValidationErrorKind.INVALID_SOURCE


class TestUploadVideoDraft:
    def test_floors_duration_and_uses_filename(self):
        draft = upload_video_draft("blob:abc", "holiday.mp4", 125.8)
        assert draft.duration == 125
        assert draft.title == "holiday.mp4"
        assert draft.source_type == SourceType.UPLOAD

    def test_title_overrides_filename(self):
        draft = upload_video_draft("blob:abc", "holiday.mp4", 10, title="Beach")
        assert draft.title == "Beach"

    def test_requires_source(self):
        with pytest.raises(DraftValidationError):
            upload_video_draft(" ", "holiday.mp4", 10)
