"""Turning user-supplied video sources into registrable drafts."""

import math
import re

from clipfolio.common.errors import DraftValidationError, ValidationErrorKind
from clipfolio.videos.schemas import SourceType, VideoDraft

DEFAULT_YOUTUBE_TITLE = "YouTube Video"

_YOUTUBE_ID_PATTERN = re.compile(
    r"(?:youtube\.com/(?:[^/]+/.+/|(?:v|e(?:mbed)?)/|.*[?&]v=)|youtu\.be/)([^\"&?/\s]{11})"
)


def extract_youtube_id(url: str) -> str | None:
    """Return the 11-character video id of a YouTube link, if it has one."""
    match = _YOUTUBE_ID_PATTERN.search(url)
    return match.group(1) if match else None


def youtube_video_draft(
    url: str,
    title: str | None = None,
    duration: int = 0,
) -> VideoDraft:
    """Build a draft for a YouTube link.

    Args:
        url: The link as entered by the user.
        title: Optional title. Defaults to "YouTube Video".
        duration: Length in seconds if resolved elsewhere, else 0.

    Raises:
        DraftValidationError: ``INVALID_SOURCE`` if no video id is found.
    """
    url = url.strip()
    if extract_youtube_id(url) is None:
        msg = f"Invalid YouTube URL: {url}"
        raise DraftValidationError(ValidationErrorKind.INVALID_SOURCE, msg)
    return VideoDraft(
        title=(title or "").strip() or DEFAULT_YOUTUBE_TITLE,
        source_type=SourceType.YOUTUBE,
        source_url=url,
        duration=duration,
    )


def upload_video_draft(
    source_url: str,
    filename: str,
    duration_seconds: float,
    title: str | None = None,
) -> VideoDraft:
    """Build a draft for an uploaded file.

    The probed duration is floored to whole seconds; the filename is used as
    the title when none is given.
    """
    if not source_url.strip():
        msg = "Uploaded video has no source location"
        raise DraftValidationError(ValidationErrorKind.INVALID_SOURCE, msg)
    return VideoDraft(
        title=(title or "").strip() or filename,
        source_type=SourceType.UPLOAD,
        source_url=source_url,
        duration=max(0, math.floor(duration_seconds)),
    )
