"""Clip creation and validation."""

import logging

from clipfolio.clips.schemas import ClipDraft, ClipPatch, NewClip, validate_range
from clipfolio.common.errors import DraftValidationError, ValidationErrorKind
from clipfolio.videos.schemas import Video

logger = logging.getLogger(__name__)


def check_title(title: str) -> str:
    """Return the trimmed title, rejecting blank ones."""
    trimmed = title.strip()
    if not trimmed:
        msg = "Please enter a clip title"
        raise DraftValidationError(ValidationErrorKind.MISSING_TITLE, msg)
    return trimmed


def create_clip(parent_video: Video, draft: ClipDraft) -> NewClip:
    """Validate a draft against its parent video and bind it to that video.

    Args:
        parent_video: The resolved video the clip is cut from.
        draft: The fields entered in the editor.

    Returns:
        An insertable clip. Identifier and timestamps are left to storage.

    Raises:
        DraftValidationError: ``MISSING_TITLE`` for a blank title, or a range
            error from ``validate_range``.
    """
    title = check_title(draft.title)
    try:
        validate_range(draft.start_time, draft.end_time, parent_video.duration)
    except DraftValidationError:
        logger.warning(
            "[video=%s] Rejected clip range %s-%s (duration %s)",
            parent_video.id,
            draft.start_time,
            draft.end_time,
            parent_video.duration,
        )
        raise

    return NewClip(
        **draft.model_dump(exclude={"title"}, by_alias=True),
        title=title,
        video_id=parent_video.id,
    )


def check_patch(patch: ClipPatch) -> ClipPatch:
    """Validate the clip-independent parts of a patch.

    Range bounds depend on each clip's video and are checked per clip by the
    organizer.

    Returns:
        The patch with its title trimmed, if it carries one.
    """
    if "title" not in patch.model_fields_set:
        return patch
    if patch.title is None:
        msg = "Clip title cannot be cleared"
        raise DraftValidationError(ValidationErrorKind.MISSING_TITLE, msg)
    return patch.model_copy(update={"title": check_title(patch.title)})
