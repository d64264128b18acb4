"""Clip time range schema and validation."""

from clipfolio.common.base_clipfolio_model import BaseClipfolioModel
from clipfolio.common.errors import DraftValidationError, ValidationErrorKind
from clipfolio.common.time_format import format_duration, format_timestamp

# Initial length offered by the editor for a new clip
DEFAULT_CLIP_LENGTH_SECONDS = 30


def validate_range(start: float, end: float, parent_duration: float) -> None:
    """Check that ``[start, end)`` fits inside the parent video.

    A ``parent_duration`` of ``0`` means the duration is unknown, in which case
    only ordering and non-negativity are enforced.

    Args:
        start: Range start in seconds.
        end: Range end in seconds.
        parent_duration: Duration of the parent video in seconds.

    Raises:
        DraftValidationError: ``INVERTED_RANGE`` when ``start >= end``,
            ``OUT_OF_BOUNDS`` when the range leaves ``[0, parent_duration]``.
    """
    if start >= end:
        msg = f"Start time {start} must be before end time {end}"
        raise DraftValidationError(ValidationErrorKind.INVERTED_RANGE, msg)
    if start < 0:
        msg = f"Start time {start} must not be negative"
        raise DraftValidationError(ValidationErrorKind.OUT_OF_BOUNDS, msg)
    if parent_duration > 0 and end > parent_duration:
        msg = f"End time {end} exceeds video duration {parent_duration}"
        raise DraftValidationError(ValidationErrorKind.OUT_OF_BOUNDS, msg)


def clamp_end(proposed_end: float, parent_duration: float) -> float:
    """Cap a proposed end time at the parent duration when it is known."""
    if parent_duration > 0:
        return min(proposed_end, parent_duration)
    return proposed_end


class ClipRange(BaseClipfolioModel):
    """The ``[start_time, end_time)`` interval a clip occupies, in seconds.

    Construction does not validate bounds; call ``validate_against`` with the
    parent duration before persisting.
    """

    start_time: float
    end_time: float

    @property
    def length(self) -> float:
        """Return the range length in seconds."""
        return self.end_time - self.start_time

    @property
    def label(self) -> str:
        """Return a ``M:SS - M:SS`` display label."""
        return f"{format_timestamp(self.start_time)} - {format_timestamp(self.end_time)}"

    @property
    def duration_label(self) -> str:
        """Return the range length as ``M:SS``."""
        return format_duration(self.start_time, self.end_time)

    def validate_against(self, parent_duration: float) -> "ClipRange":
        """Validate this range against a parent duration and return it."""
        validate_range(self.start_time, self.end_time, parent_duration)
        return self

    def with_end(self, proposed_end: float, parent_duration: float) -> "ClipRange":
        """Return a copy with a new end, clamped to the parent duration."""
        return ClipRange(
            start_time=self.start_time,
            end_time=clamp_end(proposed_end, parent_duration),
        )


def default_range(parent_duration: float) -> ClipRange:
    """Return the range a fresh clip editor starts with."""
    end = clamp_end(DEFAULT_CLIP_LENGTH_SECONDS, parent_duration)
    return ClipRange(start_time=0, end_time=end)
