"""Organizer schemas."""

from clipfolio.organizer.schemas.batch_result import BatchResult, FailureReason
from clipfolio.organizer.schemas.partition import FolderGroup, Partition
from clipfolio.organizer.schemas.playback import PlaybackTarget

__all__ = [
    "BatchResult",
    "FailureReason",
    "FolderGroup",
    "Partition",
    "PlaybackTarget",
]
