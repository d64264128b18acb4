"""MongoDB repositories for Clipfolio entities."""

from clipfolio.mongodb.repositories.clip_repository import ClipRepository
from clipfolio.mongodb.repositories.folder_repository import FolderRepository
from clipfolio.mongodb.repositories.video_repository import VideoRepository

__all__ = [
    "ClipRepository",
    "FolderRepository",
    "VideoRepository",
]
