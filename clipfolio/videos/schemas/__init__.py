"""Video schemas."""

from clipfolio.videos.schemas.video import SourceType, Video, VideoDraft

__all__ = [
    "SourceType",
    "Video",
    "VideoDraft",
]
