"""MongoDB document schemas."""

from clipfolio.mongodb.schemas.documents import (
    ClipDocument,
    FolderDocument,
    VideoDocument,
)

__all__ = [
    "ClipDocument",
    "FolderDocument",
    "VideoDocument",
]
