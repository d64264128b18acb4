"""API schemas for requests and responses."""

from clipfolio.api.schemas.requests import (
    BatchUpdateRequest,
    CreateClipRequest,
    CreateFolderRequest,
    DeleteClipsRequest,
    MoveClipsRequest,
    RegisterVideoRequest,
    RenameFolderRequest,
)
from clipfolio.api.schemas.responses import (
    ErrorResponse,
    FolderDeletedResponse,
    VideoDeletedResponse,
)

__all__ = [
    "BatchUpdateRequest",
    "CreateClipRequest",
    "CreateFolderRequest",
    "DeleteClipsRequest",
    "ErrorResponse",
    "FolderDeletedResponse",
    "MoveClipsRequest",
    "RegisterVideoRequest",
    "RenameFolderRequest",
    "VideoDeletedResponse",
]
