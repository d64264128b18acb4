"""API response schemas."""

from clipfolio.common.base_clipfolio_model import BaseClipfolioModel


class ErrorResponse(BaseClipfolioModel):
    """Body returned for failed requests."""

    error: str
    kind: str
    message: str


class FolderDeletedResponse(BaseClipfolioModel):
    """Response after deleting a folder."""

    folder_id: str
    detached_clip_ids: list[str]


class VideoDeletedResponse(BaseClipfolioModel):
    """Response after deleting a video."""

    video_id: str
    deleted_clip_ids: list[str]
