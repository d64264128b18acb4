"""API request schemas."""

from pydantic import Field, model_validator

from clipfolio.clips.schemas import ClipDraft, ClipPatch
from clipfolio.common.base_clipfolio_model import BaseClipfolioModel
from clipfolio.videos.schemas import SourceType


class RegisterVideoRequest(BaseClipfolioModel):
    """Request to register an already resolved video."""

    source_type: SourceType
    source_url: str
    title: str | None = None
    filename: str = "Untitled video"
    duration: float = Field(default=0, ge=0)


class CreateFolderRequest(BaseClipfolioModel):
    """Request to create a folder."""

    name: str


class RenameFolderRequest(BaseClipfolioModel):
    """Request to rename a folder."""

    name: str


class CreateClipRequest(ClipDraft):
    """Request to create a clip from a video."""

    video_id: str


class MoveClipsRequest(BaseClipfolioModel):
    """Request to move clips into a folder, or out of any with null."""

    clip_ids: list[str] = Field(min_length=1)
    folder_id: str | None = None


class BatchUpdateRequest(BaseClipfolioModel):
    """Request to apply the same changes to several clips."""

    clip_ids: list[str] = Field(min_length=1)
    patch: ClipPatch

    @model_validator(mode="after")
    def validate_patch_not_empty(self) -> "BatchUpdateRequest":
        if self.patch.is_empty:
            msg = "patch must set at least one field"
            raise ValueError(msg)
        return self


class DeleteClipsRequest(BaseClipfolioModel):
    """Request to delete several clips."""

    clip_ids: list[str] = Field(min_length=1)
