"""MongoDB document schemas for Clipfolio entities."""

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic_mongo import PydanticObjectId

from clipfolio.clips.schemas import (
    DEFAULT_ASPECT_RATIO,
    AspectRatio,
    Clip,
    SubtitleSettings,
    TextOverlay,
)
from clipfolio.folders.schemas import Folder
from clipfolio.videos.schemas import SourceType, Video


class VideoDocument(BaseModel):
    """A parent video clips are cut from."""

    model_config = ConfigDict(populate_by_name=True)

    id: PydanticObjectId | None = Field(default=None, alias="_id")
    title: str
    source_type: SourceType
    source_url: str
    duration: int = 0

    # Timestamps
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    def to_video(self) -> Video:
        return Video.model_validate({**self.model_dump(exclude={"id"}), "id": str(self.id)})


class FolderDocument(BaseModel):
    """A named folder clips can be filed under."""

    model_config = ConfigDict(populate_by_name=True)

    id: PydanticObjectId | None = Field(default=None, alias="_id")
    name: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    def to_folder(self) -> Folder:
        return Folder(id=str(self.id), name=self.name, created_at=self.created_at)


class ClipDocument(BaseModel):
    """A clip cut from a video.

    ``video_id`` and ``folder_id`` hold the hex ids of the referenced
    documents. Referential rules (cascade on video delete, set null on folder
    delete) are applied by the gateway.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: PydanticObjectId | None = Field(default=None, alias="_id")
    video_id: str
    folder_id: str | None = None
    title: str

    # Range in seconds
    start_time: float = 0
    end_time: float = 0

    # Rendering directives
    aspect_ratio: AspectRatio = DEFAULT_ASPECT_RATIO
    subtitle_enabled: bool = True
    subtitle_settings: SubtitleSettings = Field(default_factory=SubtitleSettings)
    text_overlays: list[TextOverlay] = Field(default_factory=list)

    # Timestamps
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    def to_clip(self) -> Clip:
        return Clip.model_validate(
            {**self.model_dump(exclude={"id"}, by_alias=True), "id": str(self.id)}
        )
