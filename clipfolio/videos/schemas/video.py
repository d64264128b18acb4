"""Video schemas."""

from datetime import datetime
from enum import StrEnum, auto

from pydantic import Field

from clipfolio.common.base_clipfolio_model import BaseClipfolioModel


class SourceType(StrEnum):
    """Where a video's media comes from."""

    UPLOAD = auto()
    YOUTUBE = auto()


class VideoDraft(BaseClipfolioModel):
    """A resolved video ready to be registered.

    ``duration`` is in whole seconds; ``0`` means unknown (e.g. a YouTube
    link whose length was not resolved).
    """

    title: str
    source_type: SourceType
    source_url: str
    duration: int = Field(default=0, ge=0)


class Video(VideoDraft):
    """A stored video record."""

    id: str
    created_at: datetime
    updated_at: datetime

    @property
    def has_known_duration(self) -> bool:
        """Return whether the duration was resolved."""
        return self.duration > 0
