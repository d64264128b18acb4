"""Clip schemas: editable draft fields, insert payload, stored record, patch."""

from datetime import datetime
from typing import Any

from pydantic import ConfigDict, Field

from clipfolio.clips.schemas.aspect_ratio import DEFAULT_ASPECT_RATIO, AspectRatio
from clipfolio.clips.schemas.clip_range import ClipRange
from clipfolio.clips.schemas.overlay import TextOverlay
from clipfolio.clips.schemas.subtitle import SubtitleSettings
from clipfolio.common.base_clipfolio_model import BaseClipfolioModel


class ClipDraft(BaseClipfolioModel):
    """Fields a user fills in while composing a clip."""

    title: str
    start_time: float
    end_time: float
    aspect_ratio: AspectRatio = DEFAULT_ASPECT_RATIO
    subtitle_enabled: bool = True
    subtitle_settings: SubtitleSettings = Field(default_factory=SubtitleSettings)
    text_overlays: list[TextOverlay] = Field(default_factory=list)
    folder_id: str | None = None

    @property
    def range(self) -> ClipRange:
        """Return the clip's time range."""
        return ClipRange(start_time=self.start_time, end_time=self.end_time)


class NewClip(ClipDraft):
    """A validated clip bound to its parent video, ready to be inserted.

    Storage assigns ``id``, ``created_at`` and ``updated_at`` on insert.
    """

    video_id: str


class Clip(NewClip):
    """A stored clip record."""

    id: str
    created_at: datetime
    updated_at: datetime

    def apply(self, patch: "ClipPatch", updated_at: datetime) -> "Clip":
        """Return a copy with the patch's set fields merged in."""
        return self.model_copy(update={**patch.changes(), "updated_at": updated_at})

    def detached(self) -> "Clip":
        """Return a copy with no folder assignment."""
        return self.model_copy(update={"folder_id": None})


class ClipPatch(BaseClipfolioModel):
    """Partial update for one or more clips.

    A field counts as present only when it was explicitly set, so
    ``ClipPatch(folder_id=None)`` unassigns while ``ClipPatch()`` changes
    nothing. The parent video cannot be patched.
    """

    model_config = ConfigDict(extra="forbid")

    folder_id: str | None = None
    title: str | None = None
    start_time: float | None = None
    end_time: float | None = None
    aspect_ratio: AspectRatio | None = None
    subtitle_enabled: bool | None = None
    subtitle_settings: SubtitleSettings | None = None
    text_overlays: list[TextOverlay] | None = None

    @property
    def is_empty(self) -> bool:
        """Return whether no field is present."""
        return not self.model_fields_set

    @property
    def moves_folder(self) -> bool:
        """Return whether the patch (re)assigns the folder."""
        return "folder_id" in self.model_fields_set

    @property
    def touches_range(self) -> bool:
        """Return whether either range bound is present."""
        return bool({"start_time", "end_time"} & self.model_fields_set)

    def changes(self) -> dict[str, Any]:
        """Return the present fields keyed by field name."""
        return {name: getattr(self, name) for name in self.model_fields_set}

    def to_record(self) -> dict[str, Any]:
        """Return the present fields in their persisted JSON shape."""
        dumped = self.model_dump(mode="json", by_alias=True)
        return {name: dumped[name] for name in self.model_fields_set}

    def range_for(self, clip: ClipDraft) -> ClipRange:
        """Return the range ``clip`` would have after this patch."""
        start = self.start_time if "start_time" in self.model_fields_set else clip.start_time
        end = self.end_time if "end_time" in self.model_fields_set else clip.end_time
        return ClipRange(start_time=start, end_time=end)
