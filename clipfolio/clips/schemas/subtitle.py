"""Subtitle style schemas."""

from enum import StrEnum, auto

from pydantic import Field

from clipfolio.common.base_clipfolio_model import BaseClipfolioModel


class SubtitleFont(StrEnum):
    """Fonts available for burned-in subtitles."""

    ARIAL = "Arial"
    HELVETICA = "Helvetica"
    TIMES_NEW_ROMAN = "Times New Roman"
    COURIER = "Courier"
    VERDANA = "Verdana"
    GEORGIA = "Georgia"
    COMIC_SANS_MS = "Comic Sans MS"


class SubtitleDesign(StrEnum):
    """Visual treatment applied to subtitle text."""

    DEFAULT = auto()
    BOLD = auto()
    OUTLINE = auto()
    SHADOW = auto()
    BOX = auto()


class SubtitleSettings(BaseClipfolioModel):
    """Subtitle configuration stored on a clip.

    Kept even while subtitles are disabled on the clip, so re-enabling them
    restores the previous look.
    """

    font: SubtitleFont = SubtitleFont.ARIAL
    design: SubtitleDesign = SubtitleDesign.DEFAULT

    # Opaque markers, passed through unchanged
    highlights: list[str] = Field(default_factory=list)
