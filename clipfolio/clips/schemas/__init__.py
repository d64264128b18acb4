"""Clip schemas."""

from clipfolio.clips.schemas.aspect_ratio import DEFAULT_ASPECT_RATIO, AspectRatio
from clipfolio.clips.schemas.clip import Clip, ClipDraft, ClipPatch, NewClip
from clipfolio.clips.schemas.clip_range import (
    ClipRange,
    clamp_end,
    default_range,
    validate_range,
)
from clipfolio.clips.schemas.overlay import TextOverlay, TextOverlayPatch
from clipfolio.clips.schemas.subtitle import (
    SubtitleDesign,
    SubtitleFont,
    SubtitleSettings,
)

__all__ = [
    "DEFAULT_ASPECT_RATIO",
    "AspectRatio",
    "Clip",
    "ClipDraft",
    "ClipPatch",
    "ClipRange",
    "NewClip",
    "SubtitleDesign",
    "SubtitleFont",
    "SubtitleSettings",
    "TextOverlay",
    "TextOverlayPatch",
    "clamp_end",
    "default_range",
    "validate_range",
]
