"""Playback target schema."""

from clipfolio.common.base_clipfolio_model import BaseClipfolioModel
from clipfolio.videos.schemas import Video


class PlaybackTarget(BaseClipfolioModel):
    """Where the player should jump to when a draft is opened."""

    clip_id: str
    video: Video
    start_time: float
    end_time: float
