"""Persistence gateway interface consumed by the organizer."""

from typing import Protocol

from clipfolio.clips.schemas import Clip, ClipPatch, NewClip
from clipfolio.folders.schemas import Folder
from clipfolio.organizer.schemas import BatchResult
from clipfolio.videos.schemas import Video, VideoDraft


class PersistenceGateway(Protocol):
    """The only component allowed to talk to durable storage.

    Lists are ordered newest first. Single-record operations raise
    ``NotFoundError`` for missing records; storage failures raise
    ``GatewayError``. Batch operations report per-id failures in the returned
    ``BatchResult`` instead of raising. ``update_clips_batch`` sets
    ``BatchResult.updated_at`` to the timestamp it wrote on the updated clips.
    """

    async def list_videos(self) -> list[Video]: ...
    async def insert_video(self, draft: VideoDraft) -> Video: ...
    async def delete_video(self, video_id: str) -> None: ...

    async def list_folders(self) -> list[Folder]: ...
    async def insert_folder(self, name: str) -> Folder: ...
    async def update_folder(self, folder_id: str, name: str) -> Folder: ...
    async def delete_folder(self, folder_id: str) -> None: ...

    async def list_clips(self) -> list[Clip]: ...
    async def insert_clip(self, draft: NewClip) -> Clip: ...
    async def update_clips_batch(self, clip_ids: list[str], patch: ClipPatch) -> BatchResult: ...
    async def delete_clips_batch(self, clip_ids: list[str]) -> BatchResult: ...
