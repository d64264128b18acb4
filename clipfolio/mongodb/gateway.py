"""Persistence gateway backed by MongoDB."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import UTC, datetime

from pymongo.errors import PyMongoError

from clipfolio.clips.schemas import Clip, ClipPatch, NewClip
from clipfolio.common.errors import GatewayError, NotFoundError
from clipfolio.folders.schemas import Folder
from clipfolio.mongodb.repositories import ClipRepository, FolderRepository, VideoRepository
from clipfolio.organizer.schemas import BatchResult, FailureReason
from clipfolio.videos.schemas import Video, VideoDraft

logger = logging.getLogger(__name__)


def _storage_now() -> datetime:
    # BSON dates keep milliseconds only
    now = datetime.now(UTC)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


@contextmanager
def _storage_errors(operation: str) -> Iterator[None]:
    try:
        yield
    except PyMongoError as e:
        logger.warning("[mongodb] %s failed: %s", operation, e)
        raise GatewayError(type(e).__name__, str(e)) from e


class MongoGateway:
    """Gateway storing videos, folders and clips in MongoDB collections.

    MongoDB has no foreign keys, so the referential rules of the data model
    are applied here: deleting a folder clears ``folder_id`` on its clips and
    deleting a video deletes its clips.
    """

    def __init__(
        self,
        videos: VideoRepository | None = None,
        folders: FolderRepository | None = None,
        clips: ClipRepository | None = None,
    ) -> None:
        """Initialize the gateway.

        Args:
            videos: Video repository. Defaults to the shared database.
            folders: Folder repository. Defaults to the shared database.
            clips: Clip repository. Defaults to the shared database.
        """
        self._videos = videos or VideoRepository.create()
        self._folders = folders or FolderRepository.create()
        self._clips = clips or ClipRepository.create()

    # Videos

    async def list_videos(self) -> list[Video]:
        with _storage_errors("list_videos"):
            docs = await self._videos.list_videos()
        return [doc.to_video() for doc in docs]

    async def insert_video(self, draft: VideoDraft) -> Video:
        with _storage_errors("insert_video"):
            doc = await self._videos.create_video(draft)
        return doc.to_video()

    async def delete_video(self, video_id: str) -> None:
        with _storage_errors("delete_video"):
            deleted = await self._videos.delete_video(video_id)
            if not deleted:
                raise NotFoundError("video", video_id)
            removed = await self._clips.delete_for_video(video_id)
        logger.info("[video=%s] Cascade deleted %d clips", video_id, removed)

    # Folders

    async def list_folders(self) -> list[Folder]:
        with _storage_errors("list_folders"):
            docs = await self._folders.list_folders()
        return [doc.to_folder() for doc in docs]

    async def insert_folder(self, name: str) -> Folder:
        with _storage_errors("insert_folder"):
            doc = await self._folders.create_folder(name)
        return doc.to_folder()

    async def update_folder(self, folder_id: str, name: str) -> Folder:
        with _storage_errors("update_folder"):
            doc = await self._folders.rename_folder(folder_id, name)
        if doc is None:
            raise NotFoundError("folder", folder_id)
        return doc.to_folder()

    async def delete_folder(self, folder_id: str) -> None:
        with _storage_errors("delete_folder"):
            deleted = await self._folders.delete_folder(folder_id)
            if not deleted:
                raise NotFoundError("folder", folder_id)
            detached = await self._clips.detach_folder(folder_id)
        logger.info("[folder=%s] Detached %d clips", folder_id, detached)

    # Clips

    async def list_clips(self) -> list[Clip]:
        with _storage_errors("list_clips"):
            docs = await self._clips.list_clips()
        return [doc.to_clip() for doc in docs]

    async def insert_clip(self, draft: NewClip) -> Clip:
        with _storage_errors("insert_clip"):
            if await self._videos.get_video(draft.video_id) is None:
                raise NotFoundError("video", draft.video_id)
            if draft.folder_id is not None and await self._folders.get_folder(draft.folder_id) is None:
                raise NotFoundError("folder", draft.folder_id)
            doc = await self._clips.create_clip(draft)
        return doc.to_clip()

    async def update_clips_batch(self, clip_ids: list[str], patch: ClipPatch) -> BatchResult:
        with _storage_errors("update_clips_batch"):
            existing = await self._clips.existing_ids(clip_ids)
            missing = {clip_id: FailureReason.NOT_FOUND for clip_id in clip_ids if clip_id not in existing}
            targets = [clip_id for clip_id in clip_ids if clip_id in existing]

            if patch.moves_folder and patch.folder_id is not None and targets:
                if await self._folders.get_folder(patch.folder_id) is None:
                    failed = {**missing, **dict.fromkeys(targets, FailureReason.FOLDER_NOT_FOUND)}
                    return BatchResult(failed=failed)

            updated_at = _storage_now()
            if targets:
                await self._clips.update_clips(targets, patch.to_record(), updated_at)

        return BatchResult(succeeded_ids=targets, failed=missing, updated_at=updated_at)

    async def delete_clips_batch(self, clip_ids: list[str]) -> BatchResult:
        with _storage_errors("delete_clips_batch"):
            existing = await self._clips.existing_ids(clip_ids)
            targets = [clip_id for clip_id in clip_ids if clip_id in existing]
            if targets:
                await self._clips.delete_clips(targets)

        missing = {clip_id: FailureReason.NOT_FOUND for clip_id in clip_ids if clip_id not in existing}
        return BatchResult(succeeded_ids=targets, failed=missing)
