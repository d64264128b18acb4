"""In-memory persistence gateway for local development and tests."""

import logging
import uuid
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from clipfolio.clips.schemas import Clip, ClipPatch, NewClip
from clipfolio.common.errors import GatewayError, NotFoundError
from clipfolio.folders.registry import sort_folders
from clipfolio.folders.schemas import Folder
from clipfolio.organizer.schemas import BatchResult, FailureReason
from clipfolio.videos.schemas import Video, VideoDraft

logger = logging.getLogger(__name__)


class InMemoryGateway:
    """Dict-backed gateway that follows the same rules as the database.

    Deleting a folder sets ``folder_id`` to null on its clips and deleting a
    video removes its clips, matching the foreign keys in storage. Failures
    can be injected with ``fail_next`` and ``fail_ids``.
    """

    def __init__(self, clock: Callable[[], datetime] | None = None) -> None:
        """Initialize an empty store.

        Args:
            clock: Optional time source. Timestamps handed out are always
                strictly increasing, even if the clock is not.
        """
        self._videos: dict[str, Video] = {}
        self._folders: dict[str, Folder] = {}
        self._clips: dict[str, Clip] = {}
        self._clock = clock or (lambda: datetime.now(UTC))
        self._last_timestamp: datetime | None = None
        self._pending_error: GatewayError | None = None
        self._failing_ids: set[str] = set()
        self.calls: list[str] = []

    def fail_next(self, kind: str = "unavailable", message: str = "Storage is unavailable") -> None:
        """Make the next gateway call raise ``GatewayError``."""
        self._pending_error = GatewayError(kind, message)

    def fail_ids(self, *ids: str) -> None:
        """Make batch operations report these ids as storage failures."""
        self._failing_ids.update(ids)

    def _begin(self, operation: str) -> None:
        self.calls.append(operation)
        if self._pending_error is not None:
            error, self._pending_error = self._pending_error, None
            logger.warning("[memory] Injected failure on %s: %s", operation, error)
            raise error

    def _now(self) -> datetime:
        now = self._clock()
        if self._last_timestamp is not None and now <= self._last_timestamp:
            now = self._last_timestamp + timedelta(microseconds=1)
        self._last_timestamp = now
        return now

    @staticmethod
    def _new_id() -> str:
        return uuid.uuid4().hex

    # Videos

    async def list_videos(self) -> list[Video]:
        self._begin("list_videos")
        return sorted(self._videos.values(), key=lambda v: (v.created_at, v.id), reverse=True)

    async def insert_video(self, draft: VideoDraft) -> Video:
        self._begin("insert_video")
        now = self._now()
        video = Video(**draft.model_dump(), id=self._new_id(), created_at=now, updated_at=now)
        self._videos[video.id] = video
        return video

    async def delete_video(self, video_id: str) -> None:
        self._begin("delete_video")
        if video_id not in self._videos:
            raise NotFoundError("video", video_id)
        del self._videos[video_id]
        self._clips = {
            clip_id: clip for clip_id, clip in self._clips.items() if clip.video_id != video_id
        }

    # Folders

    async def list_folders(self) -> list[Folder]:
        self._begin("list_folders")
        return sort_folders(self._folders.values())

    async def insert_folder(self, name: str) -> Folder:
        self._begin("insert_folder")
        folder = Folder(id=self._new_id(), name=name, created_at=self._now())
        self._folders[folder.id] = folder
        return folder

    async def update_folder(self, folder_id: str, name: str) -> Folder:
        self._begin("update_folder")
        folder = self._folders.get(folder_id)
        if folder is None:
            raise NotFoundError("folder", folder_id)
        renamed = folder.model_copy(update={"name": name})
        self._folders[folder_id] = renamed
        return renamed

    async def delete_folder(self, folder_id: str) -> None:
        self._begin("delete_folder")
        if folder_id not in self._folders:
            raise NotFoundError("folder", folder_id)
        del self._folders[folder_id]
        for clip_id, clip in self._clips.items():
            if clip.folder_id == folder_id:
                self._clips[clip_id] = clip.detached()

    # Clips

    async def list_clips(self) -> list[Clip]:
        self._begin("list_clips")
        return sorted(self._clips.values(), key=lambda c: (c.created_at, c.id), reverse=True)

    async def insert_clip(self, draft: NewClip) -> Clip:
        self._begin("insert_clip")
        if draft.video_id not in self._videos:
            raise NotFoundError("video", draft.video_id)
        if draft.folder_id is not None and draft.folder_id not in self._folders:
            raise NotFoundError("folder", draft.folder_id)
        now = self._now()
        clip = Clip(
            **draft.model_dump(by_alias=True),
            id=self._new_id(),
            created_at=now,
            updated_at=now,
        )
        self._clips[clip.id] = clip
        return clip

    async def update_clips_batch(self, clip_ids: list[str], patch: ClipPatch) -> BatchResult:
        self._begin("update_clips_batch")
        folder_missing = (
            patch.moves_folder
            and patch.folder_id is not None
            and patch.folder_id not in self._folders
        )
        now = self._now()
        succeeded: list[str] = []
        failed: dict[str, FailureReason] = {}

        for clip_id in clip_ids:
            if clip_id in self._failing_ids:
                failed[clip_id] = FailureReason.STORAGE_ERROR
            elif clip_id not in self._clips:
                failed[clip_id] = FailureReason.NOT_FOUND
            elif folder_missing:
                failed[clip_id] = FailureReason.FOLDER_NOT_FOUND
            else:
                self._clips[clip_id] = self._clips[clip_id].apply(patch, updated_at=now)
                succeeded.append(clip_id)

        return BatchResult(succeeded_ids=succeeded, failed=failed, updated_at=now)

    async def delete_clips_batch(self, clip_ids: list[str]) -> BatchResult:
        self._begin("delete_clips_batch")
        succeeded: list[str] = []
        failed: dict[str, FailureReason] = {}

        for clip_id in clip_ids:
            if clip_id in self._failing_ids:
                failed[clip_id] = FailureReason.STORAGE_ERROR
            elif self._clips.pop(clip_id, None) is None:
                failed[clip_id] = FailureReason.NOT_FOUND
            else:
                succeeded.append(clip_id)

        return BatchResult(succeeded_ids=succeeded, failed=failed)
