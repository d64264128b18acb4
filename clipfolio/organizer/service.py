"""Draft organizer: folders, clip assignment, selection and batch edits."""

import asyncio
import logging
from collections import defaultdict
from collections.abc import AsyncIterator, Iterable, Iterator
from contextlib import AsyncExitStack, asynccontextmanager, contextmanager
from datetime import UTC, datetime

from clipfolio.clips.factory import check_patch, create_clip
from clipfolio.clips.schemas import Clip, ClipDraft, ClipPatch, validate_range
from clipfolio.common.errors import DraftValidationError, GatewayError, NotFoundError
from clipfolio.folders.registry import FolderRegistry
from clipfolio.folders.schemas import Folder
from clipfolio.gateway.protocol import PersistenceGateway
from clipfolio.organizer.partition import partition_clips
from clipfolio.organizer.schemas import BatchResult, FailureReason, Partition, PlaybackTarget
from clipfolio.organizer.view_state import DraftViewState
from clipfolio.videos.schemas import Video, VideoDraft

logger = logging.getLogger(__name__)


@contextmanager
def _log_gateway_failure(context: str, action: str) -> Iterator[None]:
    try:
        yield
    except GatewayError:
        logger.exception("[%s] Gateway failed to %s", context, action)
        raise


def _unique(ids: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(ids))


class DraftOrganizer:
    """Owns the in-memory clips, folders and videos of one editing session.

    Every mutation is validated locally first, then sent to the gateway, and
    only applied in memory once the gateway confirms it. A failed call leaves
    the in-memory state exactly as it was. Mutations touching the same entity
    are serialized with per-entity locks held across the gateway call.
    """

    def __init__(self, gateway: PersistenceGateway) -> None:
        """Initialize an empty organizer.

        Args:
            gateway: Storage access used to load and commit changes.
        """
        self._gateway = gateway
        self._videos: dict[str, Video] = {}
        self._clips: dict[str, Clip] = {}
        self._folders = FolderRegistry()
        self._view = DraftViewState()
        self._locks: defaultdict[str, asyncio.Lock] = defaultdict(asyncio.Lock)

    @asynccontextmanager
    async def _locked(self, *keys: str) -> AsyncIterator[None]:
        # Sorted acquisition so overlapping batches cannot deadlock
        async with AsyncExitStack() as stack:
            for key in sorted(set(keys)):
                await stack.enter_async_context(self._locks[key])
            yield

    # Read access

    @property
    def clips(self) -> tuple[Clip, ...]:
        """Return all clips, newest first."""
        return tuple(self._clips.values())

    @property
    def folders(self) -> list[Folder]:
        """Return all folders, newest first."""
        return self._folders.list_folders()

    @property
    def videos(self) -> tuple[Video, ...]:
        """Return all videos, newest first."""
        return tuple(self._videos.values())

    @property
    def selected_ids(self) -> list[str]:
        """Return the selected clip ids in selection order."""
        return self._view.selected_ids

    @property
    def expanded_folder_ids(self) -> frozenset[str]:
        """Return the ids of expanded folders."""
        return self._view.expanded_folder_ids

    def get_clip(self, clip_id: str) -> Clip:
        """Return a clip by id.

        Raises:
            NotFoundError: If the clip is not loaded.
        """
        clip = self._clips.get(clip_id)
        if clip is None:
            raise NotFoundError("clip", clip_id)
        return clip

    def get_video(self, video_id: str) -> Video:
        """Return a video by id.

        Raises:
            NotFoundError: If the video is not loaded.
        """
        video = self._videos.get(video_id)
        if video is None:
            raise NotFoundError("video", video_id)
        return video

    def get_folder(self, folder_id: str) -> Folder:
        """Return a folder by id.

        Raises:
            NotFoundError: If the folder is not loaded.
        """
        return self._folders.get(folder_id)

    def partition(self) -> Partition:
        """Return the current clips grouped by folder."""
        return partition_clips(self._clips.values(), self._folders.list_folders())

    # Loading

    async def load(self) -> None:
        """Replace in-memory state with a fresh read from the gateway.

        Selection and folder expansion are reset, since they are never
        persisted.
        """
        with _log_gateway_failure("organizer", "load drafts"):
            videos, folders, clips = await asyncio.gather(
                self._gateway.list_videos(),
                self._gateway.list_folders(),
                self._gateway.list_clips(),
            )

        self._videos = {video.id: video for video in videos}
        self._folders.replace_all(folders)
        self._clips = {clip.id: clip for clip in clips}
        self._view.reset()

        logger.info(
            "[organizer] Loaded %d videos, %d folders, %d clips",
            len(self._videos),
            len(self._folders),
            len(self._clips),
        )

    # Selection

    def toggle_select(self, clip_id: str) -> bool:
        """Toggle a clip's selection and return whether it is now selected."""
        return self._view.toggle_select(clip_id)

    def is_selected(self, clip_id: str) -> bool:
        return self._view.is_selected(clip_id)

    def clear_selection(self) -> None:
        """Deselect everything."""
        self._view.clear_selection()

    def toggle_expanded(self, folder_id: str) -> bool:
        """Toggle a folder's expansion and return whether it is now expanded."""
        return self._view.toggle_expanded(folder_id)

    # Videos

    async def register_video(self, draft: VideoDraft) -> Video:
        """Store a resolved video and make it available for clipping."""
        with _log_gateway_failure("organizer", "register video"):
            video = await self._gateway.insert_video(draft)

        self._videos = {video.id: video, **self._videos}
        logger.info(
            "[video=%s] Registered %s video %r (%ds)",
            video.id,
            video.source_type,
            video.title,
            video.duration,
        )
        return video

    async def delete_video(self, video_id: str) -> list[str]:
        """Delete a video and, with it, all of its clips.

        Returns:
            The ids of the clips removed along with the video.

        Raises:
            NotFoundError: If the video is not loaded or storage lost it.
        """
        while True:
            removed = self._clip_ids_of(video_id)
            clip_keys = [f"clip:{clip_id}" for clip_id in removed]
            async with self._locked(f"video:{video_id}", *clip_keys):
                # A clip of this video was created or deleted while we waited
                if self._clip_ids_of(video_id) != removed:
                    continue

                self.get_video(video_id)
                with _log_gateway_failure(f"video={video_id}", "delete video"):
                    await self._gateway.delete_video(video_id)

                del self._videos[video_id]
                for clip_id in removed:
                    del self._clips[clip_id]
                self._view.deselect(removed)
                break

        logger.info("[video=%s] Deleted video and %d clips", video_id, len(removed))
        return removed

    def _clip_ids_of(self, video_id: str) -> list[str]:
        return [clip.id for clip in self._clips.values() if clip.video_id == video_id]

    def open_clip(self, clip_id: str) -> PlaybackTarget:
        """Return the video and position the player should jump to for a clip.

        Raises:
            NotFoundError: If the clip, or its parent video, is not loaded.
                A missing parent means another session deleted it; call
                ``load`` to pick up the cascade.
        """
        clip = self.get_clip(clip_id)
        video = self.get_video(clip.video_id)
        return PlaybackTarget(
            clip_id=clip.id,
            video=video,
            start_time=clip.start_time,
            end_time=clip.end_time,
        )

    # Folders

    async def create_folder(self, name: str) -> Folder:
        """Create a folder.

        Raises:
            DraftValidationError: ``EMPTY_NAME`` for a blank name.
        """
        name = FolderRegistry.check_name(name)
        with _log_gateway_failure("organizer", "create folder"):
            folder = await self._gateway.insert_folder(name)

        self._folders.create(folder)
        logger.info("[folder=%s] Created folder %r", folder.id, folder.name)
        return folder

    async def rename_folder(self, folder_id: str, new_name: str) -> Folder:
        """Rename a folder.

        Raises:
            DraftValidationError: ``EMPTY_NAME`` for a blank name.
            NotFoundError: If the folder does not exist.
        """
        new_name = FolderRegistry.check_name(new_name)
        async with self._locked(f"folder:{folder_id}"):
            self._folders.get(folder_id)
            with _log_gateway_failure(f"folder={folder_id}", "rename folder"):
                await self._gateway.update_folder(folder_id, new_name)
            folder = self._folders.rename(folder_id, new_name)

        logger.info("[folder=%s] Renamed folder to %r", folder_id, new_name)
        return folder

    async def delete_folder(self, folder_id: str) -> list[str]:
        """Delete a folder, leaving its clips unassigned.

        Clips are never deleted with their folder. Storage clears their
        ``folder_id`` itself; the organizer mirrors that by detaching them in
        the same step that drops the folder, so no clip ever points at a
        missing folder.

        Returns:
            The ids of the clips that were detached.

        Raises:
            NotFoundError: If the folder does not exist.
        """
        async with self._locked(f"folder:{folder_id}"):
            self._folders.get(folder_id)
            with _log_gateway_failure(f"folder={folder_id}", "delete folder"):
                await self._gateway.delete_folder(folder_id)

            detached = [clip.id for clip in self._clips.values() if clip.folder_id == folder_id]
            for clip_id in detached:
                self._clips[clip_id] = self._clips[clip_id].detached()
            self._folders.delete(folder_id)
            self._view.collapse(folder_id)

        logger.info("[folder=%s] Deleted folder, detached %d clips", folder_id, len(detached))
        return detached

    # Clips

    async def create_clip(self, video_id: str, draft: ClipDraft) -> Clip:
        """Validate and store a new clip cut from a loaded video.

        Raises:
            NotFoundError: If the video, or the requested folder, is unknown.
            DraftValidationError: If the title is blank or the range invalid.
        """
        new_clip = create_clip(self.get_video(video_id), draft)
        lock_keys = [f"video:{video_id}"]
        if new_clip.folder_id is not None:
            lock_keys.append(f"folder:{new_clip.folder_id}")

        async with self._locked(*lock_keys):
            # Video and folder may have been deleted while we waited
            self.get_video(video_id)
            if new_clip.folder_id is not None:
                self._folders.get(new_clip.folder_id)

            with _log_gateway_failure(f"video={video_id}", "create clip"):
                clip = await self._gateway.insert_clip(new_clip)

            self._clips = {clip.id: clip, **self._clips}

        logger.info(
            "[clip=%s] Created clip %r (%s) from video %s",
            clip.id,
            clip.title,
            clip.range.label,
            video_id,
        )
        return clip

    def _rejection_reason(self, clip_id: str, patch: ClipPatch) -> FailureReason | None:
        clip = self._clips.get(clip_id)
        if clip is None:
            return FailureReason.NOT_FOUND
        if patch.moves_folder and patch.folder_id is not None and patch.folder_id not in self._folders:
            return FailureReason.FOLDER_NOT_FOUND
        if patch.touches_range:
            video = self._videos.get(clip.video_id)
            if video is None:
                return FailureReason.NOT_FOUND
            new_range = patch.range_for(clip)
            try:
                validate_range(new_range.start_time, new_range.end_time, video.duration)
            except DraftValidationError:
                return FailureReason.INVALID_RANGE
        return None

    async def batch_update(self, clip_ids: Iterable[str], patch: ClipPatch) -> BatchResult:
        """Apply one patch to many clips, best effort.

        Ids that fail local checks are reported without reaching storage; the
        rest go to the gateway in a single request. Only ids the gateway
        confirms are updated in memory.

        Args:
            clip_ids: Clips to update. Duplicates are ignored.
            patch: Fields to set on every clip.

        Returns:
            Which ids were updated and why the others were not.

        Raises:
            ValueError: If the patch sets no field.
            DraftValidationError: If the patch itself is invalid (blank title).
            GatewayError: If the gateway call fails as a whole. Nothing is
                updated in that case.
        """
        if patch.is_empty:
            msg = "Batch update needs at least one field to set"
            raise ValueError(msg)
        patch = check_patch(patch)
        ids = _unique(clip_ids)
        if not ids:
            return BatchResult()

        lock_keys = [f"clip:{clip_id}" for clip_id in ids]
        if patch.moves_folder and patch.folder_id is not None:
            lock_keys.append(f"folder:{patch.folder_id}")

        async with self._locked(*lock_keys):
            rejected: dict[str, FailureReason] = {}
            accepted: list[str] = []
            for clip_id in ids:
                reason = self._rejection_reason(clip_id, patch)
                if reason is None:
                    accepted.append(clip_id)
                else:
                    rejected[clip_id] = reason

            local = BatchResult(failed=rejected)
            if not accepted:
                logger.warning("[organizer] Batch update rejected all %d clips", len(ids))
                return local

            with _log_gateway_failure("organizer", "update clips"):
                outcome = await self._gateway.update_clips_batch(accepted, patch)

            remote = self._reconcile(accepted, outcome)
            updated_at = outcome.updated_at or datetime.now(UTC)
            for clip_id in remote.succeeded_ids:
                self._clips[clip_id] = self._clips[clip_id].apply(patch, updated_at=updated_at)

        result = local.merge(remote)
        if result.ok:
            logger.info("[organizer] Updated %d clips", len(result.succeeded_ids))
        else:
            logger.warning(
                "[organizer] Updated %d clips, %d failed: %s",
                len(result.succeeded_ids),
                len(result.failed),
                result.failed,
            )
        return result

    async def move_to_folder(self, clip_ids: Iterable[str], folder_id: str | None) -> BatchResult:
        """Assign clips to a folder, or unassign them with ``None``.

        A folder that does not exist fails every id with ``FOLDER_NOT_FOUND``
        and nothing is sent to storage.
        """
        return await self.batch_update(clip_ids, ClipPatch(folder_id=folder_id))

    async def delete_clips(self, clip_ids: Iterable[str]) -> BatchResult:
        """Delete clips, best effort, and drop deleted ids from the selection.

        Ids that are not loaded fail with ``NOT_FOUND`` without a gateway call.

        Raises:
            GatewayError: If the gateway call fails as a whole. Nothing is
                deleted in that case.
        """
        ids = _unique(clip_ids)
        if not ids:
            return BatchResult()

        async with self._locked(*(f"clip:{clip_id}" for clip_id in ids)):
            missing = [clip_id for clip_id in ids if clip_id not in self._clips]
            present = [clip_id for clip_id in ids if clip_id in self._clips]
            local = BatchResult(failed=dict.fromkeys(missing, FailureReason.NOT_FOUND))
            if not present:
                logger.warning("[organizer] None of %d clips to delete exist", len(ids))
                return local

            with _log_gateway_failure("organizer", "delete clips"):
                outcome = await self._gateway.delete_clips_batch(present)

            remote = self._reconcile(present, outcome)
            for clip_id in remote.succeeded_ids:
                del self._clips[clip_id]
            self._view.deselect(remote.succeeded_ids)

        result = local.merge(remote)
        logger.info(
            "[organizer] Deleted %d clips (%d failed)",
            len(result.succeeded_ids),
            len(result.failed),
        )
        return result

    def _reconcile(self, sent: list[str], outcome: BatchResult) -> BatchResult:
        # Trust the gateway only for ids we sent; unreported ids count as failed.
        # A reload during the call may have dropped a confirmed clip.
        confirmed = set(outcome.succeeded_ids)
        succeeded: list[str] = []
        failed: dict[str, FailureReason] = {}
        for clip_id in sent:
            if clip_id not in confirmed:
                failed[clip_id] = outcome.failed.get(clip_id, FailureReason.STORAGE_ERROR)
            elif clip_id not in self._clips:
                failed[clip_id] = FailureReason.NOT_FOUND
            else:
                succeeded.append(clip_id)
        return BatchResult(succeeded_ids=succeeded, failed=failed, updated_at=outcome.updated_at)
