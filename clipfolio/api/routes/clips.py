"""Clip routes."""

from fastapi import APIRouter, Depends

from clipfolio.api.dependencies import get_organizer
from clipfolio.api.schemas import (
    BatchUpdateRequest,
    CreateClipRequest,
    DeleteClipsRequest,
    MoveClipsRequest,
)
from clipfolio.clips.schemas import Clip, ClipDraft
from clipfolio.organizer.schemas import BatchResult, Partition, PlaybackTarget
from clipfolio.organizer.service import DraftOrganizer

router = APIRouter()


@router.get("", response_model=list[Clip])
async def list_clips(organizer: DraftOrganizer = Depends(get_organizer)) -> list[Clip]:
    """List all clips, newest first."""
    return list(organizer.clips)


@router.get("/organized", response_model=Partition)
async def organized_clips(organizer: DraftOrganizer = Depends(get_organizer)) -> Partition:
    """List clips grouped by folder, plus the unorganized ones."""
    return organizer.partition()


@router.post("", response_model=Clip)
async def create_clip(
    request: CreateClipRequest,
    organizer: DraftOrganizer = Depends(get_organizer),
) -> Clip:
    """Create a clip from a video."""
    draft = ClipDraft.model_validate(request.model_dump(exclude={"video_id"}, by_alias=True))
    return await organizer.create_clip(request.video_id, draft)


@router.get("/{clip_id}/playback", response_model=PlaybackTarget)
async def clip_playback(
    clip_id: str,
    organizer: DraftOrganizer = Depends(get_organizer),
) -> PlaybackTarget:
    """Get the video and start position to open a clip at."""
    return organizer.open_clip(clip_id)


@router.post("/move", response_model=BatchResult)
async def move_clips(
    request: MoveClipsRequest,
    organizer: DraftOrganizer = Depends(get_organizer),
) -> BatchResult:
    """Move clips into a folder, or out of any folder."""
    return await organizer.move_to_folder(request.clip_ids, request.folder_id)


@router.post("/batch-update", response_model=BatchResult)
async def batch_update_clips(
    request: BatchUpdateRequest,
    organizer: DraftOrganizer = Depends(get_organizer),
) -> BatchResult:
    """Apply the same changes to several clips."""
    return await organizer.batch_update(request.clip_ids, request.patch)


@router.post("/delete", response_model=BatchResult)
async def delete_clips(
    request: DeleteClipsRequest,
    organizer: DraftOrganizer = Depends(get_organizer),
) -> BatchResult:
    """Delete several clips."""
    return await organizer.delete_clips(request.clip_ids)
