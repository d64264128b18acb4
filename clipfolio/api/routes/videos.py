"""Video routes."""

from fastapi import APIRouter, Depends

from clipfolio.api.dependencies import get_organizer
from clipfolio.api.schemas import RegisterVideoRequest, VideoDeletedResponse
from clipfolio.organizer.service import DraftOrganizer
from clipfolio.videos.schemas import SourceType, Video
from clipfolio.videos.sources import upload_video_draft, youtube_video_draft

router = APIRouter()


@router.get("", response_model=list[Video])
async def list_videos(organizer: DraftOrganizer = Depends(get_organizer)) -> list[Video]:
    """List all videos, newest first."""
    return list(organizer.videos)


@router.post("", response_model=Video)
async def register_video(
    request: RegisterVideoRequest,
    organizer: DraftOrganizer = Depends(get_organizer),
) -> Video:
    """Register an uploaded file or a YouTube link."""
    if request.source_type == SourceType.YOUTUBE:
        draft = youtube_video_draft(request.source_url, request.title, int(request.duration))
    else:
        draft = upload_video_draft(
            request.source_url,
            request.filename,
            request.duration,
            request.title,
        )
    return await organizer.register_video(draft)


@router.delete("/{video_id}", response_model=VideoDeletedResponse)
async def delete_video(
    video_id: str,
    organizer: DraftOrganizer = Depends(get_organizer),
) -> VideoDeletedResponse:
    """Delete a video together with its clips."""
    removed = await organizer.delete_video(video_id)
    return VideoDeletedResponse(video_id=video_id, deleted_clip_ids=removed)
