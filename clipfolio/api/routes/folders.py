"""Folder routes."""

from fastapi import APIRouter, Depends

from clipfolio.api.dependencies import get_organizer
from clipfolio.api.schemas import CreateFolderRequest, FolderDeletedResponse, RenameFolderRequest
from clipfolio.folders.schemas import Folder
from clipfolio.organizer.service import DraftOrganizer

router = APIRouter()


@router.get("", response_model=list[Folder])
async def list_folders(organizer: DraftOrganizer = Depends(get_organizer)) -> list[Folder]:
    """List all folders, newest first."""
    return organizer.folders


@router.post("", response_model=Folder)
async def create_folder(
    request: CreateFolderRequest,
    organizer: DraftOrganizer = Depends(get_organizer),
) -> Folder:
    """Create a folder."""
    return await organizer.create_folder(request.name)


@router.patch("/{folder_id}", response_model=Folder)
async def rename_folder(
    folder_id: str,
    request: RenameFolderRequest,
    organizer: DraftOrganizer = Depends(get_organizer),
) -> Folder:
    """Rename a folder."""
    return await organizer.rename_folder(folder_id, request.name)


@router.delete("/{folder_id}", response_model=FolderDeletedResponse)
async def delete_folder(
    folder_id: str,
    organizer: DraftOrganizer = Depends(get_organizer),
) -> FolderDeletedResponse:
    """Delete a folder. Its clips are kept and become unorganized."""
    detached = await organizer.delete_folder(folder_id)
    return FolderDeletedResponse(folder_id=folder_id, detached_clip_ids=detached)
