"""Grouping clips by folder."""

from collections.abc import Iterable

from clipfolio.clips.schemas import Clip
from clipfolio.folders.registry import sort_folders
from clipfolio.folders.schemas import Folder
from clipfolio.organizer.schemas import FolderGroup, Partition


def partition_clips(clips: Iterable[Clip], folders: Iterable[Folder]) -> Partition:
    """Split clips into per-folder groups and an unorganized list.

    Pure projection: clip order is preserved inside each group and every clip
    lands in exactly one place. A clip pointing at a folder that is not in
    ``folders`` is treated as unorganized.

    Args:
        clips: Clips in display order.
        folders: Known folders.

    Returns:
        Groups for every folder (newest folder first, possibly empty) and the
        unorganized clips.
    """
    ordered_folders = sort_folders(folders)
    grouped: dict[str, list[Clip]] = {folder.id: [] for folder in ordered_folders}
    unorganized: list[Clip] = []

    for clip in clips:
        if clip.folder_id is not None and clip.folder_id in grouped:
            grouped[clip.folder_id].append(clip)
        else:
            unorganized.append(clip)

    return Partition(
        by_folder=[
            FolderGroup(folder=folder, clips=grouped[folder.id])
            for folder in ordered_folders
        ],
        unorganized=unorganized,
    )
