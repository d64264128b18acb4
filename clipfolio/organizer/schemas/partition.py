"""Folder-grouped view of clips."""

from clipfolio.clips.schemas import Clip
from clipfolio.common.base_clipfolio_model import BaseClipfolioModel
from clipfolio.folders.schemas import Folder


class FolderGroup(BaseClipfolioModel):
    """A folder and the clips assigned to it, in display order."""

    folder: Folder
    clips: list[Clip]


class Partition(BaseClipfolioModel):
    """Clips split into folder groups plus the unorganized remainder."""

    by_folder: list[FolderGroup]
    unorganized: list[Clip]

    def clips_in(self, folder_id: str) -> list[Clip]:
        """Return the clips grouped under ``folder_id``, or [] if unknown."""
        for group in self.by_folder:
            if group.folder.id == folder_id:
                return group.clips
        return []

    def all_clips(self) -> list[Clip]:
        """Return every clip in the partition, grouped clips first."""
        grouped = [clip for group in self.by_folder for clip in group.clips]
        return grouped + self.unorganized
