"""In-memory registry of folders."""

from collections.abc import Iterable

from clipfolio.common.errors import DraftValidationError, NotFoundError, ValidationErrorKind
from clipfolio.folders.schemas import Folder


def sort_folders(folders: Iterable[Folder]) -> list[Folder]:
    """Sort folders newest first, breaking ties by id."""
    return sorted(folders, key=lambda f: (f.created_at, f.id), reverse=True)


class FolderRegistry:
    """Holds the known folders and enforces their naming rules.

    The registry knows nothing about clips. Detaching clips from a deleted
    folder is the organizer's job.
    """

    def __init__(self, folders: Iterable[Folder] = ()) -> None:
        self._folders: dict[str, Folder] = {}
        self.replace_all(folders)

    def __contains__(self, folder_id: object) -> bool:
        return folder_id in self._folders

    def __len__(self) -> int:
        return len(self._folders)

    @staticmethod
    def check_name(name: str) -> str:
        """Return the trimmed folder name, rejecting blank ones."""
        trimmed = name.strip()
        if not trimmed:
            msg = "Folder name cannot be empty"
            raise DraftValidationError(ValidationErrorKind.EMPTY_NAME, msg)
        return trimmed

    def replace_all(self, folders: Iterable[Folder]) -> None:
        """Replace the registry contents, e.g. after a reload."""
        self._folders = {folder.id: folder for folder in folders}

    def get(self, folder_id: str) -> Folder:
        """Return a folder by id.

        Raises:
            NotFoundError: If the folder is not registered.
        """
        folder = self._folders.get(folder_id)
        if folder is None:
            raise NotFoundError("folder", folder_id)
        return folder

    def create(self, folder: Folder) -> Folder:
        """Register a folder that storage has just created."""
        self.check_name(folder.name)
        if folder.id in self._folders:
            msg = f"Folder {folder.id} is already registered"
            raise ValueError(msg)
        self._folders[folder.id] = folder
        return folder

    def rename(self, folder_id: str, new_name: str) -> Folder:
        """Rename a folder.

        Raises:
            NotFoundError: If the folder is not registered.
            DraftValidationError: ``EMPTY_NAME`` for a blank name.
        """
        folder = self.get(folder_id)
        renamed = folder.model_copy(update={"name": self.check_name(new_name)})
        self._folders[folder_id] = renamed
        return renamed

    def delete(self, folder_id: str) -> Folder:
        """Remove a folder and return it.

        Raises:
            NotFoundError: If the folder is not registered.
        """
        folder = self.get(folder_id)
        del self._folders[folder_id]
        return folder

    def list_folders(self) -> list[Folder]:
        """Return folders newest first."""
        return sort_folders(self._folders.values())
