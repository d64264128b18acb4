"""Repository for Folder documents."""

from pydantic_mongo import AsyncAbstractRepository

from clipfolio.mongodb.client import get_mongodb_client
from clipfolio.mongodb.repositories._ids import parse_object_id
from clipfolio.mongodb.schemas import FolderDocument


class FolderRepository(AsyncAbstractRepository[FolderDocument]):
    """Repository for storing and retrieving folders."""

    class Meta:  # pyright: ignore[reportIncompatibleVariableOverride]
        collection_name = "folders"

    @classmethod
    def create(cls) -> "FolderRepository":
        """Create a repository instance with the default database."""
        client = get_mongodb_client()
        return cls(client.database)  # pyright: ignore[reportArgumentType]

    async def create_folder(self, name: str) -> FolderDocument:
        """Create a new folder.

        Args:
            name: Name of the folder, already validated.

        Returns:
            The created FolderDocument with ID populated.
        """
        doc = FolderDocument(name=name)
        await self.save(doc)
        return doc

    async def get_folder(self, folder_id: str) -> FolderDocument | None:
        """Get a folder by ID, or None if missing or not a valid id."""
        oid = parse_object_id(folder_id)
        if oid is None:
            return None
        return await self.find_one_by_id(oid)

    async def list_folders(self) -> list[FolderDocument]:
        """List all folders, newest first."""
        folders = await self.find_by({})
        return sorted(folders, key=lambda f: (f.created_at, str(f.id)), reverse=True)

    async def rename_folder(self, folder_id: str, name: str) -> FolderDocument | None:
        """Rename a folder.

        Returns:
            The updated FolderDocument if found, None otherwise.
        """
        doc = await self.get_folder(folder_id)
        if doc is None:
            return None
        doc.name = name
        await self.save(doc)
        return doc

    async def delete_folder(self, folder_id: str) -> bool:
        """Delete a folder by ID.

        Returns:
            True if deleted, False if not found.
        """
        doc = await self.get_folder(folder_id)
        if doc is None:
            return False
        await self.delete(doc)
        return True
