"""Repository for Clip documents."""

from datetime import datetime
from typing import Any

from pydantic_mongo import AsyncAbstractRepository

from clipfolio.clips.schemas import NewClip
from clipfolio.mongodb.client import get_mongodb_client
from clipfolio.mongodb.repositories._ids import parse_object_ids
from clipfolio.mongodb.schemas import ClipDocument


class ClipRepository(AsyncAbstractRepository[ClipDocument]):
    """Repository for storing and retrieving clips."""

    class Meta:  # pyright: ignore[reportIncompatibleVariableOverride]
        collection_name = "clips"

    @classmethod
    def create(cls) -> "ClipRepository":
        """Create a repository instance with the default database."""
        client = get_mongodb_client()
        return cls(client.database)  # pyright: ignore[reportArgumentType]

    async def create_clip(self, draft: NewClip) -> ClipDocument:
        """Store a validated clip.

        Args:
            draft: The clip bound to its parent video.

        Returns:
            The created ClipDocument with ID populated.
        """
        doc = ClipDocument(**draft.model_dump(by_alias=True))
        await self.save(doc)
        return doc

    async def list_clips(self) -> list[ClipDocument]:
        """List all clips, newest first."""
        clips = await self.find_by({})
        return sorted(clips, key=lambda c: (c.created_at, str(c.id)), reverse=True)

    async def existing_ids(self, clip_ids: list[str]) -> set[str]:
        """Return which of ``clip_ids`` are stored."""
        oids = parse_object_ids(clip_ids)
        if not oids:
            return set()
        collection = self.get_collection()
        cursor = collection.find({"_id": {"$in": list(oids.values())}}, {"_id": 1})
        return {str(doc["_id"]) async for doc in cursor}

    async def update_clips(
        self,
        clip_ids: list[str],
        changes: dict[str, Any],
        updated_at: datetime,
    ) -> int:
        """Set the given fields and ``updated_at`` on several clips.

        Returns:
            Number of clips matched.
        """
        oids = parse_object_ids(clip_ids)
        if not oids:
            return 0
        collection = self.get_collection()
        result = await collection.update_many(
            {"_id": {"$in": list(oids.values())}},
            {"$set": {**changes, "updated_at": updated_at}},
        )
        return result.matched_count

    async def delete_clips(self, clip_ids: list[str]) -> int:
        """Delete several clips.

        Returns:
            Number of clips deleted.
        """
        oids = parse_object_ids(clip_ids)
        if not oids:
            return 0
        result = await self.get_collection().delete_many({"_id": {"$in": list(oids.values())}})
        return result.deleted_count

    async def detach_folder(self, folder_id: str) -> int:
        """Clear ``folder_id`` on every clip in a folder.

        Returns:
            Number of clips detached.
        """
        result = await self.get_collection().update_many(
            {"folder_id": folder_id},
            {"$set": {"folder_id": None}},
        )
        return result.modified_count

    async def delete_for_video(self, video_id: str) -> int:
        """Delete every clip cut from a video.

        Returns:
            Number of clips deleted.
        """
        result = await self.get_collection().delete_many({"video_id": video_id})
        return result.deleted_count
