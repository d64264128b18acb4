"""Repository for Video documents."""

from pydantic_mongo import AsyncAbstractRepository

from clipfolio.mongodb.client import get_mongodb_client
from clipfolio.mongodb.repositories._ids import parse_object_id
from clipfolio.mongodb.schemas import VideoDocument
from clipfolio.videos.schemas import VideoDraft


class VideoRepository(AsyncAbstractRepository[VideoDocument]):
    """Repository for storing and retrieving videos."""

    class Meta:  # pyright: ignore[reportIncompatibleVariableOverride]
        collection_name = "videos"

    @classmethod
    def create(cls) -> "VideoRepository":
        """Create a repository instance with the default database."""
        client = get_mongodb_client()
        return cls(client.database)  # pyright: ignore[reportArgumentType]

    async def create_video(self, draft: VideoDraft) -> VideoDocument:
        """Store a new video.

        Args:
            draft: The resolved video.

        Returns:
            The created VideoDocument with ID populated.
        """
        doc = VideoDocument(**draft.model_dump())
        await self.save(doc)
        return doc

    async def get_video(self, video_id: str) -> VideoDocument | None:
        """Get a video by ID, or None if missing or not a valid id."""
        oid = parse_object_id(video_id)
        if oid is None:
            return None
        return await self.find_one_by_id(oid)

    async def list_videos(self) -> list[VideoDocument]:
        """List all videos, newest first."""
        videos = await self.find_by({})
        return sorted(videos, key=lambda v: (v.created_at, str(v.id)), reverse=True)

    async def delete_video(self, video_id: str) -> bool:
        """Delete a video by ID.

        Returns:
            True if deleted, False if not found.
        """
        doc = await self.get_video(video_id)
        if doc is None:
            return False
        await self.delete(doc)
        return True
