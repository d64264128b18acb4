"""Shared Motor client for the MongoDB storage backend."""

import logging

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from clipfolio.mongodb.config import MongoDBConfig, get_mongodb_config

logger = logging.getLogger(__name__)


class MongoDBClient:
    """Process-wide Motor client used by every repository.

    Connects lazily on first use. The API closes it on shutdown and pings it
    from the health check.
    """

    _instance: "MongoDBClient | None" = None
    _client: AsyncIOMotorClient | None = None
    _config: MongoDBConfig | None = None

    def __new__(cls) -> "MongoDBClient":
        """Singleton pattern for connection reuse."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def connect(self, config: MongoDBConfig | None = None) -> AsyncIOMotorClient:
        """Open the connection pool if needed and return the client.

        Args:
            config: Optional config. If not provided, reads from environment.
        """
        if self._client is None:
            self._config = config or get_mongodb_config()
            self._client = AsyncIOMotorClient(
                self._config.connection_string,
                maxPoolSize=self._config.max_pool_size,
                minPoolSize=self._config.min_pool_size,
            )
            logger.info("[mongodb] Opened connection pool for %s", self._config.database_name)
        return self._client

    @property
    def database(self) -> AsyncIOMotorDatabase:
        """Get the configured database, connecting if needed."""
        client = self.connect()
        if self._config is None:
            msg = "MongoDB config not initialized"
            raise RuntimeError(msg)
        return client[self._config.database_name]

    async def close(self) -> None:
        """Close the connection pool. A later use reconnects."""
        if self._client is None:
            return
        self._client.close()
        self._client = None
        logger.info("[mongodb] Closed connection pool")

    async def ping(self) -> bool:
        """Return whether the server answers a ping."""
        try:
            await self.connect().admin.command("ping")
        except PyMongoError as e:
            logger.warning("[mongodb] Ping failed: %s", e)
            return False
        return True


def get_mongodb_client() -> MongoDBClient:
    """Get the MongoDB client singleton."""
    return MongoDBClient()
