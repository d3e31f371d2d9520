"""
Database connection management.

Provides the MongoDatabase wrapper around a Motor client and the FastAPI
dependency that hands the database to request handlers. The client is
created once in the application lifespan and stored on app.state.

Dependencies: motor, pymongo, cognition_api.configs
System role: Database connection lifecycle management
"""

import logging

from fastapi import Request
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from cognition_api.boundary.db.collections import REQUIRED_COLLECTIONS
from cognition_api.configs.database import DatabaseSettings

logger = logging.getLogger(__name__)


class MongoDatabase:
    """
    Process-scoped MongoDB handle.

    Construct with settings, call connect() at startup and close() at
    shutdown. The underlying AsyncIOMotorDatabase is exposed as .db.
    """

    def __init__(
        self,
        settings: DatabaseSettings,
        client: AsyncIOMotorClient | None = None,
    ) -> None:
        """
        Initialize the wrapper without opening any connection.

        Args:
            settings: MongoDB connection settings
            client: Optional pre-built client (tests)
        """
        self.settings = settings
        self._client = client
        self._db: AsyncIOMotorDatabase | None = None

    @property
    def client(self) -> AsyncIOMotorClient:
        if self._client is None:
            self._client = AsyncIOMotorClient(
                self.settings.uri,
                serverSelectionTimeoutMS=self.settings.server_selection_timeout_ms,
            )
        return self._client

    @property
    def db(self) -> AsyncIOMotorDatabase:
        """
        Get the connected database.

        Raises:
            RuntimeError: If connect() has not completed
        """
        if self._db is None:
            raise RuntimeError("Database is not connected")
        return self._db

    async def connect(self) -> AsyncIOMotorDatabase:
        """
        Connect and verify the server responds to ping.

        Returns:
            AsyncIOMotorDatabase: The configured database

        Raises:
            PyMongoError: If the server cannot be reached
        """
        if self._db is not None:
            return self._db

        await self.client.admin.command("ping")
        self._db = self.client[self.settings.db_name]
        logger.info("Connected to MongoDB", extra={"db_name": self.settings.db_name})
        return self._db

    async def ensure_collections(self) -> list[str]:
        """
        Create any required collection that does not exist yet.

        Returns:
            list[str]: Names of the collections that were created
        """
        existing = set(await self.db.list_collection_names())
        created = []
        for name in REQUIRED_COLLECTIONS:
            if name not in existing:
                await self.db.create_collection(name)
                created.append(name)
                logger.info("Created missing collection", extra={"collection": name})
        return created

    async def ping(self) -> bool:
        """Return True if the server answers a ping."""
        try:
            await self.client.admin.command("ping")
            return True
        except Exception as e:
            logger.warning("MongoDB ping failed", extra={"error": str(e)})
            return False

    def close(self) -> None:
        """Close the client connection pool."""
        if self._client is not None:
            self._client.close()
        self._db = None


def get_database(request: Request) -> AsyncIOMotorDatabase:
    """
    FastAPI dependency for database injection.

    Returns the database connected during application startup.

    Usage:
        from fastapi import Depends

        @router.get("/courses")
        async def list_courses(db = Depends(get_database)):
            return await course_crud.find_many(db)
    """
    return request.app.state.database.db
