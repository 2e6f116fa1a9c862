"""
Movie Catalog - Database Management
===================================

Async MongoDB connection management using PyMongo's asyncio client.
The handle is constructed explicitly at startup, passed to the services
that need it and closed at shutdown.

Usage:
    from movie_catalog.core.database import Database

    database = Database.from_settings(settings)
    await database.connect()
    collection = database.movies
    ...
    await database.close()
"""

import time
from typing import Any, Dict, Optional

from pymongo import AsyncMongoClient
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from movie_catalog.core.config import Settings
from movie_catalog.core.logging import get_logger

logger = get_logger(__name__)


class Database:
    """Owns the MongoDB client and exposes the movie collection"""

    def __init__(
        self,
        url: str,
        database_name: str,
        collection_name: str = "movies",
        timeout_ms: int = 5000,
        client: Optional[AsyncMongoClient] = None,
    ):
        self.url = url
        self.database_name = database_name
        self.collection_name = collection_name
        self.timeout_ms = timeout_ms
        self._client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(
            url=settings.MONGODB_URL,
            database_name=settings.MONGODB_DATABASE,
            collection_name=settings.MONGODB_COLLECTION,
            timeout_ms=settings.MONGODB_TIMEOUT_MS,
        )

    @property
    def client(self) -> AsyncMongoClient:
        if self._client is None:
            raise RuntimeError("Database not initialized. Call connect() first.")
        return self._client

    @property
    def db(self) -> AsyncDatabase:
        return self.client[self.database_name]

    @property
    def movies(self) -> AsyncCollection:
        return self.db[self.collection_name]

    async def connect(self) -> None:
        """Create the client and verify the server answers"""
        logger.info("Connecting to database", database=self.database_name)

        if self._client is None:
            self._client = AsyncMongoClient(
                self.url,
                serverSelectionTimeoutMS=self.timeout_ms,
                tz_aware=True,
            )

        try:
            await self.ping()
        except PyMongoError as e:
            logger.error("Database connection test failed", error=str(e))
            raise

        logger.info("Database connected", database=self.database_name)

    async def ping(self) -> bool:
        await self.client.admin.command("ping")
        return True

    async def close(self) -> None:
        """Close database connections"""
        if self._client is None:
            return

        logger.info("Closing database connections...")
        await self._client.close()
        self._client = None

    async def check_health(self) -> Dict[str, Any]:
        """Liveness check used by the /health endpoint"""
        health_status: Dict[str, Any] = {
            "status": "healthy",
            "database": self.database_name,
        }

        if self._client is None:
            health_status["status"] = "unhealthy"
            health_status["error"] = "Database not initialized"
            return health_status

        started = time.perf_counter()
        try:
            await self.ping()
            health_status["latency_ms"] = round((time.perf_counter() - started) * 1000, 2)
        except PyMongoError as e:
            health_status["status"] = "unhealthy"
            health_status["error"] = str(e)

        return health_status
