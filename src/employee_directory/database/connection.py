"""
Database connection management
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Any

from pymongo import AsyncMongoClient
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import (
    ConnectionFailure,
    OperationFailure,
    PyMongoError,
    ServerSelectionTimeoutError,
)

from ..config import Settings, settings
from ..logging import get_logger
from .seed_data import DEPARTMENTS_COLLECTION, EMPLOYEES_COLLECTION, prepare_database

logger = get_logger(__name__)

ClientFactory = Callable[..., AsyncMongoClient]


class DatabaseConnectionError(ConnectionError):
    """Raised when MongoDB cannot be reached after all retry attempts."""


def is_atlas_uri(uri: str) -> bool:
    return uri.startswith("mongodb+srv://")


def backoff_delay(attempt: int, base_delay: float = 1.0, max_delay: float = 5.0) -> float:
    """Delay in seconds to wait after failed attempt number ``attempt`` (1-based)."""
    return min(base_delay * (2 ** (attempt - 1)), max_delay)


class MongoPool:
    """Owns the MongoDB client and its lifecycle.

    ``connect`` hands out a database handle, reusing the cached client while
    it answers pings and reconnecting (with exponential backoff) when it
    does not. The first successful connection of a pool creates indexes and
    seeds empty collections. ``close`` releases the client and resets that
    state so the next ``connect`` starts fresh.
    """

    def __init__(
        self,
        uri: str,
        db_name: str,
        *,
        pool_size: int = 10,
        server_selection_timeout_ms: int = 15000,
        socket_timeout_ms: int = 45000,
        max_idle_time_ms: int = 30000,
        max_retries: int = 3,
        retry_base_delay: float = 1.0,
        retry_max_delay: float = 5.0,
        client_factory: ClientFactory | None = None,
        auto_prepare: bool = True,
    ):
        self.uri = uri
        self.db_name = db_name
        self.pool_size = pool_size
        self.server_selection_timeout_ms = server_selection_timeout_ms
        self.socket_timeout_ms = socket_timeout_ms
        self.max_idle_time_ms = max_idle_time_ms
        self.max_retries = max_retries
        self.retry_base_delay = retry_base_delay
        self.retry_max_delay = retry_max_delay
        self._client_factory: ClientFactory = client_factory or AsyncMongoClient
        self.auto_prepare = auto_prepare

        self._client: AsyncMongoClient | None = None
        self._db: AsyncDatabase | None = None
        self._initialized = False

    @classmethod
    def from_settings(
        cls,
        config: Settings | None = None,
        client_factory: ClientFactory | None = None,
        auto_prepare: bool = True,
    ) -> MongoPool:
        config = config or settings
        return cls(
            config.mongodb_uri,
            config.mongodb_db,
            pool_size=config.mongodb_pool_size,
            server_selection_timeout_ms=config.mongodb_server_selection_timeout_ms,
            socket_timeout_ms=config.mongodb_socket_timeout_ms,
            max_idle_time_ms=config.mongodb_max_idle_time_ms,
            max_retries=config.connect_max_retries,
            retry_base_delay=config.connect_retry_base_delay,
            retry_max_delay=config.connect_retry_max_delay,
            client_factory=client_factory,
            auto_prepare=auto_prepare,
        )

    @property
    def is_connected(self) -> bool:
        return self._client is not None and self._db is not None

    @property
    def initialized(self) -> bool:
        """Whether indexes and seed data have been prepared by this pool."""
        return self._initialized

    def client_options(self) -> dict[str, Any]:
        """Keyword arguments passed to the MongoDB client."""
        options: dict[str, Any] = {
            "maxPoolSize": self.pool_size,
            "serverSelectionTimeoutMS": self.server_selection_timeout_ms,
            "socketTimeoutMS": self.socket_timeout_ms,
            "maxIdleTimeMS": self.max_idle_time_ms,
            "retryWrites": True,
        }
        if is_atlas_uri(self.uri):
            options.update(
                tls=True,
                tlsAllowInvalidCertificates=False,
                tlsAllowInvalidHostnames=False,
            )
        return options

    async def connect(self) -> AsyncDatabase:
        """Return a live database handle, connecting or reconnecting as needed.

        Raises:
            DatabaseConnectionError: If every connection attempt fails.
        """
        if self._client is not None and self._db is not None:
            try:
                await self._client.admin.command("ping")
                return self._db
            except PyMongoError as e:
                logger.warning("Existing MongoDB connection lost, reconnecting", error=str(e))
                await self._discard_client()

        for attempt in range(1, self.max_retries + 1):
            client = None
            try:
                client = self._client_factory(self.uri, **self.client_options())
                await client.admin.command("ping")
            except PyMongoError as e:
                logger.error(
                    "MongoDB connection attempt failed",
                    attempt=attempt,
                    max_retries=self.max_retries,
                    error=str(e),
                )
                await self._close_client(client)

                if attempt >= self.max_retries:
                    logger.error("All MongoDB connection attempts failed")
                    raise DatabaseConnectionError(
                        f"Failed to connect to MongoDB after {self.max_retries} attempts: {e}"
                    ) from e

                delay = backoff_delay(attempt, self.retry_base_delay, self.retry_max_delay)
                logger.info("Retrying MongoDB connection", delay_seconds=delay)
                await asyncio.sleep(delay)
                continue

            # A concurrent connect published its client while this one pinged
            if self._client is not None and self._db is not None:
                await self._close_client(client)
                return self._db

            self._client = client
            self._db = client[self.db_name]
            logger.info(
                "Connected to MongoDB",
                deployment="atlas" if is_atlas_uri(self.uri) else "local",
                database=self.db_name,
                pool_size=self.pool_size,
            )

            # Non-atomic guard: a reconnect racing the first preparation may
            # seed again, which is harmless because seeding checks counts first.
            if self.auto_prepare and not self._initialized:
                await prepare_database(self._db)
                self._initialized = True

            return self._db

        # Only reachable with max_retries < 1
        raise DatabaseConnectionError("Failed to connect to MongoDB: no attempts were made")

    async def employees(self) -> AsyncCollection:
        db = await self.connect()
        return db[EMPLOYEES_COLLECTION]

    async def departments(self) -> AsyncCollection:
        db = await self.connect()
        return db[DEPARTMENTS_COLLECTION]

    async def health_check(self) -> bool:
        """Ping the cached client. Never raises."""
        if self._client is None or self._db is None:
            return False
        try:
            await self._client.admin.command("ping")
            return True
        except Exception as e:
            logger.error("MongoDB health check failed", error=str(e))
            return False

    async def close(self) -> None:
        """Close the client and clear cached state."""
        try:
            if self._client is not None:
                await self._client.close()
                logger.info("MongoDB connection closed gracefully")
        except Exception as e:
            logger.error("Error closing MongoDB connection", error=str(e))
        finally:
            self._client = None
            self._db = None
            self._initialized = False

    async def _discard_client(self) -> None:
        client, self._client, self._db = self._client, None, None
        await self._close_client(client)

    @staticmethod
    async def _close_client(client: AsyncMongoClient | None) -> None:
        if client is None:
            return
        try:
            await client.close()
        except Exception as e:
            logger.error("Error closing failed MongoDB connection", error=str(e))

    async def test_connection(self) -> tuple[bool, str | None]:
        """
        Test the database connection and return helpful error messages.

        Returns:
            tuple: (success: bool, error_message: str | None)
        """
        try:
            await self.connect()
            return True, None
        except DatabaseConnectionError as e:
            cause = e.__cause__
            error_str = str(cause or e)

            if isinstance(cause, OperationFailure) and cause.code == 18:
                return False, (
                    f"MongoDB authentication failed: {error_str}\n"
                    f"Please check the credentials in your connection string."
                )
            elif isinstance(cause, ServerSelectionTimeoutError):
                return False, (
                    f"Cannot reach a MongoDB server: {error_str}\n"
                    f"This usually means:\n"
                    f"  1. The MongoDB server is not running\n"
                    f"  2. The host or port in the connection string is wrong\n"
                    f"  3. A firewall or IP allow-list is blocking the connection"
                )
            elif isinstance(cause, ConnectionFailure) or "Connection refused" in error_str:
                return False, (
                    f"Cannot connect to MongoDB server: {error_str}\n"
                    f"The database server appears to be down or unreachable."
                )
            return False, f"MongoDB connection error ({type(cause or e).__name__}): {error_str}"
