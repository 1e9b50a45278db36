"""
MongoDB database connection using Motor (async driver).

Provides the connection manager that owns the process-wide client, resolves
which database holds the XRPL data, and retries startup with backoff.
"""

import asyncio
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from xrpl_dashboard.config.settings import Settings
from xrpl_dashboard.shared.exceptions import ConnectionTimeout, DatabaseUnavailable
from xrpl_dashboard.utils.logger import get_logger, mask_mongo_uri

logger = get_logger(__name__)

SYSTEM_DATABASES = ("admin", "config", "local")


@dataclass
class ConnectionAttemptResult:
    """Outcome of initialize_with_retry; never raised, always returned."""
    success: bool
    attempts: int
    database: Optional[str] = None
    error: Optional[str] = None


class MongoConnectionManager:
    """
    Owner of the single MongoDB client for the process.

    Created once at application startup and closed at shutdown. Handlers get
    it through FastAPI dependencies instead of reaching for module state.

    Usage:
        manager = MongoConnectionManager.from_settings(settings)
        result = await manager.initialize_with_retry()
        db = await manager.get_database()
        await manager.close()
    """

    def __init__(
        self,
        uri: str,
        db_name: str,
        fallback_db_names: Optional[List[str]] = None,
        server_selection_timeout_ms: int = 5000,
        max_pool_size: int = 10,
        min_pool_size: int = 1,
        client_factory: Callable[..., AsyncIOMotorClient] = AsyncIOMotorClient,
    ):
        self.uri = uri
        self.db_name = db_name
        self.fallback_db_names = list(fallback_db_names or [])
        self.server_selection_timeout_ms = server_selection_timeout_ms
        self.max_pool_size = max_pool_size
        self.min_pool_size = min_pool_size
        self._client_factory = client_factory
        self._client: AsyncIOMotorClient | None = None
        self._database: AsyncIOMotorDatabase | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "MongoConnectionManager":
        """Build a manager from application settings."""
        return cls(
            uri=settings.MONGO_URI,
            db_name=settings.MONGO_DB_NAME,
            fallback_db_names=settings.MONGO_FALLBACK_DB_NAMES,
            server_selection_timeout_ms=settings.MONGO_SERVER_SELECTION_TIMEOUT_MS,
            max_pool_size=settings.MONGO_MAX_POOL_SIZE,
            min_pool_size=settings.MONGO_MIN_POOL_SIZE,
        )

    @property
    def masked_uri(self) -> str:
        return mask_mongo_uri(self.uri)

    @property
    def database_name(self) -> Optional[str]:
        """Name of the resolved database, or None before resolution."""
        return self._database.name if self._database is not None else None

    def get_client(self) -> AsyncIOMotorClient:
        """
        Get the MongoDB client, creating it on first use.

        Every later call returns the same client; there is no reconnect per
        request.
        """
        if self._client is None:
            logger.info("Creating MongoDB client for %s", self.masked_uri)
            self._client = self._client_factory(
                self.uri,
                serverSelectionTimeoutMS=self.server_selection_timeout_ms,
                maxPoolSize=self.max_pool_size,
                minPoolSize=self.min_pool_size,
            )
        return self._client

    async def _probe(self, name: str) -> AsyncIOMotorDatabase:
        database = self.get_client()[name]
        await database.list_collection_names()
        return database

    async def resolve_database(self) -> AsyncIOMotorDatabase:
        """
        Resolve the database holding the dashboard collections.

        Tries the primary name, then each fallback in order, then the first
        non-system database on the server. Each candidate must answer a
        collection listing.

        Raises:
            DatabaseUnavailable: If every candidate failed
        """
        if self._database is not None:
            return self._database

        last_error: Optional[BaseException] = None

        try:
            self._database = await self._probe(self.db_name)
            logger.info("Successfully connected to primary database %s", self.db_name)
            return self._database
        except Exception as e:
            last_error = e
            logger.warning(
                "Failed to connect to primary database %s, trying fallbacks: %s",
                self.db_name,
                e,
            )

        for fallback_name in self.fallback_db_names:
            try:
                self._database = await self._probe(fallback_name)
                logger.info("Successfully connected to fallback database %s", fallback_name)
                return self._database
            except Exception as e:
                last_error = e
                logger.warning("Failed to connect to fallback database %s: %s", fallback_name, e)

        try:
            names = await self.get_client().list_database_names()
            logger.info("Available databases: %s", ", ".join(names))
            user_dbs = [name for name in names if name not in SYSTEM_DATABASES]
            if user_dbs:
                logger.info("Attempting to use first available database: %s", user_dbs[0])
                self._database = await self._probe(user_dbs[0])
                return self._database
        except Exception as e:
            last_error = e
            logger.error("Failed to list available databases: %s", e)

        raise DatabaseUnavailable(last_error=last_error)

    async def get_database(self) -> AsyncIOMotorDatabase:
        """Get the resolved database, resolving it on first use."""
        if self._database is None:
            return await self.resolve_database()
        return self._database

    async def connect(self) -> AsyncIOMotorDatabase:
        """Ping the server and resolve the database."""
        client = self.get_client()
        await client.admin.command("ping")
        return await self.resolve_database()

    async def initialize_with_retry(
        self,
        max_attempts: int = 5,
        base_delay_ms: int = 500,
        max_delay_ms: int = 10000,
        attempt_timeout_seconds: float = 10.0,
    ) -> ConnectionAttemptResult:
        """
        Connect with exponential backoff.

        Delay before retry n (0-based) is min(base_delay_ms * 2**n, max_delay_ms).
        Each attempt is bounded by attempt_timeout_seconds. Failure is reported
        in the result, the caller decides what to do with it.
        """
        last_error: Optional[str] = None

        for attempt in range(max_attempts):
            try:
                database = await asyncio.wait_for(self.connect(), timeout=attempt_timeout_seconds)
                logger.info(
                    "MongoDB ready after %d attempt(s): %s/%s",
                    attempt + 1,
                    self.masked_uri,
                    database.name,
                )
                return ConnectionAttemptResult(
                    success=True,
                    attempts=attempt + 1,
                    database=database.name,
                )
            except asyncio.TimeoutError:
                last_error = str(ConnectionTimeout(
                    f"Connection attempt {attempt + 1} exceeded {attempt_timeout_seconds}s"
                ))
            except Exception as e:
                last_error = str(e)

            logger.warning(
                "MongoDB connection attempt %d/%d failed: %s",
                attempt + 1,
                max_attempts,
                last_error,
            )

            if attempt + 1 < max_attempts:
                delay_ms = backoff_delay_ms(attempt, base_delay_ms, max_delay_ms)
                await asyncio.sleep(delay_ms / 1000)

        logger.error("MongoDB unavailable after %d attempts: %s", max_attempts, last_error)
        return ConnectionAttemptResult(success=False, attempts=max_attempts, error=last_error)

    async def server_info(self) -> Dict[str, Any]:
        """Server build info (version etc.)."""
        return await self.get_client().admin.command("buildInfo")

    async def ping(self) -> bool:
        """True when the server answers a ping."""
        try:
            await self.get_client().admin.command("ping")
            return True
        except Exception as e:
            logger.warning("MongoDB ping failed: %s", e)
            return False

    async def close(self) -> None:
        """
        Close MongoDB connection.

        Called during application shutdown.
        """
        if self._client is not None:
            logger.info("Closing MongoDB connection")
            self._client.close()
            self._client = None
            self._database = None
            logger.info("MongoDB connection closed")


def backoff_delay_ms(attempt: int, base_delay_ms: int, max_delay_ms: int) -> int:
    """Delay before retrying after the given 0-based failed attempt."""
    return min(base_delay_ms * (2 ** attempt), max_delay_ms)
