"""
Database connection managers.

SQLDatabase wraps an SQLAlchemy async engine (SQLite via aiosqlite by default).
MongoDatabase wraps a Motor client. Both expose the same lifecycle so the
application can swap storage backends through configuration alone.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from motor.motor_asyncio import (
    AsyncIOMotorClient,
    AsyncIOMotorCollection,
    AsyncIOMotorDatabase,
)
from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from taskboard.core.config import Settings
from taskboard.core.logger import logger
from taskboard.repositories.models import Base, TASKS_TABLE


class DatabaseManager(ABC):
    """Common lifecycle for storage backends."""

    name: str = "database"

    @abstractmethod
    async def connect(self) -> None:
        """Open the connection (pool) and verify it."""

    @abstractmethod
    async def disconnect(self) -> None:
        """Release the connection; safe to call when not connected."""

    @abstractmethod
    async def health_check(self) -> bool:
        """Return True if the backend answers."""

    @abstractmethod
    async def init_schema(self) -> None:
        """Create tables or indexes the task repository needs."""

    @abstractmethod
    async def drop_schema(self) -> None:
        """Remove everything init_schema created."""


class SQLDatabase(DatabaseManager):
    """Relational connection manager built on SQLAlchemy's asyncio extension."""

    name = "sql"

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        self.echo = echo
        self.engine: Optional[AsyncEngine] = None
        self.session_factory: Optional[async_sessionmaker[AsyncSession]] = None
        logger.debug("SQL connection manager initialized")

    @property
    def sqlite_path(self) -> Optional[Path]:
        """Path of the SQLite file, or None for other drivers and in-memory databases."""
        url = make_url(self.url)
        if not url.drivername.startswith("sqlite") or url.database in (None, "", ":memory:"):
            return None
        return Path(url.database)

    async def connect(self) -> None:
        """
        Create the engine and verify it with a trivial query.

        Raises:
            Exception: If the database cannot be reached
        """
        try:
            masked_url = make_url(self.url).render_as_string(hide_password=True)
            logger.info(f"Connecting to SQL database: {masked_url}")

            sqlite_path = self.sqlite_path
            if sqlite_path is not None:
                sqlite_path.parent.mkdir(parents=True, exist_ok=True)

            self.engine = create_async_engine(self.url, echo=self.echo)
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))

            self.session_factory = async_sessionmaker(self.engine, expire_on_commit=False)
            logger.info("Connected to SQL database")

        except Exception as e:
            logger.error(f"Failed to connect to SQL database: {e}")
            logger.exception("SQL connection error details:")
            raise

    async def disconnect(self) -> None:
        if self.engine is None:
            logger.debug("SQL engine not initialized, nothing to disconnect")
            return

        try:
            logger.info("Disconnecting from SQL database...")
            await self.engine.dispose()
            logger.info("Disconnected from SQL database")
        except Exception as e:
            logger.error(f"Error disconnecting from SQL database: {e}")
            logger.exception("SQL disconnection error details:")
        finally:
            self.engine = None
            self.session_factory = None

    def session(self) -> AsyncSession:
        """
        Open a new session.

        Raises:
            RuntimeError: If connect() has not been called
        """
        if self.session_factory is None:
            raise RuntimeError("Database not connected. Call connect() first.")
        return self.session_factory()

    async def health_check(self) -> bool:
        if self.engine is None:
            logger.warning("SQL engine not initialized")
            return False

        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            logger.debug("SQL health check passed")
            return True
        except Exception as e:
            logger.error(f"SQL health check failed: {e}")
            return False

    async def init_schema(self) -> None:
        if self.engine is None:
            raise RuntimeError("Database not connected")

        logger.info("Creating SQL tables...")
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info(f"SQL table ready: {TASKS_TABLE}")

    async def drop_schema(self) -> None:
        if self.engine is None:
            raise RuntimeError("Database not connected")

        logger.info("Dropping SQL tables...")
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
        logger.info("SQL tables dropped")


class MongoDB(DatabaseManager):
    """MongoDB connection manager with async support."""

    name = "mongo"

    def __init__(
        self,
        url: str,
        database: str,
        collection_name: str = TASKS_TABLE,
        max_pool_size: int = 10,
        min_pool_size: int = 1,
    ):
        self.url = url
        self.database_name = database
        self.collection_name = collection_name
        self.max_pool_size = max_pool_size
        self.min_pool_size = min_pool_size
        self.client: Optional[AsyncIOMotorClient] = None
        self.db: Optional[AsyncIOMotorDatabase] = None
        logger.debug("MongoDB connection manager initialized")

    def _masked_url(self) -> str:
        """Mask password in URL for logging."""
        masked_url = self.url
        if "@" in masked_url:
            parts = masked_url.split("@")
            if "://" in parts[0]:
                protocol_user = parts[0].split("://")
                if ":" in protocol_user[1]:
                    user = protocol_user[1].split(":")[0]
                    masked_url = f"{protocol_user[0]}://{user}:****@{parts[1]}"
        return masked_url

    async def connect(self) -> None:
        """
        Establish connection to MongoDB.

        Raises:
            Exception: If connection fails
        """
        try:
            logger.info(f"Connecting to MongoDB: {self._masked_url()}")
            logger.debug(f"Database name: {self.database_name}")

            # Create client with connection pooling
            self.client = AsyncIOMotorClient(
                self.url,
                maxPoolSize=self.max_pool_size,
                minPoolSize=self.min_pool_size,
                serverSelectionTimeoutMS=5000,
                connectTimeoutMS=10000,
                socketTimeoutMS=10000,
                tz_aware=True,
            )

            # Test connection with ping
            await self.client.admin.command("ping")

            self.db = self.client[self.database_name]

            logger.info(f"Connected to MongoDB database: {self.database_name}")
            logger.debug(
                f"Connection pool: min={self.min_pool_size}, max={self.max_pool_size}"
            )

        except Exception as e:
            logger.error(f"Failed to connect to MongoDB: {e}")
            logger.exception("MongoDB connection error details:")
            raise

    async def disconnect(self) -> None:
        """
        Close MongoDB connection.

        Safe to call even if not connected.
        """
        if self.client is None:
            logger.debug("MongoDB client not initialized, nothing to disconnect")
            return

        logger.info("Disconnecting from MongoDB...")
        self.client.close()
        self.client = None
        self.db = None
        logger.info("Disconnected from MongoDB")

    async def get_collection(self, collection_name: Optional[str] = None) -> AsyncIOMotorCollection:
        """
        Get a MongoDB collection.

        Args:
            collection_name: Name of the collection, defaults to the tasks collection

        Raises:
            RuntimeError: If database is not connected
        """
        if self.db is None:
            error_msg = "Database not connected. Call connect() first."
            logger.error(error_msg)
            raise RuntimeError(error_msg)

        return self.db[collection_name or self.collection_name]

    async def health_check(self) -> bool:
        """
        Check if MongoDB connection is healthy.

        Returns:
            True if connection is healthy, False otherwise
        """
        if self.client is None:
            logger.warning("MongoDB client not initialized")
            return False

        try:
            await self.client.admin.command("ping")
            logger.debug("MongoDB health check passed")
            return True
        except Exception as e:
            logger.error(f"MongoDB health check failed: {e}")
            return False

    async def init_schema(self) -> None:
        """
        Create indexes for the tasks collection.

        Index on created_at (descending) backs the newest-first listing.
        """
        collection = await self.get_collection()
        logger.info("Creating MongoDB indexes...")
        await collection.create_index([("created_at", -1), ("_id", -1)])
        logger.info(f"MongoDB indexes ready on {self.collection_name}")

    async def drop_schema(self) -> None:
        collection = await self.get_collection()
        logger.info(f"Dropping MongoDB collection {self.collection_name}...")
        await collection.drop()
        logger.info("MongoDB collection dropped")


def create_database(settings: Settings) -> DatabaseManager:
    """
    Build the connection manager selected by STORAGE_BACKEND.

    Raises:
        ValueError: If the backend name is unknown
    """
    if settings.storage_backend == "sql":
        return SQLDatabase(settings.database_url, echo=settings.database_echo)
    if settings.storage_backend == "mongo":
        return MongoDB(
            settings.mongodb_url,
            settings.mongodb_database,
            collection_name=settings.tasks_collection,
            max_pool_size=settings.mongodb_max_pool_size,
            min_pool_size=settings.mongodb_min_pool_size,
        )
    raise ValueError(f"Unknown storage backend: {settings.storage_backend}")
