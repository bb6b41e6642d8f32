"""
Database connection management using asyncpg for lean-identity.
"""
import logging
from contextlib import asynccontextmanager
from typing import Any, List, Optional

import asyncpg
from asyncpg import Pool, Record

from ..config.settings import IdentityStoreSettings, get_settings
from ..core.exceptions import DatabaseError

logger = logging.getLogger(__name__)


class DatabaseManager:
    """Manages the asyncpg connection pool used by the identity stores."""

    def __init__(
        self,
        database_url: Optional[str] = None,
        *,
        application_name: str = "lean-identity",
        **pool_config,
    ):
        """Initialize DatabaseManager.

        Args:
            database_url: PostgreSQL DSN
            application_name: Reported to the server as ``application_name``
            **pool_config: Additional pool configuration options
        """
        self.pool: Optional[Pool] = None
        self.dsn = database_url or ""
        if "+asyncpg" in self.dsn:
            self.dsn = self.dsn.replace("+asyncpg", "")
        self.application_name = application_name

        self.pool_config = {
            "min_size": 2,
            "max_size": 10,
            "max_inactive_connection_lifetime": 300,
            "command_timeout": 30,
            **pool_config
        }

    @classmethod
    def from_settings(cls, settings: Optional[IdentityStoreSettings] = None) -> "DatabaseManager":
        """Build a manager from identity store settings."""
        settings = settings or get_settings()
        return cls(
            settings.database_url,
            application_name=settings.application_name,
            **settings.get_pool_config(),
        )

    async def create_pool(self) -> Pool:
        """Create and return a connection pool."""
        if self.pool is None:
            if not self.dsn:
                raise DatabaseError("Database URL is not configured")

            logger.info(f"Creating database pool with size {self.pool_config['max_size']}")
            self.pool = await asyncpg.create_pool(
                self.dsn,
                server_settings={'application_name': self.application_name},
                **self.pool_config
            )
            logger.info("Database pool created successfully")
        return self.pool

    async def close_pool(self) -> None:
        """Close the connection pool."""
        if self.pool:
            await self.pool.close()
            self.pool = None
            logger.info("Database pool closed")

    @asynccontextmanager
    async def acquire(self):
        """Acquire a connection from the pool."""
        if not self.pool:
            await self.create_pool()

        async with self.pool.acquire() as connection:
            yield connection

    @asynccontextmanager
    async def transaction(self):
        """Create a transaction context.

        Commits when the block exits normally and rolls back on any exception,
        including task cancellation.
        """
        async with self.acquire() as connection:
            async with connection.transaction():
                yield connection

    async def execute(self, query: str, *args, timeout: Optional[float] = None) -> str:
        """Execute a query without returning results."""
        async with self.acquire() as connection:
            return await connection.execute(query, *args, timeout=timeout)

    async def fetch(self, query: str, *args, timeout: Optional[float] = None) -> List[Record]:
        """Fetch multiple rows."""
        async with self.acquire() as connection:
            return await connection.fetch(query, *args, timeout=timeout)

    async def fetchrow(self, query: str, *args, timeout: Optional[float] = None) -> Optional[Record]:
        """Fetch a single row."""
        async with self.acquire() as connection:
            return await connection.fetchrow(query, *args, timeout=timeout)

    async def fetchval(self, query: str, *args, column: int = 0, timeout: Optional[float] = None) -> Any:
        """Fetch a single value."""
        async with self.acquire() as connection:
            return await connection.fetchval(query, *args, column=column, timeout=timeout)

    async def health_check(self) -> bool:
        """Check database health."""
        try:
            async with self.acquire() as connection:
                result = await connection.fetchval("SELECT 1")
                return result == 1
        except (OSError, asyncpg.PostgresError, DatabaseError) as e:
            logger.error(f"Database health check failed: {e}")
            return False


_database_manager: Optional[DatabaseManager] = None


def get_database(settings: Optional[IdentityStoreSettings] = None) -> DatabaseManager:
    """Get the global database manager instance."""
    global _database_manager
    if _database_manager is None:
        _database_manager = DatabaseManager.from_settings(settings)
    return _database_manager


async def init_database(settings: Optional[IdentityStoreSettings] = None) -> DatabaseManager:
    """Initialize the global database pool."""
    logger.info("Initializing database connections...")
    db = get_database(settings)
    await db.create_pool()
    logger.info("Database initialization complete")
    return db


async def close_database() -> None:
    """Close the global database pool."""
    global _database_manager
    logger.info("Closing database connections...")
    if _database_manager:
        await _database_manager.close_pool()
        _database_manager = None
    logger.info("All database connections closed")
