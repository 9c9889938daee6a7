"""Database connection management for the local SQLite store.

Provides:
- Database configuration
- Lazy process-wide connection (opened on first use, then reused)
- Reference-counted acquisition with explicit teardown
- Health checks
"""

import asyncio
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import aiosqlite
from shelf_common import StorageError, get_logger, get_settings

from shelf_storage.schema import apply_migrations

logger = get_logger(__name__)


@dataclass
class DatabaseConfig:
    """SQLite connection configuration.

    ``path`` falls back to the ``DATABASE_PATH`` environment variable and
    then to ``Settings.database_path``. ``":memory:"`` is accepted for
    throwaway databases.

    Attributes:
        path: Database file path
        timeout: Seconds to wait for a locked database (default: 5.0)
    """

    path: str = None  # type: ignore[assignment]
    timeout: float = 5.0

    def __post_init__(self) -> None:
        """Resolve the database path from the environment when not set."""
        if self.path is None:
            self.path = os.environ.get("DATABASE_PATH") or get_settings().database_path
        if self.path != ":memory:":
            self.path = str(Path(self.path).expanduser())


# Global connection (initialized once)
_connection: Optional[aiosqlite.Connection] = None
_connection_lock = asyncio.Lock()
_holders = 0


async def get_connection(config: Optional[DatabaseConfig] = None) -> aiosqlite.Connection:
    """Get or lazily open the global connection.

    The schema is brought up to date when the connection is opened.

    Args:
        config: Database configuration (default: DatabaseConfig())

    Returns:
        Open aiosqlite connection

    Raises:
        StorageError: If the database cannot be opened or migrated

    Example:
        >>> conn = await get_connection(DatabaseConfig(path="/tmp/shelf.db"))
        >>> async with conn.execute("SELECT 1") as cursor:
        ...     row = await cursor.fetchone()
    """
    global _connection

    # Fast path: connection already exists (no lock needed)
    if _connection is not None:
        return _connection

    async with _connection_lock:
        # Double-check after acquiring lock (another coroutine may have opened it)
        if _connection is not None:
            return _connection

        if config is None:
            config = DatabaseConfig()

        conn = None
        try:
            logger.info("opening_database", path=config.path)

            if config.path != ":memory:":
                Path(config.path).parent.mkdir(parents=True, exist_ok=True)

            conn = await aiosqlite.connect(config.path, timeout=config.timeout)
            conn.row_factory = aiosqlite.Row
            version = await apply_migrations(conn)

            _connection = conn
            logger.info("database_opened", path=config.path, schema_version=version)
            return _connection

        except Exception as e:
            logger.error("database_open_failed", path=config.path, error=str(e))
            if conn is not None:
                await conn.close()
            raise StorageError(f"Failed to open local database: {e}") from e


async def init_connection(config: Optional[DatabaseConfig] = None) -> aiosqlite.Connection:
    """Acquire the global connection and register as a holder.

    Each call must be paired with ``release_connection()``.
    """
    global _holders

    conn = await get_connection(config)
    _holders += 1
    return conn


async def release_connection() -> None:
    """Drop one holder; the connection closes when none remain."""
    global _holders

    if _holders > 0:
        _holders -= 1
    if _holders == 0:
        await close_connection()


async def close_connection() -> None:
    """Close the global connection regardless of holders.

    Should be called during application shutdown.
    """
    global _connection, _holders

    _holders = 0
    if _connection is not None:
        logger.info("closing_database")
        try:
            await _connection.close()
        except Exception as e:
            logger.warning("database_close_warning", error=str(e))
        finally:
            _connection = None
            logger.info("database_closed")


async def check_connection_health() -> bool:
    """Check database connection health.

    Returns:
        True if a trivial query succeeds, False otherwise
    """
    try:
        conn = await get_connection()
        async with conn.execute("SELECT 1") as cursor:
            row = await cursor.fetchone()
        return row is not None and row[0] == 1
    except Exception as e:
        logger.error("health_check_failed", error=str(e))
        return False
