"""Versioned, additive schema for the local store.

The schema version lives in SQLite's ``PRAGMA user_version``. Each
migration only creates collections that did not exist before, so opening
an older database never touches its rows.
"""

import aiosqlite
from shelf_common import get_logger
from shelf_contracts import Collection

logger = get_logger(__name__)

# (version, collections introduced by that version)
MIGRATIONS: list[tuple[int, tuple[Collection, ...]]] = [
    (1, (Collection.BOOKS, Collection.NOTES)),
    (2, (Collection.RESEARCHES, Collection.PERIODICALS)),
    (3, (Collection.VIDEOS,)),
    (4, (Collection.AUDIOS, Collection.IMAGES)),
]

SCHEMA_VERSION = MIGRATIONS[-1][0]


def table_name(collection: Collection) -> str:
    """Return the table backing ``collection`` (e.g. ``user_books``)."""
    return f"user_{Collection(collection).value}"


async def get_schema_version(conn: aiosqlite.Connection) -> int:
    async with conn.execute("PRAGMA user_version") as cursor:
        row = await cursor.fetchone()
    return int(row[0]) if row else 0


async def apply_migrations(conn: aiosqlite.Connection, target: int = SCHEMA_VERSION) -> int:
    """Apply every migration newer than the database, up to ``target``.

    Returns:
        The schema version after migrating
    """
    current = await get_schema_version(conn)

    for version, collections in MIGRATIONS:
        if version <= current or version > target:
            continue

        for collection in collections:
            await conn.execute(
                f"""
                CREATE TABLE IF NOT EXISTS {table_name(collection)} (
                    id TEXT PRIMARY KEY,
                    data TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
                """
            )
        await conn.execute(f"PRAGMA user_version = {int(version)}")
        await conn.commit()
        current = version

        logger.info(
            "schema_migrated",
            version=version,
            collections=[c.value for c in collections],
        )

    return current
