"""Shared enums and helpers for CLI commands.

Centralises the collection choice type, the ``open_library`` helper and
record formatting so every sub-app can import them without circular
dependencies.
"""

from contextlib import asynccontextmanager
from enum import Enum
from typing import AsyncIterator

from shelf_contracts import MediaRecord
from shelf_library import Library
from shelf_storage import DatabaseConfig, init_connection, release_connection

# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class MediaCollection(str, Enum):
    """Media collections addressable from the command line."""

    books = "books"
    researches = "researches"
    periodicals = "periodicals"
    videos = "videos"
    audios = "audios"
    images = "images"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


@asynccontextmanager
async def open_library() -> AsyncIterator[Library]:
    """Open the database, load the library and release the database on exit.

    Example:
        >>> async with open_library() as library:
        ...     books = library.records("books")
    """
    await init_connection(DatabaseConfig())
    try:
        library = Library()
        await library.load()
        yield library
    finally:
        await release_connection()


def format_record(record: MediaRecord) -> str:
    """One display line for a record."""
    badge = "[user]" if record.is_user_added else "[seed]"
    rating = f" ★{record.rating:g}" if record.rating is not None else ""
    categories = f"  ({', '.join(record.categories)})" if record.categories else ""
    return f"  {badge:7} {record.id:20} {record.title[:50]}{rating}{categories}"
