"""RecordStore - CRUD operations for the per-collection record tables.

Provides:
- List every record of a collection (insertion order)
- Get a record by id
- Add (fails on duplicate id), update (upsert), delete (no-op when absent)
- Count records
"""

import sqlite3
from datetime import datetime, timezone
from typing import Optional, Union

import aiosqlite
from pydantic import BaseModel
from shelf_common import DuplicateRecordError, StorageError, get_logger
from shelf_contracts import COLLECTION_MODELS, Collection

from shelf_storage.connection import get_connection
from shelf_storage.schema import table_name

logger = get_logger(__name__)

CollectionLike = Union[Collection, str]


class RecordStore:
    """Storage operations for user-added records and notes.

    All operations use the global connection and commit per call.
    """

    @staticmethod
    async def get_all(collection: CollectionLike) -> list[BaseModel]:
        """List every stored record of a collection.

        Args:
            collection: Collection to read (e.g. Collection.BOOKS)

        Returns:
            Records in insertion order

        Example:
            >>> books = await RecordStore.get_all(Collection.BOOKS)
            >>> for book in books:
            ...     print(f"{book.id}: {book.title}")
        """
        collection = Collection(collection)
        conn = await get_connection()

        try:
            async with conn.execute(
                f"SELECT data FROM {table_name(collection)} ORDER BY rowid"
            ) as cursor:
                rows = await cursor.fetchall()

            return [_row_to_record(collection, row) for row in rows]

        except Exception as e:
            logger.error("record_list_failed", collection=collection.value, error=str(e))
            raise StorageError(f"Failed to list {collection.value}: {e}") from e

    @staticmethod
    async def get_by_id(collection: CollectionLike, record_id: str) -> Optional[BaseModel]:
        """Retrieve a record by id.

        Returns:
            The record if found, None otherwise
        """
        collection = Collection(collection)
        conn = await get_connection()

        try:
            async with conn.execute(
                f"SELECT data FROM {table_name(collection)} WHERE id = ?",
                (record_id,),
            ) as cursor:
                row = await cursor.fetchone()

            if row is None:
                return None

            return _row_to_record(collection, row)

        except Exception as e:
            logger.error(
                "record_get_failed",
                collection=collection.value,
                record_id=record_id,
                error=str(e),
            )
            raise StorageError(f"Failed to retrieve record: {e}") from e

    @staticmethod
    async def add(collection: CollectionLike, record: BaseModel) -> None:
        """Persist a new record.

        Args:
            collection: Target collection
            record: Record whose id is not yet stored

        Raises:
            DuplicateRecordError: If a record with the same id exists
            StorageError: If the write fails

        Example:
            >>> await RecordStore.add(Collection.NOTES, Note(id="note_1", content="hi", created_at=0))
        """
        collection = Collection(collection)
        data = _record_to_document(collection, record)
        conn = await get_connection()

        try:
            await conn.execute(
                f"INSERT INTO {table_name(collection)} (id, data, updated_at) VALUES (?, ?, ?)",
                (record.id, data, _now()),
            )
            await conn.commit()

            logger.info("record_added", collection=collection.value, record_id=record.id)

        except sqlite3.IntegrityError as e:
            await _rollback(conn)
            logger.warning("record_add_duplicate", collection=collection.value, record_id=record.id)
            raise DuplicateRecordError(
                f"Record '{record.id}' already exists in {collection.value}"
            ) from e
        except Exception as e:
            await _rollback(conn)
            logger.error(
                "record_add_failed",
                collection=collection.value,
                record_id=record.id,
                error=str(e),
            )
            raise StorageError(f"Failed to add record: {e}") from e

    @staticmethod
    async def update(collection: CollectionLike, record: BaseModel) -> None:
        """Upsert a record, overwriting any record with the same id.

        An existing record keeps its position in ``get_all`` order.

        Raises:
            StorageError: If the write fails
        """
        collection = Collection(collection)
        data = _record_to_document(collection, record)
        conn = await get_connection()

        try:
            await conn.execute(
                f"""
                INSERT INTO {table_name(collection)} (id, data, updated_at)
                VALUES (?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    data = excluded.data,
                    updated_at = excluded.updated_at
                """,
                (record.id, data, _now()),
            )
            await conn.commit()

            logger.info("record_updated", collection=collection.value, record_id=record.id)

        except Exception as e:
            await _rollback(conn)
            logger.error(
                "record_update_failed",
                collection=collection.value,
                record_id=record.id,
                error=str(e),
            )
            raise StorageError(f"Failed to update record: {e}") from e

    @staticmethod
    async def delete(collection: CollectionLike, record_id: str) -> None:
        """Remove a record. Deleting an unknown id is not an error.

        Raises:
            StorageError: If the write fails
        """
        collection = Collection(collection)
        conn = await get_connection()

        try:
            cursor = await conn.execute(
                f"DELETE FROM {table_name(collection)} WHERE id = ?",
                (record_id,),
            )
            removed = cursor.rowcount
            await cursor.close()
            await conn.commit()

            logger.info(
                "record_deleted",
                collection=collection.value,
                record_id=record_id,
                removed=removed,
            )

        except Exception as e:
            await _rollback(conn)
            logger.error(
                "record_delete_failed",
                collection=collection.value,
                record_id=record_id,
                error=str(e),
            )
            raise StorageError(f"Failed to delete record: {e}") from e

    @staticmethod
    async def count(collection: CollectionLike) -> int:
        """Count stored records of a collection."""
        collection = Collection(collection)
        conn = await get_connection()

        try:
            async with conn.execute(f"SELECT COUNT(*) FROM {table_name(collection)}") as cursor:
                row = await cursor.fetchone()
            return int(row[0])

        except Exception as e:
            logger.error("record_count_failed", collection=collection.value, error=str(e))
            raise StorageError(f"Failed to count {collection.value}: {e}") from e


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _record_to_document(collection: Collection, record: BaseModel) -> str:
    """Serialize a record, checking it belongs to ``collection``."""
    model = COLLECTION_MODELS[collection]
    if not isinstance(record, model):
        raise StorageError(
            f"{collection.value} stores {model.__name__} records, got {type(record).__name__}"
        )
    return record.model_dump_json()


def _row_to_record(collection: Collection, row: aiosqlite.Row) -> BaseModel:
    """Convert a stored JSON document to its collection's model."""
    return COLLECTION_MODELS[collection].model_validate_json(row["data"])


async def _rollback(conn: aiosqlite.Connection) -> None:
    try:
        await conn.rollback()
    except Exception as e:
        logger.warning("rollback_failed", error=str(e))
