"""Catalog reconciliation: user-added records merged over the seed catalog.

Merge order is user records (repository order) followed by the seed
records whose ids the user has not taken over.
"""

import random
from typing import Iterable, Optional, Sequence

from shelf_common import StorageError, get_logger
from shelf_contracts import Collection, MediaRecord, Note
from shelf_storage import RecordStore

from shelf_library.seed import seed_records

logger = get_logger(__name__)


def apply_rating_jitter(
    records: Iterable[MediaRecord], rng: Optional[random.Random] = None
) -> list[MediaRecord]:
    """Bump each non-zero ``rating_count`` by a random 1, 2 or 3.

    Purely cosmetic. Returns copies; the inputs are never mutated and the
    result is never persisted.

    Args:
        records: Seed records
        rng: Random source (default: the ``random`` module)
    """
    rng = rng or random
    jittered = []
    for record in records:
        if record.rating_count:
            jittered.append(
                record.model_copy(update={"rating_count": record.rating_count + rng.randint(1, 3)})
            )
        else:
            jittered.append(record.model_copy())
    return jittered


def merge_catalog(
    user_records: Sequence[MediaRecord], seed: Sequence[MediaRecord]
) -> list[MediaRecord]:
    """User records first, then seed records whose id is not user-owned."""
    user_ids = {record.id for record in user_records}
    return list(user_records) + [record for record in seed if record.id not in user_ids]


async def load_collection(
    collection: Collection,
    seed: Optional[Sequence[MediaRecord]] = None,
    rng: Optional[random.Random] = None,
) -> tuple[list[MediaRecord], bool]:
    """Reconcile one collection against the repository.

    Args:
        collection: Media collection to load
        seed: Seed records (default: the built-in catalog for the collection)
        rng: Random source for the rating jitter

    Returns:
        ``(records, ok)``; on a storage failure ``ok`` is False and the
        records are the jittered seed catalog alone

    Example:
        >>> books, ok = await load_collection(Collection.BOOKS)
    """
    collection = Collection(collection)
    jittered = apply_rating_jitter(seed_records(collection) if seed is None else seed, rng)

    try:
        user_records = await RecordStore.get_all(collection)
    except StorageError as e:
        logger.error("collection_load_failed", collection=collection.value, error=str(e))
        return jittered, False

    merged = merge_catalog(user_records, jittered)
    logger.debug(
        "collection_loaded",
        collection=collection.value,
        user_records=len(user_records),
        total=len(merged),
    )
    return merged, True


async def load_notes() -> tuple[list[Note], bool]:
    """Load every stored note; an empty list when storage fails."""
    try:
        notes = await RecordStore.get_all(Collection.NOTES)
    except StorageError as e:
        logger.error("notes_load_failed", error=str(e))
        return [], False
    return sort_notes(notes), True


def sort_notes(notes: Iterable[Note]) -> list[Note]:
    """Newest first."""
    return sorted(notes, key=lambda note: note.created_at, reverse=True)
