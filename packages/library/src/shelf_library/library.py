"""Library - in-memory catalog state and user operations.

Operations never raise for expected failures (storage errors, rejected
input). They set ``Library.error`` to one user-visible message instead and
return a falsy result. ``error`` is cleared at the start of each operation.
"""

import random
from typing import Iterable, Optional, Union

from shelf_common import IngestionError, StorageError, get_logger
from shelf_contracts import (
    MEDIA_COLLECTIONS,
    AnalysisResult,
    Collection,
    MediaRecord,
    Note,
)
from shelf_storage import RecordStore

from shelf_analysis import DISABLED_MESSAGE, AnalysisClient, get_analysis_client
from shelf_library.ingestion import (
    Ingestion,
    IngestionPipeline,
    IngestionRequest,
    next_timestamp_ms,
)
from shelf_library.reconcile import load_collection, load_notes, sort_notes
from shelf_library.seed import featured_records
from shelf_library.state import CollectionView, Finalized, Placeholder

logger = get_logger(__name__)

CollectionLike = Union[Collection, str]

LOAD_FAILED_MESSAGE = "We could not load your saved data."
STILL_PROCESSING_MESSAGE = "This item is still being added. Try again once it has finished."


class Library:
    """The user's media library.

    Example:
        >>> library = Library()
        >>> await library.load()
        >>> ingestion = await library.add_media(
        ...     IngestionRequest(MediaKind.BOOK, MediaSource.from_file("notes.txt"))
        ... )
        >>> await ingestion.wait()
        >>> library.records(Collection.BOOKS)[0].title
        'notes'
    """

    def __init__(
        self,
        analysis_client: Optional[AnalysisClient] = None,
        rng: Optional[random.Random] = None,
        defer_seconds: Optional[float] = None,
    ):
        self.views: dict[Collection, CollectionView] = {
            collection: CollectionView(collection) for collection in MEDIA_COLLECTIONS
        }
        self._notes: list[Note] = []
        self._rng = rng
        self.analysis = analysis_client or get_analysis_client()
        self.error: Optional[str] = None
        self.pipeline = IngestionPipeline(
            self.views, on_error=self._report, defer_seconds=defer_seconds
        )

    def _report(self, message: str) -> None:
        self.error = message
        logger.warning("user_error", message=message)

    def _view(self, collection: CollectionLike) -> CollectionView:
        collection = Collection(collection)
        if collection not in self.views:
            raise ValueError(f"Not a media collection: {collection.value}")
        return self.views[collection]

    # -------------------------------------------------------------------------
    # Loading and queries
    # -------------------------------------------------------------------------

    async def load(self) -> None:
        """Reconcile every media collection and load notes.

        A storage failure in any collection produces a single message for
        the whole load; the affected collections show seed records only.
        Running ingestions are waited for first so their records are read
        back from storage.
        """
        await self.pipeline.drain()
        self.error = None
        failed = []

        for collection, view in self.views.items():
            records, ok = await load_collection(collection, rng=self._rng)
            view.reset(records)
            if not ok:
                failed.append(collection.value)

        notes, ok = await load_notes()
        if ok:
            self._notes = notes
        else:
            failed.append(Collection.NOTES.value)

        if failed:
            logger.error("library_load_degraded", collections=failed)
            self._report(LOAD_FAILED_MESSAGE)
        else:
            logger.info(
                "library_loaded",
                **{collection.value: len(view) for collection, view in self.views.items()},
                notes=len(self._notes),
            )

    def records(self, collection: CollectionLike) -> list[MediaRecord]:
        return self._view(collection).records()

    def get(self, collection: CollectionLike, record_id: str) -> Optional[MediaRecord]:
        entry = self._view(collection).get(record_id)
        return entry.record if entry is not None else None

    def search(
        self,
        collection: CollectionLike,
        query: str = "",
        categories: Iterable[str] = (),
    ) -> list[MediaRecord]:
        """Filter a collection by text and categories.

        Args:
            collection: Media collection
            query: Case-insensitive substring of the title or description
            categories: Every one of these must be on the record

        Returns:
            Matching records in display order
        """
        needle = query.lower()
        wanted = set(categories)
        return [
            record
            for record in self.records(collection)
            if (needle in record.title.lower() or needle in record.description.lower())
            and wanted.issubset(record.categories)
        ]

    def categories(self, collection: CollectionLike) -> list[str]:
        """Sorted union of every record's categories."""
        return sorted({tag for record in self.records(collection) for tag in record.categories})

    def featured(self) -> list[MediaRecord]:
        return featured_records()

    def notes(self) -> list[Note]:
        """Notes, newest first."""
        return sort_notes(self._notes)

    # -------------------------------------------------------------------------
    # Adding media
    # -------------------------------------------------------------------------

    async def add_media(self, request: IngestionRequest) -> Optional[Ingestion]:
        """Start adding a media item.

        Returns:
            The running ingestion, or None if the input was rejected
        """
        self.error = None
        try:
            return self.pipeline.start(request)
        except IngestionError as e:
            logger.warning("ingestion_rejected", kind=str(request.kind), error=str(e))
            self._report(str(e))
            return None

    # -------------------------------------------------------------------------
    # Editing
    # -------------------------------------------------------------------------

    async def rename(self, collection: CollectionLike, record_id: str, title: str) -> bool:
        return await self._update(
            collection, record_id, {"title": title}, "Failed to update the title."
        )

    async def describe(self, collection: CollectionLike, record_id: str, description: str) -> bool:
        return await self._update(
            collection,
            record_id,
            {"description": description},
            "Failed to update the description.",
        )

    async def rate(self, collection: CollectionLike, record_id: str, rating: float) -> bool:
        if not 0 <= rating <= 5:
            self._report("Rating must be between 0 and 5.")
            return False
        return await self._update(
            collection, record_id, {"rating": rating}, "Failed to save the rating."
        )

    async def _update(
        self, collection: CollectionLike, record_id: str, changes: dict, failure: str
    ) -> bool:
        """Apply ``changes`` in memory; user-added records are persisted first."""
        self.error = None
        view = self._view(collection)
        entry = view.get(record_id)
        if entry is None:
            self._report(f"No item with id {record_id}.")
            return False
        if isinstance(entry, Placeholder):
            self._report(STILL_PROCESSING_MESSAGE)
            return False

        updated = entry.record.model_copy(update=changes)
        if updated.is_user_added:
            try:
                await RecordStore.update(view.collection, updated)
            except StorageError as e:
                logger.error("record_update_failed", record_id=record_id, error=str(e))
                self._report(failure)
                return False

        view.replace(type(entry)(updated))
        return True

    async def delete(self, collection: CollectionLike, record_id: str) -> bool:
        """Delete from the repository, then from memory.

        Seed records only disappear until the next load.
        """
        self.error = None
        view = self._view(collection)
        entry = view.get(record_id)
        if isinstance(entry, Placeholder):
            self._report(STILL_PROCESSING_MESSAGE)
            return False
        title = entry.record.title if entry is not None else record_id

        try:
            await RecordStore.delete(view.collection, record_id)
        except StorageError as e:
            logger.error("record_delete_failed", record_id=record_id, error=str(e))
            self._report(f"Failed to delete item: {title}")
            return False

        view.remove(record_id)
        return True

    # -------------------------------------------------------------------------
    # Notes
    # -------------------------------------------------------------------------

    async def add_note(self, content: str) -> Optional[Note]:
        self.error = None
        created_at = next_timestamp_ms()
        note = Note(id=f"note_{created_at}", content=content, created_at=created_at)

        try:
            await RecordStore.add(Collection.NOTES, note)
        except StorageError as e:
            logger.error("note_add_failed", error=str(e))
            self._report("Failed to save the note.")
            return None

        self._notes.insert(0, note)
        return note

    async def delete_note(self, note_id: str) -> bool:
        self.error = None
        try:
            await RecordStore.delete(Collection.NOTES, note_id)
        except StorageError as e:
            logger.error("note_delete_failed", note_id=note_id, error=str(e))
            self._report("Failed to delete the note.")
            return False

        self._notes = [note for note in self._notes if note.id != note_id]
        return True

    # -------------------------------------------------------------------------
    # Analysis
    # -------------------------------------------------------------------------

    async def analyze(self, collection: CollectionLike, record_id: str) -> Optional[AnalysisResult]:
        """Run content analysis on a record.

        With the disabled backend this only sets the "disabled" message.
        """
        self.error = None
        if not await self.analysis.is_available():
            self._report(DISABLED_MESSAGE)
            return None

        record = self.get(collection, record_id)
        if record is None:
            self._report(f"No item with id {record_id}.")
            return None

        return await self.analysis.analyze(f"{record.title}\n\n{record.description}")

    def is_finalized(self, collection: CollectionLike, record_id: str) -> bool:
        return isinstance(self._view(collection).get(record_id), Finalized)
