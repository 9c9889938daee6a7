"""In-memory collection views.

A view is an ordered map from record id to an entry that is either a
``Placeholder`` (ingestion still running) or a ``Finalized`` record.
"""

from collections import OrderedDict
from dataclasses import dataclass
from typing import Iterator, Optional, Union

from shelf_contracts import Collection, MediaRecord


@dataclass(frozen=True)
class Placeholder:
    """Provisional record shown while an ingestion is finalizing."""

    record: MediaRecord

    @property
    def id(self) -> str:
        return self.record.id

    @property
    def is_loading(self) -> bool:
        return True


@dataclass(frozen=True)
class Finalized:
    record: MediaRecord

    @property
    def id(self) -> str:
        return self.record.id

    @property
    def is_loading(self) -> bool:
        return False


Entry = Union[Placeholder, Finalized]


class CollectionView:
    """Ordered, id-keyed entries of one media collection.

    Example:
        >>> view = CollectionView(Collection.BOOKS, seed_books)
        >>> view.prepend(Placeholder(placeholder_book))
        >>> view.replace(Finalized(final_book))
    """

    def __init__(self, collection: Collection, records=()):
        self.collection = Collection(collection)
        self._entries: "OrderedDict[str, Entry]" = OrderedDict()
        self.reset(records)

    def reset(self, records) -> None:
        """Replace every entry with finalized ``records``, in order."""
        self._entries = OrderedDict((record.id, Finalized(record)) for record in records)

    def prepend(self, entry: Entry) -> None:
        self._entries[entry.id] = entry
        self._entries.move_to_end(entry.id, last=False)

    def replace(self, entry: Entry) -> bool:
        """Swap the entry with the same id in place.

        Returns:
            False if no entry has that id (nothing is inserted)
        """
        if entry.id not in self._entries:
            return False
        self._entries[entry.id] = entry
        return True

    def remove(self, record_id: str) -> Optional[Entry]:
        return self._entries.pop(record_id, None)

    def get(self, record_id: str) -> Optional[Entry]:
        return self._entries.get(record_id)

    def entries(self) -> list[Entry]:
        return list(self._entries.values())

    def records(self) -> list[MediaRecord]:
        """Records in display order, placeholders carrying ``is_loading=True``."""
        return [entry.record for entry in self._entries.values()]

    def __contains__(self, record_id: object) -> bool:
        return record_id in self._entries

    def __iter__(self) -> Iterator[Entry]:
        return iter(list(self._entries.values()))

    def __len__(self) -> int:
        return len(self._entries)
