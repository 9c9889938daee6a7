"""Media Shelf Library - catalog reconciliation, ingestion and library state.

This package provides:
- Library: In-memory catalog with edit, delete, notes, search and analysis
- IngestionPipeline: Placeholder -> finalized (or rolled back) media adds
- load_collection / merge_catalog / apply_rating_jitter: Catalog reconciliation
- CollectionView: Ordered id-keyed placeholder/finalized entries
- SEED_CATALOG: Built-in records
"""

from shelf_library.ingestion import (
    Ingestion,
    IngestionPipeline,
    IngestionRequest,
    IngestionState,
    MediaSource,
    new_record_id,
    next_timestamp_ms,
    validate_request,
)
from shelf_library.library import LOAD_FAILED_MESSAGE, STILL_PROCESSING_MESSAGE, Library
from shelf_library.reconcile import (
    apply_rating_jitter,
    load_collection,
    load_notes,
    merge_catalog,
    sort_notes,
)
from shelf_library.seed import SEED_CATALOG, featured_records, seed_records
from shelf_library.state import CollectionView, Entry, Finalized, Placeholder

__version__ = "1.0.0"

__all__ = [
    # Library
    "Library",
    "LOAD_FAILED_MESSAGE",
    "STILL_PROCESSING_MESSAGE",
    # Ingestion
    "Ingestion",
    "IngestionPipeline",
    "IngestionRequest",
    "IngestionState",
    "MediaSource",
    "new_record_id",
    "next_timestamp_ms",
    "validate_request",
    # Reconciliation
    "apply_rating_jitter",
    "load_collection",
    "load_notes",
    "merge_catalog",
    "sort_notes",
    # Seed catalog
    "SEED_CATALOG",
    "featured_records",
    "seed_records",
    # State
    "CollectionView",
    "Entry",
    "Finalized",
    "Placeholder",
]
