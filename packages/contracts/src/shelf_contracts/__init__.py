"""Media Shelf Contracts - Pure Pydantic schemas.

This package contains ONLY Pydantic schemas with no business logic.
Dependencies: pydantic only (no logging, no DB drivers).
"""

from shelf_contracts.models import (
    COLLECTION_MODELS,
    MEDIA_COLLECTIONS,
    # Collections
    Collection,
    MediaKind,
    # Records
    Audio,
    Book,
    Image,
    MediaRecord,
    Note,
    Video,
    # Analysis
    AnalysisResult,
    QuizQuestion,
    QuizResult,
    SentimentResult,
)

__version__ = "1.0.0"

__all__ = [
    # Collections
    "Collection",
    "MediaKind",
    "COLLECTION_MODELS",
    "MEDIA_COLLECTIONS",
    # Records
    "MediaRecord",
    "Book",
    "Video",
    "Audio",
    "Image",
    "Note",
    # Analysis
    "AnalysisResult",
    "QuizQuestion",
    "QuizResult",
    "SentimentResult",
]
