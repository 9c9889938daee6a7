"""Pydantic schemas for media-shelf records.

Records are flat documents keyed by a string id. Seed (built-in) records
and user-added records share the same schema; ``is_user_added`` tells
them apart.
"""

from enum import Enum
from typing import ClassVar, Optional

from pydantic import BaseModel, Field


class Collection(str, Enum):
    """Persisted collections, one per media kind plus notes."""

    BOOKS = "books"
    RESEARCHES = "researches"
    PERIODICALS = "periodicals"
    VIDEOS = "videos"
    AUDIOS = "audios"
    IMAGES = "images"
    NOTES = "notes"


class MediaKind(str, Enum):
    """Kinds of media a user can add."""

    BOOK = "book"
    RESEARCH = "research"
    PERIODICAL = "periodical"
    VIDEO = "video"
    AUDIO = "audio"
    IMAGE = "image"

    @property
    def collection(self) -> Collection:
        return _KIND_COLLECTIONS[self]

    @property
    def is_document(self) -> bool:
        """Books, researches and periodicals are text documents."""
        return self in (MediaKind.BOOK, MediaKind.RESEARCH, MediaKind.PERIODICAL)


_KIND_COLLECTIONS = {
    MediaKind.BOOK: Collection.BOOKS,
    MediaKind.RESEARCH: Collection.RESEARCHES,
    MediaKind.PERIODICAL: Collection.PERIODICALS,
    MediaKind.VIDEO: Collection.VIDEOS,
    MediaKind.AUDIO: Collection.AUDIOS,
    MediaKind.IMAGE: Collection.IMAGES,
}

MEDIA_COLLECTIONS: tuple[Collection, ...] = tuple(_KIND_COLLECTIONS.values())


class MediaRecord(BaseModel):
    """Fields shared by every media record.

    ``is_loading`` marks an ingestion placeholder. It is excluded from
    serialization so it can never reach the database.
    """

    # Name of the field holding the display image reference
    image_field: ClassVar[str] = "image_url"

    id: str = Field(..., min_length=1)
    title: str
    description: str = ""
    author: Optional[str] = None
    rating: Optional[float] = Field(default=None, ge=0, le=5)
    community_rating: Optional[float] = Field(default=None, ge=0, le=5)
    rating_count: Optional[int] = Field(default=None, ge=0)
    categories: list[str] = Field(default_factory=list)
    is_user_added: bool = False
    is_loading: bool = Field(default=False, exclude=True)
    file_path: Optional[str] = None
    file_name: Optional[str] = None
    download_url: Optional[str] = None
    download_action_url: Optional[str] = None

    @property
    def display_image(self) -> str:
        return getattr(self, self.image_field)

    def with_display_image(self, reference: str) -> "MediaRecord":
        """Return a copy whose display image is ``reference``."""
        return self.model_copy(update={self.image_field: reference})


class Book(MediaRecord):
    """A book, research paper or periodical issue."""

    image_url: str = ""


class Video(MediaRecord):
    """A video file or a linked (e.g. YouTube) video."""

    image_field: ClassVar[str] = "thumbnail_url"

    thumbnail_url: str = ""
    video_url: Optional[str] = None
    script: Optional[str] = None


class Audio(MediaRecord):
    image_field: ClassVar[str] = "thumbnail_url"

    thumbnail_url: str = ""


class Image(MediaRecord):
    image_field: ClassVar[str] = "url"

    url: str = ""


class Note(BaseModel):
    """A free-text note. ``created_at`` is epoch milliseconds."""

    id: str = Field(..., min_length=1)
    content: str
    created_at: int


COLLECTION_MODELS: dict[Collection, type[BaseModel]] = {
    Collection.BOOKS: Book,
    Collection.RESEARCHES: Book,
    Collection.PERIODICALS: Book,
    Collection.VIDEOS: Video,
    Collection.AUDIOS: Audio,
    Collection.IMAGES: Image,
    Collection.NOTES: Note,
}


# -----------------------------------------------------------------------------
# Analysis results (in-memory only, never persisted)
# -----------------------------------------------------------------------------


class QuizQuestion(BaseModel):
    question: str
    options: list[str]
    correct_answer_index: int = Field(..., ge=0)


class QuizResult(BaseModel):
    score: int = Field(..., ge=0)
    total: int = Field(..., ge=0)


class SentimentResult(BaseModel):
    sentiment: str
    explanation: str


class AnalysisResult(BaseModel):
    analysis: str
    categories: list[str] = Field(default_factory=list)
