"""Media ingestion pipeline.

Adding media is optimistic. A loading placeholder is inserted at the front
of the collection view right away; after a short deferral the record is
finalized (title, description and display image derived), persisted, and
swapped in for the placeholder. Any failure while finalizing removes the
placeholder again.

States: placeholder -> finalizing -> finalized | rolled_back
"""

import asyncio
import os
import time
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Mapping, Optional, Union

from shelf_common import (
    CoverRenderError,
    IngestionError,
    TextExtractionError,
    UnsupportedFileTypeError,
    get_logger,
    get_settings,
)
from shelf_contracts import COLLECTION_MODELS, Collection, MediaKind, MediaRecord
from shelf_ingest import (
    ACCEPTED_SUFFIXES,
    PLACEHOLDER_IMAGES,
    FileType,
    create_cover_from_text,
    detect_file_type,
    extract_text,
    is_accepted,
    is_legacy_document,
    render_pdf_first_page,
    render_video_thumbnail,
    youtube_thumbnail_url,
)
from shelf_storage import RecordStore

from shelf_library.state import CollectionView, Finalized, Placeholder

logger = get_logger(__name__)

PLACEHOLDER_TITLE = "Determining title…"
PLACEHOLDER_DESCRIPTION = "Generating description…"
LINK_TITLE = "YouTube video"

_TEXT_COVER_TYPES = (FileType.TXT, FileType.DOCX, FileType.EPUB)

_last_timestamp_ms = 0


def next_timestamp_ms() -> int:
    """Current epoch milliseconds, strictly increasing within the process."""
    global _last_timestamp_ms

    now = time.time_ns() // 1_000_000
    _last_timestamp_ms = max(now, _last_timestamp_ms + 1)
    return _last_timestamp_ms


def new_record_id(prefix: str = "user") -> str:
    """Generate a unique id such as ``user_1718000000000``."""
    return f"{prefix}_{next_timestamp_ms()}"


class IngestionState(str, Enum):
    PLACEHOLDER = "placeholder"
    FINALIZING = "finalizing"
    FINALIZED = "finalized"
    ROLLED_BACK = "rolled_back"


@dataclass(frozen=True)
class MediaSource:
    """Where new media comes from: a local file or, for videos, a link."""

    path: Optional[Path] = None
    link: Optional[str] = None

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "MediaSource":
        return cls(path=Path(path).expanduser())

    @classmethod
    def from_link(cls, url: str) -> "MediaSource":
        return cls(link=url.strip())

    @property
    def is_link(self) -> bool:
        return self.path is None

    @property
    def file_name(self) -> Optional[str]:
        return self.path.name if self.path is not None else None

    @property
    def uri(self) -> str:
        """``file://`` URI of the file, or the link itself."""
        if self.path is not None:
            return self.path.resolve().as_uri()
        return self.link or ""


@dataclass
class IngestionRequest:
    """User input for adding one media item.

    Empty ``title``, ``description`` and ``image_url`` are derived.
    """

    kind: MediaKind
    source: MediaSource
    title: str = ""
    description: str = ""
    image_url: str = ""


class Ingestion:
    """Handle on a running ingestion.

    Example:
        >>> ingestion = pipeline.start(request)
        >>> record = await ingestion.wait()
        >>> ingestion.state
        <IngestionState.FINALIZED: 'finalized'>
    """

    def __init__(self, record_id: str, kind: MediaKind):
        self.id = record_id
        self.kind = kind
        self.state = IngestionState.PLACEHOLDER
        self.record: Optional[MediaRecord] = None
        self.error: Optional[str] = None
        self._task: Optional[asyncio.Task] = None

    @property
    def collection(self) -> Collection:
        return self.kind.collection

    @property
    def done(self) -> bool:
        return self.state in (IngestionState.FINALIZED, IngestionState.ROLLED_BACK)

    async def wait(self) -> Optional[MediaRecord]:
        """Wait for finalization.

        Returns:
            The finalized record, or None if the ingestion rolled back
        """
        if self._task is not None:
            await self._task
        return self.record

    def __repr__(self) -> str:
        return f"Ingestion(id={self.id!r}, kind={self.kind.value}, state={self.state.value})"


def validate_request(request: IngestionRequest) -> None:
    """Reject unusable input before any state changes.

    Raises:
        UnsupportedFileTypeError: Legacy ``.doc`` or a suffix not accepted for the kind
        IngestionError: Missing/unreadable file, or a link for a non-video kind
    """
    kind = MediaKind(request.kind)
    source = request.source

    if source.is_link:
        if kind is not MediaKind.VIDEO:
            raise IngestionError("Only videos can be added from a link.")
        if not source.link:
            raise IngestionError("Please provide a video link.")
        return

    path = source.path
    if is_legacy_document(path):
        raise UnsupportedFileTypeError(
            "Legacy .doc files are not supported. Please save the document as .docx and try again."
        )
    if not path.is_file() or not os.access(path, os.R_OK):
        raise IngestionError(f"Cannot read file: {path}")
    if not is_accepted(kind, path):
        accepted = ", ".join(ACCEPTED_SUFFIXES[kind])
        raise UnsupportedFileTypeError(
            f"Unsupported file type for {kind.value}: {path.suffix or path.name}. Accepted: {accepted}"
        )


def derive_title(request: IngestionRequest) -> str:
    if request.title:
        return request.title
    if request.source.is_link:
        return LINK_TITLE
    return request.source.path.stem


def derive_description(request: IngestionRequest) -> str:
    if request.description:
        return request.description
    if request.source.is_link:
        return f"Video from YouTube: {request.source.link}"
    return f"A {MediaKind(request.kind).value} file added by the user."


class IngestionPipeline:
    """Runs ingestions against a set of collection views.

    Args:
        views: Collection views to insert placeholders into
        on_error: Called with one user-visible message when an ingestion rolls back
        defer_seconds: Delay before finalizing (default: ``Settings.ingestion_defer_seconds``)
        snippet_chars: Text shown on generated covers (default: ``Settings.cover_snippet_chars``)
    """

    def __init__(
        self,
        views: Mapping[Collection, CollectionView],
        on_error: Optional[Callable[[str], None]] = None,
        defer_seconds: Optional[float] = None,
        snippet_chars: Optional[int] = None,
    ):
        settings = get_settings()
        self.views = views
        self.on_error = on_error
        self.defer_seconds = (
            settings.ingestion_defer_seconds if defer_seconds is None else defer_seconds
        )
        self.snippet_chars = snippet_chars or settings.cover_snippet_chars
        self._pending: set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        """Number of ingestions not yet finalized or rolled back."""
        return len(self._pending)

    async def drain(self) -> None:
        """Wait until every running ingestion is finalized or rolled back."""
        while self._pending:
            await asyncio.gather(*self._pending)

    def start(self, request: IngestionRequest) -> Ingestion:
        """Validate, insert the placeholder and schedule finalization.

        Must be called from a running event loop.

        Raises:
            IngestionError: If the request is rejected (nothing is changed)
        """
        validate_request(request)

        kind = MediaKind(request.kind)
        ingestion = Ingestion(new_record_id(), kind)
        placeholder = self._make_placeholder(ingestion, request)
        self.views[kind.collection].prepend(Placeholder(placeholder))

        logger.info(
            "ingestion_started",
            record_id=ingestion.id,
            kind=kind.value,
            source=request.source.file_name or request.source.link,
        )

        task = asyncio.create_task(self._finalize(ingestion, request, placeholder))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        ingestion._task = task
        return ingestion

    def _make_placeholder(self, ingestion: Ingestion, request: IngestionRequest) -> MediaRecord:
        model = COLLECTION_MODELS[ingestion.collection]
        placeholder = model(
            id=ingestion.id,
            title=PLACEHOLDER_TITLE,
            description=PLACEHOLDER_DESCRIPTION,
            is_user_added=True,
            is_loading=True,
        )
        if ingestion.kind is MediaKind.IMAGE:
            placeholder = placeholder.with_display_image(request.source.uri)
        return placeholder

    async def _finalize(
        self, ingestion: Ingestion, request: IngestionRequest, placeholder: MediaRecord
    ) -> None:
        await asyncio.sleep(self.defer_seconds)
        ingestion.state = IngestionState.FINALIZING
        view = self.views[ingestion.collection]

        try:
            title = derive_title(request)
            image = await self.derive_image(request, title)

            source = request.source
            update = {
                "title": title,
                "description": derive_description(request),
                "is_loading": False,
                "download_url": source.uri,
                "file_name": source.file_name,
                "file_path": str(source.path) if source.path is not None else None,
                placeholder.image_field: image,
            }
            if source.is_link:
                update["video_url"] = source.link
            record = placeholder.model_copy(update=update)

            # The placeholder must still be shown both before and after the write.
            if ingestion.id not in view:
                raise IngestionError(f"Placeholder {ingestion.id} was removed before finalizing")
            await RecordStore.add(ingestion.collection, record)
            if not view.replace(Finalized(record)):
                await RecordStore.delete(ingestion.collection, ingestion.id)
                raise IngestionError(f"Placeholder {ingestion.id} was removed while finalizing")

        except Exception as e:
            view.remove(ingestion.id)
            ingestion.state = IngestionState.ROLLED_BACK
            ingestion.error = f"An error occurred while adding the {ingestion.kind.value}."
            logger.error(
                "ingestion_rolled_back",
                record_id=ingestion.id,
                kind=ingestion.kind.value,
                error=str(e),
            )
            if self.on_error is not None:
                self.on_error(ingestion.error)
            return

        ingestion.record = record
        ingestion.state = IngestionState.FINALIZED
        logger.info("ingestion_finalized", record_id=ingestion.id, kind=ingestion.kind.value, title=title)

    async def derive_image(self, request: IngestionRequest, title: str) -> str:
        """Pick the display image; derivation failures fall back to a placeholder."""
        if request.image_url:
            return request.image_url

        kind = MediaKind(request.kind)
        source = request.source

        if kind is MediaKind.IMAGE:
            return source.uri
        if kind is MediaKind.AUDIO:
            return PLACEHOLDER_IMAGES[kind]

        fallback = PLACEHOLDER_IMAGES[kind]
        try:
            if kind is MediaKind.VIDEO:
                if source.is_link:
                    return youtube_thumbnail_url(source.link) or fallback
                return await asyncio.to_thread(render_video_thumbnail, source.path)

            file_type = detect_file_type(source.path)
            if file_type is FileType.PDF:
                return await asyncio.to_thread(render_pdf_first_page, source.path)
            if file_type in _TEXT_COVER_TYPES:
                text = await asyncio.to_thread(extract_text, source.path)
                return await asyncio.to_thread(
                    create_cover_from_text, text, title, self.snippet_chars
                )
        except (CoverRenderError, TextExtractionError) as e:
            logger.warning("cover_derivation_failed", kind=kind.value, error=str(e))

        return fallback
