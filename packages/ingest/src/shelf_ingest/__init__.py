"""Media Shelf Ingest - file types, text extraction and cover rendering.

All functions here are blocking. Async code runs them with
``asyncio.to_thread``.
"""

from shelf_ingest.covers import (
    PLACEHOLDER_IMAGES,
    create_cover_from_text,
    render_pdf_first_page,
    render_video_thumbnail,
    to_data_url,
    youtube_thumbnail_url,
    youtube_video_id,
)
from shelf_ingest.extractors import extract_text
from shelf_ingest.filetypes import (
    ACCEPTED_SUFFIXES,
    LEGACY_FORMATS,
    FileType,
    detect_file_type,
    is_accepted,
    is_legacy_document,
)

__version__ = "1.0.0"

__all__ = [
    # File types
    "FileType",
    "ACCEPTED_SUFFIXES",
    "LEGACY_FORMATS",
    "detect_file_type",
    "is_accepted",
    "is_legacy_document",
    # Text
    "extract_text",
    # Covers
    "PLACEHOLDER_IMAGES",
    "create_cover_from_text",
    "render_pdf_first_page",
    "render_video_thumbnail",
    "to_data_url",
    "youtube_thumbnail_url",
    "youtube_video_id",
]
