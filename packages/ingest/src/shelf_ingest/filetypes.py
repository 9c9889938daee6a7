"""File type detection and per-kind accepted suffixes."""

import mimetypes
from enum import Enum
from pathlib import Path
from typing import Union

from shelf_contracts import MediaKind

PathLike = Union[str, Path]


class FileType(str, Enum):
    """Document formats with a text extractor."""

    PDF = "pdf"
    EPUB = "epub"
    DOCX = "docx"
    TXT = "txt"
    UNKNOWN = "unknown"


_SUFFIX_TYPES = {
    ".pdf": FileType.PDF,
    ".epub": FileType.EPUB,
    ".docx": FileType.DOCX,
    ".txt": FileType.TXT,
}

_MIME_TYPES = {
    "application/pdf": FileType.PDF,
    "application/epub+zip": FileType.EPUB,
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": FileType.DOCX,
    "text/plain": FileType.TXT,
}

# Pre-2007 Word documents; only .docx can be read
LEGACY_FORMATS = frozenset({".doc"})

_DOCUMENT_SUFFIXES = (".pdf", ".txt", ".docx", ".epub")

ACCEPTED_SUFFIXES: dict[MediaKind, tuple[str, ...]] = {
    MediaKind.BOOK: _DOCUMENT_SUFFIXES + (".mobi", ".azw", ".azw3"),
    MediaKind.RESEARCH: _DOCUMENT_SUFFIXES,
    MediaKind.PERIODICAL: _DOCUMENT_SUFFIXES,
    MediaKind.VIDEO: (".mp4", ".mov", ".avi", ".webm"),
    MediaKind.AUDIO: (".mp3", ".wav", ".ogg", ".m4a"),
    MediaKind.IMAGE: (".jpg", ".jpeg", ".png", ".gif", ".webp"),
}


def detect_file_type(path: PathLike) -> FileType:
    """Detect a document's format from its suffix, then its guessed MIME type.

    Example:
        >>> detect_file_type("Notes.TXT")
        <FileType.TXT: 'txt'>
    """
    suffix = Path(path).suffix.lower()
    if suffix in _SUFFIX_TYPES:
        return _SUFFIX_TYPES[suffix]

    mime, _ = mimetypes.guess_type(str(path))
    return _MIME_TYPES.get(mime or "", FileType.UNKNOWN)


def is_accepted(kind: MediaKind, path: PathLike) -> bool:
    """Whether ``path`` has a suffix accepted for ``kind``."""
    return Path(path).suffix.lower() in ACCEPTED_SUFFIXES[MediaKind(kind)]


def is_legacy_document(path: PathLike) -> bool:
    return Path(path).suffix.lower() in LEGACY_FORMATS
