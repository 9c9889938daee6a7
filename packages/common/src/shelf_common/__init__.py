"""Media Shelf Common - shared errors, logging and settings.

Dependencies: pydantic-settings and structlog only.
"""

from shelf_common.config import Settings, get_settings
from shelf_common.errors import (
    CoverRenderError,
    DuplicateRecordError,
    IngestionError,
    MediaShelfError,
    StorageError,
    TextExtractionError,
    UnsupportedFileTypeError,
)
from shelf_common.logging_config import configure_logging, get_logger

__version__ = "1.0.0"

__all__ = [
    # Settings
    "Settings",
    "get_settings",
    # Logging
    "configure_logging",
    "get_logger",
    # Errors
    "MediaShelfError",
    "StorageError",
    "DuplicateRecordError",
    "IngestionError",
    "UnsupportedFileTypeError",
    "TextExtractionError",
    "CoverRenderError",
]
