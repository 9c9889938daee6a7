"""Custom error types for the media-shelf system.

All errors follow the "fail fast" principle with explicit messages.
The message of every error is suitable for showing to the end user.
"""


class MediaShelfError(Exception):
    """Base exception for all media-shelf errors."""

    pass


class StorageError(MediaShelfError):
    """Error during local database operations."""

    pass


class DuplicateRecordError(StorageError):
    """A record with the same id already exists in the collection."""

    pass


class IngestionError(MediaShelfError):
    """Error while adding a new media record."""

    pass


class UnsupportedFileTypeError(IngestionError):
    """The supplied file cannot be ingested or read.

    Raised before any state is changed, so no placeholder exists yet.
    """

    pass


class TextExtractionError(MediaShelfError):
    """A supported document could not be parsed into plain text."""

    pass


class CoverRenderError(MediaShelfError):
    """Cover or thumbnail derivation failed.

    Never fatal: callers fall back to a static placeholder image.
    """

    pass
