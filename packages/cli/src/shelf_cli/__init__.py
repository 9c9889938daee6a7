"""Media Shelf CLI - ``media-shelf`` command line."""

__version__ = "1.0.0"
