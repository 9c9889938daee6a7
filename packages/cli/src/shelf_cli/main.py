"""Media Shelf CLI - Main entry point.

Provides the ``media-shelf`` command-line interface.
Sub-commands are grouped by domain: media, notes and db.

Usage:
    media-shelf media list books --search history
    media-shelf media add book ~/Downloads/notes.txt
    media-shelf notes add "Return the library copy"
    media-shelf db info
"""

import typer

from shelf_cli.commands.db import app as db_app
from shelf_cli.commands.media import app as media_app
from shelf_cli.commands.notes import app as notes_app
from shelf_common import configure_logging, get_settings

# ---------------------------------------------------------------------------
# Root Typer app
# ---------------------------------------------------------------------------

app = typer.Typer(
    name="media-shelf",
    help="Catalog books, papers, periodicals, videos, audio and images in a local library.",
    add_completion=False,
)

# Register sub-apps
app.add_typer(media_app, name="media")
app.add_typer(notes_app, name="notes")
app.add_typer(db_app, name="db")


@app.callback()
def setup(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at LOG_LEVEL instead of WARNING"),
):
    """Configure logging before any command runs."""
    configure_logging(level=get_settings().log_level if verbose else "WARNING")


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
