"""Media commands for media-shelf.

Commands:
    list      List a collection, optionally filtered
    add       Add a file (or a video link) to a collection
    rename    Change an item's title
    describe  Change an item's description
    rate      Give an item a 0-5 rating
    delete    Remove an item
    analyze   Run AI analysis on an item
"""

import asyncio
from pathlib import Path
from typing import Awaitable, Callable, Optional

import typer

from shelf_cli._shared import MediaCollection, format_record, open_library
from shelf_contracts import MediaKind
from shelf_library import IngestionRequest, Library, MediaSource

app = typer.Typer(help="Browse and manage media collections")


def _fail(message: str) -> None:
    typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(1)


def _run_edit(action: Callable[[Library], Awaitable[bool]]) -> tuple[bool, Optional[str]]:
    """Run one library edit and return ``(ok, error message)``."""

    async def _edit():
        async with open_library() as library:
            ok = await action(library)
            return ok, library.error

    return asyncio.run(_edit())


@app.command(name="list")
def list_media(
    collection: MediaCollection = typer.Argument(..., help="Collection to list"),
    search: str = typer.Option("", "--search", "-s", help="Text to find in title or description"),
    category: list[str] = typer.Option(
        [], "--category", "-c", help="Required category (repeatable)"
    ),
):
    """List the items of a collection.

    Examples:

        media-shelf media list books

        media-shelf media list videos --search universe -c Science
    """

    async def _list():
        async with open_library() as library:
            return library.search(collection.value, search, category), library.error

    try:
        records, error = asyncio.run(_list())
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if error:
        typer.echo(f"Warning: {error}", err=True)

    if not records:
        typer.echo(f"No {collection.value} found.")
        return

    typer.echo(f"Found {len(records)} {collection.value}:\n")
    for record in records:
        typer.echo(format_record(record))


@app.command()
def add(
    kind: MediaKind = typer.Argument(..., help="Kind of media"),
    file: Optional[Path] = typer.Argument(None, help="File to add"),
    link: Optional[str] = typer.Option(None, "--link", help="Video link (instead of a file)"),
    title: str = typer.Option("", "--title", "-t", help="Title (default: derived)"),
    description: str = typer.Option("", "--description", "-d", help="Description (default: derived)"),
    image_url: str = typer.Option("", "--image-url", help="Cover or thumbnail URL (default: derived)"),
):
    """Add a file, or a video link, to the library.

    Examples:

        media-shelf media add book ~/Downloads/notes.txt

        media-shelf media add video --link https://youtu.be/dQw4w9WgXcQ
    """
    if (file is None) == (link is None):
        _fail("Provide either a FILE or --link.")

    source = MediaSource.from_link(link) if link else MediaSource.from_file(file)
    request = IngestionRequest(kind, source, title=title, description=description, image_url=image_url)

    async def _add():
        async with open_library() as library:
            ingestion = await library.add_media(request)
            record = await ingestion.wait() if ingestion is not None else None
            return record, library.error

    try:
        record, error = asyncio.run(_add())
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if record is None:
        _fail(error or f"Could not add the {kind.value}.")

    typer.echo(f"Added {kind.value} {record.id}: {record.title}")


@app.command()
def rename(
    collection: MediaCollection = typer.Argument(...),
    item_id: str = typer.Argument(..., help="Item id"),
    title: str = typer.Argument(..., help="New title"),
):
    """Change an item's title."""
    try:
        ok, error = _run_edit(lambda library: library.rename(collection.value, item_id, title))
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if not ok:
        _fail(error or "Operation failed.")
    typer.echo(f"Renamed {item_id}.")


@app.command()
def describe(
    collection: MediaCollection = typer.Argument(...),
    item_id: str = typer.Argument(..., help="Item id"),
    description: str = typer.Argument(..., help="New description"),
):
    """Change an item's description."""
    try:
        ok, error = _run_edit(
            lambda library: library.describe(collection.value, item_id, description)
        )
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if not ok:
        _fail(error or "Operation failed.")
    typer.echo(f"Updated description of {item_id}.")


@app.command()
def rate(
    collection: MediaCollection = typer.Argument(...),
    item_id: str = typer.Argument(..., help="Item id"),
    rating: float = typer.Argument(..., help="Rating from 0 to 5"),
):
    """Rate an item from 0 to 5."""
    try:
        ok, error = _run_edit(lambda library: library.rate(collection.value, item_id, rating))
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if not ok:
        _fail(error or "Operation failed.")
    typer.echo(f"Rated {item_id}: {rating:g}/5")


@app.command()
def delete(
    collection: MediaCollection = typer.Argument(...),
    item_id: str = typer.Argument(..., help="Item id"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
):
    """Remove an item from a collection."""
    if not yes:
        typer.confirm(f"Delete {item_id} from {collection.value}?", abort=True)

    try:
        ok, error = _run_edit(lambda library: library.delete(collection.value, item_id))
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if not ok:
        _fail(error or "Operation failed.")
    typer.echo(f"Deleted {item_id}.")


@app.command()
def analyze(
    collection: MediaCollection = typer.Argument(...),
    item_id: str = typer.Argument(..., help="Item id"),
):
    """Run AI analysis on an item."""

    async def _analyze():
        async with open_library() as library:
            result = await library.analyze(collection.value, item_id)
            return result, library.error

    try:
        result, error = asyncio.run(_analyze())
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if result is None:
        _fail(error or "Operation failed.")

    typer.echo(result.analysis)
    if result.categories:
        typer.echo(f"\nCategories: {', '.join(result.categories)}")
