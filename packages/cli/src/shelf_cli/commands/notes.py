"""Note commands for media-shelf.

Commands:
    list    List notes, newest first
    add     Save a new note
    delete  Remove a note
"""

import asyncio
from datetime import datetime

import typer

from shelf_cli._shared import open_library

app = typer.Typer(help="Keep free-text notes")


@app.command(name="list")
def list_notes():
    """List notes, newest first.

    Examples:

        media-shelf notes list
    """

    async def _list():
        async with open_library() as library:
            return library.notes()

    try:
        notes = asyncio.run(_list())
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if not notes:
        typer.echo("No notes yet.")
        return

    for note in notes:
        created = datetime.fromtimestamp(note.created_at / 1000).strftime("%Y-%m-%d %H:%M")
        typer.echo(f"  {note.id:20} {created}  {note.content}")


@app.command()
def add(content: str = typer.Argument(..., help="Note text")):
    """Save a new note."""

    async def _add():
        async with open_library() as library:
            return await library.add_note(content), library.error

    try:
        note, error = asyncio.run(_add())
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if note is None:
        typer.echo(f"Error: {error}", err=True)
        raise typer.Exit(1)

    typer.echo(f"Saved note {note.id}.")


@app.command()
def delete(note_id: str = typer.Argument(..., help="Note id")):
    """Remove a note."""

    async def _delete():
        async with open_library() as library:
            return await library.delete_note(note_id), library.error

    try:
        ok, error = asyncio.run(_delete())
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if not ok:
        typer.echo(f"Error: {error}", err=True)
        raise typer.Exit(1)

    typer.echo(f"Deleted note {note_id}.")
