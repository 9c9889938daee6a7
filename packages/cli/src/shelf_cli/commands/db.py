"""Database commands for media-shelf.

Commands:
    info  Show database location, schema version and record counts
"""

import asyncio

import typer

from shelf_contracts import Collection
from shelf_storage import (
    DatabaseConfig,
    RecordStore,
    check_connection_health,
    get_schema_version,
    init_connection,
    release_connection,
)

app = typer.Typer(help="Inspect the local database")


@app.command()
def info():
    """Show database location, schema version and record counts.

    Examples:

        media-shelf db info
    """

    async def get_info():
        config = DatabaseConfig()
        conn = await init_connection(config)
        try:
            healthy = await check_connection_health()
            version = await get_schema_version(conn)
            counts = {collection.value: await RecordStore.count(collection) for collection in Collection}
        finally:
            await release_connection()
        return config.path, version, healthy, counts

    try:
        path, version, healthy, counts = asyncio.run(get_info())
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo("Media Shelf Database")
    typer.echo("=" * 40)
    typer.echo(f"Path:           {path}")
    typer.echo(f"Schema version: {version}")
    typer.echo(f"Healthy:        {'yes' if healthy else 'no'}")
    typer.echo()
    typer.echo("User records:")
    for name, count in counts.items():
        typer.echo(f"  {name:12} {count:5}")
