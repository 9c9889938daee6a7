"""Pytest fixtures for storage tests."""

import pytest

from shelf_storage import DatabaseConfig, close_connection, get_connection


@pytest.fixture
def db_config(tmp_path):
    """Configuration pointing at a fresh database file."""
    return DatabaseConfig(path=str(tmp_path / "shelf.db"))


@pytest.fixture
async def shelf_db(db_config):
    """Open the global connection on a temporary database."""
    await close_connection()
    conn = await get_connection(db_config)
    yield conn
    await close_connection()
