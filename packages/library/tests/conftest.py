"""Pytest fixtures for library tests."""

import pytest

from shelf_storage import DatabaseConfig, close_connection, get_connection


class FixedRandom:
    """Random source whose randint always returns ``value``."""

    def __init__(self, value: int = 2):
        self.value = value

    def randint(self, a: int, b: int) -> int:
        assert a <= self.value <= b
        return self.value


@pytest.fixture
def fixed_rng():
    return FixedRandom(2)


@pytest.fixture
async def shelf_db(tmp_path):
    """Open the global connection on a temporary database."""
    await close_connection()
    conn = await get_connection(DatabaseConfig(path=str(tmp_path / "shelf.db")))
    yield conn
    await close_connection()


@pytest.fixture
def text_file(tmp_path):
    path = tmp_path / "notes.txt"
    path.write_text("Remember to water the plants. " * 20, encoding="utf-8")
    return path
