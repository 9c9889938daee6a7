"""Pytest fixtures for CLI tests."""

import pytest
from typer.testing import CliRunner

from shelf_common.config import get_settings


@pytest.fixture
def cli_runner():
    return CliRunner()


@pytest.fixture
def temp_database(tmp_path, monkeypatch):
    """Point the CLI at a fresh database file."""
    path = tmp_path / "library.db"
    monkeypatch.setenv("DATABASE_PATH", str(path))
    monkeypatch.setenv("INGESTION_DEFER_SECONDS", "0")
    get_settings.cache_clear()
    yield path
    get_settings.cache_clear()
