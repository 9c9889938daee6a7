"""Tests for CLI commands.

Tests the sub-app structure: media, notes, db. Most tests patch
``asyncio.run`` to isolate output formatting; the end-to-end tests at the
bottom run against a temporary database.
"""

from unittest.mock import patch

import pytest

from shelf_cli.main import app
from shelf_contracts import AnalysisResult, Book, Note

pytestmark = pytest.mark.unit


def _returning(value):
    """Stand-in for ``asyncio.run`` that closes the coroutine and returns ``value``."""

    def run(coro):
        coro.close()
        return value

    return run


def _raising(error):
    def run(coro):
        coro.close()
        raise error

    return run


# ============================================================================
# media list
# ============================================================================


class TestMediaList:
    """Tests for the media list command."""

    def test_empty_collection(self, cli_runner):
        """An empty result prints a friendly message."""
        with patch("shelf_cli.commands.media.asyncio.run") as mock_run:
            mock_run.side_effect = _returning(([], None))

            result = cli_runner.invoke(app, ["media", "list", "audios"])

            assert result.exit_code == 0
            assert "No audios found" in result.stdout

    def test_lists_records(self, cli_runner):
        """Records are printed with badge, id and title."""
        records = [
            Book(id="user_1", title="My Notes", is_user_added=True, rating=4),
            Book(id="book_1", title="The Art of Reading", categories=["Education"]),
        ]
        with patch("shelf_cli.commands.media.asyncio.run") as mock_run:
            mock_run.side_effect = _returning((records, None))

            result = cli_runner.invoke(app, ["media", "list", "books"])

            assert result.exit_code == 0
            assert "Found 2 books" in result.stdout
            assert "[user]" in result.stdout
            assert "★4" in result.stdout
            assert "(Education)" in result.stdout

    def test_load_warning(self, cli_runner):
        """A degraded load still lists seed records."""
        with patch("shelf_cli.commands.media.asyncio.run") as mock_run:
            mock_run.side_effect = _returning(([Book(id="book_1", title="Seed")], "We could not load your saved data."))

            result = cli_runner.invoke(app, ["media", "list", "books"])

            assert result.exit_code == 0
            assert "Seed" in result.stdout

    def test_invalid_collection(self, cli_runner):
        result = cli_runner.invoke(app, ["media", "list", "podcasts"])

        assert result.exit_code != 0

    def test_connection_error(self, cli_runner):
        """Errors exit with status 1."""
        with patch(
            "shelf_cli.commands.media.asyncio.run",
            side_effect=_raising(ConnectionError("DB down")),
        ):
            result = cli_runner.invoke(app, ["media", "list", "books"])

            assert result.exit_code == 1
            assert "Error" in result.output


# ============================================================================
# media add / edit
# ============================================================================


class TestMediaAdd:
    """Tests for the media add command."""

    def test_requires_file_or_link(self, cli_runner):
        result = cli_runner.invoke(app, ["media", "add", "book"])

        assert result.exit_code == 1
        assert "either a FILE or --link" in result.output

    def test_rejects_file_and_link(self, cli_runner, tmp_path):
        path = tmp_path / "a.txt"
        path.write_text("x")

        result = cli_runner.invoke(app, ["media", "add", "video", str(path), "--link", "https://youtu.be/x"])

        assert result.exit_code == 1

    def test_added(self, cli_runner, tmp_path):
        with patch("shelf_cli.commands.media.asyncio.run") as mock_run:
            mock_run.side_effect = _returning((Book(id="user_5", title="notes", is_user_added=True), None))

            result = cli_runner.invoke(app, ["media", "add", "book", str(tmp_path / "notes.txt")])

            assert result.exit_code == 0
            assert "Added book user_5: notes" in result.stdout

    def test_rejected(self, cli_runner, tmp_path):
        with patch("shelf_cli.commands.media.asyncio.run") as mock_run:
            mock_run.side_effect = _returning((None, "Legacy .doc files are not supported."))

            result = cli_runner.invoke(app, ["media", "add", "book", str(tmp_path / "old.doc")])

            assert result.exit_code == 1
            assert "Legacy .doc" in result.output


class TestMediaEdit:
    """Tests for rename, describe, rate, delete and analyze."""

    def test_rename(self, cli_runner):
        with patch("shelf_cli.commands.media.asyncio.run") as mock_run:
            mock_run.side_effect = _returning((True, None))

            result = cli_runner.invoke(app, ["media", "rename", "books", "user_1", "New title"])

            assert result.exit_code == 0
            assert "Renamed user_1" in result.stdout

    def test_rate_failure(self, cli_runner):
        with patch("shelf_cli.commands.media.asyncio.run") as mock_run:
            mock_run.side_effect = _returning((False, "Rating must be between 0 and 5."))

            result = cli_runner.invoke(app, ["media", "rate", "books", "user_1", "9"])

            assert result.exit_code == 1
            assert "between 0 and 5" in result.output

    def test_delete_with_yes(self, cli_runner):
        with patch("shelf_cli.commands.media.asyncio.run") as mock_run:
            mock_run.side_effect = _returning((True, None))

            result = cli_runner.invoke(app, ["media", "delete", "videos", "user_2", "--yes"])

            assert result.exit_code == 0
            assert "Deleted user_2" in result.stdout

    def test_delete_aborted(self, cli_runner):
        with patch("shelf_cli.commands.media.asyncio.run") as mock_run:
            result = cli_runner.invoke(app, ["media", "delete", "videos", "user_2"], input="n\n")

            assert result.exit_code != 0
            mock_run.assert_not_called()

    def test_analyze_disabled(self, cli_runner):
        with patch("shelf_cli.commands.media.asyncio.run") as mock_run:
            mock_run.side_effect = _returning((None, "AI analysis features are currently disabled."))

            result = cli_runner.invoke(app, ["media", "analyze", "books", "book_1"])

            assert result.exit_code == 1
            assert "currently disabled" in result.output

    def test_analyze_result(self, cli_runner):
        with patch("shelf_cli.commands.media.asyncio.run") as mock_run:
            mock_run.side_effect = _returning((AnalysisResult(analysis="Great read", categories=["Fiction"]), None))

            result = cli_runner.invoke(app, ["media", "analyze", "books", "book_1"])

            assert result.exit_code == 0
            assert "Great read" in result.stdout
            assert "Categories: Fiction" in result.stdout


# ============================================================================
# notes / db
# ============================================================================


class TestNotes:
    """Tests for the notes sub-app."""

    def test_no_notes(self, cli_runner):
        with patch("shelf_cli.commands.notes.asyncio.run") as mock_run:
            mock_run.side_effect = _returning([])

            result = cli_runner.invoke(app, ["notes", "list"])

            assert result.exit_code == 0
            assert "No notes yet" in result.stdout

    def test_lists_notes(self, cli_runner):
        with patch("shelf_cli.commands.notes.asyncio.run") as mock_run:
            mock_run.side_effect = _returning([Note(id="note_1", content="buy milk", created_at=1700000000000)])

            result = cli_runner.invoke(app, ["notes", "list"])

            assert "buy milk" in result.stdout

    def test_add_failure(self, cli_runner):
        with patch("shelf_cli.commands.notes.asyncio.run") as mock_run:
            mock_run.side_effect = _returning((None, "Failed to save the note."))

            result = cli_runner.invoke(app, ["notes", "add", "hello"])

            assert result.exit_code == 1
            assert "Failed to save the note" in result.output


class TestDbInfo:
    """Tests for db info."""

    def test_info(self, cli_runner):
        with patch("shelf_cli.commands.db.asyncio.run") as mock_run:
            mock_run.side_effect = _returning(("/tmp/library.db", 4, True, {"books": 2, "notes": 0}))

            result = cli_runner.invoke(app, ["db", "info"])

            assert result.exit_code == 0
            assert "Schema version: 4" in result.stdout
            assert "books" in result.stdout


# ============================================================================
# End to end (real database)
# ============================================================================


class TestEndToEnd:
    """Commands against a temporary database."""

    def test_add_book_then_list(self, cli_runner, temp_database, tmp_path):
        path = tmp_path / "notes.txt"
        path.write_text("Some words to put on the cover.", encoding="utf-8")

        added = cli_runner.invoke(app, ["media", "add", "book", str(path)])
        assert added.exit_code == 0, added.output
        assert ": notes" in added.stdout

        listed = cli_runner.invoke(app, ["media", "list", "books", "--search", "notes"])
        assert listed.exit_code == 0
        assert "[user]" in listed.stdout

    def test_notes_round_trip(self, cli_runner, temp_database):
        assert cli_runner.invoke(app, ["notes", "add", "call the library"]).exit_code == 0

        listed = cli_runner.invoke(app, ["notes", "list"])

        assert "call the library" in listed.stdout

    def test_db_info(self, cli_runner, temp_database):
        result = cli_runner.invoke(app, ["db", "info"])

        assert result.exit_code == 0
        assert str(temp_database) in result.stdout
        assert "Healthy:        yes" in result.stdout
