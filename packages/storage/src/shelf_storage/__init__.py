"""Media Shelf Storage - local SQLite storage layer.

Version: 1.0.0

This package provides:
- Database connection management (lazy, reference-counted aiosqlite connection)
- Versioned additive schema (one table per collection)
- RecordStore (CRUD operations for user-added records and notes)

Exclusive DB ownership - no shared database access from other packages.
"""

from shelf_storage.connection import (
    DatabaseConfig,
    check_connection_health,
    close_connection,
    get_connection,
    init_connection,
    release_connection,
)
from shelf_storage.record_store import RecordStore
from shelf_storage.schema import (
    MIGRATIONS,
    SCHEMA_VERSION,
    apply_migrations,
    get_schema_version,
    table_name,
)

__version__ = "1.0.0"

__all__ = [
    # Connection
    "DatabaseConfig",
    "get_connection",
    "init_connection",
    "release_connection",
    "close_connection",
    "check_connection_health",
    # Schema
    "MIGRATIONS",
    "SCHEMA_VERSION",
    "apply_migrations",
    "get_schema_version",
    "table_name",
    # Stores
    "RecordStore",
]
