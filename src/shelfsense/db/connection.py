# ABOUTME: SQLite connection management for the Shelfsense book store.
# ABOUTME: Opens or creates the database, applies the schema once, and configures the connection.

import logging
import sqlite3
from pathlib import Path

from shelfsense.config import DEFAULT_DB_PATH
from shelfsense.db.schema import SCHEMA_V1

logger = logging.getLogger(__name__)


def _schema_exists(conn: sqlite3.Connection) -> bool:
    """Check if the schema has already been applied."""
    cursor = conn.execute(
        "SELECT name FROM sqlite_master WHERE type='table' AND name='schema_version'"
    )
    return cursor.fetchone() is not None


def open_store(path: Path | None = None) -> sqlite3.Connection:
    """Open or create the Shelfsense database.

    Creates the database file and parent directories if they don't exist.
    Applies the schema on first creation. Sets WAL journal mode, enables
    foreign keys, and uses sqlite3.Row for dict-like column access.

    Args:
        path: Path to the database file. Defaults to ~/.shelfsense/library.db.

    Returns:
        A configured sqlite3.Connection.
    """
    db_path = path or DEFAULT_DB_PATH
    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(str(db_path))
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode=WAL")
    conn.execute("PRAGMA foreign_keys=ON")

    if not _schema_exists(conn):
        logger.debug("Creating schema in %s", db_path)
        conn.executescript(SCHEMA_V1)

    return conn
