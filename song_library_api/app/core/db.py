"""
SQLite database integration and simple migration system.

This module provides the connection parameters value passed around by
the application, a function for opening the long-lived connection
(``connect``) and the schema bootstrap applied on startup
(``init_db``).  It uses SQLite as a lightweight embedded database; to
switch to another DBMS you would replace connection logic and adapt
SQL syntax accordingly.

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order, so running
``init_db`` repeatedly against the same database is a no-op.
"""

import os
import sqlite3
from dataclasses import dataclass
from pathlib import Path

# Store-managed timestamps: UTC with millisecond precision.  The fixed
# width format keeps lexical and chronological order identical.
NOW_SQL = "strftime('%Y-%m-%dT%H:%M:%fZ', 'now')"

MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: Initial schema
    (
        1,
        f"""
        CREATE TABLE IF NOT EXISTS songs (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            group_name TEXT NOT NULL DEFAULT '',
            song_name TEXT NOT NULL DEFAULT '',
            release_date TEXT,
            text TEXT NOT NULL DEFAULT '',
            link TEXT NOT NULL DEFAULT '',
            created_at TEXT NOT NULL DEFAULT ({NOW_SQL}),
            updated_at TEXT NOT NULL DEFAULT ({NOW_SQL})
        );
        """,
    ),
]


@dataclass(frozen=True)
class ConnectionParameters:
    """Where and how to reach the song store."""

    host: str = "localhost"
    port: int = 5432
    user: str = ""
    password: str = ""
    database: str = "song_library.db"

    def describe(self) -> dict:
        """Return loggable connection details (the password is never included)."""
        return {"host": self.host, "port": self.port, "database": self.database}


def get_database_path(params: ConnectionParameters) -> str:
    """Compute the path to the SQLite database file.

    If ``params.database`` is an absolute path or ``:memory:``, use it
    directly.  Otherwise resolve it relative to the project root.
    """
    name = params.database
    if name == ":memory:" or os.path.isabs(name):
        return name
    base_dir = Path(__file__).resolve().parent.parent.parent.parent  # project root
    return str((base_dir / name).resolve())


def connect(params: ConnectionParameters) -> sqlite3.Connection:
    """Open the connection used for the lifetime of the process.

    The connection uses a row factory to access columns by name.  It is
    opened with ``check_same_thread=False`` because the ASGI server may
    create it on a different thread than the one serving requests;
    requests themselves all run on the event loop thread.
    """
    conn = sqlite3.connect(get_database_path(params), timeout=5.0, check_same_thread=False)
    conn.row_factory = sqlite3.Row
    return conn


def init_db(conn: sqlite3.Connection) -> int:
    """Apply pending migrations and return the resulting schema version.

    Creates the ``migrations`` table if it does not exist, checks the
    current schema version, and applies any new migrations defined in
    ``MIGRATIONS``.
    """
    cursor = conn.cursor()
    try:
        cursor.execute(
            "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
        )
        cursor.execute("SELECT MAX(version) AS version FROM migrations")
        row = cursor.fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        for version, sql in MIGRATIONS:
            if version > current_version:
                cursor.executescript(sql)
                cursor.execute(
                    "INSERT INTO migrations (version) VALUES (?)", (version,)
                )
                current_version = version
        conn.commit()
    finally:
        cursor.close()
    return current_version
