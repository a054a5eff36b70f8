"""
SQLite storage gateway for songs.

``SQLiteSongRepository`` owns the single connection used by the
process and translates song operations into parameterized SQL.  Every
write is committed before the method returns.  Driver errors are
logged with the operation, the song id and the cause, then re-raised
as ``StorageError`` so callers never see ``sqlite3`` exceptions.
Records handed back are ``SongRead`` instances built from rows and
hold no reference to the connection.
"""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from datetime import datetime
from typing import Iterator, List, Optional

from song_library_api.app.core.db import NOW_SQL, ConnectionParameters, connect, init_db
from song_library_api.app.core.exceptions import (
    NotFoundError,
    StorageConnectionError,
    StorageError,
    ValidationError,
)
from song_library_api.app.repositories.base import SongRepository
from song_library_api.app.schemas.song import SongCreate, SongRead, SongUpdate

# Columns a caller may write; everything else is store-managed.
WRITABLE_COLUMNS = ("group_name", "song_name", "release_date", "text", "link")

# SQLite INTEGER is a signed 64-bit value; no stored id lies outside it.
MIN_ID = -(2 ** 63)
MAX_ID = 2 ** 63 - 1


class SQLiteSongRepository(SongRepository):
    """Song repository backed by a long-lived SQLite connection."""

    def __init__(self, conn: sqlite3.Connection, logger: Optional[logging.Logger] = None):
        self.conn = conn
        self.logger = logger or logging.getLogger(__name__)

    @classmethod
    def initialize(
        cls, params: ConnectionParameters, logger: Optional[logging.Logger] = None
    ) -> "SQLiteSongRepository":
        """Connect to the store and make sure the schema exists.

        Safe to call repeatedly against the same database.  Raises
        ``StorageConnectionError`` if the database cannot be opened or
        the schema cannot be applied.
        """
        logger = logger or logging.getLogger(__name__)
        try:
            conn = connect(params)
        except sqlite3.Error as exc:
            logger.error("Failed to connect to the database %s: %s", params.describe(), exc)
            raise StorageConnectionError("Unable to connect to database", details=str(exc)) from exc
        try:
            version = init_db(conn)
        except sqlite3.Error as exc:
            conn.close()
            logger.error("Failed to run migrations: %s", exc)
            raise StorageConnectionError("Migrations failed", details=str(exc)) from exc
        logger.info(
            "Database connected and migrations applied (schema version %s): %s",
            version,
            params.describe(),
        )
        return cls(conn, logger)

    @contextmanager
    def _translate(self, operation: str, song_id: Optional[int] = None) -> Iterator[sqlite3.Cursor]:
        """Yield a cursor; turn driver errors into ``StorageError``."""
        cursor = None
        try:
            cursor = self.conn.cursor()
            yield cursor
        except sqlite3.Error as exc:
            self._rollback()
            self.logger.error(
                "Storage failure during %s (song_id=%s): %s", operation, song_id, exc
            )
            raise StorageError(operation, exc, song_id=song_id) from exc
        finally:
            if cursor is not None:
                cursor.close()

    def _rollback(self) -> None:
        try:
            if self.conn.in_transaction:
                self.conn.rollback()
        except sqlite3.ProgrammingError:
            # Connection already closed; nothing to roll back.
            pass

    def list(self) -> List[SongRead]:
        """Return all songs ordered by ascending ``id``."""
        with self._translate("retrieve songs") as cursor:
            rows = cursor.execute("SELECT * FROM songs ORDER BY id ASC").fetchall()
        return [self._row_to_song(row) for row in rows]

    def get_by_id(self, song_id: int) -> SongRead:
        self._check_id(song_id)
        with self._translate("retrieve song", song_id) as cursor:
            row = cursor.execute("SELECT * FROM songs WHERE id = ?", (song_id,)).fetchone()
        if row is None:
            raise NotFoundError(song_id)
        return self._row_to_song(row)

    def create(self, song: SongCreate) -> SongRead:
        """Insert a new song and return it as stored."""
        if not isinstance(song, SongCreate):
            raise ValidationError(f"expected SongCreate, got {type(song).__name__}")
        values = self._to_columns(song.model_dump())
        with self._translate("add song") as cursor:
            cursor.execute(
                f"INSERT INTO songs ({', '.join(WRITABLE_COLUMNS)}) "
                f"VALUES ({', '.join('?' for _ in WRITABLE_COLUMNS)})",
                tuple(values[column] for column in WRITABLE_COLUMNS),
            )
            song_id = cursor.lastrowid
            self.conn.commit()
        return self.get_by_id(song_id)

    def update(self, song_id: int, changes: SongUpdate) -> None:
        """Merge ``changes`` into the stored song.

        Only fields present with a non-null value are written;
        ``updated_at`` is refreshed even when nothing else changes and
        never moves backward.
        """
        if not isinstance(changes, SongUpdate):
            raise ValidationError(f"expected SongUpdate, got {type(changes).__name__}")
        self._check_id(song_id)
        values = self._to_columns(changes.changes())
        assignments = [f"{column} = ?" for column in values]
        assignments.append(f"updated_at = MAX(updated_at, {NOW_SQL})")
        with self._translate("update song", song_id) as cursor:
            cursor.execute(
                f"UPDATE songs SET {', '.join(assignments)} WHERE id = ?",
                (*values.values(), song_id),
            )
            if cursor.rowcount == 0:
                self._rollback()
                raise NotFoundError(song_id)
            self.conn.commit()

    def delete(self, song_id: int) -> None:
        self._check_id(song_id)
        with self._translate("delete song", song_id) as cursor:
            cursor.execute("DELETE FROM songs WHERE id = ?", (song_id,))
            if cursor.rowcount == 0:
                self._rollback()
                raise NotFoundError(song_id)
            self.conn.commit()

    def close(self) -> None:
        self.conn.close()
        self.logger.info("Database connection closed")

    @staticmethod
    def _check_id(song_id: int) -> None:
        if not MIN_ID <= song_id <= MAX_ID:
            raise NotFoundError(song_id)

    @staticmethod
    def _to_columns(fields: dict) -> dict:
        """Keep writable columns and store datetimes as ISO-8601 text."""
        values = {}
        for column in WRITABLE_COLUMNS:
            if column not in fields:
                continue
            value = fields[column]
            if isinstance(value, datetime):
                value = value.isoformat()
            values[column] = value
        return values

    @staticmethod
    def _row_to_song(row: sqlite3.Row) -> SongRead:
        """Convert a database row to a SongRead schema instance."""
        return SongRead.model_validate(dict(row))
