from __future__ import annotations

"""SQLite storage: key-value settings and the completed session history."""

import logging
import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator


logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1


@dataclass(frozen=True)
class SessionRow:
    id: int
    completed_at: str
    duration_minutes: int


class Storage:
    """Wraps the SQLite connection and transactional writes."""
    def __init__(self, db_path: str | Path) -> None:
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        try:
            conn.execute("PRAGMA journal_mode = WAL;")
        except sqlite3.DatabaseError:
            logger.debug("WAL journal mode unavailable for %s", self.db_path)
        return conn

    @contextmanager
    def _transaction(self) -> Iterator[sqlite3.Connection]:
        conn = self._connect()
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def init_db(self) -> None:
        """Creates the application tables on first launch."""
        with self._transaction() as conn:
            conn.execute("CREATE TABLE IF NOT EXISTS schema_version (version INTEGER NOT NULL)")
            row = conn.execute("SELECT version FROM schema_version LIMIT 1").fetchone()
            if not row:
                conn.execute("INSERT INTO schema_version(version) VALUES (?)", (SCHEMA_VERSION,))
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS sessions(
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    completed_at TEXT NOT NULL,
                    duration_minutes INTEGER NOT NULL
                )
                """
            )
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS settings(
                    key TEXT PRIMARY KEY,
                    value TEXT
                )
                """
            )

    def get_setting(self, key: str, default: str | None = None) -> str | None:
        with self._connect() as conn:
            row = conn.execute("SELECT value FROM settings WHERE key = ?", (key,)).fetchone()
        if not row or row["value"] is None:
            return default
        return str(row["value"])

    def set_setting(self, key: str, value: str) -> None:
        with self._transaction() as conn:
            conn.execute(
                "INSERT INTO settings(key, value) VALUES(?, ?) ON CONFLICT(key) DO UPDATE SET value=excluded.value",
                (key, value),
            )

    def insert_session(self, completed_at: str, duration_minutes: int) -> int:
        with self._transaction() as conn:
            cursor = conn.execute(
                "INSERT INTO sessions(completed_at, duration_minutes) VALUES (?, ?)",
                (completed_at, duration_minutes),
            )
            return int(cursor.lastrowid)

    def list_sessions(self, limit: int | None = None) -> list[SessionRow]:
        """Returns sessions in completion order, oldest first."""
        query = "SELECT id, completed_at, duration_minutes FROM sessions ORDER BY id ASC"
        params: tuple[int, ...] = ()
        if limit is not None:
            query = (
                "SELECT id, completed_at, duration_minutes FROM "
                "(SELECT * FROM sessions ORDER BY id DESC LIMIT ?) ORDER BY id ASC"
            )
            params = (limit,)
        with self._connect() as conn:
            rows = conn.execute(query, params).fetchall()
        return [
            SessionRow(
                id=row["id"],
                completed_at=row["completed_at"],
                duration_minutes=row["duration_minutes"],
            )
            for row in rows
        ]


def open_storage(db_path: str | Path) -> Storage:
    """Open and initialize the database, starting fresh if the file is damaged.

    A file SQLite cannot read is moved aside to ``<name>.corrupt`` so the app
    starts with default progress instead of failing.
    """
    storage = Storage(db_path)
    try:
        storage.init_db()
    except sqlite3.DatabaseError:
        corrupt_path = storage.db_path.with_name(storage.db_path.name + ".corrupt")
        logger.exception("Database %s is unreadable; moving it to %s", storage.db_path, corrupt_path)
        storage.db_path.replace(corrupt_path)
        for suffix in ("-wal", "-shm"):
            sidecar = storage.db_path.with_name(storage.db_path.name + suffix)
            if sidecar.exists():
                sidecar.unlink()
        storage.init_db()
    return storage
