"""SQLite-backed store (single ``kv`` table, one transaction per batch)."""

import os
import sqlite3
from typing import Dict, Optional

from .base import Batch, KeyValueStore, StoreError

DB_FILENAME = "kvbench.sqlite3"

JOURNAL_MODES = frozenset({"DELETE", "TRUNCATE", "PERSIST", "MEMORY", "WAL", "OFF"})
SYNCHRONOUS_LEVELS = frozenset({"OFF", "NORMAL", "FULL", "EXTRA", "0", "1", "2", "3"})


class SqliteBatch(Batch):
    def __init__(self, conn: sqlite3.Connection):
        super().__init__()
        self._conn = conn
        try:
            self._conn.execute("BEGIN")
        except sqlite3.Error as e:
            raise StoreError(f"sqlite begin failed: {e}") from e

    def _put(self, key: bytes, value: bytes) -> None:
        try:
            self._conn.execute(
                "INSERT OR REPLACE INTO kv (key, value) VALUES (?, ?)", (key, value)
            )
        except sqlite3.Error as e:
            raise StoreError(f"sqlite put failed: {e}") from e

    def _delete(self, key: bytes) -> None:
        try:
            self._conn.execute("DELETE FROM kv WHERE key = ?", (key,))
        except sqlite3.Error as e:
            raise StoreError(f"sqlite delete failed: {e}") from e

    def _commit(self) -> None:
        try:
            self._conn.execute("COMMIT")
        except sqlite3.Error as e:
            raise StoreError(f"sqlite commit failed: {e}") from e

    def _abort(self) -> None:
        try:
            # a failed COMMIT may already have ended the transaction
            if self._conn.in_transaction:
                self._conn.execute("ROLLBACK")
        except sqlite3.Error as e:
            raise StoreError(f"sqlite rollback failed: {e}") from e


class SqliteStore(KeyValueStore):
    """SQLite store.

    ``path`` may be a directory (the database file is created inside it), a
    file path, or ``:memory:``.

    Options:
        journal_mode: SQLite journal mode (default WAL)
        synchronous: SQLite synchronous setting (default OFF)
    """

    name = "sqlite"

    def __init__(self, path: str, options: Optional[Dict] = None):
        super().__init__(path, options)
        journal_mode = self._pragma_value('journal_mode', 'WAL', JOURNAL_MODES)
        synchronous = self._pragma_value('synchronous', 'OFF', SYNCHRONOUS_LEVELS)
        self.db_path = self._resolve_path(path)
        try:
            # autocommit mode; batches issue BEGIN/COMMIT themselves
            self._conn = sqlite3.connect(self.db_path, isolation_level=None)
            self._conn.execute(f"PRAGMA journal_mode={journal_mode}")
            self._conn.execute(f"PRAGMA synchronous={synchronous}")
            self._conn.execute(
                "CREATE TABLE IF NOT EXISTS kv (key BLOB PRIMARY KEY, value BLOB NOT NULL)"
            )
        except sqlite3.Error as e:
            raise StoreError(f"Failed to open sqlite store at {self.db_path}: {e}") from e
        self.logger.debug(f"Opened sqlite store at {self.db_path}")

    def _pragma_value(self, option: str, default: str, allowed) -> str:
        # PRAGMA arguments cannot be bound as parameters
        value = str(self.options.get(option, default)).upper()
        if value not in allowed:
            raise StoreError(
                f"Invalid sqlite {option}: {self.options[option]!r} "
                f"(allowed: {', '.join(sorted(allowed))})"
            )
        return value

    @staticmethod
    def _resolve_path(path: str) -> str:
        if path == ":memory:":
            return path
        if os.path.isdir(path) or not os.path.splitext(path)[1]:
            os.makedirs(path, exist_ok=True)
            return os.path.join(path, DB_FILENAME)
        parent = os.path.dirname(path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        return path

    def get(self, key: bytes) -> Optional[bytes]:
        try:
            row = self._conn.execute(
                "SELECT value FROM kv WHERE key = ?", (key,)
            ).fetchone()
        except sqlite3.Error as e:
            raise StoreError(f"sqlite get failed: {e}") from e
        return bytes(row[0]) if row is not None else None

    def exists(self, key: bytes) -> bool:
        try:
            row = self._conn.execute(
                "SELECT 1 FROM kv WHERE key = ?", (key,)
            ).fetchone()
        except sqlite3.Error as e:
            raise StoreError(f"sqlite exists failed: {e}") from e
        return row is not None

    def batch(self) -> SqliteBatch:
        return SqliteBatch(self._conn)

    def close(self) -> None:
        if self._conn is None:
            return
        if self._conn.in_transaction:
            self._conn.rollback()
        self._conn.close()
        self._conn = None
