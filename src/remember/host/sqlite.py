"""SQLite-backed durable key/value storage."""

from __future__ import annotations

import sqlite3
from pathlib import Path

from remember.errors import StorageUnavailableError


class SqliteStorage:
    """Durable storage for hosts without a browser profile.

    Every call opens a short-lived connection, so a single file can be shared
    by successive page loads of the same process or by separate processes.
    """

    def __init__(self, path: str | Path = "remember.db", *, table: str = "kv") -> None:
        if not table.isidentifier():
            raise ValueError(f"Invalid table name: {table}")
        self._path = Path(path)
        self._table = table
        try:
            _ensure_kv_table(self._path, table)
        except sqlite3.Error as exc:
            raise StorageUnavailableError(f"Cannot open {self._path}: {exc}") from exc

    def get_item(self, key: str) -> str | None:
        try:
            with sqlite3.connect(self._path) as conn:
                cur = conn.execute(f"SELECT value FROM {self._table} WHERE key = ?", (key,))
                row = cur.fetchone()
        except sqlite3.Error as exc:
            raise StorageUnavailableError(str(exc)) from exc
        return row[0] if row else None

    def set_item(self, key: str, value: str) -> None:
        try:
            with sqlite3.connect(self._path) as conn:
                conn.execute(
                    f"INSERT INTO {self._table}(key, value) VALUES(?, ?) "
                    "ON CONFLICT(key) DO UPDATE SET value=excluded.value",
                    (key, value),
                )
                conn.commit()
        except sqlite3.Error as exc:
            raise StorageUnavailableError(str(exc)) from exc

    def remove_item(self, key: str) -> None:
        try:
            with sqlite3.connect(self._path) as conn:
                conn.execute(f"DELETE FROM {self._table} WHERE key = ?", (key,))
                conn.commit()
        except sqlite3.Error as exc:
            raise StorageUnavailableError(str(exc)) from exc


def _ensure_kv_table(db_path: Path, table: str) -> None:
    with sqlite3.connect(db_path) as conn:
        conn.execute(
            f"CREATE TABLE IF NOT EXISTS {table} (key TEXT PRIMARY KEY, value TEXT NOT NULL)"
        )
        conn.commit()
