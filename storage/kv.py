"""Durable key-value string storage."""
from __future__ import annotations

import datetime as dt
from typing import Dict, Optional, Protocol

from .migrate import migrate
from .sqlite import get_conn


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class SqliteKeyValueStore:
    """SQLite-backed string store; last writer wins."""

    def __init__(self, db_path: str) -> None:
        self._db_path = db_path
        migrate(db_path)

    @property
    def db_path(self) -> str:
        return self._db_path

    def get(self, key: str) -> Optional[str]:
        with get_conn(self._db_path) as conn:
            row = conn.execute("SELECT value FROM kv_store WHERE key = ?", (key,)).fetchone()
        return None if row is None else row[0]

    def set(self, key: str, value: str) -> None:
        timestamp = dt.datetime.now(dt.timezone.utc).isoformat()
        with get_conn(self._db_path) as conn:
            conn.execute(
                """INSERT INTO kv_store (key, value, updated_at) VALUES (?, ?, ?)
                   ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at""",
                (key, value, timestamp),
            )

    def remove(self, key: str) -> None:
        with get_conn(self._db_path) as conn:
            conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))


class MemoryKeyValueStore:
    """Process-local store, mainly for tests and throwaway sessions."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


__all__ = ["KeyValueStore", "MemoryKeyValueStore", "SqliteKeyValueStore"]
