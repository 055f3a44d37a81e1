import sqlite3
import threading
from pathlib import Path
from typing import List, Optional

from ...domain.ports.persistence import KeyValueStore


class SQLiteKeyValueStore(KeyValueStore):
    """SQLite-backed implementation of the key-value store."""

    def __init__(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        self._conn = sqlite3.connect(path, check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        self._lock = threading.Lock()
        self._initialize()

    def _initialize(self) -> None:
        with self._lock, self._conn:
            self._conn.execute(
                """
                CREATE TABLE IF NOT EXISTS store (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
                """
            )

    def close(self) -> None:
        self._conn.close()

    # KeyValueStore API ------------------------------------------------------
    def get(self, key: str) -> Optional[str]:
        with self._lock:
            cur = self._conn.execute("SELECT value FROM store WHERE key = ?", (key,))
            row = cur.fetchone()
        return row["value"] if row else None

    def set(self, key: str, value: str) -> None:
        with self._lock, self._conn:
            self._conn.execute(
                "INSERT INTO store (key, value) VALUES (?, ?) "
                "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                (key, value),
            )

    def remove(self, key: str) -> None:
        with self._lock, self._conn:
            self._conn.execute("DELETE FROM store WHERE key = ?", (key,))

    def keys(self) -> List[str]:
        with self._lock:
            cur = self._conn.execute("SELECT key FROM store ORDER BY key")
            rows = cur.fetchall()
        return [row["key"] for row in rows]
