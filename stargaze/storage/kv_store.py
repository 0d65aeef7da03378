"""SQLite-backed key-value store for cache payloads."""

import sqlite3
import threading


class SqliteKeyValueStore:
    """String blobs keyed by string, one row per key in ``cache_entries``.

    Every write runs in its own transaction; a write that fails (including a
    lock timeout) is rolled back and leaves the previous value in place.
    """

    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn
        self._lock = threading.Lock()

    def get(self, key: str) -> str | None:
        with self._lock:
            row = self.conn.execute(
                "SELECT payload FROM cache_entries WHERE key = ?", (key,)
            ).fetchone()
        if row is None:
            return None
        return row[0]

    def set(self, key: str, blob: str) -> None:
        with self._lock, self.conn:
            self.conn.execute(
                "INSERT INTO cache_entries (key, payload, updated_at) "
                "VALUES (?, ?, CURRENT_TIMESTAMP) "
                "ON CONFLICT(key) DO UPDATE SET payload = excluded.payload, "
                "updated_at = CURRENT_TIMESTAMP",
                (key, blob),
            )

    def remove(self, key: str) -> None:
        with self._lock, self.conn:
            self.conn.execute("DELETE FROM cache_entries WHERE key = ?", (key,))

    def enumerate_keys(self) -> list[str]:
        with self._lock:
            rows = self.conn.execute(
                "SELECT key FROM cache_entries ORDER BY key"
            ).fetchall()
        return [r[0] for r in rows]
