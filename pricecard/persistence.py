"""SQLite-backed local cache for the last edited configuration."""

from __future__ import annotations

import sqlite3
from contextlib import closing
from datetime import datetime, timezone
from pathlib import Path

from pricecard.config import DB_PATH


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class SqliteCache:
    """A tiny key/value table; one row per cache key."""

    def __init__(self, db_path: str | Path = DB_PATH) -> None:
        self.db_path = Path(db_path)

    def _connect(self) -> sqlite3.Connection:
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        return sqlite3.connect(self.db_path)

    def bootstrap_schema(self) -> None:
        """Create the cache table if it does not already exist."""
        with closing(self._connect()) as conn, conn:
            conn.executescript(
                """
                CREATE TABLE IF NOT EXISTS cache_entries (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                );
                """
            )

    def read(self, key: str) -> str | None:
        self.bootstrap_schema()
        with closing(self._connect()) as conn:
            row = conn.execute("SELECT value FROM cache_entries WHERE key = ?", (key,)).fetchone()
        if row is None:
            return None
        return str(row[0])

    def write(self, key: str, value: str) -> None:
        self.bootstrap_schema()
        with closing(self._connect()) as conn, conn:
            conn.execute(
                """
                INSERT INTO cache_entries (key, value, updated_at) VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at
                """,
                (key, value, _utc_now_iso()),
            )


class InMemoryCache:
    """Process-local cache used when the on-disk cache is disabled."""

    def __init__(self) -> None:
        self.entries: dict[str, str] = {}

    def read(self, key: str) -> str | None:
        return self.entries.get(key)

    def write(self, key: str, value: str) -> None:
        self.entries[key] = value
