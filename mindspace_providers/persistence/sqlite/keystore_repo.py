"""SQLite-backed implementation of :class:`KeyStore`.

This module provides ``SqliteKeyStore``, which stores per-vendor API key
overrides in a single ``keys`` table. Each write commits immediately; the
store owns its connection unless one is injected.
"""

from __future__ import annotations

import sqlite3
import threading
from typing import List, Optional

SCHEMA = (
    "CREATE TABLE IF NOT EXISTS keys ("
    "vendor TEXT PRIMARY KEY, "
    "api_key TEXT NOT NULL, "
    "updated_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP)"
)


class SqliteKeyStore:
    """SQLite-backed repository for per-vendor API key overrides.

    Parameters
    ----------
    path:
        Database file path, or ``":memory:"`` for an ephemeral store.
    conn:
        Optional pre-configured connection; when given, ``path`` is ignored
        and the caller remains responsible for closing it.
    """

    def __init__(self, path: str = ":memory:", conn: Optional[sqlite3.Connection] = None) -> None:
        self._owns_conn = conn is None
        self.conn = conn if conn is not None else sqlite3.connect(path, check_same_thread=False)
        self._lock = threading.RLock()
        with self._lock:
            self.conn.execute(SCHEMA)
            self.conn.commit()

    def get_api_key(self, vendor: str) -> Optional[str]:
        """Return the stored key for ``vendor`` (case-insensitive), or ``None``."""
        with self._lock:
            row = self.conn.execute("SELECT api_key FROM keys WHERE vendor = ?", (vendor.lower(),)).fetchone()
        return row[0] if row else None

    def set_api_key(self, vendor: str, key: str) -> None:
        """Insert or update a key and refresh ``updated_at``."""
        with self._lock:
            self.conn.execute(
                "INSERT INTO keys(vendor, api_key, updated_at) VALUES(?, ?, CURRENT_TIMESTAMP) "
                "ON CONFLICT(vendor) DO UPDATE SET api_key=excluded.api_key, updated_at=CURRENT_TIMESTAMP",
                (vendor.lower(), key),
            )
            self.conn.commit()

    def delete_api_key(self, vendor: str) -> None:
        """Delete the key for ``vendor``; deleting a missing key is a no-op."""
        with self._lock:
            self.conn.execute("DELETE FROM keys WHERE vendor = ?", (vendor.lower(),))
            self.conn.commit()

    def list_vendors(self) -> List[str]:
        """Return vendor ids with stored keys in ascending order."""
        with self._lock:
            rows = self.conn.execute("SELECT vendor FROM keys ORDER BY vendor").fetchall()
        return [r[0] for r in rows]

    def close(self) -> None:
        if self._owns_conn:
            self.conn.close()


__all__ = ["SqliteKeyStore", "SCHEMA"]
