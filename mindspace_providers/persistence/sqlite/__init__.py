"""SQLite persistence backends."""

from .keystore_repo import SqliteKeyStore

__all__ = ["SqliteKeyStore"]
