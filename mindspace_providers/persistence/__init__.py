"""Persistence for local credential overrides.

Exposes the :class:`KeyStore` contract with in-memory and SQLite backends.
"""

from .interfaces.repos import KeyStore
from .keystore import InMemoryKeyStore
from .sqlite.keystore_repo import SqliteKeyStore

__all__ = ["KeyStore", "InMemoryKeyStore", "SqliteKeyStore"]
