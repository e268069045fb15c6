"""In-memory implementation of :class:`KeyStore`.

Used as the default override source and in tests. Thread-safe for the simple
get/set/delete operations it supports.
"""

from __future__ import annotations

import threading
from typing import Dict, List, Mapping, Optional


class InMemoryKeyStore:
    """Dictionary-backed key store keyed by lowercase vendor id."""

    def __init__(self, initial: Optional[Mapping[str, str]] = None) -> None:
        self._lock = threading.Lock()
        self._keys: Dict[str, str] = {}
        for vendor, key in (initial or {}).items():
            self._keys[vendor.lower()] = key

    def get_api_key(self, vendor: str) -> Optional[str]:
        with self._lock:
            return self._keys.get(vendor.lower())

    def set_api_key(self, vendor: str, key: str) -> None:
        with self._lock:
            self._keys[vendor.lower()] = key

    def delete_api_key(self, vendor: str) -> None:
        with self._lock:
            self._keys.pop(vendor.lower(), None)

    def list_vendors(self) -> List[str]:
        with self._lock:
            return sorted(self._keys)


__all__ = ["InMemoryKeyStore"]
