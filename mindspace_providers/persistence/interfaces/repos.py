"""Key store protocol for the local credential override source.

The gateway only reads overrides through this contract; writes exist for the
settings UI and the CLI. Concrete implementations live in
``persistence/keystore.py`` (in-memory) and ``persistence/sqlite/``.

Failure / Error Semantics:
- ``get_api_key`` returns ``None`` when nothing is stored; it does not trim or
  validate. The credential resolver applies trimming and emptiness rules.
- Backend-specific exceptions surface only for genuine I/O failures.
"""

from __future__ import annotations

from typing import List, Optional, Protocol, runtime_checkable


@runtime_checkable
class KeyStore(Protocol):
    """Per-vendor API key overrides (vendor ids are case-insensitive)."""

    def get_api_key(self, vendor: str) -> Optional[str]: ...

    def set_api_key(self, vendor: str, key: str) -> None: ...

    def delete_api_key(self, vendor: str) -> None: ...

    def list_vendors(self) -> List[str]: ...


__all__ = ["KeyStore"]
