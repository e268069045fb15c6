"""
Credential resolution.

Purpose
- Decide which API key a vendor adapter should use, and where it came from.
- Read-only: the resolver never writes to the key store or the environment.

Design
- Strict priority order, first match wins:
    1) local override from the key store (trimmed, non-empty)
    2) environment variable named by the vendor table (trimmed, non-empty)
    3) nothing: ``Credential("", "none")``
- Recomputed on every call; no caching, so a key saved in settings takes
  effect on the next adapter construction.
- Vendors with ``requires_api_key=False`` always count as configured.

Usage
- resolver = CredentialResolver(InMemoryKeyStore())
- cred = resolver.resolve("deepseek")
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional

from ...config.env import resolve_env_key
from ...config.vendors import get_vendor_config
from ...persistence.interfaces.repos import KeyStore
from ...persistence.keystore import InMemoryKeyStore


class CredentialSource(str, Enum):
    LOCAL_OVERRIDE = "local_override"
    ENVIRONMENT = "environment"
    NONE = "none"


@dataclass(frozen=True)
class Credential:
    """A resolved key plus its provenance. ``key`` is empty when source is ``none``."""

    key: str
    source: CredentialSource

    @property
    def present(self) -> bool:
        return bool(self.key)


NO_CREDENTIAL = Credential("", CredentialSource.NONE)


def mask_api_key(key: Optional[str]) -> str:
    """Return a log-safe form of ``key``: first 8 characters plus ``...``, or ``***``."""
    if not key or len(key) <= 8:
        return "***"
    return f"{key[:8]}..."


class CredentialResolver:
    """Resolve vendor credentials from a key store and the environment."""

    def __init__(self, key_store: Optional[KeyStore] = None, environ: Optional[Mapping[str, str]] = None) -> None:
        self.key_store: KeyStore = key_store if key_store is not None else InMemoryKeyStore()
        self._environ = environ

    @property
    def environ(self) -> Mapping[str, str]:
        return os.environ if self._environ is None else self._environ

    def resolve(self, vendor_id: str) -> Credential:
        vendor = (vendor_id or "").strip().lower()
        override = (self.key_store.get_api_key(vendor) or "").strip()
        if override:
            return Credential(override, CredentialSource.LOCAL_OVERRIDE)
        value, _ = resolve_env_key(vendor, self.environ)
        if value:
            return Credential(value, CredentialSource.ENVIRONMENT)
        return NO_CREDENTIAL

    def get_api_key(self, vendor_id: str) -> str:
        return self.resolve(vendor_id).key

    def is_configured(self, vendor_id: str) -> bool:
        """True when the vendor needs no key or a key resolves. Unknown vendors are not configured."""
        cfg = get_vendor_config(vendor_id)
        if cfg is None:
            return False
        if not cfg.requires_api_key:
            return True
        return self.resolve(cfg.id).present


__all__ = [
    "Credential",
    "CredentialSource",
    "CredentialResolver",
    "NO_CREDENTIAL",
    "mask_api_key",
]
