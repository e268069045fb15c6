"""mindspace_providers.config.env
==============================

Environment variable mapping and helpers for vendor credentials.

Design Notes
------------
- ``ENV_MAP`` is derived from the vendor table so the two can never drift.
  Vendors with historical alternative names list them in ``ENV_ALIASES``
  with the canonical name first to establish precedence.
- Helpers never raise on unknown vendors or unset variables; callers decide
  how to proceed.
"""

from __future__ import annotations

import os
from typing import Dict, Iterable, Mapping, Optional, Tuple

from .vendors import VENDORS

# Canonical vendor -> env var mapping
ENV_MAP: Dict[str, str] = {vendor_id: cfg.env_var_name for vendor_id, cfg in VENDORS.items()}

# Vendor -> ordered tuple of acceptable env var names (canonical first)
ENV_ALIASES: Dict[str, Tuple[str, ...]] = {
    "gemini": ("GEMINI_API_KEY", "GOOGLE_API_KEY"),
    "grok": ("GROK_API_KEY", "XAI_API_KEY"),
}


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if the value looks like a placeholder/test token.

    Heuristics: contains 'placeholder', 'changeme', 'example', or starts with
    'test_'. Case-insensitive and resilient to surrounding spaces.
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return "placeholder" in v or "changeme" in v or "example" in v or v.startswith("test_")


def get_env_var_name(vendor: str) -> Optional[str]:
    """Return the canonical environment variable name for a vendor, or None if unknown."""
    return ENV_MAP.get(vendor.strip().lower()) if vendor else None


def get_env_var_candidates(vendor: str) -> Iterable[str]:
    """Yield acceptable environment variable names for a vendor, canonical first."""
    v = (vendor or "").strip().lower()
    canonical = ENV_MAP.get(v)
    if canonical:
        yield canonical
    for alias in ENV_ALIASES.get(v, ()):
        if alias != canonical:
            yield alias


def resolve_env_key(vendor: str, environ: Optional[Mapping[str, str]] = None) -> Tuple[Optional[str], Optional[str]]:
    """Return ``(value, env_var_used)`` for the first trimmed, non-empty candidate.

    ``(None, None)`` when nothing is set.
    """
    source = os.environ if environ is None else environ
    for name in get_env_var_candidates(vendor):
        val = (source.get(name) or "").strip()
        if val:
            return val, name
    return None, None


__all__ = [
    "ENV_MAP",
    "ENV_ALIASES",
    "is_placeholder",
    "get_env_var_name",
    "get_env_var_candidates",
    "resolve_env_key",
]
