"""Unified configuration layer for the gateway.

Goals
-----
* Centralize defaults (vendor selection, persona prompt, history window).
* Merge sources in a predictable order (later wins):
    1. Built-in defaults
    2. Optional external config file (JSON or YAML) pointed to by
       ``MINDSPACE_CONFIG_FILE``
    3. Environment variables (``MINDSPACE_VENDOR``, ``MINDSPACE_MODEL``,
       ``MINDSPACE_SYSTEM_PROMPT``, ``MINDSPACE_HISTORY_WINDOW``)
    4. In-code overrides passed to the helper
* Per-vendor settings (``model``, ``api_base``) follow the same order, with
  ``<VENDOR>_MODEL`` / ``<VENDOR>_BASE_URL`` environment variables.

API keys are deliberately not part of this layer; they are resolved per call
by :class:`mindspace_providers.base.repositories.keys.CredentialResolver`.

External Config File (Optional)
-------------------------------
JSON is tried first, then YAML. Structure example:

```
vendor: deepseek
history_window: 8
vendors:
  deepseek:
    model: deepseek-reasoner
  ollama:
    api_base: http://gpu-box:11434/v1
```

Public API
----------
* get_gateway_config(overrides: dict | None = None) -> dict
* get_vendor_settings(vendor: str, overrides: dict | None = None) -> dict
* get_selection() -> ChatSelection
* load_dotenv_once()
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .defaults import DEFAULT_HISTORY_WINDOW, DEFAULT_SYSTEM_PROMPT, DEFAULT_VENDOR
from .env import is_placeholder
from .vendors import VENDORS, VendorConfig, get_vendor_config

CONFIG_FILE_ENV = "MINDSPACE_CONFIG_FILE"
DOTENV_FILE_ENV = "DOTENV_FILE"

DEFAULTS: Dict[str, Any] = {
    "vendor": DEFAULT_VENDOR,
    "model": None,
    "system_prompt": DEFAULT_SYSTEM_PROMPT,
    "history_window": DEFAULT_HISTORY_WINDOW,
}

ENV_FIELD_MAP: Dict[str, str] = {
    "vendor": "MINDSPACE_VENDOR",
    "model": "MINDSPACE_MODEL",
    "system_prompt": "MINDSPACE_SYSTEM_PROMPT",
    "history_window": "MINDSPACE_HISTORY_WINDOW",
}

VENDOR_ENV_FIELD_MAP: Dict[str, str] = {
    "model": "MODEL",
    "api_base": "BASE_URL",
}

_FILE_CACHE: Optional[Dict[str, Any]] = None
_DOTENV_LOADED = False


def load_dotenv_once() -> None:
    """Read ``KEY=VALUE`` lines from ``.env`` (or ``$DOTENV_FILE``) once per process.

    Real environment variables win unless their current value looks like a
    placeholder.
    """
    global _DOTENV_LOADED
    if _DOTENV_LOADED:
        return
    _DOTENV_LOADED = True
    path = os.getenv(DOTENV_FILE_ENV, ".env")
    if not os.path.isfile(path):
        return
    with open(path, "r", encoding="utf-8") as fh:
        for line in fh:
            line = line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            k, v = line.split("=", 1)
            k = k.strip()
            v = v.strip().strip('"').strip("'")
            if k and (k not in os.environ or is_placeholder(os.environ.get(k))):
                os.environ[k] = v


def _load_external_config() -> Dict[str, Any]:
    global _FILE_CACHE
    if _FILE_CACHE is not None:
        return _FILE_CACHE
    path = os.getenv(CONFIG_FILE_ENV)
    if not path or not Path(path).is_file():
        _FILE_CACHE = {}
        return _FILE_CACHE
    text = Path(path).read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except ValueError:
        data = yaml.safe_load(text) or {}
    _FILE_CACHE = data if isinstance(data, dict) else {}
    return _FILE_CACHE


def reset_config_cache() -> None:
    """Forget the parsed config file and the dotenv flag (used by tests)."""
    global _FILE_CACHE, _DOTENV_LOADED
    _FILE_CACHE = None
    _DOTENV_LOADED = False


def _parse_window(value: Any) -> int:
    try:
        window = int(value)
    except (TypeError, ValueError):
        return DEFAULT_HISTORY_WINDOW
    return window if window >= 0 else DEFAULT_HISTORY_WINDOW


def get_gateway_config(overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return the merged gateway settings.

    Merge order (later wins): defaults -> external config -> env vars -> overrides
    """
    load_dotenv_once()
    cfg: Dict[str, Any] = dict(DEFAULTS)

    file_cfg = _load_external_config()
    cfg |= {k: file_cfg[k] for k in DEFAULTS if k in file_cfg}

    for field, env_name in ENV_FIELD_MAP.items():
        val = os.getenv(env_name)
        if val is not None and val.strip():
            cfg[field] = val.strip()

    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}

    cfg["vendor"] = str(cfg["vendor"]).strip().lower()
    cfg["history_window"] = _parse_window(cfg["history_window"])
    return cfg


def get_vendor_settings(vendor: str, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return ``model``/``api_base`` for a vendor merged over its table entry.

    Unknown vendors yield an empty dict.
    """
    load_dotenv_once()
    entry: Optional[VendorConfig] = get_vendor_config(vendor)
    if entry is None:
        return {}
    cfg: Dict[str, Any] = {"model": entry.default_model, "api_base": entry.api_base}

    section = (_load_external_config().get("vendors") or {}).get(entry.id)
    if isinstance(section, dict):
        cfg |= {k: v for k, v in section.items() if k in cfg and v}

    prefix = entry.id.upper()
    for field, suffix in VENDOR_ENV_FIELD_MAP.items():
        val = os.getenv(f"{prefix}_{suffix}")
        if val is not None and val.strip():
            cfg[field] = val.strip()

    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}
    return cfg


def get_selection(overrides: Optional[Dict[str, Any]] = None):
    """Return the active ``ChatSelection`` from the merged gateway config."""
    from ..base.models import ChatSelection

    cfg = get_gateway_config(overrides)
    return ChatSelection(vendor=cfg["vendor"], model=cfg.get("model") or None)


__all__ = [
    "DEFAULTS",
    "VENDORS",
    "VendorConfig",
    "get_vendor_config",
    "get_gateway_config",
    "get_vendor_settings",
    "get_selection",
    "load_dotenv_once",
    "reset_config_cache",
]
