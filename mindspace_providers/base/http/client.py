"""Shared HTTP client pool for vendor adapters.

Purpose:
    Provide a centralized, thread-safe pool of reusable ``httpx.Client``
    instances so adapters do not allocate a client (and connection pool) per
    call. Timeouts derive from :func:`get_timeout_config`.

Lifecycle & cleanup:
    - Clients are cached by ``(base_url, purpose)``. Purposes keep distinct
      pools, e.g. ``"chat"`` vs ``"probe"``.
    - All clients are closed at interpreter exit via ``atexit``; tests may
      call :func:`close_all_clients` explicitly.
"""

from __future__ import annotations

import atexit
import threading
from typing import Any, Dict, Mapping, Optional, Tuple

import httpx

from ..timeouts import get_timeout_config

_CLIENTS: Dict[Tuple[Optional[str], str], httpx.Client] = {}
_LOCK = threading.RLock()


def get_httpx_client(base_url: Optional[str], purpose: str) -> httpx.Client:
    """Return a pooled ``httpx.Client`` for the given base URL and purpose.

    Thread-safety:
        Safe for concurrent use; per-key creation is guarded by a re-entrant
        lock.
    """
    key = (base_url, purpose)
    client = _CLIENTS.get(key)
    if client is not None:
        return client

    with _LOCK:
        client = _CLIENTS.get(key)
        if client is not None:
            return client
        timeout = get_timeout_config().for_request()
        client = httpx.Client(base_url=base_url, timeout=timeout) if base_url else httpx.Client(timeout=timeout)
        _CLIENTS[key] = client
        return client


def close_all_clients() -> None:
    """Close and clear all pooled HTTP clients."""
    with _LOCK:
        for c in _CLIENTS.values():
            c.close()
        _CLIENTS.clear()


def probe_status(
    client: httpx.Client,
    method: str,
    url: str,
    *,
    headers: Mapping[str, str],
    json_body: Optional[Any] = None,
) -> Optional[int]:
    """Send a lightweight request and return its status, or ``None`` on transport failure.

    Used by key validation, which must never raise.
    """
    try:
        response = client.request(
            method,
            url,
            headers=dict(headers),
            json=json_body,
            timeout=get_timeout_config().for_request(),
        )
    except httpx.HTTPError:
        return None
    return response.status_code


atexit.register(close_all_clients)

__all__ = ["get_httpx_client", "close_all_clients", "probe_status"]
