"""Base shared constants for vendor adapters.

Central location to avoid scattering magic strings across adapters.

Security
--------
This module contains only generic sentinel strings. There are no credentials
or tokens embedded.

# pragma: allowlist secret
"""
from __future__ import annotations

# Bearer value sent to vendors that do not check credentials (local daemons)
KEYLESS_PLACEHOLDER_KEY = "not-needed"  # pragma: allowlist secret

# Server-sent events framing
SSE_DATA_PREFIX = "data:"
SSE_DONE_SENTINEL = "[DONE]"

# Header used by the Gemini REST API for its key
GEMINI_KEY_HEADER = "x-goog-api-key"

__all__ = [
    "KEYLESS_PLACEHOLDER_KEY",
    "SSE_DATA_PREFIX",
    "SSE_DONE_SENTINEL",
    "GEMINI_KEY_HEADER",
]
