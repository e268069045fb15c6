"""Unified timeout configuration for the gateway.

Centralizes the timeout values used by the pooled HTTP clients and the vendor
adapters so no module hard-codes its own numbers.

get_timeout_config()
    Returns a process-cached configuration, parsing environment overrides on
    first use (and again whenever a watched variable changes). Supported
    environment variables (all optional, positive floats):
        MINDSPACE_HTTP_TIMEOUT_SECONDS
        MINDSPACE_STREAM_TIMEOUT_SECONDS
        MINDSPACE_CONNECT_TIMEOUT_SECONDS
"""
from __future__ import annotations

import os
from dataclasses import dataclass

import httpx

HTTP_TIMEOUT_ENV = "MINDSPACE_HTTP_TIMEOUT_SECONDS"
STREAM_TIMEOUT_ENV = "MINDSPACE_STREAM_TIMEOUT_SECONDS"
CONNECT_TIMEOUT_ENV = "MINDSPACE_CONNECT_TIMEOUT_SECONDS"


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timeout values (seconds).

    Attributes:
        http_timeout_seconds: Whole-request timeout for non-streamed calls
            and key probes.
        stream_timeout_seconds: Read timeout between chunks of a stream.
        connect_timeout_seconds: TCP/TLS connect timeout for every call.
    """

    http_timeout_seconds: float = 30.0
    stream_timeout_seconds: float = 60.0
    connect_timeout_seconds: float = 10.0

    def for_request(self) -> httpx.Timeout:
        return httpx.Timeout(self.http_timeout_seconds, connect=self.connect_timeout_seconds)

    def for_stream(self) -> httpx.Timeout:
        return httpx.Timeout(
            self.http_timeout_seconds,
            connect=self.connect_timeout_seconds,
            read=self.stream_timeout_seconds,
        )


_CACHED: TimeoutConfig | None = None
_ENV_GUARD: str | None = None


def _parse_env_float(name: str, default: float) -> float:
    """Read ``name`` as a positive float, falling back to ``default``."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached `TimeoutConfig` instance."""
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - documented module cache
    guard = "/".join(os.getenv(name, "") for name in (HTTP_TIMEOUT_ENV, STREAM_TIMEOUT_ENV, CONNECT_TIMEOUT_ENV))
    if _CACHED is not None and _ENV_GUARD == guard:
        return _CACHED
    defaults = TimeoutConfig()
    _CACHED = TimeoutConfig(
        http_timeout_seconds=_parse_env_float(HTTP_TIMEOUT_ENV, defaults.http_timeout_seconds),
        stream_timeout_seconds=_parse_env_float(STREAM_TIMEOUT_ENV, defaults.stream_timeout_seconds),
        connect_timeout_seconds=_parse_env_float(CONNECT_TIMEOUT_ENV, defaults.connect_timeout_seconds),
    )
    _ENV_GUARD = guard
    return _CACHED


__all__ = [
    "TimeoutConfig",
    "get_timeout_config",
]
