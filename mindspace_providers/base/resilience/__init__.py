"""Resilience primitives (retry/backoff) for vendor calls."""

from .retry import (
    CRITICAL,
    DEFAULT_POLICY,
    ONCE,
    RATE_LIMITED,
    RETRY_PRESETS,
    SERVER_ERROR,
    RetryPolicy,
    compute_delay,
    default_is_retryable,
    execute,
    make_retryable,
    retry_chat_request,
)

__all__ = [
    "CRITICAL",
    "DEFAULT_POLICY",
    "ONCE",
    "RATE_LIMITED",
    "RETRY_PRESETS",
    "SERVER_ERROR",
    "RetryPolicy",
    "compute_delay",
    "default_is_retryable",
    "execute",
    "make_retryable",
    "retry_chat_request",
]
