"""Retry with exponential backoff and jitter.

``execute`` runs an operation, retrying failures the policy's predicate deems
transient. Attempt 0 is the first call; after ``max_retries`` retries (so
``max_retries + 1`` calls in total) the last error is re-raised unchanged.
``on_retry`` fires before each sleep with a 1-based retry number and never
for the final failing attempt.
"""
from __future__ import annotations

import dataclasses
import functools
import random
import re
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Protocol, TypeVar

import httpx

from ..errors import is_retryable_status
from ..errors_parts.classification import _extract_status
from ..log_support import LogContext
from ..logging import get_logger, normalized_log_event

T = TypeVar("T")

_logger = get_logger("mindspace.retry")

_STATUS_IN_MESSAGE = re.compile(r"\b([1-5]\d{2})\b")
_NETWORK_HINTS = ("fetch", "network", "timeout", "timed out", "connection")


class OnRetry(Protocol):  # pragma: no cover - structural protocol
    def __call__(self, attempt: int, error: BaseException, delay: float) -> None: ...


def default_is_retryable(error: BaseException) -> bool:
    """Decide whether ``error`` is transient.

    Order: the error's own ``is_retryable`` flag; an HTTP status carried by
    the error or mentioned in its message; transport-flavoured exception
    types and messages. Everything else is terminal.
    """
    flag = getattr(error, "is_retryable", None)
    if isinstance(flag, bool):
        return flag
    status = _extract_status(error)
    if status is None:
        match = _STATUS_IN_MESSAGE.search(str(error))
        if match:
            status = int(match.group(1))
    if status is not None:
        return is_retryable_status(status)
    if isinstance(error, (httpx.TransportError, ConnectionError, TimeoutError)):
        return True
    message = str(error).lower()
    return any(hint in message for hint in _NETWORK_HINTS)


@dataclass(frozen=True)
class RetryPolicy:
    """Backoff parameters (seconds) plus the retry predicate and hook."""

    max_retries: int = 3
    base_delay: float = 1.0
    max_delay: float = 10.0
    jitter_factor: float = 0.1
    is_retryable: Callable[[BaseException], bool] = default_is_retryable
    on_retry: Optional[OnRetry] = None

    def merge(self, **overrides: Any) -> "RetryPolicy":
        """Return a copy with ``overrides`` applied; ``None`` values are ignored."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return dataclasses.replace(self, **changes) if changes else self


DEFAULT_POLICY = RetryPolicy()

RATE_LIMITED = RetryPolicy(max_retries=3, base_delay=0.5, max_delay=5.0, jitter_factor=0.2)
SERVER_ERROR = RetryPolicy(max_retries=3, base_delay=1.0, max_delay=10.0, jitter_factor=0.1)
CRITICAL = RetryPolicy(max_retries=5, base_delay=2.0, max_delay=30.0, jitter_factor=0.15)
ONCE = RetryPolicy(max_retries=1, base_delay=1.0, max_delay=2.0, jitter_factor=0.1)

RETRY_PRESETS: Dict[str, RetryPolicy] = {
    "rate_limited": RATE_LIMITED,
    "server_error": SERVER_ERROR,
    "critical": CRITICAL,
    "once": ONCE,
}


def compute_delay(attempt: int, policy: RetryPolicy, rand: Callable[[], float] = random.random) -> float:
    """Delay before retry ``attempt`` (0-based): exponential plus jitter, capped."""
    exponential = policy.base_delay * (2 ** attempt)
    jitter = policy.base_delay * policy.jitter_factor * rand()
    return min(exponential + jitter, policy.max_delay)


def _sleep(seconds: float) -> None:
    time.sleep(seconds)


def execute(operation: Callable[[], T], policy: Optional[RetryPolicy] = None, **overrides: Any) -> T:
    """Run ``operation`` under ``policy`` (merged with ``overrides``).

    Retries are strictly sequential. The error raised is always the one from
    the last attempt, unchanged.
    """
    policy = (policy or DEFAULT_POLICY).merge(**overrides)
    attempt = 0
    while True:
        try:
            return operation()
        except Exception as exc:
            if attempt >= policy.max_retries or not policy.is_retryable(exc):
                raise
            delay = compute_delay(attempt, policy)
            if policy.on_retry is not None:
                policy.on_retry(attempt + 1, exc, delay)
            _sleep(delay)
            attempt += 1


def retry(policy: RetryPolicy = DEFAULT_POLICY):
    """Return a decorator applying ``policy`` to every call of the wrapped function."""

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> T:
            return execute(lambda: func(*args, **kwargs), policy)

        return wrapper

    return decorator


def make_retryable(func: Callable[..., T], policy: RetryPolicy = DEFAULT_POLICY) -> Callable[..., T]:
    """Wrap ``func`` so each call goes through :func:`execute`."""
    return retry(policy)(func)


def retry_chat_request(operation: Callable[[], T], vendor: str, policy: RetryPolicy = SERVER_ERROR) -> T:
    """Run a vendor call with the server-error preset, logging each retry."""
    ctx = LogContext(vendor=vendor)

    def _log_retry(attempt: int, error: BaseException, delay: float) -> None:
        normalized_log_event(
            _logger,
            "retry.attempt",
            ctx,
            phase="retry",
            attempt=attempt,
            error_code=getattr(getattr(error, "code", None), "value", None),
            delay_seconds=round(delay, 3),
            error=str(error),
        )

    return execute(operation, policy, on_retry=_log_retry)


__all__ = [
    "RetryPolicy",
    "OnRetry",
    "DEFAULT_POLICY",
    "RATE_LIMITED",
    "SERVER_ERROR",
    "CRITICAL",
    "ONCE",
    "RETRY_PRESETS",
    "default_is_retryable",
    "compute_delay",
    "execute",
    "retry",
    "make_retryable",
    "retry_chat_request",
]
