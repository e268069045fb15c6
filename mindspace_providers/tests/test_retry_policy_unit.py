from __future__ import annotations

import httpx
import pytest

from mindspace_providers.base.errors import APIError, ChatErrorCode, ChatServiceError
from mindspace_providers.base.resilience.retry import (
    CRITICAL,
    ONCE,
    RATE_LIMITED,
    RETRY_PRESETS,
    SERVER_ERROR,
    RetryPolicy,
    compute_delay,
    default_is_retryable,
    execute,
    make_retryable,
    retry,
    retry_chat_request,
)


class _Flaky:
    def __init__(self, fail_times: int, error: Exception):
        self.calls = 0
        self.fail_times = fail_times
        self.error = error

    def __call__(self):
        self.calls += 1
        if self.calls <= self.fail_times:
            raise self.error
        return "ok"


def test_retry_succeeds_after_transient(sleeps):
    flaky = _Flaky(2, APIError.from_status(503, "busy", "openai"))
    seen = []

    result = execute(flaky, SERVER_ERROR, on_retry=lambda attempt, err, delay: seen.append((attempt, delay)))

    assert result == "ok"  # nosec B101 - asserts are appropriate in unit tests
    assert flaky.calls == 3  # nosec B101
    assert [a for a, _ in seen] == [1, 2]  # nosec B101
    assert sleeps == [d for _, d in seen]  # nosec B101


def test_retry_stops_on_non_retryable(sleeps):
    flaky = _Flaky(99, APIError.from_status(401, "bad key", "openai"))

    with pytest.raises(APIError) as ei:
        execute(flaky, SERVER_ERROR)

    assert ei.value.status_code == 401  # nosec B101
    assert flaky.calls == 1  # nosec B101
    assert sleeps == []  # nosec B101


def test_total_attempts_bounded_by_max_retries(sleeps):
    err = APIError.from_status(500, "boom", "deepseek")
    flaky = _Flaky(99, err)

    with pytest.raises(APIError) as ei:
        execute(flaky, RetryPolicy(max_retries=3, base_delay=1.0, max_delay=10.0, jitter_factor=0.0))

    # The last attempt's error surfaces unchanged.
    assert ei.value is err  # nosec B101
    assert flaky.calls == 4  # nosec B101
    assert sleeps == [1.0, 2.0, 4.0]  # nosec B101


def test_zero_retries_calls_once(sleeps):
    flaky = _Flaky(99, APIError.from_status(503, "busy"))
    with pytest.raises(APIError):
        execute(flaky, SERVER_ERROR, max_retries=0)
    assert flaky.calls == 1  # nosec B101
    assert sleeps == []  # nosec B101


def test_compute_delay_exponential_with_jitter_and_cap():
    policy = RetryPolicy(max_retries=5, base_delay=1.0, max_delay=10.0, jitter_factor=0.1)
    assert compute_delay(0, policy, rand=lambda: 0.0) == 1.0  # nosec B101
    assert compute_delay(1, policy, rand=lambda: 0.5) == pytest.approx(2.05)  # nosec B101
    assert compute_delay(2, policy, rand=lambda: 1.0) == pytest.approx(4.1)  # nosec B101
    assert compute_delay(10, policy, rand=lambda: 1.0) == 10.0  # nosec B101


def test_delays_stay_within_bounds_for_random_jitter():
    for attempt in range(8):
        delay = compute_delay(attempt, CRITICAL)
        assert 0 < delay <= CRITICAL.max_delay  # nosec B101
        floor = min(CRITICAL.base_delay * 2 ** attempt, CRITICAL.max_delay)
        assert delay >= floor or delay == CRITICAL.max_delay  # nosec B101


def test_presets_values():
    assert (RATE_LIMITED.max_retries, RATE_LIMITED.base_delay, RATE_LIMITED.max_delay, RATE_LIMITED.jitter_factor) == (
        3,
        0.5,
        5.0,
        0.2,
    )  # nosec B101
    assert (SERVER_ERROR.max_retries, SERVER_ERROR.base_delay, SERVER_ERROR.max_delay) == (3, 1.0, 10.0)  # nosec B101
    assert (CRITICAL.max_retries, CRITICAL.base_delay, CRITICAL.max_delay) == (5, 2.0, 30.0)  # nosec B101
    assert (ONCE.max_retries, ONCE.base_delay, ONCE.max_delay) == (1, 1.0, 2.0)  # nosec B101
    assert set(RETRY_PRESETS) == {"rate_limited", "server_error", "critical", "once"}  # nosec B101


def test_merge_ignores_none_overrides():
    merged = SERVER_ERROR.merge(max_retries=None, base_delay=0.25)
    assert merged.max_retries == SERVER_ERROR.max_retries  # nosec B101
    assert merged.base_delay == 0.25  # nosec B101
    assert SERVER_ERROR.merge() is SERVER_ERROR  # nosec B101


@pytest.mark.parametrize(
    "error, expected",
    [
        (APIError.from_status(429, "slow down"), True),
        (APIError.from_status(400, "bad request"), False),
        (ChatServiceError("x", ChatErrorCode.UNAUTHORIZED, is_retryable=False), False),
        (RuntimeError("HTTP 502 from upstream"), True),
        (RuntimeError("HTTP 404 from upstream"), False),
        (httpx.ConnectError("refused"), True),
        (ConnectionError("reset"), True),
        (TypeError("Failed to fetch"), True),
        (ValueError("bad argument"), False),
    ],
)
def test_default_is_retryable(error, expected):
    assert default_is_retryable(error) is expected  # nosec B101


def test_retry_decorator_and_make_retryable(sleeps):
    flaky = _Flaky(1, APIError.network("ollama"))

    @retry(ONCE)
    def run():
        return flaky()

    assert run() == "ok"  # nosec B101
    assert flaky.calls == 2  # nosec B101

    other = _Flaky(1, APIError.timeout("ollama"))
    wrapped = make_retryable(other, ONCE)
    assert wrapped() == "ok"  # nosec B101
    assert len(sleeps) == 2  # nosec B101


def test_retry_chat_request_logs_attempts(sleeps, log_capture):
    flaky = _Flaky(1, APIError.from_status(502, "bad gateway", "zhipu"))

    assert retry_chat_request(flaky, "zhipu") == "ok"  # nosec B101

    events = [e for e in log_capture.events() if e["event"] == "retry.attempt"]
    assert len(events) == 1  # nosec B101
    assert events[0]["vendor"] == "zhipu"  # nosec B101
    assert events[0]["attempt"] == 1  # nosec B101
    assert events[0]["phase"] == "retry"  # nosec B101


def test_package_facade_keeps_retry_module_patchable(sleeps):
    import importlib

    from mindspace_providers.base import resilience

    module = importlib.import_module("mindspace_providers.base.resilience.retry")
    assert resilience.retry is module  # nosec B101
    assert module._sleep == sleeps.append  # nosec B101

    flaky = _Flaky(1, APIError.from_status(503, "busy", "alibaba"))
    policy = RetryPolicy(max_retries=2, base_delay=0.5, max_delay=10.0, jitter_factor=0.0)
    assert resilience.execute(flaky, policy) == "ok"  # nosec B101
    assert sleeps == [0.5]  # nosec B101
