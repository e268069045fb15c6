"""Tests for the status table, adapter errors and ``classify_exception``."""

from __future__ import annotations

import httpx
import openai
import pytest

from mindspace_providers.base.errors import (
    HTTP_STATUS_TO_ERROR_CODE,
    APIError,
    ChatErrorCode,
    ChatServiceError,
    ConfigError,
    UnsupportedVendorError,
    classify_exception,
    code_for_status,
    is_retryable_status,
    user_friendly_message,
)


@pytest.mark.parametrize(
    "status, code, retryable",
    [
        (400, ChatErrorCode.PROVIDER_ERROR, False),
        (401, ChatErrorCode.UNAUTHORIZED, False),
        (403, ChatErrorCode.FORBIDDEN, False),
        (404, ChatErrorCode.MODEL_NOT_FOUND, False),
        (429, ChatErrorCode.RATE_LIMITED, True),
        (500, ChatErrorCode.INTERNAL_SERVER_ERROR, True),
        (502, ChatErrorCode.BAD_GATEWAY, True),
        (503, ChatErrorCode.SERVICE_UNAVAILABLE, True),
        (504, ChatErrorCode.GATEWAY_TIMEOUT, True),
    ],
)
def test_status_table(status, code, retryable):
    assert HTTP_STATUS_TO_ERROR_CODE[status] is code  # nosec B101
    assert is_retryable_status(status) is retryable  # nosec B101
    err = ChatServiceError.from_http_status(status, "m", "openai")
    assert err.code is code and err.is_retryable is retryable  # nosec B101
    assert APIError.from_status(status, "m").is_retryable is retryable  # nosec B101


def test_unmapped_status_is_provider_error_and_terminal():
    assert code_for_status(418) is ChatErrorCode.PROVIDER_ERROR  # nosec B101
    assert is_retryable_status(418) is False  # nosec B101
    assert is_retryable_status(None) is False  # nosec B101


def test_adapter_error_shapes():
    api = APIError.from_status(503, "down", "zhipu")
    assert str(api) == "zhipu:503 down"  # nosec B101
    assert APIError.network("x").category is ChatErrorCode.NETWORK_ERROR  # nosec B101
    assert APIError.timeout("x").is_retryable is True  # nosec B101
    assert ConfigError("no key", config_key="api_key").is_retryable is False  # nosec B101
    unsupported = UnsupportedVendorError("hunyuan")
    assert unsupported.message == "Unsupported vendor: hunyuan"  # nosec B101
    assert unsupported.is_retryable is False  # nosec B101


def test_classify_passthrough():
    err = ChatServiceError.rate_limited("openai")
    assert classify_exception(err) is err  # nosec B101


def test_classify_adapter_errors():
    missing = classify_exception(ConfigError("no key", config_key="api_key", vendor="deepseek"))
    assert missing.code is ChatErrorCode.MISSING_API_KEY  # nosec B101
    assert missing.is_retryable is False  # nosec B101

    other_config = classify_exception(ConfigError("no base", config_key="api_base"), vendor="ollama")
    assert other_config.code is ChatErrorCode.PROVIDER_NOT_CONFIGURED  # nosec B101
    assert other_config.vendor == "ollama"  # nosec B101

    unsupported = classify_exception(UnsupportedVendorError("nope"))
    assert unsupported.code is ChatErrorCode.PROVIDER_NOT_CONFIGURED  # nosec B101

    status = classify_exception(APIError.from_status(429, "slow", "grok"))
    assert (status.code, status.status_code, status.is_retryable) == (ChatErrorCode.RATE_LIMITED, 429, True)  # nosec B101

    network = classify_exception(APIError.network("grok"))
    assert network.code is ChatErrorCode.NETWORK_ERROR and network.is_retryable  # nosec B101

    bare = classify_exception(APIError("odd", vendor="grok"))
    assert bare.code is ChatErrorCode.ADAPTER_ERROR and not bare.is_retryable  # nosec B101


def test_classify_transport_errors():
    req = httpx.Request("POST", "https://example.invalid/v1/chat/completions")
    timeout = classify_exception(httpx.ReadTimeout("slow", request=req), vendor="openai")
    assert timeout.code is ChatErrorCode.TIMEOUT and timeout.is_retryable  # nosec B101

    connect = classify_exception(httpx.ConnectError("refused", request=req), vendor="openai")
    assert connect.code is ChatErrorCode.NETWORK_ERROR and connect.is_retryable  # nosec B101

    sdk_timeout = classify_exception(openai.APITimeoutError(request=req))
    assert sdk_timeout.code is ChatErrorCode.TIMEOUT  # nosec B101

    builtin = classify_exception(ConnectionResetError("reset"))
    assert builtin.code is ChatErrorCode.NETWORK_ERROR  # nosec B101


def test_classify_status_attribute_and_unknown():
    class _StatusError(Exception):
        status_code = 502

    bad_gateway = classify_exception(_StatusError("upstream"))
    assert bad_gateway.code is ChatErrorCode.BAD_GATEWAY and bad_gateway.is_retryable  # nosec B101

    unknown = classify_exception(RuntimeError("weird"), vendor="minimax")
    assert unknown.code is ChatErrorCode.UNKNOWN  # nosec B101
    assert unknown.is_retryable is True  # nosec B101
    assert isinstance(unknown.original_error, RuntimeError)  # nosec B101


def test_user_friendly_messages():
    assert "API key is invalid" in user_friendly_message(ChatServiceError.unauthorized())  # nosec B101
    assert "Network error" in user_friendly_message(ChatServiceError.network_error())  # nosec B101
    custom = ChatServiceError("something specific", ChatErrorCode.UNKNOWN)
    assert user_friendly_message(custom) == "something specific"  # nosec B101


@pytest.mark.parametrize(
    "status, code, retryable",
    [
        (500, ChatErrorCode.INTERNAL_SERVER_ERROR, True),
        (502, ChatErrorCode.BAD_GATEWAY, True),
        (503, ChatErrorCode.SERVICE_UNAVAILABLE, True),
        (504, ChatErrorCode.GATEWAY_TIMEOUT, True),
        (501, ChatErrorCode.PROVIDER_ERROR, False),
    ],
)
def test_server_error_follows_status_table(status, code, retryable):
    err = ChatServiceError.server_error("zhipu", status_code=status)
    assert err.code is code  # nosec B101
    assert err.is_retryable is retryable  # nosec B101
    assert err.status_code == status  # nosec B101


def test_retryable_flag_defaults_from_code():
    assert ChatServiceError("slow", ChatErrorCode.TIMEOUT).is_retryable is True  # nosec B101
    assert ChatServiceError("busy", ChatErrorCode.RATE_LIMITED).is_retryable is True  # nosec B101
    assert ChatServiceError("nope", ChatErrorCode.FORBIDDEN).is_retryable is False  # nosec B101
    assert ChatServiceError.content_filtered("gemini").is_retryable is False  # nosec B101
    pinned = ChatServiceError("busy", ChatErrorCode.RATE_LIMITED, is_retryable=False)
    assert pinned.is_retryable is False  # nosec B101
