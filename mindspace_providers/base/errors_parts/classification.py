"""
Error classification helpers mapping exceptions to :class:`ChatServiceError`.

Implements HTTP status extraction, adapter-error translation, and transport
exception handling for ``httpx`` and the ``openai`` SDK so the orchestrator
sees a single vocabulary regardless of where a failure originated.
"""
from __future__ import annotations

from typing import Dict, Optional

import httpx
import openai

from .adapter_errors import AdapterError, APIError, ConfigError, UnsupportedVendorError
from .chat_service_error import ChatServiceError
from .error_code import ChatErrorCode


def _extract_status(exc: BaseException) -> Optional[int]:
    """Attempt to extract an HTTP status code from a vendor exception.

    Supported attribute shapes (checked in order):
    - ``exc.status_code``
    - ``exc.status``
    - ``exc.response.status_code``
    Returns ``None`` if no valid status can be found.
    """
    for attr in ("status_code", "status"):
        val = getattr(exc, attr, None)
        if isinstance(val, int) and 100 <= val < 600:
            return val
    resp = getattr(exc, "response", None)
    if resp is not None:
        sc = getattr(resp, "status_code", None)
        if isinstance(sc, int) and 100 <= sc < 600:
            return sc
    return None


def _from_adapter_error(exc: AdapterError, vendor: Optional[str]) -> ChatServiceError:
    vendor = exc.vendor or vendor
    if isinstance(exc, ConfigError):
        if exc.config_key == "api_key":
            err = ChatServiceError.missing_api_key(vendor)
        else:
            err = ChatServiceError.configuration_error(vendor, exc.message)
        err.original_error = exc
        return err
    if isinstance(exc, UnsupportedVendorError):
        return ChatServiceError(
            exc.message, ChatErrorCode.PROVIDER_NOT_CONFIGURED, vendor, original_error=exc
        )
    if isinstance(exc, APIError):
        if exc.status_code is not None:
            err = ChatServiceError.from_http_status(exc.status_code, exc.message, vendor, exc)
            err.is_retryable = exc.is_retryable
            return err
        code = exc.category or ChatErrorCode.ADAPTER_ERROR
        return ChatServiceError(exc.message, code, vendor, None, exc, exc.is_retryable)
    return ChatServiceError(exc.message, ChatErrorCode.ADAPTER_ERROR, vendor, None, exc, exc.is_retryable)


def classify_exception(exc: BaseException, vendor: Optional[str] = None) -> ChatServiceError:
    """Classify an exception into a :class:`ChatServiceError`.

    Precedence:
        1. ``ChatServiceError`` passthrough.
        2. Adapter taxonomy (``APIError``/``ConfigError``/``UnsupportedVendorError``).
        3. Timeout exceptions (``httpx``, ``openai``, builtin).
        4. Connection/transport exceptions.
        5. HTTP status mapping.
        6. ``UNKNOWN`` fallback (retryable).
    """
    if isinstance(exc, ChatServiceError):
        return exc
    if isinstance(exc, AdapterError):
        return _from_adapter_error(exc, vendor)
    if isinstance(exc, (httpx.TimeoutException, openai.APITimeoutError, TimeoutError)):
        return ChatServiceError(
            "Request timed out", ChatErrorCode.TIMEOUT, vendor, None, exc, True
        )
    if isinstance(exc, (httpx.TransportError, openai.APIConnectionError, ConnectionError)):
        return ChatServiceError.network_error(vendor, exc)
    status = _extract_status(exc)
    if status is not None:
        return ChatServiceError.from_http_status(status, str(exc) or f"HTTP {status}", vendor, exc)
    return ChatServiceError(
        str(exc) or exc.__class__.__name__, ChatErrorCode.UNKNOWN, vendor, None, exc, True
    )


_FRIENDLY_MESSAGES: Dict[ChatErrorCode, str] = {
    ChatErrorCode.UNAUTHORIZED: "API key is invalid. Please check your settings.",
    ChatErrorCode.INVALID_API_KEY: "API key is invalid. Please check your settings.",
    ChatErrorCode.MISSING_API_KEY: "AI service is not configured. Please add your API key in settings.",
    ChatErrorCode.PROVIDER_NOT_CONFIGURED: "AI service is not configured. Please add your API key in settings.",
    ChatErrorCode.RATE_LIMITED: "Too many requests. Please wait a moment and try again.",
    ChatErrorCode.INTERNAL_SERVER_ERROR: "AI service is temporarily unavailable. Please try again later.",
    ChatErrorCode.SERVICE_UNAVAILABLE: "AI service is temporarily unavailable. Please try again later.",
    ChatErrorCode.BAD_GATEWAY: "AI service is temporarily unavailable. Please try again later.",
    ChatErrorCode.GATEWAY_TIMEOUT: "AI service is temporarily unavailable. Please try again later.",
    ChatErrorCode.NETWORK_ERROR: "Network error. Please check your connection.",
    ChatErrorCode.CONTENT_FILTERED: "Content was filtered. Please try a different message.",
    ChatErrorCode.MODEL_NOT_FOUND: "AI model not found. Please select a different model.",
}


def user_friendly_message(error: ChatServiceError) -> str:
    """Return end-user text for a classified error."""
    friendly = _FRIENDLY_MESSAGES.get(error.code)
    if friendly is not None:
        return friendly
    return error.message or "An unexpected error occurred. Please try again."


__all__ = [
    "classify_exception",
    "user_friendly_message",
    "_extract_status",
]
