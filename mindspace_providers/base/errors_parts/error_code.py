"""
Normalized chat error codes (taxonomy).

Defines the `ChatErrorCode` enumeration used by the chat service layer and the
single HTTP status table shared by every error type. Values are lowercase
snake_case and are considered a stable public contract for logging.
"""
from __future__ import annotations

from enum import Enum
from typing import Dict, FrozenSet


class ChatErrorCode(str, Enum):
    """Enumerated normalized error codes representing failure categories."""

    # Configuration
    INVALID_API_KEY = "invalid_api_key"
    MISSING_API_KEY = "missing_api_key"
    PROVIDER_NOT_CONFIGURED = "provider_not_configured"

    # HTTP status categories
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    RATE_LIMITED = "rate_limited"
    INTERNAL_SERVER_ERROR = "internal_server_error"
    BAD_GATEWAY = "bad_gateway"
    SERVICE_UNAVAILABLE = "service_unavailable"
    GATEWAY_TIMEOUT = "gateway_timeout"

    # Transport
    NETWORK_ERROR = "network_error"
    TIMEOUT = "timeout"

    # Vendor
    PROVIDER_ERROR = "provider_error"
    MODEL_NOT_FOUND = "model_not_found"
    CONTENT_FILTERED = "content_filtered"

    # Service
    ADAPTER_ERROR = "adapter_error"
    UNKNOWN = "unknown"


class AdapterErrorCode(str, Enum):
    """Machine-readable codes carried by adapter-level exceptions."""

    API_ERROR = "api_error"
    CONFIG_ERROR = "config_error"
    UNSUPPORTED_VENDOR = "unsupported_vendor"


HTTP_STATUS_TO_ERROR_CODE: Dict[int, ChatErrorCode] = {
    400: ChatErrorCode.PROVIDER_ERROR,
    401: ChatErrorCode.UNAUTHORIZED,
    403: ChatErrorCode.FORBIDDEN,
    404: ChatErrorCode.MODEL_NOT_FOUND,
    429: ChatErrorCode.RATE_LIMITED,
    500: ChatErrorCode.INTERNAL_SERVER_ERROR,
    502: ChatErrorCode.BAD_GATEWAY,
    503: ChatErrorCode.SERVICE_UNAVAILABLE,
    504: ChatErrorCode.GATEWAY_TIMEOUT,
}

RETRYABLE_STATUSES: FrozenSet[int] = frozenset({429, 500, 502, 503, 504})

RETRYABLE_ERROR_CODES: FrozenSet[ChatErrorCode] = frozenset(
    {
        ChatErrorCode.RATE_LIMITED,
        ChatErrorCode.INTERNAL_SERVER_ERROR,
        ChatErrorCode.BAD_GATEWAY,
        ChatErrorCode.SERVICE_UNAVAILABLE,
        ChatErrorCode.GATEWAY_TIMEOUT,
        ChatErrorCode.NETWORK_ERROR,
        ChatErrorCode.TIMEOUT,
    }
)


def is_retryable_status(status_code: int | None) -> bool:
    """Return True when an HTTP status indicates a transient, retryable failure."""
    return status_code is not None and status_code in RETRYABLE_STATUSES


def code_for_status(status_code: int) -> ChatErrorCode:
    """Map an HTTP status to its error code; unmapped statuses are generic provider errors."""
    return HTTP_STATUS_TO_ERROR_CODE.get(status_code, ChatErrorCode.PROVIDER_ERROR)


__all__ = [
    "ChatErrorCode",
    "AdapterErrorCode",
    "HTTP_STATUS_TO_ERROR_CODE",
    "RETRYABLE_STATUSES",
    "RETRYABLE_ERROR_CODES",
    "is_retryable_status",
    "code_for_status",
]
