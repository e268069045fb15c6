"""
Structured chat service error type.

Wraps any failure seen by the orchestrator with a normalized
:class:`ChatErrorCode` for consistent retry decisions, fallback handling and
structured logging.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import RETRYABLE_ERROR_CODES, ChatErrorCode, code_for_status, is_retryable_status


@dataclass
class ChatServiceError(Exception):
    """Represents a classified failure of a chat call.

    Attributes:
        message: Human-readable error message suitable for logging.
        code: Normalized :class:`ChatErrorCode` classification.
        vendor: Vendor id where the error originated, when known.
        status_code: HTTP status when the vendor answered.
        original_error: The underlying exception, for diagnostics.
        is_retryable: Whether the retry engine may try again. Derived from
            ``code`` via ``RETRYABLE_ERROR_CODES`` when not given.
    """

    message: str
    code: ChatErrorCode
    vendor: Optional[str] = None
    status_code: Optional[int] = None
    original_error: Optional[BaseException] = None
    is_retryable: Optional[bool] = None

    def __post_init__(self) -> None:
        if self.is_retryable is None:
            self.is_retryable = self.code in RETRYABLE_ERROR_CODES

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.vendor or '-'} {self.code.value}: {self.message}"

    @classmethod
    def from_http_status(
        cls,
        status_code: int,
        message: str,
        vendor: Optional[str] = None,
        original_error: Optional[BaseException] = None,
    ) -> "ChatServiceError":
        return cls(
            message=message,
            code=code_for_status(status_code),
            vendor=vendor,
            status_code=status_code,
            original_error=original_error,
            is_retryable=is_retryable_status(status_code),
        )

    @classmethod
    def unauthorized(cls, vendor: Optional[str] = None, message: str = "API key is invalid or expired") -> "ChatServiceError":
        return cls(message, ChatErrorCode.UNAUTHORIZED, vendor, 401, None, False)

    @classmethod
    def rate_limited(
        cls, vendor: Optional[str] = None, message: str = "Rate limit exceeded. Please try again later."
    ) -> "ChatServiceError":
        return cls(message, ChatErrorCode.RATE_LIMITED, vendor, 429)

    @classmethod
    def server_error(
        cls,
        vendor: Optional[str] = None,
        status_code: int = 500,
        message: str = "Server error. Please try again.",
    ) -> "ChatServiceError":
        return cls(message, code_for_status(status_code), vendor, status_code)

    @classmethod
    def configuration_error(
        cls, vendor: Optional[str] = None, message: str = "Provider is not properly configured"
    ) -> "ChatServiceError":
        return cls(message, ChatErrorCode.PROVIDER_NOT_CONFIGURED, vendor, None, None, False)

    @classmethod
    def network_error(
        cls, vendor: Optional[str] = None, original_error: Optional[BaseException] = None
    ) -> "ChatServiceError":
        return cls(
            "Network error. Please check your connection.",
            ChatErrorCode.NETWORK_ERROR,
            vendor,
            original_error=original_error,
        )

    @classmethod
    def missing_api_key(cls, vendor: Optional[str] = None) -> "ChatServiceError":
        return cls(
            f"API key is not configured for provider: {vendor}",
            ChatErrorCode.MISSING_API_KEY,
            vendor,
            None,
            None,
            False,
        )

    @classmethod
    def content_filtered(cls, vendor: Optional[str] = None) -> "ChatServiceError":
        return cls("Response was blocked by the vendor's content filter", ChatErrorCode.CONTENT_FILTERED, vendor)


__all__ = ["ChatServiceError"]
