"""
Adapter-level exception types.

Vendor adapters raise these to the retry engine. Each carries an
``AdapterErrorCode`` plus an ``is_retryable`` flag whose value agrees with the
shared status table in :mod:`.error_code`.
"""
from __future__ import annotations

from typing import Optional

from .error_code import AdapterErrorCode, ChatErrorCode, is_retryable_status


class AdapterError(Exception):
    """Base class for failures raised by vendor adapters and the registry."""

    def __init__(self, message: str, code: AdapterErrorCode, vendor: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.vendor = vendor

    @property
    def is_retryable(self) -> bool:
        return False


class APIError(AdapterError):
    """A vendor call failed (HTTP status, transport failure, or malformed reply).

    Attributes:
        status_code: HTTP status when the vendor answered, else ``None``.
        category: Optional finer-grained :class:`ChatErrorCode` (e.g. network
            or timeout) for failures without a status.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        vendor: Optional[str] = None,
        is_retryable: bool = False,
        category: Optional[ChatErrorCode] = None,
    ) -> None:
        super().__init__(message, AdapterErrorCode.API_ERROR, vendor)
        self.status_code = status_code
        self.category = category
        self._retryable = is_retryable

    @property
    def is_retryable(self) -> bool:
        return self._retryable

    @classmethod
    def from_status(cls, status_code: int, message: str, vendor: Optional[str] = None) -> "APIError":
        """Build an error whose retryability comes from the shared status table."""
        return cls(message, status_code=status_code, vendor=vendor, is_retryable=is_retryable_status(status_code))

    @classmethod
    def network(cls, vendor: Optional[str] = None, message: str = "Failed to connect to API. Please check your network.") -> "APIError":
        return cls(message, vendor=vendor, is_retryable=True, category=ChatErrorCode.NETWORK_ERROR)

    @classmethod
    def timeout(cls, vendor: Optional[str] = None, message: str = "Request to vendor timed out.") -> "APIError":
        return cls(message, vendor=vendor, is_retryable=True, category=ChatErrorCode.TIMEOUT)

    def __str__(self) -> str:
        status = self.status_code if self.status_code is not None else "-"
        return f"{self.vendor or '-'}:{status} {self.message}"


class ConfigError(AdapterError):
    """The adapter lacks a credential or endpoint. Never retryable."""

    def __init__(self, message: str, config_key: Optional[str] = None, vendor: Optional[str] = None) -> None:
        super().__init__(message, AdapterErrorCode.CONFIG_ERROR, vendor)
        self.config_key = config_key


class UnsupportedVendorError(AdapterError):
    """The registry was asked for a vendor id outside the vendor table."""

    def __init__(self, vendor_id: str) -> None:
        super().__init__(f"Unsupported vendor: {vendor_id}", AdapterErrorCode.UNSUPPORTED_VENDOR, vendor_id)
        self.vendor_id = vendor_id


__all__ = ["AdapterError", "APIError", "ConfigError", "UnsupportedVendorError"]
