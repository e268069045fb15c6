"""Unified chat error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``mindspace_providers.base.errors_parts`` to keep a stable import path.
"""

from .errors_parts.error_code import (
    AdapterErrorCode,
    ChatErrorCode,
    HTTP_STATUS_TO_ERROR_CODE,
    RETRYABLE_ERROR_CODES,
    RETRYABLE_STATUSES,
    code_for_status,
    is_retryable_status,
)
from .errors_parts.adapter_errors import AdapterError, APIError, ConfigError, UnsupportedVendorError
from .errors_parts.chat_service_error import ChatServiceError
from .errors_parts.classification import classify_exception, user_friendly_message

__all__ = [
    "AdapterErrorCode",
    "ChatErrorCode",
    "HTTP_STATUS_TO_ERROR_CODE",
    "RETRYABLE_ERROR_CODES",
    "RETRYABLE_STATUSES",
    "code_for_status",
    "is_retryable_status",
    "AdapterError",
    "APIError",
    "ConfigError",
    "UnsupportedVendorError",
    "ChatServiceError",
    "classify_exception",
    "user_friendly_message",
]
