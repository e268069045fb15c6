"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `mindspace_providers.base.errors` for the stable surface.
"""

from .error_code import ChatErrorCode, AdapterErrorCode
from .adapter_errors import AdapterError, APIError, ConfigError, UnsupportedVendorError
from .chat_service_error import ChatServiceError
from .classification import classify_exception, user_friendly_message

__all__ = [
    "ChatErrorCode",
    "AdapterErrorCode",
    "AdapterError",
    "APIError",
    "ConfigError",
    "UnsupportedVendorError",
    "ChatServiceError",
    "classify_exception",
    "user_friendly_message",
]
