"""OpenAI-compatible adapter parts (adapter class and wire helpers)."""

from .adapter import OpenAICompatibleAdapter
from .style_helpers import (
    build_chat_params,
    error_message_from_body,
    extract_stream_delta,
    map_sdk_error,
    to_chat_response,
)

__all__ = [
    "OpenAICompatibleAdapter",
    "build_chat_params",
    "error_message_from_body",
    "extract_stream_delta",
    "map_sdk_error",
    "to_chat_response",
]
