"""
Vendor-agnostic domain models (DTOs) public surface.

This module re-exports the one-class-per-file implementations under
``mindspace_providers.base.models_parts`` to keep imports stable.
"""

from .models_parts.message import ChatMessage, Role, ROLES
from .models_parts.token_usage import TokenUsage
from .models_parts.chat_request import ChatRequest
from .models_parts.chat_response import ChatResponse, FinishReason
from .models_parts.stream_chunk import StreamChunk
from .models_parts.chat_reply import ChatReply
from .models_parts.chat_selection import ChatSelection

__all__ = [
    "ChatMessage",
    "Role",
    "ROLES",
    "TokenUsage",
    "ChatRequest",
    "ChatResponse",
    "FinishReason",
    "StreamChunk",
    "ChatReply",
    "ChatSelection",
]
