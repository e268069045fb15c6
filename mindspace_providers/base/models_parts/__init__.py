"""Models parts package public surface.

Re-exports individual DTOs so callers can import from
`mindspace_providers.base.models_parts` if needed, while
`mindspace_providers.base.models` remains the primary stable import path.
"""

from .message import ChatMessage, Role, ROLES
from .token_usage import TokenUsage
from .chat_request import ChatRequest
from .chat_response import ChatResponse, FinishReason
from .stream_chunk import StreamChunk
from .chat_reply import ChatReply
from .chat_selection import ChatSelection

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
