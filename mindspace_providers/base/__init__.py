"""
Gateway Base Package

Exports vendor-agnostic contracts, DTOs, repositories, and the adapter
registry for use by the chat orchestrator.

- Interfaces: the ``ChatAdapter`` boundary every vendor adapter satisfies
- Models (DTOs): immutable request/response objects
- Repositories: credential resolution
- Factory: lazy creation of vendor adapters by vendor id
"""

from .factory import AdapterRegistry
from .interfaces import ChatAdapter
from .models import (
    ChatMessage,
    ChatReply,
    ChatRequest,
    ChatResponse,
    ChatSelection,
    FinishReason,
    Role,
    StreamChunk,
    TokenUsage,
)
from .repositories.keys import Credential, CredentialResolver, CredentialSource
from .timeouts import TimeoutConfig, get_timeout_config

__all__ = [
    # Models
    "Role",
    "ChatMessage",
    "ChatRequest",
    "ChatResponse",
    "FinishReason",
    "StreamChunk",
    "TokenUsage",
    "ChatReply",
    "ChatSelection",
    # Interfaces
    "ChatAdapter",
    # Repositories
    "Credential",
    "CredentialResolver",
    "CredentialSource",
    # Factory
    "AdapterRegistry",
    # Timeouts
    "TimeoutConfig",
    "get_timeout_config",
]
