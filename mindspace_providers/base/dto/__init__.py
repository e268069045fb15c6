"""DTO validation package for inbound conversations."""

from .chat import Role, MessageDTO, ConversationDTO

__all__ = [
    "Role",
    "MessageDTO",
    "ConversationDTO",
]
