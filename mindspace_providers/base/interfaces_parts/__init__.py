"""Interfaces (Protocols) split into single-class modules.

This package provides one Protocol per file while allowing
``mindspace_providers.base.interfaces`` to re-export a stable API.
"""

from .chat_adapter import ChatAdapter

__all__ = [
    "ChatAdapter",
]
