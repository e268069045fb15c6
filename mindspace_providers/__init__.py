"""mindspace_providers package

Resilient multi-vendor chat gateway for the MindSpace companion.

Purpose:
    Provide a minimal, stable API for external consumption (packaging is
    configured via the repository root ``pyproject.toml``). Callers normally
    build one orchestrator and call ``send_chat_message`` on it::

        gateway = create_orchestrator()
        reply = gateway.send_chat_message(history, "hello")

Public API (re-exported):
    - Version: ``__version__``
    - Errors: :class:`ChatServiceError`, :class:`ChatErrorCode`
    - Models: :class:`ChatMessage`, :class:`ChatReply`, :class:`ChatSelection`
    - Wiring: :class:`AdapterRegistry`, :class:`CredentialResolver`,
      :class:`ChatOrchestrator`, :func:`create_orchestrator`
"""

from typing import Optional

import httpx

from .base.errors import ChatErrorCode, ChatServiceError
from .base.factory import AdapterRegistry
from .base.models import ChatMessage, ChatReply, ChatSelection
from .base.repositories import CredentialResolver
from .fallback import LocalFallbackResponder
from .persistence import KeyStore
from .service.chat_service import ChatOrchestrator, SelectionSource

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "ChatErrorCode",
    "ChatServiceError",
    "ChatMessage",
    "ChatReply",
    "ChatSelection",
    "AdapterRegistry",
    "CredentialResolver",
    "ChatOrchestrator",
    "LocalFallbackResponder",
    "create_orchestrator",
]


def create_orchestrator(
    *,
    key_store: Optional[KeyStore] = None,
    selection: SelectionSource = None,
    http_client: Optional[httpx.Client] = None,
    **kwargs,
) -> ChatOrchestrator:
    """Wire a resolver, registry and orchestrator in one call.

    Parameters:
        key_store: Local key overrides; an empty in-memory store when omitted.
        selection: Fixed selection or callable; ``None`` follows the gateway config.
        http_client: Client injected into every adapter (tests use a mock transport).
        **kwargs: Forwarded to :class:`ChatOrchestrator` (``responder``,
            ``retry_policy``, ``system_prompt``, ``history_window``).
    """
    registry = AdapterRegistry(resolver=CredentialResolver(key_store), http_client=http_client)
    return ChatOrchestrator(registry, selection, **kwargs)
