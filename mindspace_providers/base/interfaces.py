"""
Vendor-agnostic interfaces (Protocols) for the gateway.

Re-exports Protocols split into single-class modules under
``mindspace_providers.base.interfaces_parts`` to keep imports stable.
"""

from __future__ import annotations

from .interfaces_parts import ChatAdapter

__all__ = [
    "ChatAdapter",
]
