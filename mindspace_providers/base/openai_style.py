"""Public surface for the OpenAI-compatible adapter family.

Re-exports :class:`OpenAICompatibleAdapter` from ``openai_style_parts`` so the
registry and callers have one stable import path.
"""

from .openai_style_parts import OpenAICompatibleAdapter

__all__ = ["OpenAICompatibleAdapter"]
