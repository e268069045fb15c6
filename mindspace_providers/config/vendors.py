"""mindspace_providers.config.vendors
==================================

The vendor table: one immutable :class:`VendorConfig` per supported vendor.
This is the single source of truth for env var names, default models, API
base URLs, wire formats and key-probe styles. The registry, the credential
resolver and the CLI all read from it; nothing writes to it.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Literal, Mapping, Optional, Tuple

WireFormat = Literal["openai", "gemini"]
KeyProbe = Literal["list_models", "chat"]


@dataclass(frozen=True)
class VendorConfig:
    """Static description of one vendor.

    Attributes:
        id: Canonical vendor id (lowercase).
        display_name: Human-readable name for CLI output.
        env_var_name: Environment variable holding the default API key.
        requires_api_key: False for local daemons that accept any key.
        default_model: Model used when the selection names none.
        api_base: Base URL every request path is appended to.
        wire_format: ``"openai"`` for the shared chat-completions shape,
            ``"gemini"`` for the generateContent shape.
        key_probe: ``"list_models"`` probes ``GET /models``; ``"chat"`` sends a
            minimal chat request instead.
    """

    id: str
    display_name: str
    env_var_name: str
    requires_api_key: bool
    default_model: str
    api_base: str
    wire_format: WireFormat = "openai"
    key_probe: KeyProbe = "list_models"


_TABLE: Tuple[VendorConfig, ...] = (
    VendorConfig("openai", "OpenAI", "OPENAI_API_KEY", True, "gpt-4o-mini", "https://api.openai.com/v1"),
    VendorConfig("zhipu", "Zhipu GLM", "ZHIPU_API_KEY", True, "glm-4-flash", "https://open.bigmodel.cn/api/paas/v4"),
    VendorConfig("grok", "xAI Grok", "GROK_API_KEY", True, "grok-beta", "https://api.x.ai/v1"),
    VendorConfig("deepseek", "DeepSeek", "DEEPSEEK_API_KEY", True, "deepseek-chat", "https://api.deepseek.com/v1"),
    VendorConfig(
        "minimax",
        "MiniMax",
        "MINIMAX_API_KEY",
        True,
        "abab6.5s-chat",
        "https://api.minimax.chat/v1",
        key_probe="chat",
    ),
    VendorConfig(
        "alibaba",
        "Alibaba Qwen",
        "DASHSCOPE_API_KEY",
        True,
        "qwen-plus",
        "https://dashscope.aliyuncs.com/compatible-mode/v1",
    ),
    VendorConfig(
        "gemini",
        "Google Gemini",
        "GEMINI_API_KEY",
        True,
        "gemini-1.5-flash",
        "https://generativelanguage.googleapis.com/v1beta",
        wire_format="gemini",
    ),
    VendorConfig("ollama", "Ollama (local)", "OLLAMA_API_KEY", False, "llama3.1", "http://localhost:11434/v1"),
)

VENDORS: Mapping[str, VendorConfig] = MappingProxyType({v.id: v for v in _TABLE})


def get_vendor_config(vendor_id: str) -> Optional[VendorConfig]:
    """Return the table entry for ``vendor_id`` (case-insensitive), or ``None``."""
    if not vendor_id:
        return None
    return VENDORS.get(vendor_id.strip().lower())


def supported_vendor_ids() -> Tuple[str, ...]:
    return tuple(VENDORS)


__all__ = [
    "VendorConfig",
    "WireFormat",
    "KeyProbe",
    "VENDORS",
    "get_vendor_config",
    "supported_vendor_ids",
]
