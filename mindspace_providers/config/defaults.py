"""mindspace_providers.config.defaults
===================================

Central place for small, stable default values used across the gateway and
the debugging CLI. They can be overridden via environment variables or the
external configuration file, but provide sensible fallbacks for local
development and tests.

This module intentionally avoids importing other gateway packages to prevent
circular dependencies. Only plain constants live here.
"""

from __future__ import annotations

# ---- Selection ----
# Vendor used when neither config file nor environment picks one.
DEFAULT_VENDOR = "alibaba"

# ---- Sampling defaults applied by adapters when a request leaves them unset ----
DEFAULT_TEMPERATURE = 0.8
DEFAULT_MAX_TOKENS = 1000
DEFAULT_TOP_P = 0.9

# ---- Orchestrator ----
# Number of most recent transcript messages sent upstream.
DEFAULT_HISTORY_WINDOW = 10

# Persona instruction prepended to every outbound request.
DEFAULT_SYSTEM_PROMPT = (
    "You are MindSpace, a warm and genuine companion for people under heavy everyday pressure. "
    "Talk like a caring friend, not a therapist: listen first, reflect what you hear, and keep replies "
    "short (one to three sentences). Avoid lecturing and 'you should' phrasing, and do not give concrete "
    "advice unless asked. Focus on how the person feels rather than fixing the problem. "
    "Reply in the language the user writes in."
)

# ---- Key probe ----
# Minimal chat body sent by vendors whose key probe is a chat call.
KEY_PROBE_MAX_TOKENS = 1


__all__ = [
    "DEFAULT_VENDOR",
    "DEFAULT_TEMPERATURE",
    "DEFAULT_MAX_TOKENS",
    "DEFAULT_TOP_P",
    "DEFAULT_HISTORY_WINDOW",
    "DEFAULT_SYSTEM_PROMPT",
    "KEY_PROBE_MAX_TOKENS",
]
