"""
Repositories package for the gateway.

Exports:
- CredentialResolver / Credential / CredentialSource: API key resolution
- mask_api_key: log-safe key rendering
"""

from .keys import Credential, CredentialResolver, CredentialSource, NO_CREDENTIAL, mask_api_key

__all__ = [
    "Credential",
    "CredentialResolver",
    "CredentialSource",
    "NO_CREDENTIAL",
    "mask_api_key",
]
