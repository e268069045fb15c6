"""HTTP utilities package for vendor adapters.

Exposes pooled httpx clients and the key-probe helper.
"""

from .client import get_httpx_client, close_all_clients, probe_status

__all__ = ["get_httpx_client", "close_all_clients", "probe_status"]
