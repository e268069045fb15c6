"""Adapter registry.

Purpose
-------
Construct and cache one vendor adapter per vendor id. Adapter modules are
imported lazily with ``importlib`` by wire format, so a process that only talks
to OpenAI-compatible vendors never imports the Gemini translation layer.

Ownership
---------
The registry is an explicit object owned by whoever builds the chat
orchestrator; there is no module-global instance. ``clear_cache()`` forces
rebuilding adapters (and re-resolving credentials) after settings change.

Concurrency
-----------
The cache uses check-then-create without a lock: two threads racing on the
same id may both build an adapter and the last one stored wins.
"""

from __future__ import annotations

from importlib import import_module
from typing import Any, Dict, Optional, Tuple

import httpx

from ..config import get_vendor_settings
from ..config.vendors import VENDORS, VendorConfig, get_vendor_config
from .errors import UnsupportedVendorError
from .interfaces import ChatAdapter
from .logging import LogContext, get_logger, log_event
from .repositories.keys import CredentialResolver

_logger = get_logger("mindspace.registry")


class AdapterRegistry:
    """Create vendor adapters from the vendor table and cache them by id."""

    # Map wire formats to import paths and class names
    _ADAPTERS: Dict[str, Dict[str, str]] = {
        "openai": {"module": "mindspace_providers.base.openai_style", "class": "OpenAICompatibleAdapter"},
        "gemini": {"module": "mindspace_providers.gemini.client", "class": "GeminiAdapter"},
    }

    def __init__(
        self,
        resolver: Optional[CredentialResolver] = None,
        http_client: Optional[httpx.Client] = None,
    ) -> None:
        self.resolver = resolver or CredentialResolver()
        self._http_client = http_client
        self._cache: Dict[str, ChatAdapter] = {}

    def get_adapter(self, vendor_id: str) -> ChatAdapter:
        """Return the cached adapter for ``vendor_id``, building it on first use.

        Raises
        ------
        UnsupportedVendorError
            If the id is not in the vendor table. The cache is left untouched.
        """
        cfg = get_vendor_config(vendor_id)
        if cfg is None:
            raise UnsupportedVendorError(vendor_id)
        adapter = self._cache.get(cfg.id)
        if adapter is None:
            adapter = self._build(cfg)
            self._cache[cfg.id] = adapter
        return adapter

    def clear_cache(self) -> None:
        self._cache.clear()

    def cached_ids(self) -> Tuple[str, ...]:
        return tuple(self._cache)

    @staticmethod
    def supported() -> Tuple[str, ...]:
        """Return every vendor id in table order."""
        return tuple(VENDORS)

    @staticmethod
    def is_supported(vendor_id: str) -> bool:
        return get_vendor_config(vendor_id) is not None

    def _build(self, cfg: VendorConfig) -> Any:
        spec = self._ADAPTERS[cfg.wire_format]
        klass = getattr(import_module(spec["module"]), spec["class"])
        settings = get_vendor_settings(cfg.id)
        adapter = klass(
            cfg,
            resolver=self.resolver,
            api_base=settings.get("api_base"),
            http_client=self._http_client,
        )
        log_event(
            _logger,
            "registry.adapter_created",
            LogContext(vendor=cfg.id),
            adapter=spec["class"],
            configured=adapter.is_configured(),
        )
        return adapter


__all__ = ["AdapterRegistry"]
