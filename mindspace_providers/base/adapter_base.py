"""Shared plumbing for vendor adapters.

Purpose:
- Hold the pieces every wire format needs: credential resolution at
  construction, configuration gating, structured chat logging, the streamed
  POST loop, and the never-raising key probe.
- Subclasses supply only wire-format specifics (URLs, headers, request and
  response translation).

External dependencies:
- ``httpx`` for streaming and probes (an injected client replaces the pool,
  which is how tests plug in ``httpx.MockTransport``).

Fallback semantics:
- None. Failures surface as ``APIError``/``ConfigError`` for the retry engine.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

import httpx

from ..config.vendors import VendorConfig
from .errors import APIError, ConfigError
from .http import get_httpx_client, probe_status
from .logging import LogContext, get_logger, log_event, normalized_log_event
from .models import ChatRequest, ChatResponse, StreamChunk
from .repositories.keys import Credential, CredentialResolver, CredentialSource, mask_api_key
from .streaming import iter_sse_json
from .timeouts import get_timeout_config

ProbeSpec = Tuple[str, str, Dict[str, str], Optional[Any]]


class BaseVendorAdapter:
    """Base class for adapters bound to one vendor, credential and endpoint.

    Construction never raises: a missing key or API base leaves the adapter
    unconfigured and logs an ``adapter.unconfigured`` warning.
    """

    def __init__(
        self,
        vendor: VendorConfig,
        *,
        resolver: Optional[CredentialResolver] = None,
        api_key: Optional[str] = None,
        api_base: Optional[str] = None,
        http_client: Optional[httpx.Client] = None,
    ) -> None:
        self.vendor = vendor
        self._resolver = resolver or CredentialResolver()
        explicit = (api_key or "").strip()
        self._credential: Credential = (
            Credential(explicit, CredentialSource.LOCAL_OVERRIDE) if explicit else self._resolver.resolve(vendor.id)
        )
        self._api_base = (api_base or vendor.api_base or "").rstrip("/")
        self._http_client = http_client
        self._logger = get_logger(f"mindspace.adapters.{vendor.id}")
        if self.is_configured():
            log_event(
                self._logger,
                "adapter.configured",
                LogContext(vendor=vendor.id),
                level=logging.DEBUG,
                key_source=self._credential.source.value,
                key=mask_api_key(self._credential.key) if self._credential.key else None,
            )
        else:
            log_event(
                self._logger,
                "adapter.unconfigured",
                LogContext(vendor=vendor.id),
                level=logging.WARNING,
                missing=self._missing_setting(),
            )

    # ----- capability surface -----
    @property
    def vendor_id(self) -> str:
        return self.vendor.id

    @property
    def api_base(self) -> str:
        return self._api_base

    @property
    def credential(self) -> Credential:
        return self._credential

    def is_configured(self) -> bool:
        return self._missing_setting() is None

    def chat(self, request: ChatRequest) -> ChatResponse:  # pragma: no cover - abstract
        raise NotImplementedError

    def chat_stream(self, request: ChatRequest, on_chunk: Callable[[StreamChunk], None]) -> None:  # pragma: no cover - abstract
        raise NotImplementedError

    def validate_key(self, key: str) -> bool:
        """Probe the vendor with ``key``. Never raises.

        Vendors that need no key always validate; blank keys never do and
        cause no network call. Only a 2xx answer counts as valid.
        """
        if not self.vendor.requires_api_key:
            return True
        key = (key or "").strip()
        if not key:
            return False
        method, url, headers, body = self._probe_spec(key)
        status = probe_status(self._http("probe"), method, url, headers=headers, json_body=body)
        valid = status is not None and 200 <= status < 300
        log_event(
            self._logger,
            "key.validate",
            LogContext(vendor=self.vendor_id),
            valid=valid,
            status=status,
            key=mask_api_key(key),
        )
        return valid

    # ----- subclass hooks -----
    def _probe_spec(self, key: str) -> ProbeSpec:  # pragma: no cover - abstract
        raise NotImplementedError

    # ----- shared helpers -----
    def _missing_setting(self) -> Optional[str]:
        if not self._api_base:
            return "api_base"
        if self.vendor.requires_api_key and not self._credential.present:
            return "api_key"
        return None

    def _require_configured(self) -> None:
        missing = self._missing_setting()
        if missing is not None:
            raise ConfigError(
                f"Adapter not configured for vendor: {self.vendor_id} (missing {missing})",
                config_key=missing,
                vendor=self.vendor_id,
            )

    def _model_for(self, request: ChatRequest) -> str:
        return request.model or self.vendor.default_model

    def _http(self, purpose: str) -> httpx.Client:
        return self._http_client if self._http_client is not None else get_httpx_client(None, purpose)

    def _log_start(self, ctx: LogContext, request: ChatRequest, *, stream: bool) -> None:
        normalized_log_event(
            self._logger,
            "chat.start",
            ctx,
            phase="start",
            messages=len(request.messages),
            stream=stream,
        )

    def _log_end(self, ctx: LogContext, response: Optional[ChatResponse] = None, *, chunks: Optional[int] = None) -> None:
        normalized_log_event(
            self._logger,
            "chat.end",
            ctx,
            phase="finalize",
            finish_reason=response.finish_reason.value if response else None,
            tokens=response.usage.to_dict() if response and response.usage else None,
            chunks=chunks,
        )

    def _log_error(self, ctx: LogContext, error: APIError | ConfigError) -> None:
        code = getattr(error, "category", None) or error.code
        normalized_log_event(
            self._logger,
            "chat.error",
            ctx,
            phase="error",
            error_code=code.value,
            status=getattr(error, "status_code", None),
            retryable=error.is_retryable,
            level=logging.WARNING,
            message=error.message,
        )

    def _stream_post(
        self,
        url: str,
        headers: Mapping[str, str],
        body: Mapping[str, Any],
        ctx: LogContext,
        model: str,
        on_chunk: Callable[[StreamChunk], None],
        extract_delta: Callable[[Dict[str, Any]], str],
        on_status_error: Callable[[httpx.Response], APIError],
    ) -> int:
        """POST ``body`` and deliver each text delta, then one ``done`` chunk.

        Returns the number of non-final chunks delivered. Transport failures
        become retryable ``APIError``s; exceptions raised by ``on_chunk``
        propagate unchanged.
        """
        delivered = 0
        client = self._http("stream")
        try:
            with client.stream(
                "POST",
                url,
                headers=dict(headers),
                json=dict(body),
                timeout=get_timeout_config().for_stream(),
            ) as response:
                if response.status_code >= 400:
                    response.read()
                    raise on_status_error(response)
                for data in iter_sse_json(response.iter_bytes(), ctx, self._logger):
                    delta = extract_delta(data)
                    if delta:
                        on_chunk(StreamChunk(delta=delta, done=False, model=model))
                        delivered += 1
        except httpx.TimeoutException as exc:
            raise APIError.timeout(self.vendor_id) from exc
        except httpx.TransportError as exc:
            raise APIError.network(self.vendor_id) from exc
        on_chunk(StreamChunk(delta="", done=True, model=model))
        return delivered


__all__ = ["BaseVendorAdapter", "ProbeSpec"]
