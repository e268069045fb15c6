"""Pytest configuration for the gateway test suite.

Every test runs with vendor credentials and ``MINDSPACE_*`` settings removed
from the environment, config caches reset, and retry backoff sleeps recorded
instead of slept. HTTP is never real: adapters receive an ``httpx.Client``
backed by ``httpx.MockTransport``.
"""

from __future__ import annotations

import json
import logging
from typing import Iterator, List

import pytest

from mindspace_providers.base.factory import AdapterRegistry
from mindspace_providers.base.logging import BASE_LOGGER_NAME
from mindspace_providers.base.repositories import CredentialResolver
from mindspace_providers.config import reset_config_cache
from mindspace_providers.config.env import get_env_var_candidates
from mindspace_providers.config.vendors import VENDORS
from mindspace_providers.persistence import InMemoryKeyStore

from helpers import RecordingTransport, make_client

_SETTING_VARS = (
    "MINDSPACE_VENDOR",
    "MINDSPACE_MODEL",
    "MINDSPACE_SYSTEM_PROMPT",
    "MINDSPACE_HISTORY_WINDOW",
    "MINDSPACE_CONFIG_FILE",
    "MINDSPACE_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    """Strip credentials and gateway settings; point ``.env`` loading at nothing."""
    for vendor_id in VENDORS:
        for name in get_env_var_candidates(vendor_id):
            monkeypatch.delenv(name, raising=False)
        monkeypatch.delenv(f"{vendor_id.upper()}_MODEL", raising=False)
        monkeypatch.delenv(f"{vendor_id.upper()}_BASE_URL", raising=False)
    for name in _SETTING_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("DOTENV_FILE", str(tmp_path / "absent.env"))
    reset_config_cache()
    yield
    reset_config_cache()


@pytest.fixture(autouse=True)
def sleeps(monkeypatch: pytest.MonkeyPatch) -> List[float]:
    """Record retry backoff delays instead of sleeping."""
    recorded: List[float] = []
    monkeypatch.setattr("mindspace_providers.base.resilience.retry._sleep", recorded.append)
    return recorded


class _ListHandler(logging.Handler):
    """Capture log records into a list for assertions."""

    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.records: List[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)

    def events(self) -> List[dict]:
        out = []
        for record in self.records:
            try:
                payload = json.loads(record.getMessage())
            except ValueError:
                continue
            if isinstance(payload, dict):
                payload.setdefault("level", record.levelname)
                out.append(payload)
        return out


@pytest.fixture()
def log_capture() -> Iterator[_ListHandler]:
    """Attach a list handler to the shared ``mindspace`` logger."""
    logger = logging.getLogger(BASE_LOGGER_NAME)
    handler = _ListHandler()
    logger.addHandler(handler)
    yield handler
    logger.removeHandler(handler)


@pytest.fixture()
def key_store() -> InMemoryKeyStore:
    return InMemoryKeyStore()


@pytest.fixture()
def resolver(key_store: InMemoryKeyStore) -> CredentialResolver:
    return CredentialResolver(key_store, environ={})


@pytest.fixture()
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture()
def registry(resolver: CredentialResolver, transport: RecordingTransport) -> AdapterRegistry:
    return AdapterRegistry(resolver=resolver, http_client=make_client(transport))

