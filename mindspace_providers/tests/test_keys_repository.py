"""Credential precedence, masking and key store backends."""

from __future__ import annotations

import sqlite3

import pytest

from mindspace_providers.base.repositories import (
    NO_CREDENTIAL,
    CredentialResolver,
    CredentialSource,
    mask_api_key,
)
from mindspace_providers.persistence import InMemoryKeyStore, KeyStore, SqliteKeyStore


def test_local_override_beats_environment():
    store = InMemoryKeyStore({"DeepSeek": "  sk-local-override  "})
    resolver = CredentialResolver(store, environ={"DEEPSEEK_API_KEY": "sk-from-env"})

    cred = resolver.resolve("deepseek")

    assert cred.key == "sk-local-override"
    assert cred.source is CredentialSource.LOCAL_OVERRIDE


def test_environment_used_when_no_override():
    resolver = CredentialResolver(InMemoryKeyStore(), environ={"DASHSCOPE_API_KEY": " sk-env "})
    cred = resolver.resolve("alibaba")
    assert (cred.key, cred.source) == ("sk-env", CredentialSource.ENVIRONMENT)


def test_blank_values_fall_through():
    store = InMemoryKeyStore({"openai": "   "})
    resolver = CredentialResolver(store, environ={"OPENAI_API_KEY": ""})
    assert resolver.resolve("openai") == NO_CREDENTIAL
    assert resolver.get_api_key("openai") == ""
    assert resolver.is_configured("openai") is False


def test_env_aliases_are_honored():
    resolver = CredentialResolver(environ={"GOOGLE_API_KEY": "g-key", "XAI_API_KEY": "x-key"})
    assert resolver.get_api_key("gemini") == "g-key"
    assert resolver.get_api_key("grok") == "x-key"


def test_canonical_env_name_wins_over_alias():
    resolver = CredentialResolver(environ={"GEMINI_API_KEY": "canonical", "GOOGLE_API_KEY": "alias"})
    assert resolver.get_api_key("gemini") == "canonical"


def test_resolution_is_not_cached():
    store = InMemoryKeyStore()
    resolver = CredentialResolver(store, environ={})
    assert not resolver.is_configured("zhipu")
    store.set_api_key("zhipu", "zk-123456789")
    assert resolver.is_configured("zhipu")
    store.delete_api_key("zhipu")
    assert not resolver.is_configured("zhipu")


def test_keyless_and_unknown_vendors():
    resolver = CredentialResolver(environ={})
    assert resolver.is_configured("ollama") is True
    assert resolver.is_configured("hunyuan") is False


def test_default_resolver_reads_process_environment(monkeypatch):
    monkeypatch.setenv("MINIMAX_API_KEY", "mm-key")
    assert CredentialResolver().get_api_key("minimax") == "mm-key"


@pytest.mark.parametrize(
    "key, expected",
    [
        (None, "***"),
        ("", "***"),
        ("short", "***"),
        ("12345678", "***"),
        ("sk-abcdefghijkl", "sk-abcde..."),
    ],
)
def test_mask_api_key(key, expected):
    assert mask_api_key(key) == expected


def test_stores_satisfy_protocol(tmp_path):
    sqlite_store = SqliteKeyStore(str(tmp_path / "keys.db"))
    try:
        assert isinstance(InMemoryKeyStore(), KeyStore)
        assert isinstance(sqlite_store, KeyStore)
    finally:
        sqlite_store.close()


def test_sqlite_keystore_round_trip_and_persistence(tmp_path):
    path = str(tmp_path / "keys.db")
    store = SqliteKeyStore(path)
    store.set_api_key("DeepSeek", "sk-one")
    store.set_api_key("openai", "sk-two")
    store.set_api_key("deepseek", "sk-three")
    assert store.get_api_key("deepseek") == "sk-three"
    assert store.list_vendors() == ["deepseek", "openai"]
    store.close()

    reopened = SqliteKeyStore(path)
    try:
        assert reopened.get_api_key("DEEPSEEK") == "sk-three"
        reopened.delete_api_key("openai")
        assert reopened.get_api_key("openai") is None
        assert reopened.list_vendors() == ["deepseek"]
    finally:
        reopened.close()


def test_sqlite_keystore_with_external_connection():
    conn = sqlite3.connect(":memory:")
    store = SqliteKeyStore(conn=conn)
    store.set_api_key("grok", "xk")
    store.close()
    # Caller-owned connections stay open.
    row = conn.execute("SELECT api_key, updated_at FROM keys WHERE vendor = 'grok'").fetchone()
    assert row[0] == "xk"
    assert row[1]
    conn.close()


def test_resolver_over_sqlite_store(tmp_path):
    store = SqliteKeyStore(str(tmp_path / "keys.db"))
    try:
        store.set_api_key("gemini", "gm-local")
        resolver = CredentialResolver(store, environ={"GEMINI_API_KEY": "gm-env"})
        assert resolver.resolve("gemini").source is CredentialSource.LOCAL_OVERRIDE
    finally:
        store.close()
