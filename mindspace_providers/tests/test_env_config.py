from __future__ import annotations

import json
import os

from mindspace_providers.base.models import ChatSelection
from mindspace_providers.base.timeouts import get_timeout_config
from mindspace_providers.config import (
    get_gateway_config,
    get_selection,
    get_vendor_settings,
    load_dotenv_once,
    reset_config_cache,
)
from mindspace_providers.config.defaults import DEFAULT_SYSTEM_PROMPT
from mindspace_providers.config.env import (
    ENV_MAP,
    get_env_var_candidates,
    get_env_var_name,
    is_placeholder,
    resolve_env_key,
)
from mindspace_providers.config.vendors import get_vendor_config, supported_vendor_ids


def test_env_map_derived_from_vendor_table():
    assert ENV_MAP["alibaba"] == "DASHSCOPE_API_KEY"
    assert get_env_var_name("Gemini") == "GEMINI_API_KEY"
    assert get_env_var_name("unknown") is None
    assert list(get_env_var_candidates("grok")) == ["GROK_API_KEY", "XAI_API_KEY"]
    assert list(get_env_var_candidates("nope")) == []


def test_resolve_env_key_trims_and_reports_name():
    assert resolve_env_key("gemini", {"GOOGLE_API_KEY": "  g  "}) == ("g", "GOOGLE_API_KEY")
    assert resolve_env_key("gemini", {"GEMINI_API_KEY": "   "}) == (None, None)


def test_placeholder_detection():
    assert is_placeholder("your-key-placeholder")
    assert is_placeholder("CHANGEME")
    assert is_placeholder("test_123")
    assert not is_placeholder("sk-real")
    assert not is_placeholder(None)


def test_vendor_lookup_is_case_insensitive():
    assert get_vendor_config(" MiniMax ").key_probe == "chat"
    assert get_vendor_config("") is None
    assert "hunyuan" not in supported_vendor_ids()


def test_gateway_defaults():
    cfg = get_gateway_config()
    assert cfg["vendor"] == "alibaba"
    assert cfg["model"] is None
    assert cfg["history_window"] == 10
    assert cfg["system_prompt"] == DEFAULT_SYSTEM_PROMPT


def test_merge_order_file_then_env_then_overrides(monkeypatch, tmp_path):
    cfg_file = tmp_path / "gateway.yaml"
    cfg_file.write_text(
        "vendor: deepseek\nhistory_window: 6\nvendors:\n  deepseek:\n    model: deepseek-reasoner\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("MINDSPACE_CONFIG_FILE", str(cfg_file))
    reset_config_cache()

    assert get_gateway_config()["vendor"] == "deepseek"
    assert get_gateway_config()["history_window"] == 6
    assert get_vendor_settings("deepseek")["model"] == "deepseek-reasoner"

    monkeypatch.setenv("MINDSPACE_VENDOR", " Gemini ")
    monkeypatch.setenv("MINDSPACE_HISTORY_WINDOW", "4")
    cfg = get_gateway_config()
    assert (cfg["vendor"], cfg["history_window"]) == ("gemini", 4)

    assert get_gateway_config({"vendor": "openai", "model": None})["vendor"] == "openai"


def test_json_config_file(monkeypatch, tmp_path):
    cfg_file = tmp_path / "gateway.json"
    cfg_file.write_text(json.dumps({"vendors": {"ollama": {"api_base": "http://box:11434/v1"}}}), encoding="utf-8")
    monkeypatch.setenv("MINDSPACE_CONFIG_FILE", str(cfg_file))
    reset_config_cache()
    assert get_vendor_settings("ollama")["api_base"] == "http://box:11434/v1"


def test_invalid_history_window_falls_back_to_default(monkeypatch):
    monkeypatch.setenv("MINDSPACE_HISTORY_WINDOW", "many")
    assert get_gateway_config()["history_window"] == 10


def test_vendor_settings_env_overrides(monkeypatch):
    monkeypatch.setenv("ZHIPU_MODEL", "glm-4-plus")
    settings = get_vendor_settings("zhipu")
    assert settings["model"] == "glm-4-plus"
    assert settings["api_base"] == "https://open.bigmodel.cn/api/paas/v4"
    assert get_vendor_settings("hunyuan") == {}


def test_get_selection(monkeypatch):
    monkeypatch.setenv("MINDSPACE_VENDOR", "grok")
    monkeypatch.setenv("MINDSPACE_MODEL", "grok-2")
    assert get_selection() == ChatSelection(vendor="grok", model="grok-2")


def test_dotenv_loaded_once_without_overriding_real_values(monkeypatch, tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text(
        "# comment\nDEEPSEEK_API_KEY='sk-from-dotenv'\nOPENAI_API_KEY=sk-dotenv-openai\nnot a pair\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("DOTENV_FILE", str(env_file))
    monkeypatch.setenv("OPENAI_API_KEY", "sk-real")
    monkeypatch.setenv("DEEPSEEK_API_KEY", "your-key-placeholder")
    reset_config_cache()

    load_dotenv_once()

    assert os.environ["DEEPSEEK_API_KEY"] == "sk-from-dotenv"
    assert os.environ["OPENAI_API_KEY"] == "sk-real"
    monkeypatch.setenv("DEEPSEEK_API_KEY", "changeme")
    load_dotenv_once()
    assert os.environ["DEEPSEEK_API_KEY"] == "changeme"


def test_timeout_config_env_override(monkeypatch):
    monkeypatch.setenv("MINDSPACE_HTTP_TIMEOUT_SECONDS", "12.5")
    cfg = get_timeout_config()
    assert cfg.http_timeout_seconds == 12.5
    assert cfg.for_request().read == 12.5
    monkeypatch.delenv("MINDSPACE_HTTP_TIMEOUT_SECONDS")
    assert get_timeout_config().http_timeout_seconds == 30.0
