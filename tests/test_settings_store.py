import json

import pytest
from pydantic import SecretStr

from site_synthesizer.settings import GenerationMode, GeneratorSettings
from site_synthesizer.settings_store import InMemorySettingsStore, LocalSettingsStore


def test_local_store_returns_defaults_until_saved(tmp_path):
    defaults = GeneratorSettings(model_name="gemini-test", request_timeout=5)
    store = LocalSettingsStore(path=tmp_path / "settings.json", defaults=defaults)

    assert store.load() == defaults
    assert store.load().mode == GenerationMode.template


def test_local_store_persists_credential_and_relay(tmp_path):
    path = tmp_path / "nested" / "settings.json"
    defaults = GeneratorSettings(model_name="gemini-test")
    store = LocalSettingsStore(path=path, defaults=defaults)

    store.save(
        defaults.model_copy(
            update={"credential": SecretStr("key-123"), "relay_url": "https://relay.example.com/webhook/x"}
        )
    )

    on_disk = json.loads(path.read_text(encoding="utf-8"))
    assert on_disk == {
        "credential": "key-123",
        "relay_url": "https://relay.example.com/webhook/x",
        "prefer_direct": False,
    }

    reloaded = LocalSettingsStore(path=path, defaults=defaults).load()
    assert reloaded.credential_value() == "key-123"
    assert reloaded.relay_url == "https://relay.example.com/webhook/x"
    assert reloaded.model_name == "gemini-test"
    assert reloaded.mode == GenerationMode.relay


def test_local_store_keeps_default_credential_when_file_omits_it(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"relay_url": "", "prefer_direct": True}), encoding="utf-8")
    defaults = GeneratorSettings(credential=SecretStr("from-env"))

    loaded = LocalSettingsStore(path=path, defaults=defaults).load()

    assert loaded.credential_value() == "from-env"
    assert loaded.relay_url is None
    assert loaded.mode == GenerationMode.direct


def test_cleared_credential_overrides_default_credential(tmp_path):
    path = tmp_path / "settings.json"
    defaults = GeneratorSettings(credential=SecretStr("env-key"))
    store = LocalSettingsStore(path=path, defaults=defaults)

    store.save(defaults.model_copy(update={"credential": None}))

    assert json.loads(path.read_text(encoding="utf-8"))["credential"] is None
    assert store.load().credential_value() == ""
    assert store.load().mode == GenerationMode.template


@pytest.mark.parametrize("content", ["{not json", "[1, 2]", ""])
def test_unreadable_settings_file_falls_back_to_defaults(tmp_path, content):
    path = tmp_path / "settings.json"
    path.write_text(content, encoding="utf-8")
    defaults = GeneratorSettings(credential=SecretStr("env-key"), relay_url="https://relay.example.com/webhook/x")

    assert LocalSettingsStore(path=path, defaults=defaults).load() == defaults


def test_in_memory_store_round_trip():
    store = InMemorySettingsStore()
    assert store.load().mode == GenerationMode.template

    store.save(GeneratorSettings(credential=SecretStr("k"), prefer_direct=True))

    assert store.load().mode == GenerationMode.direct


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "env-key")
    monkeypatch.setenv("RELAY_WEBHOOK_URL", "https://relay.example.com/webhook/x")
    monkeypatch.setenv("USE_DIRECT_API", "true")
    monkeypatch.setenv("GEMINI_MODEL", "gemini-custom")
    monkeypatch.setenv("REQUEST_TIMEOUT_SECONDS", "12.5")
    monkeypatch.delenv("PROJECT_ID", raising=False)

    settings = GeneratorSettings.from_env()

    assert settings.credential_value() == "env-key"
    assert settings.mode == GenerationMode.direct
    assert settings.model_name == "gemini-custom"
    assert settings.request_timeout == 12.5


def test_settings_from_env_without_credential(monkeypatch):
    for name in ("GEMINI_API_KEY", "RELAY_WEBHOOK_URL", "USE_DIRECT_API", "PROJECT_ID"):
        monkeypatch.delenv(name, raising=False)

    assert GeneratorSettings.from_env().mode == GenerationMode.template
