# tests/config/test_settings_manager.py
import json

import pytest
from PySide6.QtCore import QSettings

from intel_brief.config.settings_manager import SETTINGS_KEY, SettingsManager, get_gemini_api_key
from intel_brief.models import AIProvider


def _write_raw(settings_file, value):
    qsettings = QSettings(settings_file, QSettings.Format.IniFormat)
    qsettings.setValue(SETTINGS_KEY, value)
    qsettings.sync()


def test_defaults_when_nothing_stored(settings_file):
    settings = SettingsManager(settings_file).get_settings()

    assert settings.provider is AIProvider.Gemini
    assert settings.keys == {}


def test_changes_persist_across_instances(settings_file):
    manager = SettingsManager(settings_file)
    manager.set_provider(AIProvider.Qwen)
    manager.set_api_key(AIProvider.Qwen, "  sk-qwen  ")
    manager.set_api_key(AIProvider.DeepSeek, "sk-deep")

    reloaded = SettingsManager(settings_file).get_settings()

    assert reloaded.provider is AIProvider.Qwen
    assert reloaded.key_for(AIProvider.Qwen) == "sk-qwen"
    assert reloaded.key_for(AIProvider.DeepSeek) == "sk-deep"


def test_stored_as_json_under_fixed_key(settings_file):
    manager = SettingsManager(settings_file)
    manager.set_api_key(AIProvider.DeepSeek, "sk-deep")

    raw = QSettings(settings_file, QSettings.Format.IniFormat).value(SETTINGS_KEY)

    assert json.loads(raw) == {"provider": "Gemini", "keys": {"DeepSeek": "sk-deep"}}


def test_gemini_key_cannot_be_stored(settings_file):
    manager = SettingsManager(settings_file)

    with pytest.raises(ValueError):
        manager.set_api_key(AIProvider.Gemini, "secret")


def test_gemini_key_in_storage_is_ignored(settings_file):
    _write_raw(settings_file, json.dumps({"provider": "DeepSeek", "keys": {"Gemini": "leaked", "DeepSeek": "sk"}}))

    settings = SettingsManager(settings_file).get_settings()

    assert settings.provider is AIProvider.DeepSeek
    assert AIProvider.Gemini not in settings.keys
    assert settings.key_for(AIProvider.DeepSeek) == "sk"


@pytest.mark.parametrize("raw", [
    "{not json",
    json.dumps(["DeepSeek"]),
    json.dumps({"provider": "Claude", "keys": {}}),
    json.dumps({"provider": "Qwen", "keys": ["sk"]}),
])
def test_corrupted_storage_falls_back_to_defaults(settings_file, raw):
    _write_raw(settings_file, raw)

    settings = SettingsManager(settings_file).get_settings()

    assert settings.provider is AIProvider.Gemini
    assert settings.keys == {}


def test_get_settings_returns_a_copy(settings_file):
    manager = SettingsManager(settings_file)
    copy = manager.get_settings()
    copy.keys[AIProvider.Qwen] = "mutated"

    assert manager.get_settings().key_for(AIProvider.Qwen) == ""


def test_settings_changed_signal(settings_file):
    manager = SettingsManager(settings_file)
    calls = []
    manager.settings_changed.connect(lambda: calls.append(True))

    manager.set_provider(AIProvider.DeepSeek)
    manager.set_provider(AIProvider.DeepSeek)  # unchanged, no emit
    manager.reset()

    assert len(calls) == 2
    assert manager.get_settings().provider is AIProvider.Gemini


def test_gemini_key_comes_from_environment(monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("API_KEY", raising=False)
    assert get_gemini_api_key() is None

    monkeypatch.setenv("API_KEY", "fallback")
    assert get_gemini_api_key() == "fallback"

    monkeypatch.setenv("GEMINI_API_KEY", " primary ")
    assert get_gemini_api_key() == "primary"
