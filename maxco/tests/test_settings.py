"""
Tests for the settings store, typed settings and API key lookup.
"""

import json

import pytest

from maxco.src.application.settings_loader import load_app_settings, resolve_api_key
from maxco.src.domain.models.settings import LogLevel
from maxco.src.infrastructure.storage.settings_manager import SettingsManager


@pytest.fixture
def manager(settings_dir):
    return SettingsManager(settings_dir)


@pytest.fixture
def no_env_key(monkeypatch):
    monkeypatch.delenv("MAXCO_GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)


class TestSettingsManager:

    def test_defaults_written_on_first_load(self, manager, settings_dir):
        assert (settings_dir / "settings.json").exists()
        assert manager.get("voice.language") == "en-US"
        assert manager.get("routing.agent_command_delay_ms") == 500
        assert manager.get("missing.key", "fallback") == "fallback"

    def test_api_key_encrypted_on_disk(self, manager, settings_dir):
        manager.set("ai.api_key", "AIza-secret")

        on_disk = json.loads((settings_dir / "settings.json").read_text(encoding="utf-8"))
        assert on_disk["ai"]["api_key"].startswith("enc:")
        assert "AIza-secret" not in on_disk["ai"]["api_key"]
        assert manager.get("ai.api_key") == "AIza-secret"

        reloaded = SettingsManager(settings_dir)
        assert reloaded.get("ai.api_key") == "AIza-secret"

    def test_token_limits_are_not_secrets(self, manager):
        manager.set("ai.max_output_tokens", 1024)
        assert manager.get_all()["ai"]["max_output_tokens"] == 1024

    def test_get_section_decrypts(self, manager):
        manager.set("ai.api_key", "k-123")
        section = manager.get_section("ai")
        assert section["api_key"] == "k-123"
        assert section["text_model"] == "gemini-2.5-flash"

    def test_missing_keys_filled_from_defaults(self, settings_dir):
        settings_dir.mkdir(parents=True, exist_ok=True)
        (settings_dir / "settings.json").write_text(
            json.dumps({"voice": {"language": "fr-FR"}}), encoding="utf-8")

        manager = SettingsManager(settings_dir)

        assert manager.get("voice.language") == "fr-FR"
        assert manager.get("voice.transcript_clear_delay_ms") == 2000
        assert manager.get("hud.visible") is True

    def test_corrupt_file_falls_back_to_defaults(self, settings_dir):
        settings_dir.mkdir(parents=True, exist_ok=True)
        (settings_dir / "settings.json").write_text("{not json", encoding="utf-8")

        manager = SettingsManager(settings_dir)

        assert manager.get("voice.language") == "en-US"

    def test_delete_and_reset(self, manager):
        manager.set("voice.language", "de-DE")
        manager.delete("voice.language")
        assert manager.get("voice.language") is None

        manager.reset_to_defaults()
        assert manager.get("voice.language") == "en-US"


class TestLoadAppSettings:

    def test_defaults(self, manager):
        settings = load_app_settings(manager)
        assert settings.voice.transcript_clear_delay_ms == 2000
        assert settings.hud.click_suppression_ms == 50
        assert settings.advanced.log_level == LogLevel.STANDARD.value

    def test_invalid_section_uses_defaults(self, manager):
        manager.set("voice.transcript_clear_delay_ms", -5)
        manager.set("routing.agent_command_delay_ms", 750)

        settings = load_app_settings(manager)

        assert settings.voice.transcript_clear_delay_ms == 2000
        assert settings.routing.agent_command_delay_ms == 750

    def test_api_key_is_secret(self, manager):
        manager.set("ai.api_key", "k-123")
        settings = load_app_settings(manager)
        assert settings.ai.api_key.get_secret_value() == "k-123"
        assert "k-123" not in repr(settings.ai)


class TestResolveApiKey:

    def test_environment_wins(self, manager, monkeypatch):
        manager.set("ai.api_key", "stored")
        monkeypatch.setenv("GEMINI_API_KEY", "from-env")
        monkeypatch.delenv("MAXCO_GEMINI_API_KEY", raising=False)

        assert resolve_api_key(manager) == ("from-env", "GEMINI_API_KEY")

        monkeypatch.setenv("MAXCO_GEMINI_API_KEY", "preferred")
        assert resolve_api_key(manager) == ("preferred", "MAXCO_GEMINI_API_KEY")

    def test_stored_key(self, manager, no_env_key):
        manager.set("ai.api_key", "stored")
        assert resolve_api_key(manager) == ("stored", "settings")

    def test_missing(self, manager, no_env_key):
        assert resolve_api_key(manager) == ("", "")
        assert resolve_api_key() == ("", "")
