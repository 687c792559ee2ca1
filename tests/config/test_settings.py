"""Tests for boomero/config/settings.py."""

from pathlib import Path

from boomero.config.settings import Settings, get_settings


class TestSettings:
    def test_defaults(self, monkeypatch):
        for key in ("STORAGE_BACKEND", "SNAPSHOT_PATH", "GAME_ID", "DEBUG", "LOG_LEVEL"):
            monkeypatch.delenv(key, raising=False)

        settings = Settings(_env_file=None)

        assert settings.storage_backend == "file"
        assert settings.snapshot_path == Path(".boomero") / "game_state.json"
        assert settings.game_id == "local"
        assert settings.debug is False

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("STORAGE_BACKEND", "supabase")
        monkeypatch.setenv("GAME_ID", "pub-night")

        settings = Settings(_env_file=None)

        assert settings.storage_backend == "supabase"
        assert settings.game_id == "pub-night"

    def test_get_settings_cached(self):
        get_settings.cache_clear()
        try:
            assert get_settings() is get_settings()
        finally:
            get_settings.cache_clear()
