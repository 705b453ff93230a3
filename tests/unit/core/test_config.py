"""Unit tests for environment settings."""

import pytest

from report_engine.core.config import Settings, get_settings


class TestSettings:
    """Tests for Settings."""

    def test_env_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("APP_ENV", "production")
        monkeypatch.setenv("LOG_FORMAT", "json")
        monkeypatch.setenv("SERVER_PORT", "9000")
        settings = Settings()
        assert settings.is_production is True
        assert settings.log_format == "json"
        assert settings.server_port == 9000

    def test_cors_origins_list(self) -> None:
        settings = Settings(cors_origins=" http://a.test , ,http://b.test")
        assert settings.cors_origins_list == ["http://a.test", "http://b.test"]

    def test_render_config_path_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("RENDER_CONFIG_PATH", raising=False)
        assert Settings().render_config_path.endswith("app.yaml")

    def test_get_settings_cached(self) -> None:
        assert get_settings() is get_settings()
