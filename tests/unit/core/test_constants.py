"""Tests for settings loading and caching."""

from __future__ import annotations

import pytest

from pydantic import ValidationError

from authkit.core.constants import (
    DEFAULT_BASE_URL,
    Settings,
    clear_settings_cache,
    get_settings,
    reload_settings,
)


class TestSettings:
    """Tests for the Settings model."""

    def test_defaults(self) -> None:
        settings = Settings()

        assert settings.app_env == "development"
        assert settings.debug is False
        assert settings.log_dir is None
        assert settings.secret is None
        assert settings.base_url == DEFAULT_BASE_URL
        assert settings.http_connect_timeout == 10.0
        assert settings.http_read_timeout == 30.0

    def test_env_prefix(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("AUTHKIT_DEBUG", "true")
        monkeypatch.setenv("AUTHKIT_SECRET", "sk_test_env")
        monkeypatch.setenv("AUTHKIT_HTTP_READ_TIMEOUT", "5")

        settings = Settings()

        assert settings.debug is True
        assert settings.secret == "sk_test_env"
        assert settings.http_read_timeout == 5.0

    def test_app_env_normalized(self) -> None:
        assert Settings(app_env="PRODUCTION").is_production is True

    def test_invalid_app_env(self) -> None:
        with pytest.raises(ValidationError):
            Settings(app_env="staging")

    def test_non_positive_timeout(self) -> None:
        with pytest.raises(ValidationError):
            Settings(http_read_timeout=0)


class TestSettingsCache:
    """Tests for get_settings/reload_settings/clear_settings_cache."""

    def test_get_settings_cached(self) -> None:
        assert get_settings() is get_settings()

    def test_reload_returns_fresh_instance(self, monkeypatch: pytest.MonkeyPatch) -> None:
        first = get_settings()
        monkeypatch.setenv("AUTHKIT_DEBUG", "true")

        reloaded = reload_settings()

        assert reloaded is not first
        assert reloaded.debug is True
        assert get_settings() is reloaded

    def test_clear(self) -> None:
        first = get_settings()

        clear_settings_cache()

        assert get_settings() is not first
