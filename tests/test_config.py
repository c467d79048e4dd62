"""Tests for configuration management."""

import logging

import pytest
from pydantic import ValidationError

from doc_classifier.config import Settings, get_settings


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    """Start every test from default settings."""
    for name in (
        "MAX_UPLOAD_SIZE_MB",
        "CLASSIFY_RATE_LIMIT",
        "UPLOAD_RATE_LIMIT",
        "BATCH_RATE_LIMIT",
        "TRUSTED_PROXIES",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestSettings:
    """Test Settings class validation and loading."""

    def test_defaults(self):
        """Test that Settings loads with no environment variables."""
        settings = Settings(_env_file=None)

        assert settings.max_upload_size_mb == 25
        assert settings.classify_rate_limit == "60/minute"
        assert settings.upload_rate_limit == "10/minute"
        assert settings.batch_rate_limit == "5/minute"
        assert settings.trusted_proxies == ""
        assert settings.log_level == "INFO"

    def test_env_overrides(self, monkeypatch):
        """Test that environment variables override defaults."""
        monkeypatch.setenv("MAX_UPLOAD_SIZE_MB", "50")
        monkeypatch.setenv("CLASSIFY_RATE_LIMIT", "100/minute")
        monkeypatch.setenv("LOG_LEVEL", "debug")

        settings = Settings(_env_file=None)

        assert settings.max_upload_size_mb == 50
        assert settings.classify_rate_limit == "100/minute"
        assert settings.log_level == "DEBUG"
        assert settings.log_level_value == logging.DEBUG

    def test_rate_limit_normalized(self, monkeypatch):
        """Test that rate limits are lowercased and whitespace-free."""
        monkeypatch.setenv("UPLOAD_RATE_LIMIT", " 20 / Hour ")

        settings = Settings(_env_file=None)

        assert settings.upload_rate_limit == "20/hour"

    def test_invalid_rate_limit_raises_error(self, monkeypatch):
        monkeypatch.setenv("BATCH_RATE_LIMIT", "lots")

        with pytest.raises(ValidationError) as exc_info:
            Settings(_env_file=None)

        assert "Invalid rate limit" in str(exc_info.value)

    def test_invalid_log_level_raises_error(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "verbose")

        with pytest.raises(ValidationError) as exc_info:
            Settings(_env_file=None)

        assert "LOG_LEVEL must be a standard logging level" in str(exc_info.value)

    @pytest.mark.parametrize("value", ["0", "201", "-5"])
    def test_upload_size_bounds(self, monkeypatch, value):
        monkeypatch.setenv("MAX_UPLOAD_SIZE_MB", value)

        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_trusted_proxy_list(self, monkeypatch):
        monkeypatch.setenv("TRUSTED_PROXIES", " 10.0.0.1, ,10.0.0.2 ")

        settings = Settings(_env_file=None)

        assert settings.trusted_proxy_list == ["10.0.0.1", "10.0.0.2"]


class TestGetSettings:
    """Test get_settings() function caching behavior."""

    def test_get_settings_returns_settings_instance(self):
        assert isinstance(get_settings(), Settings)

    def test_get_settings_caches_result(self):
        assert get_settings() is get_settings()

    def test_get_settings_raises_error_on_invalid_config(self, monkeypatch):
        monkeypatch.setenv("MAX_UPLOAD_SIZE_MB", "not-a-number")

        with pytest.raises(ValidationError):
            get_settings()
