"""
Unit tests for config_module.

Tests cover:
- .env loading and overriding
- get_config and the typed accessors
- validate_config passing and failing scenarios
- TravelSettings defaults and environment overrides
"""

import logging
import os

import pytest

from landmark_travel.config.config_module import (
    ConfigError,
    TravelSettings,
    get_config,
    get_float_config,
    get_int_config,
    load_config,
    validate_config,
)


SETTINGS_KEYS = [
    "GOOGLE_MAPS_API_KEY",
    "GEOCODE_CACHE_TTL_SECONDS",
    "DISTANCE_CACHE_TTL_SECONDS",
    "SHORT_LINK_CACHE_TTL_SECONDS",
    "LINK_EXPAND_TIMEOUT_SECONDS",
    "PROVIDER_TIMEOUT_SECONDS",
    "TRAVEL_RATE_LIMIT_MAX",
    "TRAVEL_RATE_LIMIT_WINDOW_SECONDS",
    "LANDMARK_RATE_LIMIT_MAX",
    "LANDMARK_RATE_LIMIT_WINDOW_SECONDS",
    "MATRIX_MAX_WORKERS",
]


@pytest.fixture
def clean_settings_env(monkeypatch):
    """Remove every settings key from the environment."""
    for key in SETTINGS_KEYS:
        monkeypatch.delenv(key, raising=False)


class TestLoadConfig:
    """Test cases for load_config."""

    def test_load_existing_file(self, tmp_path, monkeypatch, caplog):
        monkeypatch.delenv("LT_TEST_KEY", raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text("LT_TEST_KEY=test_value\n")

        with caplog.at_level(logging.INFO):
            load_config(str(env_file))

        assert os.getenv("LT_TEST_KEY") == "test_value"
        assert f"Loaded configuration from {env_file}" in caplog.text
        monkeypatch.delenv("LT_TEST_KEY", raising=False)

    def test_load_missing_file(self, caplog):
        missing = "/path/that/does/not/exist/.env"

        with caplog.at_level(logging.WARNING):
            load_config(missing)

        assert f"Configuration file {missing} not found" in caplog.text

    def test_file_overrides_environment(self, tmp_path, monkeypatch):
        monkeypatch.setenv("LT_OVERRIDE", "original")
        env_file = tmp_path / ".env"
        env_file.write_text("LT_OVERRIDE=from_file\n")

        load_config(str(env_file))

        assert os.getenv("LT_OVERRIDE") == "from_file"
        monkeypatch.delenv("LT_OVERRIDE", raising=False)


class TestGetConfig:
    """Test cases for get_config and typed accessors."""

    def test_existing_key(self, monkeypatch):
        monkeypatch.setenv("LT_EXISTING", "value")
        assert get_config("LT_EXISTING") == "value"

    def test_missing_key_with_default(self, monkeypatch):
        monkeypatch.delenv("LT_MISSING", raising=False)
        assert get_config("LT_MISSING", "fallback") == "fallback"

    def test_missing_key_without_default(self, monkeypatch):
        monkeypatch.delenv("LT_MISSING", raising=False)
        assert get_config("LT_MISSING") is None

    def test_empty_value_is_returned(self, monkeypatch):
        monkeypatch.setenv("LT_EMPTY", "")
        assert get_config("LT_EMPTY", "fallback") == ""

    def test_int_config(self, monkeypatch):
        monkeypatch.setenv("LT_INT", "42")
        assert get_int_config("LT_INT", 1) == 42

    def test_int_config_blank_uses_default(self, monkeypatch):
        monkeypatch.setenv("LT_INT", "  ")
        assert get_int_config("LT_INT", 7) == 7

    def test_int_config_invalid(self, monkeypatch):
        monkeypatch.setenv("LT_INT", "many")
        with pytest.raises(ConfigError) as exc_info:
            get_int_config("LT_INT", 1)
        assert "must be an integer" in str(exc_info.value)

    def test_float_config(self, monkeypatch):
        monkeypatch.setenv("LT_FLOAT", "2.5")
        assert get_float_config("LT_FLOAT", 1.0) == 2.5

    def test_float_config_invalid(self, monkeypatch):
        monkeypatch.setenv("LT_FLOAT", "soon")
        with pytest.raises(ConfigError):
            get_float_config("LT_FLOAT", 1.0)


class TestValidateConfig:
    """Test cases for validate_config."""

    def test_all_present(self, monkeypatch, caplog):
        monkeypatch.setenv("LT_KEY1", "a")
        monkeypatch.setenv("LT_KEY2", "b")

        with caplog.at_level(logging.INFO):
            validate_config(["LT_KEY1", "LT_KEY2"])

        assert "Configuration validation passed" in caplog.text

    def test_missing_and_blank(self, monkeypatch):
        monkeypatch.setenv("LT_KEY1", "a")
        monkeypatch.setenv("LT_BLANK", "   ")
        monkeypatch.delenv("LT_ABSENT", raising=False)

        with pytest.raises(ConfigError) as exc_info:
            validate_config(["LT_KEY1", "LT_ABSENT", "LT_BLANK"])

        message = str(exc_info.value)
        assert "Missing keys: LT_ABSENT" in message
        assert "Empty keys: LT_BLANK" in message


class TestTravelSettings:
    """Test cases for TravelSettings."""

    def test_defaults(self, clean_settings_env):
        settings = TravelSettings.from_env()

        assert settings.google_maps_api_key == ""
        assert settings.geocode_cache_ttl == 86400
        assert settings.distance_cache_ttl == 60
        assert settings.short_link_cache_ttl == 86400
        assert settings.link_expand_timeout == 10
        assert settings.provider_timeout == 15
        assert settings.travel_rate_limit_max == 60
        assert settings.travel_rate_limit_window == 900
        assert settings.landmark_rate_limit_max == 120
        assert settings.matrix_max_workers == 8

    def test_environment_overrides(self, clean_settings_env, monkeypatch):
        monkeypatch.setenv("GOOGLE_MAPS_API_KEY", "AIza-test")
        monkeypatch.setenv("DISTANCE_CACHE_TTL_SECONDS", "30")
        monkeypatch.setenv("TRAVEL_RATE_LIMIT_MAX", "5")
        monkeypatch.setenv("MATRIX_MAX_WORKERS", "2")

        settings = TravelSettings.from_env()

        assert settings.google_maps_api_key == "AIza-test"
        assert settings.distance_cache_ttl == 30.0
        assert settings.travel_rate_limit_max == 5
        assert settings.matrix_max_workers == 2

    def test_invalid_override(self, clean_settings_env, monkeypatch):
        monkeypatch.setenv("TRAVEL_RATE_LIMIT_MAX", "lots")
        with pytest.raises(ConfigError):
            TravelSettings.from_env()
