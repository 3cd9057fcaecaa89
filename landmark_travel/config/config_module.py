"""
Configuration management for the landmark travel service.

Loads environment variables from a .env file, exposes typed accessors
and collects the service tunables into a single TravelSettings object.
"""

import os
import logging
from dataclasses import dataclass
from typing import Any, List
from dotenv import load_dotenv


class ConfigError(Exception):
    """Raised when required configuration is missing or malformed."""
    pass


def load_config(env_path: str = ".env") -> None:
    """
    Load environment variables from a .env file.

    Values in the file override variables already present in the process.

    Args:
        env_path: Path to the .env file (default: ".env")
    """
    logger = logging.getLogger(__name__)

    if os.path.exists(env_path):
        load_dotenv(env_path, override=True)
        logger.info(f"Loaded configuration from {env_path}")
    else:
        logger.warning(f"Configuration file {env_path} not found, falling back to process environment")


def get_config(key: str, default: Any = None) -> Any:
    """
    Get a configuration value from the environment.

    Args:
        key: Environment variable key
        default: Value returned when the key is not set

    Returns:
        Configuration value or default
    """
    logger = logging.getLogger(__name__)

    value = os.getenv(key)
    if value is None:
        if default is None:
            logger.debug(f"Configuration key '{key}' not set and no default provided")
        else:
            logger.debug(f"Configuration key '{key}' not set, using default: {default}")
        return default

    return value


def get_int_config(key: str, default: int) -> int:
    """Get an integer configuration value, raising ConfigError when unparsable."""
    raw = get_config(key)
    if raw is None or str(raw).strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"Configuration key '{key}' must be an integer, got '{raw}'")


def get_float_config(key: str, default: float) -> float:
    """Get a float configuration value, raising ConfigError when unparsable."""
    raw = get_config(key)
    if raw is None or str(raw).strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigError(f"Configuration key '{key}' must be a number, got '{raw}'")


def validate_config(required_keys: List[str]) -> None:
    """
    Validate that all required configuration keys are present and non-empty.

    Args:
        required_keys: Environment variable keys that must be set

    Raises:
        ConfigError: If any required key is missing or blank
    """
    logger = logging.getLogger(__name__)
    missing_keys = [key for key in required_keys if os.getenv(key) is None]
    blank_keys = [
        key for key in required_keys
        if os.getenv(key) is not None and os.getenv(key).strip() == ""
    ]

    if missing_keys or blank_keys:
        error_msg = "Configuration validation failed:"
        if missing_keys:
            error_msg += f" Missing keys: {', '.join(missing_keys)}."
        if blank_keys:
            error_msg += f" Empty keys: {', '.join(blank_keys)}."

        logger.error(error_msg)
        raise ConfigError(error_msg)

    logger.info(f"Configuration validation passed for keys: {', '.join(required_keys)}")


@dataclass(frozen=True)
class TravelSettings:
    """Tunables for caches, timeouts, rate limits and the matrix worker pool."""

    google_maps_api_key: str = ""
    geocode_cache_ttl: float = 24 * 60 * 60
    distance_cache_ttl: float = 60.0
    short_link_cache_ttl: float = 24 * 60 * 60
    link_expand_timeout: float = 10.0
    provider_timeout: float = 15.0
    travel_rate_limit_max: int = 60
    travel_rate_limit_window: float = 15 * 60
    landmark_rate_limit_max: int = 120
    landmark_rate_limit_window: float = 15 * 60
    matrix_max_workers: int = 8

    @classmethod
    def from_env(cls) -> "TravelSettings":
        """Build settings from environment variables, falling back to defaults."""
        defaults = cls()
        return cls(
            google_maps_api_key=get_config("GOOGLE_MAPS_API_KEY", "") or "",
            geocode_cache_ttl=get_float_config(
                "GEOCODE_CACHE_TTL_SECONDS", defaults.geocode_cache_ttl),
            distance_cache_ttl=get_float_config(
                "DISTANCE_CACHE_TTL_SECONDS", defaults.distance_cache_ttl),
            short_link_cache_ttl=get_float_config(
                "SHORT_LINK_CACHE_TTL_SECONDS", defaults.short_link_cache_ttl),
            link_expand_timeout=get_float_config(
                "LINK_EXPAND_TIMEOUT_SECONDS", defaults.link_expand_timeout),
            provider_timeout=get_float_config(
                "PROVIDER_TIMEOUT_SECONDS", defaults.provider_timeout),
            travel_rate_limit_max=get_int_config(
                "TRAVEL_RATE_LIMIT_MAX", defaults.travel_rate_limit_max),
            travel_rate_limit_window=get_float_config(
                "TRAVEL_RATE_LIMIT_WINDOW_SECONDS", defaults.travel_rate_limit_window),
            landmark_rate_limit_max=get_int_config(
                "LANDMARK_RATE_LIMIT_MAX", defaults.landmark_rate_limit_max),
            landmark_rate_limit_window=get_float_config(
                "LANDMARK_RATE_LIMIT_WINDOW_SECONDS", defaults.landmark_rate_limit_window),
            matrix_max_workers=get_int_config(
                "MATRIX_MAX_WORKERS", defaults.matrix_max_workers),
        )
