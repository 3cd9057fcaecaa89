"""
Unit tests for logger_module.

Tests cover:
- Handler attachment on the package logger
- Level configuration and fallback
- Idempotent initialisation
- The log_* helpers
"""

import logging

import pytest

import landmark_travel.config.logger_module as logger_module
from landmark_travel.config.logger_module import (
    LOGGER_NAME,
    initialize_logger,
    log_debug,
    log_error,
    log_info,
    log_warning,
)


@pytest.fixture(autouse=True)
def reset_logger():
    """Reset package logger state around each test."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger_module._logger_initialized = False
    yield
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger_module._logger_initialized = False


class TestInitializeLogger:
    """Test cases for initialize_logger."""

    def test_default_level_and_handlers(self, tmp_path):
        log_file = tmp_path / "logs" / "app.log"

        initialize_logger(log_file=str(log_file))

        logger = logging.getLogger(LOGGER_NAME)
        assert logger.level == logging.INFO
        assert len(logger.handlers) == 2
        assert any(isinstance(h, logging.FileHandler) for h in logger.handlers)
        assert log_file.exists()

    def test_custom_level(self, tmp_path):
        initialize_logger(log_level="debug", log_file=str(tmp_path / "app.log"))
        assert logging.getLogger(LOGGER_NAME).level == logging.DEBUG

    def test_invalid_level_falls_back_to_info(self, tmp_path):
        initialize_logger(log_level="LOUD", log_file=str(tmp_path / "app.log"))
        assert logging.getLogger(LOGGER_NAME).level == logging.INFO

    def test_idempotent(self, tmp_path):
        log_file = str(tmp_path / "app.log")

        initialize_logger(log_file=log_file)
        initialize_logger(log_file=log_file)
        initialize_logger(log_level="DEBUG", log_file=log_file)

        logger = logging.getLogger(LOGGER_NAME)
        assert len(logger.handlers) == 2
        assert logger.level == logging.INFO

    def test_file_receives_debug(self, tmp_path):
        log_file = tmp_path / "app.log"
        initialize_logger(log_level="DEBUG", log_file=str(log_file))

        log_debug("leg cache miss")
        for handler in logging.getLogger(LOGGER_NAME).handlers:
            handler.flush()

        assert "leg cache miss" in log_file.read_text(encoding="utf-8")


class TestLogHelpers:
    """Test cases for the log_* helpers."""

    def test_helpers_use_package_logger(self, caplog):
        with caplog.at_level(logging.DEBUG, logger=LOGGER_NAME):
            log_debug("debug message")
            log_info("info message")
            log_warning("warning message")
            log_error("error message")

        records = [(r.name, r.levelname, r.getMessage()) for r in caplog.records]
        assert (LOGGER_NAME, "DEBUG", "debug message") in records
        assert (LOGGER_NAME, "INFO", "info message") in records
        assert (LOGGER_NAME, "WARNING", "warning message") in records
        assert (LOGGER_NAME, "ERROR", "error message") in records
