"""
Logging setup for the landmark travel service.

All modules log through the "landmark_travel" logger via the log_* helpers
so that handlers are configured in exactly one place.
"""

import logging
from pathlib import Path


LOGGER_NAME = "landmark_travel"

# Guards against attaching duplicate handlers on repeated initialisation
_logger_initialized = False


def get_logger() -> logging.Logger:
    """Return the package logger."""
    return logging.getLogger(LOGGER_NAME)


def initialize_logger(log_level: str = "INFO", log_file: str = "logs/app.log") -> None:
    """
    Attach console and file handlers to the package logger.

    Calling this more than once is a no-op.

    Args:
        log_level: Logger level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Path of the log file; parent directories are created
    """
    global _logger_initialized

    if _logger_initialized:
        return

    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    logger = get_logger()
    logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(logging.Formatter(
        '%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%H:%M:%S'
    ))

    file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(
        '%(asctime)s - %(levelname)s - %(threadName)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    ))

    logger.addHandler(console_handler)
    logger.addHandler(file_handler)

    _logger_initialized = True

    logger.info(f"Logger initialized with level {log_level}, file: {log_file}")


def log_debug(message: str) -> None:
    """Log a debug message."""
    get_logger().debug(message)


def log_info(message: str) -> None:
    """Log an info message."""
    get_logger().info(message)


def log_warning(message: str) -> None:
    """Log a warning message."""
    get_logger().warning(message)


def log_error(message: str) -> None:
    """Log an error message."""
    get_logger().error(message)
