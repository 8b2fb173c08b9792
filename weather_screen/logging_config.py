"""Logging for the weather screen.

Every record goes to a rotating JSON file (logs/weather_screen.log) so the
``event_type`` and query fields passed through ``log_with_context`` stay
searchable. The console gets a plain one-line format.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

from pythonjsonlogger.json import JsonFormatter

LOG_DIR = Path(__file__).parent.parent / "logs"
LOG_FILE_NAME = "weather_screen.log"
LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 5

# httpx logs full request URLs, and the weather URL carries the API key
QUIET_LOGGERS = ("httpx", "uvicorn.access")


def _json_file_handler(log_dir: Path) -> logging.Handler:
    handler = RotatingFileHandler(
        log_dir / LOG_FILE_NAME,
        maxBytes=LOG_FILE_MAX_BYTES,
        backupCount=LOG_FILE_BACKUPS,
        encoding="utf-8",
    )
    handler.setFormatter(
        JsonFormatter(
            "%(asctime)s %(name)s %(levelname)s %(message)s %(filename)s %(lineno)d",
            timestamp=True,
        )
    )
    handler.setLevel(logging.DEBUG)
    return handler


def _console_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s", "%H:%M:%S"))
    handler.setLevel(level)
    return handler


def setup_logging(log_level: str = "INFO", log_dir: Path | None = None) -> logging.Logger:
    """Install the JSON file and console handlers on the root logger.

    Handlers from a previous call are replaced, so calling this twice does
    not duplicate output.

    Args:
        log_level: Console and root level name, e.g. "DEBUG"
        log_dir: Directory for the JSON log (defaults to ./logs)

    Returns:
        The root logger
    """
    level = getattr(logging, log_level.upper())
    log_dir = log_dir or LOG_DIR
    log_dir.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    root_logger.addHandler(_json_file_handler(log_dir))
    root_logger.addHandler(_console_handler(level))

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return root_logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def log_with_context(
    logger: logging.Logger,
    level: str,
    message: str,
    **extra_fields: Any,
) -> None:
    """Log ``message`` with keyword fields attached as JSON keys.

    Example:
        log_with_context(logger, "info", "Weather query changed", query="Recife,PE", event_type="query_changed")
    """
    getattr(logger, level.lower())(message, extra=extra_fields)
