"""
Logging configuration for the article exporter.

Log lines go to stderr: the run scripts print the exported JSON on stdout
and the two must not mix. Messages about one export carry the content ID so
batch runs can be read back per article.
"""

import logging
import os
import sys
from typing import Optional, Union

LOGGER_NAME = "article_exporter"

# Overrides the default level for every run without touching code
LOG_LEVEL_ENV = "ARTICLE_EXPORTER_LOG_LEVEL"


def level_from_env(default: int = logging.INFO) -> int:
    """Read ``ARTICLE_EXPORTER_LOG_LEVEL`` (a name like ``DEBUG`` or a number)."""
    value = os.environ.get(LOG_LEVEL_ENV, "").strip()
    if not value:
        return default
    if value.isdigit():
        return int(value)
    level = logging.getLevelName(value.upper())
    return level if isinstance(level, int) else default


def setup_logger(
    name: str = LOGGER_NAME,
    level: Optional[Union[int, str]] = None,
    log_file: Optional[str] = None
) -> logging.Logger:
    """
    Set up and return the package logger.

    Safe to call more than once: later calls only change the level and add a
    file handler for a log file not seen before.

    Args:
        name: Logger name
        level: Logging level; the environment, else INFO, when None
        log_file: Optional file path for logging

    Returns:
        Configured logger instance
    """
    if level is None:
        level = level_from_env()
    logger = logging.getLogger(name)
    logger.setLevel(level)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    if not any(getattr(handler, "_exporter_console", False) for handler in logger.handlers):
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)
        console_handler._exporter_console = True
        logger.addHandler(console_handler)

    if log_file:
        log_path = os.path.abspath(log_file)
        known = {getattr(handler, "baseFilename", None) for handler in logger.handlers}
        if log_path not in known:
            file_handler = logging.FileHandler(log_path)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    for handler in logger.handlers:
        handler.setLevel(level)

    return logger


# Default logger instance, created once at import time
logger = setup_logger()


def get_module_logger(module_name: str) -> logging.Logger:
    """
    Get a child logger for a specific module.

    Args:
        module_name: Name of the module (e.g., 'parser', 'builder')

    Returns:
        Child logger instance, e.g. "article_exporter.builder"
    """
    return logging.getLogger(f"{LOGGER_NAME}.{module_name}")


class ExportLoggerAdapter(logging.LoggerAdapter):
    """Prefixes every message with the content item being exported."""

    def process(self, msg, kwargs):
        return f"[content {self.extra['content_id']}] {msg}", kwargs


def get_export_logger(module_name: str, content_id) -> ExportLoggerAdapter:
    """
    Module logger bound to one content item.

    Args:
        module_name: Name of the module
        content_id: ID of the content being exported

    Returns:
        Adapter whose messages start with ``[content <id>]``
    """
    return ExportLoggerAdapter(get_module_logger(module_name), {"content_id": content_id})
