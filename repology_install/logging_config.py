"""Logging configuration for repology-install."""

import logging
import sys
from typing import Any, Dict

LOGGER_NAME = "repology_install"


def setup_logging(level: str = "WARNING", structured: bool = False) -> logging.Logger:
    """
    Set up the package logger.

    Log records go to stderr so that install commands printed on stdout
    can be piped straight into a shell.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
        structured: Whether to use structured JSON logging

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(LOGGER_NAME)

    # Avoid duplicate handlers
    if logger.handlers:
        return logger

    logger.setLevel(getattr(logging, level.upper()))

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(_make_formatter(structured))
    logger.addHandler(handler)

    return logger


def _make_formatter(structured: bool) -> logging.Formatter:
    if structured:
        return StructuredFormatter()
    return logging.Formatter("[%(asctime)s] %(levelname)s - %(name)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S")


def set_log_level(level: str) -> None:
    """Change the level of the package logger at runtime."""
    logging.getLogger(LOGGER_NAME).setLevel(getattr(logging, level.upper()))


def set_log_format(structured: bool) -> None:
    """Switch the package logger's handlers between text and JSON output."""
    for handler in logging.getLogger(LOGGER_NAME).handlers:
        handler.setFormatter(_make_formatter(structured))


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        import json
        from datetime import datetime

        log_entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry)


# Global logger instance
logger = setup_logging()
