"""
Logging configuration for volscan.

Sets up logging with correlation IDs so every line emitted while a symbol
is analyzed carries that symbol's trace ID.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

from volscan.utils.tracing import CorrelationIdFilter

DEFAULT_LOG_FORMAT = "%(asctime)s - [%(correlation_id)s] - %(name)s - %(levelname)s - %(message)s"

# Chatty third-party loggers
_NOISY_LOGGERS = ("aiohttp", "asyncio", "urllib3")


def setup_logging(
    level: str = "INFO",
    log_file: Optional[Path] = None,
    console_output: bool = True,
    log_format: Optional[str] = None,
) -> None:
    """
    Configure application logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path for log output
        console_output: Whether to log to console (stderr, so stdout stays clean)
        log_format: Optional custom log format
    """
    if log_format is None:
        log_format = DEFAULT_LOG_FORMAT

    formatter = logging.Formatter(log_format, datefmt="%Y-%m-%d %H:%M:%S")
    correlation_filter = CorrelationIdFilter()

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))
    root_logger.handlers.clear()

    if console_output:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)
        console_handler.addFilter(correlation_filter)
        root_logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        file_handler.addFilter(correlation_filter)
        root_logger.addHandler(file_handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    root_logger.debug(f"Logging initialized: level={level}")
