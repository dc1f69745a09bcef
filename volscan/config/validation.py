"""
Configuration validation for startup checks.

Validates all configuration at startup to fail fast on misconfiguration.
"""

import logging
import os

from volscan.config.config import Config

logger = logging.getLogger(__name__)

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigurationError(Exception):
    """Raised when configuration is invalid."""

    pass


def validate_configuration(config: Config) -> None:
    """
    Validate all configuration at startup.

    Args:
        config: Configuration to validate

    Raises:
        ConfigurationError: If any validation fails
    """
    errors = config.validate()

    _validate_endpoints(config, errors)
    _validate_logging_setup(config, errors)

    if errors:
        for error in errors:
            logger.error(f"Configuration error: {error}")
        error_summary = "\n".join(f"  - {error}" for error in errors)
        raise ConfigurationError(
            f"{len(errors)} configuration error(s):\n{error_summary}"
        )

    logger.debug("Configuration validated successfully")


def _validate_endpoints(config: Config, errors: list) -> None:
    """Endpoints must be absolute http(s) URLs."""
    for name, url in (
        ("YAHOO_CHART_URL", config.api.yahoo_chart_url),
        ("FINNHUB_BASE_URL", config.api.finnhub_base_url),
    ):
        if not url.startswith(("http://", "https://")):
            errors.append(f"{name} must be an http(s) URL: {url!r}")


def _validate_logging_setup(config: Config, errors: list) -> None:
    """Validate logging configuration."""
    if config.logging.log_file:
        log_parent = config.logging.log_file.parent
        if log_parent.exists() and not os.access(log_parent, os.W_OK):
            errors.append(f"Log directory is not writable: {log_parent}")

    if config.logging.level.upper() not in VALID_LOG_LEVELS:
        errors.append(
            f"Invalid log level: {config.logging.level}. Must be one of {list(VALID_LOG_LEVELS)}"
        )
