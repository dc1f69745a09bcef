"""
Configuration management for volscan.

Loads configuration from environment variables (and an optional .env file)
with sensible defaults. All configuration is immutable and validated at
startup.
"""

import os
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, List
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_YAHOO_CHART_URL = "https://query1.finance.yahoo.com/v8/finance/chart/"
DEFAULT_FINNHUB_BASE_URL = "https://finnhub.io/api/v1"
DEFAULT_LOG_FORMAT = "%(asctime)s - [%(correlation_id)s] - %(name)s - %(levelname)s - %(message)s"


@dataclass(frozen=True)
class APIConfig:
    """API credentials and endpoints."""

    finnhub_api_key: str = ""
    yahoo_chart_url: str = DEFAULT_YAHOO_CHART_URL
    finnhub_base_url: str = DEFAULT_FINNHUB_BASE_URL
    request_timeout: float = 8.0  # seconds per external call


@dataclass(frozen=True)
class CacheConfig:
    """Quote cache configuration."""

    quote_ttl: int = 300  # seconds
    max_size: int = 1000


@dataclass(frozen=True)
class ScanConfig:
    """Bulk analysis and ranking parameters."""

    request_delay: float = 0.5  # seconds between symbols in bulk mode
    history_days: int = 60
    window_days: int = 45
    min_days: int = 1
    top_n: int = 5
    min_quality_score: float = 5.0  # strict lower bound


@dataclass(frozen=True)
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    format: str = DEFAULT_LOG_FORMAT
    log_file: Optional[Path] = None
    console_output: bool = True


@dataclass(frozen=True)
class Config:
    """Main configuration container."""

    api: APIConfig
    cache: CacheConfig
    scan: ScanConfig
    logging: LoggingConfig

    @classmethod
    def default(cls) -> 'Config':
        """Configuration with every default and no API key."""
        return cls(
            api=APIConfig(),
            cache=CacheConfig(),
            scan=ScanConfig(),
            logging=LoggingConfig(),
        )

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> 'Config':
        """
        Load configuration from environment variables.

        Args:
            env_file: Optional path to .env file. Defaults to .env in the
                current working directory when present.

        Returns:
            Config instance with all settings loaded.

        Raises:
            ValueError: If a numeric variable cannot be parsed.
        """
        if env_file:
            load_dotenv(env_file)
        else:
            env_path = Path.cwd() / ".env"
            if env_path.exists():
                load_dotenv(env_path)

        api = APIConfig(
            finnhub_api_key=os.getenv("FINNHUB_API_KEY", ""),
            yahoo_chart_url=os.getenv("YAHOO_CHART_URL", DEFAULT_YAHOO_CHART_URL),
            finnhub_base_url=os.getenv("FINNHUB_BASE_URL", DEFAULT_FINNHUB_BASE_URL),
            request_timeout=float(os.getenv("REQUEST_TIMEOUT", "8.0")),
        )

        cache = CacheConfig(
            quote_ttl=int(os.getenv("QUOTE_CACHE_TTL", "300")),
            max_size=int(os.getenv("QUOTE_CACHE_MAX_SIZE", "1000")),
        )

        scan = ScanConfig(
            request_delay=float(os.getenv("REQUEST_DELAY", "0.5")),
            history_days=int(os.getenv("HISTORY_DAYS", "60")),
            window_days=int(os.getenv("SCAN_WINDOW_DAYS", "45")),
            min_days=int(os.getenv("SCAN_MIN_DAYS", "1")),
            top_n=int(os.getenv("TOP_N", "5")),
            min_quality_score=float(os.getenv("MIN_QUALITY_SCORE", "5")),
        )

        log_file_path = os.getenv("LOG_FILE")
        logging = LoggingConfig(
            level=os.getenv("LOG_LEVEL", "INFO"),
            format=os.getenv("LOG_FORMAT", DEFAULT_LOG_FORMAT),
            log_file=Path(log_file_path) if log_file_path else None,
            console_output=os.getenv("LOG_CONSOLE", "true").lower() == "true",
        )

        return cls(api=api, cache=cache, scan=scan, logging=logging)

    def validate(self) -> List[str]:
        """
        Validate configuration and return list of errors.

        Returns:
            List of error messages. Empty list if valid.
        """
        errors = []

        if not self.api.finnhub_api_key:
            # Finnhub is only the secondary tier; requests still go out and fail over
            logger.warning("FINNHUB_API_KEY not set; secondary quotes and calendar will fail")

        if self.api.request_timeout <= 0:
            errors.append("REQUEST_TIMEOUT must be > 0")

        if self.cache.quote_ttl < 0:
            errors.append("QUOTE_CACHE_TTL must be >= 0")

        if self.cache.max_size < 1:
            errors.append("QUOTE_CACHE_MAX_SIZE must be >= 1")

        if self.scan.request_delay < 0:
            errors.append("REQUEST_DELAY must be >= 0")

        if self.scan.history_days < 2:
            errors.append("HISTORY_DAYS must be >= 2")

        if self.scan.min_days > self.scan.window_days:
            errors.append(
                f"SCAN_MIN_DAYS ({self.scan.min_days}) must be <= SCAN_WINDOW_DAYS ({self.scan.window_days})"
            )

        if self.scan.top_n < 1:
            errors.append("TOP_N must be >= 1")

        if not 0 <= self.scan.min_quality_score <= 100:
            errors.append("MIN_QUALITY_SCORE must be between 0 and 100")

        return errors
