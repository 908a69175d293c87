from typing import Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
import logging

from croniter import croniter
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


logger = logging.getLogger(__name__)


class CustomSettings(BaseSettings):
    """Application settings loaded from environment variables.

    Validates configuration at startup to catch misconfiguration early.
    """

    api_base_url: str = "http://api.sr.se/api/v2"
    timezone: str = "Europe/Stockholm"
    window_hours: int = 12
    request_timeout_sec: float = 10.0
    http_max_retries: int = 0
    http_backoff_factor: float = 2.0
    year_policy: Literal["source", "current"] = "source"
    refresh_cron: str = "0 * * * *"  # Hourly
    refresh_misfire_grace_sec: int = 300
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="RADIO_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("api_base_url")
    @classmethod
    def validate_api_base_url(cls, value: str) -> str:
        """Validate the schedule API URL is HTTP/HTTPS."""
        if not value.lower().startswith(("http://", "https://")):
            raise ValueError(f"API base URL must be HTTP/HTTPS: {value}")
        return value.rstrip("/")

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        """Validate timezone is a known IANA zone."""
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Invalid timezone: {value}") from exc
        return value

    @field_validator("window_hours")
    @classmethod
    def validate_window_hours(cls, value: int) -> int:
        """Validate the half-width of the schedule window."""
        if value <= 0:
            raise ValueError("window_hours must be > 0")
        if value > 24:
            raise ValueError("window_hours must be <= 24 (only three days are fetched)")
        return value

    @field_validator("request_timeout_sec")
    @classmethod
    def validate_request_timeout(cls, value: float) -> float:
        """Validate HTTP request timeout (seconds)."""
        if value <= 0:
            raise ValueError("request_timeout_sec must be > 0")
        return value

    @field_validator("http_max_retries", "refresh_misfire_grace_sec")
    @classmethod
    def validate_non_negative_ints(cls, value: int, info) -> int:
        """Ensure integer settings are non-negative."""
        if value < 0:
            raise ValueError(f"{info.field_name} must be >= 0")
        return value

    @field_validator("http_backoff_factor")
    @classmethod
    def validate_backoff_factor(cls, value: float) -> float:
        """Ensure the backoff multiplier is at least 1."""
        if value < 1:
            raise ValueError("http_backoff_factor must be >= 1")
        return value

    @field_validator("refresh_cron")
    @classmethod
    def validate_cron_expression(cls, value: str) -> str:
        """Validate cron expression is valid."""
        try:
            croniter(value)
            return value
        except (ValueError, KeyError) as exc:
            raise ValueError(f"Invalid cron expression '{value}': {exc}") from exc

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Validate logging level name."""
        normalized = value.upper()
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if normalized not in allowed:
            raise ValueError(f"log_level must be one of {sorted(allowed)}")
        return normalized

    def __init__(self, **data):
        """Initialize settings and log configuration."""
        super().__init__(**data)

        logger.info("Configuration loaded:")
        logger.info("  API: %s", self.api_base_url)
        logger.info("  Timezone: %s", self.timezone)
        logger.info("  Window: +/- %s hours", self.window_hours)
        logger.info("  Request Timeout: %ss", self.request_timeout_sec)
        logger.info("  HTTP Retries: %s", self.http_max_retries or "disabled")
        logger.info("  Year Policy: %s", self.year_policy)
        logger.info("  Refresh Schedule: %s", self.refresh_cron)
        logger.info("  Refresh Misfire Grace: %ss", self.refresh_misfire_grace_sec)


settings = CustomSettings()


def setup_logging() -> None:
    """Configure application logging."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
