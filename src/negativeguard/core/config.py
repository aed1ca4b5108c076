"""Configuration management for NegativeGuard."""

import json
import logging
import os
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from pydantic import (
    BaseModel,
    Field,
    SecretStr,
    ValidationError,
    field_validator,
    model_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

from negativeguard.core.exceptions import ConfigurationError
from negativeguard.core.logging_utils import CorrelationIDFilter

DEFAULT_MAX_KEYWORDS_TO_PROCESS = 50000


class LogFormat(str, Enum):
    """Log format options."""

    JSON = "json"
    TEXT = "text"


class DateRange(BaseModel):
    """Inclusive date range used to scope positive keyword ingestion."""

    start_date: date
    end_date: date

    @model_validator(mode="after")
    def validate_order(self) -> "DateRange":
        """Ensure the range is not inverted."""
        if self.start_date > self.end_date:
            raise ValueError("start_date must be before or equal to end_date")
        return self

    def to_gaql(self) -> str:
        """Render the range as a GAQL ``BETWEEN`` clause operand."""
        return f"'{self.start_date.isoformat()}' AND '{self.end_date.isoformat()}'"


class AuditConfig(BaseModel):
    """Per-run audit configuration.

    Passed explicitly to the run coordinator; nothing reads it from a global.
    """

    dry_run: bool = Field(
        default=True, description="Flag conflicts without removing anything"
    )
    detailed_logging: bool = Field(
        default=False, description="Log every negative checked, not just conflicts"
    )
    date_range: DateRange | None = Field(
        default=None, description="Only ingest positives active in this range"
    )
    max_keywords_to_process: int = Field(
        default=DEFAULT_MAX_KEYWORDS_TO_PROCESS,
        gt=0,
        description="Stop positive keyword ingestion after this many records",
    )


class GoogleAdsConfig(BaseModel):
    """Google Ads API configuration."""

    developer_token: SecretStr = Field(..., min_length=1)
    client_id: str = Field(..., min_length=1)
    client_secret: SecretStr = Field(..., min_length=1)
    refresh_token: SecretStr = Field(..., min_length=1)
    login_customer_id: str | None = None

    @field_validator("login_customer_id")
    @classmethod
    def validate_customer_id(cls, v: str | None) -> str | None:
        """Validate and clean customer ID."""
        if v:
            # Remove dashes from customer ID
            cleaned = v.replace("-", "")
            if not cleaned.isdigit() or len(cleaned) != 10:
                raise ValueError("Customer ID must be 10 digits")
            return cleaned
        return v


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    format: LogFormat = LogFormat.TEXT

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Accept standard level names only."""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log level: {v}")
        return level


class Settings(BaseSettings):
    """Application settings.

    Environment Variables:
        NG_CUSTOMER_ID=1234567890
        NG_GOOGLE_ADS__DEVELOPER_TOKEN=your_dev_token
        NG_GOOGLE_ADS__CLIENT_ID=your_client_id
        NG_GOOGLE_ADS__CLIENT_SECRET=your_client_secret
        NG_GOOGLE_ADS__REFRESH_TOKEN=your_refresh_token
        NG_GOOGLE_ADS__LOGIN_CUSTOMER_ID=1234567890
        NG_AUDIT__DRY_RUN=true
        NG_AUDIT__MAX_KEYWORDS_TO_PROCESS=50000
        NG_LOGGING__LEVEL=INFO
        NG_LOGGING__FORMAT=text
    """

    model_config = SettingsConfigDict(
        env_prefix="NG_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    customer_id: str | None = None
    google_ads: GoogleAdsConfig | None = None
    audit: AuditConfig = Field(default_factory=AuditConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("customer_id")
    @classmethod
    def clean_customer_id(cls, v: str | None) -> str | None:
        """Strip dashes so the id can be passed straight to the API."""
        return v.replace("-", "").strip() if v else v

    @classmethod
    def from_env(cls, env_file: Path | None = None, **overrides: Any) -> "Settings":
        """Load settings from the environment, reading a .env file first."""
        if env_file:
            if not env_file.exists():
                raise ConfigurationError(f"Env file not found: {env_file}")
            load_dotenv(env_file)
        else:
            env_path = Path(os.getcwd()) / ".env"
            if env_path.exists():
                load_dotenv(env_path)

        try:
            return cls(**overrides)
        except ValidationError as e:
            raise ConfigurationError(f"Configuration errors: {e}") from e

    def validate_required_settings(self) -> None:
        """Check the settings needed to talk to Google Ads are present."""
        errors = []
        if not self.customer_id:
            errors.append("NG_CUSTOMER_ID is required")
        if self.google_ads is None:
            errors.append(
                "Google Ads credentials are required "
                "(NG_GOOGLE_ADS__DEVELOPER_TOKEN, NG_GOOGLE_ADS__CLIENT_ID, "
                "NG_GOOGLE_ADS__CLIENT_SECRET, NG_GOOGLE_ADS__REFRESH_TOKEN)"
            )
        if errors:
            raise ConfigurationError(f"Configuration errors: {'; '.join(errors)}")


class JsonFormatter(logging.Formatter):
    """One JSON object per log line, including structured decision fields."""

    EXTRA_FIELDS = (
        "correlation_id",
        "scope",
        "negative_text",
        "negative_match_type",
        "positive_text",
        "action",
    )

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        for field in self.EXTRA_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                log_data[field] = value
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data)


def setup_logging(settings: Settings) -> None:
    """Configure logging based on settings."""
    log_level = getattr(logging, settings.logging.level.upper())

    if settings.logging.format == LogFormat.JSON:
        formatter: logging.Formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - [%(correlation_id)s] - %(message)s"
        )

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    console_handler.addFilter(CorrelationIDFilter())
    root_logger.addHandler(console_handler)
