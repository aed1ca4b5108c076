"""Shared helpers for CLI commands."""

import functools
import logging
from pathlib import Path

import click

from negativeguard.core.config import Settings
from negativeguard.core.exceptions import (
    AuthenticationError,
    ConfigurationError,
    NegativeGuardError,
    RateLimitError,
    ValidationFailureError,
)

logger = logging.getLogger(__name__)


class CLIConfigurationError(click.ClickException):
    """Configuration problem reported to the user with an optional fix."""

    def __init__(self, message: str, suggestion: str | None = None):
        if suggestion:
            message = f"{message}\n💡 {suggestion}"
        super().__init__(message)


def format_cli_success(message: str, details: str | None = None) -> str:
    result = f"✓ {message}"
    if details:
        result += f"\n  {details}"
    return result


def format_cli_warning(message: str, suggestion: str | None = None) -> str:
    result = f"⚠️  {message}"
    if suggestion:
        result += f"\n💡 {suggestion}"
    return result


def format_cli_error(message: str, suggestion: str | None = None) -> str:
    result = f"❌ {message}"
    if suggestion:
        result += f"\n💡 {suggestion}"
    return result


def get_settings_safely(env_file: Path | None = None, **overrides) -> Settings:
    """Load and check settings, translating failures into CLI errors."""
    try:
        settings = Settings.from_env(env_file, **overrides)
        settings.validate_required_settings()
        return settings
    except ConfigurationError as e:
        raise CLIConfigurationError(
            str(e), "Check your .env file or NG_* environment variables"
        ) from e


def _suggestion_for(error: NegativeGuardError) -> str | None:
    if isinstance(error, AuthenticationError):
        return "Check that your Google Ads credentials are valid and not expired"
    if isinstance(error, RateLimitError):
        return "Wait a few minutes before running the audit again"
    if isinstance(error, ValidationFailureError):
        return "Run 'negativeguard validate' to see the failing cases"
    return None


def handle_common_cli_errors(func):
    """Turn package errors into click errors with exit code 1."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except click.ClickException:
            raise
        except NegativeGuardError as e:
            suggestion = _suggestion_for(e)
            message = str(e)
            if suggestion:
                message = f"{message}\n💡 {suggestion}"
            raise click.ClickException(message) from e
        except Exception as e:
            logger.exception(f"Unexpected error in {func.__name__}")
            raise click.ClickException(
                f"Unexpected error: {e}\n💡 Please check your configuration and try again"
            ) from e

    return wrapper
