"""Settings for services using the notification library."""

from .duration import DurationParseError, format_duration, parse_duration
from .exceptions import ConfigurationError
from .loader import format_validation_errors, load_settings
from .models import (
    DEFAULT_SETTINGS,
    LogFormat,
    LoggingConfig,
    LogLevel,
    NotificationSettings,
    RetryPolicy,
    ValidationLimits,
    default_settings,
)

__all__ = [
    # Loader
    "load_settings",
    "format_validation_errors",
    # Models
    "NotificationSettings",
    "RetryPolicy",
    "ValidationLimits",
    "LoggingConfig",
    "DEFAULT_SETTINGS",
    "default_settings",
    # Enums
    "LogLevel",
    "LogFormat",
    # Durations
    "parse_duration",
    "format_duration",
    "DurationParseError",
    # Exceptions
    "ConfigurationError",
]
