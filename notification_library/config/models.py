"""Settings schema models using Pydantic.

Every field defaults to the platform constants, so a service that never
loads a settings file gets exactly the documented behavior.
"""

from datetime import timedelta
from enum import Enum
from typing import Dict, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from notification_library.constants import notification as constants
from notification_library.enums import NotificationPriority

from .duration import DurationParseError, parse_duration, validate_duration_range


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    KEY_VALUE = "key-value"


def _coerce_duration(value, label: str) -> timedelta:
    try:
        return parse_duration(value)
    except DurationParseError as e:
        raise ValueError(f"{label}: {e}") from e


class RetryPolicy(BaseModel):
    """Exponential backoff parameters for delivery retries."""

    base_delay: timedelta = Field(
        constants.DEFAULT_RETRY_DELAY, description="Delay before the first retry"
    )
    backoff_multiplier: float = Field(
        constants.RETRY_BACKOFF_MULTIPLIER, ge=1.0, le=10.0, description="Growth factor per attempt"
    )
    max_delay: timedelta = Field(
        constants.MAX_RETRY_DELAY, description="Upper bound on any single retry delay"
    )
    default_max_retries: int = Field(constants.DEFAULT_MAX_RETRIES, ge=0, le=20)
    critical_max_retries: int = Field(constants.CRITICAL_MAX_RETRIES, ge=0, le=20)

    model_config = {"frozen": True}

    @field_validator("base_delay", "max_delay", mode="before")
    @classmethod
    def parse_delay(cls, v, info):
        return _coerce_duration(v, info.field_name)

    @model_validator(mode="after")
    def validate_delays(self):
        try:
            validate_duration_range(
                self.base_delay, timedelta(seconds=1), self.max_delay, label="base_delay"
            )
        except DurationParseError as e:
            raise ValueError(str(e)) from e
        return self

    def max_retries_for(self, priority: NotificationPriority) -> int:
        if priority is NotificationPriority.CRITICAL:
            return self.critical_max_retries
        return self.default_max_retries


class ValidationLimits(BaseModel):
    """Size and length limits applied to contract fields."""

    min_customer_id_length: int = Field(constants.MIN_CUSTOMER_ID_LENGTH, ge=1)
    max_customer_id_length: int = Field(constants.MAX_CUSTOMER_ID_LENGTH, ge=1)
    max_source_service_length: int = Field(constants.MAX_SOURCE_SERVICE_LENGTH, ge=1)
    max_payload_size_bytes: int = Field(constants.MAX_PAYLOAD_SIZE_BYTES, ge=1)
    max_template_size_bytes: int = Field(constants.MAX_TEMPLATE_SIZE_BYTES, ge=1)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_customer_id_bounds(self):
        if self.min_customer_id_length > self.max_customer_id_length:
            raise ValueError(
                "min_customer_id_length cannot exceed max_customer_id_length "
                f"({self.min_customer_id_length} > {self.max_customer_id_length})"
            )
        return self


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.INFO, description="Log level")
    format: LogFormat = Field(LogFormat.KEY_VALUE, description="Log output format (json or key-value)")

    model_config = {"use_enum_values": True, "validate_default": True}


class NotificationSettings(BaseModel):
    """Root settings object for services using the notification library."""

    service_name: str = Field(
        constants.UNKNOWN_SOURCE_SERVICE,
        min_length=1,
        max_length=constants.MAX_SOURCE_SERVICE_LENGTH,
        description="Name stamped as source service on outgoing events",
    )
    environment: str = Field("local", min_length=1, description="Environment label")
    retry: RetryPolicy = Field(default_factory=RetryPolicy)
    validation: ValidationLimits = Field(default_factory=ValidationLimits)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    priority_timeouts: Dict[NotificationPriority, timedelta] = Field(
        default_factory=dict,
        description="Per-priority timeout overrides; missing priorities use the canonical table",
    )

    @field_validator("service_name", "environment")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            raise ValueError("Field cannot be empty or whitespace-only")
        return stripped

    @field_validator("priority_timeouts", mode="before")
    @classmethod
    def parse_priority_timeouts(cls, v):
        if v is None:
            return {}
        if not isinstance(v, dict):
            raise ValueError("priority_timeouts must be a mapping of priority to duration")
        parsed = {}
        for key, value in v.items():
            priority = NotificationPriority.from_code(str(key))
            parsed[priority] = _coerce_duration(value, f"priority_timeouts.{priority.code}")
        return parsed

    def timeout_for(self, priority: NotificationPriority) -> timedelta:
        """Override for `priority` if configured, else its canonical timeout."""
        return self.priority_timeouts.get(priority, priority.timeout)

    def max_retries_for(self, priority: NotificationPriority) -> int:
        return self.retry.max_retries_for(priority)


DEFAULT_SETTINGS = NotificationSettings()


def default_settings() -> NotificationSettings:
    return DEFAULT_SETTINGS


__all__ = [
    "DEFAULT_SETTINGS",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "NotificationSettings",
    "RetryPolicy",
    "ValidationLimits",
    "default_settings",
]
