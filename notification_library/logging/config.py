"""Handler, formatter and filter setup for services using the library.

The library never configures logging on import. Host services call
configure_logging() (or configure_from_settings()) once at startup.
"""

import json
import logging
import sys
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Literal, Optional

from .context import get_log_context
from .redaction import SensitiveFieldFilter

LogFormat = Literal["json", "key-value"]

DEFAULT_SERVICE_NAME = "notification-library"
KEY_VALUE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# LogRecord attributes that are never treated as structured fields
RESERVED_ATTRS = frozenset({
    "name", "msg", "args", "created", "filename", "funcName", "levelname",
    "levelno", "lineno", "module", "msecs", "message", "pathname", "process",
    "processName", "relativeCreated", "thread", "threadName", "asctime",
    "exc_info", "exc_text", "stack_info", "taskName",
})


def _wire_time(dt: datetime) -> str:
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"


def to_log_value(value: Any) -> Any:
    """Render a structured field the way the contracts put it on the wire.

    Enums become their code, datetimes the millisecond 'Z' format and
    durations whole milliseconds. JSON scalars, lists and dicts pass through;
    anything else is stringified.
    """
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return _wire_time(value)
    if isinstance(value, timedelta):
        return int(value.total_seconds() * 1000)
    if value is None or isinstance(value, (str, int, float, bool, list, dict)):
        return value
    return str(value)


def _structured_fields(record: logging.LogRecord, skip=RESERVED_ATTRS):
    for key, value in record.__dict__.items():
        if key in skip or key.startswith("_"):
            continue
        yield key, to_log_value(value)


class ContextualFilter(logging.Filter):
    """Stamps service and environment on each record and copies the active log context.

    Fields passed explicitly through ``extra`` win over context fields.
    """

    def __init__(self, service: str = DEFAULT_SERVICE_NAME, environment: str = "local"):
        super().__init__()
        self.service = service
        self.environment = environment

    def filter(self, record: logging.LogRecord) -> bool:
        record.service = self.service
        record.environment = self.environment
        for key, value in get_log_context().items():
            if not hasattr(record, key):
                setattr(record, key, value)
        return True


class JSONFormatter(logging.Formatter):
    """One JSON object per line: timestamp, level, logger, message, then structured fields."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": _wire_time(datetime.fromtimestamp(record.created, tz=timezone.utc)),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(_structured_fields(record))

        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)


class KeyValueFormatter(logging.Formatter):
    """Human-readable lines: ``<base format> key1=value1 key2=value2``.

    Keys are sorted; values containing spaces, '=' or ',' are quoted. Service
    and environment are left out since they never vary within a process.
    """

    SKIP_ATTRS = RESERVED_ATTRS | {"service", "environment"}

    def __init__(self, fmt: str = KEY_VALUE_FORMAT, datefmt: Optional[str] = "%Y-%m-%d %H:%M:%S"):
        super().__init__(fmt, datefmt=datefmt)

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        pairs = [
            f"{key}={self._render(value)}"
            for key, value in sorted(_structured_fields(record, self.SKIP_ATTRS))
        ]
        return f"{base} {' '.join(pairs)}" if pairs else base

    @staticmethod
    def _render(value: Any) -> str:
        if value is None:
            return "null"
        if isinstance(value, bool):
            return str(value).lower()
        if isinstance(value, str):
            return f'"{value}"' if any(c in value for c in " =,") else value
        return str(value)


def configure_logging(
    level: str = "INFO",
    format_type: LogFormat = "key-value",
    environment: str = "local",
    service: Optional[str] = None,
) -> None:
    """
    Replace the root handlers with one stdout handler.

    The handler carries a ContextualFilter and a SensitiveFieldFilter, so
    every record gets service, environment and context fields with contact
    details masked.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL), any case
        format_type: 'json' or 'key-value'
        environment: Environment label (production, staging, local)
        service: Service name stamped on every record

    Raises:
        ValueError: If level or format_type is invalid
    """
    numeric_level = getattr(logging, str(level).upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {level}")

    if format_type not in ("json", "key-value"):
        raise ValueError(f"Invalid log format: {format_type}. Must be 'json' or 'key-value'")

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter() if format_type == "json" else KeyValueFormatter())
    handler.addFilter(ContextualFilter(service=service or DEFAULT_SERVICE_NAME, environment=environment))
    handler.addFilter(SensitiveFieldFilter())

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    logging.getLogger(__name__).info(
        "Logging configured",
        extra={
            "event": "logging.configured",
            "component": "logging",
            "log_level": str(level).upper(),
            "log_format": format_type,
        },
    )


def configure_from_settings(settings) -> None:
    """configure_logging() driven by a NotificationSettings object."""
    configure_logging(
        level=settings.logging.level,
        format_type=settings.logging.format,
        environment=settings.environment,
        service=settings.service_name,
    )
