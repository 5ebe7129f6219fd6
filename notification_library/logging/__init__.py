"""Structured logging for the notification library and the services using it.

Library modules log through get_logger(__name__, component=...) and attach
an ``event`` name plus structured fields via ``extra``. Handlers are only
installed by the host service through configure_logging().
"""

import logging
from typing import Optional, Union

from .config import (
    ContextualFilter,
    JSONFormatter,
    KeyValueFormatter,
    configure_from_settings,
    configure_logging,
    to_log_value,
)
from .context import (
    clear_log_context,
    event_log_context,
    get_log_context,
    log_context,
    pop_log_context,
    push_log_context,
)
from .redaction import SensitiveFieldFilter, sanitize_for_logging


class ComponentLoggerAdapter(logging.LoggerAdapter):
    """Adds a fixed ``component`` field; per-call ``extra`` overrides it."""

    def process(self, msg, kwargs):
        kwargs["extra"] = {**self.extra, **kwargs.get("extra", {})}
        return msg, kwargs


def get_logger(name: str, component: Optional[str] = None) -> Union[logging.Logger, ComponentLoggerAdapter]:
    """Logger for a library module, tagged with `component` when given.

    Example:
        >>> logger = get_logger(__name__, component="serialization")
        >>> logger.debug("Decoded payload", extra={"event": "json.decoded"})
    """
    logger = logging.getLogger(name)
    if component:
        return ComponentLoggerAdapter(logger, {"component": component})
    return logger


__all__ = [
    "ComponentLoggerAdapter",
    "ContextualFilter",
    "JSONFormatter",
    "KeyValueFormatter",
    "SensitiveFieldFilter",
    "clear_log_context",
    "configure_from_settings",
    "configure_logging",
    "event_log_context",
    "get_log_context",
    "get_logger",
    "log_context",
    "pop_log_context",
    "push_log_context",
    "sanitize_for_logging",
    "to_log_value",
]
