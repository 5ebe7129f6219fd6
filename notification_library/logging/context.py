"""Per-task logging context.

Identifiers pushed here (correlation_id, event_id, notification_id, ...) are
copied onto every record by ContextualFilter while the scope is active.
Backed by contextvars, so concurrent threads and asyncio tasks never see each
other's identifiers.
"""

from contextvars import ContextVar, Token
from typing import Any, Dict, Optional

_log_context: ContextVar[Dict[str, Any]] = ContextVar("notification_log_context", default={})

# Attributes lifted from events and DTOs by event_log_context()
EVENT_CONTEXT_FIELDS = ("event_id", "correlation_id", "trace_id", "customer_id", "notification_id")


def get_log_context() -> Dict[str, Any]:
    """Copy of the fields active in the current task."""
    return _log_context.get().copy()


def push_log_context(**fields) -> Token:
    """Add fields to the current context; None values are skipped.

    Pass the returned token to pop_log_context() to undo the push.
    """
    merged = dict(_log_context.get())
    merged.update({key: value for key, value in fields.items() if value is not None})
    return _log_context.set(merged)


def pop_log_context(token: Token) -> None:
    _log_context.reset(token)


def clear_log_context() -> None:
    """Drop every field. Mostly for tests."""
    _log_context.set({})


class log_context:
    """Scope fields to a ``with`` block.

    Example:
        >>> with log_context(correlation_id="corr_1", notification_id="notif_1"):
        ...     logger.info("Delivery attempt failed")
    """

    def __init__(self, **fields):
        self.fields = fields
        self.token: Optional[Token] = None

    def __enter__(self):
        self.token = push_log_context(**self.fields)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.token is not None:
            pop_log_context(self.token)
            self.token = None
        return False


def event_log_context(source: Any, **extra) -> log_context:
    """log_context carrying the identifiers of an event, DTO or headers object.

    Reads whichever of EVENT_CONTEXT_FIELDS the object has. Domain events
    expose their notification as ``notification_id``.
    """
    fields = {name: getattr(source, name, None) for name in EVENT_CONTEXT_FIELDS}
    fields.update(extra)
    return log_context(**fields)
