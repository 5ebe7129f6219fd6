"""Helpers for interpreting notification payloads and event types."""

from typing import Any, Mapping, Optional

from notification_library.constants.notification import DEFAULT_CUSTOMER_NAME, VAR_CUSTOMER_NAME
from notification_library.enums import NotificationEventType

_IMMEDIATE_EVENT_TYPES = frozenset({
    NotificationEventType.FRAUD_ALERT,
    NotificationEventType.SYSTEM_MAINTENANCE,
})


def extract_customer_name(payload: Optional[Mapping[str, Any]]) -> str:
    """Customer name for templates, or 'Valued Customer' when absent."""
    if not payload:
        return DEFAULT_CUSTOMER_NAME
    name = payload.get(VAR_CUSTOMER_NAME)
    return str(name) if name is not None else DEFAULT_CUSTOMER_NAME


def requires_immediate_processing(event_type: NotificationEventType) -> bool:
    """Security events, fraud alerts and maintenance notices skip queue delays."""
    return event_type.is_security_related() or event_type in _IMMEDIATE_EVENT_TYPES
