"""Domain events published over the notification lifecycle."""

from .base import BaseEvent, DomainEvent
from .headers import MessageHeaders
from .notification import (
    NOTIFICATION_CREATED,
    NOTIFICATION_DELIVERED,
    NOTIFICATION_FAILED,
    NotificationCreatedEvent,
    NotificationDeliveredEvent,
    NotificationEvent,
    NotificationFailedEvent,
    parse_event,
)

__all__ = [
    "BaseEvent",
    "DomainEvent",
    "MessageHeaders",
    "NOTIFICATION_CREATED",
    "NOTIFICATION_DELIVERED",
    "NOTIFICATION_FAILED",
    "NotificationCreatedEvent",
    "NotificationDeliveredEvent",
    "NotificationEvent",
    "NotificationFailedEvent",
    "parse_event",
]
