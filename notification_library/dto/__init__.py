"""Request and response data transfer objects."""

from .requests import CreateNotificationRequest, NotificationEventDto
from .responses import (
    DeliveryStatusResponse,
    DeliverySummary,
    NotificationResponse,
    summarize_attempts,
)

__all__ = [
    "CreateNotificationRequest",
    "DeliveryStatusResponse",
    "DeliverySummary",
    "NotificationEventDto",
    "NotificationResponse",
    "summarize_attempts",
]
