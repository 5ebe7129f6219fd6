"""Enumerated vocabulary shared by all notification services."""

from .base import CodedEnum
from .channel import ChannelProvider, ChannelType, DeliveryStatus
from .notification import NotificationEventType, NotificationPriority, NotificationStatus

__all__ = [
    "CodedEnum",
    "ChannelProvider",
    "ChannelType",
    "DeliveryStatus",
    "NotificationEventType",
    "NotificationPriority",
    "NotificationStatus",
]
