"""Notification lifecycle events and a tagged decoder for them."""

from typing import Annotated, Any, Dict, Literal, Optional, Union

from pydantic import Field

from notification_library.domain.base import WireTimestamp
from notification_library.enums import ChannelType, NotificationEventType, NotificationPriority
from notification_library.utils.serialization import from_json, from_tree

from .base import BaseEvent

NOTIFICATION_CREATED = "NotificationCreated"
NOTIFICATION_DELIVERED = "NotificationDelivered"
NOTIFICATION_FAILED = "NotificationFailed"


class _NotificationEvent(BaseEvent):
    # aggregate_id is the notification id for every notification event
    @property
    def notification_id(self) -> Optional[str]:
        return self.aggregate_id


class NotificationCreatedEvent(_NotificationEvent):
    """A notification was accepted and persisted."""

    event_type: Literal["NotificationCreated"] = NOTIFICATION_CREATED
    customer_id: Optional[str] = None
    notification_event_type: Optional[NotificationEventType] = None
    priority: Optional[NotificationPriority] = None
    source_service: Optional[str] = None
    payload: Optional[Dict[str, Any]] = None


class NotificationDeliveredEvent(_NotificationEvent):
    """A delivery attempt succeeded on some channel."""

    event_type: Literal["NotificationDelivered"] = NOTIFICATION_DELIVERED
    customer_id: Optional[str] = None
    channel_type: Optional[ChannelType] = None
    provider: Optional[str] = None
    delivered_at: Optional[WireTimestamp] = None
    attempt_number: int = Field(1, ge=1)
    external_id: Optional[str] = None


class NotificationFailedEvent(_NotificationEvent):
    """A delivery attempt failed; will_retry says whether another is scheduled."""

    event_type: Literal["NotificationFailed"] = NOTIFICATION_FAILED
    customer_id: Optional[str] = None
    channel_type: Optional[ChannelType] = None
    provider: Optional[str] = None
    error_message: Optional[str] = None
    error_code: Optional[str] = None
    failed_at: Optional[WireTimestamp] = None
    attempt_number: int = Field(1, ge=1)
    will_retry: bool = False
    next_retry_at: Optional[WireTimestamp] = None


NotificationEvent = Annotated[
    Union[NotificationCreatedEvent, NotificationDeliveredEvent, NotificationFailedEvent],
    Field(discriminator="event_type"),
]


def parse_event(data: Union[str, bytes, Dict[str, Any]]):
    """Decode any notification event by its ``eventType`` tag.

    Accepts JSON text or an already-parsed mapping.

    Raises:
        SerializationError: If the input is malformed or the tag is unknown
    """
    if isinstance(data, (str, bytes, bytearray)):
        return from_json(data, NotificationEvent)
    return from_tree(data, NotificationEvent)
