"""Inbound contracts: notification creation requests and stream events."""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import Field, field_validator, model_validator

from notification_library.constants.notification import (
    MAX_SOURCE_SERVICE_LENGTH,
    UNKNOWN_SOURCE_SERVICE,
)
from notification_library.domain.base import ContractModel, WireTimestamp
from notification_library.enums import NotificationEventType, NotificationPriority
from notification_library.utils.identifiers import generate_correlation_id, generate_event_id
from notification_library.utils.timestamps import ensure_utc, utc_now, utc_now_millis
from notification_library.validation import (
    require_non_blank,
    validate_customer_id,
    validate_max_length,
    validate_payload,
)


class CreateNotificationRequest(ContractModel):
    """Request to create a notification for a customer.

    Built with keyword arguments (or from wire JSON); validation runs at
    construction time and reports failures per field.
    """

    event_type: NotificationEventType = Field(..., description="Notification category")
    customer_id: str = Field(..., description="Target customer identifier")
    payload: Dict[str, Any] = Field(..., description="Template variables and event data")
    priority: NotificationPriority = Field(NotificationPriority.MEDIUM, description="Delivery priority")
    source_service: Optional[str] = Field(None, description="Service that requested the notification")
    scheduled_at: Optional[WireTimestamp] = Field(None, description="Earliest delivery time (UTC)")
    expires_at: Optional[WireTimestamp] = Field(None, description="Time after which delivery is pointless (UTC)")
    metadata: Optional[Dict[str, str]] = Field(None, description="Free-form string metadata")

    @field_validator("customer_id")
    @classmethod
    def check_customer_id(cls, v: str) -> str:
        return validate_customer_id(v)

    @field_validator("payload")
    @classmethod
    def check_payload(cls, v: Dict[str, Any]) -> Dict[str, Any]:
        validate_payload(v)
        return v

    @field_validator("priority", mode="before")
    @classmethod
    def default_priority(cls, v):
        return NotificationPriority.MEDIUM if v is None else v

    @field_validator("source_service")
    @classmethod
    def check_source_service(cls, v: Optional[str]) -> Optional[str]:
        return validate_max_length(
            v, MAX_SOURCE_SERVICE_LENGTH, "source_service", label="Source service name"
        )

    @model_validator(mode="after")
    def check_schedule_window(self):
        if self.scheduled_at and self.expires_at and self.expires_at <= self.scheduled_at:
            raise ValueError("expires_at must be after scheduled_at")
        return self

    def is_scheduled(self, now: Optional[datetime] = None) -> bool:
        """True when delivery is deferred to a future time."""
        if self.scheduled_at is None:
            return False
        return self.scheduled_at > (ensure_utc(now) if now else utc_now())

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        if self.expires_at is None:
            return False
        return self.expires_at <= (ensure_utc(now) if now else utc_now())

    def effective_source_service(self) -> str:
        return self.source_service or UNKNOWN_SOURCE_SERVICE


class NotificationEventDto(ContractModel):
    """Notification event as published on the notification-events topic.

    Identity is the event id.
    """

    event_id: str = Field(..., description="Unique event identifier")
    event_type: NotificationEventType = Field(..., description="Notification category")
    customer_id: str = Field(..., description="Target customer identifier")
    source_service: str = Field(..., description="Publishing service")
    priority: NotificationPriority = Field(NotificationPriority.MEDIUM, description="Delivery priority")
    payload: Dict[str, Any] = Field(..., description="Template variables and event data")
    timestamp: WireTimestamp = Field(default_factory=utc_now_millis, description="Publish time (UTC)")
    correlation_id: Optional[str] = Field(None, description="Workflow correlation id")
    trace_id: Optional[str] = Field(None, description="Distributed trace id")
    metadata: Optional[Dict[str, str]] = Field(None, description="Free-form string metadata")

    @field_validator("event_id")
    @classmethod
    def check_event_id(cls, v: str) -> str:
        return require_non_blank(v, "event_id", label="Event ID")

    @field_validator("customer_id")
    @classmethod
    def check_customer_id(cls, v: str) -> str:
        return require_non_blank(v, "customer_id", label="Customer ID")

    @field_validator("source_service")
    @classmethod
    def check_source_service(cls, v: str) -> str:
        return require_non_blank(v, "source_service", label="Source service")

    @field_validator("payload")
    @classmethod
    def check_payload(cls, v: Dict[str, Any]) -> Dict[str, Any]:
        validate_payload(v)
        return v

    @field_validator("priority", mode="before")
    @classmethod
    def default_priority(cls, v):
        return NotificationPriority.MEDIUM if v is None else v

    @classmethod
    def from_request(
        cls,
        request: CreateNotificationRequest,
        event_id: Optional[str] = None,
        correlation_id: Optional[str] = None,
        trace_id: Optional[str] = None,
        source_service: Optional[str] = None,
    ) -> "NotificationEventDto":
        """Wrap a creation request as a stream event, generating missing ids."""
        return cls(
            event_id=event_id or generate_event_id(),
            event_type=request.event_type,
            customer_id=request.customer_id,
            source_service=source_service or request.effective_source_service(),
            priority=request.priority,
            payload=dict(request.payload),
            correlation_id=correlation_id or generate_correlation_id(),
            trace_id=trace_id,
            metadata=dict(request.metadata) if request.metadata else None,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NotificationEventDto):
            return NotImplemented
        return self.event_id == other.event_id

    def __hash__(self) -> int:
        return hash(self.event_id)

    def __repr__(self) -> str:
        return (
            f"NotificationEventDto(event_id={self.event_id!r}, event_type={self.event_type.code}, "
            f"source_service={self.source_service!r}, priority={self.priority.code}, "
            f"timestamp={self.timestamp.isoformat()})"
        )
