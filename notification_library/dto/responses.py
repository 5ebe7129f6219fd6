"""Outbound contracts: notification state and delivery status summaries."""

from dataclasses import asdict, dataclass
from datetime import datetime
from typing import List, Optional, Sequence

from pydantic import ConfigDict, Field, model_validator

from notification_library.domain.base import ContractModel, WireTimestamp
from notification_library.domain.models import DeliveryAttempt
from notification_library.enums import (
    NotificationEventType,
    NotificationPriority,
    NotificationStatus,
)
from notification_library.utils.timestamps import ensure_utc, utc_now

_DELIVERED_STATES = frozenset({NotificationStatus.DELIVERED, NotificationStatus.READ})


class NotificationResponse(ContractModel):
    """Current state of a notification as returned to API callers."""

    id: Optional[str] = Field(None, description="Notification identifier")
    event_id: Optional[str] = Field(None, description="Originating event identifier")
    event_type: Optional[NotificationEventType] = None
    customer_id: Optional[str] = None
    priority: Optional[NotificationPriority] = None
    status: Optional[NotificationStatus] = None
    source_service: Optional[str] = None
    created_at: Optional[WireTimestamp] = None
    processed_at: Optional[WireTimestamp] = None
    delivered_at: Optional[WireTimestamp] = None
    read_at: Optional[WireTimestamp] = None
    scheduled_at: Optional[WireTimestamp] = None

    @model_validator(mode="after")
    def check_lifecycle_timestamps(self):
        if self.status is None:
            return self
        if self.delivered_at is not None and self.status not in _DELIVERED_STATES:
            raise ValueError(f"delivered_at is only valid for DELIVERED or READ, not {self.status.code}")
        if self.read_at is not None and self.status is not NotificationStatus.READ:
            raise ValueError(f"read_at is only valid for READ, not {self.status.code}")
        return self

    def is_terminal(self) -> bool:
        return self.status is not None and self.status.is_terminal()

    def is_delivered(self) -> bool:
        return self.status in _DELIVERED_STATES


@dataclass(frozen=True)
class DeliverySummary:
    """Counts and timestamps derived from a list of delivery attempts."""

    total_attempts: int = 0
    successful_deliveries: int = 0
    failed_deliveries: int = 0
    last_attempt_at: Optional[datetime] = None
    next_retry_at: Optional[datetime] = None
    last_error: Optional[str] = None


def summarize_attempts(attempts: Sequence[DeliveryAttempt]) -> DeliverySummary:
    """Aggregate delivery attempts in a single pass.

    last_error is the error message of the last failed attempt in list order
    (None if that attempt carried no message), not the latest by time.
    """
    successes = 0
    failures = 0
    last_attempt_at = None
    next_retry_at = None
    last_failed = None

    for attempt in attempts:
        if attempt.is_successful():
            successes += 1
        elif attempt.is_failed():
            failures += 1
            last_failed = attempt

        if attempt.attempted_at is not None:
            if last_attempt_at is None or attempt.attempted_at > last_attempt_at:
                last_attempt_at = attempt.attempted_at

        if attempt.next_retry_at is not None:
            if next_retry_at is None or attempt.next_retry_at < next_retry_at:
                next_retry_at = attempt.next_retry_at

    return DeliverySummary(
        total_attempts=len(attempts),
        successful_deliveries=successes,
        failed_deliveries=failures,
        last_attempt_at=last_attempt_at,
        next_retry_at=next_retry_at,
        last_error=last_failed.error_message if last_failed else None,
    )


class DeliveryStatusResponse(ContractModel):
    """Delivery progress of one notification across all its attempts.

    When delivery_attempts is non-empty the summary fields (counts, last
    attempt, next retry, last error) are recomputed from the attempts and any
    supplied values for them are discarded. With no attempts the summary
    fields are taken as given. The model is immutable; use with_attempts()
    to get a response for a different attempt list.
    """

    notification_id: Optional[str] = None
    customer_id: Optional[str] = None
    overall_status: Optional[NotificationStatus] = None
    total_attempts: int = Field(0, ge=0)
    successful_deliveries: int = Field(0, ge=0)
    failed_deliveries: int = Field(0, ge=0)
    last_attempt_at: Optional[WireTimestamp] = None
    next_retry_at: Optional[WireTimestamp] = None
    delivery_attempts: Optional[List[DeliveryAttempt]] = None
    last_error: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def derive_summary(self):
        if self.delivery_attempts:
            # frozen: write the derived fields straight into the instance dict
            self.__dict__.update(asdict(summarize_attempts(self.delivery_attempts)))
        return self

    @classmethod
    def from_attempts(
        cls,
        notification_id: str,
        customer_id: Optional[str],
        overall_status: Optional[NotificationStatus],
        attempts: Sequence[DeliveryAttempt],
    ) -> "DeliveryStatusResponse":
        return cls(
            notification_id=notification_id,
            customer_id=customer_id,
            overall_status=overall_status,
            delivery_attempts=list(attempts),
        )

    def with_attempts(self, attempts: Sequence[DeliveryAttempt]) -> "DeliveryStatusResponse":
        """Copy of this response with the attempts replaced and the summary recomputed."""
        return type(self)(
            notification_id=self.notification_id,
            customer_id=self.customer_id,
            overall_status=self.overall_status,
            delivery_attempts=list(attempts),
        )

    def has_successful_delivery(self) -> bool:
        return self.successful_deliveries > 0

    def has_failures(self) -> bool:
        return self.failed_deliveries > 0

    def will_retry(self, now: Optional[datetime] = None) -> bool:
        if self.next_retry_at is None:
            return False
        return self.next_retry_at > (ensure_utc(now) if now else utc_now())
