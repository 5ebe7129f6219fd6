"""Domain event envelope shared by every notification event."""

from datetime import datetime
from typing import Optional, Protocol, runtime_checkable

from pydantic import ConfigDict, Field, field_validator

from notification_library.constants.notification import AGGREGATE_TYPE_NOTIFICATION
from notification_library.domain.base import ContractModel, WireTimestamp
from notification_library.utils.identifiers import generate_correlation_id, generate_event_id
from notification_library.utils.timestamps import utc_now_millis


@runtime_checkable
class DomainEvent(Protocol):
    """Anything that carries the event envelope fields."""

    event_id: str
    event_type: str
    aggregate_id: Optional[str]
    aggregate_type: str
    occurred_at: datetime
    correlation_id: Optional[str]
    version: int


class BaseEvent(ContractModel):
    """Immutable event envelope.

    event_id and occurred_at are generated on construction (and kept when
    decoding from the wire); a missing correlation id is generated too.
    Identity is the event id.
    """

    event_id: str = Field(default_factory=generate_event_id, description="Unique event identifier")
    event_type: str = Field(..., description="Event type tag")
    aggregate_id: Optional[str] = Field(None, description="Identifier of the aggregate the event is about")
    aggregate_type: str = Field(AGGREGATE_TYPE_NOTIFICATION, description="Aggregate kind")
    occurred_at: WireTimestamp = Field(default_factory=utc_now_millis, description="When the event happened (UTC)")
    correlation_id: Optional[str] = Field(None, validate_default=True, description="Workflow correlation id")
    version: int = Field(1, ge=1, description="Event schema version")

    model_config = ConfigDict(frozen=True)

    @field_validator("correlation_id")
    @classmethod
    def ensure_correlation_id(cls, v: Optional[str]) -> str:
        return v or generate_correlation_id()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BaseEvent):
            return NotImplemented
        return type(self) is type(other) and self.event_id == other.event_id

    def __hash__(self) -> int:
        return hash(self.event_id)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(event_id={self.event_id!r}, event_type={self.event_type!r}, "
            f"aggregate_id={self.aggregate_id!r}, occurred_at={self.occurred_at.isoformat()})"
        )
