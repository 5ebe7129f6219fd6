"""Out-of-band message header conventions.

Headers carry routing and tracing data next to the message body so brokers
and consumers can act on them without decoding the payload. Keys are the
``X-*`` names from the constants module; values travel as UTF-8 strings.
"""

from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from notification_library.config.models import NotificationSettings
from notification_library.constants.notification import (
    HEADER_CORRELATION_ID,
    HEADER_CUSTOMER_ID,
    HEADER_EVENT_TYPE,
    HEADER_MAX_RETRIES,
    HEADER_PRIORITY,
    HEADER_RETRY_COUNT,
    HEADER_SOURCE_SERVICE,
    HEADER_TRACE_ID,
)
from notification_library.enums import NotificationEventType, NotificationPriority
from notification_library.utils.retry import get_max_retries_for_priority
from notification_library.validation.contracts import validate_contract

HeaderSource = Union[Mapping[str, Any], Iterable[Tuple[str, Any]]]


class MessageHeaders(BaseModel):
    """Routing and retry headers published alongside a notification event.

    Attribute names are snake_case; the wire names are the X-* header keys.
    """

    correlation_id: Optional[str] = Field(None, alias=HEADER_CORRELATION_ID)
    trace_id: Optional[str] = Field(None, alias=HEADER_TRACE_ID)
    customer_id: Optional[str] = Field(None, alias=HEADER_CUSTOMER_ID)
    event_type: Optional[NotificationEventType] = Field(None, alias=HEADER_EVENT_TYPE)
    priority: Optional[NotificationPriority] = Field(None, alias=HEADER_PRIORITY)
    source_service: Optional[str] = Field(None, alias=HEADER_SOURCE_SERVICE)
    retry_count: int = Field(0, ge=0, alias=HEADER_RETRY_COUNT)
    max_retries: Optional[int] = Field(None, ge=0, alias=HEADER_MAX_RETRIES)

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    @classmethod
    def for_event_dto(
        cls,
        dto,
        retry_count: int = 0,
        max_retries: Optional[int] = None,
        settings: Optional[NotificationSettings] = None,
    ) -> "MessageHeaders":
        """Headers for publishing a NotificationEventDto.

        max_retries defaults to the retry budget of the event's priority.
        """
        if max_retries is None:
            max_retries = get_max_retries_for_priority(dto.priority, settings)
        return cls(
            correlation_id=dto.correlation_id,
            trace_id=dto.trace_id,
            customer_id=dto.customer_id,
            event_type=dto.event_type,
            priority=dto.priority,
            source_service=dto.source_service,
            retry_count=retry_count,
            max_retries=max_retries,
        )

    @classmethod
    def from_mapping(cls, headers: HeaderSource) -> "MessageHeaders":
        """Read headers from a mapping or a list of (key, value) pairs.

        Keys match case-insensitively; bytes values are decoded as UTF-8 and
        unrelated headers are ignored.

        Raises:
            ContractValidationError: If a known header has a malformed value
        """
        items = headers.items() if isinstance(headers, Mapping) else headers
        received = {}
        for key, value in items:
            if value is None:
                continue
            if isinstance(value, (bytes, bytearray)):
                value = bytes(value).decode("utf-8")
            received[key.lower()] = value

        data = {}
        for field in cls.model_fields.values():
            if field.alias.lower() in received:
                data[field.alias] = received[field.alias.lower()]
        return validate_contract(cls, data)

    def with_retry(self) -> "MessageHeaders":
        """Copy for the next redelivery, with the retry count incremented."""
        return self.model_copy(update={"retry_count": self.retry_count + 1})

    def retries_exhausted(self) -> bool:
        return self.max_retries is not None and self.retry_count >= self.max_retries

    def to_dict(self) -> Dict[str, str]:
        """Header name to string value; unset headers are omitted."""
        dumped = self.model_dump(mode="json", by_alias=True, exclude_none=True)
        return {key: str(value) for key, value in dumped.items()}

    def to_kafka(self) -> List[Tuple[str, bytes]]:
        return [(key, value.encode("utf-8")) for key, value in self.to_dict().items()]
