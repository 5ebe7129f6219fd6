"""Value objects: customer details and delivery attempt records."""

from datetime import timedelta
from typing import List, Optional

from pydantic import ConfigDict, Field, field_validator

from notification_library.constants.notification import DEFAULT_LANGUAGE, DEFAULT_TIMEZONE
from notification_library.enums import ChannelProvider, ChannelType, NotificationStatus
from notification_library.exceptions import UnknownCodeError
from notification_library.validation import (
    require_non_blank,
    validate_email,
    validate_phone_number,
)

from .base import ContractModel, WireTimestamp


class CustomerInfo(ContractModel):
    """Recipient details attached to a notification.

    Identity is the customer id: two CustomerInfo objects with the same
    customer_id are equal regardless of their contact details.
    """

    customer_id: str = Field(..., description="Customer identifier")
    first_name: Optional[str] = Field(None, description="Given name")
    last_name: Optional[str] = Field(None, description="Family name")
    email: Optional[str] = Field(None, description="Email address")
    phone_number: Optional[str] = Field(None, description="E.164 phone number")
    preferred_language: str = Field(DEFAULT_LANGUAGE, description="Preferred language (ISO 639-1)")
    timezone: str = Field(DEFAULT_TIMEZONE, description="IANA timezone name")

    model_config = ConfigDict(frozen=True)

    @field_validator("customer_id")
    @classmethod
    def validate_customer_id(cls, v: str) -> str:
        return require_non_blank(v, "customer_id", label="Customer ID")

    @field_validator("email")
    @classmethod
    def validate_email_format(cls, v: Optional[str]) -> Optional[str]:
        return validate_email(v)

    @field_validator("phone_number")
    @classmethod
    def validate_phone_format(cls, v: Optional[str]) -> Optional[str]:
        return validate_phone_number(v)

    @field_validator("preferred_language", mode="before")
    @classmethod
    def default_language(cls, v):
        return DEFAULT_LANGUAGE if v is None else v

    @field_validator("timezone", mode="before")
    @classmethod
    def default_timezone(cls, v):
        return DEFAULT_TIMEZONE if v is None else v

    @property
    def full_name(self) -> Optional[str]:
        """'First Last' when both are present, else whichever exists, else None."""
        if self.first_name is not None and self.last_name is not None:
            return f"{self.first_name} {self.last_name}"
        return self.first_name if self.first_name is not None else self.last_name

    def contact_channels(self) -> List[ChannelType]:
        """Channels reachable with the contact details on file."""
        channels = []
        if self.email:
            channels.append(ChannelType.EMAIL)
        if self.phone_number:
            channels.extend([ChannelType.SMS, ChannelType.VOICE])
        return channels

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CustomerInfo):
            return NotImplemented
        return self.customer_id == other.customer_id

    def __hash__(self) -> int:
        return hash(self.customer_id)


class DeliveryAttempt(ContractModel):
    """Immutable record of one try at delivering a notification on a channel.

    Identity is (attempt_number, channel_type, provider, attempted_at).
    """

    attempt_number: int = Field(..., ge=1, description="1-based attempt counter")
    channel_type: ChannelType = Field(..., description="Channel used for this attempt")
    provider: Optional[str] = Field(None, description="Provider code, e.g. SENDGRID")
    status: NotificationStatus = Field(..., description="Outcome of the attempt")
    attempted_at: Optional[WireTimestamp] = Field(None, description="When the attempt started (UTC)")
    error_message: Optional[str] = Field(None, description="Provider or engine error message")
    error_code: Optional[str] = Field(None, description="Provider or engine error code")
    external_id: Optional[str] = Field(None, description="Provider-side message id")
    duration_ms: Optional[int] = Field(None, ge=0, description="Attempt duration in milliseconds")
    next_retry_at: Optional[WireTimestamp] = Field(None, description="When the next retry is scheduled (UTC)")

    model_config = ConfigDict(frozen=True)

    def is_successful(self) -> bool:
        return self.status is NotificationStatus.DELIVERED

    def is_failed(self) -> bool:
        return self.status in (NotificationStatus.FAILED, NotificationStatus.BOUNCED)

    @property
    def duration(self) -> Optional[timedelta]:
        if self.duration_ms is None:
            return None
        return timedelta(milliseconds=self.duration_ms)

    def provider_enum(self) -> Optional[ChannelProvider]:
        """The provider as a ChannelProvider, or None for unknown/custom codes."""
        if self.provider is None:
            return None
        try:
            return ChannelProvider.from_code(self.provider)
        except UnknownCodeError:
            return None

    def is_provider_compatible(self) -> bool:
        """False only when a known provider does not support the attempt's channel."""
        provider = self.provider_enum()
        return provider is None or provider.supports(self.channel_type)

    def _identity(self) -> tuple:
        return (self.attempt_number, self.channel_type, self.provider, self.attempted_at)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DeliveryAttempt):
            return NotImplemented
        return self._identity() == other._identity()

    def __hash__(self) -> int:
        return hash(self._identity())
