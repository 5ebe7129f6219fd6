"""Delivery channels, channel providers and per-attempt delivery statuses."""

from typing import FrozenSet, List

from .base import CodedEnum


class ChannelType(CodedEnum):
    """A delivery medium, with the MIME content types it can carry."""

    def __new__(cls, code: str, display_name: str, description: str, content_types: FrozenSet[str]):
        obj = str.__new__(cls, code)
        obj._value_ = code
        obj.display_name = display_name
        obj.description = description
        obj.supported_content_types = content_types
        return obj

    EMAIL = ("EMAIL", "Email", "Electronic mail notifications", frozenset({"text/html", "text/plain"}))
    SMS = ("SMS", "SMS", "Short message service notifications", frozenset({"text/plain"}))
    PUSH = ("PUSH", "Push Notification", "Mobile push notifications", frozenset({"application/json"}))
    IN_APP = ("IN_APP", "In-App", "In-application notifications", frozenset({"application/json"}))
    WEBHOOK = ("WEBHOOK", "Webhook", "HTTP webhook notifications", frozenset({"application/json"}))
    VOICE = ("VOICE", "Voice Call", "Voice call notifications", frozenset({"audio/wav"}))
    LETTER = ("LETTER", "Physical Letter", "Physical mail notifications", frozenset({"text/plain"}))
    FAX = ("FAX", "Fax", "Fax notifications", frozenset({"text/plain"}))

    def is_real_time(self) -> bool:
        return self in (ChannelType.PUSH, ChannelType.IN_APP, ChannelType.SMS)

    def is_digital(self) -> bool:
        return self not in (ChannelType.LETTER, ChannelType.VOICE, ChannelType.FAX)

    def supports_rich_content(self) -> bool:
        """HTML or JSON bodies can be delivered on this channel."""
        return self in (ChannelType.EMAIL, ChannelType.IN_APP, ChannelType.PUSH)

    def supports_content_type(self, content_type: str) -> bool:
        # Ignore parameters such as "; charset=utf-8"
        return content_type.split(";", 1)[0].strip().lower() in self.supported_content_types


class ChannelProvider(CodedEnum):
    """External service that implements one or more channels."""

    def __new__(cls, code: str, display_name: str, description: str, channels: FrozenSet[ChannelType]):
        obj = str.__new__(cls, code)
        obj._value_ = code
        obj.display_name = display_name
        obj.description = description
        obj.supported_channels = channels
        return obj

    # Email
    SENDGRID = ("SENDGRID", "SendGrid", "SendGrid email service", frozenset({ChannelType.EMAIL}))
    AWS_SES = ("AWS_SES", "Amazon SES", "Amazon Simple Email Service", frozenset({ChannelType.EMAIL}))
    MAILGUN = ("MAILGUN", "Mailgun", "Mailgun email service", frozenset({ChannelType.EMAIL}))

    # SMS
    TWILIO = ("TWILIO", "Twilio", "Twilio SMS service", frozenset({ChannelType.SMS, ChannelType.VOICE}))
    AWS_SNS = (
        "AWS_SNS",
        "Amazon SNS",
        "Amazon Simple Notification Service",
        frozenset({ChannelType.SMS, ChannelType.PUSH}),
    )

    # Push
    FIREBASE = ("FIREBASE", "Firebase", "Firebase Cloud Messaging", frozenset({ChannelType.PUSH}))
    APNS = ("APNS", "Apple Push", "Apple Push Notification Service", frozenset({ChannelType.PUSH}))

    # Multi-channel
    CUSTOM = (
        "CUSTOM",
        "Custom Provider",
        "Custom implementation",
        frozenset({ChannelType.EMAIL, ChannelType.SMS, ChannelType.PUSH, ChannelType.WEBHOOK}),
    )

    def supports(self, channel_type: ChannelType) -> bool:
        return channel_type in self.supported_channels

    @classmethod
    def providers_for(cls, channel_type: ChannelType) -> List["ChannelProvider"]:
        """Providers able to deliver on `channel_type`, in declaration order."""
        return [provider for provider in cls if provider.supports(channel_type)]


class DeliveryStatus(CodedEnum):
    """Outcome of a single delivery attempt as reported by a provider."""

    def __new__(cls, code: str, display_name: str, description: str):
        obj = str.__new__(cls, code)
        obj._value_ = code
        obj.display_name = display_name
        obj.description = description
        return obj

    PENDING = ("PENDING", "Pending", "Delivery is pending")
    SENT = ("SENT", "Sent", "Message has been sent to provider")
    DELIVERED = ("DELIVERED", "Delivered", "Message has been delivered")
    FAILED = ("FAILED", "Failed", "Delivery failed")
    BOUNCED = ("BOUNCED", "Bounced", "Message bounced back")
    RATE_LIMITED = ("RATE_LIMITED", "Rate Limited", "Delivery rate limited")
    EXPIRED = ("EXPIRED", "Expired", "Delivery attempt expired")

    def is_terminal(self) -> bool:
        return self in (
            DeliveryStatus.DELIVERED,
            DeliveryStatus.FAILED,
            DeliveryStatus.BOUNCED,
            DeliveryStatus.EXPIRED,
        )

    def is_successful(self) -> bool:
        return self is DeliveryStatus.DELIVERED

    def can_retry(self) -> bool:
        return self in (DeliveryStatus.FAILED, DeliveryStatus.RATE_LIMITED)
