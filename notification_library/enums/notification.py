"""Notification event types, priorities and lifecycle statuses."""

from datetime import timedelta
from typing import FrozenSet, List

from notification_library.constants.notification import PRIORITY_TIMEOUTS
from notification_library.exceptions import UnknownCodeError

from .base import CodedEnum, _describe


class NotificationEventType(CodedEnum):
    """Semantic category of a notification.

    Drives routing, template selection and prioritization in consuming
    services. Code equals the member name.
    """

    def __new__(cls, code: str, display_name: str, description: str):
        obj = str.__new__(cls, code)
        obj._value_ = code
        obj.display_name = display_name
        obj.description = description
        return obj

    # Financial
    TRANSACTION_ALERT = ("TRANSACTION_ALERT", "Transaction Alert", "Financial transaction notifications")
    PAYMENT_CONFIRMATION = ("PAYMENT_CONFIRMATION", "Payment Confirmation", "Payment processing confirmations")
    PAYMENT_FAILED = ("PAYMENT_FAILED", "Payment Failed", "Failed payment notifications")
    REFUND_PROCESSED = ("REFUND_PROCESSED", "Refund Processed", "Refund processing notifications")

    # Security
    SECURITY_ALERT = ("SECURITY_ALERT", "Security Alert", "Security-related alerts")
    LOGIN_ATTEMPT = ("LOGIN_ATTEMPT", "Login Attempt", "Login attempt notifications")
    PASSWORD_CHANGE = ("PASSWORD_CHANGE", "Password Change", "Password change confirmations")
    DEVICE_REGISTRATION = ("DEVICE_REGISTRATION", "Device Registration", "New device registration")

    # Account
    ACCOUNT_UPDATE = ("ACCOUNT_UPDATE", "Account Update", "Account information updates")
    ACCOUNT_CREATED = ("ACCOUNT_CREATED", "Account Created", "New account creation")
    ACCOUNT_SUSPENDED = ("ACCOUNT_SUSPENDED", "Account Suspended", "Account suspension notifications")
    ACCOUNT_CLOSED = ("ACCOUNT_CLOSED", "Account Closed", "Account closure notifications")

    # KYC / compliance
    KYC_UPDATE = ("KYC_UPDATE", "KYC Update", "Know Your Customer updates")
    DOCUMENT_REQUIRED = ("DOCUMENT_REQUIRED", "Document Required", "Required document notifications")
    COMPLIANCE_ALERT = ("COMPLIANCE_ALERT", "Compliance Alert", "Compliance-related notifications")

    # Fraud
    FRAUD_ALERT = ("FRAUD_ALERT", "Fraud Alert", "Fraud detection alerts")
    SUSPICIOUS_ACTIVITY = ("SUSPICIOUS_ACTIVITY", "Suspicious Activity", "Suspicious activity notifications")

    # Statements
    STATEMENT_READY = ("STATEMENT_READY", "Statement Ready", "Account statement notifications")
    MONTHLY_SUMMARY = ("MONTHLY_SUMMARY", "Monthly Summary", "Monthly account summary")

    # Marketing
    PROMOTIONAL = ("PROMOTIONAL", "Promotional", "Marketing and promotional content")
    PRODUCT_ANNOUNCEMENT = ("PRODUCT_ANNOUNCEMENT", "Product Announcement", "New product announcements")
    FEATURE_UPDATE = ("FEATURE_UPDATE", "Feature Update", "Platform feature updates")

    # System
    SYSTEM_MAINTENANCE = ("SYSTEM_MAINTENANCE", "System Maintenance", "System maintenance notifications")
    SERVICE_OUTAGE = ("SERVICE_OUTAGE", "Service Outage", "Service outage notifications")
    SCHEDULED_DOWNTIME = ("SCHEDULED_DOWNTIME", "Scheduled Downtime", "Scheduled maintenance notifications")

    # Support
    TICKET_CREATED = ("TICKET_CREATED", "Support Ticket Created", "Support ticket notifications")
    TICKET_UPDATED = ("TICKET_UPDATED", "Support Ticket Updated", "Support ticket updates")
    TICKET_RESOLVED = ("TICKET_RESOLVED", "Support Ticket Resolved", "Support ticket resolution")

    def is_security_related(self) -> bool:
        return self in _SECURITY_EVENTS

    def is_financial_related(self) -> bool:
        return self in _FINANCIAL_EVENTS

    def is_marketing(self) -> bool:
        return self in _MARKETING_EVENTS


_SECURITY_EVENTS: FrozenSet[NotificationEventType] = frozenset({
    NotificationEventType.SECURITY_ALERT,
    NotificationEventType.LOGIN_ATTEMPT,
    NotificationEventType.PASSWORD_CHANGE,
    NotificationEventType.DEVICE_REGISTRATION,
    NotificationEventType.FRAUD_ALERT,
    NotificationEventType.SUSPICIOUS_ACTIVITY,
})

_FINANCIAL_EVENTS: FrozenSet[NotificationEventType] = frozenset({
    NotificationEventType.TRANSACTION_ALERT,
    NotificationEventType.PAYMENT_CONFIRMATION,
    NotificationEventType.PAYMENT_FAILED,
    NotificationEventType.REFUND_PROCESSED,
})

_MARKETING_EVENTS: FrozenSet[NotificationEventType] = frozenset({
    NotificationEventType.PROMOTIONAL,
    NotificationEventType.PRODUCT_ANNOUNCEMENT,
    NotificationEventType.FEATURE_UPDATE,
})


class NotificationPriority(CodedEnum):
    """Urgency of a notification; affects delivery order, timing and retries.

    Serialized by symbolic name. Lower `level` means more urgent, and levels
    are unique so `is_higher_than` is a strict total order.
    """

    def __new__(cls, code: str, level: int, display_name: str, description: str, delay_ms: int):
        obj = str.__new__(cls, code)
        obj._value_ = code
        obj.level = level
        obj.display_name = display_name
        obj.description = description
        obj.delay_ms = delay_ms
        return obj

    CRITICAL = ("CRITICAL", 1, "Critical", "Immediate delivery required", 0)
    HIGH = ("HIGH", 2, "High", "High priority delivery", 1_000)
    MEDIUM = ("MEDIUM", 3, "Medium", "Normal priority delivery", 5_000)
    LOW = ("LOW", 4, "Low", "Low priority delivery", 30_000)

    @classmethod
    def _missing_(cls, value):
        # Accept any casing on input: "high", "High", " HIGH "
        if isinstance(value, str):
            return cls.__members__.get(value.strip().upper())
        return None

    @classmethod
    def from_code(cls, code: str) -> "NotificationPriority":
        """Resolve a priority from its name, case-insensitively.

        Raises:
            UnknownCodeError: If the name matches no priority
        """
        member = cls._missing_(code)
        if member is None:
            raise UnknownCodeError(_describe(cls), code)
        return member

    @classmethod
    def ranked(cls) -> List["NotificationPriority"]:
        """Priorities from most to least urgent."""
        return sorted(cls, key=lambda priority: priority.level)

    @property
    def delay(self) -> timedelta:
        """Delay before delivery should start."""
        return timedelta(milliseconds=self.delay_ms)

    @property
    def timeout(self) -> timedelta:
        """Maximum time allowed for delivery (canonical priority timeout table)."""
        return PRIORITY_TIMEOUTS[self.value]

    @property
    def timeout_ms(self) -> int:
        return int(self.timeout.total_seconds() * 1000)

    def is_higher_than(self, other: "NotificationPriority") -> bool:
        """True when this priority is strictly more urgent than `other`."""
        return self.level < other.level


class NotificationStatus(CodedEnum):
    """Lifecycle state of a notification.

    Nominal lifecycle: CREATED -> QUEUED -> PROCESSING -> {DELIVERED, FAILED,
    BOUNCED, EXPIRED}, and DELIVERED -> READ. Only the values and their
    predicates live here; transition enforcement belongs to the owning service.
    """

    def __new__(cls, code: str, display_name: str, description: str):
        obj = str.__new__(cls, code)
        obj._value_ = code
        obj.display_name = display_name
        obj.description = description
        return obj

    CREATED = ("CREATED", "Created", "Notification has been created")
    QUEUED = ("QUEUED", "Queued", "Notification is queued for processing")
    PROCESSING = ("PROCESSING", "Processing", "Notification is being processed")
    DELIVERED = ("DELIVERED", "Delivered", "Notification has been delivered")
    FAILED = ("FAILED", "Failed", "Notification delivery failed")
    BOUNCED = ("BOUNCED", "Bounced", "Notification was bounced back")
    READ = ("READ", "Read", "Notification has been read by recipient")
    EXPIRED = ("EXPIRED", "Expired", "Notification has expired")

    def is_terminal(self) -> bool:
        """No further processing is expected from this state."""
        return self in _TERMINAL_STATUSES

    def is_successful(self) -> bool:
        return self in (NotificationStatus.DELIVERED, NotificationStatus.READ)

    def can_retry(self) -> bool:
        """A new delivery attempt cycle may start from this state."""
        return self in (NotificationStatus.FAILED, NotificationStatus.BOUNCED)

    def expected_next(self) -> FrozenSet["NotificationStatus"]:
        """Nominal successor states in the lifecycle graph.

        Retryable states list PROCESSING, reached through a new attempt cycle
        driven by the delivery engine.
        """
        return _LIFECYCLE[self]


_TERMINAL_STATUSES: FrozenSet[NotificationStatus] = frozenset({
    NotificationStatus.DELIVERED,
    NotificationStatus.FAILED,
    NotificationStatus.BOUNCED,
    NotificationStatus.READ,
    NotificationStatus.EXPIRED,
})

_LIFECYCLE = {
    NotificationStatus.CREATED: frozenset({NotificationStatus.QUEUED}),
    NotificationStatus.QUEUED: frozenset({NotificationStatus.PROCESSING}),
    NotificationStatus.PROCESSING: frozenset({
        NotificationStatus.DELIVERED,
        NotificationStatus.FAILED,
        NotificationStatus.BOUNCED,
        NotificationStatus.EXPIRED,
    }),
    NotificationStatus.DELIVERED: frozenset({NotificationStatus.READ}),
    NotificationStatus.FAILED: frozenset({NotificationStatus.PROCESSING}),
    NotificationStatus.BOUNCED: frozenset({NotificationStatus.PROCESSING}),
    NotificationStatus.READ: frozenset(),
    NotificationStatus.EXPIRED: frozenset(),
}
