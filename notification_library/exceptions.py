"""Exception hierarchy for the notification contract library.

All errors raised by this package inherit from NotificationError so host
services can catch library failures with a single except clause:
- ContractValidationError: malformed or out-of-range field values
- UnknownCodeError: lookup of an unrecognized enumeration code
- SerializationError: JSON encoding/decoding failures (cause is chained)
- DeliveryFailedError: delivery outcome data for the calling delivery engine
"""

from typing import Any, Iterable, List, Optional, Tuple


def format_itemised(message: str, errors: Iterable[str] = (), suggestions: Iterable[str] = ()) -> str:
    """Render a message followed by numbered errors and bulleted suggestions."""
    parts = [message]
    errors = list(errors)
    suggestions = list(suggestions)

    if errors:
        parts.append("\nValidation Errors:")
        parts.extend(f"  {i}. {error}" for i, error in enumerate(errors, 1))

    if suggestions:
        parts.append("\nSuggestions:")
        parts.extend(f"  - {suggestion}" for suggestion in suggestions)

    return "\n".join(parts)


class NotificationError(Exception):
    """Base exception for all notification library errors.

    Carries a stable machine-readable error code alongside the message, plus
    optional arguments for message interpolation by the caller.
    """

    default_error_code = "NOTIFICATION_ERROR"

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        message_args: Tuple[Any, ...] = (),
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.default_error_code
        self.message_args = tuple(message_args)


class ContractValidationError(NotificationError, ValueError):
    """Raised when a contract field fails validation.

    Subclasses ValueError so pydantic field validators that raise it are
    reported as regular field-level validation errors.
    """

    default_error_code = "VALIDATION_ERROR"

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        errors: Optional[List[str]] = None,
    ) -> None:
        self.field = field
        self.errors = errors or []
        super().__init__(format_itemised(message, self.errors))


class UnknownCodeError(NotificationError, ValueError):
    """Raised when an enumeration lookup receives an unrecognized code."""

    default_error_code = "UNKNOWN_CODE"

    def __init__(self, enum_name: str, code: Any) -> None:
        self.enum_name = enum_name
        self.code = code
        super().__init__(f"Unknown {enum_name}: {code}", message_args=(code,))


class SerializationError(NotificationError):
    """Raised when JSON serialization or deserialization fails.

    The underlying codec error is always chained as __cause__.
    """

    default_error_code = "SERIALIZATION_ERROR"


class DeliveryFailedError(NotificationError):
    """A delivery attempt failed on a specific channel and provider.

    This library only carries the outcome; whether to retry is decided by the
    delivery engine that consumes it.
    """

    default_error_code = "DELIVERY_FAILED"

    def __init__(
        self,
        message: str,
        channel_type: Any,
        provider: str,
        attempt_number: int = 1,
        retryable: bool = True,
    ) -> None:
        if attempt_number < 1:
            raise ValueError(f"attempt_number must be >= 1, got: {attempt_number}")
        super().__init__(message, message_args=(channel_type, provider, attempt_number))
        self.channel_type = channel_type
        self.provider = provider
        self.attempt_number = attempt_number
        self.retryable = retryable
