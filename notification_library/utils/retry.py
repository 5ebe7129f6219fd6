"""Priority timeouts, retry budgets and exponential backoff.

Backoff for attempt n (attempts start at 1):

    delay = min(base_delay * multiplier ** (n - 1), max_delay)

so the first retry waits exactly `base_delay`. With the default policy the
multiplier is 2.0 and the cap is 6 hours.
"""

from datetime import datetime, timedelta
from typing import Optional

from notification_library.config.models import NotificationSettings, RetryPolicy, default_settings
from notification_library.enums import NotificationPriority
from notification_library.logging import get_logger

from .timestamps import ensure_utc, utc_now

logger = get_logger(__name__, component="retry")


def get_timeout_for_priority(
    priority: NotificationPriority, settings: Optional[NotificationSettings] = None
) -> timedelta:
    """Delivery timeout for a priority.

    CRITICAL=10s, HIGH=30s, MEDIUM=5m, LOW=30m unless overridden in settings.
    """
    return (settings or default_settings()).timeout_for(priority)


def get_max_retries_for_priority(
    priority: NotificationPriority, settings: Optional[NotificationSettings] = None
) -> int:
    """Retry budget for a priority: 5 for CRITICAL, 3 otherwise by default."""
    return (settings or default_settings()).max_retries_for(priority)


def calculate_retry_delay(
    attempt_number: int,
    base_delay: Optional[timedelta] = None,
    policy: Optional[RetryPolicy] = None,
) -> timedelta:
    """Backoff delay before retrying after `attempt_number`.

    Args:
        attempt_number: 1-based attempt number
        base_delay: Delay for the first retry (defaults to the policy's base delay)
        policy: Retry policy (defaults to the library settings)

    Returns:
        Delay, never larger than the policy's max delay

    Raises:
        ValueError: If attempt_number < 1 or base_delay is negative
    """
    if attempt_number < 1:
        raise ValueError(f"attempt_number must be >= 1, got: {attempt_number}")

    policy = policy or default_settings().retry
    base = policy.base_delay if base_delay is None else base_delay
    if base < timedelta(0):
        raise ValueError(f"base_delay cannot be negative, got: {base}")

    try:
        factor = policy.backoff_multiplier ** (attempt_number - 1)
    except OverflowError:
        return policy.max_delay

    delay_ms = min(base.total_seconds() * 1000 * factor, policy.max_delay.total_seconds() * 1000)
    return timedelta(milliseconds=int(delay_ms))


def calculate_next_retry(
    attempt_number: int,
    base_delay: Optional[timedelta] = None,
    now: Optional[datetime] = None,
    policy: Optional[RetryPolicy] = None,
) -> datetime:
    """Instant at which the next retry should run: `now + calculate_retry_delay(...)`.

    Args:
        attempt_number: 1-based attempt number that just failed
        base_delay: Delay for the first retry
        now: Reference time (defaults to current UTC time)
        policy: Retry policy (defaults to the library settings)
    """
    delay = calculate_retry_delay(attempt_number, base_delay, policy)
    reference = ensure_utc(now) if now is not None else utc_now()
    next_retry = reference + delay

    logger.debug(
        "Calculated next retry",
        extra={
            "event": "retry.scheduled",
            "attempt_number": attempt_number,
            "delay_ms": int(delay.total_seconds() * 1000),
        },
    )
    return next_retry


def has_retries_remaining(
    priority: NotificationPriority,
    attempts_made: int,
    settings: Optional[NotificationSettings] = None,
) -> bool:
    """True while fewer retries than the priority's budget have been used.

    The first attempt is not a retry, so `attempts_made - 1` retries are spent.
    """
    return max(attempts_made - 1, 0) < get_max_retries_for_priority(priority, settings)
