"""UTC clock helpers and the wire timestamp format.

Contract timestamps travel as ``yyyy-MM-ddTHH:mm:ss.SSSZ`` strings: UTC,
millisecond precision and a literal 'Z' suffix. Naive datetimes are read
as UTC everywhere in this package.
"""

from datetime import datetime, timezone
from typing import Optional

WIRE_TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.%f"
DATE_ONLY_FORMAT = "%Y-%m-%d"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def utc_now_millis() -> datetime:
    """Current UTC time at wire (millisecond) precision."""
    return truncate_to_millis(utc_now())


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to a naive datetime, or convert an aware one to UTC.

    Example:
        >>> ensure_utc(datetime(2025, 11, 4, 12, 0)).tzinfo == timezone.utc
        True
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def truncate_to_millis(dt: Optional[datetime]) -> Optional[datetime]:
    """Convert to UTC and drop everything below the millisecond.

    Decoded wire timestamps only carry milliseconds; contract models store
    the same precision so that encode/decode yields an equal object.
    """
    utc = ensure_utc(dt)
    if utc is None:
        return None
    return utc.replace(microsecond=utc.microsecond - utc.microsecond % 1000)


def format_wire_timestamp(dt: datetime) -> str:
    """Render ``dt`` as a wire timestamp.

    Example:
        >>> format_wire_timestamp(datetime(2025, 11, 4, 12, 0, 0, 123456, tzinfo=timezone.utc))
        '2025-11-04T12:00:00.123Z'
    """
    return ensure_utc(dt).strftime(WIRE_TIMESTAMP_FORMAT)[:-3] + "Z"


def parse_iso_datetime(value: str) -> Optional[datetime]:
    """Leniently parse an ISO-8601 string into an aware UTC datetime.

    Accepts wire timestamps, explicit offsets, naive date-times (read as UTC)
    and bare dates. Returns None for blank or unparseable input.
    """
    text = (value or "").strip()
    if not text:
        return None

    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"

    for parse in (datetime.fromisoformat, lambda s: datetime.strptime(s, DATE_ONLY_FORMAT)):
        try:
            return ensure_utc(parse(text))
        except ValueError:
            continue
    return None
