"""Utility functions: identifiers, timestamps, retry math, masking and JSON."""

from notification_library.logging import sanitize_for_logging

from .identifiers import generate_correlation_id, generate_event_id, generate_notification_id
from .notifications import extract_customer_name, requires_immediate_processing
from .retry import (
    calculate_next_retry,
    calculate_retry_delay,
    get_max_retries_for_priority,
    get_timeout_for_priority,
    has_retries_remaining,
)
from .serialization import (
    from_json,
    from_tree,
    map_to_tree,
    parse_json,
    pretty_print,
    to_json,
    to_tree,
)
from .timestamps import (
    ensure_utc,
    format_wire_timestamp,
    parse_iso_datetime,
    truncate_to_millis,
    utc_now,
    utc_now_millis,
)

__all__ = [
    # Identifiers
    "generate_notification_id",
    "generate_event_id",
    "generate_correlation_id",
    # Retry
    "get_timeout_for_priority",
    "get_max_retries_for_priority",
    "calculate_retry_delay",
    "calculate_next_retry",
    "has_retries_remaining",
    # Notifications
    "extract_customer_name",
    "requires_immediate_processing",
    "sanitize_for_logging",
    # Timestamps
    "utc_now",
    "utc_now_millis",
    "ensure_utc",
    "truncate_to_millis",
    "format_wire_timestamp",
    "parse_iso_datetime",
    # JSON
    "to_json",
    "from_json",
    "to_tree",
    "from_tree",
    "parse_json",
    "map_to_tree",
    "pretty_print",
]
