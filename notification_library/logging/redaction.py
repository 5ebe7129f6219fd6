"""Masking of sensitive values before they reach log output."""

import logging
from typing import Iterable, Optional

MASK = "***"

# Record attributes masked by SensitiveFieldFilter unless told otherwise
DEFAULT_SENSITIVE_FIELDS = frozenset({
    "email",
    "phone_number",
    "customer_email",
    "customer_phone",
    "account_number",
})


def sanitize_for_logging(value: Optional[str]) -> str:
    """Mask a sensitive value, keeping two characters at each end.

    Values of four characters or fewer (and None) are fully masked.

    Example:
        >>> sanitize_for_logging("customer_12345")
        'cu***45'
        >>> sanitize_for_logging("abcd")
        '***'
    """
    if value is None or len(value) <= 4:
        return MASK
    return value[:2] + MASK + value[-2:]


class SensitiveFieldFilter(logging.Filter):
    """Masks string attributes such as ``email`` on every record it sees."""

    def __init__(self, fields: Iterable[str] = DEFAULT_SENSITIVE_FIELDS):
        super().__init__()
        self.fields = frozenset(fields)

    def filter(self, record: logging.LogRecord) -> bool:
        for name in self.fields:
            value = getattr(record, name, None)
            if isinstance(value, str) and MASK not in value:
                setattr(record, name, sanitize_for_logging(value))
        return True
