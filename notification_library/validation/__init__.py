"""Field and contract validation rules."""

from .contracts import validate_contract
from .validators import (
    CUSTOMER_ID_PATTERN,
    PHONE_PATTERN,
    is_valid_customer_id,
    is_valid_email,
    is_valid_phone_number,
    payload_size_bytes,
    require_non_blank,
    validate_customer_id,
    validate_email,
    validate_max_length,
    validate_payload,
    validate_phone_number,
    validate_template_size,
)

__all__ = [
    "CUSTOMER_ID_PATTERN",
    "PHONE_PATTERN",
    "is_valid_customer_id",
    "is_valid_email",
    "is_valid_phone_number",
    "payload_size_bytes",
    "require_non_blank",
    "validate_contract",
    "validate_customer_id",
    "validate_email",
    "validate_max_length",
    "validate_payload",
    "validate_phone_number",
    "validate_template_size",
]
