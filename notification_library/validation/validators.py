"""Field-level validation rules for notification contracts.

Each rule comes in two forms:
- is_valid_*(): boolean check, never raises
- validate_*(): returns the normalized value or raises ContractValidationError

Contract models call the validate_* form from their pydantic field
validators; because ContractValidationError is a ValueError, pydantic reports
the failure against the offending field.
"""

import re
from typing import Any, Mapping, Optional, Union

from email_validator import EmailNotValidError
from email_validator import validate_email as check_email
from pydantic_core import PydanticSerializationError, to_json

from notification_library.config.models import ValidationLimits, default_settings
from notification_library.exceptions import ContractValidationError
from notification_library.logging import get_logger, sanitize_for_logging

logger = get_logger(__name__, component="validation")

CUSTOMER_ID_PATTERN = re.compile(r"^[a-zA-Z0-9_-]+$")
PHONE_PATTERN = re.compile(r"^\+?[1-9]\d{1,14}$")


def _limits(limits: Optional[ValidationLimits]) -> ValidationLimits:
    return limits if limits is not None else default_settings().validation


def is_valid_customer_id(customer_id: Optional[str], limits: Optional[ValidationLimits] = None) -> bool:
    """Check a customer id: non-blank, trimmed length within bounds, [A-Za-z0-9_-] only."""
    if customer_id is None or not customer_id.strip():
        return False

    trimmed = customer_id.strip()
    bounds = _limits(limits)
    if not bounds.min_customer_id_length <= len(trimmed) <= bounds.max_customer_id_length:
        return False

    return CUSTOMER_ID_PATTERN.match(trimmed) is not None


def validate_customer_id(
    customer_id: Optional[str],
    field: str = "customer_id",
    limits: Optional[ValidationLimits] = None,
) -> str:
    """Validate a customer id and return it trimmed.

    Raises:
        ContractValidationError: If the id is blank, too short/long or has invalid characters
    """
    if customer_id is None or not customer_id.strip():
        raise ContractValidationError("Customer ID is required", field=field)

    if not is_valid_customer_id(customer_id, limits):
        bounds = _limits(limits)
        logger.debug(
            "Rejected customer id",
            extra={"event": "validation.customer_id.rejected", "customer_id": sanitize_for_logging(customer_id)},
        )
        raise ContractValidationError(
            "Invalid customer ID format: expected "
            f"{bounds.min_customer_id_length}-{bounds.max_customer_id_length} "
            "characters from [A-Za-z0-9_-]",
            field=field,
        )

    return customer_id.strip()


def is_valid_email(email: Optional[str]) -> bool:
    if email is None:
        return False
    try:
        check_email(email, check_deliverability=False, globally_deliverable=False)
    except EmailNotValidError:
        return False
    return True


def validate_email(email: Optional[str], field: str = "email") -> Optional[str]:
    """Validate an optional email address; None passes through.

    Syntax only, no DNS lookup. Returns the normalized address.
    """
    if email is None:
        return None
    try:
        validated = check_email(
            email.strip(), check_deliverability=False, globally_deliverable=False
        )
    except EmailNotValidError as e:
        raise ContractValidationError(f"Invalid email format: {e}", field=field) from e
    return validated.normalized


def is_valid_phone_number(phone_number: Optional[str]) -> bool:
    """E.164-style number: optional '+', no leading zero, 2-15 digits."""
    return phone_number is not None and PHONE_PATTERN.match(phone_number) is not None


def validate_phone_number(phone_number: Optional[str], field: str = "phone_number") -> Optional[str]:
    """Validate an optional phone number; None passes through."""
    if phone_number is None:
        return None
    if not is_valid_phone_number(phone_number.strip()):
        raise ContractValidationError("Invalid phone number format", field=field)
    return phone_number.strip()


def require_non_blank(value: Optional[str], field: str, label: Optional[str] = None) -> str:
    """Return the stripped value or raise if it is None/blank."""
    if value is None or not value.strip():
        raise ContractValidationError(f"{label or field} is required", field=field)
    return value.strip()


def validate_max_length(value: Optional[str], max_length: int, field: str, label: Optional[str] = None) -> Optional[str]:
    if value is not None and len(value) > max_length:
        raise ContractValidationError(
            f"{label or field} cannot exceed {max_length} characters", field=field
        )
    return value


def payload_size_bytes(payload: Any) -> int:
    """Size of the payload encoded as compact UTF-8 JSON.

    Raises:
        ContractValidationError: If the payload is not JSON-serializable
    """
    try:
        return len(to_json(payload))
    except PydanticSerializationError as e:
        raise ContractValidationError(f"Payload is not JSON-serializable: {e}", field="payload") from e


def validate_payload(
    payload: Optional[Mapping[str, Any]],
    field: str = "payload",
    limits: Optional[ValidationLimits] = None,
) -> Mapping[str, Any]:
    """Require a payload and check its serialized size."""
    if payload is None:
        raise ContractValidationError("Payload is required", field=field)

    max_bytes = _limits(limits).max_payload_size_bytes
    size = payload_size_bytes(payload)
    if size > max_bytes:
        raise ContractValidationError(
            f"Payload size {size} bytes exceeds maximum of {max_bytes} bytes", field=field
        )
    return payload


def validate_template_size(
    template: Union[str, bytes],
    field: str = "template",
    limits: Optional[ValidationLimits] = None,
) -> Union[str, bytes]:
    """Check a template body against the template size limit (UTF-8 bytes)."""
    raw = template.encode("utf-8") if isinstance(template, str) else template
    max_bytes = _limits(limits).max_template_size_bytes
    if len(raw) > max_bytes:
        raise ContractValidationError(
            f"Template size {len(raw)} bytes exceeds maximum of {max_bytes} bytes", field=field
        )
    return template
