"""Unit tests for field validation rules."""

import logging

import pytest

from notification_library.config import ValidationLimits
from notification_library.exceptions import ContractValidationError
from notification_library.validation import (
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


class TestCustomerId:
    """Tests for customer id rules."""

    @pytest.mark.parametrize("customer_id", ["ab_12-XY", "abc", "CUST-0001", "x" * 100, "  cust_1  "])
    def test_valid(self, customer_id):
        """Test accepted customer ids."""
        assert is_valid_customer_id(customer_id)

    @pytest.mark.parametrize("customer_id", ["ab", "bad id!", "cust.1", "x" * 101, "", "   ", None])
    def test_invalid(self, customer_id):
        """Test rejected customer ids."""
        assert not is_valid_customer_id(customer_id)

    def test_validate_returns_trimmed(self):
        """Test validate_customer_id trims the value."""
        assert validate_customer_id("  ab_12-XY  ") == "ab_12-XY"

    def test_validate_blank_is_required_error(self):
        """Test blank ids report a required error."""
        with pytest.raises(ContractValidationError, match="Customer ID is required") as exc_info:
            validate_customer_id("  ")
        assert exc_info.value.field == "customer_id"

    def test_validate_format_error(self):
        """Test malformed ids report the expected format."""
        with pytest.raises(ContractValidationError, match="3-100 characters"):
            validate_customer_id("bad id!")

    def test_rejection_log_masks_value(self, caplog):
        """Test rejected ids are masked in logs."""
        with caplog.at_level(logging.DEBUG, logger="notification_library.validation"):
            with pytest.raises(ContractValidationError):
                validate_customer_id("secret customer")

        assert "secret customer" not in caplog.text
        assert caplog.records[-1].customer_id == "se***er"

    def test_custom_limits(self):
        """Test limits can be tightened."""
        limits = ValidationLimits(min_customer_id_length=5, max_customer_id_length=8)

        assert not is_valid_customer_id("abcd", limits)
        assert is_valid_customer_id("abcde", limits)
        with pytest.raises(ContractValidationError, match="5-8 characters"):
            validate_customer_id("abcdefghi", limits=limits)


class TestContactDetails:
    """Tests for email and phone rules."""

    def test_email(self):
        """Test email format checks."""
        assert is_valid_email("ada@example.com")
        assert not is_valid_email("ada@")
        assert not is_valid_email("ada@@example.com")
        assert not is_valid_email(None)
        assert validate_email(None) is None
        assert validate_email(" ada@example.com ") == "ada@example.com"
        assert validate_email("Ada@EXAMPLE.com") == "Ada@example.com"
        with pytest.raises(ContractValidationError, match="Invalid email format"):
            validate_email("nope")

    @pytest.mark.parametrize("email", ["ops@bank.local", "user@localhost", "ada@example"])
    def test_internal_domains_accepted(self, email):
        """Test private and single-label domains pass the syntax check."""
        assert is_valid_email(email)
        assert validate_email(email) == email

    def test_phone(self):
        """Test phone format checks."""
        assert is_valid_phone_number("+14155550100")
        assert not is_valid_phone_number("0123")
        assert validate_phone_number(None) is None
        with pytest.raises(ContractValidationError) as exc_info:
            validate_phone_number("call me")
        assert exc_info.value.field == "phone_number"


class TestGenericRules:
    """Tests for required, length, payload and template rules."""

    def test_require_non_blank(self):
        """Test required strings."""
        assert require_non_blank(" evt_1 ", "event_id") == "evt_1"
        with pytest.raises(ContractValidationError, match="Event ID is required"):
            require_non_blank("", "event_id", label="Event ID")
        with pytest.raises(ContractValidationError, match="event_id is required"):
            require_non_blank(None, "event_id")

    def test_max_length(self):
        """Test maximum length."""
        assert validate_max_length(None, 3, "name") is None
        assert validate_max_length("abc", 3, "name") == "abc"
        with pytest.raises(ContractValidationError, match="Name cannot exceed 3 characters"):
            validate_max_length("abcd", 3, "name", label="Name")

    def test_payload_size(self):
        """Test payload size is the compact UTF-8 JSON length."""
        assert payload_size_bytes({"a": 1}) == len('{"a":1}')
        assert payload_size_bytes({"k": "é"}) == len('{"k":"é"}'.encode("utf-8"))

    def test_payload_required_and_limited(self):
        """Test payload presence and the 1 MiB limit."""
        assert validate_payload({}) == {}
        with pytest.raises(ContractValidationError, match="Payload is required"):
            validate_payload(None)
        with pytest.raises(ContractValidationError, match="exceeds maximum of 1048576 bytes"):
            validate_payload({"blob": "x" * 1_048_576})

    def test_payload_not_serializable(self):
        """Test payloads that cannot be encoded are rejected."""
        with pytest.raises(ContractValidationError, match="not JSON-serializable"):
            validate_payload({"handle": object()})

    def test_template_size(self):
        """Test templates up to 64 KiB are accepted."""
        assert validate_template_size("x" * 65_536) == "x" * 65_536
        with pytest.raises(ContractValidationError, match="Template size"):
            validate_template_size(b"x" * 65_537)
