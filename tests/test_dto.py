"""Unit tests for request and response contracts."""

from datetime import timedelta

import pytest
from pydantic import ValidationError

from notification_library.domain import DeliveryAttempt
from notification_library.dto import (
    CreateNotificationRequest,
    DeliveryStatusResponse,
    NotificationEventDto,
    NotificationResponse,
    summarize_attempts,
)
from notification_library.enums import (
    ChannelType,
    NotificationEventType,
    NotificationPriority,
    NotificationStatus,
)
from notification_library.exceptions import ContractValidationError
from notification_library.utils import from_json, to_json
from notification_library.validation import validate_contract


def make_request(**overrides):
    fields = {
        "event_type": NotificationEventType.TRANSACTION_ALERT,
        "customer_id": "cust_123",
        "payload": {"customerName": "Ada", "transactionAmount": 125.5},
    }
    fields.update(overrides)
    return CreateNotificationRequest(**fields)


class TestCreateNotificationRequest:
    """Tests for CreateNotificationRequest."""

    def test_defaults(self):
        """Test priority defaults to MEDIUM and optionals to None."""
        request = make_request()

        assert request.priority is NotificationPriority.MEDIUM
        assert request.source_service is None
        assert request.scheduled_at is None
        assert request.metadata is None

    def test_null_priority_becomes_medium(self):
        """Test an explicit null priority falls back to MEDIUM."""
        assert make_request(priority=None).priority is NotificationPriority.MEDIUM

    @pytest.mark.parametrize("customer_id", ["ab", "bad id!", "", "x" * 101])
    def test_invalid_customer_id(self, customer_id):
        """Test customer id length and charset rules."""
        with pytest.raises(ValidationError):
            make_request(customer_id=customer_id)

    def test_customer_id_is_trimmed(self):
        """Test surrounding whitespace is removed from the customer id."""
        assert make_request(customer_id="  ab_12-XY ").customer_id == "ab_12-XY"

    def test_payload_required(self):
        """Test payload must be present."""
        with pytest.raises(ValidationError):
            make_request(payload=None)

    def test_payload_size_limit(self):
        """Test payloads over 1 MiB are rejected."""
        with pytest.raises(ValidationError, match="exceeds maximum"):
            make_request(payload={"blob": "x" * 1_048_576})

    def test_source_service_length(self):
        """Test source service is limited to 100 characters."""
        assert make_request(source_service="s" * 100).source_service == "s" * 100
        with pytest.raises(ValidationError, match="cannot exceed 100 characters"):
            make_request(source_service="s" * 101)

    def test_expires_must_follow_scheduled(self, fixed_now):
        """Test expires_at must be after scheduled_at."""
        with pytest.raises(ValidationError, match="expires_at must be after scheduled_at"):
            make_request(scheduled_at=fixed_now, expires_at=fixed_now - timedelta(minutes=1))

    def test_is_scheduled(self, fixed_now):
        """Test scheduling is relative to the reference time."""
        request = make_request(scheduled_at=fixed_now + timedelta(hours=1))

        assert request.is_scheduled(now=fixed_now)
        assert not request.is_scheduled(now=fixed_now + timedelta(hours=2))
        assert not make_request().is_scheduled()

    def test_is_expired(self, fixed_now):
        """Test expiry is relative to the reference time."""
        request = make_request(expires_at=fixed_now)

        assert request.is_expired(now=fixed_now)
        assert not request.is_expired(now=fixed_now - timedelta(seconds=1))

    def test_effective_source_service(self):
        """Test missing source service reads as 'unknown'."""
        assert make_request().effective_source_service() == "unknown"
        assert make_request(source_service="billing").effective_source_service() == "billing"

    def test_json_round_trip(self, fixed_now):
        """Test encode then decode yields an equal request."""
        request = make_request(
            priority=NotificationPriority.HIGH,
            source_service="payments",
            scheduled_at=fixed_now,
            expires_at=fixed_now + timedelta(days=1),
            metadata={"campaign": "q4"},
        )

        decoded = from_json(to_json(request), CreateNotificationRequest)

        assert decoded == request

    def test_wire_format(self, fixed_now):
        """Test camelCase keys, enum codes and wire timestamps."""
        wire = make_request(scheduled_at=fixed_now).to_wire()

        assert wire["eventType"] == "TRANSACTION_ALERT"
        assert wire["customerId"] == "cust_123"
        assert wire["priority"] == "MEDIUM"
        assert wire["scheduledAt"] == "2025-11-04T12:00:00.123Z"

    def test_unknown_event_type_rejected(self):
        """Test unknown event type codes fail validation."""
        with pytest.raises(ValidationError):
            CreateNotificationRequest.model_validate(
                {"eventType": "NOPE", "customerId": "cust_123", "payload": {}}
            )

    def test_validate_contract_collects_errors(self):
        """Test boundary validation reports each failing field."""
        with pytest.raises(ContractValidationError) as exc_info:
            validate_contract(CreateNotificationRequest, {"customerId": "ab", "payload": {}})

        error = exc_info.value
        assert len(error.errors) == 2
        assert "eventType" in str(error)
        assert "customerId" in str(error)


class TestNotificationEventDto:
    """Tests for NotificationEventDto."""

    def test_from_request_generates_ids(self):
        """Test ids are generated and source service falls back to 'unknown'."""
        dto = NotificationEventDto.from_request(make_request(metadata={"k": "v"}))

        assert dto.event_id.startswith("evt_")
        assert dto.correlation_id.startswith("corr_")
        assert dto.source_service == "unknown"
        assert dto.customer_id == "cust_123"
        assert dto.metadata == {"k": "v"}
        assert dto.timestamp.microsecond % 1000 == 0

    def test_from_request_keeps_given_ids(self):
        """Test explicit ids are used as given."""
        dto = NotificationEventDto.from_request(
            make_request(source_service="payments"),
            event_id="evt_fixed",
            correlation_id="corr_fixed",
            trace_id="trace-1",
        )

        assert dto.event_id == "evt_fixed"
        assert dto.correlation_id == "corr_fixed"
        assert dto.trace_id == "trace-1"
        assert dto.source_service == "payments"

    @pytest.mark.parametrize("field", ["event_id", "customer_id", "source_service"])
    def test_required_strings_not_blank(self, field):
        """Test identifiers must not be blank."""
        fields = {
            "event_id": "evt_1",
            "event_type": NotificationEventType.FRAUD_ALERT,
            "customer_id": "cust_1",
            "source_service": "fraud",
            "payload": {},
        }
        fields[field] = "  "
        with pytest.raises(ValidationError, match="is required"):
            NotificationEventDto(**fields)

    def test_equality_by_event_id(self):
        """Test identity is the event id."""
        a = NotificationEventDto.from_request(make_request(), event_id="evt_1")
        b = NotificationEventDto.from_request(make_request(customer_id="other_cust"), event_id="evt_1")
        c = NotificationEventDto.from_request(make_request(), event_id="evt_2")

        assert a == b
        assert hash(a) == hash(b)
        assert a != c

    def test_json_round_trip(self):
        """Test the event survives a JSON round trip."""
        dto = NotificationEventDto.from_request(make_request(), trace_id="trace-1")
        decoded = from_json(dto.to_wire_json(), NotificationEventDto)

        assert decoded == dto
        assert decoded.timestamp == dto.timestamp
        assert decoded.payload == dto.payload


class TestNotificationResponse:
    """Tests for NotificationResponse."""

    def test_delivered_at_requires_delivered_state(self, fixed_now):
        """Test delivered_at is only allowed for DELIVERED or READ."""
        NotificationResponse(status=NotificationStatus.DELIVERED, delivered_at=fixed_now)
        NotificationResponse(status=NotificationStatus.READ, delivered_at=fixed_now, read_at=fixed_now)
        with pytest.raises(ValidationError, match="delivered_at"):
            NotificationResponse(status=NotificationStatus.FAILED, delivered_at=fixed_now)

    def test_read_at_requires_read_state(self, fixed_now):
        """Test read_at is only allowed for READ."""
        with pytest.raises(ValidationError, match="read_at"):
            NotificationResponse(status=NotificationStatus.DELIVERED, read_at=fixed_now)

    def test_field_wise_equality(self, fixed_now):
        """Test responses compare by value."""
        a = NotificationResponse(id="notif_1", status=NotificationStatus.QUEUED, created_at=fixed_now)
        b = NotificationResponse(id="notif_1", status=NotificationStatus.QUEUED, created_at=fixed_now)

        assert a == b
        assert a != NotificationResponse(id="notif_1", status=NotificationStatus.PROCESSING, created_at=fixed_now)

    def test_status_helpers(self):
        """Test terminal and delivered helpers."""
        assert NotificationResponse(status=NotificationStatus.READ).is_delivered()
        assert NotificationResponse(status=NotificationStatus.EXPIRED).is_terminal()
        assert not NotificationResponse().is_terminal()


class TestDeliveryStatusResponse:
    """Tests for delivery status aggregation."""

    @pytest.fixture
    def attempts(self, fixed_now):
        t1 = fixed_now
        t2 = fixed_now + timedelta(minutes=1)
        return [
            DeliveryAttempt(
                attempt_number=1,
                channel_type=ChannelType.EMAIL,
                provider="SENDGRID",
                status=NotificationStatus.FAILED,
                attempted_at=t1,
                error_message="Mailbox unavailable",
                next_retry_at=t1 + timedelta(minutes=1),
            ),
            DeliveryAttempt(
                attempt_number=2,
                channel_type=ChannelType.EMAIL,
                provider="SENDGRID",
                status=NotificationStatus.DELIVERED,
                attempted_at=t2,
            ),
        ]

    def test_summary_from_attempts(self, attempts, fixed_now):
        """Test a failed then delivered attempt pair."""
        response = DeliveryStatusResponse.from_attempts(
            "notif_1", "cust_123", NotificationStatus.DELIVERED, attempts
        )

        assert response.total_attempts == 2
        assert response.successful_deliveries == 1
        assert response.failed_deliveries == 1
        assert response.last_attempt_at == fixed_now + timedelta(minutes=1)
        assert response.has_successful_delivery()
        assert response.has_failures()
        assert response.last_error == "Mailbox unavailable"

    def test_next_retry_is_earliest(self, fixed_now):
        """Test next_retry_at is the minimum over all attempts."""
        attempts = [
            DeliveryAttempt(
                attempt_number=n,
                channel_type=ChannelType.SMS,
                status=NotificationStatus.FAILED,
                attempted_at=fixed_now,
                next_retry_at=fixed_now + timedelta(minutes=minutes),
            )
            for n, minutes in [(1, 8), (2, 2), (3, 4)]
        ]
        response = DeliveryStatusResponse.from_attempts("notif_1", None, None, attempts)

        assert response.next_retry_at == fixed_now + timedelta(minutes=2)
        assert response.will_retry(now=fixed_now)
        assert not response.will_retry(now=fixed_now + timedelta(hours=1))

    def test_last_error_follows_list_order(self, fixed_now):
        """Test last_error comes from the last failed attempt in the list, not the latest in time."""
        later = DeliveryAttempt(
            attempt_number=2,
            channel_type=ChannelType.EMAIL,
            status=NotificationStatus.FAILED,
            attempted_at=fixed_now + timedelta(minutes=5),
            error_message="later failure",
        )
        earlier = DeliveryAttempt(
            attempt_number=1,
            channel_type=ChannelType.EMAIL,
            status=NotificationStatus.BOUNCED,
            attempted_at=fixed_now,
            error_message="earlier failure",
        )

        assert summarize_attempts([later, earlier]).last_error == "earlier failure"

    def test_last_error_none_when_last_failure_has_no_message(self, attempts, fixed_now):
        """Test a message-less last failure clears last_error."""
        silent = DeliveryAttempt(
            attempt_number=3,
            channel_type=ChannelType.EMAIL,
            status=NotificationStatus.FAILED,
            attempted_at=fixed_now + timedelta(minutes=2),
        )
        assert summarize_attempts(attempts + [silent]).last_error is None

    def test_empty_attempts_keep_given_values(self):
        """Test summary fields are taken as given without attempts."""
        response = DeliveryStatusResponse.model_validate(
            {"notificationId": "notif_1", "totalAttempts": 4, "failedDeliveries": 4, "lastError": "boom"}
        )

        assert response.total_attempts == 4
        assert response.failed_deliveries == 4
        assert response.last_error == "boom"
        assert not response.has_successful_delivery()
        assert not response.will_retry()

    def test_attempts_override_given_summary(self, attempts):
        """Test supplied summary values are replaced by the derived ones."""
        response = DeliveryStatusResponse(total_attempts=99, delivery_attempts=attempts)
        assert response.total_attempts == 2

    def test_with_attempts_recomputes(self, attempts):
        """Test replacing attempts recomputes the summary."""
        response = DeliveryStatusResponse.from_attempts(
            "notif_1", "cust_123", NotificationStatus.FAILED, attempts[:1]
        )
        updated = response.with_attempts(attempts)

        assert response.successful_deliveries == 0
        assert updated.successful_deliveries == 1
        assert updated.notification_id == "notif_1"

    def test_attempts_cannot_be_reassigned(self, attempts):
        """Test the attempt list and summary cannot drift apart through assignment."""
        response = DeliveryStatusResponse.from_attempts(
            "notif_1", "cust_123", NotificationStatus.FAILED, attempts[:1]
        )

        with pytest.raises(ValidationError):
            response.delivery_attempts = attempts
        with pytest.raises(ValidationError):
            response.total_attempts = 5

        assert response.total_attempts == 1
        assert response.successful_deliveries == 0
        assert response.with_attempts(attempts).total_attempts == 2
        assert updated.overall_status is NotificationStatus.FAILED

    def test_json_round_trip(self, attempts):
        """Test the response survives a JSON round trip."""
        response = DeliveryStatusResponse.from_attempts(
            "notif_1", "cust_123", NotificationStatus.DELIVERED, attempts
        )
        decoded = from_json(to_json(response), DeliveryStatusResponse)

        assert decoded == response
        assert decoded.to_wire()["lastError"] == "Mailbox unavailable"
