"""Tests for logging context propagation."""

import asyncio

import pytest

from notification_library.dto import CreateNotificationRequest, NotificationEventDto
from notification_library.enums import NotificationEventType
from notification_library.events import NotificationCreatedEvent
from notification_library.logging import (
    clear_log_context,
    event_log_context,
    get_log_context,
    log_context,
    pop_log_context,
    push_log_context,
)


@pytest.fixture(autouse=True)
def _clean_context(clean_log_context):
    yield


def test_empty_context():
    """Test that context starts empty."""
    assert get_log_context() == {}


def test_push_and_pop():
    """Test pushing fields and restoring the previous state."""
    token = push_log_context(correlation_id="corr_1", notification_id="notif_1")
    assert get_log_context() == {"correlation_id": "corr_1", "notification_id": "notif_1"}

    pop_log_context(token)
    assert get_log_context() == {}


def test_nested_context():
    """Test nested pushes and pops restore each layer."""
    token1 = push_log_context(correlation_id="corr_1")
    token2 = push_log_context(event_id="evt_1")
    assert get_log_context() == {"correlation_id": "corr_1", "event_id": "evt_1"}

    pop_log_context(token2)
    assert get_log_context() == {"correlation_id": "corr_1"}

    pop_log_context(token1)
    assert get_log_context() == {}


def test_context_override():
    """Test pushing the same key overwrites and pop restores."""
    token1 = push_log_context(correlation_id="corr_1")
    token2 = push_log_context(correlation_id="corr_2")
    assert get_log_context() == {"correlation_id": "corr_2"}

    pop_log_context(token2)
    assert get_log_context() == {"correlation_id": "corr_1"}
    pop_log_context(token1)


def test_get_log_context_returns_copy():
    """Test mutating the returned dict does not change the context."""
    with log_context(correlation_id="corr_1"):
        context = get_log_context()
        context["injected"] = True
        assert get_log_context() == {"correlation_id": "corr_1"}


def test_context_manager_restores_on_error():
    """Test log_context unwinds when the block raises."""
    with pytest.raises(RuntimeError):
        with log_context(notification_id="notif_1"):
            raise RuntimeError("boom")

    assert get_log_context() == {}


def test_clear_log_context():
    """Test clear removes everything."""
    push_log_context(correlation_id="corr_1")
    clear_log_context()
    assert get_log_context() == {}


def test_context_isolated_between_tasks():
    """Test concurrent tasks see only their own context."""

    async def worker(correlation_id):
        with log_context(correlation_id=correlation_id):
            await asyncio.sleep(0)
            return get_log_context()["correlation_id"]

    async def main():
        return await asyncio.gather(worker("corr_a"), worker("corr_b"))

    assert asyncio.run(main()) == ["corr_a", "corr_b"]


def test_none_values_are_skipped():
    """Test pushing None leaves the field unset."""
    with log_context(correlation_id="corr_1", trace_id=None):
        assert get_log_context() == {"correlation_id": "corr_1"}


def test_event_log_context_from_dto():
    """Test identifiers are lifted from an event DTO."""
    request = CreateNotificationRequest(
        event_type=NotificationEventType.STATEMENT_READY, customer_id="cust_123", payload={}
    )
    dto = NotificationEventDto.from_request(request, event_id="evt_1", correlation_id="corr_1")

    with event_log_context(dto, component="publisher"):
        assert get_log_context() == {
            "event_id": "evt_1",
            "correlation_id": "corr_1",
            "customer_id": "cust_123",
            "component": "publisher",
        }

    assert get_log_context() == {}


def test_event_log_context_from_domain_event():
    """Test domain events contribute their notification id."""
    event = NotificationCreatedEvent(aggregate_id="notif_1", correlation_id="corr_1")

    with event_log_context(event):
        context = get_log_context()

    assert context["notification_id"] == "notif_1"
    assert context["event_id"] == event.event_id
    assert context["correlation_id"] == "corr_1"
