"""Identifier generation for notifications, events and correlation chains."""

import uuid

NOTIFICATION_ID_PREFIX = "notif_"
EVENT_ID_PREFIX = "evt_"
CORRELATION_ID_PREFIX = "corr_"


def generate_notification_id() -> str:
    """Return a new notification id: 'notif_' followed by 32 hex characters."""
    return NOTIFICATION_ID_PREFIX + uuid.uuid4().hex


def generate_event_id() -> str:
    """Return a new event id: 'evt_' followed by 32 hex characters."""
    return EVENT_ID_PREFIX + uuid.uuid4().hex


def generate_correlation_id() -> str:
    """Return a new correlation id: 'corr_' followed by a dashed UUID."""
    return CORRELATION_ID_PREFIX + str(uuid.uuid4())
