"""Event stream topic catalogue.

Topic names are produced and consumed by collaborating services; this library
only defines them so every service agrees on the spelling.
"""

from enum import Enum
from typing import List

from pydantic import BaseModel, Field

RETENTION_MS_7_DAYS = 604_800_000
RETENTION_MS_30_DAYS = 2_592_000_000


class InputTopic(str, Enum):
    """Topics consumed by the notification service."""

    NOTIFICATION_EVENTS = "notification-events"
    USER_PREFERENCE_UPDATES = "user-preference-updates"
    TEMPLATE_UPDATES = "template-updates"
    CHANNEL_CONFIGURATION_UPDATES = "channel-configuration-updates"


class OutputTopic(str, Enum):
    """Topics produced by the notification service."""

    NOTIFICATION_CREATED = "notification-created"
    NOTIFICATION_PROCESSED = "notification-processed"
    NOTIFICATION_DELIVERED = "notification-delivered"
    NOTIFICATION_FAILED = "notification-failed"
    NOTIFICATION_RETRY = "notification-retry"
    DELIVERY_STATUS_UPDATES = "delivery-status-updates"


class DeadLetterTopic(str, Enum):
    """Dead-letter topics for unprocessable events and undeliverable messages."""

    NOTIFICATION_EVENTS_DLQ = "notification-events-dlq"
    DELIVERY_FAILURES_DLQ = "delivery-failures-dlq"


class CleanupPolicy(str, Enum):
    """Topic cleanup policies."""

    DELETE = "delete"
    COMPACT = "compact"


class TopicConfig(BaseModel):
    """Default creation settings for notification topics."""

    partitions: int = Field(10, ge=1, description="Number of partitions")
    replication_factor: int = Field(3, ge=1, description="Replication factor")
    cleanup_policy: CleanupPolicy = Field(CleanupPolicy.DELETE, description="Cleanup policy")
    retention_ms: int = Field(RETENTION_MS_7_DAYS, gt=0, description="Retention in milliseconds")

    model_config = {"frozen": True, "use_enum_values": True}

    def to_topic_properties(self) -> dict:
        """Render as broker topic properties (string values)."""
        return {
            "cleanup.policy": CleanupPolicy(self.cleanup_policy).value,
            "retention.ms": str(self.retention_ms),
        }


DEFAULT_TOPIC_CONFIG = TopicConfig()
LONG_RETENTION_TOPIC_CONFIG = TopicConfig(retention_ms=RETENTION_MS_30_DAYS)


def all_topic_names() -> List[str]:
    """Every topic name known to the platform, inputs first."""
    names: List[str] = []
    for topic_enum in (InputTopic, OutputTopic, DeadLetterTopic):
        names.extend(member.value for member in topic_enum)
    # notification-events appears as an input only once
    return list(dict.fromkeys(names))


def dead_letter_topic_for(topic: str) -> str:
    """Return the dead-letter topic that receives failures from `topic`.

    Inbound events that cannot be processed go to the events DLQ; everything
    produced downstream of delivery goes to the delivery-failures DLQ.
    """
    if topic in {member.value for member in InputTopic}:
        return DeadLetterTopic.NOTIFICATION_EVENTS_DLQ.value
    return DeadLetterTopic.DELIVERY_FAILURES_DLQ.value
