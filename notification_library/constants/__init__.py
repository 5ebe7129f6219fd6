"""Shared constants: timeouts, retry policy defaults, limits, header keys and topics."""

from . import notification as notification_constants
from .topics import (
    DEFAULT_TOPIC_CONFIG,
    LONG_RETENTION_TOPIC_CONFIG,
    RETENTION_MS_30_DAYS,
    RETENTION_MS_7_DAYS,
    CleanupPolicy,
    DeadLetterTopic,
    InputTopic,
    OutputTopic,
    TopicConfig,
    all_topic_names,
    dead_letter_topic_for,
)

__all__ = [
    "notification_constants",
    # Topics
    "InputTopic",
    "OutputTopic",
    "DeadLetterTopic",
    "CleanupPolicy",
    "TopicConfig",
    "DEFAULT_TOPIC_CONFIG",
    "LONG_RETENTION_TOPIC_CONFIG",
    "RETENTION_MS_7_DAYS",
    "RETENTION_MS_30_DAYS",
    "all_topic_names",
    "dead_letter_topic_for",
]
