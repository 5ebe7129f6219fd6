"""Platform-wide constants for notification processing.

Durations are timedelta values; sizes are in bytes.
"""

from datetime import timedelta

# Event stream topics (see constants.topics for the full catalogue)
TOPIC_NOTIFICATION_EVENTS = "notification-events"
TOPIC_NOTIFICATION_CREATED = "notification-created"
TOPIC_NOTIFICATION_DELIVERED = "notification-delivered"
TOPIC_NOTIFICATION_FAILED = "notification-failed"
TOPIC_NOTIFICATION_RETRY = "notification-retry"
TOPIC_DELIVERY_STATUS = "delivery-status-updates"

# Consumer groups
CONSUMER_GROUP_NOTIFICATION_SERVICE = "notification-service"
CONSUMER_GROUP_AUDIT_SERVICE = "audit-service"
CONSUMER_GROUP_ANALYTICS_SERVICE = "analytics-service"

# Message header keys
HEADER_CORRELATION_ID = "X-Correlation-ID"
HEADER_TRACE_ID = "X-Trace-ID"
HEADER_CUSTOMER_ID = "X-Customer-ID"
HEADER_EVENT_TYPE = "X-Event-Type"
HEADER_PRIORITY = "X-Priority"
HEADER_SOURCE_SERVICE = "X-Source-Service"
HEADER_RETRY_COUNT = "X-Retry-Count"
HEADER_MAX_RETRIES = "X-Max-Retries"

# Timeouts
DEFAULT_TIMEOUT = timedelta(seconds=30)
CRITICAL_TIMEOUT = timedelta(seconds=10)
HIGH_TIMEOUT = timedelta(seconds=30)
MEDIUM_TIMEOUT = timedelta(minutes=5)
LOW_TIMEOUT = timedelta(minutes=30)

# Retry
DEFAULT_MAX_RETRIES = 3
CRITICAL_MAX_RETRIES = 5
DEFAULT_RETRY_DELAY = timedelta(minutes=1)
MAX_RETRY_DELAY = timedelta(hours=6)
RETRY_BACKOFF_MULTIPLIER = 2.0

# Rate limiting (messages per minute)
DEFAULT_RATE_LIMIT_PER_MINUTE = 100
CRITICAL_RATE_LIMIT_PER_MINUTE = 1000

# Template variables
VAR_CUSTOMER_NAME = "customerName"
VAR_CUSTOMER_EMAIL = "customerEmail"
VAR_CUSTOMER_PHONE = "customerPhone"
VAR_TRANSACTION_AMOUNT = "transactionAmount"
VAR_TRANSACTION_DATE = "transactionDate"
VAR_MERCHANT_NAME = "merchantName"
VAR_ACCOUNT_NUMBER = "accountNumber"

# Validation limits
MIN_CUSTOMER_ID_LENGTH = 3
MAX_CUSTOMER_ID_LENGTH = 100
MAX_SOURCE_SERVICE_LENGTH = 100
MAX_PAYLOAD_SIZE_BYTES = 1_048_576
MAX_TEMPLATE_SIZE_BYTES = 65_536

# Defaults
DEFAULT_LANGUAGE = "en"
DEFAULT_TIMEZONE = "UTC"
DEFAULT_FROM_EMAIL = "noreply@company.com"
DEFAULT_CUSTOMER_NAME = "Valued Customer"
UNKNOWN_SOURCE_SERVICE = "unknown"
AGGREGATE_TYPE_NOTIFICATION = "Notification"

# Canonical per-priority delivery timeouts, keyed by priority name
PRIORITY_TIMEOUTS = {
    "CRITICAL": CRITICAL_TIMEOUT,
    "HIGH": HIGH_TIMEOUT,
    "MEDIUM": MEDIUM_TIMEOUT,
    "LOW": LOW_TIMEOUT,
}
