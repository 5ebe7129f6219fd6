"""Shared data contracts for the notification platform.

Enumerations, value objects, request/response DTOs, domain events, validation
rules and helpers that producers and consumers of notification events agree
on. Import from the subpackages for anything not re-exported here.
"""

from .exceptions import (
    ContractValidationError,
    DeliveryFailedError,
    NotificationError,
    SerializationError,
    UnknownCodeError,
)

__version__ = "1.0.0"

__all__ = [
    "ContractValidationError",
    "DeliveryFailedError",
    "NotificationError",
    "SerializationError",
    "UnknownCodeError",
    "__version__",
]
