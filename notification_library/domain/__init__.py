"""Contract base model and value objects."""

from .base import ContractModel, WireTimestamp
from .models import CustomerInfo, DeliveryAttempt

__all__ = ["ContractModel", "WireTimestamp", "CustomerInfo", "DeliveryAttempt"]
