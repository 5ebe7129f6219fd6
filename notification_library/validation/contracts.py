"""Boundary validation of whole contract objects."""

from typing import Any, Mapping, Type, TypeVar

from pydantic import BaseModel, ValidationError

from notification_library.config.loader import format_validation_errors
from notification_library.exceptions import ContractValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


def validate_contract(model_cls: Type[ModelT], data: Mapping[str, Any]) -> ModelT:
    """Build a contract model from raw data, collecting every field error.

    Args:
        model_cls: Contract model class to build
        data: Raw mapping (wire keys or attribute names)

    Returns:
        Validated model instance

    Raises:
        ContractValidationError: With one message per failing field
    """
    try:
        return model_cls.model_validate(data)
    except ValidationError as e:
        errors = format_validation_errors(e)
        first_field = None
        if e.errors() and e.errors()[0]["loc"]:
            first_field = str(e.errors()[0]["loc"][0])
        raise ContractValidationError(
            f"{model_cls.__name__} validation failed", field=first_field, errors=errors
        ) from e
