"""JSON (de)serialization of contract objects.

Contract models serialize with camelCase keys, enums by code and timestamps
as ``yyyy-MM-ddTHH:mm:ss.SSSZ``. Failures are logged and re-raised as
SerializationError with the codec error chained as the cause.
"""

import json
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Any, Dict, Mapping, Type, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from notification_library.exceptions import SerializationError
from notification_library.logging import get_logger

from .timestamps import format_wire_timestamp

logger = get_logger(__name__, component="serialization")

T = TypeVar("T")


def _default(value: Any) -> Any:
    """json.dumps fallback for values found inside plain mappings and lists."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    if isinstance(value, datetime):
        return format_wire_timestamp(value)
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, timedelta):
        return int(value.total_seconds() * 1000)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (set, frozenset)):
        return sorted(value, key=str)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def to_tree(obj: Any) -> Any:
    """Convert a contract object (or plain value) into JSON-compatible primitives."""
    if isinstance(obj, BaseModel):
        return obj.model_dump(mode="json", by_alias=True)
    return json.loads(to_json(obj))


def to_json(obj: Any, indent: int = None) -> str:
    """Serialize a contract model or plain value to a JSON string.

    Raises:
        SerializationError: If the value cannot be encoded
    """
    try:
        if isinstance(obj, BaseModel):
            return obj.model_dump_json(by_alias=True, indent=indent)
        return json.dumps(obj, default=_default, ensure_ascii=False, indent=indent)
    except (TypeError, ValueError, PydanticSerializationError) as e:
        logger.error(
            "Failed to serialize object to JSON",
            extra={"event": "json.serialize.failed", "object_type": type(obj).__name__},
            exc_info=True,
        )
        raise SerializationError("JSON serialization failed") from e


def from_json(json_text: Any, target: Type[T]) -> T:
    """Deserialize JSON text into `target` (a contract model or any pydantic-supported type).

    Raises:
        SerializationError: If the text is malformed or does not fit `target`
    """
    try:
        if isinstance(target, type) and issubclass(target, BaseModel):
            return target.model_validate_json(json_text)
        return TypeAdapter(target).validate_json(json_text)
    except (ValidationError, ValueError, TypeError) as e:
        logger.error(
            "Failed to deserialize JSON",
            extra={"event": "json.deserialize.failed", "target_type": getattr(target, "__name__", str(target))},
            exc_info=True,
        )
        raise SerializationError("JSON deserialization failed") from e


def from_tree(tree: Any, target: Type[T]) -> T:
    """Build `target` from already-parsed JSON primitives.

    Raises:
        SerializationError: If the tree does not fit `target`
    """
    try:
        if isinstance(target, type) and issubclass(target, BaseModel):
            return target.model_validate(tree)
        return TypeAdapter(target).validate_python(tree)
    except (ValidationError, ValueError, TypeError) as e:
        logger.error(
            "Failed to convert JSON tree",
            extra={"event": "json.convert.failed", "target_type": getattr(target, "__name__", str(target))},
            exc_info=True,
        )
        raise SerializationError("JSON conversion failed") from e


def parse_json(json_text: Any) -> Any:
    """Parse JSON text into a tree of dicts, lists and scalars.

    Raises:
        SerializationError: If the text is not valid JSON
    """
    try:
        return json.loads(json_text)
    except (TypeError, ValueError) as e:
        logger.error("Failed to parse JSON", extra={"event": "json.parse.failed"}, exc_info=True)
        raise SerializationError("JSON parsing failed") from e


def map_to_tree(mapping: Mapping[str, Any]) -> Dict[str, Any]:
    """Normalize a dynamic payload mapping into JSON-compatible primitives."""
    return to_tree(dict(mapping))


def pretty_print(obj: Any) -> str:
    """Indented JSON for diagnostics; falls back to str(obj) if encoding fails."""
    try:
        return to_json(obj, indent=2)
    except SerializationError:
        logger.warning(
            "Falling back to str() for pretty print",
            extra={"event": "json.pretty_print.fallback", "object_type": type(obj).__name__},
        )
        return str(obj)
