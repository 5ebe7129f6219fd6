"""Settings loader: optional YAML file plus NOTIFICATION_* environment overrides."""

import os
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import yaml
from dotenv import dotenv_values
from pydantic import ValidationError

from notification_library.logging import get_logger

from .exceptions import ConfigurationError
from .models import NotificationSettings

logger = get_logger(__name__, component="config")

SETTINGS_PATH_ENV = "NOTIFICATION_SETTINGS_FILE"
DEFAULT_SETTINGS_FILES = ("notification.yaml", "config/notification.yaml")
DOTENV_FILE = ".env"

# Environment variable -> dotted settings path
ENV_OVERRIDES = {
    "NOTIFICATION_SERVICE_NAME": "service_name",
    "NOTIFICATION_ENVIRONMENT": "environment",
    "NOTIFICATION_LOG_LEVEL": "logging.level",
    "NOTIFICATION_LOG_FORMAT": "logging.format",
    "NOTIFICATION_RETRY_BASE_DELAY": "retry.base_delay",
    "NOTIFICATION_RETRY_MAX_DELAY": "retry.max_delay",
    "NOTIFICATION_RETRY_BACKOFF_MULTIPLIER": "retry.backoff_multiplier",
    "NOTIFICATION_MAX_RETRIES": "retry.default_max_retries",
    "NOTIFICATION_CRITICAL_MAX_RETRIES": "retry.critical_max_retries",
}


def load_settings(
    settings_path: Optional[Union[str, Path]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> NotificationSettings:
    """
    Load and validate library settings.

    File location fallback:
    1. Use settings_path if given (must exist)
    2. Use $NOTIFICATION_SETTINGS_FILE if set (must exist)
    3. Try notification.yaml, then config/notification.yaml
    4. Fall back to built-in defaults

    Environment overrides (see ENV_OVERRIDES) are applied on top of the file.
    When environ is not given, values from a local .env file are used
    wherever the process environment does not set them.

    Args:
        settings_path: Optional path to a YAML settings file
        environ: Environment mapping (defaults to .env merged under os.environ)

    Returns:
        Validated NotificationSettings

    Raises:
        ConfigurationError: If the file is unreadable or settings are invalid
    """
    environ = _process_environ() if environ is None else environ
    settings_file = _find_settings_file(settings_path, environ)

    data: Dict[str, Any] = {}
    if settings_file is not None:
        data = _read_yaml(settings_file)

    _apply_env_overrides(data, environ)

    try:
        settings = NotificationSettings.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(
            "Settings validation failed",
            errors=format_validation_errors(e),
            source=settings_file,
            suggestions=[
                "Check that durations look like '30s', '1m', '6h' or 'PT1M'",
                "Check that priority names are CRITICAL, HIGH, MEDIUM or LOW",
                "Verify field types match the expected schema",
            ],
        ) from e

    logger.info(
        "Settings loaded",
        extra={
            "event": "config.loaded",
            "settings_file": str(settings_file) if settings_file else None,
            "service_name": settings.service_name,
            "environment": settings.environment,
        },
    )
    return settings


def format_validation_errors(error: ValidationError) -> List[str]:
    """Convert pydantic validation errors into user-friendly messages."""
    messages = []
    for item in error.errors():
        field_path = " -> ".join(str(loc) for loc in item["loc"]) or "settings"
        error_type = item["type"]

        if error_type == "missing":
            messages.append(f"Missing required field: {field_path}")
        elif error_type.endswith("_type"):
            expected = error_type[: -len("_type")]
            messages.append(
                f"Invalid type for '{field_path}': expected {expected}, got {item.get('input')!r}"
            )
        else:
            messages.append(f"{field_path}: {item['msg']}")
    return messages


def _find_settings_file(
    settings_path: Optional[Union[str, Path]], environ: Mapping[str, str]
) -> Optional[Path]:
    explicit = settings_path or environ.get(SETTINGS_PATH_ENV)
    if explicit:
        path = Path(explicit)
        if not path.is_file():
            raise ConfigurationError(
                f"Settings file not found: {path}",
                source=path,
                suggestions=[
                    f"Ensure {path} exists and is readable",
                    f"Unset {SETTINGS_PATH_ENV} to use built-in defaults",
                ],
            )
        return path

    for candidate in DEFAULT_SETTINGS_FILES:
        path = Path(candidate)
        if path.is_file():
            return path

    return None


def _read_yaml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Failed to parse YAML settings: {e}",
            source=path,
            suggestions=[
                "Check YAML syntax in your settings file",
                "Ensure proper indentation (use spaces, not tabs)",
            ],
        ) from e
    except OSError as e:
        raise ConfigurationError(
            f"Failed to read settings file: {e}",
            source=path,
            suggestions=[f"Ensure {path} is readable", "Check file permissions"],
        ) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Settings file must contain a mapping at the top level: {path}",
            source=path,
            suggestions=["Start the file with keys such as 'service_name:' or 'retry:'"],
        )
    return data


def _apply_env_overrides(data: Dict[str, Any], environ: Mapping[str, str]) -> None:
    for env_name, dotted_path in ENV_OVERRIDES.items():
        value = environ.get(env_name)
        if value is None or not value.strip():
            continue

        target = data
        *parents, leaf = dotted_path.split(".")
        for parent in parents:
            section = target.get(parent)
            if not isinstance(section, dict):
                section = {}
                target[parent] = section
            target = section
        target[leaf] = value.strip()


def _process_environ(dotenv_path: Union[str, Path] = DOTENV_FILE) -> Dict[str, str]:
    values = {k: v for k, v in dotenv_values(dotenv_path).items() if v is not None}
    values.update(os.environ)
    return values
