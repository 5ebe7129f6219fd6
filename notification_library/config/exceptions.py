"""Errors raised while loading library settings."""

from pathlib import Path
from typing import List, Optional

from notification_library.exceptions import NotificationError, format_itemised


class ConfigurationError(NotificationError):
    """Settings could not be loaded: missing or unreadable file, bad YAML, or invalid values.

    str() lists every collected error followed by suggestions for fixing them.
    """

    default_error_code = "CONFIGURATION_ERROR"

    def __init__(
        self,
        message: str,
        errors: Optional[List[str]] = None,
        suggestions: Optional[List[str]] = None,
        source: Optional[Path] = None,
    ):
        self.errors = list(errors or [])
        self.suggestions = list(suggestions or [])
        # Settings file involved, when there is one
        self.source = source
        super().__init__(message)

    def __str__(self) -> str:
        return format_itemised(self.message, self.errors, self.suggestions)

    def add_error(self, error: str) -> None:
        self.errors.append(error)

    def add_suggestion(self, suggestion: str) -> None:
        self.suggestions.append(suggestion)
