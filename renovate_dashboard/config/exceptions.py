"""Errors raised while loading dashboard configuration."""

from typing import Any


class ConfigurationError(Exception):
    """Base class for configuration problems."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.details = details or {}


class ConfigurationFileError(ConfigurationError):
    """The configuration file is missing, unreadable or not a YAML mapping."""

    def __init__(self, message: str, file_path: str | None = None):
        super().__init__(message, {"file_path": file_path} if file_path else None)
        self.file_path = file_path


class ConfigurationValidationError(ConfigurationError):
    """The models rejected one or more configuration values.

    ``validation_errors`` holds Pydantic's error dicts. Errors without a field
    location, such as a missing environment variable, are reported under
    ``config``.
    """

    def __init__(
        self, message: str, validation_errors: list[dict[str, Any]] | None = None
    ):
        super().__init__(message)
        self.validation_errors = validation_errors or []

    def field_messages(self) -> list[str]:
        """One ``section.field: reason`` line per rejected value."""
        messages = []
        for error in self.validation_errors:
            location = ".".join(str(part) for part in error.get("loc", ()))
            messages.append(f"{location or 'config'}: {error.get('msg', 'invalid')}")
        return messages
