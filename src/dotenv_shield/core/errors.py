"""
Base exception classes for consistent error handling across dotenv-shield.
Distinguishes fatal input problems (empty source, missing or malformed schema)
from per-value conversion failures, which the validator accumulates.
"""

from typing import Any, Dict, Optional


class DotenvShieldError(Exception):
    """Base class for all dotenv-shield errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (details: {self.details})"
        return self.message


class ConfigurationError(DotenvShieldError):
    """Raised when the tool's own settings file is invalid."""

    pass


class EmptyInputError(DotenvShieldError):
    """Raised when a generation source contains no variables."""

    pass


class SchemaError(DotenvShieldError):
    """Base class for schema loading errors."""

    pass


class SchemaNotFoundError(SchemaError):
    """Raised when the schema file does not exist."""

    pass


class MalformedSchemaError(SchemaError):
    """Raised when the schema file is not valid JSON or lacks `properties`."""

    pass


class ConversionError(DotenvShieldError):
    """
    Raised when a raw string cannot be converted to its target type.

    Keeps the offending value and type so callers can compose their own messages.
    """

    def __init__(self, message: str, value: Any = None, target_type: str | None = None):
        super().__init__(message)
        self.value = value
        self.target_type = target_type
