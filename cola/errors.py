from __future__ import annotations

from typing import Optional


class ConfigError(Exception):
    """Errors that can be raised while loading a configuration record."""


class ConfigMissing(ConfigError):
    """The environment variable ``key`` is not set."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"The value {key} is missing")


class InvalidData(ConfigError):
    """The raw string ``value`` could not be converted to its target type."""

    def __init__(
        self, value: str, *, key: Optional[str] = None, field: Optional[str] = None
    ):
        self.value = value
        self.key = key
        self.field = field
        super().__init__(f"The data stored in {value} is invalid")


class SchemaError(ValueError):
    """Raised when a configuration schema cannot be compiled."""
