"""Configuration type definitions.

Defines the schema for configuration keys including types and validation rules.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any


class ConfigType(Enum):
    """Supported configuration value types."""

    INT = "int"
    BOOL = "bool"
    STRING = "string"


@dataclass
class ConfigKey:
    """
    Definition of a configuration key with validation rules.

    Attributes:
        key: The dot-notation config key (e.g., "search.max_attempts")
        config_type: The expected type of the value
        setting: Name of the EngineSettings field backing this key
        description: Human-readable description
        min_value: Minimum allowed value (for integer types)
        max_value: Maximum allowed value (for integer types)
        allowed_values: List of allowed values (for string/enum types)
        validator: Custom validation function returning True if valid
        nullable: If True, None is an accepted value
    """

    key: str
    config_type: ConfigType
    setting: str
    nullable: bool = False
    description: str = ""
    min_value: int | None = None
    max_value: int | None = None
    allowed_values: list[Any] | None = None
    validator: Callable[[Any], bool] | None = None

    def validate(self, value: Any) -> str | None:
        """
        Validate a value against this key's rules.

        Returns:
            None if valid, error message string if invalid
        """
        if value is None:
            return None if self.nullable else "Value is required"

        if self.config_type == ConfigType.INT and (isinstance(value, bool) or not isinstance(value, int)):
            return f"Value {value!r} is not an integer"
        if self.config_type == ConfigType.BOOL and not isinstance(value, bool):
            return f"Value {value!r} is not a boolean"

        if self.config_type == ConfigType.INT:
            if self.min_value is not None and value < self.min_value:
                return f"Value {value} below minimum {self.min_value}"
            if self.max_value is not None and value > self.max_value:
                return f"Value {value} above maximum {self.max_value}"

        if self.allowed_values is not None and value not in self.allowed_values:
            return f"Value {value} not in allowed values {self.allowed_values}"

        if self.validator is not None and not self.validator(value):
            return f"Value {value} failed custom validation"

        return None
