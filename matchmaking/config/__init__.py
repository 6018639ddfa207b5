"""
Configuration management for the matchmaking engine.

Usage:
    from matchmaking.config import ConfigLoader, ConfigError

    config = ConfigLoader.get_instance()
    attempts = config.get_int("search.max_attempts")
"""

from __future__ import annotations

from .errors import ConfigError, UnknownKeyError, ValidationError
from .loader import ConfigLoader
from .schema import CONFIG_SCHEMA, get_schema_key, validate_key
from .settings import EngineSettings, get_settings
from .types import ConfigKey, ConfigType

__all__ = [
    "ConfigLoader",
    "EngineSettings",
    "get_settings",
    # Error classes
    "ConfigError",
    "ValidationError",
    "UnknownKeyError",
    # Schema
    "CONFIG_SCHEMA",
    "ConfigKey",
    "ConfigType",
    "get_schema_key",
    "validate_key",
]
