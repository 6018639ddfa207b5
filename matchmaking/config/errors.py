"""Configuration error classes.

All config-related exceptions for fast-fail behavior.
"""

from __future__ import annotations

from matchmaking.errors import MatchmakingError


class ConfigError(MatchmakingError):
    """Base exception for configuration errors."""

    pass


class ValidationError(ConfigError):
    """Raised when a config value fails validation."""

    pass


class UnknownKeyError(ConfigError):
    """Raised when an unknown config key is requested."""

    pass
