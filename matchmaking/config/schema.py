"""Configuration schema registry.

Defines all valid configuration keys with their types and validation rules.
Unknown keys are rejected by the loader.
"""

from __future__ import annotations

from typing import Any

from .types import ConfigKey, ConfigType

CONFIG_SCHEMA: dict[str, ConfigKey] = {
    # =========================================================================
    # SEARCH
    # =========================================================================
    "search.max_attempts": ConfigKey(
        key="search.max_attempts",
        config_type=ConfigType.INT,
        setting="max_attempts",
        description="Number of independent randomized attempts before reporting no solution",
        min_value=1,
        max_value=10_000,
    ),
    "search.max_steps_per_attempt": ConfigKey(
        key="search.max_steps_per_attempt",
        config_type=ConfigType.INT,
        setting="max_steps_per_attempt",
        description="Tentative assignments allowed per attempt before restarting (0 = unlimited)",
        min_value=0,
    ),
    "search.random_seed": ConfigKey(
        key="search.random_seed",
        config_type=ConfigType.INT,
        setting="random_seed",
        nullable=True,
        description="Seed for the default random source (unset = fresh randomness per run)",
    ),
    # =========================================================================
    # CONFLICT ANALYSIS
    # =========================================================================
    "conflict.merge_duplicate_suggestions": ConfigKey(
        key="conflict.merge_duplicate_suggestions",
        config_type=ConfigType.BOOL,
        setting="merge_duplicate_suggestions",
        description="Collapse identical suggestions produced by different passes",
    ),
    "conflict.include_flow_analysis": ConfigKey(
        key="conflict.include_flow_analysis",
        config_type=ConfigType.BOOL,
        setting="include_flow_analysis",
        description="Attach the max-flow assignable count to conflict reports",
    ),
    # =========================================================================
    # LOGGING
    # =========================================================================
    "logging.level": ConfigKey(
        key="logging.level",
        config_type=ConfigType.STRING,
        setting="log_level",
        description="Log level name used by configure_logging",
        allowed_values=["TRACE", "DEBUG", "INFO", "WARNING"],
    ),
}


def get_schema_key(key: str) -> ConfigKey | None:
    """Get the schema definition for a config key, or None if unknown."""
    return CONFIG_SCHEMA.get(key)


def validate_key(key: str, value: Any) -> str | None:
    """
    Validate a value against its schema.

    Returns:
        None if valid, error message if invalid
    """
    schema = CONFIG_SCHEMA.get(key)
    if schema is None:
        return f"Unknown config key: {key}"
    return schema.validate(value)
