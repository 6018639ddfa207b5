"""
ConfigLoader - typed, fast-fail access to engine configuration.

Reads dot-notation keys from the schema registry, backed by EngineSettings
plus explicit overrides. Unknown keys and invalid values raise immediately.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from .errors import UnknownKeyError, ValidationError
from .schema import CONFIG_SCHEMA
from .settings import EngineSettings, get_settings

logger = logging.getLogger(__name__)


class ConfigLoader:
    """
    Configuration loader with fast-fail behavior.

    Usage:
        loader = ConfigLoader.get_instance()
        attempts = loader.get_int("search.max_attempts")

        # Test substitution
        with ConfigLoader.use(ConfigLoader(overrides={"search.max_attempts": 5})):
            ...
    """

    _instance: ConfigLoader | None = None

    def __init__(
        self,
        settings: EngineSettings | None = None,
        overrides: dict[str, Any] | None = None,
    ):
        self._settings = settings or get_settings()
        self._overrides: dict[str, Any] = {}
        for key, value in (overrides or {}).items():
            self.set_override(key, value)

    @classmethod
    def get_instance(cls) -> ConfigLoader:
        """Get the shared loader, creating it from cached settings on first use."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Drop the shared loader so the next access rebuilds it."""
        cls._instance = None

    @classmethod
    @contextmanager
    def use(cls, loader: ConfigLoader) -> Iterator[ConfigLoader]:
        """Temporarily replace the shared loader."""
        previous = cls._instance
        cls._instance = loader
        try:
            yield loader
        finally:
            cls._instance = previous

    @property
    def settings(self) -> EngineSettings:
        """Settings with overrides applied."""
        if not self._overrides:
            return self._settings
        updates = {CONFIG_SCHEMA[key].setting: value for key, value in self._overrides.items()}
        return self._settings.model_copy(update=updates)

    def set_override(self, key: str, value: Any) -> None:
        """Override a single key, validating it against the schema."""
        schema = CONFIG_SCHEMA.get(key)
        if schema is None:
            raise UnknownKeyError(f"Unknown config key: {key}")
        error = schema.validate(value)
        if error:
            raise ValidationError(f"Invalid value for {key}: {error}")
        self._overrides[key] = value
        logger.debug(f"Config override {key}={value!r}")

    def get(self, key: str) -> Any:
        """Get a raw value for a known key."""
        schema = CONFIG_SCHEMA.get(key)
        if schema is None:
            raise UnknownKeyError(f"Unknown config key: {key}")
        if key in self._overrides:
            return self._overrides[key]
        value = getattr(self._settings, schema.setting)
        error = schema.validate(value)
        if error:
            raise ValidationError(f"Invalid value for {key}: {error}")
        return value

    def get_int(self, key: str) -> int:
        return int(self.get(key))

    def get_bool(self, key: str) -> bool:
        value = self.get(key)
        if isinstance(value, bool):
            return value
        return str(value).lower() in ("true", "1", "yes", "on")

    def get_str(self, key: str) -> str:
        value = self.get(key)
        return "" if value is None else str(value)
