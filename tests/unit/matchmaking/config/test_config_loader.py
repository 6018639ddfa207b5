"""Unit tests for engine configuration.

Tests the fast-fail configuration stack:
- EngineSettings reads MATCHMAKING_* env vars
- Schema keys validate type and range
- ConfigLoader rejects unknown keys and bad overrides
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError as PydanticValidationError

from matchmaking.config import (
    CONFIG_SCHEMA,
    ConfigError,
    ConfigLoader,
    ConfigType,
    EngineSettings,
    UnknownKeyError,
    ValidationError,
    get_settings,
    validate_key,
)


class TestEngineSettings:
    """pydantic-settings backed defaults and env overrides."""

    def test_defaults(self):
        settings = EngineSettings()

        assert settings.max_attempts == 100
        assert settings.max_steps_per_attempt == 50_000
        assert settings.random_seed is None
        assert settings.merge_duplicate_suggestions is True
        assert settings.include_flow_analysis is True
        assert settings.log_level == "INFO"

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("MATCHMAKING_MAX_ATTEMPTS", "7")
        monkeypatch.setenv("MATCHMAKING_RANDOM_SEED", "11")
        monkeypatch.setenv("MATCHMAKING_LOG_LEVEL", "debug")

        settings = EngineSettings()

        assert settings.max_attempts == 7
        assert settings.random_seed == 11
        assert settings.log_level == "DEBUG"

    def test_invalid_env_value_rejected(self, monkeypatch):
        monkeypatch.setenv("MATCHMAKING_MAX_ATTEMPTS", "0")

        with pytest.raises(PydanticValidationError):
            EngineSettings()

    def test_unknown_log_level_rejected(self):
        with pytest.raises(PydanticValidationError):
            EngineSettings(log_level="VERBOSE")

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()


class TestSchema:
    """Schema keys validate values."""

    def test_every_key_maps_to_a_setting(self):
        fields = EngineSettings.model_fields
        for key, schema in CONFIG_SCHEMA.items():
            assert schema.key == key
            assert schema.setting in fields

    def test_every_config_type_is_used(self):
        used = {schema.config_type for schema in CONFIG_SCHEMA.values()}

        assert used == set(ConfigType)

    def test_int_range(self):
        assert validate_key("search.max_attempts", 5) is None
        assert "below minimum" in validate_key("search.max_attempts", 0)
        assert "above maximum" in validate_key("search.max_attempts", 10_001)

    def test_int_rejects_bool_and_str(self):
        assert "not an integer" in validate_key("search.max_attempts", True)
        assert "not an integer" in validate_key("search.max_attempts", "5")

    def test_nullable_seed(self):
        assert validate_key("search.random_seed", None) is None
        assert validate_key("search.max_attempts", None) == "Value is required"

    def test_allowed_values(self):
        assert validate_key("logging.level", "TRACE") is None
        assert "not in allowed values" in validate_key("logging.level", "LOUD")

    def test_unknown_key(self):
        assert validate_key("search.nope", 1) == "Unknown config key: search.nope"


class TestConfigLoader:
    """Typed access over settings plus overrides."""

    def test_reads_settings(self):
        loader = ConfigLoader(settings=EngineSettings(max_attempts=12))

        assert loader.get_int("search.max_attempts") == 12
        assert loader.get_bool("conflict.merge_duplicate_suggestions") is True
        assert loader.get_str("logging.level") == "INFO"
        assert loader.get("search.random_seed") is None

    def test_overrides_win(self):
        loader = ConfigLoader(overrides={"search.max_attempts": 3})

        assert loader.get_int("search.max_attempts") == 3
        assert loader.settings.max_attempts == 3

    def test_unknown_key_raises(self):
        loader = ConfigLoader()

        with pytest.raises(UnknownKeyError):
            loader.get("search.unknown")
        with pytest.raises(ConfigError):
            loader.set_override("search.unknown", 1)

    def test_invalid_override_raises(self):
        with pytest.raises(ValidationError, match="search.max_steps_per_attempt"):
            ConfigLoader(overrides={"search.max_steps_per_attempt": -1})

    def test_shared_instance_and_substitution(self):
        shared = ConfigLoader.get_instance()
        assert ConfigLoader.get_instance() is shared

        replacement = ConfigLoader(overrides={"search.max_attempts": 2})
        with ConfigLoader.use(replacement):
            assert ConfigLoader.get_instance() is replacement

        assert ConfigLoader.get_instance() is shared

    def test_shared_instance_picks_up_env(self, monkeypatch):
        monkeypatch.setenv("MATCHMAKING_MAX_STEPS_PER_ATTEMPT", "0")
        get_settings.cache_clear()
        ConfigLoader.reset_instance()

        assert ConfigLoader.get_instance().get_int("search.max_steps_per_attempt") == 0
