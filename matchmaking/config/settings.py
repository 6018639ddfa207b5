"""
Engine settings using pydantic-settings for type-safe configuration.

Values come from ``MATCHMAKING_*`` environment variables or a ``.env`` file,
with defaults suitable for an interactive admin "run matchmaking" button.
Settings are loaded once and cached.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class EngineSettings(BaseSettings):
    """Tunables for search effort and diagnostics."""

    model_config = SettingsConfigDict(
        env_prefix="MATCHMAKING_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # === Search ===
    max_attempts: int = Field(
        default=100,
        ge=1,
        description="Independent randomized attempts before reporting no solution",
    )
    max_steps_per_attempt: int = Field(
        default=50_000,
        ge=0,
        description="Tentative assignments per attempt before restarting (0 = unlimited)",
    )
    random_seed: int | None = Field(
        default=None,
        description="Seed for the default random source; unset means fresh randomness",
    )

    # === Conflict analysis ===
    merge_duplicate_suggestions: bool = Field(
        default=True,
        description="Collapse identical suggestions produced by different passes",
    )
    include_flow_analysis: bool = Field(
        default=True,
        description="Attach the max-flow assignable count to conflict reports",
    )

    # === Logging ===
    log_level: str = Field(
        default="INFO",
        description="TRACE, DEBUG, INFO or WARNING",
    )

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in {"TRACE", "DEBUG", "INFO", "WARNING"}:
            raise ValueError(f"Unsupported log level: {v}")
        return level


@lru_cache
def get_settings() -> EngineSettings:
    """Return the process-wide settings (cached)."""
    return EngineSettings()
