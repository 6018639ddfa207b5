"""
Root test configuration and fixtures for the matchmaking project.

Note: sys.path manipulation is handled here to ensure imports work correctly.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Add project root to path to allow imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


@pytest.fixture(autouse=True)
def reset_config(monkeypatch):
    """Isolate every test from MATCHMAKING_* env vars and the cached loader."""
    from matchmaking.config import ConfigLoader, get_settings

    for var in (
        "MATCHMAKING_MAX_ATTEMPTS",
        "MATCHMAKING_MAX_STEPS_PER_ATTEMPT",
        "MATCHMAKING_RANDOM_SEED",
        "MATCHMAKING_MERGE_DUPLICATE_SUGGESTIONS",
        "MATCHMAKING_INCLUDE_FLOW_ANALYSIS",
        "MATCHMAKING_LOG_LEVEL",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(var, raising=False)

    get_settings.cache_clear()
    ConfigLoader.reset_instance()
    yield
    get_settings.cache_clear()
    ConfigLoader.reset_instance()
