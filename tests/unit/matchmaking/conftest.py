"""
Shared fixtures for matchmaking unit tests.

Factory helpers build small rosters by hand so each test states exactly
which avoids and preferences it depends on.
"""

from __future__ import annotations

import random
from collections.abc import Iterable

import pytest

from matchmaking.config import ConfigLoader
from matchmaking.models import Participant


def create_participant(
    participant_id: str,
    name: str | None = None,
    preferences: Iterable[str] = (),
    avoids: Iterable[str] = (),
) -> Participant:
    """Create a participant; the name defaults to the id."""
    return Participant(
        participant_id=participant_id,
        name=name if name is not None else participant_id,
        preferences=frozenset(preferences),
        avoids=frozenset(avoids),
    )


def build_roster(
    ids: Iterable[str],
    avoids: dict[str, Iterable[str]] | None = None,
    preferences: dict[str, Iterable[str]] | None = None,
) -> list[Participant]:
    """Create a roster from ids plus per-id avoid/preference lists."""
    avoids = avoids or {}
    preferences = preferences or {}
    return [
        create_participant(pid, preferences=preferences.get(pid, ()), avoids=avoids.get(pid, ()))
        for pid in ids
    ]


def make_config(**overrides) -> ConfigLoader:
    """ConfigLoader with dot-notation overrides, e.g. make_config(**{"search.max_attempts": 5})."""
    return ConfigLoader(overrides=overrides)


@pytest.fixture
def rng():
    """Seeded random source for reproducible searches."""
    return random.Random(42)


@pytest.fixture
def open_roster():
    """Six participants, no constraints."""
    return build_roster(["A", "B", "C", "D", "E", "F"])


@pytest.fixture
def starved_target_roster():
    """A, B, C with N=1: B and C both avoid A, so nobody can write about A."""
    return build_roster(["A", "B", "C"], avoids={"B": ["A"], "C": ["A"]})


@pytest.fixture
def hidden_conflict_roster():
    """A and B each have only C left, so both need C while C can take one writer at N=1.

    Passes every degree check but has no assignment.
    """
    return build_roster(["A", "B", "C", "D"], avoids={"A": ["B", "D"], "B": ["A", "D"]})
