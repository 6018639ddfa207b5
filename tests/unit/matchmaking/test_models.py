"""Unit tests for domain models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from matchmaking.errors import FailureKind
from matchmaking.models import Failure, FeasibilityResult, GameConfig, Participant, SearchResult, SearchStatus


class TestParticipant:
    """Request lists are coerced to frozensets of ids."""

    def test_lists_coerced(self):
        p = Participant(participant_id="A", preferences=["B", "B", "C"], avoids=None)

        assert p.preferences == frozenset({"B", "C"})
        assert p.avoids == frozenset()

    def test_integer_ids_coerced(self):
        p = Participant(participant_id=1, name="one", avoids=[2], preferences=[3])

        assert p.participant_id == "1"
        assert p.avoids == frozenset({"2"})
        assert p.preferences == frozenset({"3"})

    def test_bool_id_rejected(self):
        with pytest.raises(ValidationError):
            Participant(participant_id=True)

    def test_single_string_is_one_id(self):
        p = Participant(participant_id="A", avoids="BC")

        assert p.avoids == frozenset({"BC"})

    def test_display_name_falls_back_to_id(self):
        assert Participant(participant_id="u1").display_name == "u1"
        assert Participant(participant_id="u1", name="Alice").display_name == "Alice"

    def test_effective_sets(self):
        p = Participant(participant_id="A", preferences=["A", "B", "C"], avoids=["A", "C"])

        assert p.effective_avoids == frozenset({"C"})
        assert p.effective_preferences == frozenset({"B"})

    def test_frozen(self):
        p = Participant(participant_id="A")

        with pytest.raises(ValidationError):
            p.name = "changed"


class TestGameConfig:
    """Defaults and bounds."""

    def test_defaults(self):
        config = GameConfig()

        assert config.targets_per_player == 2
        assert config.max_preferences == 10
        assert config.max_avoids == 5

    def test_targets_must_be_positive(self):
        with pytest.raises(ValidationError):
            GameConfig(targets_per_player=0)


class TestResults:
    """Result helpers."""

    def test_feasibility_constructors(self):
        failure = Failure(kind=FailureKind.WRITER_STARVED, message="m")

        assert FeasibilityResult.passed().ok is True
        assert FeasibilityResult.failed(failure).failure is failure

    def test_search_result_ok(self):
        assert SearchResult(status=SearchStatus.DONE).ok is True
        assert SearchResult(status=SearchStatus.FAILED).ok is False

    def test_failure_kind_groups(self):
        assert FailureKind.NO_SOLUTION_FOUND.is_invalid_input is False
        assert FailureKind.NO_SOLUTION_FOUND.is_structural is False
        assert FailureKind.WRITER_STARVED.is_structural is True
