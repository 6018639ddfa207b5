"""Unit tests for the indexed roster snapshot."""

from __future__ import annotations

import pytest

from matchmaking.errors import InvalidRosterError
from matchmaking.solver.context import ParticipantIndex, check_target_count

from ..conftest import build_roster


class TestParticipantIndexBuild:
    """Indexing normalizes the request lists once."""

    def test_indexes_in_roster_order(self):
        index = ParticipantIndex.build(build_roster(["C", "A", "B"]))

        assert index.ids == ["C", "A", "B"]
        assert index.idx_map == {"C": 0, "A": 1, "B": 2}
        assert len(index) == 3

    def test_duplicate_id_raises(self):
        with pytest.raises(InvalidRosterError):
            ParticipantIndex.build(build_roster(["A", "B", "B"]))

    def test_self_and_unknown_references_dropped(self):
        roster = build_roster(["A", "B"], avoids={"A": ["A", "Z"]}, preferences={"B": ["B"]})

        index = ParticipantIndex.build(roster)

        assert index.avoids[0] == frozenset()
        assert index.preferences[1] == frozenset()
        assert index.dropped_references == 3

    def test_avoid_wins_over_preference(self):
        roster = build_roster(["A", "B", "C"], avoids={"A": ["B"]}, preferences={"A": ["B", "C"]})

        index = ParticipantIndex.build(roster)

        assert index.avoids[0] == frozenset({1})
        assert index.preferences[0] == frozenset({2})

    def test_excluded_by_is_reverse_of_avoids(self):
        roster = build_roster(["A", "B", "C"], avoids={"B": ["A"], "C": ["A", "B"]})

        index = ParticipantIndex.build(roster)

        assert index.excluded_by[0] == frozenset({1, 2})
        assert index.excluded_by[1] == frozenset({2})
        assert index.excluded_by[2] == frozenset()


class TestCandidateQueries:
    """Candidate counts and lists used by every pass."""

    def test_counts(self):
        index = ParticipantIndex.build(build_roster(["A", "B", "C", "D"], avoids={"A": ["B"], "C": ["B"]}))

        assert index.writer_candidate_count(0) == 2
        assert index.target_candidate_count(1) == 1
        assert index.target_candidate_count(0) == 3

    def test_valid_targets_and_writers(self):
        index = ParticipantIndex.build(build_roster(["A", "B", "C", "D"], avoids={"A": ["B"], "C": ["B"]}))

        assert index.valid_targets(0) == [2, 3]
        assert index.valid_writers(1) == [3]


class TestCheckTargetCount:
    """Only real integers are accepted."""

    @pytest.mark.parametrize("value", [0, 1, 7, -1])
    def test_integers_pass_through(self, value):
        assert check_target_count(value) == value

    @pytest.mark.parametrize("value", [1.0, "1", None, False])
    def test_non_integers_raise(self, value):
        with pytest.raises(InvalidRosterError):
            check_target_count(value)
