"""Unit tests for post-search solution analysis."""

from __future__ import annotations

from matchmaking.models import Assignment
from matchmaking.solver.solution import (
    assignments_by_target,
    assignments_by_writer,
    calculate_preference_stats,
    verify_assignments,
)

from ..conftest import build_roster


def edges(*pairs: str) -> list[Assignment]:
    """edges("AB", "BA") -> [A->B, B->A]"""
    return [Assignment(writer_id=p[0], target_id=p[1]) for p in pairs]


class TestVerifyAssignments:
    """verify_assignments reports every broken output invariant."""

    def test_valid_cycle(self):
        roster = build_roster(["A", "B", "C"])

        assert verify_assignments(roster, edges("AB", "BC", "CA"), 1) == []

    def test_self_assignment(self):
        roster = build_roster(["A", "B"])

        violations = verify_assignments(roster, edges("AA", "BB"), 1)

        assert "A is assigned to write about themselves" in violations
        assert "B is assigned to write about themselves" in violations

    def test_avoid_violation(self):
        roster = build_roster(["A", "B", "C"], avoids={"A": ["B"]})

        violations = verify_assignments(roster, edges("AB", "BC", "CA"), 1)

        assert violations == ["A is assigned B, who they avoid"]

    def test_duplicate_edge(self):
        roster = build_roster(["A", "B", "C"])

        violations = verify_assignments(roster, edges("AB", "AB", "BC", "CA"), 1)

        assert "Duplicate assignment A -> B" in violations
        assert "A writes 2 time(s), expected 1" in violations
        assert "B is written about 2 time(s), expected 1" in violations

    def test_missing_edges(self):
        roster = build_roster(["A", "B", "C"])

        violations = verify_assignments(roster, edges("AB", "BA"), 1)

        assert "C writes 0 time(s), expected 1" in violations
        assert "C is written about 0 time(s), expected 1" in violations

    def test_unknown_participant(self):
        roster = build_roster(["A", "B"])

        violations = verify_assignments(roster, edges("AB", "BA", "AZ"), 1)

        assert violations[0] == "Assignment A -> Z references an unknown participant"


class TestGrouping:
    """Edge lists grouped per writer and per target."""

    def test_by_writer_preserves_order(self):
        grouped = assignments_by_writer(edges("AB", "AC", "BA", "CA"))

        assert grouped == {"A": ["B", "C"], "B": ["A"], "C": ["A"]}

    def test_by_target(self):
        grouped = assignments_by_target(edges("AB", "AC", "BA", "CA"))

        assert grouped == {"B": ["A"], "C": ["A"], "A": ["B", "C"]}

    def test_empty(self):
        assert assignments_by_writer([]) == {}


class TestPreferenceStats:
    """Counting assignments that landed on a preferred target."""

    def test_counts_preferred_hits(self):
        roster = build_roster(["A", "B", "C"], preferences={"A": ["B"], "B": ["A"]})

        stats = calculate_preference_stats(roster, edges("AB", "BC", "CA"))

        assert stats["total"] == 3
        assert stats["preferred"] == 1
        assert stats["preferred_rate"] == 1 / 3
        assert stats["by_writer"] == {"A": 1, "B": 0, "C": 0}

    def test_avoided_preference_does_not_count(self):
        roster = build_roster(["A", "B"], preferences={"A": ["B"]}, avoids={"A": ["B"]})

        stats = calculate_preference_stats(roster, edges("AB"))

        assert stats["preferred"] == 0

    def test_no_assignments(self):
        stats = calculate_preference_stats(build_roster(["A", "B"]), [])

        assert stats["preferred_rate"] == 0.0
