"""
Matchmaking Solver - randomized backtracking search for writing targets.

This package contains:
- ParticipantIndex: Integer-indexed roster snapshot shared by all passes
- check_feasibility / validate: Necessary degree checks run before search
- AssignmentSearch / find_assignment: Bounded-restart backtracking search
- SearchLogger: In-memory trace of a run
- Solution analysis: Post-search verification and grouping helpers
"""

from .context import ParticipantIndex, check_target_count
from .feasibility import MIN_PARTICIPANTS, check_feasibility, validate
from .logging import SearchLogger
from .search import AssignmentSearch, find_assignment
from .solution import (
    assignments_by_target,
    assignments_by_writer,
    calculate_preference_stats,
    verify_assignments,
)

__all__ = [
    "AssignmentSearch",
    "MIN_PARTICIPANTS",
    "ParticipantIndex",
    "SearchLogger",
    "check_feasibility",
    "check_target_count",
    "find_assignment",
    "validate",
    # Solution analysis functions
    "assignments_by_target",
    "assignments_by_writer",
    "calculate_preference_stats",
    "verify_assignments",
]
