"""
Matchmaking - writing-target assignment for a group of participants.

This package contains:
- models: Domain models (Participant, GameConfig, Assignment, results)
- solver: Feasibility checks and randomized backtracking search
- conflict: Conflict analysis with actionable suggestions
- graph: Flow-capacity analysis of the allowed edges
- config_advisor: Safe preference/avoid caps for a roster size
- roster: Caller-side list editing helpers
"""

from matchmaking.config_advisor import suggest_config
from matchmaking.conflict import ConflictReport, Suggestion, SuggestionAction, analyze_conflicts
from matchmaking.engine import MatchmakingOutcome, run_matchmaking
from matchmaking.errors import (
    FailureKind,
    InvalidRosterError,
    ListLimitError,
    MatchmakingError,
    UnknownParticipantError,
)
from matchmaking.graph import max_assignable
from matchmaking.models import (
    Assignment,
    ConfigSuggestion,
    Failure,
    FeasibilityResult,
    GameConfig,
    Participant,
    SearchResult,
    SearchStatus,
)
from matchmaking.roster import apply_suggestion, apply_suggestions, normalize_participant, toggle_avoid, toggle_preference
from matchmaking.solver import (
    SearchLogger,
    assignments_by_writer,
    calculate_preference_stats,
    find_assignment,
    validate,
    verify_assignments,
)

__all__ = [
    "Assignment",
    "ConfigSuggestion",
    "ConflictReport",
    "Failure",
    "FailureKind",
    "FeasibilityResult",
    "GameConfig",
    "InvalidRosterError",
    "ListLimitError",
    "MatchmakingError",
    "MatchmakingOutcome",
    "Participant",
    "SearchLogger",
    "SearchResult",
    "SearchStatus",
    "Suggestion",
    "SuggestionAction",
    "UnknownParticipantError",
    "analyze_conflicts",
    "apply_suggestion",
    "apply_suggestions",
    "assignments_by_writer",
    "calculate_preference_stats",
    "find_assignment",
    "max_assignable",
    "normalize_participant",
    "run_matchmaking",
    "suggest_config",
    "toggle_avoid",
    "toggle_preference",
    "validate",
    "verify_assignments",
]
