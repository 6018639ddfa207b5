"""Failure kinds and exception classes.

Expected outcomes (starvation, no solution found) are reported as values
tagged with a FailureKind. Exceptions are reserved for malformed input and
misuse of the roster editing helpers.
"""

from __future__ import annotations

from enum import Enum


class FailureKind(str, Enum):
    """Why a matchmaking request could not be satisfied."""

    INSUFFICIENT_PARTICIPANTS = "insufficient_participants"
    INVALID_TARGET_COUNT = "invalid_target_count"
    WRITER_STARVED = "writer_starved"
    TARGET_STARVED = "target_starved"
    NO_SOLUTION_FOUND = "no_solution_found"

    @property
    def is_invalid_input(self) -> bool:
        """True for failures rejected before any search (never retried)."""
        return self in (FailureKind.INSUFFICIENT_PARTICIPANTS, FailureKind.INVALID_TARGET_COUNT)

    @property
    def is_structural(self) -> bool:
        """True for degree-bound violations the conflict analyzer can explain."""
        return self in (FailureKind.WRITER_STARVED, FailureKind.TARGET_STARVED)


class MatchmakingError(Exception):
    """Base exception for matchmaking programming errors."""

    pass


class InvalidRosterError(MatchmakingError):
    """Raised when the roster or target count is malformed (duplicate ids, bad types)."""

    pass


class UnknownParticipantError(MatchmakingError):
    """Raised when an operation names a participant that is not on the roster."""

    pass


class ListLimitError(MatchmakingError):
    """Raised when a preference or avoid list would exceed its configured cap."""

    def __init__(self, list_name: str, limit: int):
        self.list_name = list_name
        self.limit = limit
        super().__init__(f"You can only select up to {limit} {list_name}. Please remove one first.")
