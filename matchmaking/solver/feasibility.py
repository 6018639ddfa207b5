"""
Feasibility checking for the matchmaking search.

Pre-search degree checks that fail fast with the first violated condition.
They are necessary, not sufficient: a roster can pass every check here and
still have no assignment (see the conflict analyzer's flow capacity).
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from matchmaking.errors import FailureKind
from matchmaking.models import Failure, FeasibilityResult, Participant
from matchmaking.solver.context import ParticipantIndex, check_target_count

if TYPE_CHECKING:
    from matchmaking.solver.logging import SearchLogger

logger = logging.getLogger(__name__)

MIN_PARTICIPANTS = 2


def check_feasibility(
    index: ParticipantIndex,
    n: int,
    search_logger: SearchLogger | None = None,
) -> FeasibilityResult:
    """Run the degree checks in order against an indexed roster.

    Args:
        index: Indexed roster
        n: Targets per writer
        search_logger: Optional run logger that records the failure

    Returns:
        FeasibilityResult with the first violated condition, if any
    """
    failure = _first_failure(index, n)
    if failure is None:
        logger.debug(f"Feasibility checks passed for {len(index)} participants, N={n}")
        return FeasibilityResult.passed()

    if search_logger is not None:
        search_logger.log_feasibility_warning(failure.message)
    else:
        logger.warning(f"[FEASIBILITY] {failure.message}")
    return FeasibilityResult.failed(failure)


def _first_failure(index: ParticipantIndex, n: int) -> Failure | None:
    total = len(index)

    # 1. Degenerate input
    if total < MIN_PARTICIPANTS:
        return Failure(
            kind=FailureKind.INSUFFICIENT_PARTICIPANTS,
            message=f"Need at least {MIN_PARTICIPANTS} players, got {total}",
            available=total,
            required=MIN_PARTICIPANTS,
        )
    if n < 1:
        return Failure(
            kind=FailureKind.INVALID_TARGET_COUNT,
            message=f"N must be at least 1, got {n}",
            available=n,
            required=1,
        )

    # 2. Every writer needs N targets it does not avoid
    for writer_idx in range(total):
        available = index.writer_candidate_count(writer_idx)
        if available < n:
            p = index.get_participant(writer_idx)
            return Failure(
                kind=FailureKind.WRITER_STARVED,
                message=(
                    f"Player {p.display_name} ({p.participant_id}) has only {available} "
                    f"valid candidates but needs {n}"
                ),
                participant_id=p.participant_id,
                participant_name=p.display_name,
                available=available,
                required=n,
            )

    # 3. Every target needs N writers that do not avoid it
    for target_idx in range(total):
        available = index.target_candidate_count(target_idx)
        if available < n:
            p = index.get_participant(target_idx)
            avoided_by = total - 1 - available
            return Failure(
                kind=FailureKind.TARGET_STARVED,
                message=(
                    f"Player {p.display_name} ({p.participant_id}) is avoided by {avoided_by} player(s) "
                    f"and can only receive {available} assignment(s) but needs {n}"
                ),
                participant_id=p.participant_id,
                participant_name=p.display_name,
                available=available,
                required=n,
            )

    return None


def validate(participants: Sequence[Participant], n: int) -> FeasibilityResult:
    """Check the necessary degree conditions for a roster and target count."""
    n = check_target_count(n)
    return check_feasibility(ParticipantIndex.build(participants), n)
