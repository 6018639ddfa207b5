"""
Matchmaking engine entry points.

The four pure operations (validate, find_assignment, analyze_conflicts,
suggest_config) plus run_matchmaking, which chains them the way an admin
"run matchmaking" action does: search, and on failure explain why.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel, Field

from matchmaking.config import ConfigLoader
from matchmaking.config_advisor import suggest_config
from matchmaking.conflict import ConflictReport, analyze_conflicts
from matchmaking.models import Assignment, Failure, Participant
from matchmaking.solver import SearchLogger, find_assignment, validate
from matchmaking.solver.solution import assignments_by_writer

logger = logging.getLogger(__name__)

__all__ = [
    "MatchmakingOutcome",
    "analyze_conflicts",
    "find_assignment",
    "run_matchmaking",
    "suggest_config",
    "validate",
]


class MatchmakingOutcome(BaseModel):
    """Everything an operator needs after pressing "run matchmaking"."""

    ok: bool
    assignments: list[Assignment] = Field(default_factory=list)
    failure: Failure | None = None
    report: ConflictReport | None = None  # only on failure
    search_summary: dict[str, Any] = Field(default_factory=dict)

    @property
    def targets_by_writer(self) -> dict[str, list[str]]:
        """Assigned target ids per writer, the shape stored per player."""
        return assignments_by_writer(self.assignments)


def run_matchmaking(
    participants: Sequence[Participant],
    n: int,
    rng: random.Random | None = None,
    config: ConfigLoader | None = None,
    debug: bool = False,
) -> MatchmakingOutcome:
    """Search for assignments; on failure attach a conflict report.

    Args:
        participants: Roster snapshot
        n: Targets per writer
        rng: Optional seeded random source
        config: Config loader (defaults to the shared instance)
        debug: Log search progress at DEBUG

    Returns:
        MatchmakingOutcome with assignments, or failure plus report
    """
    search_logger = SearchLogger(debug_mode=debug)
    result = find_assignment(participants, n, rng=rng, config=config, search_logger=search_logger)
    summary = search_logger.get_summary()

    if result.ok:
        return MatchmakingOutcome(ok=True, assignments=result.assignments, search_summary=summary)

    failure = result.failure
    logger.warning(f"Matchmaking failed: {failure.message if failure else 'unknown reason'}")
    report = analyze_conflicts(participants, n, config=config)
    return MatchmakingOutcome(ok=False, failure=failure, report=report, search_summary=summary)
