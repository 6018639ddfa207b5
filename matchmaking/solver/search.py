"""
Randomized backtracking search for writer -> target assignments.

Each attempt shuffles the writer order, then fills writers one at a time.
A writer's candidates are computed once when the search reaches that writer:
every other participant it does not avoid who still has room for incoming
assignments, preferred candidates (shuffled) ahead of neutral ones
(shuffled). The writer's N targets are chosen as a combination over that
ordered list, so the same target set is never retried in a different order.

Before any attempt, a max-flow bound over the allowed edges rules out
rosters that have no complete assignment at all, so only solvable rosters
reach the backtracking.

After each writer is complete the search checks that every target's
remaining deficit can still be covered by the writers left in the order,
and backtracks early if not.

Attempts are bounded in number and, optionally, in tentative assignments
per attempt, so a run always terminates.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence

from matchmaking.config import ConfigLoader
from matchmaking.errors import FailureKind, MatchmakingError
from matchmaking.logging_config import TRACE
from matchmaking.models import Assignment, Failure, Participant, SearchResult, SearchStatus
from matchmaking.solver.context import ParticipantIndex, check_target_count
from matchmaking.solver.feasibility import check_feasibility
from matchmaking.solver.logging import SearchLogger
from matchmaking.solver.solution import calculate_preference_stats, verify_assignments

logger = logging.getLogger(__name__)


class AttemptBudgetExceeded(Exception):
    """Internal signal: the current attempt used up its step budget."""

    pass


class AssignmentSearch:
    """Bounded-restart backtracking search over an indexed roster."""

    def __init__(
        self,
        index: ParticipantIndex,
        n: int,
        rng: random.Random | None = None,
        max_attempts: int = 100,
        max_steps_per_attempt: int = 0,
        search_logger: SearchLogger | None = None,
    ):
        self.index = index
        self.n = n
        self.rng = rng or random.Random()
        self.max_attempts = max_attempts
        self.max_steps_per_attempt = max_steps_per_attempt
        self.search_logger = search_logger or SearchLogger()
        self._steps = 0

    def solve(self) -> SearchResult:
        """Run up to max_attempts attempts. Never returns a partial assignment."""
        feasibility = check_feasibility(self.index, self.n, self.search_logger)
        if not feasibility.ok:
            return SearchResult(status=SearchStatus.FAILED, failure=feasibility.failure)

        # graph imports solver.context, so load it here
        from matchmaking.graph import max_assignable_for_index

        total = len(self.index)
        required = total * self.n
        capacity = max_assignable_for_index(self.index, self.n)
        if capacity < required:
            message = (
                f"No valid assignment exists: at most {capacity} of {required} assignments "
                f"can be placed with the current avoids"
            )
            self.search_logger.log_feasibility_warning(message)
            return SearchResult(
                status=SearchStatus.FAILED,
                failure=Failure(
                    kind=FailureKind.NO_SOLUTION_FOUND,
                    message=message,
                    available=capacity,
                    required=required,
                ),
                stats={"attempts": 0, "total_steps": 0, "max_assignable": capacity},
            )

        logger.info(f"Starting matchmaking: {total} players, {self.n} targets each")
        self.search_logger.log_progress(f"Searching with up to {self.max_attempts} attempts")

        for attempt in range(1, self.max_attempts + 1):
            order = list(range(total))
            self.rng.shuffle(order)

            self._steps = 0
            exhausted_budget = False
            try:
                chosen = self._run_attempt(order)
            except AttemptBudgetExceeded:
                chosen = None
                exhausted_budget = True

            self.search_logger.log_attempt(attempt, chosen is not None, self._steps, exhausted_budget)
            if chosen is not None:
                assignments = self._to_assignments(chosen)
                self._check_result(assignments)
                preferred = calculate_preference_stats(self.index.participants, assignments)["preferred"]
                logger.info(
                    f"Matchmaking successful on attempt {attempt}: {len(assignments)} assignments, "
                    f"{preferred} on preferred targets"
                )
                return SearchResult(
                    status=SearchStatus.DONE,
                    assignments=assignments,
                    attempts=attempt,
                    stats={
                        "attempts": attempt,
                        "total_steps": self.search_logger.total_steps,
                        "preferred": preferred,
                    },
                )

        logger.warning(f"Matchmaking failed after {self.max_attempts} attempts")
        self.search_logger.log_progress("All attempts exhausted without a complete assignment")
        return SearchResult(
            status=SearchStatus.FAILED,
            failure=Failure(
                kind=FailureKind.NO_SOLUTION_FOUND,
                message=(
                    f"No valid assignment found after {self.max_attempts} attempts; "
                    f"the avoid lists interact in a way no single player check detects"
                ),
                required=self.n,
            ),
            attempts=self.max_attempts,
            stats={"attempts": self.max_attempts, "total_steps": self.search_logger.total_steps},
        )

    def _ordered_candidates(self, writer: int, incoming: list[int]) -> list[int]:
        """Valid targets for a writer: preferred first, each group shuffled."""
        prefs = self.index.preferences[writer]
        valid = [t for t in self.index.valid_targets(writer) if incoming[t] < self.n]
        preferred = [t for t in valid if t in prefs]
        neutral = [t for t in valid if t not in prefs]
        self.rng.shuffle(preferred)
        self.rng.shuffle(neutral)
        return preferred + neutral

    def _deficits_coverable(self, order: list[int], w_pos: int, incoming: list[int]) -> bool:
        """Can the writers after w_pos still supply every target's missing assignments?"""
        remaining = order[w_pos + 1 :]
        for target in range(len(self.index)):
            deficit = self.n - incoming[target]
            if deficit <= 0:
                continue
            blocked = self.index.excluded_by[target]
            able = sum(1 for w in remaining if w != target and w not in blocked)
            if able < deficit:
                return False
        return True

    def _step(self) -> None:
        self._steps += 1
        if self.max_steps_per_attempt and self._steps > self.max_steps_per_attempt:
            raise AttemptBudgetExceeded()

    def _run_attempt(self, order: list[int]) -> list[list[int]] | None:
        """Depth-first search over (writer, pick) slots with an explicit stack.

        Returns:
            chosen[writer_idx] -> target idxs, or None when the attempt fails
        """
        n = self.n
        total = len(order)
        slots = total * n

        incoming = [0] * total
        chosen: list[list[int]] = [[] for _ in range(total)]
        candidates: list[list[int]] = [[] for _ in range(total)]  # per writer position
        picked_pos = [-1] * slots  # slot -> position in that writer's candidate list

        k = 0
        entering = True
        while 0 <= k < slots:
            w_pos, pick = divmod(k, n)
            writer = order[w_pos]

            if entering:
                if pick == 0:
                    candidates[w_pos] = self._ordered_candidates(writer, incoming)
                    start = 0
                else:
                    start = picked_pos[k - 1] + 1
            else:
                # Back in slot k: undo its pick and move past it
                undone = candidates[w_pos][picked_pos[k]]
                chosen[writer].pop()
                incoming[undone] -= 1
                start = picked_pos[k] + 1

            cands = candidates[w_pos]
            need = n - pick
            placed = False
            i = start
            while len(cands) - i >= need:
                target = cands[i]
                if incoming[target] < n:
                    self._step()
                    chosen[writer].append(target)
                    incoming[target] += 1
                    picked_pos[k] = i
                    placed = True
                    if logger.isEnabledFor(TRACE):
                        logger.log(TRACE, f"assign {self.index.ids[writer]} -> {self.index.ids[target]}")
                    break
                i += 1

            if not placed:
                k -= 1
                entering = False
                continue

            if pick == n - 1 and not self._deficits_coverable(order, w_pos, incoming):
                # Retry this slot with its next candidate
                entering = False
                continue

            k += 1
            entering = True

        if k < 0:
            return None
        return chosen

    def _to_assignments(self, chosen: list[list[int]]) -> list[Assignment]:
        ids = self.index.ids
        return [
            Assignment(writer_id=ids[writer], target_id=ids[target])
            for writer, targets in enumerate(chosen)
            for target in targets
        ]

    def _check_result(self, assignments: list[Assignment]) -> None:
        violations = verify_assignments(self.index.participants, assignments, self.n)
        if violations:
            for v in violations:
                logger.error(f"[VIOLATION] {v}")
            raise MatchmakingError(f"Search produced an invalid assignment: {violations[0]}")


def find_assignment(
    participants: Sequence[Participant],
    n: int,
    rng: random.Random | None = None,
    config: ConfigLoader | None = None,
    search_logger: SearchLogger | None = None,
) -> SearchResult:
    """Validate, then search for a complete assignment.

    Args:
        participants: Roster snapshot
        n: Targets per writer (and times each participant is written about)
        rng: Random source; inject a seeded random.Random for reproducible runs
        config: Config loader (defaults to the shared instance)
        search_logger: Optional run logger to collect attempt details

    Returns:
        SearchResult with status DONE and the full edge list, or FAILED with
        a typed failure (validator reason or NO_SOLUTION_FOUND)
    """
    n = check_target_count(n)
    config = config or ConfigLoader.get_instance()
    if rng is None:
        seed = config.get("search.random_seed")
        rng = random.Random(seed)

    search = AssignmentSearch(
        ParticipantIndex.build(participants),
        n,
        rng=rng,
        max_attempts=config.get_int("search.max_attempts"),
        max_steps_per_attempt=config.get_int("search.max_steps_per_attempt"),
        search_logger=search_logger,
    )
    return search.solve()
