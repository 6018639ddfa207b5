"""Conflict Analyzer - explains why matchmaking failed and what to change.

Runs three single-participant passes in a fixed order and turns each
starvation it finds into concrete edits an operator can ask players to make:

1. Targets avoided by too many writers: ask the avoiders (fewest avoids
   first) to drop their avoid.
2. Writers who avoid too many others: ask the writer to drop avoids of the
   participants who themselves avoid the fewest.
3. Writers with exactly N valid candidates: advise adding one of them to
   their preferences.

The analysis never mutates the roster. Interactions that no single
participant causes are outside these passes; the optional flow analysis
reports how many assignments the roster can hold at most so such cases are
still visible.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from enum import Enum

from pydantic import BaseModel, Field

from matchmaking.config import ConfigLoader
from matchmaking.graph import max_assignable_for_index
from matchmaking.models import Participant
from matchmaking.solver.context import ParticipantIndex, check_target_count

logger = logging.getLogger(__name__)

NO_CONFLICT_SUMMARY = (
    "No obvious conflicts detected. The issue might be due to complex constraint interactions. "
    "Try lowering N or having players adjust their preferences."
)


class SuggestionAction(str, Enum):
    """Edits the analyzer can recommend"""

    REMOVE_AVOID = "remove_avoid"
    ADD_PREFERENCE = "add_preference"


class Suggestion(BaseModel):
    """One recommended edit: participant should apply action to target."""

    participant_id: str
    participant_name: str
    action: SuggestionAction
    target_id: str
    target_name: str
    reason: str

    @property
    def key(self) -> tuple[str, SuggestionAction, str]:
        return (self.participant_id, self.action, self.target_id)

    @property
    def action_text(self) -> str:
        if self.action == SuggestionAction.REMOVE_AVOID:
            return f"Remove avoid for {self.target_name}"
        return f"Add {self.target_name} to preferences"


class ConflictReport(BaseModel):
    """Result of conflict analysis"""

    has_conflict: bool
    summary: str
    suggestions: list[Suggestion] = Field(default_factory=list)
    max_assignable: int | None = None  # max-flow bound, when flow analysis ran
    required: int | None = None  # len(roster) * N

    @property
    def remove_avoid_count(self) -> int:
        return sum(1 for s in self.suggestions if s.action == SuggestionAction.REMOVE_AVOID)

    @property
    def add_preference_count(self) -> int:
        return sum(1 for s in self.suggestions if s.action == SuggestionAction.ADD_PREFERENCE)

    @property
    def has_flow_shortfall(self) -> bool:
        """True when flow analysis ran and proved the roster cannot be fully assigned."""
        if self.max_assignable is None or self.required is None:
            return False
        return self.max_assignable < self.required

    def format_message(self) -> str:
        """Render the report as the admin-facing alert text."""
        lines = ["Conflict Detected!", "", self.summary]
        if self.has_flow_shortfall:
            lines.append(
                f"At most {self.max_assignable} of {self.required} assignments can be placed with the current avoids."
            )
        lines.append("")

        if self.suggestions:
            lines.append("Suggested actions:")
            for i, suggestion in enumerate(self.suggestions, start=1):
                lines.append(f"{i}. {suggestion.participant_name}: {suggestion.action_text}")
        else:
            lines.append("Try lowering N or having players adjust their preferences.")

        return "\n".join(lines)


class ConflictAnalyzer:
    """Produces a ConflictReport for a roster and target count."""

    def __init__(self, config: ConfigLoader | None = None):
        config = config or ConfigLoader.get_instance()
        self.merge_duplicates = config.get_bool("conflict.merge_duplicate_suggestions")
        self.include_flow = config.get_bool("conflict.include_flow_analysis")

        # Statistics
        self._stats = {"reports": 0, "remove_avoid": 0, "add_preference": 0, "merged": 0}

    def analyze(self, participants: Sequence[Participant], n: int) -> ConflictReport:
        """Analyze a roster that failed (or might fail) matchmaking.

        Args:
            participants: Roster snapshot
            n: Targets per writer

        Returns:
            ConflictReport with suggestions in pass order
        """
        n = check_target_count(n)
        index = ParticipantIndex.build(participants)

        suggestions: list[Suggestion] = []
        suggestions.extend(self._target_starvation(index, n))
        suggestions.extend(self._writer_starvation(index, n))
        suggestions.extend(self._near_boundary(index, n))

        if self.merge_duplicates:
            suggestions = self._merge(suggestions)

        report = ConflictReport(
            has_conflict=len(suggestions) > 0,
            summary=self._summarize(suggestions),
            suggestions=suggestions,
        )

        if self.include_flow and len(index) >= 2 and n >= 1:
            report.max_assignable = max_assignable_for_index(index, n)
            report.required = len(index) * n
            if report.has_flow_shortfall:
                logger.info(f"Flow analysis: at most {report.max_assignable} of {report.required} assignments fit")

        self._update_stats(report)
        logger.info(f"Conflict analysis: {report.summary}")
        return report

    def _avoid_count(self, index: ParticipantIndex, idx: int) -> int:
        return len(index.avoids[idx])

    def _target_starvation(self, index: ParticipantIndex, n: int) -> list[Suggestion]:
        """Pass 1: targets that too few writers are willing to write about."""
        suggestions = []
        for target_idx in range(len(index)):
            available = index.target_candidate_count(target_idx)
            shortfall = n - available
            if shortfall <= 0:
                continue

            avoiders = [w for w in range(len(index)) if w in index.excluded_by[target_idx]]
            # Stable sort keeps roster order among equal avoid counts
            avoiders.sort(key=lambda w: self._avoid_count(index, w))
            target_name = index.name_of(target_idx)
            logger.debug(f"{target_name} is avoided by {len(avoiders)} writer(s), short by {shortfall}")

            for writer_idx in avoiders[:shortfall]:
                writer_name = index.name_of(writer_idx)
                suggestions.append(
                    Suggestion(
                        participant_id=index.ids[writer_idx],
                        participant_name=writer_name,
                        action=SuggestionAction.REMOVE_AVOID,
                        target_id=index.ids[target_idx],
                        target_name=target_name,
                        reason=(
                            f"{target_name} is avoided by {len(avoiders)} player(s) and can only receive "
                            f"{available} assignment(s) but needs {n}. "
                            f"{writer_name} should remove their avoid for {target_name}."
                        ),
                    )
                )
        return suggestions

    def _writer_starvation(self, index: ParticipantIndex, n: int) -> list[Suggestion]:
        """Pass 2: writers who leave themselves too few candidates."""
        suggestions = []
        for writer_idx in range(len(index)):
            available = index.writer_candidate_count(writer_idx)
            shortfall = n - available
            if shortfall <= 0:
                continue

            avoided = [t for t in range(len(index)) if t in index.avoids[writer_idx]]
            avoided.sort(key=lambda t: self._avoid_count(index, t))
            writer_name = index.name_of(writer_idx)
            logger.debug(f"{writer_name} has {available} valid candidate(s), short by {shortfall}")

            for target_idx in avoided[:shortfall]:
                target_name = index.name_of(target_idx)
                suggestions.append(
                    Suggestion(
                        participant_id=index.ids[writer_idx],
                        participant_name=writer_name,
                        action=SuggestionAction.REMOVE_AVOID,
                        target_id=index.ids[target_idx],
                        target_name=target_name,
                        reason=(
                            f"{writer_name} has only {available} valid candidates but needs {n}. "
                            f"Removing avoid for {target_name} would help."
                        ),
                    )
                )
        return suggestions

    def _near_boundary(self, index: ParticipantIndex, n: int) -> list[Suggestion]:
        """Pass 3: writers with no slack; advisory only."""
        suggestions = []
        for writer_idx in range(len(index)):
            if index.writer_candidate_count(writer_idx) != n:
                continue

            prefs = index.preferences[writer_idx]
            neutral = [t for t in index.valid_targets(writer_idx) if t not in prefs]
            if not neutral:
                continue

            writer_name = index.name_of(writer_idx)
            target_idx = neutral[0]
            target_name = index.name_of(target_idx)
            suggestions.append(
                Suggestion(
                    participant_id=index.ids[writer_idx],
                    participant_name=writer_name,
                    action=SuggestionAction.ADD_PREFERENCE,
                    target_id=index.ids[target_idx],
                    target_name=target_name,
                    reason=(
                        f"{writer_name} has exactly {n} valid candidates. "
                        f"Adding {target_name} to preferences could help with matching."
                    ),
                )
            )
        return suggestions

    def _merge(self, suggestions: list[Suggestion]) -> list[Suggestion]:
        """Drop repeats of the same edit, keeping the first occurrence."""
        seen: set[tuple[str, SuggestionAction, str]] = set()
        merged = []
        for suggestion in suggestions:
            if suggestion.key in seen:
                self._stats["merged"] += 1
                continue
            seen.add(suggestion.key)
            merged.append(suggestion)
        return merged

    def _summarize(self, suggestions: list[Suggestion]) -> str:
        if not suggestions:
            return NO_CONFLICT_SUMMARY
        remove_count = sum(1 for s in suggestions if s.action == SuggestionAction.REMOVE_AVOID)
        add_count = len(suggestions) - remove_count
        return (
            f"Found {len(suggestions)} suggestion(s): {remove_count} remove avoid(s), "
            f"{add_count} add preference(s)."
        )

    def _update_stats(self, report: ConflictReport) -> None:
        self._stats["reports"] += 1
        self._stats["remove_avoid"] += report.remove_avoid_count
        self._stats["add_preference"] += report.add_preference_count

    def get_statistics(self) -> dict[str, int]:
        """Get analyzer statistics"""
        return self._stats.copy()


def analyze_conflicts(
    participants: Sequence[Participant],
    n: int,
    config: ConfigLoader | None = None,
) -> ConflictReport:
    """Explain why a roster cannot be matched and suggest edits."""
    return ConflictAnalyzer(config).analyze(participants, n)
