"""
Index arena shared by the validator, search and conflict analyzer.

Participants are addressed by integer position in roster order. Avoid and
preference sets are normalized once here: self-references are dropped, ids
that are not on the roster are ignored, and an id present in both lists is
treated as avoided.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from matchmaking.errors import InvalidRosterError
from matchmaking.models import Participant

logger = logging.getLogger(__name__)


@dataclass
class ParticipantIndex:
    """Roster snapshot with integer-indexed constraint sets."""

    participants: list[Participant]
    ids: list[str]
    idx_map: dict[str, int]  # participant_id -> idx
    avoids: list[frozenset[int]]  # writer idx -> avoided target idxs
    preferences: list[frozenset[int]]  # writer idx -> preferred target idxs (never overlaps avoids)
    dropped_references: int = 0
    excluded_by: list[frozenset[int]] = field(default_factory=list)  # target idx -> writers avoiding it

    @classmethod
    def build(cls, participants: Sequence[Participant]) -> ParticipantIndex:
        """Index a roster, raising InvalidRosterError on duplicate ids."""
        ids = [p.participant_id for p in participants]
        idx_map: dict[str, int] = {}
        for idx, pid in enumerate(ids):
            if pid in idx_map:
                raise InvalidRosterError(f"Duplicate participant id: {pid}")
            idx_map[pid] = idx

        avoids: list[frozenset[int]] = []
        preferences: list[frozenset[int]] = []
        dropped = 0
        for idx, p in enumerate(participants):
            avoid_idxs = {idx_map[t] for t in p.avoids if t in idx_map} - {idx}
            pref_idxs = {idx_map[t] for t in p.preferences if t in idx_map} - {idx} - avoid_idxs
            dropped += sum(1 for t in p.avoids | p.preferences if t not in idx_map or t == p.participant_id)
            avoids.append(frozenset(avoid_idxs))
            preferences.append(frozenset(pref_idxs))

        if dropped:
            logger.debug(f"Ignored {dropped} self or off-roster references while indexing roster")

        excluded_by_sets: list[set[int]] = [set() for _ in ids]
        for writer_idx, targets in enumerate(avoids):
            for target_idx in targets:
                excluded_by_sets[target_idx].add(writer_idx)

        return cls(
            participants=list(participants),
            ids=ids,
            idx_map=idx_map,
            avoids=avoids,
            preferences=preferences,
            dropped_references=dropped,
            excluded_by=[frozenset(s) for s in excluded_by_sets],
        )

    def __len__(self) -> int:
        return len(self.ids)

    def get_participant(self, idx: int) -> Participant:
        return self.participants[idx]

    def name_of(self, idx: int) -> str:
        return self.participants[idx].display_name

    def writer_candidate_count(self, writer_idx: int) -> int:
        """Other participants this writer does not avoid."""
        return len(self) - 1 - len(self.avoids[writer_idx])

    def target_candidate_count(self, target_idx: int) -> int:
        """Other participants who do not avoid this target."""
        return len(self) - 1 - len(self.excluded_by[target_idx])

    def valid_targets(self, writer_idx: int) -> list[int]:
        """Allowed targets for a writer, in roster order."""
        blocked = self.avoids[writer_idx]
        return [t for t in range(len(self)) if t != writer_idx and t not in blocked]

    def valid_writers(self, target_idx: int) -> list[int]:
        """Writers allowed to write about a target, in roster order."""
        blocked = self.excluded_by[target_idx]
        return [w for w in range(len(self)) if w != target_idx and w not in blocked]


def check_target_count(n: object) -> int:
    """Reject non-integer target counts; range checking is the validator's job."""
    if isinstance(n, bool) or not isinstance(n, int):
        raise InvalidRosterError(f"Target count must be an integer, got {n!r}")
    return n
