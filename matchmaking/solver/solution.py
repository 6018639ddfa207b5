"""Solution Analysis - Pure functions for checking and summarizing assignments.

All functions take explicit parameters and have no side effects, so they can
be used on results loaded back from storage as well as on fresh search output.
"""

from __future__ import annotations

from collections import Counter, defaultdict
from collections.abc import Iterable, Sequence
from typing import Any

from matchmaking.models import Assignment, Participant


def verify_assignments(
    participants: Sequence[Participant],
    assignments: Iterable[Assignment],
    n: int,
) -> list[str]:
    """Check an assignment set against the output invariants.

    Args:
        participants: The roster the assignments were made for
        assignments: The edge list to check
        n: Targets per writer

    Returns:
        Human-readable violation messages; empty when the set is valid
    """
    by_id = {p.participant_id: p for p in participants}
    violations: list[str] = []
    writer_counts: Counter[str] = Counter()
    target_counts: Counter[str] = Counter()
    seen: set[tuple[str, str]] = set()

    for a in assignments:
        pair = (a.writer_id, a.target_id)
        if a.writer_id not in by_id or a.target_id not in by_id:
            violations.append(f"Assignment {a.writer_id} -> {a.target_id} references an unknown participant")
            continue
        if a.writer_id == a.target_id:
            violations.append(f"{by_id[a.writer_id].display_name} is assigned to write about themselves")
        if pair in seen:
            violations.append(
                f"Duplicate assignment {by_id[a.writer_id].display_name} -> {by_id[a.target_id].display_name}"
            )
        seen.add(pair)
        if a.target_id in by_id[a.writer_id].effective_avoids:
            violations.append(
                f"{by_id[a.writer_id].display_name} is assigned {by_id[a.target_id].display_name}, "
                f"who they avoid"
            )
        writer_counts[a.writer_id] += 1
        target_counts[a.target_id] += 1

    for p in participants:
        if writer_counts[p.participant_id] != n:
            violations.append(f"{p.display_name} writes {writer_counts[p.participant_id]} time(s), expected {n}")
        if target_counts[p.participant_id] != n:
            violations.append(
                f"{p.display_name} is written about {target_counts[p.participant_id]} time(s), expected {n}"
            )

    return violations


def assignments_by_writer(assignments: Iterable[Assignment]) -> dict[str, list[str]]:
    """Group the edge list per writer, preserving edge order."""
    grouped: dict[str, list[str]] = defaultdict(list)
    for a in assignments:
        grouped[a.writer_id].append(a.target_id)
    return dict(grouped)


def assignments_by_target(assignments: Iterable[Assignment]) -> dict[str, list[str]]:
    """Group the edge list per target: who writes about each participant."""
    grouped: dict[str, list[str]] = defaultdict(list)
    for a in assignments:
        grouped[a.target_id].append(a.writer_id)
    return dict(grouped)


def calculate_preference_stats(
    participants: Sequence[Participant],
    assignments: Iterable[Assignment],
) -> dict[str, Any]:
    """Count how many assignments landed on a preferred target.

    Returns:
        Dict with "total", "preferred", "preferred_rate" and a per-writer
        breakdown under "by_writer" (writer id -> preferred count)
    """
    prefs = {p.participant_id: p.effective_preferences for p in participants}
    by_writer: dict[str, int] = {p.participant_id: 0 for p in participants}
    total = 0
    preferred = 0

    for a in assignments:
        total += 1
        if a.target_id in prefs.get(a.writer_id, frozenset()):
            preferred += 1
            by_writer[a.writer_id] = by_writer.get(a.writer_id, 0) + 1

    return {
        "total": total,
        "preferred": preferred,
        "preferred_rate": preferred / total if total else 0.0,
        "by_writer": by_writer,
    }
