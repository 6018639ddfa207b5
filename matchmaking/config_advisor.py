"""
Config Advisor - safe preference/avoid caps for a roster size.

Each writer needs N candidates it does not avoid, so nobody may avoid more
than ``count - 1 - N`` others. The advisor suggests 80% of that bound for
avoids and about 60% of the other players for preferences.
"""

from __future__ import annotations

import logging

from matchmaking.models import ConfigSuggestion
from matchmaking.solver.context import check_target_count
from matchmaking.solver.feasibility import MIN_PARTICIPANTS

logger = logging.getLogger(__name__)


def max_possible_avoids(participant_count: int, n: int) -> int:
    """Largest avoid list that still leaves every writer N candidates."""
    return max(0, participant_count - 1 - n)


def suggest_config(participant_count: int, n: int) -> ConfigSuggestion:
    """Suggest max_preferences and max_avoids for a roster.

    Args:
        participant_count: Number of participants on the roster
        n: Targets per writer

    Returns:
        ConfigSuggestion with human-readable reasoning, one line per entry
    """
    n = check_target_count(n)

    if participant_count < MIN_PARTICIPANTS:
        return ConfigSuggestion(max_preferences=0, max_avoids=0, reasoning=["Need at least 2 players"])
    if n < 1:
        return ConfigSuggestion(max_preferences=0, max_avoids=0, reasoning=["Targets per player must be at least 1"])

    if participant_count == 2:
        return ConfigSuggestion(
            max_preferences=1,
            max_avoids=0,
            reasoning=[
                "With only 2 players, each must write about the other.",
                "Max avoids: 0 (cannot avoid the only other player)",
                "Max preferences: 1 (can prefer the other player)",
            ],
        )

    others = participant_count - 1
    possible_avoids = max_possible_avoids(participant_count, n)
    # Integer forms of floor(0.8 * x) and ceil(0.6 * x)
    safe_avoids = (possible_avoids * 4) // 5
    max_preferences = min(-(-others * 3 // 5), others)

    if possible_avoids == 0:
        logger.debug(f"{participant_count} players with N={n}: no room for avoids")
        return ConfigSuggestion(
            max_preferences=max_preferences,
            max_avoids=0,
            reasoning=[
                f"With {participant_count} players and {n} targets per player,",
                "players cannot avoid anyone (would leave insufficient candidates).",
                f"Suggested max preferences: {max_preferences}",
            ],
        )

    return ConfigSuggestion(
        max_preferences=max_preferences,
        max_avoids=safe_avoids,
        reasoning=[
            f"With {participant_count} players, each player needs at least {n} valid candidates.",
            f"Maximum possible avoids per player: {possible_avoids} (to ensure {n} valid candidates remain).",
            f"Suggested max preferences: {max_preferences} "
            f"(about 60% of other players for good matching flexibility).",
            f"Suggested max avoids: {safe_avoids} (80% of maximum to leave safety margin for matchmaking).",
        ],
    )
