"""
Roster editing helpers.

Participants are immutable; every helper returns a new Participant (or a new
roster list). Preferences and avoids are mutually exclusive on edit: putting
an id on one list takes it off the other.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from matchmaking.conflict import Suggestion, SuggestionAction
from matchmaking.errors import InvalidRosterError, ListLimitError, UnknownParticipantError
from matchmaking.models import GameConfig, Participant

logger = logging.getLogger(__name__)


def normalize_participant(participant: Participant) -> Participant:
    """Drop self-references and resolve preference/avoid overlap in favour of the avoid."""
    return participant.model_copy(
        update={
            "preferences": participant.effective_preferences,
            "avoids": participant.effective_avoids,
        }
    )


def _check_not_self(participant: Participant, target_id: str) -> None:
    if target_id == participant.participant_id:
        raise InvalidRosterError(f"{participant.display_name} cannot list themselves")


def toggle_preference(participant: Participant, target_id: str, config: GameConfig | None = None) -> Participant:
    """Star or un-star a target.

    Args:
        participant: The participant editing their lists
        target_id: Who to toggle
        config: Game caps (defaults apply when omitted)

    Returns:
        Updated participant

    Raises:
        ListLimitError: Adding would exceed max_preferences
        InvalidRosterError: target_id is the participant themselves
    """
    _check_not_self(participant, target_id)
    config = config or GameConfig()

    if target_id in participant.preferences:
        preferences = participant.preferences - {target_id}
    else:
        if len(participant.preferences) >= config.max_preferences:
            raise ListLimitError("favourites", config.max_preferences)
        preferences = participant.preferences | {target_id}

    return participant.model_copy(
        update={"preferences": preferences, "avoids": participant.avoids - {target_id}}
    )


def toggle_avoid(participant: Participant, target_id: str, config: GameConfig | None = None) -> Participant:
    """Block or unblock a target. Raises ListLimitError past max_avoids."""
    _check_not_self(participant, target_id)
    config = config or GameConfig()

    if target_id in participant.avoids:
        avoids = participant.avoids - {target_id}
    else:
        if len(participant.avoids) >= config.max_avoids:
            raise ListLimitError("avoids", config.max_avoids)
        avoids = participant.avoids | {target_id}

    return participant.model_copy(
        update={"preferences": participant.preferences - {target_id}, "avoids": avoids}
    )


def apply_suggestion(participants: Sequence[Participant], suggestion: Suggestion) -> list[Participant]:
    """Return a new roster with one conflict suggestion applied.

    Caps are not enforced here: accepting a suggestion is an operator action.
    """
    ids = {p.participant_id for p in participants}
    if suggestion.participant_id not in ids:
        raise UnknownParticipantError(f"Unknown participant: {suggestion.participant_id}")
    if suggestion.target_id not in ids:
        raise UnknownParticipantError(f"Unknown participant: {suggestion.target_id}")

    updated = []
    for p in participants:
        if p.participant_id != suggestion.participant_id:
            updated.append(p)
            continue
        if suggestion.action == SuggestionAction.REMOVE_AVOID:
            p = p.model_copy(update={"avoids": p.avoids - {suggestion.target_id}})
        else:
            p = p.model_copy(
                update={
                    "preferences": p.preferences | {suggestion.target_id},
                    "avoids": p.avoids - {suggestion.target_id},
                }
            )
        logger.debug(f"Applied suggestion: {suggestion.participant_name}: {suggestion.action_text}")
        updated.append(p)
    return updated


def apply_suggestions(participants: Sequence[Participant], suggestions: Iterable[Suggestion]) -> list[Participant]:
    """Apply suggestions in order."""
    roster = list(participants)
    for suggestion in suggestions:
        roster = apply_suggestion(roster, suggestion)
    return roster
