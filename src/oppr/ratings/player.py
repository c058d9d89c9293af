"""Helpers for participants that carry ratings from more than one system."""

from typing import Any, Optional

from oppr.models import Participant
from oppr.ratings.base import RatingSystem


def get_primary_rating(
    participant: Participant,
    system: Optional[RatingSystem] = None,
) -> Any:
    """
    Rating data for the participant in the given system.

    Looks in participant.ratings first, keyed by system id. When nothing is
    stored there, the system builds a rating from the flat rating fields.
    Without a system, the flat rating value is returned.
    """
    if system is None:
        return participant.rating
    stored = participant.ratings.get(system.id)
    if stored is not None:
        return stored
    return system.rating_from_participant(participant)


def has_rating(participant: Participant, system_id: str) -> bool:
    return participant.ratings.get(system_id) is not None


def get_player_rating_systems(participant: Participant) -> list[str]:
    """Ids of the rating systems the participant has stored data for."""
    return [system_id for system_id, data in participant.ratings.items() if data is not None]
