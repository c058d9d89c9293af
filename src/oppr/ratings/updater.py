"""
Bulk rating updates.

A tournament's rating changes are computed from the pre-tournament
ratings of every entrant. Nobody's update sees another entrant's
post-tournament rating, so the order entries are processed in does not
matter.
"""

import logging
from typing import Any, Mapping, Optional, Sequence

from oppr.errors import RatingSystemError
from oppr.ratings.base import PlayerRatingResult, RatingSystem, RatingUpdateResult

logger = logging.getLogger(__name__)


def update_tournament_ratings(
    system: RatingSystem,
    entries: Sequence[PlayerRatingResult],
    opponents_range: Optional[int] = None,
) -> dict[str, RatingUpdateResult]:
    """
    Update every entrant's rating from one tournament's finishing order.

    Args:
        system: Rating system that supports simulate_tournament_matches
        entries: Finishing position and pre-tournament rating per entrant;
            participant_id must be set on each
        opponents_range: Places above/below to simulate (system default)

    Returns:
        Mapping of participant_id -> RatingUpdateResult

    Raises:
        RatingSystemError: If the system cannot simulate matches, or an
            entry has no participant_id
    """
    simulate = getattr(system, "simulate_tournament_matches", None)
    if simulate is None:
        raise RatingSystemError(
            f"Rating system '{system.id}' cannot simulate tournament matches"
        )

    # Freeze the input so every simulation sees pre-tournament ratings
    snapshot = list(entries)
    updates: dict[str, RatingUpdateResult] = {}

    for entry in snapshot:
        if entry.participant_id is None:
            raise RatingSystemError(
                f"Entry at position {entry.position} has no participant_id"
            )
        matches = simulate(
            entry.position, snapshot, opponents_range, participant_id=entry.participant_id
        )
        updates[entry.participant_id] = system.update_rating(entry.rating, matches)

    logger.debug("Updated %d ratings with %s", len(updates), system.id)
    return updates


def apply_bulk_inactivity_decay(
    system: RatingSystem,
    ratings: Mapping[str, Any],
    days_inactive: Mapping[str, float],
) -> dict[str, Any]:
    """
    Apply inactivity decay to many ratings at once.

    Players missing from `days_inactive` are returned unchanged. Systems
    without an apply_inactivity_decay hook return every rating unchanged.
    """
    decay = getattr(system, "apply_inactivity_decay", None)
    if decay is None:
        return dict(ratings)

    decayed = {}
    for participant_id, rating in ratings.items():
        days = days_inactive.get(participant_id)
        decayed[participant_id] = rating if days is None else decay(rating, days)
    return decayed
