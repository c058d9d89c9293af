"""
Base value of a tournament.

Every rated player in the field adds a fixed amount to the pool:

    base_value = min(rated_players * points_per_player, max_base_value)

At the defaults that's 0.5 per rated player, saturating at 32 points once
64 rated players are entered. Unrated players (fewer than 5 events) enter
the field but add nothing here.
"""

from typing import Iterable, Optional

from oppr.models import Participant
from oppr.scoring.constants import DEFAULT_CONFIG, OpprConfig


def count_rated_players(participants: Iterable[Participant]) -> int:
    """Number of participants flagged as rated."""
    return sum(1 for p in participants if p.is_rated)


def calculate_base_value(
    participants: Iterable[Participant],
    config: Optional[OpprConfig] = None,
) -> float:
    """
    Calculate the base value contributed by the size of the rated field.

    Args:
        participants: Everyone entered in the tournament
        config: Calculation constants (defaults when omitted)

    Returns:
        Base value in points, between 0 and max_base_value

    Examples:
        # 20 rated players at 0.5 each
        calculate_base_value(players)  # → 10.0

        # 100 rated players, capped
        calculate_base_value(big_field)  # → 32.0
    """
    constants = (config or DEFAULT_CONFIG).base_value
    rated = count_rated_players(participants)
    return min(rated * constants.points_per_player, constants.max_base_value)


def is_player_rated(event_count: int, config: Optional[OpprConfig] = None) -> bool:
    """Whether a player with `event_count` events counts as rated."""
    constants = (config or DEFAULT_CONFIG).base_value
    return event_count >= constants.rated_player_threshold
