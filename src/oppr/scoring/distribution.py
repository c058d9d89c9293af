"""
Point distribution across finishing positions.

Each finisher's award has two parts:

Linear (10% of the pool)
    (N + 1 - position) * 10% * first_place_value / N
    Every finisher gets some credit; it shrinks by the same step per place.

Dynamic (90% of the pool)
    (1 - ((position - 1) / cap) ^ 0.7) ^ 3 * 90% * first_place_value
    where cap = min(rated_players / 2, 64). Only the top half of the rated
    field (at most 64 places) earns dynamic points, and the curve falls off
    steeply from first place.

First place therefore receives the whole first_place_value whenever the
field contains at least one rated (non-opted-out) player.

Opted-out players keep their position, so they still shape the curve for
everyone else, but they receive zero dynamic points.
"""

import logging
from typing import Iterable, Optional

from oppr.errors import InvariantViolation
from oppr.models import FinishResult, PointAward
from oppr.scoring.constants import DEFAULT_CONFIG, OpprConfig

logger = logging.getLogger(__name__)


def calculate_linear_points(
    position: int,
    player_count: int,
    first_place_value: float,
    config: Optional[OpprConfig] = None,
) -> float:
    """
    Linear share for one position.

    Args:
        position: Finishing position (1 = first)
        player_count: Number of finishers sharing the pool
        first_place_value: Tournament value for first place
        config: Calculation constants (defaults when omitted)

    Returns:
        Linear points, never negative
    """
    if player_count <= 0:
        return 0.0
    constants = (config or DEFAULT_CONFIG).point_distribution
    points = (
        (player_count + 1 - position)
        * constants.linear_percentage
        * (first_place_value / player_count)
    )
    return max(0.0, points)


def dynamic_cap(rated_player_count: int, config: Optional[OpprConfig] = None) -> float:
    """Number of places (from the top) that earn dynamic points."""
    constants = (config or DEFAULT_CONFIG).point_distribution
    return min(rated_player_count / 2, constants.max_dynamic_players)


def calculate_dynamic_points(
    position: int,
    rated_player_count: int,
    first_place_value: float,
    config: Optional[OpprConfig] = None,
) -> float:
    """
    Dynamic share for one position.

    Players finishing outside the top min(rated/2, 64) places get 0.
    """
    constants = (config or DEFAULT_CONFIG).point_distribution
    cap = dynamic_cap(rated_player_count, config)

    if position - 1 >= cap:
        return 0.0

    position_ratio = (position - 1) / cap
    decay_factor = (1 - position_ratio ** constants.position_exponent) ** constants.value_exponent
    return max(0.0, decay_factor * constants.dynamic_percentage * first_place_value)


def calculate_player_points(
    position: int,
    player_count: int,
    rated_player_count: int,
    first_place_value: float,
    config: Optional[OpprConfig] = None,
) -> float:
    """Linear plus dynamic points for one position."""
    return calculate_linear_points(
        position, player_count, first_place_value, config
    ) + calculate_dynamic_points(position, rated_player_count, first_place_value, config)


def get_points_for_position(
    position: int,
    player_count: int,
    rated_player_count: int,
    first_place_value: float,
    config: Optional[OpprConfig] = None,
) -> float:
    return calculate_player_points(
        position, player_count, rated_player_count, first_place_value, config
    )


def calculate_position_percentage(
    position: int,
    player_count: int,
    rated_player_count: int,
    config: Optional[OpprConfig] = None,
) -> float:
    """Share of the first place value that a position receives (0.0 to 1.0)."""
    points = calculate_player_points(position, player_count, rated_player_count, 100.0, config)
    return points / 100.0


def distribute_points(
    results: Iterable[FinishResult],
    first_place_value: float,
    config: Optional[OpprConfig] = None,
) -> list[PointAward]:
    """
    Turn a finishing order and a first place value into point awards.

    Args:
        results: One result per finisher; positions must be unique
        first_place_value: Output of the tournament value calculation
        config: Calculation constants (defaults when omitted)

    Returns:
        One PointAward per result, ordered by position

    Raises:
        InvariantViolation: If two results share a position or a position is < 1
    """
    ordered = sorted(results, key=lambda r: r.position)
    _check_positions(ordered)

    if not ordered:
        return []

    # Gapped positions (e.g. after removing a DQ) still need a positive
    # linear share for the last finisher.
    player_count = max(len(ordered), ordered[-1].position)
    rated_count = sum(
        1 for r in ordered if r.participant.is_rated and not r.opted_out
    )
    if rated_count == 0:
        logger.debug("No rated finishers; awarding linear points only")

    awards = []
    for result in ordered:
        linear = calculate_linear_points(result.position, player_count, first_place_value, config)
        if result.opted_out:
            dynamic = 0.0
        else:
            dynamic = calculate_dynamic_points(
                result.position, rated_count, first_place_value, config
            )
        awards.append(
            PointAward(
                participant=result.participant,
                position=result.position,
                linear_points=linear,
                dynamic_points=dynamic,
                opted_out=result.opted_out,
            )
        )
    return awards


def _check_positions(ordered: list[FinishResult]) -> None:
    seen: set[int] = set()
    for result in ordered:
        if result.position < 1:
            raise InvariantViolation(
                f"Invalid position {result.position} for participant {result.participant.id}"
            )
        if result.position in seen:
            raise InvariantViolation(
                f"Duplicate position {result.position} in results "
                f"(participant {result.participant.id})"
            )
        seen.add(result.position)
