"""
Tournament Value Adjustment (TVA) from field strength.

Two independent bonuses are added to the base value:

Rating TVA
    Per player: max(0, rating * 0.000546875 - 0.703125)
    A perfect (2000) player adds 0.390625; ratings at or below ~1285.71
    add nothing. Summed over the 64 highest-rated entrants, capped at 25.

Ranking TVA
    Per player: max(0, ln(ranking) * -0.211675054 + 1.459827968)
    World #1 adds ~1.46, #2 ~1.31, and the value reaches zero around #990.
    Summed over the 64 best-ranked entrants, capped at 50.

The active rating system may supply its own per-player rating contribution
through its calculate_tva_contribution hook; otherwise the formula above
is used.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Iterable, Optional

from oppr.models import Participant
from oppr.scoring.constants import DEFAULT_CONFIG, OpprConfig

if TYPE_CHECKING:
    from oppr.ratings.base import RatingSystem


# =============================================================================
# Rating TVA
# =============================================================================

def calculate_player_rating_contribution(
    rating: float,
    config: Optional[OpprConfig] = None,
) -> float:
    """
    Calculate a single player's contribution to the rating-based TVA.

    Args:
        rating: Player's rating value
        config: Calculation constants (defaults when omitted)

    Returns:
        Contribution in points, never negative
    """
    constants = (config or DEFAULT_CONFIG).tva.rating
    if not rating_contributes_to_tva(rating, config):
        return 0.0
    return max(0.0, rating * constants.coefficient - constants.offset)


def rating_contributes_to_tva(rating: float, config: Optional[OpprConfig] = None) -> bool:
    """True if the rating is strictly above the minimum effective rating."""
    constants = (config or DEFAULT_CONFIG).tva.rating
    return rating > constants.min_effective_rating


def get_top_rated_players(
    participants: Iterable[Participant],
    count: Optional[int] = None,
    config: Optional[OpprConfig] = None,
    rating_system: Optional["RatingSystem"] = None,
) -> list[Participant]:
    """
    Highest-rated participants first, truncated to `count` (default max considered).

    With a rating system the order comes from that system's rating value,
    otherwise from the flat `rating` field.
    """
    if count is None:
        count = (config or DEFAULT_CONFIG).tva.max_players_considered

    def key(player: Participant) -> float:
        if rating_system is None:
            return player.rating
        return rating_system.get_rating_value(_rating_data_for(player, rating_system))

    # sorted() is stable, so equal ratings keep entry order
    return sorted(participants, key=key, reverse=True)[:count]


def calculate_rating_tva(
    participants: Iterable[Participant],
    config: Optional[OpprConfig] = None,
    rating_system: Optional["RatingSystem"] = None,
) -> float:
    """
    Calculate the rating-based TVA for a field.

    Args:
        participants: Everyone entered in the tournament
        config: Calculation constants (defaults when omitted)
        rating_system: Optional rating system whose TVA hooks replace the
            built-in per-player formula

    Returns:
        Rating TVA in points, between 0 and the configured cap
    """
    config = config or DEFAULT_CONFIG
    hook = getattr(rating_system, "calculate_tva_contribution", None)
    if hook is not None:
        top_players = get_top_rated_players(
            participants, config=config, rating_system=rating_system
        )
        contributes = getattr(rating_system, "contributes_to_tva", None)
        total = 0.0
        for player in top_players:
            rating = _rating_data_for(player, rating_system)
            if contributes is not None and not contributes(rating):
                continue
            total += max(0.0, hook(rating))
    else:
        top_players = get_top_rated_players(participants, config=config)
        total = sum(
            calculate_player_rating_contribution(p.rating, config) for p in top_players
        )

    return min(total, config.tva.rating.max_value)


def _rating_data_for(player: Participant, rating_system: "RatingSystem"):
    """Rating data to hand a rating system's TVA hooks for this player."""
    data = player.ratings.get(rating_system.id)
    if data is not None:
        return data
    return rating_system.rating_from_participant(player)


# =============================================================================
# Ranking TVA
# =============================================================================

def calculate_player_ranking_contribution(
    ranking: int,
    config: Optional[OpprConfig] = None,
) -> float:
    """
    Calculate a single player's contribution to the ranking-based TVA.

    Rankings below 1 are treated as 1 so ln() stays defined.
    """
    constants = (config or DEFAULT_CONFIG).tva.ranking
    valid_ranking = max(1, ranking)
    contribution = math.log(valid_ranking) * constants.coefficient + constants.offset
    return max(0.0, contribution)


def get_top_ranked_players(
    participants: Iterable[Participant],
    count: Optional[int] = None,
    config: Optional[OpprConfig] = None,
) -> list[Participant]:
    """Ranked participants, best (lowest) ranking first. Unranked players are dropped."""
    if count is None:
        count = (config or DEFAULT_CONFIG).tva.max_players_considered
    ranked = [p for p in participants if p.is_ranked]
    return sorted(ranked, key=lambda p: p.ranking)[:count]


def calculate_ranking_tva(
    participants: Iterable[Participant],
    config: Optional[OpprConfig] = None,
) -> float:
    """
    Calculate the ranking-based TVA for a field.

    Returns:
        Ranking TVA in points, between 0 and the configured cap
    """
    config = config or DEFAULT_CONFIG
    top_players = get_top_ranked_players(participants, config=config)
    total = sum(
        calculate_player_ranking_contribution(p.ranking, config) for p in top_players
    )
    return min(total, config.tva.ranking.max_value)


def calculate_total_tva(
    participants: Iterable[Participant],
    config: Optional[OpprConfig] = None,
    rating_system: Optional["RatingSystem"] = None,
) -> dict[str, float]:
    """Rating TVA, ranking TVA and their sum."""
    players = list(participants)
    rating_tva = calculate_rating_tva(players, config, rating_system)
    ranking_tva = calculate_ranking_tva(players, config)
    return {
        "rating_tva": rating_tva,
        "ranking_tva": ranking_tva,
        "total_tva": rating_tva + ranking_tva,
    }
