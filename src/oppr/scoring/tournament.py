"""
Tournament scoring pipeline.

Ties the individual calculators together:

1. Tournament value: (base value + rating TVA + ranking TVA) * TGP * booster
2. Point distribution of that first place value over the finishing order

Usage:
    value = calculate_tournament_value(players, format_config, EventBoosterTier.NONE)
    print(value.first_place_value)

    scored = score_tournament(players, results, format_config, EventBoosterTier.MAJOR)
    for award in scored.awards:
        print(award.position, award.total_points)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Optional

from oppr.models import (
    EventBoosterTier,
    FinishResult,
    FormatConfig,
    Participant,
    PointAward,
    TournamentValue,
)
from oppr.scoring.base_value import calculate_base_value
from oppr.scoring.boosters import get_event_booster_multiplier
from oppr.scoring.constants import DEFAULT_CONFIG, OpprConfig
from oppr.scoring.distribution import distribute_points
from oppr.scoring.tgp import calculate_tgp
from oppr.scoring.tva import calculate_ranking_tva, calculate_rating_tva

if TYPE_CHECKING:
    from oppr.ratings.base import RatingSystem

logger = logging.getLogger(__name__)


def calculate_tournament_value(
    participants: Iterable[Participant],
    format_config: FormatConfig,
    booster: EventBoosterTier | str = EventBoosterTier.NONE,
    config: Optional[OpprConfig] = None,
    rating_system: Optional["RatingSystem"] = None,
) -> TournamentValue:
    """
    Calculate the full value breakdown for a tournament.

    Args:
        participants: Everyone entered in the tournament
        format_config: Qualifying/finals format descriptor
        booster: Event booster tier
        config: Calculation constants (defaults when omitted)
        rating_system: Optional rating system providing TVA hooks

    Returns:
        TournamentValue with each component and the first place value
    """
    config = config or DEFAULT_CONFIG
    players = list(participants)

    value = TournamentValue(
        base_value=calculate_base_value(players, config),
        rating_tva=calculate_rating_tva(players, config, rating_system),
        ranking_tva=calculate_ranking_tva(players, config),
        tgp=calculate_tgp(format_config, config),
        event_booster_multiplier=get_event_booster_multiplier(booster, config),
    )

    if value.first_place_value == 0:
        logger.info(
            "Tournament with %d participants has zero value (base=%.2f tva=%.2f tgp=%.2f)",
            len(players), value.base_value, value.total_tva, value.tgp,
        )
    return value


@dataclass(frozen=True)
class TournamentScore:
    """Value breakdown plus the awards it produced."""
    value: TournamentValue
    awards: list[PointAward]

    @property
    def first_place_value(self) -> float:
        return self.value.first_place_value

    def award_for(self, participant_id: str) -> Optional[PointAward]:
        for award in self.awards:
            if award.participant.id == participant_id:
                return award
        return None


def score_tournament(
    participants: Iterable[Participant],
    results: Iterable[FinishResult],
    format_config: FormatConfig,
    booster: EventBoosterTier | str = EventBoosterTier.NONE,
    config: Optional[OpprConfig] = None,
    rating_system: Optional["RatingSystem"] = None,
) -> TournamentScore:
    """Compute the tournament value and distribute it over `results`."""
    value = calculate_tournament_value(
        participants, format_config, booster, config, rating_system
    )
    awards = distribute_points(results, value.first_place_value, config)
    return TournamentScore(value=value, awards=awards)
