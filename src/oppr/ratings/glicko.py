"""
Glicko rating system.

Glicko extends Elo by tracking a rating deviation (RD): how uncertain we
are about a player's rating. New and inactive players have a high RD and
move quickly; regular players have a low RD and move slowly.

Pinball results are finishing orders, not head-to-head games, so each
tournament is converted into simulated matches: everyone within
`opponents_range` places above you beat you, everyone within range below
you lost to you, and equal positions are draws.

The Glicko update:
  g(RD)  = 1 / sqrt(1 + 3 q² RD² / π²)
  E      = 1 / (1 + 10^(-g(RD_j) (r - r_j) / 400))
  d²     = 1 / (q² Σ g(RD_j)² E (1 - E))
  r'     = r + q² / (1/RD² + 1/d²) · Σ g(RD_j) (s_j - E)
  RD'    = sqrt(1 / (1/RD² + 1/d²)), clamped to [MIN_RD, MAX_RD]

Where q = ln(10) / 400.

See https://en.wikipedia.org/wiki/Glicko_rating_system
"""

from __future__ import annotations

import dataclasses
import math
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Optional, Sequence

from oppr.ratings.base import MatchResult, PlayerRatingResult, RatingSystem, RatingUpdateResult

if TYPE_CHECKING:
    from oppr.models import Participant


@dataclass(frozen=True)
class GlickoConfig:
    """
    Glicko parameters.

    Attributes:
        default_rating: Rating given to brand-new players
        min_rd: Lowest RD a player can reach (most certain)
        max_rd: Highest RD, given to new players (least certain)
        rd_decay_per_day: RD added per day without an event
        opponents_range: Places above/below used to simulate matches
        q: Glicko system constant, ln(10)/400
        provisional_threshold: Events needed before a rating is trusted
        tva_coefficient, tva_offset: Per-player TVA formula for this system
    """
    default_rating: float = 1300.0
    min_rd: float = 10.0
    max_rd: float = 200.0
    rd_decay_per_day: float = 0.3
    opponents_range: int = 32
    q: float = math.log(10) / 400
    provisional_threshold: int = 5
    tva_coefficient: float = 0.000546875
    tva_offset: float = 0.703125

    def with_opponents_range(self, opponents_range: int) -> "GlickoConfig":
        return dataclasses.replace(self, opponents_range=opponents_range)


DEFAULT_GLICKO_CONFIG = GlickoConfig()


@dataclass(frozen=True)
class GlickoRating:
    """A player's Glicko state."""
    value: float
    rating_deviation: float
    last_updated: Optional[datetime] = None


@dataclass(frozen=True)
class _Opponent:
    rating: float
    rd: float
    score: float


class GlickoRatingSystem(RatingSystem[GlickoRating]):
    """
    Reference rating system implementation.

    Usage:
        glicko = GlickoRatingSystem()
        rating = glicko.create_new_rating()

        matches = glicko.simulate_tournament_matches(3, results)
        rating = glicko.update_rating(rating, matches).new_rating
    """

    id = "glicko"
    name = "Glicko Rating System"

    def __init__(self, config: Optional[GlickoConfig] = None):
        self.config = config or DEFAULT_GLICKO_CONFIG

    def create_new_rating(self) -> GlickoRating:
        return GlickoRating(
            value=self.config.default_rating,
            rating_deviation=self.config.max_rd,
        )

    def rating_from_participant(self, participant: "Participant") -> GlickoRating:
        return GlickoRating(
            value=participant.rating,
            rating_deviation=participant.rating_deviation,
        )

    def update_rating(
        self,
        current_rating: GlickoRating,
        results: Sequence[MatchResult[GlickoRating]],
    ) -> RatingUpdateResult[GlickoRating]:
        """
        Apply one rating period's worth of match results.

        Args:
            current_rating: Player's rating before the period
            results: Match results against opponents (real or simulated)

        Returns:
            RatingUpdateResult with the new rating and the value change.
            An empty result list returns the current rating unchanged.
        """
        if not results:
            return RatingUpdateResult(new_rating=current_rating)

        opponents = [
            _Opponent(
                rating=r.opponent_rating.value,
                rd=r.opponent_rating.rating_deviation,
                score=r.score,
            )
            for r in results
        ]
        new_rating = self._calculate_new_rating(
            current_rating.value, current_rating.rating_deviation, opponents
        )
        return RatingUpdateResult(
            new_rating=new_rating,
            change=new_rating.value - current_rating.value,
        )

    def get_rating_value(self, rating: GlickoRating) -> float:
        return rating.value

    def is_provisional(self, rating: Optional[GlickoRating], event_count: int) -> bool:
        return event_count < self.config.provisional_threshold

    def apply_inactivity_decay(
        self,
        rating: GlickoRating,
        days_since_last_event: float,
    ) -> GlickoRating:
        """
        Grow RD linearly with inactivity, capped at max_rd.

        RD never shrinks here: negative day counts are treated as zero and a
        rating already above max_rd is left as it is.
        """
        days = max(0.0, days_since_last_event)
        grown = rating.rating_deviation + days * self.config.rd_decay_per_day
        new_rd = max(rating.rating_deviation, min(grown, self.config.max_rd))
        return dataclasses.replace(rating, rating_deviation=new_rd)

    def simulate_tournament_matches(
        self,
        player_position: int,
        all_results: Sequence[PlayerRatingResult[GlickoRating]],
        opponents_range: Optional[int] = None,
        participant_id: Optional[str] = None,
    ) -> list[MatchResult[GlickoRating]]:
        """
        Convert a finishing order into simulated head-to-head results.

        Args:
            player_position: The player's finishing position
            all_results: Every finisher's position and pre-event rating
            opponents_range: Places above/below to include (config default)
            participant_id: Identifies the player's own row when several
                finishers share a position; without it the first row at
                `player_position` is taken as the player

        Returns:
            One match per opponent in range: loss (0) against better finishers,
            draw (0.5) against equal positions, win (1) against worse ones.
            Empty if the player is not in `all_results`.
        """
        if opponents_range is None:
            opponents_range = self.config.opponents_range

        ordered = sorted(all_results, key=lambda r: r.position)
        player_index = next(
            (
                i
                for i, r in enumerate(ordered)
                if r.position == player_position
                and (participant_id is None or r.participant_id == participant_id)
            ),
            None,
        )
        if player_index is None:
            return []

        start = max(0, player_index - opponents_range)
        end = min(len(ordered), player_index + opponents_range + 1)

        matches = []
        for i in range(start, end):
            if i == player_index:
                continue
            opponent = ordered[i]
            if opponent.position < player_position:
                score = 0.0
            elif opponent.position == player_position:
                score = 0.5
            else:
                score = 1.0
            matches.append(MatchResult(opponent_rating=opponent.rating, score=score))
        return matches

    def contributes_to_tva(self, rating: GlickoRating) -> bool:
        if self.config.tva_coefficient == 0:
            return False
        return rating.value > self.config.tva_offset / self.config.tva_coefficient

    def calculate_tva_contribution(self, rating: GlickoRating) -> float:
        contribution = rating.value * self.config.tva_coefficient - self.config.tva_offset
        return max(0.0, contribution)

    # ------------------------------------------------------------------
    # Glicko math
    # ------------------------------------------------------------------

    def _calculate_new_rating(
        self,
        current_rating: float,
        current_rd: float,
        opponents: list[_Opponent],
    ) -> GlickoRating:
        q_squared = self.config.q ** 2
        d_squared = self._calculate_d_squared(current_rating, opponents)

        total = 0.0
        for opponent in opponents:
            g = self._g(opponent.rd)
            e = self._expected_score(current_rating, opponent.rating, opponent.rd)
            total += g * (opponent.score - e)

        precision = 1 / current_rd ** 2 + 1 / d_squared
        new_rating = current_rating + (q_squared / precision) * total
        new_rd = math.sqrt(1 / precision)

        return GlickoRating(
            value=round(new_rating, 2),
            rating_deviation=max(self.config.min_rd, min(new_rd, self.config.max_rd)),
        )

    def _g(self, rd: float) -> float:
        q_squared = self.config.q ** 2
        return 1 / math.sqrt(1 + (3 * q_squared * rd ** 2) / math.pi ** 2)

    def _expected_score(self, rating: float, opponent_rating: float, opponent_rd: float) -> float:
        g = self._g(opponent_rd)
        exponent = -g * (rating - opponent_rating) / 400
        try:
            return 1 / (1 + 10 ** exponent)
        except OverflowError:
            return 0.0

    def _calculate_d_squared(self, rating: float, opponents: list[_Opponent]) -> float:
        q_squared = self.config.q ** 2
        total = 0.0
        for opponent in opponents:
            g = self._g(opponent.rd)
            e = self._expected_score(rating, opponent.rating, opponent.rd)
            total += g * g * e * (1 - e)
        if total == 0:
            # Every expected score saturated at 0 or 1: the results carry no information
            return math.inf
        return 1 / (q_squared * total)
