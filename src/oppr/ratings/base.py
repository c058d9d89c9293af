"""Rating system interface and the records passed through it."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Generic, Optional, Sequence, TypeVar

if TYPE_CHECKING:
    from oppr.models import Participant


@dataclass(frozen=True)
class BaseRating:
    """Minimum rating data every system stores."""
    value: float
    last_updated: Optional[datetime] = None


R = TypeVar("R")


@dataclass(frozen=True)
class MatchResult(Generic[R]):
    """One (possibly simulated) game against an opponent. score: 1 win, 0.5 draw, 0 loss."""
    opponent_rating: R
    score: float


@dataclass(frozen=True)
class RatingUpdateResult(Generic[R]):
    new_rating: R
    change: Optional[float] = None


@dataclass(frozen=True)
class PlayerRatingResult(Generic[R]):
    """A finishing position paired with the player's pre-event rating."""
    position: int
    rating: R
    participant_id: Optional[str] = None


class RatingSystem(ABC, Generic[R]):
    """
    Strategy interface for skill ratings.

    Implementations are registered in a RatingSystemRegistry under `id` and
    treated as immutable afterwards. Besides the abstract methods, a system
    may provide these optional hooks:

        apply_inactivity_decay(rating, days_since_last_event) -> rating
        simulate_tournament_matches(position, all_results, opponents_range=None,
                                    participant_id=None) -> list[MatchResult]
        contributes_to_tva(rating) -> bool
        calculate_tva_contribution(rating) -> float

    Callers probe for hooks with getattr(), so a system that leaves one out
    simply doesn't take part in that calculation.
    """

    id: str
    name: str

    @abstractmethod
    def create_new_rating(self) -> R:
        """Initial rating for a player with no history."""

    @abstractmethod
    def update_rating(
        self,
        current_rating: R,
        results: Sequence[MatchResult[R]],
    ) -> RatingUpdateResult[R]:
        """New rating after a batch of match results."""

    @abstractmethod
    def get_rating_value(self, rating: R) -> float:
        """Primary numeric value used for sorting and TVA."""

    @abstractmethod
    def is_provisional(self, rating: R, event_count: int) -> bool:
        """Whether the rating is still too new to trust."""

    def rating_from_participant(self, participant: "Participant") -> R:
        """Build this system's rating data from a participant's flat fields."""
        return BaseRating(value=participant.rating)  # type: ignore[return-value]

    def __repr__(self) -> str:
        return f"<{type(self).__name__}(id={self.id!r})>"
