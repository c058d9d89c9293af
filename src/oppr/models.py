"""
Plain data records passed into and out of the calculation engine.

Everything here is a dataclass with no behaviour beyond small derived
properties. The persistence/import layers build these from their own
storage and hand them to the calculators; nothing in this module does I/O.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Optional

# Minimum events before a participant counts as rated. Mirrors
# BaseValueConstants.rated_player_threshold and the Glicko provisional
# threshold; kept here so Participant.create() needs no config import.
RATED_PLAYER_THRESHOLD = 5


class QualifyingType(str, Enum):
    """How qualifying is run."""
    NONE = "none"
    LIMITED = "limited"
    UNLIMITED = "unlimited"
    HYBRID = "hybrid"


class FinalsFormatType(str, Enum):
    """Closed set of finals formats."""
    SINGLE_ELIMINATION = "single-elimination"
    DOUBLE_ELIMINATION = "double-elimination"
    MATCH_PLAY = "match-play"
    BEST_GAME = "best-game"
    CARD_QUALIFYING = "card-qualifying"
    PIN_GOLF = "pin-golf"
    FLIP_FRENZY = "flip-frenzy"
    STRIKE_FORMAT = "strike-format"
    TARGET_MATCH_PLAY = "target-match-play"
    HYBRID = "hybrid"
    NONE = "none"


class EventBoosterTier(str, Enum):
    """Event booster classification. Multipliers live in EventBoosterConstants."""
    NONE = "none"
    CERTIFIED = "certified"
    CERTIFIED_PLUS = "certified-plus"
    CHAMPIONSHIP_SERIES = "championship-series"
    MAJOR = "major"


@dataclass(frozen=True)
class Participant:
    """
    A player entering a tournament.

    Attributes:
        id: Stable identifier from the persistence layer
        rating: Current skill rating (Glicko value by default)
        rating_deviation: Rating uncertainty (RD)
        ranking: World ranking position, 1 = best. None means unranked.
        event_count: Number of events played so far
        is_rated: Whether the player has reached the rated threshold
        ratings: Optional per-rating-system data keyed by system id
    """
    id: str
    rating: float = 1300.0
    rating_deviation: float = 200.0
    ranking: Optional[int] = None
    event_count: int = 0
    is_rated: bool = False
    ratings: dict[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def create(
        cls,
        id: str,
        rating: float = 1300.0,
        rating_deviation: float = 200.0,
        ranking: Optional[int] = None,
        event_count: int = 0,
        ratings: Optional[dict[str, Any]] = None,
        rated_threshold: int = RATED_PLAYER_THRESHOLD,
    ) -> "Participant":
        """Build a participant with is_rated derived from event_count."""
        return cls(
            id=id,
            rating=rating,
            rating_deviation=rating_deviation,
            ranking=ranking,
            event_count=event_count,
            is_rated=event_count >= rated_threshold,
            ratings=dict(ratings or {}),
        )

    @property
    def is_ranked(self) -> bool:
        return self.ranking is not None and self.ranking > 0


@dataclass(frozen=True)
class QualifyingConfig:
    """Qualifying stage descriptor for TGP."""
    type: QualifyingType = QualifyingType.NONE
    meaningful_games: float = 0
    hours: Optional[float] = None
    four_player_groups: bool = False
    three_player_groups: bool = False
    multi_matchplay: bool = False
    machine_count: Optional[int] = None


@dataclass(frozen=True)
class FinalsConfig:
    """Finals stage descriptor for TGP."""
    format_type: FinalsFormatType = FinalsFormatType.NONE
    meaningful_games: float = 0
    four_player_groups: bool = False
    three_player_groups: bool = False
    multi_matchplay: bool = False
    finalist_count: int = 0


@dataclass(frozen=True)
class FormatConfig:
    """
    Tournament format descriptor ("TGP config").

    ball_count_adjustment scales every meaningful game: 1-ball formats
    count 33%, 2-ball 66%, 3+ ball 100%.
    """
    qualifying: QualifyingConfig = field(default_factory=QualifyingConfig)
    finals: FinalsConfig = field(default_factory=FinalsConfig)
    ball_count_adjustment: Optional[float] = None


@dataclass(frozen=True)
class FinishResult:
    """A participant's finishing position in one tournament."""
    participant: Participant
    position: int
    opted_out: bool = False


@dataclass(frozen=True)
class PointAward:
    """Points awarded to one finishing position."""
    participant: Participant
    position: int
    linear_points: float
    dynamic_points: float
    opted_out: bool = False

    @property
    def total_points(self) -> float:
        return self.linear_points + self.dynamic_points


@dataclass(frozen=True)
class TournamentValue:
    """Breakdown of a tournament's first place value."""
    base_value: float
    rating_tva: float
    ranking_tva: float
    tgp: float
    event_booster_multiplier: float

    @property
    def total_tva(self) -> float:
        return self.rating_tva + self.ranking_tva

    @property
    def first_place_value(self) -> float:
        return (
            (self.base_value + self.total_tva)
            * self.tgp
            * self.event_booster_multiplier
        )

    def to_dict(self) -> dict[str, float]:
        return {
            "base_value": self.base_value,
            "rating_tva": self.rating_tva,
            "ranking_tva": self.ranking_tva,
            "total_tva": self.total_tva,
            "tgp": self.tgp,
            "event_booster_multiplier": self.event_booster_multiplier,
            "first_place_value": self.first_place_value,
        }


@dataclass
class Standing:
    """
    A stored standing row: one participant's position in one stage of a tournament.

    Point and decay fields are filled in by oppr.standings.apply_standing_points.
    """
    participant_id: str
    tournament_id: str
    position: int
    is_finals: bool = False
    opted_out: bool = False
    linear_points: Optional[float] = None
    dynamic_points: Optional[float] = None
    total_points: Optional[float] = None
    age_in_days: Optional[int] = None
    decay_multiplier: Optional[float] = None
    decayed_points: Optional[float] = None


@dataclass(frozen=True)
class MergedStanding:
    """A standing with its derived position in the combined qualifying+finals order."""
    standing: Standing
    merged_position: int
    is_finalist: bool

    @property
    def participant_id(self) -> str:
        return self.standing.participant_id

    @property
    def tournament_id(self) -> str:
        return self.standing.tournament_id


@dataclass(frozen=True)
class PlayerEvent:
    """One tournament in a player's history, with decay applied."""
    tournament_id: str
    event_date: date
    position: int
    points_earned: float
    first_place_value: float
    age_in_days: int
    decay_multiplier: float

    @property
    def decayed_points(self) -> float:
        return self.points_earned * self.decay_multiplier


@dataclass(frozen=True)
class PlayerProfile:
    """A player's ranking summary across their active events."""
    participant: Participant
    events: list[PlayerEvent]
    top_events: list[PlayerEvent]
    total_points: float
    efficiency: float
