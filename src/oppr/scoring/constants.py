"""
Tunable constants for the OPPR calculations.

Constants are grouped by the calculation that reads them. Every calculator
takes an optional `config` argument and falls back to DEFAULT_CONFIG, so
there is no process-wide mutable state: overriding a constant means
building a new OpprConfig with configure() and passing it in.

Base value:  0.5 points per rated player, capped at 32 (64 rated players)
Rating TVA:  rating * 0.000546875 - 0.703125 per player, capped at 25
Ranking TVA: ln(ranking) * -0.211675054 + 1.459827968 per player, capped at 50
TGP:         4% per meaningful game, capped at 100% (finals only) or 200%
Decay:       100% / 75% / 50% / 0% for events 0-1 / 1-2 / 2-3 / 3+ years old

Usage:
    from oppr.scoring.constants import DEFAULT_CONFIG, configure

    doubled = configure({"base_value": {"points_per_player": 1.0}})
    calculate_base_value(players, config=doubled)
"""

from __future__ import annotations

import dataclasses
import math
from dataclasses import dataclass, field
from typing import Any, Mapping

from oppr.errors import ConfigurationError


@dataclass(frozen=True)
class BaseValueConstants:
    points_per_player: float = 0.5
    max_base_value: float = 32.0
    # Player count that reaches max_base_value at the default rate
    max_player_count: int = 64
    rated_player_threshold: int = 5


@dataclass(frozen=True)
class RatingTVAConstants:
    max_value: float = 25.0
    coefficient: float = 0.000546875
    offset: float = 0.703125
    # A 2000-rated player adds 0.390625; 64 of them saturate max_value
    perfect_rating: float = 2000.0

    @property
    def min_effective_rating(self) -> float:
        """Rating at which the per-player contribution reaches zero (~1285.71)."""
        if self.coefficient == 0:
            return math.inf
        return self.offset / self.coefficient


@dataclass(frozen=True)
class RankingTVAConstants:
    max_value: float = 50.0
    coefficient: float = -0.211675054
    offset: float = 1.459827968


@dataclass(frozen=True)
class TVAConstants:
    rating: RatingTVAConstants = field(default_factory=RatingTVAConstants)
    ranking: RankingTVAConstants = field(default_factory=RankingTVAConstants)
    max_players_considered: int = 64


@dataclass(frozen=True)
class TGPMultipliers:
    four_player_groups: float = 2.0
    three_player_groups: float = 1.5
    # Qualifying format multipliers on the base game value
    unlimited_best_game: float = 2.0
    hybrid_best_game: float = 3.0
    unlimited_card: float = 4.0


@dataclass(frozen=True)
class BallAdjustments:
    one_ball: float = 0.33
    two_ball: float = 0.66
    three_plus_ball: float = 1.0


@dataclass(frozen=True)
class UnlimitedQualifyingConstants:
    percent_per_hour: float = 0.01
    max_bonus: float = 0.2
    min_hours_for_multiplier: float = 20.0


@dataclass(frozen=True)
class FlipFrenzyConstants:
    three_ball_divisor: float = 2.0
    one_ball_divisor: float = 3.0


@dataclass(frozen=True)
class FinalsRequirements:
    min_finalists_percent: float = 0.1
    max_finalists_percent: float = 0.5


@dataclass(frozen=True)
class TGPConstants:
    base_game_value: float = 0.04
    # Events without a separate qualifying stage top out at 100%
    max_without_finals: float = 1.0
    max_with_finals: float = 2.0
    max_games_for_200_percent: int = 50
    multipliers: TGPMultipliers = field(default_factory=TGPMultipliers)
    ball_adjustments: BallAdjustments = field(default_factory=BallAdjustments)
    unlimited_qualifying: UnlimitedQualifyingConstants = field(
        default_factory=UnlimitedQualifyingConstants
    )
    flip_frenzy: FlipFrenzyConstants = field(default_factory=FlipFrenzyConstants)
    finals_requirements: FinalsRequirements = field(default_factory=FinalsRequirements)


@dataclass(frozen=True)
class EventBoosterConstants:
    none: float = 1.0
    certified: float = 1.25
    certified_plus: float = 1.5
    championship_series: float = 1.5
    major: float = 2.0
    # Certification requirements (Major/Championship Series are designated)
    certified_min_finalists: int = 24
    certified_max_duration_days: int = 4
    certified_plus_min_rated_players: int = 128


@dataclass(frozen=True)
class PointDistributionConstants:
    linear_percentage: float = 0.1
    dynamic_percentage: float = 0.9
    position_exponent: float = 0.7
    value_exponent: float = 3.0
    max_dynamic_players: int = 64


@dataclass(frozen=True)
class TimeDecayConstants:
    year_0_to_1: float = 1.0
    year_1_to_2: float = 0.75
    year_2_to_3: float = 0.5
    year_3_plus: float = 0.0
    days_per_year: int = 365


@dataclass(frozen=True)
class RankingConstants:
    top_events_count: int = 15
    entry_ranking_percentile: float = 0.1


@dataclass(frozen=True)
class ValidationConstants:
    min_players: int = 3
    min_private_players: int = 16
    max_games_per_machine: int = 3


@dataclass(frozen=True)
class OpprConfig:
    """
    Complete set of calculation constants.

    Instances are immutable. Use configure() (or OpprConfig.configure) to
    get a copy with some leaves overridden, and OpprConfig.default() to get
    back to the compiled-in values.
    """
    base_value: BaseValueConstants = field(default_factory=BaseValueConstants)
    tva: TVAConstants = field(default_factory=TVAConstants)
    tgp: TGPConstants = field(default_factory=TGPConstants)
    event_boosters: EventBoosterConstants = field(default_factory=EventBoosterConstants)
    point_distribution: PointDistributionConstants = field(
        default_factory=PointDistributionConstants
    )
    time_decay: TimeDecayConstants = field(default_factory=TimeDecayConstants)
    ranking: RankingConstants = field(default_factory=RankingConstants)
    validation: ValidationConstants = field(default_factory=ValidationConstants)

    @classmethod
    def default(cls) -> "OpprConfig":
        return cls()

    def configure(self, overrides: Mapping[str, Any] | None) -> "OpprConfig":
        """Return a copy with `overrides` deep-merged on top of this config."""
        if not overrides:
            return self
        return _deep_merge(self, overrides, path="")

    def to_dict(self) -> dict[str, Any]:
        return dataclasses.asdict(self)


def _deep_merge(target: Any, overrides: Mapping[str, Any], path: str) -> Any:
    """
    Merge a nested mapping into a frozen dataclass tree.

    Keys are matched case-insensitively so both {"base_value": ...} and the
    upper-case {"BASE_VALUE": {"POINTS_PER_PLAYER": ...}} spelling work.
    """
    if not isinstance(overrides, Mapping):
        raise ConfigurationError(
            f"Override for '{path or 'config'}' must be a mapping, got {type(overrides).__name__}"
        )

    known = {f.name: f for f in dataclasses.fields(target)}
    changes: dict[str, Any] = {}

    for raw_key, value in overrides.items():
        key = str(raw_key).lower()
        full_path = f"{path}.{key}" if path else key
        if key not in known:
            raise ConfigurationError(f"Unknown configuration key: {full_path}")
        if value is None:
            continue

        current = getattr(target, key)
        if dataclasses.is_dataclass(current):
            changes[key] = _deep_merge(current, value, full_path)
        elif isinstance(value, Mapping):
            raise ConfigurationError(f"Configuration key {full_path} is not a group")
        elif isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ConfigurationError(
                f"Configuration key {full_path} must be numeric, got {value!r}"
            )
        else:
            changes[key] = value

    return dataclasses.replace(target, **changes)


DEFAULT_CONFIG = OpprConfig()


def configure(
    overrides: Mapping[str, Any] | None,
    base: OpprConfig | None = None,
) -> OpprConfig:
    """
    Deep-merge partial overrides onto `base` (defaults when omitted).

    Unspecified leaves keep their current values. The result is a new
    config; `base` is never modified.
    """
    return (base or DEFAULT_CONFIG).configure(overrides)


def reset() -> OpprConfig:
    """Return a fresh default configuration."""
    return OpprConfig.default()
