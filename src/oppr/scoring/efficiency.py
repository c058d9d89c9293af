"""
Efficiency statistics.

Efficiency is the share of available points a player actually earned:

    efficiency = points_earned / first_place_value * 100

Only active events (decay multiplier > 0) count.
"""

from dataclasses import dataclass
from typing import Iterable, Literal

from oppr.models import PlayerEvent

Trend = Literal["improving", "declining", "stable"]

# Recent vs overall difference (percentage points) still considered stable
STABLE_TREND_BAND = 5.0


def _active(events: Iterable[PlayerEvent]) -> list[PlayerEvent]:
    return [e for e in events if e.decay_multiplier > 0]


def calculate_event_efficiency(points_earned: float, first_place_value: float) -> float:
    """Efficiency for one event, 0 when the event had no value."""
    if first_place_value == 0:
        return 0.0
    return points_earned / first_place_value * 100


def calculate_overall_efficiency(events: Iterable[PlayerEvent]) -> float:
    """Total points earned over total first place value across active events."""
    active = _active(events)
    total_value = sum(e.first_place_value for e in active)
    if not active or total_value == 0:
        return 0.0
    return sum(e.points_earned for e in active) / total_value * 100


def calculate_top_n_efficiency(events: Iterable[PlayerEvent], top_n: int = 15) -> float:
    """Efficiency over the player's `top_n` best-scoring active events."""
    top = sorted(_active(events), key=lambda e: e.points_earned, reverse=True)[:top_n]
    return calculate_overall_efficiency(top)


def calculate_decayed_efficiency(events: Iterable[PlayerEvent]) -> float:
    """Like overall efficiency, but using decayed points."""
    active = _active(events)
    total_value = sum(e.first_place_value for e in active)
    if not active or total_value == 0:
        return 0.0
    return sum(e.decayed_points for e in active) / total_value * 100


@dataclass(frozen=True)
class EfficiencyTrend:
    overall_efficiency: float
    recent_efficiency: float
    trend: Trend


def analyze_efficiency_trend(
    events: Iterable[PlayerEvent],
    window_size: int = 10,
) -> EfficiencyTrend:
    """Compare the most recent `window_size` events against the player's overall efficiency."""
    ordered = sorted(_active(events), key=lambda e: e.event_date, reverse=True)
    overall = calculate_overall_efficiency(ordered)
    recent = calculate_overall_efficiency(ordered[:window_size])

    difference = recent - overall
    if abs(difference) < STABLE_TREND_BAND:
        trend: Trend = "stable"
    elif difference > 0:
        trend = "improving"
    else:
        trend = "declining"

    return EfficiencyTrend(overall_efficiency=overall, recent_efficiency=recent, trend=trend)


@dataclass(frozen=True)
class EfficiencyStats:
    overall: float = 0.0
    top15: float = 0.0
    best: float = 0.0
    worst: float = 0.0
    average: float = 0.0
    median: float = 0.0


def get_efficiency_stats(events: Iterable[PlayerEvent]) -> EfficiencyStats:
    active = _active(events)
    if not active:
        return EfficiencyStats()

    efficiencies = [
        calculate_event_efficiency(e.points_earned, e.first_place_value) for e in active
    ]
    ranked = sorted(efficiencies, reverse=True)

    return EfficiencyStats(
        overall=calculate_overall_efficiency(active),
        top15=calculate_top_n_efficiency(active, 15),
        best=ranked[0],
        worst=ranked[-1],
        average=sum(efficiencies) / len(efficiencies),
        # upper median for even counts
        median=ranked[len(ranked) // 2],
    )
