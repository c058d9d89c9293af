"""
Player ranking profiles.

A player's ranking points are the sum of decayed points from their best
15 active events. Events older than 3 years have fully decayed and drop
out entirely.
"""

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional

from oppr.models import Participant, PlayerEvent, PlayerProfile
from oppr.scoring.constants import DEFAULT_CONFIG, OpprConfig
from oppr.scoring.decay import get_event_decay_info
from oppr.scoring.efficiency import calculate_overall_efficiency


def build_player_event(
    tournament_id: str,
    event_date: date,
    position: int,
    points_earned: float,
    first_place_value: float,
    reference_date: Optional[date] = None,
    config: Optional[OpprConfig] = None,
) -> PlayerEvent:
    """Attach age and decay to one of a player's results."""
    info = get_event_decay_info(event_date, reference_date, config)
    return PlayerEvent(
        tournament_id=tournament_id,
        event_date=event_date,
        position=position,
        points_earned=points_earned,
        first_place_value=first_place_value,
        age_in_days=info.age_in_days,
        decay_multiplier=info.decay_multiplier,
    )


def build_player_profile(
    participant: Participant,
    events: Iterable[PlayerEvent],
    reference_date: Optional[date] = None,
    config: Optional[OpprConfig] = None,
) -> PlayerProfile:
    """
    Summarise a player's active events into ranking points.

    Args:
        participant: The player
        events: Their events (see build_player_event)
        reference_date: When given, every event's age and decay are
            recomputed as of this date; otherwise the stored decay is used
        config: Calculation constants (defaults when omitted)

    Returns:
        PlayerProfile with the top events and their decayed point total
    """
    if reference_date is not None:
        events = [
            build_player_event(
                e.tournament_id, e.event_date, e.position, e.points_earned,
                e.first_place_value, reference_date, config,
            )
            for e in events
        ]
    top_count = (config or DEFAULT_CONFIG).ranking.top_events_count
    active = [e for e in events if e.decay_multiplier > 0]
    top_events = sorted(active, key=lambda e: e.decayed_points, reverse=True)[:top_count]

    return PlayerProfile(
        participant=participant,
        events=active,
        top_events=top_events,
        total_points=sum(e.decayed_points for e in top_events),
        efficiency=calculate_overall_efficiency(top_events),
    )


@dataclass(frozen=True)
class RankedPlayer:
    ranking: int
    profile: PlayerProfile


def rank_players(profiles: Iterable[PlayerProfile]) -> list[RankedPlayer]:
    """
    Order profiles by ranking points and assign 1-based world rankings.

    Players with zero points stay unranked and are left out. Ties are
    broken by efficiency, then participant id, so the order is stable.
    """
    scored = [p for p in profiles if p.total_points > 0]
    ordered = sorted(
        scored,
        key=lambda p: (-p.total_points, -p.efficiency, p.participant.id),
    )
    return [RankedPlayer(ranking=i + 1, profile=p) for i, p in enumerate(ordered)]
