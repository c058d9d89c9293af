"""
Standings: merging qualifying and finals, and keeping point/decay fields current.

A tournament with finals stores two standing lists. The merged order puts
every finalist at their finals position, then the remaining qualifiers in
qualifying order:

    finals:      P2 1st, P1 2nd
    qualifying:  P1 1st, P2 2nd, P3 3rd
    merged:      P2 1, P1 2, P3 3
"""

import dataclasses
import logging
from datetime import date, datetime
from typing import Iterable, Mapping, Optional, Sequence

from oppr.errors import InvariantViolation
from oppr.models import FinishResult, MergedStanding, Participant, PointAward, Standing
from oppr.scoring.constants import DEFAULT_CONFIG, OpprConfig
from oppr.scoring.decay import calculate_days_between, get_decay_multiplier

logger = logging.getLogger(__name__)


def _check_stage(standings: Sequence[Standing], stage: str) -> None:
    positions: set[int] = set()
    participants: set[str] = set()
    for s in standings:
        if s.position in positions:
            raise InvariantViolation(f"Duplicate {stage} position {s.position}")
        if s.participant_id in participants:
            raise InvariantViolation(
                f"Participant {s.participant_id} appears twice in {stage} standings"
            )
        positions.add(s.position)
        participants.add(s.participant_id)


def get_merged_standings(
    qualifying: Iterable[Standing],
    finals: Iterable[Standing],
) -> list[MergedStanding]:
    """
    Combine qualifying and finals standings into one finishing order.

    Args:
        qualifying: Qualifying-stage standings for one tournament
        finals: Finals-stage standings for the same tournament (may be empty)

    Returns:
        Merged standings sorted by merged position. Finalists keep their
        finals position; everyone else is numbered from len(finals) + 1 in
        qualifying order.

    Raises:
        InvariantViolation: If either list repeats a position or a participant
    """
    qualifying = sorted(qualifying, key=lambda s: s.position)
    finals = sorted(finals, key=lambda s: s.position)
    _check_stage(qualifying, "qualifying")
    _check_stage(finals, "finals")

    finalist_ids = {s.participant_id for s in finals}
    non_finalists = [s for s in qualifying if s.participant_id not in finalist_ids]

    merged = [
        MergedStanding(standing=s, merged_position=s.position, is_finalist=True)
        for s in finals
    ]
    merged.extend(
        MergedStanding(standing=s, merged_position=len(finals) + i + 1, is_finalist=False)
        for i, s in enumerate(non_finalists)
    )
    return sorted(merged, key=lambda m: m.merged_position)


def merged_results(
    merged: Iterable[MergedStanding],
    participants_by_id: Mapping[str, Participant],
) -> list[FinishResult]:
    """
    Turn merged standings into FinishResults for point distribution.

    Raises:
        InvariantViolation: If a standing references an unknown participant
    """
    results = []
    for m in merged:
        participant = participants_by_id.get(m.participant_id)
        if participant is None:
            raise InvariantViolation(f"Unknown participant {m.participant_id}")
        results.append(
            FinishResult(
                participant=participant,
                position=m.merged_position,
                opted_out=m.standing.opted_out,
            )
        )
    return results


def _tournament_date(
    standing: Standing,
    tournament_dates: Mapping[str, date | datetime],
) -> date | datetime:
    event_date = tournament_dates.get(standing.tournament_id)
    if event_date is None:
        raise InvariantViolation(
            f"Tournament {standing.tournament_id} for standing of "
            f"{standing.participant_id} not found"
        )
    return event_date


def apply_standing_points(
    standing: Standing,
    award: Optional[PointAward],
    tournament_dates: Mapping[str, date | datetime],
    reference_date: Optional[date | datetime] = None,
    config: Optional[OpprConfig] = None,
) -> Standing:
    """
    Recompute a standing's point, age and decay fields.

    Args:
        standing: The stored standing
        award: Points for this standing, or None to keep the stored points
        tournament_dates: Tournament id -> event date
        reference_date: Date to measure age from (today when omitted)
        config: Calculation constants (defaults when omitted)

    Returns:
        A new Standing with linear/dynamic/total points, age_in_days,
        decay_multiplier and decayed_points filled in

    Raises:
        InvariantViolation: If the standing's tournament has no date
    """
    event_date = _tournament_date(standing, tournament_dates)

    if award is not None:
        linear, dynamic, total = award.linear_points, award.dynamic_points, award.total_points
    else:
        linear = standing.linear_points or 0.0
        dynamic = standing.dynamic_points or 0.0
        total = standing.total_points if standing.total_points is not None else linear + dynamic

    days_per_year = (config or DEFAULT_CONFIG).time_decay.days_per_year
    age_in_days = calculate_days_between(event_date, reference_date)
    multiplier = get_decay_multiplier(age_in_days / days_per_year, config)

    return dataclasses.replace(
        standing,
        linear_points=linear,
        dynamic_points=dynamic,
        total_points=total,
        age_in_days=age_in_days,
        decay_multiplier=multiplier,
        decayed_points=total * multiplier,
    )


def recalculate_standing_decay(
    standings: Iterable[Standing],
    tournament_dates: Mapping[str, date | datetime],
    reference_date: Optional[date | datetime] = None,
    config: Optional[OpprConfig] = None,
) -> list[Standing]:
    """Refresh age and decay for many standings, keeping their stored points."""
    if reference_date is None:
        reference_date = date.today()
    updated = [
        apply_standing_points(s, None, tournament_dates, reference_date, config)
        for s in standings
    ]
    logger.info("Recalculated decay for %d standings as of %s", len(updated), reference_date)
    return updated
