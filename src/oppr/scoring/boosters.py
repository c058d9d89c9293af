"""
Event booster multipliers.

Boosters are applied after TGP:

    none 1.0x, certified 1.25x, certified-plus 1.5x,
    championship-series 1.5x, major 2.0x

Major and Championship Series are designated by the organisation. Certified
and Certified+ are earned by meeting format requirements, which
determine_event_booster() checks.
"""

from typing import Optional

from oppr.models import EventBoosterTier
from oppr.scoring.constants import DEFAULT_CONFIG, OpprConfig


def get_event_booster_multiplier(
    tier: EventBoosterTier | str,
    config: Optional[OpprConfig] = None,
) -> float:
    """
    Look up the multiplier for an event booster tier.

    Args:
        tier: Booster tier (enum member or its string value)
        config: Calculation constants (defaults when omitted)

    Returns:
        Multiplier, e.g. 2.0 for majors

    Raises:
        ValueError: If `tier` is not a known booster tier
    """
    constants = (config or DEFAULT_CONFIG).event_boosters
    tier = EventBoosterTier(tier)
    return {
        EventBoosterTier.NONE: constants.none,
        EventBoosterTier.CERTIFIED: constants.certified,
        EventBoosterTier.CERTIFIED_PLUS: constants.certified_plus,
        EventBoosterTier.CHAMPIONSHIP_SERIES: constants.championship_series,
        EventBoosterTier.MAJOR: constants.major,
    }[tier]


def qualifies_for_certified(
    rated_player_count: int,
    has_valid_qualifying: bool,
    has_valid_finals: bool,
    finalist_count: int,
    duration_days: int,
    config: Optional[OpprConfig] = None,
) -> bool:
    """
    Whether an event meets the Certified (125%) requirements.

    Requires at least 24 finalists, valid qualifying and finals formats,
    and no more than 4 consecutive days. Field size doesn't matter here.
    """
    constants = (config or DEFAULT_CONFIG).event_boosters
    if finalist_count < constants.certified_min_finalists:
        return False
    if not has_valid_qualifying or not has_valid_finals:
        return False
    if duration_days > constants.certified_max_duration_days:
        return False
    return True


def qualifies_for_certified_plus(
    rated_player_count: int,
    has_valid_qualifying: bool,
    has_valid_finals: bool,
    finalist_count: int,
    duration_days: int,
    config: Optional[OpprConfig] = None,
) -> bool:
    """Certified requirements plus at least 128 rated players."""
    constants = (config or DEFAULT_CONFIG).event_boosters
    if rated_player_count < constants.certified_plus_min_rated_players:
        return False
    return qualifies_for_certified(
        rated_player_count,
        has_valid_qualifying,
        has_valid_finals,
        finalist_count,
        duration_days,
        config,
    )


def determine_event_booster(
    rated_player_count: int,
    has_valid_qualifying: bool,
    has_valid_finals: bool,
    finalist_count: int,
    duration_days: int,
    config: Optional[OpprConfig] = None,
) -> EventBoosterTier:
    """Highest earned booster tier: certified-plus, certified, or none."""
    args = (
        rated_player_count,
        has_valid_qualifying,
        has_valid_finals,
        finalist_count,
        duration_days,
        config,
    )
    if qualifies_for_certified_plus(*args):
        return EventBoosterTier.CERTIFIED_PLUS
    if qualifies_for_certified(*args):
        return EventBoosterTier.CERTIFIED
    return EventBoosterTier.NONE


def apply_event_booster(
    value: float,
    tier: EventBoosterTier | str,
    config: Optional[OpprConfig] = None,
) -> float:
    return value * get_event_booster_multiplier(tier, config)
