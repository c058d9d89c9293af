"""
Time decay for earned points.

Points lose value as the event ages:

    0-1 years old: 100%
    1-2 years old:  75%
    2-3 years old:  50%
    3+ years old:    0%

Age is whole days between the event and a reference date, divided by 365.
The reference date is always an argument so historical recalculations are
reproducible; it only defaults to today when the caller leaves it out.
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, Optional

from oppr.scoring.constants import DEFAULT_CONFIG, OpprConfig


def _as_date(value: date | datetime) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def calculate_days_between(
    event_date: date | datetime,
    reference_date: Optional[date | datetime] = None,
) -> int:
    """Whole days from event_date to reference_date (negative for future events)."""
    if reference_date is None:
        reference_date = date.today()
    if isinstance(event_date, datetime) and isinstance(reference_date, datetime):
        # floor(), matching whole elapsed days for timestamps
        return (reference_date - event_date).days
    return (_as_date(reference_date) - _as_date(event_date)).days


def calculate_event_age(
    event_date: date | datetime,
    reference_date: Optional[date | datetime] = None,
    config: Optional[OpprConfig] = None,
) -> float:
    """Event age in (fractional) years."""
    constants = (config or DEFAULT_CONFIG).time_decay
    return calculate_days_between(event_date, reference_date) / constants.days_per_year


def get_decay_multiplier(age_in_years: float, config: Optional[OpprConfig] = None) -> float:
    """
    Map an event age to its decay multiplier.

    Args:
        age_in_years: Age of the event in years
        config: Calculation constants (defaults when omitted)

    Returns:
        1.0, 0.75, 0.5 or 0.0 at the defaults

    Examples:
        get_decay_multiplier(0.99)  # → 1.0
        get_decay_multiplier(1.0)   # → 0.75
        get_decay_multiplier(3.5)   # → 0.0
    """
    constants = (config or DEFAULT_CONFIG).time_decay
    if age_in_years < 1:
        return constants.year_0_to_1
    if age_in_years < 2:
        return constants.year_1_to_2
    if age_in_years < 3:
        return constants.year_2_to_3
    return constants.year_3_plus


def calculate_decay_multiplier(
    event_date: date | datetime,
    reference_date: Optional[date | datetime] = None,
    config: Optional[OpprConfig] = None,
) -> float:
    """Decay multiplier for an event held on event_date, seen from reference_date."""
    return get_decay_multiplier(calculate_event_age(event_date, reference_date, config), config)


def apply_time_decay(
    points: float,
    event_date: date | datetime,
    reference_date: Optional[date | datetime] = None,
    config: Optional[OpprConfig] = None,
) -> float:
    """Points after decay."""
    return points * calculate_decay_multiplier(event_date, reference_date, config)


def is_event_active(
    event_date: date | datetime,
    reference_date: Optional[date | datetime] = None,
    config: Optional[OpprConfig] = None,
) -> bool:
    """Events under 3 years old still carry points."""
    return calculate_event_age(event_date, reference_date, config) < 3


def filter_active_events(
    event_dates: Iterable[date | datetime],
    reference_date: Optional[date | datetime] = None,
    config: Optional[OpprConfig] = None,
) -> list[date | datetime]:
    if reference_date is None:
        reference_date = date.today()
    return [d for d in event_dates if is_event_active(d, reference_date, config)]


@dataclass(frozen=True)
class EventDecayInfo:
    age_in_days: int
    age_in_years: float
    decay_multiplier: float
    is_active: bool


def get_event_decay_info(
    event_date: date | datetime,
    reference_date: Optional[date | datetime] = None,
    config: Optional[OpprConfig] = None,
) -> EventDecayInfo:
    """Age, multiplier and active flag for an event in one call."""
    constants = (config or DEFAULT_CONFIG).time_decay
    age_in_days = calculate_days_between(event_date, reference_date)
    age_in_years = age_in_days / constants.days_per_year
    return EventDecayInfo(
        age_in_days=age_in_days,
        age_in_years=age_in_years,
        decay_multiplier=get_decay_multiplier(age_in_years, config),
        is_active=age_in_years < 3,
    )
