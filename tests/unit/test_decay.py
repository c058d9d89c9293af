"""Unit tests for time decay."""

from datetime import date, datetime, timedelta

import pytest

from oppr.scoring.decay import (
    apply_time_decay,
    calculate_days_between,
    calculate_decay_multiplier,
    calculate_event_age,
    filter_active_events,
    get_decay_multiplier,
    get_event_decay_info,
    is_event_active,
)


class TestDecayMultiplier:
    @pytest.mark.parametrize(
        "age,expected",
        [
            (0.0, 1.0),
            (0.99, 1.0),
            (1.0, 0.75),
            (1.99, 0.75),
            (2.0, 0.5),
            (2.99, 0.5),
            (3.0, 0.0),
            (10.0, 0.0),
        ],
    )
    def test_breakpoints(self, age, expected):
        assert get_decay_multiplier(age) == expected

    def test_from_dates(self, reference_date):
        assert calculate_decay_multiplier(reference_date - timedelta(days=364), reference_date) == 1.0
        assert calculate_decay_multiplier(reference_date - timedelta(days=365), reference_date) == 0.75
        assert calculate_decay_multiplier(reference_date - timedelta(days=730), reference_date) == 0.5
        assert calculate_decay_multiplier(reference_date - timedelta(days=1095), reference_date) == 0.0

    def test_apply_time_decay(self, reference_date):
        event = reference_date - timedelta(days=400)
        assert apply_time_decay(100.0, event, reference_date) == pytest.approx(75.0)


class TestAge:
    def test_days_between(self, reference_date):
        assert calculate_days_between(date(2025, 5, 1), reference_date) == 31

    def test_datetimes_use_whole_days(self):
        start = datetime(2025, 1, 1, 18, 0)
        end = datetime(2025, 1, 3, 12, 0)
        assert calculate_days_between(start, end) == 1

    def test_mixed_date_and_datetime(self, reference_date):
        assert calculate_days_between(datetime(2025, 5, 31, 23, 0), reference_date) == 1

    def test_event_age_in_years(self, reference_date):
        event = reference_date - timedelta(days=730)
        assert calculate_event_age(event, reference_date) == pytest.approx(2.0)

    def test_active_events(self, reference_date):
        recent = reference_date - timedelta(days=100)
        old = reference_date - timedelta(days=1200)

        assert is_event_active(recent, reference_date)
        assert not is_event_active(old, reference_date)
        assert filter_active_events([recent, old], reference_date) == [recent]

    def test_decay_info(self, reference_date):
        info = get_event_decay_info(reference_date - timedelta(days=800), reference_date)
        assert info.age_in_days == 800
        assert info.decay_multiplier == 0.5
        assert info.is_active
