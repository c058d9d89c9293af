"""Tests for efficiency statistics and player ranking profiles."""

from datetime import timedelta

import pytest

from oppr.models import Participant
from oppr.scoring.efficiency import (
    analyze_efficiency_trend,
    calculate_decayed_efficiency,
    calculate_event_efficiency,
    calculate_overall_efficiency,
    calculate_top_n_efficiency,
    get_efficiency_stats,
)
from oppr.scoring.ranking import build_player_event, build_player_profile, rank_players


@pytest.fixture
def make_event(reference_date):
    def _make(points, days_ago=30, first_place_value=100.0, tournament_id=None):
        return build_player_event(
            tournament_id=tournament_id or f"t{points}-{days_ago}",
            event_date=reference_date - timedelta(days=days_ago),
            position=1,
            points_earned=points,
            first_place_value=first_place_value,
            reference_date=reference_date,
        )
    return _make


class TestEfficiency:
    def test_event_efficiency(self):
        assert calculate_event_efficiency(25.0, 100.0) == 25.0
        assert calculate_event_efficiency(25.0, 0.0) == 0.0

    def test_overall_ignores_inactive(self, make_event):
        events = [make_event(50.0), make_event(100.0, days_ago=1200)]
        assert calculate_overall_efficiency(events) == pytest.approx(50.0)

    def test_empty(self):
        assert calculate_overall_efficiency([]) == 0.0
        assert get_efficiency_stats([]).overall == 0.0

    def test_top_n(self, make_event):
        events = [make_event(p) for p in (90.0, 80.0, 10.0)]
        assert calculate_top_n_efficiency(events, top_n=2) == pytest.approx(85.0)

    def test_decayed(self, make_event):
        events = [make_event(80.0, days_ago=400)]
        assert calculate_decayed_efficiency(events) == pytest.approx(60.0)

    def test_trend_improving(self, make_event):
        old = [make_event(10.0, days_ago=300 + i) for i in range(10)]
        recent = [make_event(90.0, days_ago=10 + i) for i in range(3)]
        trend = analyze_efficiency_trend(old + recent, window_size=3)

        assert trend.trend == "improving"
        assert trend.recent_efficiency == pytest.approx(90.0)

    def test_trend_stable(self, make_event):
        events = [make_event(50.0, days_ago=10 + i) for i in range(6)]
        assert analyze_efficiency_trend(events, window_size=3).trend == "stable"

    def test_stats(self, make_event):
        stats = get_efficiency_stats([make_event(p) for p in (10.0, 50.0, 90.0)])
        assert stats.best == 90.0
        assert stats.worst == 10.0
        assert stats.average == pytest.approx(50.0)
        assert stats.median == 50.0


class TestPlayerProfile:
    def test_top_fifteen_events(self, make_event):
        events = [make_event(float(p)) for p in range(1, 21)]
        profile = build_player_profile(Participant.create(id="a"), events)

        assert len(profile.top_events) == 15
        assert profile.total_points == pytest.approx(sum(range(6, 21)))

    def test_decay_applied_to_total(self, make_event):
        events = [make_event(100.0, days_ago=30), make_event(100.0, days_ago=400)]
        profile = build_player_profile(Participant.create(id="a"), events)
        assert profile.total_points == pytest.approx(175.0)

    def test_expired_events_dropped(self, make_event):
        events = [make_event(100.0, days_ago=1200)]
        profile = build_player_profile(Participant.create(id="a"), events)

        assert profile.events == []
        assert profile.total_points == 0.0

    def test_reference_date_recomputes_decay(self, make_event, reference_date):
        events = [make_event(100.0, days_ago=30)]
        later = reference_date + timedelta(days=400)

        profile = build_player_profile(Participant.create(id="a"), events, reference_date=later)

        assert profile.top_events[0].decay_multiplier == 0.75
        assert profile.total_points == pytest.approx(75.0)


class TestRankPlayers:
    def test_order_and_rankings(self, make_event):
        profiles = [
            build_player_profile(Participant.create(id=pid), [make_event(points)])
            for pid, points in (("a", 10.0), ("b", 30.0), ("c", 20.0), ("d", 0.0))
        ]

        ranked = rank_players(profiles)

        assert [(r.ranking, r.profile.participant.id) for r in ranked] == [
            (1, "b"),
            (2, "c"),
            (3, "a"),
        ]

    def test_ties_broken_by_id(self, make_event):
        profiles = [
            build_player_profile(Participant.create(id=pid), [make_event(10.0)])
            for pid in ("z", "m")
        ]
        assert [r.profile.participant.id for r in rank_players(profiles)] == ["m", "z"]
