"""Tests for the qualifying/finals merge and stored standing points."""

from datetime import timedelta

import pytest

from oppr.errors import InvariantViolation
from oppr.models import Participant, PointAward, Standing
from oppr.standings import (
    apply_standing_points,
    get_merged_standings,
    merged_results,
    recalculate_standing_decay,
)


def _standing(participant_id, position, is_finals=False, **kwargs):
    return Standing(
        participant_id=participant_id,
        tournament_id="t1",
        position=position,
        is_finals=is_finals,
        **kwargs,
    )


class TestMergedStandings:
    def test_finalists_keep_finals_position(self):
        qualifying = [_standing("P1", 1), _standing("P2", 2), _standing("P3", 3)]
        finals = [_standing("P2", 1, True), _standing("P1", 2, True)]

        merged = get_merged_standings(qualifying, finals)

        assert [(m.participant_id, m.merged_position) for m in merged] == [
            ("P2", 1),
            ("P1", 2),
            ("P3", 3),
        ]
        assert [m.is_finalist for m in merged] == [True, True, False]

    def test_non_finalists_keep_qualifying_order(self):
        qualifying = [_standing(f"P{i}", i) for i in range(1, 7)]
        finals = [_standing("P4", 1, True), _standing("P1", 2, True)]

        merged = get_merged_standings(qualifying, finals)

        assert [m.participant_id for m in merged] == ["P4", "P1", "P2", "P3", "P5", "P6"]
        assert [m.merged_position for m in merged] == [1, 2, 3, 4, 5, 6]

    def test_no_finals(self):
        qualifying = [_standing("P2", 2), _standing("P1", 1)]
        merged = get_merged_standings(qualifying, [])

        assert [(m.participant_id, m.merged_position) for m in merged] == [("P1", 1), ("P2", 2)]
        assert not any(m.is_finalist for m in merged)

    def test_duplicate_position_rejected(self):
        with pytest.raises(InvariantViolation):
            get_merged_standings([_standing("P1", 1), _standing("P2", 1)], [])

    def test_duplicate_participant_rejected(self):
        finals = [_standing("P1", 1, True), _standing("P1", 2, True)]
        with pytest.raises(InvariantViolation):
            get_merged_standings([], finals)

    def test_merged_results(self):
        qualifying = [_standing("P1", 1), _standing("P2", 2, opted_out=True)]
        participants = {pid: Participant.create(id=pid) for pid in ("P1", "P2")}

        results = merged_results(get_merged_standings(qualifying, []), participants)

        assert [(r.participant.id, r.position) for r in results] == [("P1", 1), ("P2", 2)]
        assert results[1].opted_out

    def test_merged_results_unknown_participant(self):
        merged = get_merged_standings([_standing("P9", 1)], [])
        with pytest.raises(InvariantViolation):
            merged_results(merged, {})


class TestStandingPoints:
    @pytest.fixture
    def award(self):
        return PointAward(
            participant=Participant.create(id="P1"),
            position=1,
            linear_points=10.0,
            dynamic_points=90.0,
        )

    def test_points_and_decay(self, award, reference_date):
        dates = {"t1": reference_date - timedelta(days=400)}

        updated = apply_standing_points(_standing("P1", 1), award, dates, reference_date)

        assert updated.linear_points == 10.0
        assert updated.dynamic_points == 90.0
        assert updated.total_points == 100.0
        assert updated.age_in_days == 400
        assert updated.decay_multiplier == 0.75
        assert updated.decayed_points == pytest.approx(75.0)

    def test_input_not_modified(self, award, reference_date):
        standing = _standing("P1", 1)
        apply_standing_points(standing, award, {"t1": reference_date}, reference_date)
        assert standing.total_points is None

    def test_unknown_tournament(self, award, reference_date):
        with pytest.raises(InvariantViolation):
            apply_standing_points(_standing("P1", 1), award, {}, reference_date)

    def test_bulk_recalculation_is_idempotent(self, reference_date):
        standings = [
            _standing("P1", 1, total_points=50.0, linear_points=5.0, dynamic_points=45.0),
            _standing("P2", 2, total_points=20.0, linear_points=4.0, dynamic_points=16.0),
        ]
        dates = {"t1": reference_date - timedelta(days=800)}

        once = recalculate_standing_decay(standings, dates, reference_date)
        twice = recalculate_standing_decay(once, dates, reference_date)

        assert once == twice
        assert [s.decayed_points for s in once] == [25.0, 10.0]
