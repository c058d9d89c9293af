"""Tests for input validators."""

from datetime import date

import pytest

from oppr.errors import OpprValidationError
from oppr.models import FinalsConfig, FinishResult, FormatConfig, Participant, QualifyingConfig
from oppr.scoring.validators import (
    validate_date_not_future,
    validate_finals_requirements,
    validate_finish_results,
    validate_format_config,
    validate_minimum_players,
    validate_participant,
    validate_participants,
    validate_percentage,
    validate_private_tournament,
)


class TestFieldSize:
    def test_minimum_players(self):
        validate_minimum_players(3)
        with pytest.raises(OpprValidationError, match="at least 3"):
            validate_minimum_players(2)

    def test_private_tournament(self):
        validate_private_tournament(16, is_private=True)
        validate_private_tournament(4, is_private=False)
        with pytest.raises(OpprValidationError):
            validate_private_tournament(15, is_private=True)

    def test_finals_requirements(self):
        validate_finals_requirements(100, 25)
        with pytest.raises(OpprValidationError, match="at least"):
            validate_finals_requirements(100, 5)
        with pytest.raises(OpprValidationError, match="more than"):
            validate_finals_requirements(100, 60)
        with pytest.raises(OpprValidationError):
            validate_finals_requirements(0, 0)


class TestParticipants:
    def test_valid(self):
        validate_participant(Participant.create(id="a", ranking=10, event_count=3))

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"id": ""},
            {"id": "a", "rating": -1},
            {"id": "a", "rating_deviation": -5},
            {"id": "a", "ranking": -2},
            {"id": "a", "event_count": -1},
        ],
    )
    def test_invalid(self, kwargs):
        with pytest.raises(OpprValidationError):
            validate_participant(Participant.create(**kwargs))

    def test_empty_list(self):
        with pytest.raises(OpprValidationError, match="empty"):
            validate_participants([])

    def test_duplicate_ids(self):
        players = [Participant.create(id="a"), Participant.create(id="a")]
        with pytest.raises(OpprValidationError, match="Duplicate"):
            validate_participants(players)

    def test_validation_error_is_value_error(self):
        with pytest.raises(ValueError):
            validate_participants([])


class TestFormatConfig:
    def test_valid(self, standard_format):
        validate_format_config(standard_format)

    def test_negative_games(self):
        with pytest.raises(OpprValidationError):
            validate_format_config(FormatConfig(finals=FinalsConfig(meaningful_games=-1)))

    def test_ball_adjustment_range(self):
        with pytest.raises(OpprValidationError):
            validate_format_config(FormatConfig(ball_count_adjustment=1.5))

    def test_games_per_machine(self):
        validate_format_config(
            FormatConfig(qualifying=QualifyingConfig(meaningful_games=12, machine_count=4))
        )
        with pytest.raises(OpprValidationError, match="games per machine"):
            validate_format_config(
                FormatConfig(qualifying=QualifyingConfig(meaningful_games=13, machine_count=4))
            )


class TestFinishResults:
    def test_valid(self, rated_field, results_in_order):
        validate_finish_results(results_in_order(rated_field))

    def test_empty(self):
        with pytest.raises(OpprValidationError):
            validate_finish_results([])

    def test_duplicate_position(self):
        results = [
            FinishResult(participant=Participant.create(id="a"), position=1),
            FinishResult(participant=Participant.create(id="b"), position=1),
        ]
        with pytest.raises(OpprValidationError, match="Duplicate position"):
            validate_finish_results(results)

    def test_no_winner(self):
        results = [FinishResult(participant=Participant.create(id="a"), position=2)]
        with pytest.raises(OpprValidationError, match="1st place"):
            validate_finish_results(results)


class TestScalars:
    def test_date_not_future(self):
        validate_date_not_future(date(2025, 1, 1), reference_date=date(2025, 6, 1))
        with pytest.raises(OpprValidationError, match="Event date"):
            validate_date_not_future(
                date(2025, 7, 1), reference_date=date(2025, 6, 1), field_name="Event date"
            )

    def test_percentage(self):
        validate_percentage(0)
        validate_percentage(100)
        with pytest.raises(OpprValidationError):
            validate_percentage(101)
