"""
Unit tests for Tournament Grading Percentage.

Covers the per-game value, group multipliers, unlimited/hybrid qualifying,
ball count adjustment, the two caps, and the special-format helpers.
"""

import pytest

from oppr.models import FinalsConfig, FormatConfig, QualifyingConfig, QualifyingType
from oppr.scoring.tgp import (
    calculate_finals_tgp,
    calculate_flip_frenzy_tgp,
    calculate_qualifying_tgp,
    calculate_tgp,
    calculate_unlimited_card_tgp,
    max_tgp_for,
    validate_finals_eligibility,
)


def _finals_only(games, **kwargs):
    return FormatConfig(finals=FinalsConfig(meaningful_games=games, **kwargs))


class TestCalculateTGP:
    def test_standard_format(self, standard_format):
        """7 qualifying games + 12 finals games in 4-player groups = 124%."""
        assert calculate_qualifying_tgp(standard_format) == pytest.approx(0.28)
        assert calculate_finals_tgp(standard_format) == pytest.approx(0.96)
        assert calculate_tgp(standard_format) == pytest.approx(1.24)

    def test_finals_only_capped_at_100_percent(self):
        format_config = _finals_only(30, four_player_groups=True)
        assert max_tgp_for(format_config) == 1.0
        assert calculate_tgp(format_config) == 1.0

    def test_with_qualifying_capped_at_200_percent(self):
        format_config = FormatConfig(
            qualifying=QualifyingConfig(type=QualifyingType.LIMITED, meaningful_games=30),
            finals=FinalsConfig(meaningful_games=30, four_player_groups=True),
        )
        assert max_tgp_for(format_config) == 2.0
        assert calculate_tgp(format_config) == 2.0

    def test_no_games_is_zero(self):
        assert calculate_tgp(FormatConfig()) == 0.0

    def test_three_player_groups(self):
        assert calculate_tgp(_finals_only(10, three_player_groups=True)) == pytest.approx(0.6)

    def test_multi_matchplay_ignores_groups(self):
        format_config = _finals_only(10, four_player_groups=True, multi_matchplay=True)
        assert calculate_tgp(format_config) == pytest.approx(0.4)

    def test_ball_count_adjustment(self):
        format_config = FormatConfig(
            finals=FinalsConfig(meaningful_games=10),
            ball_count_adjustment=0.5,
        )
        assert calculate_tgp(format_config) == pytest.approx(0.2)


class TestQualifyingTGP:
    def test_none_qualifying(self):
        assert calculate_qualifying_tgp(_finals_only(10)) == 0.0

    def test_unlimited_with_20_hours_doubles_and_adds_time(self):
        format_config = FormatConfig(
            qualifying=QualifyingConfig(
                type=QualifyingType.UNLIMITED, meaningful_games=10, hours=20
            )
        )
        # 10 * 8% + 20% time bonus
        assert calculate_qualifying_tgp(format_config) == pytest.approx(1.0)

    def test_unlimited_short_window(self):
        format_config = FormatConfig(
            qualifying=QualifyingConfig(
                type=QualifyingType.UNLIMITED, meaningful_games=10, hours=10
            )
        )
        # No multiplier under 20 hours, 1% per hour
        assert calculate_qualifying_tgp(format_config) == pytest.approx(0.5)

    def test_time_bonus_capped(self):
        format_config = FormatConfig(
            qualifying=QualifyingConfig(
                type=QualifyingType.UNLIMITED, meaningful_games=0, hours=100
            )
        )
        assert calculate_qualifying_tgp(format_config) == pytest.approx(0.2)

    def test_hybrid_triples(self):
        format_config = FormatConfig(
            qualifying=QualifyingConfig(type=QualifyingType.HYBRID, meaningful_games=5)
        )
        assert calculate_qualifying_tgp(format_config) == pytest.approx(0.6)


class TestSpecialFormats:
    def test_unlimited_card(self):
        assert calculate_unlimited_card_tgp(10, 20, 0) == pytest.approx(1.8)

    def test_unlimited_card_capped(self):
        assert calculate_unlimited_card_tgp(20, 40, 10) == 2.0

    def test_flip_frenzy(self):
        assert calculate_flip_frenzy_tgp(30) == pytest.approx(0.6)
        assert calculate_flip_frenzy_tgp(30, is_one_ball=True) == pytest.approx(0.4)

    def test_finals_eligibility(self):
        assert validate_finals_eligibility(100, 10)
        assert validate_finals_eligibility(100, 50)
        assert not validate_finals_eligibility(100, 5)
        assert not validate_finals_eligibility(100, 51)
        assert not validate_finals_eligibility(0, 0)
