"""
Tournament Grading Percentage (TGP).

TGP measures how much meaningful play a format demands and scales the
tournament value accordingly:

- Base: 4% per meaningful game
- Four-player groups count double, three-player groups 1.5x
  (multi-matchplay formats get no group multiplier)
- Unlimited best-game qualifying with 20+ hours counts 2x, hybrid 3x,
  plus 1% per qualifying hour (max 20%)
- Ball count adjustment scales every game (1-ball 33%, 2-ball 66%)

Events with a separate qualifying stage can reach 200%; finals-only
events are capped at 100%.
"""

from typing import Optional

from oppr.models import FinalsConfig, FormatConfig, QualifyingConfig, QualifyingType
from oppr.scoring.constants import DEFAULT_CONFIG, OpprConfig, TGPConstants


def _group_multiplier(
    stage: QualifyingConfig | FinalsConfig,
    constants: TGPConstants,
) -> float:
    if stage.multi_matchplay:
        return 1.0
    if stage.four_player_groups:
        return constants.multipliers.four_player_groups
    if stage.three_player_groups:
        return constants.multipliers.three_player_groups
    return 1.0


def _ball_adjustment(format_config: FormatConfig) -> float:
    if format_config.ball_count_adjustment is None:
        return 1.0
    return format_config.ball_count_adjustment


def calculate_qualifying_tgp(
    format_config: FormatConfig,
    config: Optional[OpprConfig] = None,
) -> float:
    """
    Calculate the qualifying stage's contribution to TGP.

    Args:
        format_config: Tournament format descriptor
        config: Calculation constants (defaults when omitted)

    Returns:
        Qualifying TGP as a fraction (0.28 = 28%), before the overall cap
    """
    constants = (config or DEFAULT_CONFIG).tgp
    qualifying = format_config.qualifying

    if qualifying.type == QualifyingType.NONE:
        return 0.0

    game_value = constants.base_game_value
    unlimited = constants.unlimited_qualifying

    if (
        qualifying.type == QualifyingType.UNLIMITED
        and qualifying.hours
        and qualifying.hours >= unlimited.min_hours_for_multiplier
    ):
        game_value *= constants.multipliers.unlimited_best_game
    elif qualifying.type == QualifyingType.HYBRID:
        game_value *= constants.multipliers.hybrid_best_game

    game_value *= _group_multiplier(qualifying, constants)

    games = max(0.0, qualifying.meaningful_games)
    tgp = games * game_value * _ball_adjustment(format_config)

    # Time component for unlimited qualifying
    if qualifying.type == QualifyingType.UNLIMITED and qualifying.hours:
        tgp += min(qualifying.hours * unlimited.percent_per_hour, unlimited.max_bonus)

    return tgp


def calculate_finals_tgp(
    format_config: FormatConfig,
    config: Optional[OpprConfig] = None,
) -> float:
    """Finals stage contribution to TGP, before the overall cap."""
    constants = (config or DEFAULT_CONFIG).tgp
    finals = format_config.finals
    game_value = constants.base_game_value * _group_multiplier(finals, constants)
    games = max(0.0, finals.meaningful_games)
    return games * game_value * _ball_adjustment(format_config)


def has_separate_qualifying(format_config: FormatConfig) -> bool:
    qualifying = format_config.qualifying
    return qualifying.type != QualifyingType.NONE and qualifying.meaningful_games > 0


def max_tgp_for(format_config: FormatConfig, config: Optional[OpprConfig] = None) -> float:
    """The TGP cap that applies to this format."""
    constants = (config or DEFAULT_CONFIG).tgp
    if has_separate_qualifying(format_config):
        return constants.max_with_finals
    return constants.max_without_finals


def calculate_tgp(
    format_config: FormatConfig,
    config: Optional[OpprConfig] = None,
) -> float:
    """
    Calculate the total Tournament Grading Percentage.

    Args:
        format_config: Tournament format descriptor
        config: Calculation constants (defaults when omitted)

    Returns:
        TGP as a multiplier, clamped to [0, cap]

    Example:
        # 7 limited qualifying games + 12 finals games in 4-player groups
        # 7 * 4% + 12 * 4% * 2 = 124%
        calculate_tgp(format_config)  # → 1.24
    """
    total = calculate_qualifying_tgp(format_config, config) + calculate_finals_tgp(
        format_config, config
    )
    return max(0.0, min(total, max_tgp_for(format_config, config)))


def calculate_unlimited_card_tgp(
    meaningful_games: float,
    hours: float,
    finals_games: float,
    config: Optional[OpprConfig] = None,
) -> float:
    """
    TGP for unlimited card qualifying.

    Card qualifying counts 4x (16% per game) once qualifying runs 20+ hours,
    plus the usual time bonus. Finals are scored as plain match play.
    """
    constants = (config or DEFAULT_CONFIG).tgp
    unlimited = constants.unlimited_qualifying

    game_value = constants.base_game_value
    if hours >= unlimited.min_hours_for_multiplier:
        game_value *= constants.multipliers.unlimited_card

    qualifying_tgp = meaningful_games * game_value
    qualifying_tgp += min(hours * unlimited.percent_per_hour, unlimited.max_bonus)

    finals_tgp = calculate_finals_tgp(
        FormatConfig(finals=FinalsConfig(meaningful_games=finals_games)),
        config,
    )
    return max(0.0, min(qualifying_tgp + finals_tgp, constants.max_with_finals))


def calculate_flip_frenzy_tgp(
    average_matches: float,
    is_one_ball: bool = False,
    config: Optional[OpprConfig] = None,
) -> float:
    """TGP for Flip Frenzy, based on the average number of matches per player."""
    constants = (config or DEFAULT_CONFIG).tgp
    divisor = (
        constants.flip_frenzy.one_ball_divisor
        if is_one_ball
        else constants.flip_frenzy.three_ball_divisor
    )
    meaningful_games = average_matches / divisor
    return max(0.0, min(meaningful_games * constants.base_game_value, constants.max_without_finals))


def validate_finals_eligibility(
    total_participants: int,
    finalist_count: int,
    config: Optional[OpprConfig] = None,
) -> bool:
    """
    Whether a finals format qualifies for more than 100% TGP.

    Between 10% and 50% of the field must advance to finals.
    """
    if total_participants <= 0:
        return False
    requirements = (config or DEFAULT_CONFIG).tgp.finals_requirements
    share = finalist_count / total_participants
    return requirements.min_finalists_percent <= share <= requirements.max_finalists_percent
