"""
Tournament scoring module.

Implements the OPPR point calculations:
- Base value from the number of rated players
- Tournament Value Adjustment (TVA) from field ratings and rankings
- Tournament Grading Percentage (TGP) from the format
- Event booster multipliers
- Point distribution (linear + dynamic) over finishing positions
- Time decay of earned points
- Efficiency statistics and player ranking profiles
"""

from oppr.scoring.base_value import calculate_base_value, count_rated_players, is_player_rated
from oppr.scoring.boosters import (
    apply_event_booster,
    determine_event_booster,
    get_event_booster_multiplier,
    qualifies_for_certified,
    qualifies_for_certified_plus,
)
from oppr.scoring.constants import DEFAULT_CONFIG, OpprConfig, configure, reset
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
from oppr.scoring.distribution import (
    calculate_dynamic_points,
    calculate_linear_points,
    calculate_player_points,
    calculate_position_percentage,
    distribute_points,
    get_points_for_position,
)
from oppr.scoring.ranking import build_player_event, build_player_profile, rank_players
from oppr.scoring.tgp import (
    calculate_finals_tgp,
    calculate_flip_frenzy_tgp,
    calculate_qualifying_tgp,
    calculate_tgp,
    calculate_unlimited_card_tgp,
    validate_finals_eligibility,
)
from oppr.scoring.tournament import TournamentScore, calculate_tournament_value, score_tournament
from oppr.scoring.tva import (
    calculate_player_ranking_contribution,
    calculate_player_rating_contribution,
    calculate_ranking_tva,
    calculate_rating_tva,
    calculate_total_tva,
    get_top_ranked_players,
    get_top_rated_players,
    rating_contributes_to_tva,
)

__all__ = [
    "DEFAULT_CONFIG",
    "OpprConfig",
    "configure",
    "reset",
    "calculate_base_value",
    "count_rated_players",
    "is_player_rated",
    "calculate_player_rating_contribution",
    "calculate_rating_tva",
    "rating_contributes_to_tva",
    "get_top_rated_players",
    "calculate_player_ranking_contribution",
    "calculate_ranking_tva",
    "get_top_ranked_players",
    "calculate_total_tva",
    "calculate_qualifying_tgp",
    "calculate_finals_tgp",
    "calculate_tgp",
    "calculate_unlimited_card_tgp",
    "calculate_flip_frenzy_tgp",
    "validate_finals_eligibility",
    "get_event_booster_multiplier",
    "qualifies_for_certified",
    "qualifies_for_certified_plus",
    "determine_event_booster",
    "apply_event_booster",
    "calculate_linear_points",
    "calculate_dynamic_points",
    "calculate_player_points",
    "distribute_points",
    "get_points_for_position",
    "calculate_position_percentage",
    "calculate_days_between",
    "calculate_event_age",
    "get_decay_multiplier",
    "calculate_decay_multiplier",
    "apply_time_decay",
    "is_event_active",
    "filter_active_events",
    "get_event_decay_info",
    "build_player_event",
    "build_player_profile",
    "rank_players",
    "calculate_tournament_value",
    "score_tournament",
    "TournamentScore",
]
