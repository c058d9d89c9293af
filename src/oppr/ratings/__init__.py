"""
Rating systems.

RatingSystem is the pluggable interface; Glicko is the built-in
implementation. Systems are looked up through a RatingSystemRegistry the
caller owns.
"""

from oppr.ratings.base import (
    BaseRating,
    MatchResult,
    PlayerRatingResult,
    RatingSystem,
    RatingUpdateResult,
)
from oppr.ratings.glicko import GlickoConfig, GlickoRating, GlickoRatingSystem
from oppr.ratings.player import get_player_rating_systems, get_primary_rating, has_rating
from oppr.ratings.registry import RatingSystemRegistry, build_default_registry
from oppr.ratings.updater import apply_bulk_inactivity_decay, update_tournament_ratings

__all__ = [
    "BaseRating",
    "MatchResult",
    "PlayerRatingResult",
    "RatingSystem",
    "RatingUpdateResult",
    "GlickoConfig",
    "GlickoRating",
    "GlickoRatingSystem",
    "RatingSystemRegistry",
    "build_default_registry",
    "get_primary_rating",
    "has_rating",
    "get_player_rating_systems",
    "update_tournament_ratings",
    "apply_bulk_inactivity_decay",
]
