"""
Pytest configuration and fixtures.

This file is automatically loaded by pytest and provides
shared fixtures for all tests.
"""

from datetime import date

import pytest

from oppr.config import get_settings
from oppr.models import (
    FinalsConfig,
    FinalsFormatType,
    FinishResult,
    FormatConfig,
    Participant,
    QualifyingConfig,
    QualifyingType,
)
from oppr.ratings.glicko import GlickoRatingSystem


@pytest.fixture
def reference_date():
    """Fixed 'today' so decay tests don't depend on the clock."""
    return date(2025, 6, 1)


@pytest.fixture
def rated_field():
    """
    20 rated players with ratings spread evenly from 1300 to 1900.

    Player p1 is the strongest; rankings follow rating order.
    """
    return [
        Participant.create(
            id=f"p{i + 1}",
            rating=1900 - i * (600 / 19),
            rating_deviation=50.0,
            ranking=i + 1,
            event_count=10,
        )
        for i in range(20)
    ]


@pytest.fixture
def unrated_field():
    """Ten players who haven't played enough events to be rated."""
    return [Participant.create(id=f"u{i + 1}", event_count=2) for i in range(10)]


@pytest.fixture
def standard_format():
    """Limited qualifying (7 games) plus 12 finals games in 4-player groups."""
    return FormatConfig(
        qualifying=QualifyingConfig(type=QualifyingType.LIMITED, meaningful_games=7),
        finals=FinalsConfig(
            format_type=FinalsFormatType.MATCH_PLAY,
            meaningful_games=12,
            four_player_groups=True,
            finalist_count=8,
        ),
    )


@pytest.fixture
def results_in_order():
    """Finish results ranked in the order the participants were given."""
    def _build(participants):
        return [
            FinishResult(participant=p, position=i + 1)
            for i, p in enumerate(participants)
        ]
    return _build


@pytest.fixture
def glicko():
    return GlickoRatingSystem()


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Settings are cached per process; reset around every test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
