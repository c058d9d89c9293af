"""
Input validation for data handed to the engine by importers.

The calculators themselves accept degenerate input (empty fields, zero
games) and return zeros. These validators are for the import/admin layer,
which wants to reject bad data before it is stored.
"""

from datetime import date, datetime
from typing import Iterable, Optional

from oppr.errors import OpprValidationError
from oppr.models import FinishResult, FormatConfig, Participant
from oppr.scoring.constants import DEFAULT_CONFIG, OpprConfig


def validate_minimum_players(player_count: int, config: Optional[OpprConfig] = None) -> None:
    minimum = (config or DEFAULT_CONFIG).validation.min_players
    if player_count < minimum:
        raise OpprValidationError(
            f"Tournament must have at least {minimum} players (got {player_count})"
        )


def validate_private_tournament(
    player_count: int,
    is_private: bool,
    config: Optional[OpprConfig] = None,
) -> None:
    minimum = (config or DEFAULT_CONFIG).validation.min_private_players
    if is_private and player_count < minimum:
        raise OpprValidationError(
            f"Private tournament must have at least {minimum} players (got {player_count})"
        )


def validate_participant(participant: Participant) -> None:
    if not participant.id:
        raise OpprValidationError("Participant must have an ID")
    if participant.rating < 0:
        raise OpprValidationError(
            f"Participant {participant.id} has invalid rating: {participant.rating}"
        )
    if participant.rating_deviation < 0:
        raise OpprValidationError(
            f"Participant {participant.id} has invalid rating deviation: "
            f"{participant.rating_deviation}"
        )
    if participant.ranking is not None and participant.ranking < 0:
        raise OpprValidationError(
            f"Participant {participant.id} has invalid ranking: {participant.ranking}"
        )
    if participant.event_count < 0:
        raise OpprValidationError(
            f"Participant {participant.id} has invalid event count: {participant.event_count}"
        )


def validate_participants(participants: Iterable[Participant]) -> None:
    """Validate each participant and reject empty lists and duplicate ids."""
    players = list(participants)
    if not players:
        raise OpprValidationError("Participants list cannot be empty")

    seen: set[str] = set()
    duplicates: list[str] = []
    for player in players:
        validate_participant(player)
        if player.id in seen:
            duplicates.append(player.id)
        seen.add(player.id)

    if duplicates:
        raise OpprValidationError(f"Duplicate participant IDs found: {', '.join(duplicates)}")


def validate_format_config(
    format_config: FormatConfig,
    config: Optional[OpprConfig] = None,
) -> None:
    qualifying = format_config.qualifying
    finals = format_config.finals

    if qualifying.meaningful_games < 0:
        raise OpprValidationError("Qualifying meaningful games cannot be negative")
    if qualifying.hours is not None and qualifying.hours < 0:
        raise OpprValidationError("Qualifying hours cannot be negative")
    if finals.meaningful_games < 0:
        raise OpprValidationError("Finals meaningful games cannot be negative")
    if finals.finalist_count < 0:
        raise OpprValidationError("Finalist count cannot be negative")

    adjustment = format_config.ball_count_adjustment
    if adjustment is not None and not 0 <= adjustment <= 1:
        raise OpprValidationError("Ball count adjustment must be between 0 and 1")

    if qualifying.machine_count:
        max_per_machine = (config or DEFAULT_CONFIG).validation.max_games_per_machine
        games_per_machine = qualifying.meaningful_games / qualifying.machine_count
        if games_per_machine > max_per_machine:
            raise OpprValidationError(
                f"Cannot exceed {max_per_machine} games per machine (got {games_per_machine:g})"
            )


def validate_finish_results(results: Iterable[FinishResult]) -> None:
    """Every participant valid, positions >= 1 and unique, exactly one winner."""
    ordered = list(results)
    if not ordered:
        raise OpprValidationError("Results cannot be empty")

    positions: set[int] = set()
    for index, result in enumerate(ordered):
        validate_participant(result.participant)
        if result.position < 1:
            raise OpprValidationError(f"Result {index} has invalid position: {result.position}")
        if result.position in positions:
            raise OpprValidationError(f"Duplicate position {result.position} in results")
        positions.add(result.position)

    if 1 not in positions:
        raise OpprValidationError("Must have exactly one player in 1st place (found 0)")


def validate_finals_requirements(
    total_participants: int,
    finalist_count: int,
    config: Optional[OpprConfig] = None,
) -> None:
    """Finals must include between 10% and 50% of the field."""
    if total_participants <= 0:
        raise OpprValidationError("Total participants must be positive")

    requirements = (config or DEFAULT_CONFIG).tgp.finals_requirements
    share = finalist_count / total_participants

    if share < requirements.min_finalists_percent:
        raise OpprValidationError(
            f"Finals must include at least {requirements.min_finalists_percent:.0%} "
            f"of participants (got {share:.1%})"
        )
    if share > requirements.max_finalists_percent:
        raise OpprValidationError(
            f"Finals cannot include more than {requirements.max_finalists_percent:.0%} "
            f"of participants (got {share:.1%})"
        )


def validate_date_not_future(
    value: date | datetime,
    reference_date: Optional[date] = None,
    field_name: str = "Date",
) -> None:
    today = reference_date or date.today()
    as_date = value.date() if isinstance(value, datetime) else value
    if as_date > today:
        raise OpprValidationError(f"{field_name} cannot be in the future")


def validate_percentage(value: float, field_name: str = "Percentage") -> None:
    if not 0 <= value <= 100:
        raise OpprValidationError(f"{field_name} must be between 0 and 100 (got {value})")
