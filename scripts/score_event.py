#!/usr/bin/env python3
"""
Score one tournament from a JSON description and print the result as JSON.

Usage:
    python scripts/score_event.py event.json
    python scripts/score_event.py event.json --output scored.json
    cat event.json | python scripts/score_event.py -

Input shape:
    {
      "booster": "certified",
      "format": {
        "qualifying": {"type": "limited", "meaningful_games": 7},
        "finals": {"format_type": "match-play", "meaningful_games": 12,
                   "four_player_groups": true, "finalist_count": 8},
        "ball_count_adjustment": null
      },
      "participants": [
        {"id": "p1", "rating": 1650, "rating_deviation": 40,
         "ranking": 12, "event_count": 30}
      ],
      "results": [{"participant_id": "p1", "position": 1}]
    }

Instead of "results", an event with finals may give "qualifying" and
"finals" standings lists ({"participant_id", "position", "opted_out"});
they are merged into one finishing order before points are distributed.
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

# Add src to path so this script can be run directly
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from pydantic import TypeAdapter, ValidationError

from oppr.config import configure_logging, get_settings, load_config
from oppr.errors import OpprError
from oppr.models import FinishResult, FormatConfig, Participant, Standing
from oppr.ratings.registry import build_default_registry
from oppr.scoring.tournament import score_tournament
from oppr.scoring.validators import (
    validate_finish_results,
    validate_format_config,
    validate_participants,
)
from oppr.standings import get_merged_standings, merged_results

logger = logging.getLogger("score_event")

_FORMAT_ADAPTER = TypeAdapter(FormatConfig)


def _parse_participants(raw: list[dict[str, Any]], rated_threshold: int) -> list[Participant]:
    participants = []
    for item in raw:
        participants.append(
            Participant.create(
                id=str(item["id"]),
                rating=float(item.get("rating", 1300.0)),
                rating_deviation=float(item.get("rating_deviation", 200.0)),
                ranking=item.get("ranking"),
                event_count=int(item.get("event_count", 0)),
                rated_threshold=rated_threshold,
            )
        )
    return participants


def _parse_standings(raw: list[dict[str, Any]], is_finals: bool) -> list[Standing]:
    return [
        Standing(
            participant_id=str(item["participant_id"]),
            tournament_id="event",
            position=int(item["position"]),
            is_finals=is_finals,
            opted_out=bool(item.get("opted_out", False)),
        )
        for item in raw
    ]


def _parse_results(
    payload: dict[str, Any],
    by_id: dict[str, Participant],
) -> list[FinishResult]:
    if "results" in payload:
        results = []
        for item in payload["results"]:
            participant_id = str(item["participant_id"])
            if participant_id not in by_id:
                raise ValueError(f"Result references unknown participant {participant_id}")
            results.append(
                FinishResult(
                    participant=by_id[participant_id],
                    position=int(item["position"]),
                    opted_out=bool(item.get("opted_out", False)),
                )
            )
        return results

    merged = get_merged_standings(
        _parse_standings(payload.get("qualifying", []), is_finals=False),
        _parse_standings(payload.get("finals", []), is_finals=True),
    )
    return merged_results(merged, by_id)


def score_event(payload: dict[str, Any]) -> dict[str, Any]:
    """Score an event payload and return a JSON-serialisable summary."""
    settings = get_settings()
    config = load_config(settings)
    registry = build_default_registry(settings)
    rating_system = registry.get(settings.default_rating_system)

    participants = _parse_participants(
        payload.get("participants", []),
        config.base_value.rated_player_threshold,
    )
    validate_participants(participants)
    by_id = {p.id: p for p in participants}

    format_config = _FORMAT_ADAPTER.validate_python(payload.get("format", {}))
    validate_format_config(format_config, config)
    results = _parse_results(payload, by_id)
    validate_finish_results(results)

    scored = score_tournament(
        participants,
        results,
        format_config,
        payload.get("booster", "none"),
        config,
        rating_system,
    )

    return {
        "value": scored.value.to_dict(),
        "awards": [
            {
                "participant_id": award.participant.id,
                "position": award.position,
                "linear_points": round(award.linear_points, 4),
                "dynamic_points": round(award.dynamic_points, 4),
                "total_points": round(award.total_points, 4),
                "opted_out": award.opted_out,
            }
            for award in scored.awards
        ],
    }


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Score one tournament from a JSON description.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "input",
        help="Path to the event JSON file, or '-' to read stdin.",
    )
    parser.add_argument(
        "--output",
        default=None,
        help="Write the scored JSON to this path instead of stdout.",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    configure_logging()

    try:
        if args.input == "-":
            payload = json.load(sys.stdin)
        else:
            payload = json.loads(Path(args.input).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        print(f"ERROR: could not read event: {exc}", file=sys.stderr)
        return 1

    try:
        summary = score_event(payload)
    except (OpprError, ValidationError, ValueError, KeyError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    text = json.dumps(summary, indent=2)
    if args.output:
        Path(args.output).write_text(text + "\n", encoding="utf-8")
        logger.info("Wrote %d awards to %s", len(summary["awards"]), args.output)
    else:
        print(text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
