"""Per-game action metrics derived from a Hanabi event log."""

from __future__ import annotations

from typing import Sequence

from .models import ColorHintEvent, DiscardEvent, GameEvent, NumberHintEvent, PlayEvent


def compute_game_metrics(events: Sequence[GameEvent]) -> dict[str, int | float]:
    """
    Count what the table did over one game.

    Returns dict with:
    - hints_given, plays_attempted, plays_successful, misplays, discards
    - hint_efficiency: successful plays per hint given (0.0 without hints)
    - play_success_rate: successful plays per play attempted (0.0 without plays)
    """
    counts = {
        "hints_given": 0,
        "plays_attempted": 0,
        "plays_successful": 0,
        "misplays": 0,
        "discards": 0,
    }

    for event in events:
        if isinstance(event, (ColorHintEvent, NumberHintEvent)):
            counts["hints_given"] += 1
        elif isinstance(event, PlayEvent):
            counts["plays_attempted"] += 1
            counts["plays_successful" if event.success else "misplays"] += 1
        elif isinstance(event, DiscardEvent):
            counts["discards"] += 1

    hints, plays = counts["hints_given"], counts["plays_attempted"]
    return {
        **counts,
        "hint_efficiency": round(counts["plays_successful"] / hints, 3) if hints else 0.0,
        "play_success_rate": round(counts["plays_successful"] / plays, 3) if plays else 0.0,
    }
