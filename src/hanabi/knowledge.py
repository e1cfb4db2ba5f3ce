"""Hint knowledge bookkeeping shared by the engine and observation replay."""

from __future__ import annotations

from typing import Iterable

from .models import (
    Color,
    ColorHintEvent,
    GameEvent,
    HintKnowledge,
    NumberHintEvent,
)


def record_hint(
    knowledge: HintKnowledge,
    matched: bool,
    *,
    color: Color | None = None,
    number: int | None = None,
) -> HintKnowledge:
    """
    Fold one hint into a card's knowledge record.

    A matching hint sets the dimension as known and clears its exclusions.
    A non-matching hint adds the value to the exclusions (option removal),
    unless that dimension is already known.
    """
    if color is not None:
        if matched:
            return knowledge.model_copy(update={"known_color": color, "excluded_colors": ()})
        if knowledge.known_color is not None or color in knowledge.excluded_colors:
            return knowledge
        return knowledge.model_copy(
            update={"excluded_colors": knowledge.excluded_colors + (color,)}
        )

    if number is None:
        raise ValueError("record_hint needs a color or a number")
    if matched:
        return knowledge.model_copy(update={"known_value": number, "excluded_values": ()})
    if knowledge.known_value is not None or number in knowledge.excluded_values:
        return knowledge
    return knowledge.model_copy(
        update={"excluded_values": knowledge.excluded_values + (number,)}
    )


def replay_knowledge(history: Iterable[GameEvent], card_id: int, holder_seat: int) -> HintKnowledge:
    """Rebuild what ``holder_seat`` has been told about ``card_id`` from the event log."""
    knowledge = HintKnowledge()
    for event in history:
        if not isinstance(event, (ColorHintEvent, NumberHintEvent)):
            continue
        if event.target != holder_seat or card_id not in event.hand_card_ids:
            continue
        matched = card_id in event.matched_card_ids
        if isinstance(event, ColorHintEvent):
            knowledge = record_hint(knowledge, matched, color=event.color)
        else:
            knowledge = record_hint(knowledge, matched, number=event.number)
    return knowledge
