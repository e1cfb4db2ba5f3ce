"""Visibility and observation building for Hanabi.

Core principle: a player can see ALL other players' hands but NOT their own
cards. Their own hand is exposed only as stable card ids; what they know
about those cards is recomputed from the public action history.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict

from .game import check_action
from .knowledge import replay_knowledge
from .models import (
    COLORS,
    MAX_HINT_TOKENS,
    MAX_SCORE,
    NUMBERS,
    Action,
    Card,
    Color,
    ColorHintAction,
    DiscardAction,
    GameEvent,
    HanabiState,
    HintKnowledge,
    HintPolicy,
    NumberHintAction,
    PlayAction,
)
from .rng import DeterministicGenerator


# Keys that must NEVER appear in any player view
FORBIDDEN_KEYS = {
    "deck",
    "deck_order",
    "rng",
    "seed",
    "random",
    "debug",
    "knowledge",
    "_internal",
}

_STRATEGY_SEED_SALT = 0x5EED5EED


class Observation(BaseModel):
    """What one seat is allowed to see at a decision point.

    A frozen value built fresh from the authoritative state; nothing in it
    is shared with the engine.

    Card ids follow the canonical deck order, so ``own_card_ids`` could be
    decoded into colors and values. Information hiding assumes honest
    strategies that treat ids as opaque handles.
    """

    model_config = ConfigDict(frozen=True)

    seat: int
    player_count: int
    turn_number: int
    hint_policy: HintPolicy

    # Seed for reproducible strategy randomness (not the shuffle seed)
    strategy_seed: int | None = None

    # Own hand - ids only (opaque handles), never color/value
    own_card_ids: tuple[int, ...]

    # Other players' hands - VISIBLE
    other_hands: dict[int, tuple[Card, ...]]

    hint_tokens: int
    life_tokens: int
    discard_pile: tuple[Card, ...]
    played_stacks: dict[Color, int]
    deck_count: int
    action_history: tuple[GameEvent, ...]
    final_round_turns_left: int | None = None

    @property
    def own_hand_size(self) -> int:
        return len(self.own_card_ids)

    @property
    def score(self) -> int:
        return min(sum(self.played_stacks.values()), MAX_SCORE)

    @property
    def visible_cards(self) -> list[Card]:
        return [card for seat in sorted(self.other_hands) for card in self.other_hands[seat]]

    @property
    def partner_seats(self) -> list[int]:
        """Other seats in turn order, starting with the next to act."""
        return [(self.seat + offset) % self.player_count for offset in range(1, self.player_count)]


def derive_strategy_seed(seed: int) -> int:
    """Map a game seed to the seed strategies get, so the shuffle seed is never exposed."""
    return DeterministicGenerator(seed ^ _STRATEGY_SEED_SALT).randrange(2**31)


def build_observation(state: HanabiState, seat: int) -> Observation:
    """
    Build the redacted game state view for a specific seat.

    CRITICAL: the seat sees every other hand in full but only the ids of its
    own cards.

    Args:
        state: Current game state
        seat: The seat requesting the view

    Returns:
        Observation safe to hand to that seat's strategy
    """
    if seat < 0 or seat >= len(state.hands):
        raise ValueError(f"Unknown seat: {seat}")

    other_hands = {
        other: tuple(hand)
        for other, hand in enumerate(state.hands)
        if other != seat
    }

    return Observation(
        seat=seat,
        player_count=state.config.num_players,
        turn_number=state.turn_number,
        hint_policy=state.config.hint_policy,
        strategy_seed=derive_strategy_seed(state.seed),
        own_card_ids=tuple(card.id for card in state.hands[seat]),
        other_hands=other_hands,
        hint_tokens=state.hint_tokens,
        life_tokens=state.life_tokens,
        discard_pile=tuple(state.discard_pile),
        played_stacks=dict(state.played_stacks),
        deck_count=len(state.deck),
        action_history=tuple(state.action_history),
        final_round_turns_left=state.final_round_turns_left,
    )


def validate_for_observation(observation: Observation, action: Action) -> str | None:
    """Same legality rules as the engine, using only observation fields."""
    return check_action(
        action,
        actor=observation.seat,
        hand_size=observation.own_hand_size,
        hint_tokens=observation.hint_tokens,
        num_players=observation.player_count,
        hands=observation.other_hands,
        hint_policy=observation.hint_policy,
    )


def legal_actions(observation: Observation) -> list[Action]:
    """
    List every legal action for the observing seat.

    Order: plays by slot, discards by slot, then per target seat (ascending)
    color hints in canonical color order followed by number hints 1-5.
    """
    actions: list[Action] = []
    hand_size = observation.own_hand_size

    for slot in range(hand_size):
        actions.append(PlayAction(slot=slot))

    if observation.hint_tokens < MAX_HINT_TOKENS:
        for slot in range(hand_size):
            actions.append(DiscardAction(slot=slot))

    if observation.hint_tokens > 0:
        for target in sorted(observation.other_hands):
            hand = observation.other_hands[target]
            for color in COLORS:
                if any(card.color == color for card in hand):
                    actions.append(ColorHintAction(target=target, color=color))
            for number in NUMBERS:
                if (
                    observation.hint_policy == HintPolicy.POSITION_ENCODING
                    or any(card.value == number for card in hand)
                ):
                    actions.append(NumberHintAction(target=target, number=number))

    return actions


def knowledge_for_own_slot(observation: Observation, slot: int) -> HintKnowledge | None:
    """What the observer has been told about the card in one of their own slots."""
    if slot < 0 or slot >= observation.own_hand_size:
        return None
    card_id = observation.own_card_ids[slot]
    return replay_knowledge(observation.action_history, card_id, observation.seat)


def knowledge_for_visible_card(observation: Observation, card_id: int) -> HintKnowledge | None:
    """What the holder of a visible card has been told about it."""
    for holder, hand in observation.other_hands.items():
        if any(card.id == card_id for card in hand):
            return replay_knowledge(observation.action_history, card_id, holder)
    return None


def assert_no_leaks(payload: Any, path: str = "") -> None:
    """
    Recursively assert that no forbidden keys appear in a payload.

    Raises AssertionError if any leak is detected.
    """
    if isinstance(payload, dict):
        for key, value in payload.items():
            key_str = str(key).lower()
            current_path = f"{path}.{key}" if path else str(key)

            if key_str in FORBIDDEN_KEYS:
                raise AssertionError(f"Forbidden key '{key}' found at {current_path}")

            if key_str == "my_hand" or key_str == "own_hand":
                raise AssertionError(f"Direct hand access found at {current_path}")

            assert_no_leaks(value, current_path)

    elif isinstance(payload, (list, tuple)):
        for i, item in enumerate(payload):
            assert_no_leaks(item, f"{path}[{i}]")


def assert_view_safe(observation: Observation) -> None:
    """
    Validate that an observation does not reveal the observer's own cards.

    Checks:
    1. The observer's seat is not among the visible hands
    2. None of the observer's card ids appears among visible cards
    3. No forbidden keys in the JSON dump
    """
    if observation.seat in observation.other_hands:
        raise AssertionError(f"Seat {observation.seat}'s own hand found in other_hands - LEAK!")

    own_ids = set(observation.own_card_ids)
    for card in observation.visible_cards:
        if card.id in own_ids:
            raise AssertionError(f"Own card {card.id} exposed with color/value - LEAK!")

    assert_no_leaks(observation.model_dump(mode="json", exclude={"strategy_seed"}))
