"""Shared builders for hand-crafted game states."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from src.hanabi.models import Card, Color, HanabiConfig, HanabiState, HintPolicy, empty_stacks


def build_state(
    hands,
    deck=(),
    *,
    hint_tokens=8,
    life_tokens=3,
    played_stacks=None,
    hint_policy=HintPolicy.MATCH_REQUIRED,
    current_player=0,
    seed=0,
):
    """
    Build a state from (color, value) pairs.

    Card ids are assigned in order: seat 0's hand, seat 1's hand, ..., then the deck.
    """
    next_id = 0

    def to_cards(pairs):
        nonlocal next_id
        cards = []
        for color, value in pairs:
            cards.append(Card(id=next_id, color=color, value=value))
            next_id += 1
        return cards

    card_hands = [to_cards(hand) for hand in hands]
    card_deck = to_cards(deck)
    stacks = empty_stacks()
    stacks.update(played_stacks or {})

    return HanabiState(
        config=HanabiConfig(num_players=len(hands), hint_policy=hint_policy),
        seed=seed,
        hands=card_hands,
        deck=card_deck,
        hint_tokens=hint_tokens,
        life_tokens=life_tokens,
        played_stacks=stacks,
        current_player=current_player,
    )


@pytest.fixture
def make_state():
    return build_state

