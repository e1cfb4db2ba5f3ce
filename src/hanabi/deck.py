"""Deck creation, deterministic shuffling and dealing."""

from __future__ import annotations

from .models import CARD_COUNTS, COLORS, Card
from .rng import DeterministicGenerator


def create_deck() -> list[Card]:
    """Create the 50-card deck in canonical order with ids 0-49.

    Colors in COLORS order, values ascending, copies per CARD_COUNTS.
    """
    deck: list[Card] = []
    card_id = 0
    for color in COLORS:
        for value, count in CARD_COUNTS.items():
            for _ in range(count):
                deck.append(Card(id=card_id, color=color, value=value))
                card_id += 1
    return deck


def shuffle_deck(deck: list[Card], seed: int) -> list[Card]:
    """Fisher-Yates shuffle driven by a DeterministicGenerator.

    Returns a new list; the input is left untouched.
    """
    result = list(deck)
    rng = DeterministicGenerator(seed)
    for i in range(len(result) - 1, 0, -1):
        j = int(rng.next_float() * (i + 1))
        result[i], result[j] = result[j], result[i]
    return result


def hand_size_for(num_players: int) -> int:
    return 5 if num_players <= 3 else 4


def deal(deck: list[Card], num_players: int) -> tuple[list[list[Card]], list[Card]]:
    """
    Deal starting hands from the front of a shuffled deck.

    Seat 0 receives the first hand_size cards, seat 1 the next, and so on.

    Returns:
        (hands, remaining_deck)
    """
    size = hand_size_for(num_players)
    needed = size * num_players
    if needed > len(deck):
        raise ValueError(f"Deck of {len(deck)} cards cannot deal {num_players} hands of {size}")
    hands = [list(deck[seat * size:(seat + 1) * size]) for seat in range(num_players)]
    return hands, list(deck[needed:])
