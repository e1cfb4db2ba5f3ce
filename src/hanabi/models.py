"""Data models for the Hanabi game engine."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class Color(str, Enum):
    """Card colors, in canonical deck order."""
    RED = "red"
    YELLOW = "yellow"
    GREEN = "green"
    BLUE = "blue"
    WHITE = "white"


COLORS: list[Color] = [Color.RED, Color.YELLOW, Color.GREEN, Color.BLUE, Color.WHITE]
NUMBERS: list[int] = [1, 2, 3, 4, 5]

# Card distribution: 1s x3, 2s x2, 3s x2, 4s x2, 5s x1 per color = 10 per color, 50 total
CARD_COUNTS: dict[int, int] = {1: 3, 2: 2, 3: 2, 4: 2, 5: 1}
DECK_SIZE = 50

MAX_HINT_TOKENS = 8
MAX_LIFE_TOKENS = 3
MAX_SCORE = 25


class HintPolicy(str, Enum):
    """Which hints are legal.

    MATCH_REQUIRED: every hint must touch at least one card in the target hand.
    POSITION_ENCODING: number hints 1-5 are always legal (a strategy convention
    reads "number N" as "your slot N-1 is playable"); color hints still must
    touch a card.
    """
    MATCH_REQUIRED = "match_required"
    POSITION_ENCODING = "position_encoding"


class EndReason(str, Enum):
    """Why a game ended."""
    LIVES_ZERO = "lives_zero"
    MAX_SCORE = "max_score"
    DECK_EMPTY = "deck_empty"


class Card(BaseModel):
    """A Hanabi card. The id is stable for the whole game."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(ge=0, lt=DECK_SIZE)
    color: Color
    value: int = Field(ge=1, le=5)


class HintKnowledge(BaseModel):
    """What the holder of a card has been told about it.

    Once a dimension is known, exclusions for that dimension are no longer
    recorded (and any earlier ones are cleared).
    """

    model_config = ConfigDict(frozen=True)

    known_color: Color | None = None
    known_value: int | None = None
    excluded_colors: tuple[Color, ...] = ()
    excluded_values: tuple[int, ...] = ()

    @property
    def is_empty(self) -> bool:
        return (
            self.known_color is None
            and self.known_value is None
            and not self.excluded_colors
            and not self.excluded_values
        )

    def possible_colors(self) -> list[Color]:
        if self.known_color is not None:
            return [self.known_color]
        return [c for c in COLORS if c not in self.excluded_colors]

    def possible_values(self) -> list[int]:
        if self.known_value is not None:
            return [self.known_value]
        return [v for v in NUMBERS if v not in self.excluded_values]


# Action types
class PlayAction(BaseModel):
    """Play a card from hand by slot (0-indexed)."""

    model_config = ConfigDict(frozen=True)

    action_type: Literal["play"] = "play"
    slot: int


class DiscardAction(BaseModel):
    """Discard a card from hand by slot (0-indexed)."""

    model_config = ConfigDict(frozen=True)

    action_type: Literal["discard"] = "discard"
    slot: int


class ColorHintAction(BaseModel):
    """Tell another seat which of their cards have a color."""

    model_config = ConfigDict(frozen=True)

    action_type: Literal["color_hint"] = "color_hint"
    target: int
    color: Color


class NumberHintAction(BaseModel):
    """Tell another seat which of their cards have a number."""

    model_config = ConfigDict(frozen=True)

    action_type: Literal["number_hint"] = "number_hint"
    target: int
    number: int


Action = Annotated[
    Union[PlayAction, DiscardAction, ColorHintAction, NumberHintAction],
    Field(discriminator="action_type"),
]
ACTION_TYPES = (PlayAction, DiscardAction, ColorHintAction, NumberHintAction)
HintAction = Union[ColorHintAction, NumberHintAction]


# Resolved events
class _EventBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    turn_number: int
    seat: int

    # State snapshot after the event
    hint_tokens_after: int
    life_tokens_after: int
    score_after: int


class PlayEvent(_EventBase):
    """A resolved play. success=False is a misplay (life lost, card discarded)."""

    event_type: Literal["play"] = "play"
    slot: int
    card: Card
    success: bool


class DiscardEvent(_EventBase):
    """A resolved discard."""

    event_type: Literal["discard"] = "discard"
    slot: int
    card: Card


class ColorHintEvent(_EventBase):
    """A resolved color hint with the slots and card ids it touched."""

    event_type: Literal["color_hint"] = "color_hint"
    target: int
    color: Color
    matched_slots: tuple[int, ...] = ()
    matched_card_ids: tuple[int, ...] = ()
    # Every card id in the target hand when the hint was given
    hand_card_ids: tuple[int, ...] = ()


class NumberHintEvent(_EventBase):
    """A resolved number hint with the slots and card ids it touched."""

    event_type: Literal["number_hint"] = "number_hint"
    target: int
    number: int
    matched_slots: tuple[int, ...] = ()
    matched_card_ids: tuple[int, ...] = ()
    hand_card_ids: tuple[int, ...] = ()


GameEvent = Annotated[
    Union[PlayEvent, DiscardEvent, ColorHintEvent, NumberHintEvent],
    Field(discriminator="event_type"),
]
HintEvent = Union[ColorHintEvent, NumberHintEvent]


class HanabiConfig(BaseModel):
    """Rules configuration for a single Hanabi game."""

    num_players: int = Field(default=2, ge=2, le=5)
    hint_tokens: int = Field(default=MAX_HINT_TOKENS, ge=0, le=MAX_HINT_TOKENS)
    life_tokens: int = Field(default=MAX_LIFE_TOKENS, ge=1, le=MAX_LIFE_TOKENS)
    hint_policy: HintPolicy = HintPolicy.MATCH_REQUIRED


def empty_stacks() -> dict[Color, int]:
    return {color: 0 for color in COLORS}


def empty_knowledge_table() -> list[HintKnowledge]:
    return [HintKnowledge() for _ in range(DECK_SIZE)]


class HanabiState(BaseModel):
    """The authoritative state of a Hanabi game.

    Mutated only by the rules engine in ``src.hanabi.game``. A terminal
    state is frozen by the engine, not by the model: once ``game_over`` is
    set, ``validate_action`` and ``execute_action`` refuse further actions.
    """

    config: HanabiConfig
    seed: int

    # Hands: seat index -> ordered cards (hidden from their holder)
    hands: list[list[Card]]

    # Played cards: color -> highest successfully played number (0 if none)
    played_stacks: dict[Color, int] = Field(default_factory=empty_stacks)

    discard_pile: list[Card] = Field(default_factory=list)

    # Deck (hidden from all players); draws come from the front
    deck: list[Card]

    hint_tokens: int
    life_tokens: int

    current_player: int = 0
    turn_number: int = 1

    action_history: list[GameEvent] = Field(default_factory=list)

    # Hint knowledge indexed directly by card id
    knowledge: list[HintKnowledge] = Field(default_factory=empty_knowledge_table)

    # End game tracking (when the deck empties, every seat gets one more turn)
    final_round_turns_left: int | None = None
    game_over: bool = False
    end_reason: EndReason | None = None

    @property
    def score(self) -> int:
        return min(sum(self.played_stacks.values()), MAX_SCORE)

    def card_total(self) -> int:
        """Cards accounted for across hands, deck, discards and stacks (always 50)."""
        in_hands = sum(len(hand) for hand in self.hands)
        return in_hands + len(self.deck) + len(self.discard_pile) + sum(self.played_stacks.values())


class FinalState(BaseModel):
    """Summary of a finished game, handed to strategies and stored in traces."""

    model_config = ConfigDict(frozen=True)

    score: int
    life_tokens: int
    hint_tokens: int
    end_reason: EndReason
    played_stacks: dict[Color, int]
    discard_pile: tuple[Card, ...] = ()

    @classmethod
    def from_state(cls, state: HanabiState) -> "FinalState":
        if state.end_reason is None:
            raise ValueError("Game has not ended")
        return cls(
            score=state.score,
            life_tokens=state.life_tokens,
            hint_tokens=state.hint_tokens,
            end_reason=state.end_reason,
            played_stacks=dict(state.played_stacks),
            discard_pile=tuple(state.discard_pile),
        )
