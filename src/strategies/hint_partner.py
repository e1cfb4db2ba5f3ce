"""Position-encoding hint strategy.

Convention:
- Number hint N (1-5) means "your card in slot N-1 is playable", whatever its
  printed value. This needs HintPolicy.POSITION_ENCODING to be legal for
  every slot.
- When we receive such a hint, play that slot.
- Otherwise, if a partner holds a playable card, hint its slot.
- Otherwise, a random legal action.
"""

from __future__ import annotations

from src.hanabi.game import is_playable
from src.hanabi.models import (
    Action,
    ColorHintEvent,
    DiscardEvent,
    NumberHintAction,
    NumberHintEvent,
    PlayAction,
    PlayEvent,
)
from src.hanabi.visibility import Observation, legal_actions

from .base import BaseStrategy
from .observation_rng import observation_rng


class HintPartnerStrategy(BaseStrategy):
    name = "HintPartner"

    def __init__(self, base_seed: int = 42):
        self.base_seed = base_seed

    def decide(self, observation: Observation) -> Action:
        actions = legal_actions(observation)

        # 1. Act on the latest position hint we received
        slot = self.slot_from_hint(observation)
        if slot is not None:
            play = PlayAction(slot=slot)
            if play in actions:
                return play

        # 2. Point a partner at their playable card
        hint = self.hint_for_playable_card(observation)
        if hint is not None and hint in actions:
            return hint

        # 3. Random legal action
        return observation_rng(observation, self.base_seed).choice(actions)

    @staticmethod
    def slot_from_hint(observation: Observation) -> int | None:
        """
        Slot to play if the most recent hint to us is an unanswered number hint.

        Scans history backwards and stops at our own last play or discard.
        """
        for event in reversed(observation.action_history):
            if isinstance(event, (ColorHintEvent, NumberHintEvent)) and event.target == observation.seat:
                if isinstance(event, NumberHintEvent):
                    slot = event.number - 1
                    if 0 <= slot < observation.own_hand_size:
                        return slot
                return None
            if isinstance(event, (PlayEvent, DiscardEvent)) and event.seat == observation.seat:
                return None
        return None

    @staticmethod
    def hint_for_playable_card(observation: Observation) -> NumberHintAction | None:
        if observation.hint_tokens <= 0:
            return None
        for target in observation.partner_seats:
            hand = observation.other_hands.get(target, ())
            for slot, card in enumerate(hand[:5]):
                if is_playable(card, observation.played_stacks):
                    return NumberHintAction(target=target, number=slot + 1)
        return None
