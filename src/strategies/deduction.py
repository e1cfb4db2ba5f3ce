"""Knowledge-driven strategy built on hint replay and card counting."""

from __future__ import annotations

from src.hanabi.game import is_critical, is_playable
from src.hanabi.models import (
    CARD_COUNTS,
    Action,
    Card,
    Color,
    ColorHintAction,
    DiscardAction,
    HintKnowledge,
    NumberHintAction,
    PlayAction,
)
from src.hanabi.visibility import (
    Observation,
    knowledge_for_own_slot,
    knowledge_for_visible_card,
    legal_actions,
)

from .base import BaseStrategy


def unseen_counts(observation: Observation) -> dict[tuple[Color, int], int]:
    """
    Copies of each (color, value) the observer cannot see anywhere.

    Counts out discards, played stacks and every visible hand; what remains
    is in the deck or in the observer's own hand.
    """
    counts = {
        (color, value): CARD_COUNTS[value]
        for color in observation.played_stacks
        for value in CARD_COUNTS
    }
    for card in observation.discard_pile:
        counts[(card.color, card.value)] -= 1
    for card in observation.visible_cards:
        counts[(card.color, card.value)] -= 1
    for color, top in observation.played_stacks.items():
        for value in range(1, top + 1):
            counts[(color, value)] -= 1
    return counts


def candidates(knowledge: HintKnowledge, unseen: dict[tuple[Color, int], int]) -> list[Card]:
    """Identities still possible for a card, given hints and card counting.

    Returned as id-less placeholder cards so the engine helpers apply.
    """
    return [
        Card(id=0, color=color, value=value)
        for color in knowledge.possible_colors()
        for value in knowledge.possible_values()
        if unseen.get((color, value), 0) > 0
    ]


class DeductionStrategy(BaseStrategy):
    """
    Plays what its hints prove playable, hints partners' playable cards,
    and otherwise discards the oldest card that is not surely critical.
    """

    name = "Deduction"

    def decide(self, observation: Observation) -> Action:
        actions = legal_actions(observation)
        stacks = observation.played_stacks
        unseen = unseen_counts(observation)

        slot_candidates = [
            candidates(knowledge_for_own_slot(observation, slot), unseen)
            for slot in range(observation.own_hand_size)
        ]

        # 1. Play a card every remaining identity of which is playable
        for slot, options in enumerate(slot_candidates):
            if options and all(is_playable(card, stacks) for card in options):
                return PlayAction(slot=slot)

        # 2. Tell a partner about a playable card they don't fully know
        hint = self.hint_for_partner(observation)
        if hint is not None and hint in actions:
            return hint

        # 3. Discard
        if DiscardAction(slot=0) in actions:
            return DiscardAction(slot=self.discard_slot(observation, slot_candidates))

        # 4. Any hint, else anything legal
        for action in actions:
            if isinstance(action, (ColorHintAction, NumberHintAction)):
                return action
        return actions[0]

    @staticmethod
    def hint_for_partner(observation: Observation) -> Action | None:
        if observation.hint_tokens <= 0:
            return None
        for target in observation.partner_seats:
            for card in observation.other_hands.get(target, ()):
                if not is_playable(card, observation.played_stacks):
                    continue
                knowledge = knowledge_for_visible_card(observation, card.id)
                if knowledge is None:
                    continue
                if knowledge.known_value is None:
                    return NumberHintAction(target=target, number=card.value)
                if knowledge.known_color is None:
                    return ColorHintAction(target=target, color=card.color)
        return None

    @staticmethod
    def discard_slot(observation: Observation, slot_candidates: list[list[Card]]) -> int:
        """Prefer a card known to be dead, then the oldest card not surely critical."""
        stacks = observation.played_stacks
        for slot, options in enumerate(slot_candidates):
            if options and all(stacks.get(card.color, 0) >= card.value for card in options):
                return slot

        for slot, options in enumerate(slot_candidates):
            surely_critical = bool(options) and all(
                is_critical(card, stacks, observation.discard_pile) for card in options
            )
            if not surely_critical:
                return slot

        return 0
