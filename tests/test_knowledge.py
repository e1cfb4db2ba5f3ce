"""Tests for hint knowledge bookkeeping and replay."""

import pytest

from src.hanabi.game import apply_action
from src.hanabi.knowledge import record_hint, replay_knowledge
from src.hanabi.models import (
    Color,
    ColorHintAction,
    DiscardAction,
    HintKnowledge,
    NumberHintAction,
    PlayAction,
)

R, Y, G, B, W = Color.RED, Color.YELLOW, Color.GREEN, Color.BLUE, Color.WHITE


class TestRecordHint:

    def test_match_sets_known_and_clears_exclusions(self):
        k = HintKnowledge(excluded_colors=(R, B))
        k = record_hint(k, True, color=G)
        assert k.known_color == G
        assert k.excluded_colors == ()

    def test_non_match_adds_exclusion_once(self):
        k = record_hint(HintKnowledge(), False, color=R)
        k = record_hint(k, False, color=R)
        k = record_hint(k, False, color=B)
        assert k.excluded_colors == (R, B)

    def test_non_match_ignored_once_known(self):
        k = record_hint(HintKnowledge(), True, number=3)
        assert record_hint(k, False, number=4) == k
        assert k.excluded_values == ()

    def test_dimensions_are_independent(self):
        k = record_hint(HintKnowledge(), True, color=Y)
        k = record_hint(k, False, number=2)
        assert k.known_color == Y
        assert k.excluded_values == (2,)
        assert k.known_value is None

    def test_requires_a_dimension(self):
        with pytest.raises(ValueError):
            record_hint(HintKnowledge(), True)

    def test_record_is_immutable(self):
        original = HintKnowledge()
        record_hint(original, True, color=R)
        assert original.is_empty


class TestPossibilities:

    def test_unknown_card_could_be_anything(self):
        k = HintKnowledge()
        assert len(k.possible_colors()) == 5
        assert k.possible_values() == [1, 2, 3, 4, 5]

    def test_exclusions_narrow_options(self):
        k = HintKnowledge(excluded_colors=(R, B), excluded_values=(1, 5))
        assert k.possible_colors() == [Y, G, W]
        assert k.possible_values() == [2, 3, 4]

    def test_known_dimension(self):
        k = HintKnowledge(known_color=W, known_value=4)
        assert k.possible_colors() == [W]
        assert k.possible_values() == [4]


class TestReplayKnowledge:

    def test_replay_matches_engine(self, make_state):
        """Rebuilding from history gives exactly what the engine tracked."""
        state = make_state(
            [[(R, 1), (Y, 2), (G, 3)], [(G, 1), (B, 1), (G, 4)]],
            deck=[(W, 1), (W, 2), (W, 3)],
        )
        apply_action(state, ColorHintAction(target=1, color=G))   # seat 0
        apply_action(state, NumberHintAction(target=0, number=2))  # seat 1
        apply_action(state, NumberHintAction(target=1, number=1))  # seat 0
        apply_action(state, PlayAction(slot=0))                    # seat 1 plays G1
        apply_action(state, DiscardAction(slot=0))                 # seat 0

        for seat, hand in enumerate(state.hands):
            for card in hand:
                replayed = replay_knowledge(state.action_history, card.id, seat)
                assert replayed == state.knowledge[card.id], f"seat {seat} card {card}"

    def test_card_drawn_after_hint_is_untouched(self, make_state):
        state = make_state([[(R, 1), (Y, 2)], [(G, 1), (B, 1)]], deck=[(G, 2)])
        apply_action(state, ColorHintAction(target=1, color=G))
        apply_action(state, PlayAction(slot=0))

        drawn = state.hands[1][-1]
        assert drawn.color == G and drawn.value == 2
        assert state.knowledge[drawn.id].is_empty
        assert replay_knowledge(state.action_history, drawn.id, 1).is_empty

    def test_hints_to_other_seats_ignored(self, make_state):
        state = make_state([[(R, 1), (Y, 2)], [(G, 1), (B, 1)]])
        apply_action(state, ColorHintAction(target=1, color=G))
        card_id = state.hands[1][0].id

        assert replay_knowledge(state.action_history, card_id, 1).known_color == G
        assert replay_knowledge(state.action_history, card_id, 0).is_empty

    def test_empty_history(self):
        assert replay_knowledge([], 3, 0).is_empty
