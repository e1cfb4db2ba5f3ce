"""Tests for the built-in strategies and the registry."""

import pytest

from src.hanabi.game import apply_action, create_game
from src.hanabi.models import (
    COLORS,
    Color,
    ColorHintAction,
    DiscardAction,
    HanabiConfig,
    HintKnowledge,
    HintPolicy,
    NumberHintAction,
    PlayAction,
)
from src.hanabi.visibility import build_observation, legal_actions
from src.strategies import (
    BaseStrategy,
    DeductionStrategy,
    FirstLegalStrategy,
    FunctionStrategy,
    HintPartnerStrategy,
    RandomStrategy,
    Strategy,
    StrategyRegistry,
    default_registry,
    observation_rng,
    seed_from_observation,
)
from src.strategies.deduction import candidates, unseen_counts

R, Y, G, B, W = Color.RED, Color.YELLOW, Color.GREEN, Color.BLUE, Color.WHITE


class TestContract:

    def test_builtins_satisfy_protocol(self):
        for cls in (RandomStrategy, FirstLegalStrategy, HintPartnerStrategy, DeductionStrategy):
            assert isinstance(cls(), Strategy)
            assert isinstance(cls(), BaseStrategy)

    def test_function_strategy(self):
        strategy = FunctionStrategy(lambda obs: PlayAction(slot=0))
        obs = build_observation(create_game(HanabiConfig(), seed=1), 0)
        assert strategy.decide(obs) == PlayAction(slot=0)
        assert isinstance(strategy, Strategy)

    def test_hooks_are_no_ops(self):
        strategy = FirstLegalStrategy()
        obs = build_observation(create_game(HanabiConfig(), seed=1), 0)
        assert strategy.on_game_start(obs) is None


class TestObservationRng:

    def test_seed_depends_on_seat_and_turns(self, make_state):
        state = make_state([[(R, 1), (Y, 2)], [(G, 1), (B, 1)]], deck=[(W, 1)])
        before = seed_from_observation(build_observation(state, 0), 5)
        other_seat = seed_from_observation(build_observation(state, 1), 5)
        assert before != other_seat

        apply_action(state, PlayAction(slot=0))
        apply_action(state, PlayAction(slot=0))
        after = seed_from_observation(build_observation(state, 0), 5)
        assert after == before + 1

    def test_rng_reproducible(self):
        obs = build_observation(create_game(HanabiConfig(), seed=3), 0)
        assert observation_rng(obs, 1).next_float() == observation_rng(obs, 1).next_float()


class TestSimpleStrategies:

    def test_first_legal(self):
        obs = build_observation(create_game(HanabiConfig(), seed=1), 0)
        assert FirstLegalStrategy().decide(obs) == legal_actions(obs)[0]
        assert FirstLegalStrategy().decide(obs) == PlayAction(slot=0)

    @pytest.mark.parametrize("seed", [1, 2, 3, 4])
    def test_random_is_legal_and_reproducible(self, seed):
        obs = build_observation(create_game(HanabiConfig(num_players=3), seed=seed), 0)
        action = RandomStrategy().decide(obs)
        assert action in legal_actions(obs)
        assert RandomStrategy().decide(obs) == action


class TestHintPartnerStrategy:

    def test_plays_hinted_slot(self, make_state):
        state = make_state(
            [[(R, 1), (Y, 2)], [(Y, 3), (G, 1)]],
            deck=[(W, 1), (W, 2)],
            hint_policy=HintPolicy.POSITION_ENCODING,
        )
        apply_action(state, NumberHintAction(target=1, number=2))

        obs = build_observation(state, 1)
        assert HintPartnerStrategy.slot_from_hint(obs) == 1
        assert HintPartnerStrategy().decide(obs) == PlayAction(slot=1)

    def test_hint_consumed_after_own_play(self, make_state):
        state = make_state(
            [[(R, 1), (Y, 2)], [(Y, 3), (G, 1)]],
            deck=[(W, 1), (W, 2)],
            hint_policy=HintPolicy.POSITION_ENCODING,
        )
        apply_action(state, NumberHintAction(target=1, number=2))
        apply_action(state, PlayAction(slot=1))
        apply_action(state, DiscardAction(slot=1))

        assert HintPartnerStrategy.slot_from_hint(build_observation(state, 1)) is None

    def test_color_hint_is_not_a_play_signal(self, make_state):
        state = make_state([[(R, 1)], [(G, 1)]], deck=[(W, 1)])
        apply_action(state, ColorHintAction(target=1, color=G))
        assert HintPartnerStrategy.slot_from_hint(build_observation(state, 1)) is None

    def test_hints_partner_playable_slot(self, make_state):
        state = make_state(
            [[(R, 3), (Y, 2)], [(Y, 4), (G, 1)]],
            hint_policy=HintPolicy.POSITION_ENCODING,
        )
        obs = build_observation(state, 0)
        assert HintPartnerStrategy().decide(obs) == NumberHintAction(target=1, number=2)

    def test_falls_back_to_random_legal(self, make_state):
        state = make_state([[(R, 3), (Y, 2)], [(Y, 4), (G, 2)]], hint_tokens=0)
        obs = build_observation(state, 0)
        assert HintPartnerStrategy().decide(obs) in legal_actions(obs)


class TestDeductionStrategy:

    def test_unseen_counts_exclude_visible_cards(self, make_state):
        state = make_state(
            [[(R, 1), (Y, 2)], [(G, 1), (G, 1)]],
            played_stacks={G: 1},
        )
        counts = unseen_counts(build_observation(state, 0))
        # Three G1s: two visible, one played
        assert counts[(G, 1)] == 0
        assert counts[(R, 1)] == 3
        assert sum(counts.values()) == 50 - 2 - 1

    def test_candidates_respect_counts(self, make_state):
        state = make_state([[(R, 1)], [(G, 1)]])
        obs = build_observation(state, 0)
        options = candidates(HintKnowledge(known_color=W, known_value=5), unseen_counts(obs))
        assert [(c.color, c.value) for c in options] == [(W, 5)]

    def test_plays_card_proven_playable(self, make_state):
        state = make_state([[(R, 3), (Y, 2)], [(G, 1), (B, 3)]], deck=[(W, 4)])
        apply_action(state, NumberHintAction(target=1, number=1))

        # Any 1 is playable on empty stacks
        assert DeductionStrategy().decide(build_observation(state, 1)) == PlayAction(slot=0)

    def test_hints_partner_playable_card(self, make_state):
        state = make_state([[(R, 3), (Y, 2)], [(B, 3), (G, 1)]])
        action = DeductionStrategy().decide(build_observation(state, 0))
        assert action == NumberHintAction(target=1, number=1)

    def test_color_hint_when_value_already_known(self, make_state):
        state = make_state([[(R, 3), (Y, 2)], [(B, 3), (G, 1)]], deck=[(W, 4), (W, 3)])
        apply_action(state, NumberHintAction(target=1, number=1))
        apply_action(state, NumberHintAction(target=0, number=3))

        action = DeductionStrategy().decide(build_observation(state, 0))
        assert action == ColorHintAction(target=1, color=G)

    def test_discards_known_dead_card(self, make_state):
        state = make_state(
            [[(B, 4), (R, 1)], [(G, 4), (Y, 4)]],
            deck=[(W, 3)],
            hint_tokens=4,
            played_stacks={c: 1 for c in COLORS},
            current_player=1,
        )
        apply_action(state, NumberHintAction(target=0, number=1))

        assert DeductionStrategy().decide(build_observation(state, 0)) == DiscardAction(slot=1)

    def test_discards_oldest_without_hints(self, make_state):
        state = make_state([[(R, 3), (Y, 2)], [(B, 3), (G, 2)]], hint_tokens=0)
        assert DeductionStrategy().decide(build_observation(state, 0)) == DiscardAction(slot=0)

    @pytest.mark.parametrize("seed", range(5))
    def test_always_legal(self, seed):
        state = create_game(HanabiConfig(num_players=3), seed=seed)
        strategy = DeductionStrategy()
        while not state.game_over:
            obs = build_observation(state, state.current_player)
            action = strategy.decide(obs)
            assert action in legal_actions(obs)
            apply_action(state, action)


class TestRegistry:

    def test_default_names(self):
        assert default_registry().names() == ["Random", "FirstLegal", "HintPartner", "Deduction"]

    def test_create_returns_fresh_instances(self):
        registry = default_registry()
        a = registry.create("Deduction")
        b = registry.create("Deduction")
        assert isinstance(a, DeductionStrategy)
        assert a is not b

    def test_unknown_name(self):
        with pytest.raises(KeyError):
            default_registry().get("Nope")
        with pytest.raises(KeyError):
            default_registry().select(["FirstLegal", "Nope"])

    def test_select_keeps_order(self):
        selected = default_registry().select(["Deduction", "Random"])
        assert list(selected) == ["Deduction", "Random"]

    def test_register(self):
        registry = StrategyRegistry()
        registry.register("Mine", FirstLegalStrategy)
        assert "Mine" in registry
        assert len(registry) == 1
        with pytest.raises(ValueError):
            registry.register("", FirstLegalStrategy)

    def test_registries_are_independent(self):
        a = default_registry()
        a.register("Extra", FirstLegalStrategy)
        assert "Extra" not in default_registry()
