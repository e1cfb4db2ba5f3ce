"""Tests for aggregate statistics and exports."""

import math

import pytest

from src.hanabi.game import apply_action
from src.hanabi.metrics import compute_game_metrics
from src.hanabi.models import Color, ColorHintAction, DiscardAction, EndReason, PlayAction
from src.metrics import (
    compute_aggregate_metrics,
    export_games_csv,
    export_simulation_markdown,
    format_comparison,
    normal_cdf,
    sample_std_dev,
    score_histogram,
    standard_error,
    t_test,
)
from src.simulator import GameConfig, PerGameMetrics, SimulationResult, StrategyResult, run_simulation

R, Y, G, B, W = Color.RED, Color.YELLOW, Color.GREEN, Color.BLUE, Color.WHITE


def make_result(name, scores, end_reason=EndReason.LIVES_ZERO, misplays=1):
    """Create a StrategyResult from bare scores."""
    return StrategyResult(
        strategy_name=name,
        scores=list(scores),
        per_game_metrics=[
            PerGameMetrics(
                seed=i,
                score=s,
                perfect=s == 25,
                lives_remaining=1,
                hints_remaining=4,
                misplays=misplays,
                hint_efficiency=0.5,
                play_success_rate=0.75,
                end_reason=EndReason.MAX_SCORE if s == 25 else end_reason,
                turns=40,
            )
            for i, s in enumerate(scores)
        ],
    )


class TestBasicStatistics:

    def test_sample_std_dev(self):
        values = [2, 4, 4, 4, 5, 5, 7, 9]
        assert sample_std_dev(values) == pytest.approx(math.sqrt(32 / 7))

    def test_standard_error(self):
        values = [2, 4, 4, 4, 5, 5, 7, 9]
        assert standard_error(values) == pytest.approx(math.sqrt(32 / 7) / math.sqrt(8))

    def test_single_value(self):
        assert sample_std_dev([3]) == 0.0
        assert standard_error([3]) == 0.0

    def test_normal_cdf(self):
        assert normal_cdf(0) == pytest.approx(0.5)
        assert normal_cdf(1.96) == pytest.approx(0.975, abs=1e-3)
        assert normal_cdf(-1.96) == pytest.approx(0.025, abs=1e-3)

    def test_histogram(self):
        hist = score_histogram([0, 5, 5, 25, 30, -2])
        assert len(hist) == 26
        assert hist[0] == 2
        assert hist[5] == 2
        assert hist[25] == 2
        assert sum(hist) == 6


class TestAggregateMetrics:

    def test_aggregate(self):
        result = make_result("A", [20, 22, 24, 25])
        m = compute_aggregate_metrics(result)

        assert m.strategy_name == "A"
        assert m.games == 4
        assert m.avg_score == pytest.approx(22.75)
        assert m.std_dev == pytest.approx(sample_std_dev([20, 22, 24, 25]))
        assert m.ci95.lower == pytest.approx(22.75 - 1.96 * m.std_error)
        assert m.ci95.upper == pytest.approx(22.75 + 1.96 * m.std_error)
        assert m.perfect_rate == pytest.approx(0.25)
        assert m.avg_lives_remaining == 1
        assert m.avg_hints_remaining == 4
        assert m.misplay_rate == 1
        assert m.avg_hint_efficiency == pytest.approx(0.5)
        assert m.avg_play_success_rate == pytest.approx(0.75)
        assert m.end_reason_distribution == {
            EndReason.LIVES_ZERO: 3,
            EndReason.MAX_SCORE: 1,
            EndReason.DECK_EMPTY: 0,
        }
        assert m.score_histogram[25] == 1

    def test_empty_result(self):
        m = compute_aggregate_metrics(StrategyResult(strategy_name="Empty"))
        assert m.games == 0
        assert m.avg_score == 0
        assert m.perfect_rate == 0
        assert m.avg_hint_efficiency == 0
        assert m.score_histogram == [0] * 26


class TestTTest:

    def test_identical_samples(self):
        scores = [10, 12, 14, 16, 18]
        result = t_test(scores, scores)
        assert result.p_value == pytest.approx(1.0)
        assert result.mean_diff == 0

    def test_clearly_different_constant_samples(self):
        result = t_test([1] * 10, [10] * 10)
        assert result.p_value < 0.001
        assert result.mean_diff == -9

    def test_clearly_different_noisy_samples(self):
        result = t_test([1, 2] * 10, [10, 11] * 10)
        assert result.p_value < 0.001
        assert result.ci95.upper < 0

    def test_small_samples(self):
        result = t_test([1], [2])
        assert result.p_value == 1
        assert result.mean_diff == 0

    def test_zero_variance_equal_means(self):
        assert t_test([5, 5, 5], [5, 5]).p_value == 1

    def test_ci_contains_mean_diff(self):
        result = t_test([20, 21, 22, 23, 24], [23, 24, 24, 24, 25])
        assert result.ci95.lower < result.mean_diff < result.ci95.upper


class TestExport:

    def test_format_comparison(self):
        a = make_result("StrategyA", [20, 21, 22, 23, 24])
        b = make_result("StrategyB", [23, 24, 24, 24, 25])
        out = format_comparison("A", "B", a, b)

        lines = out.splitlines()
        assert len(lines) == 4
        assert lines[0].startswith("A avg: 22.00 ± ")
        assert lines[1].startswith("B avg: 24.00 ± ")
        assert lines[2].startswith("p-value: ")
        assert lines[3] == "Conclusion: B statistically better"

    def test_format_comparison_no_difference(self):
        a = make_result("A", [10, 12, 14])
        out = format_comparison("A", "A2", a, a)
        assert out.endswith("Conclusion: No significant difference")

    def test_games_csv(self):
        csv_text = export_games_csv(make_result("A", [3, 4]))
        rows = csv_text.strip().splitlines()
        assert rows[0].startswith("strategy,seed,score,perfect")
        assert len(rows) == 3
        assert rows[1].startswith("A,0,3,False")
        header = rows[0].split(",")
        assert header.index("hint_efficiency") < header.index("end_reason")
        assert rows[1].split(",")[header.index("hint_efficiency")] == "0.5"

    def test_markdown_ranks_by_average(self):
        simulation = SimulationResult(
            results=[make_result("Low", [5, 6]), make_result("High", [20, 21])],
            seeds=[0, 1],
            config=GameConfig(game_count=2),
        )
        md = export_simulation_markdown(simulation)
        assert md.index("| 1 | High |") < md.index("| 2 | Low |")


class TestGameMetrics:
    """Per-game action counts computed from the event log."""

    def test_counts(self, make_state):
        state = make_state([[(R, 1), (Y, 2)], [(G, 1), (B, 1)]], life_tokens=1, hint_tokens=7)
        apply_action(state, ColorHintAction(target=1, color=G))
        apply_action(state, PlayAction(slot=0))  # seat 1 plays G1
        apply_action(state, PlayAction(slot=1))  # seat 0 misplays Y2, last life

        metrics = compute_game_metrics(state.action_history)

        assert metrics["hints_given"] == 1
        assert metrics["plays_attempted"] == 2
        assert metrics["plays_successful"] == 1
        assert metrics["misplays"] == 1
        assert metrics["discards"] == 0
        assert metrics["hint_efficiency"] == 1.0
        assert metrics["play_success_rate"] == 0.5

    def test_no_hints_or_plays(self, make_state):
        state = make_state([[(R, 1), (Y, 2)], [(G, 1), (B, 1)]], deck=[(W, 1)], hint_tokens=4)
        apply_action(state, DiscardAction(slot=0))

        metrics = compute_game_metrics(state.action_history)
        assert metrics["discards"] == 1
        assert metrics["hint_efficiency"] == 0.0
        assert metrics["play_success_rate"] == 0.0

    def test_carried_into_stats(self):
        simulation = run_simulation(GameConfig(seed_list=[1, 2, 3]), ["Deduction"])
        result = simulation.results[0]
        m = compute_aggregate_metrics(result)

        assert m.avg_hint_efficiency == pytest.approx(
            sum(g.hint_efficiency for g in result.per_game_metrics) / 3
        )
        assert all(g.hints_given > 0 for g in result.per_game_metrics)
