"""Aggregate statistics over simulation results."""

from __future__ import annotations

import math
from typing import Sequence

from src.hanabi.models import MAX_SCORE, EndReason
from src.simulator.models import StrategyResult

from .models import AggregateMetrics, ConfidenceInterval, TTestResult


# Z-score for a two-sided 95% interval
Z_95 = 1.96


def mean(values: Sequence[float]) -> float:
    if not values:
        return 0.0
    return sum(values) / len(values)


def sample_std_dev(values: Sequence[float]) -> float:
    """Sample (n - 1) standard deviation; 0 for fewer than two values."""
    n = len(values)
    if n < 2:
        return 0.0
    avg = mean(values)
    return math.sqrt(sum((x - avg) ** 2 for x in values) / (n - 1))


def standard_error(values: Sequence[float]) -> float:
    """Calculate standard error of the mean."""
    if len(values) < 2:
        return 0.0
    return sample_std_dev(values) / math.sqrt(len(values))


def normal_cdf(x: float) -> float:
    return 0.5 * (1 + math.erf(x / math.sqrt(2)))


def score_histogram(scores: Sequence[float]) -> list[int]:
    """Counts per score 0..25; out-of-range scores are clamped into the end buckets."""
    histogram = [0] * (MAX_SCORE + 1)
    for score in scores:
        bucket = max(0, min(MAX_SCORE, round(score)))
        histogram[bucket] += 1
    return histogram


def compute_aggregate_metrics(result: StrategyResult) -> AggregateMetrics:
    """
    Compute aggregate metrics for one strategy.

    Args:
        result: StrategyResult from a simulation run

    Returns:
        AggregateMetrics (all zeros for an empty result)
    """
    scores = result.scores
    per_game = result.per_game_metrics
    n = len(scores)

    avg = mean(scores)
    se = standard_error(scores)
    half_width = Z_95 * se

    end_reasons = {reason: 0 for reason in EndReason}
    for m in per_game:
        end_reasons[m.end_reason] += 1

    return AggregateMetrics(
        strategy_name=result.strategy_name,
        games=n,
        avg_score=avg,
        std_dev=sample_std_dev(scores),
        std_error=se,
        ci95=ConfidenceInterval(lower=avg - half_width, upper=avg + half_width),
        perfect_rate=sum(1 for m in per_game if m.perfect) / n if n else 0.0,
        avg_lives_remaining=mean([m.lives_remaining for m in per_game]),
        avg_hints_remaining=mean([m.hints_remaining for m in per_game]),
        misplay_rate=sum(m.misplays for m in per_game) / n if n else 0.0,
        avg_hint_efficiency=mean([m.hint_efficiency for m in per_game]),
        avg_play_success_rate=mean([m.play_success_rate for m in per_game]),
        end_reason_distribution=end_reasons,
        score_histogram=score_histogram(scores),
    )


def t_test(scores_a: Sequence[float], scores_b: Sequence[float]) -> TTestResult:
    """
    Welch's t-test for two independent samples with unequal variances.

    The p-value uses the normal approximation, which is fine for the
    hundreds of games a typical run plays.
    """
    if len(scores_a) < 2 or len(scores_b) < 2:
        return TTestResult(p_value=1.0, mean_diff=0.0, ci95=ConfidenceInterval(lower=0.0, upper=0.0))

    mean_a = mean(scores_a)
    mean_b = mean(scores_b)
    diff = mean_a - mean_b
    se_diff = math.sqrt(
        sample_std_dev(scores_a) ** 2 / len(scores_a)
        + sample_std_dev(scores_b) ** 2 / len(scores_b)
    )

    if se_diff == 0:
        return TTestResult(
            p_value=1.0 if mean_a == mean_b else 0.0,
            mean_diff=diff,
            ci95=ConfidenceInterval(lower=diff, upper=diff),
        )

    t = diff / se_diff
    p_value = 2 * (1 - normal_cdf(abs(t)))
    half_width = Z_95 * se_diff

    return TTestResult(
        p_value=p_value,
        mean_diff=diff,
        ci95=ConfidenceInterval(lower=diff - half_width, upper=diff + half_width),
    )
