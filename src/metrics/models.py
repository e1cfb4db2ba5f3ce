"""Data models for aggregate statistics."""

from __future__ import annotations

from pydantic import BaseModel, Field

from src.hanabi.models import EndReason


class ConfidenceInterval(BaseModel):
    """95% confidence interval."""
    lower: float
    upper: float


class AggregateMetrics(BaseModel):
    """Aggregate metrics for one strategy across all its games."""
    strategy_name: str
    games: int

    avg_score: float
    std_dev: float  # Sample standard deviation
    std_error: float
    ci95: ConfidenceInterval

    perfect_rate: float
    avg_lives_remaining: float
    avg_hints_remaining: float
    misplay_rate: float  # Misplays per game
    avg_hint_efficiency: float = 0.0  # Successful plays per hint
    avg_play_success_rate: float = 0.0

    end_reason_distribution: dict[EndReason, int] = Field(default_factory=dict)
    score_histogram: list[int] = Field(default_factory=list)  # 26 buckets, scores 0..25


class TTestResult(BaseModel):
    """Welch's t-test comparing two score samples."""
    p_value: float
    mean_diff: float  # mean(a) - mean(b)
    ci95: ConfidenceInterval
