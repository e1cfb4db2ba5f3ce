"""Request/response models for the results API."""
from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, Field

from src.metrics.models import ConfidenceInterval
from src.simulator.config import GameConfig


class StrategyInfo(BaseModel):
    name: str


class ConfigPresetInfo(BaseModel):
    id: str
    description: str
    config: GameConfig


class RunRequest(BaseModel):
    preset: str = "quick"
    strategies: list[str] | None = None  # None runs every registered strategy
    game_count: int | None = Field(default=None, ge=1)
    seed_list: Annotated[list[int], Field(min_length=1)] | None = None


class RunResponse(BaseModel):
    timestamp: str
    strategy_names: list[str]
    game_count: int
    mean_scores: dict[str, float]


class ResultSummary(BaseModel):
    timestamp: str
    strategy_names: list[str]
    game_count: int
    has_traces: bool = False


class CompareResponse(BaseModel):
    a: str
    b: str
    mean_a: float
    mean_b: float
    p_value: float
    mean_diff: float
    ci95: ConfidenceInterval
    conclusion: str
