"""Result models produced by the simulator."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from src.hanabi.models import Card, EndReason, FinalState, GameEvent

from .config import GameConfig


class PerGameMetrics(BaseModel):
    """Outcome of one game."""
    seed: int
    score: int
    perfect: bool
    lives_remaining: int
    hints_remaining: int
    misplays: int
    end_reason: EndReason
    hints_given: int = 0
    discards: int = 0
    hint_efficiency: float = 0.0  # Successful plays per hint given
    play_success_rate: float = 0.0
    turns: int
    substituted_actions: int = 0
    duration_ms: float = 0.0


class TimingStats(BaseModel):
    total_ms: float = 0.0
    avg_per_game_ms: float = 0.0
    avg_decision_ms: float = 0.0
    max_decision_ms: float = 0.0
    decision_count: int = 0


class GameTrace(BaseModel):
    """Everything needed to replay one game deterministically."""

    model_config = ConfigDict(frozen=True)

    seed: int
    player_count: int
    initial_deck_order: tuple[Card, ...]
    events: tuple[GameEvent, ...]
    final_state: FinalState


class StrategyResult(BaseModel):
    """All games one strategy played over the shared seed list."""
    strategy_name: str
    scores: list[int] = Field(default_factory=list)
    per_game_metrics: list[PerGameMetrics] = Field(default_factory=list)
    timing: TimingStats = Field(default_factory=TimingStats)
    traces: list[GameTrace] | None = None

    @property
    def games_played(self) -> int:
        return len(self.scores)


class SimulationResult(BaseModel):
    """One run: a result per strategy plus the seeds they all played."""
    results: list[StrategyResult]
    seeds: list[int]
    config: GameConfig

    def get(self, strategy_name: str) -> StrategyResult:
        for result in self.results:
            if result.strategy_name == strategy_name:
                return result
        raise KeyError(f"No result for strategy: {strategy_name!r}")

    @property
    def strategy_names(self) -> list[str]:
        return [r.strategy_name for r in self.results]
