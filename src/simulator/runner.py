"""Simulation orchestrator: runs strategies over a shared seed list."""

from __future__ import annotations

import logging
import time
from concurrent.futures import ProcessPoolExecutor, as_completed
from typing import Any, Callable, Iterable

from pydantic import BaseModel, Field

from src.hanabi.deck import create_deck, shuffle_deck
from src.hanabi.errors import IllegalActionError
from src.hanabi.game import create_game, execute_action, validate_action
from src.hanabi.metrics import compute_game_metrics
from src.hanabi.models import MAX_SCORE, FinalState
from src.hanabi.visibility import build_observation, legal_actions
from src.strategies.base import Strategy, StrategyFactory
from src.strategies.registry import StrategyRegistry, default_registry

from .config import GameConfig, IllegalActionPolicy
from .models import GameTrace, PerGameMetrics, SimulationResult, StrategyResult, TimingStats


logger = logging.getLogger(__name__)

# callback(completed, total, strategy_name)
ProgressCallback = Callable[[int, int, str], None]


class GameRun(BaseModel):
    """Everything one game produces, before aggregation."""
    metrics: PerGameMetrics
    decision_ms: list[float] = Field(default_factory=list)
    trace: GameTrace | None = None


def generate_seed_list(count: int) -> list[int]:
    return list(range(count))


def _call_hook(strategy: Strategy, hook_name: str, payload: Any) -> None:
    """Lifecycle hooks are optional; only ``decide`` is required."""
    hook = getattr(strategy, hook_name, None)
    if callable(hook):
        hook(payload)


def run_single_game(
    factory: StrategyFactory,
    seed: int,
    config: GameConfig,
    strategy_name: str = "strategy",
) -> GameRun:
    """
    Play one game with a fresh strategy instance per seat.

    Args:
        factory: Zero-argument callable returning a new strategy
        seed: Shuffle seed
        config: Run configuration (rules, illegal action policy, trace capture)
        strategy_name: Used in log messages only

    Returns:
        GameRun with metrics, per-decision latencies and, in debug mode, a trace

    Raises:
        IllegalActionError: an illegal action under the fail-fast policy
        StrategyContractError: a strategy returned something that is not an action
    """
    rules = config.rules()
    state = create_game(rules, seed)
    initial_deck = tuple(shuffle_deck(create_deck(), seed)) if config.capture_traces else ()

    players = [factory() for _ in range(rules.num_players)]
    for seat, player in enumerate(players):
        _call_hook(player, "on_game_start", build_observation(state, seat))

    decision_ms: list[float] = []
    substitutions = 0
    start = time.perf_counter()

    while not state.game_over:
        seat = state.current_player
        observation = build_observation(state, seat)

        decide_start = time.perf_counter()
        action = players[seat].decide(observation)
        decision_ms.append((time.perf_counter() - decide_start) * 1000)

        reason = validate_action(state, action)
        if reason is not None:
            if config.illegal_action_policy == IllegalActionPolicy.FAIL_FAST:
                raise IllegalActionError(reason, action=action, seat=seat)
            substitute = legal_actions(observation)[0]
            logger.warning(
                f"{strategy_name} seat {seat} (seed={seed}, turn {state.turn_number}): "
                f"{reason}; substituting {substitute.action_type}"
            )
            substitutions += 1
            action = substitute

        event = execute_action(state, action)
        for player in players:
            _call_hook(player, "on_action_resolved", event)

    duration_ms = (time.perf_counter() - start) * 1000
    final_state = FinalState.from_state(state)
    for player in players:
        _call_hook(player, "on_game_end", final_state)

    action_counts = compute_game_metrics(state.action_history)
    metrics = PerGameMetrics(
        seed=seed,
        score=final_state.score,
        perfect=final_state.score == MAX_SCORE,
        lives_remaining=final_state.life_tokens,
        hints_remaining=final_state.hint_tokens,
        misplays=action_counts["misplays"],
        end_reason=final_state.end_reason,
        hints_given=action_counts["hints_given"],
        discards=action_counts["discards"],
        hint_efficiency=action_counts["hint_efficiency"],
        play_success_rate=action_counts["play_success_rate"],
        turns=len(state.action_history),
        substituted_actions=substitutions,
        duration_ms=duration_ms,
    )

    trace = None
    if config.capture_traces:
        trace = GameTrace(
            seed=seed,
            player_count=rules.num_players,
            initial_deck_order=initial_deck,
            events=tuple(state.action_history),
            final_state=final_state,
        )

    logger.debug(
        f"{strategy_name} seed={seed}: score {metrics.score} "
        f"({metrics.end_reason.value}, {metrics.turns} turns)"
    )
    return GameRun(metrics=metrics, decision_ms=decision_ms, trace=trace)


def _build_strategy_result(
    strategy_name: str,
    runs: list[GameRun],
    total_ms: float,
    capture_traces: bool,
) -> StrategyResult:
    decisions = [ms for run in runs for ms in run.decision_ms]
    timing = TimingStats(
        total_ms=total_ms,
        avg_per_game_ms=total_ms / len(runs) if runs else 0.0,
        avg_decision_ms=sum(decisions) / len(decisions) if decisions else 0.0,
        max_decision_ms=max(decisions, default=0.0),
        decision_count=len(decisions),
    )
    return StrategyResult(
        strategy_name=strategy_name,
        scores=[run.metrics.score for run in runs],
        per_game_metrics=[run.metrics for run in runs],
        timing=timing,
        traces=[run.trace for run in runs if run.trace is not None] if capture_traces else None,
    )


class SimulationRunner:
    """Runs named strategies from a registry over identical seeds."""

    def __init__(self, registry: StrategyRegistry | None = None):
        self.registry = registry or default_registry()

    def run(
        self,
        config: GameConfig,
        strategy_names: Iterable[str] | None = None,
        callback: ProgressCallback | None = None,
    ) -> SimulationResult:
        """
        Run every selected strategy on the config's seed list.

        Args:
            config: Run configuration
            strategy_names: Strategies to compare, in order (all registered when None)
            callback: Optional callback(completed, total, strategy_name) after each game

        Returns:
            SimulationResult with one StrategyResult per strategy
        """
        factories = self.registry.select(strategy_names)
        seeds = config.resolve_seeds()

        logger.info(
            f"Starting simulation: {len(factories)} strategies × {len(seeds)} games "
            f"({config.player_count} players)"
        )

        results = [
            self._run_strategy(name, factory, seeds, config, callback)
            for name, factory in factories.items()
        ]

        logger.info("Simulation complete")
        return SimulationResult(results=results, seeds=seeds, config=config)

    def _run_strategy(
        self,
        name: str,
        factory: StrategyFactory,
        seeds: list[int],
        config: GameConfig,
        callback: ProgressCallback | None,
    ) -> StrategyResult:
        logger.info(f"Running {name} on {len(seeds)} games...")
        start = time.perf_counter()

        if config.max_workers > 1 and len(seeds) > 1:
            runs = self._run_parallel(name, factory, seeds, config, callback)
        else:
            runs = []
            for seed in seeds:
                runs.append(run_single_game(factory, seed, config, name))
                if callback:
                    callback(len(runs), len(seeds), name)

        total_ms = (time.perf_counter() - start) * 1000
        result = _build_strategy_result(name, runs, total_ms, config.capture_traces)

        mean = sum(result.scores) / len(result.scores) if result.scores else 0.0
        logger.info(f"{name}: mean score {mean:.2f} over {len(result.scores)} games ({total_ms:.0f}ms)")
        return result

    @staticmethod
    def _run_parallel(
        name: str,
        factory: StrategyFactory,
        seeds: list[int],
        config: GameConfig,
        callback: ProgressCallback | None,
    ) -> list[GameRun]:
        """Spread games over worker processes; results come back in seed order."""
        with ProcessPoolExecutor(max_workers=config.max_workers) as pool:
            futures = [
                pool.submit(run_single_game, factory, seed, config, name)
                for seed in seeds
            ]
            completed = 0
            for future in as_completed(futures):
                try:
                    future.result()
                except Exception:
                    logger.error(f"{name}: game failed in a worker, cancelling remaining games")
                    pool.shutdown(wait=False, cancel_futures=True)
                    raise
                completed += 1
                if callback:
                    callback(completed, len(seeds), name)
            return [future.result() for future in futures]


def run_simulation(
    config: GameConfig,
    strategy_names: Iterable[str] | None = None,
    registry: StrategyRegistry | None = None,
    callback: ProgressCallback | None = None,
) -> SimulationResult:
    """
    Convenience function to run a simulation.

    Args:
        config: Run configuration
        strategy_names: Strategies to compare (all registered when None)
        registry: Strategy registry (built-ins when None)
        callback: Optional progress callback

    Returns:
        SimulationResult
    """
    return SimulationRunner(registry).run(config, strategy_names, callback)
