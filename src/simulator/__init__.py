"""Simulation orchestration: configs, the game loop and run results."""

from .config import (
    GameConfig,
    LoggingMode,
    IllegalActionPolicy,
    ConfigPreset,
    CONFIG_PRESETS,
    get_preset,
)
from .models import (
    PerGameMetrics,
    TimingStats,
    GameTrace,
    StrategyResult,
    SimulationResult,
)
from .runner import (
    GameRun,
    SimulationRunner,
    generate_seed_list,
    run_single_game,
    run_simulation,
)

__all__ = [
    # Config
    "GameConfig",
    "LoggingMode",
    "IllegalActionPolicy",
    "ConfigPreset",
    "CONFIG_PRESETS",
    "get_preset",
    # Results
    "PerGameMetrics",
    "TimingStats",
    "GameTrace",
    "StrategyResult",
    "SimulationResult",
    # Runner
    "GameRun",
    "SimulationRunner",
    "generate_seed_list",
    "run_single_game",
    "run_simulation",
]
