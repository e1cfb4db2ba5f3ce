"""Filesystem layout for simulation results.

Each run lands in ``<base>/<timestamp>/``:

    summary.json      run metadata (strategies, game count, config)
    raw_scores.json   strategy -> score list
    stats.json        strategy -> aggregate metrics
    games/            one per-game CSV per strategy
    traces/           one JSON file per captured game (debug runs only)
"""
from __future__ import annotations

import json
import logging
import os
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from src.metrics.collector import compute_aggregate_metrics
from src.metrics.export import export_games_csv
from src.simulator.models import SimulationResult

logger = logging.getLogger(__name__)

_TIMESTAMP_RE = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}-\d{2}-\d{2}(-\d+)?$")
_TRACE_FILENAME_RE = re.compile(r"^[A-Za-z0-9_-]+\.json$")


def _repo_root() -> Path:
    return Path(__file__).resolve().parents[2]


def results_base_dir() -> Path:
    """Get results directory, using env var when set."""
    env_dir = os.environ.get("HANABI_RESULTS_DIR")
    if env_dir:
        return Path(env_dir)
    return _repo_root() / "results"


def sanitize_filename(name: str) -> str:
    return re.sub(r"[^A-Za-z0-9_-]", "_", name)


def _write_json(path: Path, data: Any) -> None:
    with open(path, "w") as f:
        json.dump(data, f, indent=2)


def _read_json(path: Path) -> Any:
    with open(path, "r") as f:
        return json.load(f)


def _new_run_dir(base: Path) -> Path:
    """Create a fresh timestamped directory, suffixing on collision."""
    timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H-%M-%S")
    candidate = base / timestamp
    suffix = 1
    while candidate.exists():
        candidate = base / f"{timestamp}-{suffix}"
        suffix += 1
    candidate.mkdir(parents=True)
    return candidate


def write_results(simulation: SimulationResult, base_dir: str | Path | None = None) -> Path:
    """
    Persist a simulation run.

    Args:
        simulation: Result of a simulation run
        base_dir: Parent directory (defaults to $HANABI_RESULTS_DIR or <repo>/results)

    Returns:
        Path to the run directory
    """
    base = Path(base_dir) if base_dir is not None else results_base_dir()
    run_dir = _new_run_dir(base)
    config = simulation.config

    _write_json(run_dir / "summary.json", {
        "timestamp": run_dir.name,
        "strategy_names": simulation.strategy_names,
        "game_count": len(simulation.seeds),
        "config": {
            "player_count": config.player_count,
            "hint_tokens": config.hint_tokens,
            "life_tokens": config.life_tokens,
            "logging_mode": config.logging_mode.value,
            "hint_policy": config.hint_policy.value,
            "illegal_action_policy": config.illegal_action_policy.value,
        },
        "timing": {r.strategy_name: r.timing.model_dump(mode="json") for r in simulation.results},
    })

    _write_json(run_dir / "raw_scores.json", {r.strategy_name: r.scores for r in simulation.results})

    _write_json(run_dir / "stats.json", {
        r.strategy_name: compute_aggregate_metrics(r).model_dump(mode="json")
        for r in simulation.results
    })

    games_dir = run_dir / "games"
    games_dir.mkdir()
    for result in simulation.results:
        (games_dir / f"{sanitize_filename(result.strategy_name)}.csv").write_text(export_games_csv(result))

    trace_count = 0
    for result in simulation.results:
        if not result.traces:
            continue
        traces_dir = run_dir / "traces"
        traces_dir.mkdir(exist_ok=True)
        for i, trace in enumerate(result.traces):
            filename = f"{sanitize_filename(result.strategy_name)}_{trace.seed}_{i}.json"
            _write_json(traces_dir / filename, trace.model_dump(mode="json"))
            trace_count += 1

    logger.info(f"Results written to {run_dir} ({trace_count} traces)")
    return run_dir


def _run_dir(timestamp: str, base_dir: str | Path | None) -> Path:
    if not _TIMESTAMP_RE.match(timestamp):
        raise ValueError(f"Invalid results timestamp: {timestamp!r}")
    base = Path(base_dir) if base_dir is not None else results_base_dir()
    path = base / timestamp
    if not path.is_dir():
        raise FileNotFoundError(timestamp)
    return path


def list_results(base_dir: str | Path | None = None) -> list[dict[str, Any]]:
    """Summaries of stored runs, newest first."""
    base = Path(base_dir) if base_dir is not None else results_base_dir()
    if not base.is_dir():
        return []

    runs: list[dict[str, Any]] = []
    for path in sorted(base.iterdir(), reverse=True):
        summary_path = path / "summary.json"
        if not (path.is_dir() and _TIMESTAMP_RE.match(path.name) and summary_path.exists()):
            continue
        summary = _read_json(summary_path)
        runs.append({
            "timestamp": path.name,
            "strategy_names": summary.get("strategy_names", []),
            "game_count": summary.get("game_count", 0),
            "has_traces": (path / "traces").is_dir(),
        })
    return runs


def load_results(timestamp: str, base_dir: str | Path | None = None) -> dict[str, Any]:
    """Load summary, raw scores and stats of one run."""
    path = _run_dir(timestamp, base_dir)
    return {
        "summary": _read_json(path / "summary.json"),
        "raw_scores": _read_json(path / "raw_scores.json"),
        "stats": _read_json(path / "stats.json"),
    }


def list_traces(timestamp: str, base_dir: str | Path | None = None) -> list[str]:
    traces_dir = _run_dir(timestamp, base_dir) / "traces"
    if not traces_dir.is_dir():
        return []
    return sorted(p.name for p in traces_dir.glob("*.json"))


def load_trace(timestamp: str, filename: str, base_dir: str | Path | None = None) -> dict[str, Any]:
    if not _TRACE_FILENAME_RE.match(filename):
        raise ValueError(f"Invalid trace filename: {filename!r}")
    path = _run_dir(timestamp, base_dir) / "traces" / filename
    if not path.exists():
        raise FileNotFoundError(filename)
    return _read_json(path)
