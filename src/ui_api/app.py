"""FastAPI app for running simulations and browsing stored results."""
from __future__ import annotations

import logging
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from src.metrics.collector import mean, t_test
from src.metrics.export import comparison_conclusion
from src.simulator.config import CONFIG_PRESETS, get_preset
from src.simulator.runner import SimulationRunner
from src.storage.results import (
    list_results,
    list_traces,
    load_results,
    load_trace,
    write_results,
)
from src.strategies.registry import StrategyRegistry, default_registry

from .models import (
    CompareResponse,
    ConfigPresetInfo,
    ResultSummary,
    RunRequest,
    RunResponse,
    StrategyInfo,
)


logger = logging.getLogger("ui_api")

load_dotenv(Path(__file__).resolve().parents[2] / ".env")


def create_app(
    registry: StrategyRegistry | None = None,
    results_dir: str | Path | None = None,
) -> FastAPI:
    """
    Build the API.

    Args:
        registry: Strategies available to /run (built-ins when None)
        results_dir: Results base directory (storage default when None)
    """
    registry = registry or default_registry()
    api = FastAPI(title="Hanabi Simulator API")
    api.add_middleware(
        CORSMiddleware,
        allow_origins=[
            "http://localhost:5173",
            "http://127.0.0.1:5173",
            "http://localhost:8000",
            "http://127.0.0.1:8000",
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    def _load(timestamp: str) -> dict:
        try:
            return load_results(timestamp, results_dir)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        except FileNotFoundError:
            raise HTTPException(status_code=404, detail="Results not found")

    @api.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @api.get("/strategies", response_model=list[StrategyInfo])
    def strategies() -> list[StrategyInfo]:
        return [StrategyInfo(name=name) for name in registry.names()]

    @api.get("/configs", response_model=list[ConfigPresetInfo])
    def configs() -> list[ConfigPresetInfo]:
        return [
            ConfigPresetInfo(id=p.id, description=p.description, config=p.config)
            for p in CONFIG_PRESETS.values()
        ]

    @api.post("/run", response_model=RunResponse)
    def run(request: RunRequest) -> RunResponse:
        try:
            config = get_preset(request.preset)
        except KeyError:
            raise HTTPException(status_code=400, detail=f"Unknown config preset: {request.preset}")

        updates: dict = {}
        if request.game_count is not None:
            updates["game_count"] = request.game_count
        if request.seed_list is not None:
            updates["seed_list"] = request.seed_list
        if updates:
            config = config.model_copy(update=updates)

        names = request.strategies or registry.names()
        unknown = [name for name in names if name not in registry]
        if unknown:
            raise HTTPException(status_code=400, detail=f"Unknown strategies: {', '.join(unknown)}")

        logger.info(f"API run: preset={request.preset}, strategies={names}")
        simulation = SimulationRunner(registry).run(config, names)
        run_dir = write_results(simulation, results_dir)

        return RunResponse(
            timestamp=run_dir.name,
            strategy_names=simulation.strategy_names,
            game_count=len(simulation.seeds),
            mean_scores={r.strategy_name: mean(r.scores) for r in simulation.results},
        )

    @api.get("/results", response_model=list[ResultSummary])
    def results() -> list[ResultSummary]:
        return [ResultSummary(**entry) for entry in list_results(results_dir)]

    @api.get("/results/{timestamp}")
    def result_detail(timestamp: str) -> dict:
        return _load(timestamp)

    @api.get("/results/{timestamp}/compare", response_model=CompareResponse)
    def compare(timestamp: str, a: str, b: str) -> CompareResponse:
        raw_scores = _load(timestamp)["raw_scores"]
        missing = [name for name in (a, b) if name not in raw_scores]
        if missing:
            raise HTTPException(status_code=404, detail=f"Strategy not in results: {', '.join(missing)}")

        scores_a, scores_b = raw_scores[a], raw_scores[b]
        test = t_test(scores_a, scores_b)
        return CompareResponse(
            a=a,
            b=b,
            mean_a=mean(scores_a),
            mean_b=mean(scores_b),
            p_value=test.p_value,
            mean_diff=test.mean_diff,
            ci95=test.ci95,
            conclusion=comparison_conclusion(a, b, mean(scores_a), mean(scores_b), test.p_value),
        )

    @api.get("/results/{timestamp}/traces", response_model=list[str])
    def traces(timestamp: str) -> list[str]:
        try:
            return list_traces(timestamp, results_dir)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        except FileNotFoundError:
            raise HTTPException(status_code=404, detail="Results not found")

    @api.get("/results/{timestamp}/traces/{filename}")
    def trace(timestamp: str, filename: str) -> dict:
        try:
            return load_trace(timestamp, filename, results_dir)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        except FileNotFoundError:
            raise HTTPException(status_code=404, detail="Trace not found")

    return api


app = create_app()
