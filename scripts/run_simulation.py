#!/usr/bin/env python3
"""Run a Hanabi strategy simulation with progress reporting."""

import argparse
import logging
import sys
from datetime import datetime
from dotenv import load_dotenv
from pathlib import Path

load_dotenv(Path(__file__).parent.parent / ".env")

from src.hanabi import HintPolicy
from src.metrics import compute_aggregate_metrics, format_comparison, export_simulation_markdown
from src.simulator import (
    CONFIG_PRESETS,
    IllegalActionPolicy,
    LoggingMode,
    SimulationRunner,
    get_preset,
)
from src.storage import write_results
from src.strategies import default_registry


# ANSI colors
class Colors:
    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    GRAY = "\033[90m"
    BOLD = "\033[1m"
    RESET = "\033[0m"


def print_progress(completed: int, total: int, strategy_name: str):
    """Print progress after each game."""
    pct = (completed / total) * 100
    bar_width = 30
    filled = int(bar_width * completed / total)
    bar = "█" * filled + "░" * (bar_width - filled)

    sys.stdout.write(f"\r{Colors.BOLD}[{bar}]{Colors.RESET} {completed}/{total} ({pct:.1f}%) | {strategy_name}")
    sys.stdout.flush()
    if completed == total:
        sys.stdout.write("\n")


def main():
    registry = default_registry()

    parser = argparse.ArgumentParser(
        description="Compare Hanabi strategies on identical seeds",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Default preset (2 players, 1000 games), every built-in strategy
  python scripts/run_simulation.py

  # Two strategies, head to head, 200 games
  python scripts/run_simulation.py --strategies Deduction HintPartner --games 200

  # Position-encoding hints (needed by HintPartner to signal any slot)
  python scripts/run_simulation.py --strategies HintPartner --hint-policy position_encoding

  # Full traces for a handful of explicit seeds
  python scripts/run_simulation.py --preset debug --seed-list 7 42 100
        """
    )

    parser.add_argument("--preset", choices=list(CONFIG_PRESETS), default="default",
                        help="Config preset")
    parser.add_argument("--strategies", nargs="+", default=None,
                        help=f"Strategies to compare (default: all of {', '.join(registry.names())})")
    parser.add_argument("--players", type=int, default=None, help="Player count (2-5)")
    parser.add_argument("--games", type=int, default=None, help="Number of games (seeds 0..N-1)")
    parser.add_argument("--seed-list", type=int, nargs="+", default=None, help="Explicit seeds")
    parser.add_argument("--hint-policy", choices=[p.value for p in HintPolicy], default=None,
                        help="Hint legality rule")
    parser.add_argument("--illegal-actions", choices=[p.value for p in IllegalActionPolicy], default=None,
                        help="What to do when a strategy returns an illegal action")
    parser.add_argument("--debug-traces", action="store_true", help="Capture full game traces")
    parser.add_argument("--workers", type=int, default=None, help="Worker processes")
    parser.add_argument("--output-dir", default=None,
                        help="Results base directory (default: $HANABI_RESULTS_DIR or results/)")
    parser.add_argument("--no-save", action="store_true", help="Do not write results to disk")
    parser.add_argument("--dry-run", action="store_true",
                        help="Print resolved config and total game count, then exit.")
    parser.add_argument("--verbose", "-v", action="store_true", help="Show per-game log output")
    parser.add_argument("--quiet", "-q", action="store_true", help="Minimal output")
    args = parser.parse_args()

    config = get_preset(args.preset)
    updates = {}
    if args.players is not None:
        updates["player_count"] = args.players
    if args.games is not None:
        updates["game_count"] = args.games
    if args.seed_list:
        updates["seed_list"] = args.seed_list
    if args.hint_policy:
        updates["hint_policy"] = HintPolicy(args.hint_policy)
    if args.illegal_actions:
        updates["illegal_action_policy"] = IllegalActionPolicy(args.illegal_actions)
    if args.debug_traces:
        updates["logging_mode"] = LoggingMode.DEBUG
    if args.workers is not None:
        updates["max_workers"] = args.workers
    if updates:
        # Re-validate with the CLI overrides applied
        config = type(config).model_validate({**config.model_dump(), **updates})

    strategy_names = args.strategies or registry.names()
    unknown = [name for name in strategy_names if name not in registry]
    if unknown:
        parser.error(f"Unknown strategies: {', '.join(unknown)} (available: {', '.join(registry.names())})")

    seeds = config.resolve_seeds()

    print(f"{Colors.BOLD}{'=' * 60}{Colors.RESET}")
    print(f"{Colors.BOLD}HANABI SIMULATION{Colors.RESET}")
    print(f"{'=' * 60}")
    print(f"Preset: {args.preset}")
    print(f"Strategies: {', '.join(strategy_names)}")
    print(f"Players: {config.player_count} | Hints: {config.hint_tokens} | Lives: {config.life_tokens}")
    print(f"Hint policy: {config.hint_policy.value} | Illegal actions: {config.illegal_action_policy.value}")
    print(f"Games per strategy: {len(seeds)}")
    if config.capture_traces:
        print(f"{Colors.YELLOW}Trace capture: ON{Colors.RESET}")
    print(f"Total games: {len(seeds) * len(strategy_names)}")
    print(f"{'=' * 60}\n")

    if args.dry_run:
        print("Dry run: exiting before starting simulation.")
        return

    # Set up logging
    if args.quiet:
        logging.basicConfig(level=logging.WARNING)
    elif args.verbose:
        logging.basicConfig(level=logging.DEBUG)
    else:
        logging.basicConfig(level=logging.INFO, format="%(message)s")

    def on_progress(completed, total, strategy_name):
        if not args.quiet and not args.verbose:
            print_progress(completed, total, strategy_name)

    start_time = datetime.now()
    simulation = SimulationRunner(registry).run(config, strategy_names, callback=on_progress)
    elapsed = datetime.now() - start_time

    print(f"\n{Colors.BOLD}{'=' * 60}{Colors.RESET}")
    print(f"{Colors.BOLD}SIMULATION COMPLETE{Colors.RESET}")
    print(f"{'=' * 60}")
    print(f"Time elapsed: {elapsed}")

    for result in simulation.results:
        m = compute_aggregate_metrics(result)
        print(
            f"  {Colors.GREEN}{result.strategy_name}{Colors.RESET}: "
            f"avg {m.avg_score:.2f} ± {m.std_error:.2f}, perfect {m.perfect_rate:.1%}, "
            f"{Colors.GRAY}{result.timing.avg_decision_ms:.3f}ms/decision{Colors.RESET}"
        )

    if len(simulation.results) == 2:
        a, b = simulation.results
        print(f"\n{Colors.BOLD}Comparison:{Colors.RESET}")
        print(format_comparison(a.strategy_name, b.strategy_name, a, b))
    elif len(simulation.results) > 2:
        print(f"\n{export_simulation_markdown(simulation)}")

    if not args.no_save:
        output_dir = write_results(simulation, args.output_dir)
        print(f"\nResults written to: {output_dir}")


if __name__ == "__main__":
    main()
