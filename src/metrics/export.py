"""Export functions for simulation statistics."""

from __future__ import annotations

import csv
import io

from src.simulator.models import SimulationResult, StrategyResult

from .collector import compute_aggregate_metrics, t_test


SIGNIFICANCE_LEVEL = 0.05


def export_games_csv(result: StrategyResult) -> str:
    """Export one strategy's per-game metrics to CSV string."""
    output = io.StringIO(newline='')
    writer = csv.writer(output)

    writer.writerow([
        "strategy",
        "seed",
        "score",
        "perfect",
        "lives_remaining",
        "hints_remaining",
        "misplays",
        "hints_given",
        "discards",
        "hint_efficiency",
        "play_success_rate",
        "end_reason",
        "turns",
        "substituted_actions",
        "duration_ms",
    ])
    for m in result.per_game_metrics:
        writer.writerow([
            result.strategy_name,
            m.seed,
            m.score,
            m.perfect,
            m.lives_remaining,
            m.hints_remaining,
            m.misplays,
            m.hints_given,
            m.discards,
            m.hint_efficiency,
            m.play_success_rate,
            m.end_reason.value,
            m.turns,
            m.substituted_actions,
            f"{m.duration_ms:.3f}",
        ])

    return output.getvalue()


def comparison_conclusion(name_a: str, name_b: str, mean_a: float, mean_b: float, p_value: float) -> str:
    if p_value >= SIGNIFICANCE_LEVEL:
        return "No significant difference"
    if mean_a > mean_b:
        return f"{name_a} statistically better"
    return f"{name_b} statistically better"


def format_comparison(
    name_a: str,
    name_b: str,
    result_a: StrategyResult,
    result_b: StrategyResult,
) -> str:
    """Two-strategy comparison: both means with standard errors, p-value, conclusion."""
    metrics_a = compute_aggregate_metrics(result_a)
    metrics_b = compute_aggregate_metrics(result_b)
    test = t_test(result_a.scores, result_b.scores)

    conclusion = comparison_conclusion(
        name_a, name_b, metrics_a.avg_score, metrics_b.avg_score, test.p_value
    )

    return "\n".join([
        f"{name_a} avg: {metrics_a.avg_score:.2f} ± {metrics_a.std_error:.2f}",
        f"{name_b} avg: {metrics_b.avg_score:.2f} ± {metrics_b.std_error:.2f}",
        f"p-value: {test.p_value:.3f}",
        f"Conclusion: {conclusion}",
    ])


def export_simulation_markdown(simulation: SimulationResult) -> str:
    """Export a simulation summary table to Markdown format."""
    lines = ["# Hanabi Simulation Results", ""]
    config = simulation.config
    lines.append(
        f"- **Players:** {config.player_count}  **Games:** {len(simulation.seeds)}  "
        f"**Hint policy:** {config.hint_policy.value}"
    )
    lines.append("")

    lines.append("| Rank | Strategy | Avg Score | 95% CI | Perfect | Lives Left | Misplays/Game | Hint Eff. |")
    lines.append("|------|----------|-----------|--------|---------|------------|---------------|-----------|")

    ranked = sorted(
        (compute_aggregate_metrics(r) for r in simulation.results),
        key=lambda m: m.avg_score,
        reverse=True,
    )
    for i, m in enumerate(ranked, 1):
        ci = f"[{m.ci95.lower:.2f}, {m.ci95.upper:.2f}]"
        lines.append(
            f"| {i} | {m.strategy_name} | {m.avg_score:.2f} | {ci} | "
            f"{m.perfect_rate:.1%} | {m.avg_lives_remaining:.2f} | {m.misplay_rate:.2f} | {m.avg_hint_efficiency:.2f} |"
        )

    lines.append("")
    return "\n".join(lines)
