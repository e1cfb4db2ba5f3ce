"""Statistics over simulation results."""

from .models import ConfidenceInterval, AggregateMetrics, TTestResult
from .collector import (
    mean,
    sample_std_dev,
    standard_error,
    normal_cdf,
    score_histogram,
    compute_aggregate_metrics,
    t_test,
)
from .export import (
    export_games_csv,
    export_simulation_markdown,
    comparison_conclusion,
    format_comparison,
)

__all__ = [
    # Models
    "ConfidenceInterval",
    "AggregateMetrics",
    "TTestResult",
    # Collector
    "mean",
    "sample_std_dev",
    "standard_error",
    "normal_cdf",
    "score_histogram",
    "compute_aggregate_metrics",
    "t_test",
    # Export
    "export_games_csv",
    "export_simulation_markdown",
    "comparison_conclusion",
    "format_comparison",
]
