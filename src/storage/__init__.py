"""Persistence of simulation results."""

from .results import (
    results_base_dir,
    sanitize_filename,
    write_results,
    list_results,
    load_results,
    list_traces,
    load_trace,
)

__all__ = [
    "results_base_dir",
    "sanitize_filename",
    "write_results",
    "list_results",
    "load_results",
    "list_traces",
    "load_trace",
]
