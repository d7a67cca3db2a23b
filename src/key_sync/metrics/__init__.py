"""
Metrics module for observability.

Provides counters, gauges, and histograms for tracking reconciliation runs.
Exposes metrics in Prometheus text format.
"""

from .registry import (
    REGISTRY,
    client_keys_count,
    generate_metrics,
    key_errors,
    keys_deleted,
    keys_imported,
    remote_keys_count,
    run_duration,
    run_failures,
    runs_total,
)

__all__ = [
    "REGISTRY",
    "client_keys_count",
    "generate_metrics",
    "key_errors",
    "keys_deleted",
    "keys_imported",
    "remote_keys_count",
    "run_duration",
    "run_failures",
    "runs_total",
]
