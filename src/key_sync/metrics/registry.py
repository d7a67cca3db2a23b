"""
Metric registry using prometheus_client.

Provides pre-defined metrics for the key synchronization job.
Exposes metrics in Prometheus text format via the /metrics endpoint.
"""

from __future__ import annotations

from prometheus_client import (
    CollectorRegistry,
    Counter,
    Gauge,
    Histogram,
    generate_latest,
)

# Create a dedicated registry for key-sync metrics.
#
# Using a dedicated registry avoids pollution from default Python process metrics.
REGISTRY = CollectorRegistry()

# -----------------------------------------------------------------------------
# Key Sets
# -----------------------------------------------------------------------------

remote_keys_count = Gauge(
    "key_sync_remote_keys",
    "Keys listed by the remote signer in the last run",
    registry=REGISTRY,
)

client_keys_count = Gauge(
    "key_sync_client_keys",
    "Keys listed by the client key manager in the last run",
    registry=REGISTRY,
)

# -----------------------------------------------------------------------------
# Runs
# -----------------------------------------------------------------------------

runs_total = Counter(
    "key_sync_runs_total",
    "Reconciliation runs started",
    registry=REGISTRY,
)

run_failures = Counter(
    "key_sync_run_failures_total",
    "Reconciliation failures by phase",
    ["phase"],
    registry=REGISTRY,
)

run_duration = Histogram(
    "key_sync_run_seconds",
    "Reconciliation run duration",
    buckets=(0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0),
    registry=REGISTRY,
)

# -----------------------------------------------------------------------------
# Writes
# -----------------------------------------------------------------------------

keys_imported = Counter(
    "key_sync_keys_imported_total",
    "Keys submitted for import to the client",
    registry=REGISTRY,
)

keys_deleted = Counter(
    "key_sync_keys_deleted_total",
    "Keys submitted for deletion from the client",
    registry=REGISTRY,
)

key_errors = Counter(
    "key_sync_key_errors_total",
    "Per-key error statuses reported by the client key manager",
    ["operation"],
    registry=REGISTRY,
)


def generate_metrics() -> bytes:
    """
    Generate Prometheus metrics output.

    Returns:
        Prometheus text format output as bytes.
    """
    return generate_latest(REGISTRY)
