"""
Reconciliation of client key managers against a remote signer.

This module provides:

- A diff engine computing which keys to add and remove
- The capability protocols the reconciler depends on
- The reconciler driving one read-diff-write pass
- A service repeating that pass on a fixed interval
"""

from .contracts import KeyLister, KeyManager, KeyWriter
from .diff import ReconciliationPlan, compute_plan
from .reconciler import ReconciliationReport, Reconciler
from .service import SyncService, log_report

__all__ = [
    "KeyLister",
    "KeyManager",
    "KeyWriter",
    "ReconciliationPlan",
    "ReconciliationReport",
    "Reconciler",
    "SyncService",
    "compute_plan",
    "log_report",
]
