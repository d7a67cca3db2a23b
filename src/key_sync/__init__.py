"""
Keeps a consensus client's remote validator keys in sync with a remote signer.

The remote signer holds the authoritative set of validator keys. Each run
lists the keys on both sides, imports into the client whatever it lacks and
deletes from it whatever the signer no longer holds.
"""

from .config import Mode, SyncConfig
from .exceptions import (
    ClientUnavailable,
    ConfigurationError,
    DeleteFailed,
    ImportFailed,
    KeySyncError,
    RemoteUnavailable,
)
from .keymanager import KeyManagerClient
from .reconcile import ReconciliationPlan, ReconciliationReport, Reconciler, compute_plan
from .signer import Web3SignerClient

__all__ = [
    "ClientUnavailable",
    "ConfigurationError",
    "DeleteFailed",
    "ImportFailed",
    "KeyManagerClient",
    "KeySyncError",
    "Mode",
    "ReconciliationPlan",
    "ReconciliationReport",
    "Reconciler",
    "RemoteUnavailable",
    "SyncConfig",
    "Web3SignerClient",
    "compute_plan",
]
