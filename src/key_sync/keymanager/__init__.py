"""Consensus client key manager: the side being reconciled."""

from .client import REMOTE_KEYS_ENDPOINT, KeyManagerClient
from .models import (
    DeleteRemoteKeysRequest,
    ImportRemoteKeysRequest,
    ListRemoteKeysResponse,
    OperationStatus,
    OperationStatusResponse,
    RemoteKey,
    SignerBinding,
)

__all__ = [
    "REMOTE_KEYS_ENDPOINT",
    "DeleteRemoteKeysRequest",
    "ImportRemoteKeysRequest",
    "KeyManagerClient",
    "ListRemoteKeysResponse",
    "OperationStatus",
    "OperationStatusResponse",
    "RemoteKey",
    "SignerBinding",
]
