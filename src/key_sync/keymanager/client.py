"""
Consensus client remote key manager client.

Instances are created with the base URL of the consensus client validator
API (e.g. http://validator.lighthouse-prater.dappnode:3500). All operations
target the remote key endpoint under it.

Lists, imports and deletes are each a single request. The key manager
answers writes with one status per submitted key, in submission order.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

import httpx

from key_sync.config import DEFAULT_HTTP_TIMEOUT
from key_sync.exceptions import ClientUnavailable, DeleteFailed, ImportFailed, WritePhaseError
from key_sync.http import request_json
from key_sync.types import KeyStatus, PublicKey

from .models import (
    DeleteRemoteKeysRequest,
    ImportRemoteKeysRequest,
    ListRemoteKeysResponse,
    OperationStatus,
    OperationStatusResponse,
    SignerBinding,
)

logger = logging.getLogger(__name__)

REMOTE_KEYS_ENDPOINT = "/eth/v1/remotekeys"
"""Key manager API path for remote (signer-backed) keys."""


def _pair_statuses(
    keys: Sequence[PublicKey],
    data: list[OperationStatus],
    error_type: type[WritePhaseError],
    operation: str,
) -> list[KeyStatus]:
    """
    Attach each reported status to the key it belongs to.

    Statuses are positional, one per submitted key. A response of any other
    length cannot be attributed to keys and fails the whole operation.
    """
    if len(data) != len(keys):
        raise error_type(
            f"Key manager returned {len(data)} statuses for {len(keys)} keys to {operation}"
        )
    return [
        KeyStatus(pubkey=key, status=entry.status, message=entry.message or "")
        for key, entry in zip(keys, data, strict=True)
    ]


@dataclass(frozen=True, slots=True)
class KeyManagerClient:
    """Lists, imports and deletes remote keys on a consensus client."""

    base_url: str
    """Consensus client validator API base URL."""

    timeout: float = DEFAULT_HTTP_TIMEOUT
    """HTTP request timeout in seconds."""

    transport: httpx.AsyncBaseTransport | None = None
    """Transport override; None uses the default network transport."""

    @property
    def url(self) -> str:
        """Full URL of the remote key endpoint."""
        return f"{self.base_url.rstrip('/')}{REMOTE_KEYS_ENDPOINT}"

    async def list_keys(self) -> list[PublicKey]:
        """
        List the remote keys currently loaded in the client.

        Raises:
            ClientUnavailable: If the request fails or the body is malformed.
        """
        response = await request_json(
            "GET",
            self.url,
            ListRemoteKeysResponse,
            ClientUnavailable,
            timeout=self.timeout,
            transport=self.transport,
        )
        keys = [entry.pubkey for entry in response.data]
        logger.debug("Client holds %d remote keys", len(keys))
        return keys

    async def import_keys(self, keys: Sequence[PublicKey], signer_url: str) -> list[KeyStatus]:
        """
        Import keys, each bound to ``signer_url``.

        Raises:
            ImportFailed: If the request fails, the body is malformed, or the
                number of statuses differs from the number of keys.
        """
        request = ImportRemoteKeysRequest(
            remote_keys=[SignerBinding(pubkey=key, url=signer_url) for key in keys]
        )
        response = await request_json(
            "POST",
            self.url,
            OperationStatusResponse,
            ImportFailed,
            body=request,
            timeout=self.timeout,
            transport=self.transport,
        )
        return _pair_statuses(keys, response.data, ImportFailed, "import")

    async def delete_keys(self, keys: Sequence[PublicKey]) -> list[KeyStatus]:
        """
        Delete keys.

        Raises:
            DeleteFailed: If the request fails, the body is malformed, or the
                number of statuses differs from the number of keys.
        """
        request = DeleteRemoteKeysRequest(pubkeys=list(keys))
        response = await request_json(
            "DELETE",
            self.url,
            OperationStatusResponse,
            DeleteFailed,
            body=request,
            timeout=self.timeout,
            transport=self.transport,
        )
        return _pair_statuses(keys, response.data, DeleteFailed, "delete")
