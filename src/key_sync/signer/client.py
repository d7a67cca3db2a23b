"""
Remote signer (Web3Signer) key listing client.

Docs: https://consensys.github.io/web3signer/web3signer-eth2.html#tag/Keymanager

The signer is the source of truth for which keys should be active.
This client only lists keys: nothing in this project may modify the signer.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import httpx

from key_sync.config import DEFAULT_HTTP_TIMEOUT
from key_sync.exceptions import RemoteUnavailable
from key_sync.http import request_json
from key_sync.types import PublicKey, WireModel

logger = logging.getLogger(__name__)

KEYSTORES_ENDPOINT = "/eth/v1/keystores"
"""Key manager API path listing the keystores held by the signer."""


class SignerKeystore(WireModel):
    """One keystore entry reported by the signer."""

    validating_pubkey: PublicKey
    """Public key the signer can sign for."""

    derivation_path: str | None = None
    """BIP-32 path the key was derived from, if known."""

    readonly: bool = False
    """Whether the key is immutable on the signer."""


class ListKeystoresResponse(WireModel):
    """Body of GET /eth/v1/keystores."""

    data: list[SignerKeystore]
    """Every keystore the signer currently holds."""


@dataclass(frozen=True, slots=True)
class Web3SignerClient:
    """Read-only view of the keys held by a remote signer."""

    base_url: str
    """Signer base URL (e.g. http://web3signer:9000)."""

    timeout: float = DEFAULT_HTTP_TIMEOUT
    """HTTP request timeout in seconds."""

    transport: httpx.AsyncBaseTransport | None = None
    """Transport override; None uses the default network transport."""

    @property
    def url(self) -> str:
        """Full URL of the keystore listing endpoint."""
        return f"{self.base_url.rstrip('/')}{KEYSTORES_ENDPOINT}"

    async def list_keys(self) -> list[PublicKey]:
        """
        List the public keys the signer holds.

        Returns:
            Keys in the order the signer reported them.

        Raises:
            RemoteUnavailable: If the request fails or the body is malformed.
        """
        response = await request_json(
            "GET",
            self.url,
            ListKeystoresResponse,
            RemoteUnavailable,
            timeout=self.timeout,
            transport=self.transport,
        )
        keys = [entry.validating_pubkey for entry in response.data]
        logger.debug("Remote signer holds %d keys", len(keys))
        return keys
