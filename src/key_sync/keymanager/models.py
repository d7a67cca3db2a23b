"""
Request and response bodies of the remote key manager API.

Docs: https://ethereum.github.io/keymanager-APIs/#/Remote%20Key%20Manager
"""

from __future__ import annotations

from key_sync.types import PublicKey, WireModel


class RemoteKey(WireModel):
    """A remote key loaded in the client, as listed by GET."""

    pubkey: PublicKey
    """Validator public key."""

    url: str | None = None
    """Signer URL the client forwards signing requests to."""

    readonly: bool = False
    """Whether the client refuses to delete this key."""


class ListRemoteKeysResponse(WireModel):
    """Body of GET /eth/v1/remotekeys."""

    data: list[RemoteKey]
    """Every remote key the client currently holds."""


class SignerBinding(WireModel):
    """A key and the signer responsible for it, as submitted for import."""

    pubkey: PublicKey
    """Validator public key to import."""

    url: str
    """Signer URL the client must forward signing requests to."""


class ImportRemoteKeysRequest(WireModel):
    """Body of POST /eth/v1/remotekeys."""

    remote_keys: list[SignerBinding]
    """Keys to import, each with its signer."""


class DeleteRemoteKeysRequest(WireModel):
    """Body of DELETE /eth/v1/remotekeys."""

    pubkeys: list[PublicKey]
    """Keys to delete."""


class OperationStatus(WireModel):
    """Outcome for one submitted key, aligned by position with the request."""

    status: str
    """Outcome, e.g. imported, duplicate, deleted, not_found or error."""

    message: str | None = None
    """Optional detail; some clients omit it or send null."""


class OperationStatusResponse(WireModel):
    """Body returned by both POST and DELETE."""

    data: list[OperationStatus]
    """One status per submitted key, in submission order."""
