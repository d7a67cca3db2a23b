"""
Capabilities the reconciler needs from the outside world.

Both services are reached over HTTP in production. The reconciler only
depends on these protocols, so tests can substitute in-memory fakes.
Uses structural subtyping: any class with matching methods qualifies.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from key_sync.types import KeyStatus, PublicKey


class KeyLister(Protocol):
    """Anything that can enumerate the keys it currently holds."""

    async def list_keys(self) -> list[PublicKey]:
        """
        Fetch the current key listing.

        Returns:
            Keys in the order the service reported them.

        Raises:
            KeySyncError: If the listing cannot be fetched or parsed.
        """
        ...


class KeyWriter(Protocol):
    """
    Anything that can load and unload remote keys.

    Both operations are idempotent at the protocol level. Importing a key
    that is already loaded, or deleting one that is already gone, is
    reported through a per-key status rather than an error.
    """

    async def import_keys(
        self, keys: Sequence[PublicKey], signer_url: str
    ) -> list[KeyStatus]:
        """
        Load keys, each bound to the remote signer that holds it.

        Args:
            keys: Keys to import.
            signer_url: Base URL of the remote signer for every key.

        Returns:
            One status per submitted key, in submission order.
        """
        ...

    async def delete_keys(self, keys: Sequence[PublicKey]) -> list[KeyStatus]:
        """
        Unload keys.

        Args:
            keys: Keys to delete.

        Returns:
            One status per submitted key, in submission order.
        """
        ...


class KeyManager(KeyLister, KeyWriter, Protocol):
    """A key store that can be both listed and written."""
