"""
Diff engine: turns two key listings into a reconciliation plan.

The remote signer is the source of truth. Whatever it holds and the client
lacks must be imported. Whatever the client holds and the signer lacks must
be deleted. Keys present on both sides are left alone.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from key_sync.types import PublicKey


@dataclass(frozen=True, slots=True)
class ReconciliationPlan:
    """
    Writes needed to converge the client onto the remote signer.

    Produced once per run and consumed once by the write phase.
    The two halves are always disjoint.
    """

    to_add: tuple[PublicKey, ...] = ()
    """Keys held by the signer but missing from the client, in signer order."""

    to_remove: tuple[PublicKey, ...] = ()
    """Keys held by the client but unknown to the signer, in client order."""

    @property
    def is_empty(self) -> bool:
        """True when the client already mirrors the signer."""
        return not self.to_add and not self.to_remove


def compute_plan(remote: Sequence[PublicKey], client: Sequence[PublicKey]) -> ReconciliationPlan:
    """
    Compute the set difference in both directions.

    Membership uses exact string equality. Input order is preserved in the
    output. Duplicates within one input are not collapsed: a key listed twice
    by the signer and absent from the client appears twice in ``to_add``.

    Args:
        remote: Keys listed by the remote signer.
        client: Keys listed by the client key manager.

    Returns:
        The plan to apply to the client.
    """
    remote_keys = frozenset(remote)
    client_keys = frozenset(client)

    return ReconciliationPlan(
        to_add=tuple(key for key in remote if key not in client_keys),
        to_remove=tuple(key for key in client if key not in remote_keys),
    )
