"""Key identifiers and per-key write results."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TypeAlias

PublicKey: TypeAlias = str
"""
Opaque identifier of a validator signing key (hex-encoded public key).

Compared by exact string equality. No case or 0x-prefix normalization
is applied anywhere: two spellings of the same key are two keys.
"""


class ImportStatus(StrEnum):
    """Per-key result of a remote key import."""

    IMPORTED = "imported"
    DUPLICATE = "duplicate"
    ERROR = "error"


class DeleteStatus(StrEnum):
    """Per-key result of a remote key deletion."""

    DELETED = "deleted"
    NOT_ACTIVE = "not_active"
    NOT_FOUND = "not_found"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class KeyStatus:
    """
    Outcome reported by the key manager for one submitted key.

    The key manager answers with a list aligned to the submitted keys.
    The pubkey is reattached here so the result can be logged on its own.
    """

    pubkey: PublicKey
    """Key the status refers to."""

    status: str
    """Raw status string as reported by the key manager."""

    message: str = ""
    """Optional human-readable detail."""

    @property
    def is_error(self) -> bool:
        """
        Whether the key manager rejected the operation for this key.

        Importing a key that is already present (duplicate) and deleting
        a key that is already absent (not_found, not_active) both succeed.
        """
        return self.status == ImportStatus.ERROR
