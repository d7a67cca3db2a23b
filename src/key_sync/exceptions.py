"""Exception hierarchy for key synchronization."""

from __future__ import annotations

from collections.abc import Sequence

from key_sync.types import KeyStatus


class KeySyncError(Exception):
    """
    Base exception for all key synchronization errors.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


class ConfigurationError(KeySyncError):
    """
    Raised when the process environment is missing or invalid.

    Fatal at startup: no reconciliation is attempted.
    """


class ReadPhaseError(KeySyncError):
    """Base class for failures while fetching a key set."""


class RemoteUnavailable(ReadPhaseError):
    """The remote signer key listing failed or could not be parsed."""


class ClientUnavailable(ReadPhaseError):
    """The client key manager listing failed or could not be parsed."""


class WritePhaseError(KeySyncError):
    """
    Base class for failures while applying a plan to the client.

    Attributes:
        statuses: Per-key statuses that the key manager reported as errors.
            Empty when the request itself failed and no statuses came back.
    """

    def __init__(self, message: str, statuses: Sequence[KeyStatus] = ()) -> None:
        super().__init__(message)
        self.statuses = tuple(statuses)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, statuses={len(self.statuses)})"


class ImportFailed(WritePhaseError):
    """Importing keys into the client key manager failed, fully or per key."""


class DeleteFailed(WritePhaseError):
    """Deleting keys from the client key manager failed, fully or per key."""
