"""Tests for key status types and the exception hierarchy."""

from __future__ import annotations

import pytest

from key_sync.exceptions import (
    ClientUnavailable,
    ConfigurationError,
    DeleteFailed,
    ImportFailed,
    KeySyncError,
    ReadPhaseError,
    RemoteUnavailable,
    WritePhaseError,
)
from key_sync.types import DeleteStatus, ImportStatus, KeyStatus


class TestKeyStatus:
    """Tests for per-key write results."""

    @pytest.mark.parametrize(
        "status",
        [
            ImportStatus.IMPORTED,
            ImportStatus.DUPLICATE,
            DeleteStatus.DELETED,
            DeleteStatus.NOT_FOUND,
            DeleteStatus.NOT_ACTIVE,
        ],
    )
    def test_idempotent_outcomes_are_not_errors(self, status: str) -> None:
        """Already-present and already-absent keys are successes."""
        assert not KeyStatus(pubkey="0xaa", status=str(status)).is_error

    def test_error_status(self) -> None:
        assert KeyStatus(pubkey="0xaa", status="error", message="boom").is_error

    def test_unknown_status_is_not_an_error(self) -> None:
        """Only the explicit error status counts as a failure."""
        assert not KeyStatus(pubkey="0xaa", status="pending").is_error

    def test_is_frozen(self) -> None:
        status = KeyStatus(pubkey="0xaa", status="imported")
        with pytest.raises(AttributeError):
            status.status = "error"  # type: ignore[misc]


class TestExceptions:
    """Tests for the error taxonomy."""

    @pytest.mark.parametrize(
        "error_type",
        [ConfigurationError, RemoteUnavailable, ClientUnavailable, ImportFailed, DeleteFailed],
    )
    def test_all_share_a_base(self, error_type: type[KeySyncError]) -> None:
        assert issubclass(error_type, KeySyncError)

    def test_phases(self) -> None:
        """Read and write failures are distinguishable by base class."""
        assert issubclass(RemoteUnavailable, ReadPhaseError)
        assert issubclass(ClientUnavailable, ReadPhaseError)
        assert issubclass(ImportFailed, WritePhaseError)
        assert issubclass(DeleteFailed, WritePhaseError)
        assert not issubclass(ConfigurationError, (ReadPhaseError, WritePhaseError))

    def test_write_error_carries_statuses(self) -> None:
        failed = KeyStatus(pubkey="0xaa", status="error", message="bad")

        error = ImportFailed("1 of 2 keys failed to import", [failed])

        assert error.message == "1 of 2 keys failed to import"
        assert error.statuses == (failed,)
        assert str(error) == "1 of 2 keys failed to import"
        assert repr(error) == "ImportFailed('1 of 2 keys failed to import', statuses=1)"

    def test_write_error_without_statuses(self) -> None:
        assert DeleteFailed("HTTP error 500").statuses == ()

    def test_repr(self) -> None:
        assert repr(RemoteUnavailable("down")) == "RemoteUnavailable('down')"
