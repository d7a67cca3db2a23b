"""
Reconciler: one read-diff-write pass over the client key manager.

Protocol for a single run:

1. List the remote signer keys (aborts the run on failure)
2. List the client key manager keys (aborts the run on failure)
3. Compute the plan
4. Import missing keys, if any
5. Delete stale keys, if any

Steps 4 and 5 are independent. A failed import never prevents the delete
attempt: the operator must be able to see which half of the run succeeded.
Nothing is retried; the next run starts again from fresh listings.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from typing import TypeVar

from key_sync import metrics
from key_sync.exceptions import (
    ClientUnavailable,
    DeleteFailed,
    ImportFailed,
    RemoteUnavailable,
    WritePhaseError,
)
from key_sync.types import KeyStatus, PublicKey

from .contracts import KeyLister, KeyManager
from .diff import ReconciliationPlan, compute_plan

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=WritePhaseError)


@dataclass(frozen=True, slots=True)
class ReconciliationReport:
    """Everything an operator needs to know about one completed run."""

    plan: ReconciliationPlan
    """The plan that was applied."""

    import_statuses: tuple[KeyStatus, ...] = ()
    """Per-key import results. Empty when nothing was imported or the call failed."""

    delete_statuses: tuple[KeyStatus, ...] = ()
    """Per-key delete results. Empty when nothing was deleted or the call failed."""

    import_error: ImportFailed | None = None
    """Set when the import request failed or reported per-key errors."""

    delete_error: DeleteFailed | None = None
    """Set when the delete request failed or reported per-key errors."""

    @property
    def ok(self) -> bool:
        """True when both write operations succeeded (or were not needed)."""
        return self.import_error is None and self.delete_error is None

    @property
    def errors(self) -> list[WritePhaseError]:
        """Write-phase errors in the order they happened."""
        return [e for e in (self.import_error, self.delete_error) if e is not None]

    @property
    def imported(self) -> int:
        """Number of keys the client accepted (newly imported or already present)."""
        return sum(1 for s in self.import_statuses if not s.is_error)

    @property
    def deleted(self) -> int:
        """Number of keys the client no longer holds."""
        return sum(1 for s in self.delete_statuses if not s.is_error)


@dataclass(frozen=True, slots=True)
class Reconciler:
    """
    Converges the client key manager onto the remote signer.

    The remote signer is only ever read. All writes target the client.
    Instances hold no state between runs and may be reused.
    """

    remote: KeyLister
    """Authoritative source of keys (the remote signer)."""

    client: KeyManager
    """Key manager being reconciled (the consensus client)."""

    signer_url: str
    """Signer URL attached to every imported key."""

    async def run(self) -> ReconciliationReport:
        """
        Execute one full reconciliation pass.

        Returns:
            Report of the write phase. Check ``report.ok`` for partial failure.

        Raises:
            RemoteUnavailable: If the remote signer keys cannot be listed.
            ClientUnavailable: If the client keys cannot be listed.
        """
        metrics.runs_total.inc()
        started = time.monotonic()
        try:
            return await self._run()
        finally:
            metrics.run_duration.observe(time.monotonic() - started)

    async def _run(self) -> ReconciliationReport:
        # Read phase.
        #
        # Without both listings no plan can be computed, so failures abort.
        remote_keys = await self._list(self.remote, RemoteUnavailable, "remote signer")
        metrics.remote_keys_count.set(len(remote_keys))

        client_keys = await self._list(self.client, ClientUnavailable, "client")
        metrics.client_keys_count.set(len(client_keys))

        logger.info(
            "Fetched %d remote signer keys and %d client keys",
            len(remote_keys),
            len(client_keys),
        )

        plan = compute_plan(remote_keys, client_keys)
        if plan.is_empty:
            logger.info("Client keys already match the remote signer")
            return ReconciliationReport(plan=plan)

        # Write phase.
        #
        # Each operation is attempted on its own. Errors are captured,
        # never propagated, so the other half still runs.
        import_statuses: tuple[KeyStatus, ...] = ()
        import_error: ImportFailed | None = None
        if plan.to_add:
            logger.info("Public keys to add: %s", list(plan.to_add))
            import_statuses, import_error = await self._write(
                lambda: self.client.import_keys(plan.to_add, self.signer_url),
                plan.to_add,
                ImportFailed,
                "import",
            )
            metrics.keys_imported.inc(len(plan.to_add))
        else:
            logger.info("No public keys to add")

        delete_statuses: tuple[KeyStatus, ...] = ()
        delete_error: DeleteFailed | None = None
        if plan.to_remove:
            logger.info("Public keys to remove: %s", list(plan.to_remove))
            delete_statuses, delete_error = await self._write(
                lambda: self.client.delete_keys(plan.to_remove),
                plan.to_remove,
                DeleteFailed,
                "delete",
            )
            metrics.keys_deleted.inc(len(plan.to_remove))
        else:
            logger.info("No public keys to remove")

        return ReconciliationReport(
            plan=plan,
            import_statuses=import_statuses,
            delete_statuses=delete_statuses,
            import_error=import_error,
            delete_error=delete_error,
        )

    async def _list(
        self,
        source: KeyLister,
        error_type: type[RemoteUnavailable] | type[ClientUnavailable],
        label: str,
    ) -> list[PublicKey]:
        """List keys from one side, normalizing any failure to ``error_type``."""
        try:
            return list(await source.list_keys())
        except error_type:
            metrics.run_failures.labels(phase="read").inc()
            raise
        except Exception as e:
            metrics.run_failures.labels(phase="read").inc()
            raise error_type(f"Failed to list {label} keys: {e}") from e

    async def _write(
        self,
        call: Callable[[], Awaitable[list[KeyStatus]]],
        keys: Sequence[PublicKey],
        error_type: type[E],
        operation: str,
    ) -> tuple[tuple[KeyStatus, ...], E | None]:
        """
        Run one write operation and classify its outcome.

        Returns:
            The per-key statuses (empty if the call itself failed) and the
            error to report, if any.
        """
        try:
            statuses = tuple(await call())
        except error_type as e:
            metrics.run_failures.labels(phase=operation).inc()
            logger.error("Failed to %s %d keys: %s", operation, len(keys), e.message)
            return (), e
        except Exception as e:
            metrics.run_failures.labels(phase=operation).inc()
            logger.error("Failed to %s %d keys: %s", operation, len(keys), e)
            return (), error_type(f"Failed to {operation} keys: {e}")

        # A key writer may answer with a different number of entries than
        # keys submitted.
        #
        # Such a list cannot be attributed to keys, so the whole operation
        # is reported as failed while keeping what did come back.
        if len(statuses) != len(keys):
            metrics.run_failures.labels(phase=operation).inc()
            message = (
                f"Key manager returned {len(statuses)} statuses for {len(keys)} keys to {operation}"
            )
            logger.error(message)
            return statuses, error_type(message)

        failed = [s for s in statuses if s.is_error]
        for status in failed:
            logger.warning(
                "Key manager rejected %s of %s: %s", operation, status.pubkey, status.message
            )
        for status in statuses:
            if not status.is_error:
                logger.debug("%s %s: %s", operation.capitalize(), status.pubkey, status.status)

        if failed:
            metrics.key_errors.labels(operation=operation).inc(len(failed))
            metrics.run_failures.labels(phase=operation).inc()
            return statuses, error_type(
                f"{len(failed)} of {len(keys)} keys failed to {operation}", failed
            )

        logger.info("Submitted %d keys to %s", len(statuses), operation)
        return statuses, None
