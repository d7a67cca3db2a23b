"""
Periodic reconciliation service.

Runs the reconciler on a fixed interval. Runs never overlap: the next one
starts only after the previous one has finished and the interval has elapsed.
A failed run is logged and the loop carries on; the next run starts from
fresh listings, so nothing needs cleaning up.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field

from key_sync.exceptions import ReadPhaseError

from .reconciler import ReconciliationReport, Reconciler

logger = logging.getLogger(__name__)


def log_report(report: ReconciliationReport) -> None:
    """Log the outcome of a completed run."""
    if report.plan.is_empty:
        logger.info("Reconciliation finished: nothing to do")
        return

    logger.info(
        "Reconciliation finished: %d/%d keys added, %d/%d keys removed",
        report.imported,
        len(report.plan.to_add),
        report.deleted,
        len(report.plan.to_remove),
    )
    for error in report.errors:
        logger.error("%s: %s", type(error).__name__, error.message)
        for status in error.statuses:
            logger.error("  %s -> %s %s", status.pubkey, status.status, status.message)


@dataclass(slots=True)
class SyncService:
    """Drives the reconciler on a fixed interval until stopped."""

    reconciler: Reconciler
    """Reconciler executed on every tick."""

    interval: float
    """Seconds to wait between the end of one run and the start of the next."""

    _running: bool = field(default=False, repr=False)
    """Whether the service loop is active."""

    _runs: int = field(default=0, repr=False)
    """Completed runs, successful or not."""

    _stopped: asyncio.Event = field(default_factory=asyncio.Event, repr=False)
    """Set when stop() is requested, to cut the sleep short."""

    @property
    def runs(self) -> int:
        """Number of runs attempted so far."""
        return self._runs

    @property
    def is_running(self) -> bool:
        """Whether the loop is currently active."""
        return self._running

    async def run_once(self) -> ReconciliationReport | None:
        """
        Execute a single reconciliation run and log its outcome.

        Returns:
            The report, or None if the read phase aborted the run.
        """
        self._runs += 1
        try:
            report = await self.reconciler.run()
        except ReadPhaseError as e:
            logger.error("Reconciliation aborted: %s", e.message)
            return None
        log_report(report)
        return report

    async def run(self) -> None:
        """
        Main loop: reconcile, then sleep, until stopped.

        A stop requested before the loop starts is honored: no run happens.
        """
        if self._stopped.is_set():
            logger.info("Key sync stopped before the first run")
            return

        self._running = True
        logger.info("Starting key sync every %.1fs", self.interval)

        while self._running:
            await self.run_once()
            if not self._running:
                break
            try:
                await asyncio.wait_for(self._stopped.wait(), timeout=self.interval)
            except TimeoutError:
                pass

        logger.info("Key sync stopped after %d runs", self._runs)

    def stop(self) -> None:
        """Stop the loop once the current run finishes, or prevent it from starting."""
        self._running = False
        self._stopped.set()
