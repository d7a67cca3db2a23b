"""
Key sync CLI entry point.

Reconcile the remote keys of a consensus client against a remote signer.

Usage::

    python -m key_sync
    python -m key_sync --interval 60
    python -m key_sync --interval 60 --metrics-port 9100

Environment:
    KEY_SYNC_ENV           production | development (required)
    ETH2_CLIENT_API_URL    Consensus client validator API base URL (required)
    WEB3SIGNER_API_URL     Remote signer base URL (required)
    KEY_SYNC_HTTP_TIMEOUT  HTTP timeout in seconds (default: 30)

Options:
    --interval             Run every N seconds instead of once
    --metrics-port         Serve /health and /metrics on this port (with --interval)

Exit codes:
    0  Reconciled (or development mode)
    1  Reconciliation failed, fully or partially
    2  Invalid configuration
"""

from __future__ import annotations

import argparse
import asyncio
import logging
from collections.abc import Sequence

from key_sync.api import ApiServer, ApiServerConfig
from key_sync.config import SyncConfig
from key_sync.exceptions import ConfigurationError, ReadPhaseError
from key_sync.keymanager import KeyManagerClient
from key_sync.reconcile import Reconciler, SyncService, log_report
from key_sync.signer import Web3SignerClient

EXIT_OK = 0
EXIT_RUN_FAILED = 1
EXIT_CONFIG_ERROR = 2

logger = logging.getLogger(__name__)


def build_reconciler(config: SyncConfig) -> Reconciler:
    """
    Wire the HTTP clients for both sides into a reconciler.

    Imported keys are bound to the signer URL from the configuration.
    """
    return Reconciler(
        remote=Web3SignerClient(config.signer_api_url, timeout=config.http_timeout),
        client=KeyManagerClient(config.client_api_url, timeout=config.http_timeout),
        signer_url=config.signer_api_url,
    )


async def run_once(reconciler: Reconciler) -> int:
    """
    Execute one reconciliation and map its outcome to an exit code.

    Args:
        reconciler: Reconciler to run.

    Returns:
        EXIT_OK if both write operations succeeded, EXIT_RUN_FAILED otherwise.
    """
    try:
        report = await reconciler.run()
    except ReadPhaseError as e:
        logger.error("Reconciliation aborted: %s", e.message)
        return EXIT_RUN_FAILED

    log_report(report)
    return EXIT_OK if report.ok else EXIT_RUN_FAILED


async def run_periodically(
    reconciler: Reconciler,
    interval: float,
    metrics_port: int | None = None,
) -> int:
    """
    Reconcile every ``interval`` seconds until cancelled.

    Args:
        reconciler: Reconciler to run.
        interval: Seconds between runs.
        metrics_port: Optional port for the health and metrics server.
    """
    server: ApiServer | None = None
    if metrics_port is not None:
        server = ApiServer(ApiServerConfig(port=metrics_port))
        await server.start()

    service = SyncService(reconciler=reconciler, interval=interval)
    try:
        await service.run()
    finally:
        service.stop()
        if server is not None:
            await server.aclose()
    return EXIT_OK


async def run(
    config: SyncConfig,
    interval: float | None = None,
    metrics_port: int | None = None,
) -> int:
    """
    Run the key sync according to the configured mode.

    Args:
        config: Process configuration.
        interval: If set, run periodically with this many seconds between runs.
        metrics_port: Optional port for the status server in periodic mode.

    Returns:
        Process exit code.
    """
    logger.info("Starting key sync")

    if not config.reconciles:
        logger.info("Running in %s mode, skipping reconciliation", config.mode.value)
        return EXIT_OK

    logger.info("Running in %s mode", config.mode.value)
    logger.info(
        "Remote signer: %s, client key manager: %s",
        config.signer_api_url,
        config.client_api_url,
    )

    reconciler = build_reconciler(config)
    if interval is None:
        code = await run_once(reconciler)
    else:
        code = await run_periodically(reconciler, interval, metrics_port)

    logger.info("Finished key sync")
    return code


class ColoredFormatter(logging.Formatter):
    """Logging formatter with ANSI colors for better readability."""

    # ANSI color codes
    GREY = "\x1b[38;5;244m"
    BLUE = "\x1b[38;5;39m"
    GREEN = "\x1b[38;5;40m"
    YELLOW = "\x1b[38;5;220m"
    RED = "\x1b[38;5;196m"
    BOLD_RED = "\x1b[38;5;196;1m"
    CYAN = "\x1b[38;5;51m"
    RESET = "\x1b[0m"

    LEVEL_COLORS = {
        logging.DEBUG: GREY,
        logging.INFO: GREEN,
        logging.WARNING: YELLOW,
        logging.ERROR: RED,
        logging.CRITICAL: BOLD_RED,
    }

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with colors."""
        color = self.LEVEL_COLORS.get(record.levelno, self.RESET)
        timestamp = f"{self.CYAN}{self.formatTime(record, self.datefmt)}{self.RESET}"
        levelname = f"{color}{record.levelname:8}{self.RESET}"
        name = f"{self.BLUE}{record.name}{self.RESET}"
        return f"{timestamp} {levelname} {name}: {record.getMessage()}"


def setup_logging(verbose: bool = False, no_color: bool = False) -> None:
    """Configure logging for the process with optional colors."""
    level = logging.DEBUG if verbose else logging.INFO

    handler = logging.StreamHandler()
    handler.setLevel(level)

    if no_color:
        formatter = logging.Formatter(
            "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    else:
        formatter = ColoredFormatter(datefmt="%Y-%m-%d %H:%M:%S")

    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.setLevel(level)
    root.addHandler(handler)

    # httpx logs every request at INFO; keep that for --verbose only.
    if not verbose:
        logging.getLogger("httpx").setLevel(logging.WARNING)


def _positive_float(value: str) -> float:
    """Argparse type for strictly positive seconds."""
    number = float(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser."""
    parser = argparse.ArgumentParser(
        prog="key-sync",
        description="Sync consensus client remote keys with a remote signer",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--interval",
        type=_positive_float,
        default=None,
        help="Run every INTERVAL seconds instead of once",
    )
    parser.add_argument(
        "--metrics-port",
        type=int,
        default=None,
        help="Serve /health and /metrics on this port (requires --interval)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored logging output",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.metrics_port is not None and args.interval is None:
        parser.error("--metrics-port requires --interval")

    setup_logging(args.verbose, args.no_color)

    try:
        config = SyncConfig.from_env()
    except ConfigurationError as e:
        logger.critical("Invalid configuration: %s", e.message)
        return EXIT_CONFIG_ERROR

    try:
        return asyncio.run(run(config, args.interval, args.metrics_port))
    except KeyboardInterrupt:
        logger.info("Shutting down...")
        return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
