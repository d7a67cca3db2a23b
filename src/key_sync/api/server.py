"""
Status server for the periodic key sync service.

Provides HTTP endpoints for:
- /health - Liveness check
- /metrics - Prometheus metrics endpoint
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from aiohttp import web

from key_sync.metrics import generate_metrics

logger = logging.getLogger(__name__)

SERVICE_NAME = "key-sync"
"""Service identifier reported by the health endpoint."""


async def _handle_health(_request: web.Request) -> web.Response:
    """Handle health check endpoint."""
    return web.json_response({"status": "healthy", "service": SERVICE_NAME})


async def _handle_metrics(_request: web.Request) -> web.Response:
    """Handle Prometheus metrics endpoint."""
    return web.Response(
        body=generate_metrics(),
        content_type="text/plain",
        charset="utf-8",
        headers={"X-Prometheus-Format": "0.0.4"},
    )


@dataclass(frozen=True, slots=True)
class ApiServerConfig:
    """Configuration for the status server."""

    host: str = "0.0.0.0"
    """Host address to bind to."""

    port: int = 9100
    """Port to listen on."""

    enabled: bool = True
    """Whether the status server is enabled."""


@dataclass(slots=True)
class ApiServer:
    """
    HTTP server exposing health and metrics.

    Uses aiohttp to handle HTTP protocol details efficiently.
    """

    config: ApiServerConfig
    """Server configuration."""

    _runner: web.AppRunner | None = field(default=None, init=False)
    """The aiohttp application runner."""

    _site: web.TCPSite | None = field(default=None, init=False)
    """The TCP site for the server."""

    @property
    def is_running(self) -> bool:
        """Whether the server is currently serving."""
        return self._runner is not None

    async def start(self) -> None:
        """Start the server in the background."""
        if not self.config.enabled:
            logger.info("Status server is disabled")
            return

        app = web.Application()
        app.add_routes(
            [
                web.get("/health", _handle_health),
                web.get("/metrics", _handle_metrics),
            ]
        )

        self._runner = web.AppRunner(app)
        await self._runner.setup()

        self._site = web.TCPSite(self._runner, self.config.host, self.config.port)
        await self._site.start()

        logger.info(f"Status server listening on {self.config.host}:{self.config.port}")

    async def aclose(self) -> None:
        """Gracefully stop the server."""
        if self._runner:
            await self._runner.cleanup()
            self._runner = None
            self._site = None
            logger.info("Status server stopped")
