"""
Status server module.

Provides HTTP endpoints for:
- /health - Health check endpoint
- /metrics - Prometheus metrics
"""

from .server import ApiServer, ApiServerConfig

__all__ = [
    "ApiServer",
    "ApiServerConfig",
]
