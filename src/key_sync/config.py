"""
Process configuration for key synchronization.

All settings come from the environment and are read exactly once at startup.
The resulting value is passed explicitly to whatever needs it.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from enum import StrEnum
from typing import Final

from pydantic import Field, field_validator

from key_sync.exceptions import ConfigurationError
from key_sync.types import StrictBaseModel

MODE_ENV: Final = "KEY_SYNC_ENV"
"""Selects between production and development behavior."""

CLIENT_API_URL_ENV: Final = "ETH2_CLIENT_API_URL"
"""Base URL of the consensus client key manager API."""

SIGNER_API_URL_ENV: Final = "WEB3SIGNER_API_URL"
"""Base URL of the remote signer API."""

HTTP_TIMEOUT_ENV: Final = "KEY_SYNC_HTTP_TIMEOUT"
"""Optional HTTP timeout override, in seconds."""

DEFAULT_HTTP_TIMEOUT: Final[float] = 30.0
"""HTTP request timeout in seconds when no override is configured."""


class Mode(StrEnum):
    """Recognized values of the mode selector."""

    PRODUCTION = "production"
    """Reconcile keys on every run."""

    DEVELOPMENT = "development"
    """Start up, validate configuration, and skip reconciliation."""


class SyncConfig(StrictBaseModel):
    """Immutable configuration for one process lifetime."""

    mode: Mode
    """Whether runs actually reconcile."""

    client_api_url: str = Field(min_length=1)
    """Base URL of the consensus client (e.g. http://validator.lighthouse:3500)."""

    signer_api_url: str = Field(min_length=1)
    """Base URL of the remote signer (e.g. http://web3signer:9000)."""

    http_timeout: float = Field(default=DEFAULT_HTTP_TIMEOUT, gt=0)
    """Timeout applied to every HTTP request, in seconds."""

    @field_validator("client_api_url", "signer_api_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Drop trailing slashes so endpoint paths can be appended directly."""
        return v.rstrip("/")

    @property
    def reconciles(self) -> bool:
        """Only production mode reconciles."""
        return self.mode is Mode.PRODUCTION

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> SyncConfig:
        """
        Build the configuration from environment variables.

        Args:
            environ: Mapping to read from. Defaults to ``os.environ``.

        Returns:
            Validated configuration.

        Raises:
            ConfigurationError: If a variable is missing, empty, or invalid.
        """
        env = os.environ if environ is None else environ

        raw_mode = _require(env, MODE_ENV)
        try:
            mode = Mode(raw_mode)
        except ValueError:
            raise ConfigurationError(
                f"{MODE_ENV} must be one of {[m.value for m in Mode]}, got '{raw_mode}'"
            ) from None

        client_api_url = _require(env, CLIENT_API_URL_ENV)
        signer_api_url = _require(env, SIGNER_API_URL_ENV)

        http_timeout = DEFAULT_HTTP_TIMEOUT
        raw_timeout = env.get(HTTP_TIMEOUT_ENV, "").strip()
        if raw_timeout:
            try:
                http_timeout = float(raw_timeout)
            except ValueError:
                raise ConfigurationError(
                    f"{HTTP_TIMEOUT_ENV} must be a number of seconds, got '{raw_timeout}'"
                ) from None
            if http_timeout <= 0:
                raise ConfigurationError(f"{HTTP_TIMEOUT_ENV} must be positive")

        config = cls(
            mode=mode,
            client_api_url=client_api_url,
            signer_api_url=signer_api_url,
            http_timeout=http_timeout,
        )

        # A URL made only of slashes is empty once normalized.
        if not config.client_api_url:
            raise ConfigurationError(f"{CLIENT_API_URL_ENV} must not be empty")
        if not config.signer_api_url:
            raise ConfigurationError(f"{SIGNER_API_URL_ENV} must not be empty")

        return config


def _require(env: Mapping[str, str], name: str) -> str:
    """Fetch a mandatory, non-blank variable."""
    value = env.get(name, "").strip()
    if not value:
        raise ConfigurationError(f"{name} environment variable not set")
    return value
