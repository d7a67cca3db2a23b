"""
Shared HTTP plumbing for the remote signer and key manager clients.

Every call is a single attempt. Failures are translated into the caller's
error type so the reconciler can tell which side and which phase failed.
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar

import httpx

from key_sync.exceptions import KeySyncError
from key_sync.types import WireModel

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=WireModel)

JSON_HEADERS = {"Accept": "application/json"}
"""Headers sent with every request."""


async def request_json(
    method: str,
    url: str,
    response_model: type[M],
    error_type: type[KeySyncError],
    *,
    body: WireModel | None = None,
    timeout: float,
    transport: httpx.AsyncBaseTransport | None = None,
) -> M:
    """
    Send one JSON request and parse the JSON response.

    Args:
        method: HTTP method.
        url: Full request URL.
        response_model: Model the response body must validate against.
        error_type: Exception raised for any failure.
        body: Optional request body, serialized as JSON.
        timeout: Request timeout in seconds.
        transport: Optional transport override (used by tests).

    Returns:
        The validated response body.

    Raises:
        KeySyncError: Of type ``error_type``, on network, HTTP or parse errors.
    """
    payload: Any = body.model_dump(mode="json") if body is not None else None

    logger.debug("%s %s", method, url)

    try:
        async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
            # httpx only accepts a JSON body through the generic request API
            # for DELETE, so every method goes through it.
            response = await client.request(method, url, json=payload, headers=JSON_HEADERS)
            response.raise_for_status()
            return response_model.model_validate(response.json())

    except httpx.RequestError as exc:
        raise error_type(f"Network error while connecting to {exc.request.url}: {exc}") from exc
    except httpx.HTTPStatusError as exc:
        raise error_type(
            f"HTTP error {exc.response.status_code} from {method} {url}: {exc.response.text[:200]}"
        ) from exc
    except ValueError as exc:
        # Covers both malformed JSON and schema validation failures.
        raise error_type(f"Invalid response from {method} {url}: {exc}") from exc
