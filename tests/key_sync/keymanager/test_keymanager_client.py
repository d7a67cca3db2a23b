"""Tests for the consensus client remote key manager client."""

from __future__ import annotations

import json
from collections.abc import Callable

import httpx
import pytest

from key_sync.exceptions import ClientUnavailable, DeleteFailed, ImportFailed
from key_sync.keymanager import KeyManagerClient
from key_sync.reconcile import Reconciler
from key_sync.types import KeyStatus
from tests.key_sync.helpers import FakeKeyLister, make_pubkey

BASE_URL = "http://validator.lighthouse-prater.dappnode:3500"
SIGNER_URL = "https://remote.signer"

K1 = make_pubkey("43611df74a")
K2 = make_pubkey("fjfh3jcisp9")


def recording_client(
    respond: Callable[[httpx.Request], httpx.Response],
) -> tuple[KeyManagerClient, list[httpx.Request]]:
    """Build a client backed by ``respond`` that records every request."""
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return respond(request)

    return KeyManagerClient(BASE_URL, transport=httpx.MockTransport(handler)), seen


def statuses(*entries: tuple[str, str]) -> httpx.Response:
    """Build a status envelope response."""
    return httpx.Response(
        200, json={"data": [{"status": s, "message": m} for s, m in entries]}
    )


class TestListKeys:
    """Tests for GET /eth/v1/remotekeys."""

    async def test_parses_pubkeys(self) -> None:
        """Only pubkey is consumed from each entry."""
        body = {
            "data": [
                {"pubkey": K1, "url": SIGNER_URL, "readonly": True},
                {"pubkey": K2, "url": SIGNER_URL, "readonly": False},
            ]
        }
        client, seen = recording_client(lambda _: httpx.Response(200, json=body))

        assert await client.list_keys() == [K1, K2]
        assert seen[0].method == "GET"
        assert str(seen[0].url) == f"{BASE_URL}/eth/v1/remotekeys"

    async def test_http_error_raises_client_unavailable(self) -> None:
        """Non-2xx responses surface as ClientUnavailable."""
        client, _ = recording_client(lambda _: httpx.Response(401, text="unauthorized"))

        with pytest.raises(ClientUnavailable, match="HTTP error 401"):
            await client.list_keys()

    async def test_malformed_body_raises_client_unavailable(self) -> None:
        """A body without a data array surfaces as ClientUnavailable."""
        client, _ = recording_client(lambda _: httpx.Response(200, json={"keys": []}))

        with pytest.raises(ClientUnavailable):
            await client.list_keys()


class TestImportKeys:
    """Tests for POST /eth/v1/remotekeys."""

    async def test_sends_signer_bindings(self) -> None:
        """Each key is submitted with the signer URL."""
        client, seen = recording_client(
            lambda _: statuses(("imported", ""), ("duplicate", "already present"))
        )

        result = await client.import_keys([K1, K2], SIGNER_URL)

        request = seen[0]
        assert request.method == "POST"
        assert request.headers["content-type"] == "application/json"
        assert json.loads(request.content) == {
            "remote_keys": [
                {"pubkey": K1, "url": SIGNER_URL},
                {"pubkey": K2, "url": SIGNER_URL},
            ]
        }
        assert result == [
            KeyStatus(pubkey=K1, status="imported", message=""),
            KeyStatus(pubkey=K2, status="duplicate", message="already present"),
        ]

    async def test_error_status_is_returned_not_raised(self) -> None:
        """Per-key errors come back as statuses for the caller to judge."""
        client, _ = recording_client(lambda _: statuses(("error", "bad url")))

        [result] = await client.import_keys([K1], SIGNER_URL)

        assert result.is_error
        assert result.message == "bad url"

    async def test_missing_message_defaults_to_empty(self) -> None:
        """Clients may omit or null the message field."""
        body = {"data": [{"status": "imported"}, {"status": "imported", "message": None}]}
        client, _ = recording_client(lambda _: httpx.Response(200, json=body))

        result = await client.import_keys([K1, K2], SIGNER_URL)

        assert [s.message for s in result] == ["", ""]

    async def test_long_response_raises_import_failed(self) -> None:
        """A trailing status beyond the submitted keys fails the import."""
        client, _ = recording_client(lambda _: statuses(("imported", ""), ("error", "x")))

        with pytest.raises(ImportFailed, match="returned 2 statuses for 1 keys to import"):
            await client.import_keys([K1], SIGNER_URL)

    async def test_extra_status_fails_the_reconciliation(self) -> None:
        """The reconciler reports the import as failed, not as a success."""
        remote = FakeKeyLister([K1])

        def respond(request: httpx.Request) -> httpx.Response:
            if request.method == "GET":
                return httpx.Response(200, json={"data": []})
            return statuses(("imported", ""), ("error", "x"))

        client, _ = recording_client(respond)
        report = await Reconciler(remote, client, SIGNER_URL).run()

        assert not report.ok
        assert report.import_error is not None
        assert "2 statuses for 1 keys" in report.import_error.message
        assert report.import_statuses == ()

    async def test_network_error_raises_import_failed(self) -> None:

        """Transport failures surface as ImportFailed."""

        def respond(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        client, _ = recording_client(respond)

        with pytest.raises(ImportFailed, match="Network error"):
            await client.import_keys([K1], SIGNER_URL)


class TestDeleteKeys:
    """Tests for DELETE /eth/v1/remotekeys."""

    async def test_sends_pubkeys_in_body(self) -> None:
        """The DELETE request carries a JSON body of pubkeys."""
        client, seen = recording_client(lambda _: statuses(("deleted", ""), ("not_found", "")))

        result = await client.delete_keys([K1, K2])

        request = seen[0]
        assert request.method == "DELETE"
        assert str(request.url) == f"{BASE_URL}/eth/v1/remotekeys"
        assert json.loads(request.content) == {"pubkeys": [K1, K2]}
        assert [(s.pubkey, s.status) for s in result] == [(K1, "deleted"), (K2, "not_found")]
        assert not any(s.is_error for s in result)

    async def test_short_response_raises_delete_failed(self) -> None:
        """Fewer statuses than keys cannot be paired and fail the delete."""
        client, _ = recording_client(lambda _: statuses(("deleted", "")))

        with pytest.raises(DeleteFailed, match="returned 1 statuses for 2 keys to delete"):
            await client.delete_keys([K1, K2])

    async def test_long_response_raises_delete_failed(self) -> None:
        """Extra statuses are not silently dropped."""
        client, _ = recording_client(lambda _: statuses(("deleted", ""), ("error", "x")))

        with pytest.raises(DeleteFailed, match="returned 2 statuses for 1 keys to delete"):
            await client.delete_keys([K1])


    async def test_http_error_raises_delete_failed(self) -> None:
        """Non-2xx responses surface as DeleteFailed."""
        client, _ = recording_client(lambda _: httpx.Response(500, text="internal"))

        with pytest.raises(DeleteFailed, match="HTTP error 500"):
            await client.delete_keys([K1])
