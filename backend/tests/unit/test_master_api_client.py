"""Unit tests for the HttpMasterDataBackend."""

import json

import httpx
import pytest

from mfg_console.domain.exceptions import EntityNotFoundError, MasterDataBackendError
from mfg_console.infrastructure.http.master_api_client import HttpMasterDataBackend

BASE_URL = "http://masters.test/api/v1/masters"


# ── Helpers ──


def _make_mock_transport(
    response_data: object = None,
    status_code: int = 200,
    seen: list[httpx.Request] | None = None,
) -> httpx.MockTransport:
    """Create a mock transport that records requests and returns a fixed response."""

    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        if response_data is None:
            return httpx.Response(status_code)
        return httpx.Response(status_code, json=response_data)

    return httpx.MockTransport(handler)


def _client(transport: httpx.MockTransport) -> HttpMasterDataBackend:
    return HttpMasterDataBackend(BASE_URL, http_client=httpx.AsyncClient(transport=transport))


# ── Tests ──


@pytest.mark.asyncio
async def test_get_all_returns_list():
    seen: list[httpx.Request] = []
    backend = _client(_make_mock_transport([{"id": 1}], seen=seen))

    assert await backend.get_all("customer") == [{"id": 1}]
    assert seen[0].method == "GET"
    assert str(seen[0].url) == f"{BASE_URL}/customer"


@pytest.mark.asyncio
async def test_get_all_unwraps_data_envelope():
    backend = _client(_make_mock_transport({"data": [{"id": 1}]}))
    assert await backend.get_all("customer") == [{"id": 1}]


@pytest.mark.asyncio
async def test_get_all_rejects_non_list():
    backend = _client(_make_mock_transport({"detail": "nope"}))
    with pytest.raises(MasterDataBackendError, match="expected a list"):
        await backend.get_all("customer")


@pytest.mark.asyncio
async def test_create_posts_json_body():
    seen: list[httpx.Request] = []
    backend = _client(_make_mock_transport({"id": 5, "name": "Acme"}, status_code=201, seen=seen))

    created = await backend.create("company", {"name": "Acme"})

    assert created == {"id": 5, "name": "Acme"}
    assert seen[0].method == "POST"
    assert json.loads(seen[0].content) == {"name": "Acme"}


@pytest.mark.asyncio
async def test_update_puts_to_record_url():
    seen: list[httpx.Request] = []
    backend = _client(_make_mock_transport({"id": "7", "status": "Sent"}, seen=seen))

    await backend.update("quotation", "7", {"status": "Sent"})

    assert seen[0].method == "PUT"
    assert str(seen[0].url) == f"{BASE_URL}/quotation/7"


@pytest.mark.asyncio
async def test_update_missing_record_raises_not_found():
    backend = _client(_make_mock_transport({"detail": "not found"}, status_code=404))

    with pytest.raises(EntityNotFoundError) as exc_info:
        await backend.update("quotation", "999", {"status": "Sent"})

    assert exc_info.value.entity_id == "999"


@pytest.mark.asyncio
async def test_delete_accepts_empty_body():
    seen: list[httpx.Request] = []
    backend = _client(_make_mock_transport(None, status_code=204, seen=seen))

    await backend.delete("quotation", "7")

    assert seen[0].method == "DELETE"


@pytest.mark.asyncio
async def test_server_error_carries_status_and_detail():
    backend = _client(_make_mock_transport({"detail": "database down"}, status_code=503))

    with pytest.raises(MasterDataBackendError) as exc_info:
        await backend.get_all("customer")

    assert exc_info.value.status_code == 503
    assert exc_info.value.message == "database down"


@pytest.mark.asyncio
async def test_transport_failure_has_status_zero():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    backend = _client(httpx.MockTransport(handler))

    with pytest.raises(MasterDataBackendError) as exc_info:
        await backend.get_all("customer")

    assert exc_info.value.status_code == 0


@pytest.mark.asyncio
async def test_options_path():
    seen: list[httpx.Request] = []
    backend = _client(_make_mock_transport([{"company_id": 1}], seen=seen))

    assert await backend.get_options("company") == [{"company_id": 1}]
    assert str(seen[0].url) == f"{BASE_URL}/company/options"
