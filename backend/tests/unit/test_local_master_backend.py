"""Unit tests for the key-value backed master-data backend."""

import json
import re

import pytest

from mfg_console.domain.exceptions import EntityNotFoundError
from mfg_console.infrastructure.storage.key_value_store import (
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
)
from mfg_console.infrastructure.storage.local_master_backend import LocalMasterDataBackend


@pytest.fixture
def store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore({
        "master_data_quotation": json.dumps([
            {"quotation_id": "q1", "quotationNumber": "Q-1", "status": "Draft"},
            {"id": 2, "quotationNumber": "Q-2", "status": "Sent"},
        ])
    })


@pytest.fixture
def backend(store) -> LocalMasterDataBackend:
    return LocalMasterDataBackend(store)


@pytest.mark.asyncio
async def test_get_all_reads_collection_key(backend):
    records = await backend.get_all("quotation")
    assert [r["quotationNumber"] for r in records] == ["Q-1", "Q-2"]


@pytest.mark.asyncio
async def test_get_all_unknown_collection_is_empty(backend):
    assert await backend.get_all("customer") == []


@pytest.mark.asyncio
async def test_get_by_id_matches_any_id_field(backend):
    assert (await backend.get_by_id("quotation", "q1"))["quotationNumber"] == "Q-1"
    assert (await backend.get_by_id("quotation", "2"))["quotationNumber"] == "Q-2"


@pytest.mark.asyncio
async def test_create_assigns_collection_id(backend, store):
    created = await backend.create("customer", {"customer_name": "Ravi"})

    assert re.fullmatch(r"customer_\d+_[0-9a-z]{9}", created["customer_id"])
    assert json.loads(store.get("master_data_customer")) == [created]


@pytest.mark.asyncio
async def test_create_keeps_existing_id(backend):
    created = await backend.create("customer", {"id": "c-7", "customer_name": "Ravi"})
    assert "customer_id" not in created


@pytest.mark.asyncio
async def test_update_replaces_record_but_keeps_ids(backend):
    updated = await backend.update("quotation", "q1", {"quotationNumber": "Q-1", "status": "Approved"})

    assert updated == {"quotationNumber": "Q-1", "status": "Approved", "quotation_id": "q1"}
    records = await backend.get_all("quotation")
    assert records[0] == updated
    assert len(records) == 2


@pytest.mark.asyncio
async def test_update_unknown_id_raises(backend, store):
    before = store.get("master_data_quotation")

    with pytest.raises(EntityNotFoundError):
        await backend.update("quotation", "999", {"status": "Sent"})

    assert store.get("master_data_quotation") == before


@pytest.mark.asyncio
async def test_delete(backend):
    await backend.delete("quotation", "2")
    assert [r["quotationNumber"] for r in await backend.get_all("quotation")] == ["Q-1"]

    with pytest.raises(EntityNotFoundError):
        await backend.delete("quotation", "2")


@pytest.mark.asyncio
async def test_options_read_relation_collection(backend, store):
    store.set("master_data_company", json.dumps([{"company_id": 1, "company_name": "Acme"}]))
    assert await backend.get_options("company") == [{"company_id": 1, "company_name": "Acme"}]


@pytest.mark.asyncio
async def test_corrupt_collection_reads_as_empty(store):
    store.set("master_data_quotation", "[{broken")
    assert await LocalMasterDataBackend(store).get_all("quotation") == []


@pytest.mark.asyncio
async def test_undecodable_collection_file_reads_as_empty(tmp_path):
    (tmp_path / "master_data_quotation.json").write_bytes(b"\xff")
    backend = LocalMasterDataBackend(JsonFileKeyValueStore(tmp_path))

    assert await backend.get_all("quotation") == []
