"""Unit tests for console workflows spanning masters and local stores."""

import json

import pytest
from pydantic import ValidationError

from mfg_console.application.services import (
    InventoryStore,
    JobCardStore,
    MasterDataService,
    change_status,
    mark_quotation_in_production,
    record_purchase,
    save_job_card,
)
from mfg_console.domain.entities import InventoryStatus, InventoryType
from mfg_console.domain.exceptions import EntityNotFoundError
from mfg_console.infrastructure.storage.key_value_store import InMemoryKeyValueStore
from mfg_console.infrastructure.storage.local_master_backend import LocalMasterDataBackend

PURCHASE = {
    "date": "2024-05-01",
    "purchaseType": "RAW MATERIAL PURCHASE A/C",
    "itemName": "EN8 Round Bar",
    "clientName": "Steel Traders",
    "billingAddress": "Pune",
    "amount": "1000",
    "sgstAmount": "90",
    "cgstAmount": "90",
    "reasonForPurchase": "Job JC-1",
}

JOB_CARD = {
    "jobNumber": "JC-100001",
    "srNumber": "1",
    "jobDate": "2024-05-01",
    "jobOrderNumber": "JO-7",
    "quotationId": "q1",
    "sale": {"clientName": "Acme"},
}


@pytest.fixture
def store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore({
        "master_data_quotation": json.dumps([
            {"quotation_id": "q1", "quotationNumber": "Q-1", "status": "Approved"},
        ]),
        "master_data_inquiry": json.dumps([
            {"inquiry_id": "i1", "status": "new", "priority": "low"},
        ]),
    })


@pytest.fixture
def masters(store) -> MasterDataService:
    return MasterDataService(LocalMasterDataBackend(store), retry_delay=0)


@pytest.mark.asyncio
async def test_record_purchase_feeds_inventory(masters, store):
    inventory = InventoryStore(store)

    created, item = await record_purchase(masters, inventory, PURCHASE)

    assert created["total"] == 1180.0
    assert created["purchase_id"].startswith("purchase_")
    assert item.status == InventoryStatus.PENDING
    assert item.purchase_id == created["purchase_id"]
    assert [r["itemName"] for r in await masters.list_records("purchase")] == ["EN8 Round Bar"]
    assert len(inventory.load_pending(InventoryType.RAW_MATERIAL)) == 1


@pytest.mark.asyncio
async def test_record_purchase_of_other_type_skips_inventory(masters, store):
    created, item = await record_purchase(
        masters, InventoryStore(store), {**PURCHASE, "purchaseType": "OTHER PURCHASE A/C"}
    )
    assert item is None
    assert created["purchaseType"] == "OTHER PURCHASE A/C"


@pytest.mark.asyncio
async def test_record_purchase_rejects_negative_amount(masters, store):
    with pytest.raises(ValidationError):
        await record_purchase(masters, InventoryStore(store), {**PURCHASE, "amount": "-5"})
    assert await masters.list_records("purchase") == []


@pytest.mark.asyncio
async def test_change_status_updates_one_field(masters):
    [inquiry] = await masters.list_records("inquiry")

    await change_status(masters, "inquiry", inquiry, "high", field="priority")

    [updated] = await masters.list_records("inquiry")
    assert updated == {"inquiry_id": "i1", "status": "new", "priority": "high"}


@pytest.mark.asyncio
async def test_change_status_requires_an_id(masters):
    with pytest.raises(ValueError):
        await change_status(masters, "inquiry", {"status": "new"}, "accepted")


@pytest.mark.asyncio
async def test_mark_quotation_in_production(masters):
    updated = await mark_quotation_in_production(masters, "q1")

    assert updated["status"] == "In Production"
    [quotation] = await masters.list_records("quotation")
    assert quotation["status"] == "In Production"
    assert "updatedAt" in quotation


@pytest.mark.asyncio
async def test_mark_quotation_without_id_is_a_no_op(masters):
    assert await mark_quotation_in_production(masters, None) is None


@pytest.mark.asyncio
async def test_mark_unknown_quotation_raises(masters):
    with pytest.raises(EntityNotFoundError):
        await mark_quotation_in_production(masters, "999")


@pytest.mark.asyncio
async def test_save_job_card_moves_quotation_into_production(masters, store):
    job_cards = JobCardStore(store)

    saved = await save_job_card(masters, job_cards, JOB_CARD)

    assert job_cards.get(saved["id"])["quotationId"] == "q1"
    [quotation] = await masters.list_records("quotation")
    assert quotation["status"] == "In Production"


@pytest.mark.asyncio
async def test_save_job_card_update_path(masters, store):
    job_cards = JobCardStore(store)
    saved = await save_job_card(masters, job_cards, {**JOB_CARD, "quotationId": None})

    updated = await save_job_card(
        masters, job_cards, {**JOB_CARD, "status": "In Progress"}, job_card_id=saved["id"]
    )

    assert updated["status"] == "In Progress"
    assert updated["createdAt"] == saved["createdAt"]
