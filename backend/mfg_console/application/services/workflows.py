"""Multi-step console actions that span the masters layer and local stores."""

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

from mfg_console.application.schemas import JobCardCreate, PurchaseCreate
from mfg_console.application.services.inventory_store import InventoryStore
from mfg_console.application.services.local_record_store import JobCardStore
from mfg_console.application.services.master_data_service import MasterDataService
from mfg_console.domain.entities import (
    InventoryItem,
    MasterRecord,
    record_id,
    utc_timestamp,
)

logger = logging.getLogger(__name__)

QUOTATION_IN_PRODUCTION = "In Production"


async def change_status(
    masters: MasterDataService,
    collection: str,
    record: MasterRecord,
    value: Any,
    field: str = "status",
) -> MasterRecord:
    """Set one field of ``record`` and store it with a whole-record update."""
    identifier = record_id(collection, record)
    if identifier is None:
        raise ValueError(f"{collection} record has no id")
    return await masters.update(collection, identifier, {**record, field: value})


async def mark_quotation_in_production(
    masters: MasterDataService, quotation_id: str | None
) -> MasterRecord | None:
    """Flag the quotation a job card was raised from. No-op without an id."""
    if not quotation_id:
        return None
    quotation = await masters.get("quotation", quotation_id)
    updated = await masters.update(
        "quotation",
        quotation_id,
        {**quotation, "status": QUOTATION_IN_PRODUCTION, "updatedAt": utc_timestamp()},
    )
    logger.info("Quotation %s marked %s", quotation_id, QUOTATION_IN_PRODUCTION)
    return updated


async def save_job_card(
    masters: MasterDataService,
    job_cards: JobCardStore,
    data: JobCardCreate | Mapping[str, Any],
    job_card_id: str | None = None,
) -> MasterRecord:
    """Create (or, given ``job_card_id``, update) a job card.

    A job card raised from a quotation moves that quotation into production.
    """
    if not isinstance(data, BaseModel):
        data = JobCardCreate.model_validate(dict(data))

    if job_card_id is None:
        saved = job_cards.save(data)
    else:
        job_cards.update(job_card_id, data)
        saved = job_cards.get(job_card_id) or {}

    await mark_quotation_in_production(masters, data.quotation_id)
    return saved


async def record_purchase(
    masters: MasterDataService,
    inventory: InventoryStore,
    data: PurchaseCreate | Mapping[str, Any],
) -> tuple[MasterRecord, InventoryItem | None]:
    """Create a purchase entry and feed raw-material / tool purchases into inventory.

    Returns the created record and the inventory item it touched, if any.
    """
    purchase = data if isinstance(data, PurchaseCreate) else PurchaseCreate.model_validate(dict(data))
    payload = purchase.model_dump(mode="json", by_alias=True, exclude_none=True)
    payload["total"] = purchase.total
    payload["createdAt"] = utc_timestamp()

    created = await masters.create("purchase", payload)

    item = inventory.update_from_purchase(
        purchase.item_name,
        purchase.purchase_type,
        purchase.date,
        purchase_id=record_id("purchase", created),
        quantity=purchase.quantity,
    )
    return created, item
