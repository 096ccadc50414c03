"""Locally persisted raw-material and tool inventory."""

import logging

from mfg_console.application.interfaces import KeyValueStore
from mfg_console.application.services.local_record_store import (
    load_record_list,
    write_record_list,
)
from mfg_console.domain.entities import (
    InventoryItem,
    InventoryStatus,
    InventoryType,
    utc_timestamp,
)

logger = logging.getLogger(__name__)

_STORAGE_KEYS: dict[InventoryType, str] = {
    InventoryType.RAW_MATERIAL: "raw_material_inventory",
    InventoryType.TOOL: "tool_inventory",
}


def inventory_type_for_purchase(purchase_type: str) -> InventoryType | None:
    """Map a purchase ledger type to the inventory it feeds, if any."""
    if "RAW MATERIAL" in purchase_type:
        return InventoryType.RAW_MATERIAL
    if "TOOLS" in purchase_type:
        return InventoryType.TOOL
    return None


class InventoryStore:
    """One storage key per inventory type; items are upserted by id."""

    def __init__(self, store: KeyValueStore):
        self._store = store

    def _key(self, inventory_type: InventoryType) -> str:
        return _STORAGE_KEYS[InventoryType(inventory_type)]

    def load(self, inventory_type: InventoryType, include_pending: bool = True) -> list[InventoryItem]:
        records = load_record_list(self._store, self._key(inventory_type))
        items = []
        for record in records:
            try:
                items.append(InventoryItem.from_record(record))
            except ValueError:
                logger.warning("Skipping malformed %s inventory record: %r", inventory_type, record)
        if include_pending:
            return items
        return [item for item in items if item.status == InventoryStatus.COMPLETED]

    def load_pending(self, inventory_type: InventoryType) -> list[InventoryItem]:
        return [
            item for item in self.load(inventory_type)
            if item.status == InventoryStatus.PENDING
        ]

    def get_item(self, item_id: str, inventory_type: InventoryType) -> InventoryItem | None:
        return next((i for i in self.load(inventory_type) if i.id == item_id), None)

    def save_item(self, item: InventoryItem) -> InventoryItem:
        """Insert, or overwrite an existing item with the same id (stamping ``updated_at``)."""
        items = self.load(item.type)
        for index, existing in enumerate(items):
            if existing.id == item.id:
                item.updated_at = utc_timestamp()
                items[index] = item
                break
        else:
            items.append(item)

        write_record_list(self._store, self._key(item.type), [i.to_record() for i in items])
        return item

    def delete_item(self, item_id: str, inventory_type: InventoryType) -> None:
        items = self.load(inventory_type)
        remaining = [i.to_record() for i in items if i.id != item_id]
        write_record_list(self._store, self._key(inventory_type), remaining)

    def low_stock_items(self, inventory_type: InventoryType) -> list[InventoryItem]:
        return [i for i in self.load(inventory_type, include_pending=False) if i.is_low_stock]

    def update_from_purchase(
        self,
        item_name: str,
        purchase_type: str,
        date: str,
        purchase_id: str | None = None,
        quantity: float | None = None,
    ) -> InventoryItem | None:
        """Feed a purchase into inventory.

        A completed item with the same name (case-insensitive) gains the
        purchased quantity; otherwise a pending item is created that still
        needs its details filled in. Purchases of other types are ignored.
        """
        inventory_type = inventory_type_for_purchase(purchase_type)
        if inventory_type is None:
            return None

        added = quantity or 1
        for item in self.load(inventory_type):
            if item.status == InventoryStatus.COMPLETED and item.item.lower() == item_name.lower():
                item.available_stock = (item.available_stock or 0) + added
                item.last_purchase = date
                logger.info("Added %s to stock of %s", added, item.item)
                return self.save_item(item)

        pending = InventoryItem(
            type=inventory_type,
            item=item_name,
            available_stock=added,
            minimum_stock=0,
            last_purchase=date,
            status=InventoryStatus.PENDING,
            purchase_id=purchase_id,
        )
        logger.info("Created pending %s item '%s' from purchase", inventory_type.value, item_name)
        return self.save_item(pending)

    def reduce_stock(self, item_id: str, quantity: float, inventory_type: InventoryType) -> bool:
        """Consume stock. Returns False for unknown items or insufficient stock."""
        item = self.get_item(item_id, inventory_type)
        if item is None:
            logger.error("Inventory item not found: %s", item_id)
            return False
        if item.available_stock < quantity:
            logger.error(
                "Insufficient stock for %s. Available: %s, Requested: %s",
                item.item, item.available_stock, quantity,
            )
            return False

        item.available_stock -= quantity
        self.save_item(item)
        return True
