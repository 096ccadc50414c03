from .master_record import (
    MasterRecord,
    generate_record_id,
    id_fields,
    matches_id,
    record_id,
    utc_timestamp,
)
from .cache_entry import CacheEntry, CacheStatus
from .inventory_item import InventoryItem, InventoryStatus, InventoryType

__all__ = [
    "MasterRecord",
    "generate_record_id",
    "id_fields",
    "matches_id",
    "record_id",
    "utc_timestamp",
    "CacheEntry",
    "CacheStatus",
    "InventoryItem",
    "InventoryStatus",
    "InventoryType",
]
