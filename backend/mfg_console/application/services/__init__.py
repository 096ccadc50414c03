from .invalidation_bus import CacheInvalidated, InvalidationBus
from .master_data_service import MasterDataCache, MasterDataService, as_record_list
from .local_record_store import (
    JobCardStore,
    LocalRecordStore,
    RejectionLogbookStore,
    ShiftHandoverStore,
    load_record_list,
    read_record_list,
    write_record_list,
)
from .inventory_store import InventoryStore, inventory_type_for_purchase
from .workflows import (
    change_status,
    mark_quotation_in_production,
    record_purchase,
    save_job_card,
)

__all__ = [
    "CacheInvalidated",
    "InvalidationBus",
    "MasterDataCache",
    "MasterDataService",
    "as_record_list",
    "JobCardStore",
    "LocalRecordStore",
    "RejectionLogbookStore",
    "ShiftHandoverStore",
    "load_record_list",
    "read_record_list",
    "write_record_list",
    "InventoryStore",
    "inventory_type_for_purchase",
    "change_status",
    "mark_quotation_in_production",
    "record_purchase",
    "save_job_card",
]
