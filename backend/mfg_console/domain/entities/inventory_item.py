"""Domain entity for locally-persisted inventory items (raw material and tools)."""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

from .master_record import MasterRecord, generate_record_id, utc_timestamp


class InventoryType(str, Enum):
    RAW_MATERIAL = "raw_material"
    TOOL = "tool"


class InventoryStatus(str, Enum):
    """Pending items were created from a purchase and still need details."""

    PENDING = "pending"
    COMPLETED = "completed"


def _number(value: Any) -> float:
    try:
        return float(value or 0)
    except (TypeError, ValueError):
        return 0.0


@dataclass
class InventoryItem:
    """A stocked item. Stored with camelCase keys alongside the other local records."""

    type: InventoryType
    item: str
    material_grade: str = ""
    size: str = ""
    unit: str = ""
    available_stock: float = 0
    minimum_stock: float = 0
    last_purchase: str | None = None
    status: InventoryStatus = InventoryStatus.COMPLETED
    purchase_id: str | None = None
    id: str = field(default_factory=lambda: generate_record_id("inv"))
    created_at: str = field(default_factory=utc_timestamp)
    updated_at: str | None = None

    @property
    def is_low_stock(self) -> bool:
        """At or below the minimum level; items without a minimum never alert."""
        return self.minimum_stock > 0 and self.available_stock <= self.minimum_stock

    @property
    def is_complete(self) -> bool:
        return bool(self.item and self.material_grade and self.status == InventoryStatus.COMPLETED)

    def mark_completed(self) -> "InventoryItem":
        """Return a completed copy stamped with a new ``updated_at``."""
        return replace(self, status=InventoryStatus.COMPLETED, updated_at=utc_timestamp())

    def to_record(self) -> MasterRecord:
        record: MasterRecord = {
            "id": self.id,
            "type": self.type.value,
            "item": self.item,
            "materialGrade": self.material_grade,
            "size": self.size,
            "unit": self.unit,
            "availableStock": self.available_stock,
            "minimumStock": self.minimum_stock,
            "status": self.status.value,
            "createdAt": self.created_at,
        }
        if self.last_purchase is not None:
            record["lastPurchase"] = self.last_purchase
        if self.purchase_id is not None:
            record["purchaseId"] = self.purchase_id
        if self.updated_at is not None:
            record["updatedAt"] = self.updated_at
        return record

    @classmethod
    def from_record(cls, record: MasterRecord) -> "InventoryItem":
        return cls(
            id=str(record.get("id") or generate_record_id("inv")),
            type=InventoryType(record.get("type", InventoryType.RAW_MATERIAL.value)),
            item=record.get("item") or "",
            material_grade=record.get("materialGrade") or "",
            size=record.get("size") or "",
            unit=record.get("unit") or "",
            available_stock=_number(record.get("availableStock")),
            minimum_stock=_number(record.get("minimumStock")),
            last_purchase=record.get("lastPurchase"),
            status=InventoryStatus(record.get("status", InventoryStatus.COMPLETED.value)),
            purchase_id=record.get("purchaseId"),
            created_at=record.get("createdAt") or utc_timestamp(),
            updated_at=record.get("updatedAt"),
        )
