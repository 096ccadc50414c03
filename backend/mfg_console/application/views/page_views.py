"""Page view definitions — the filters, searches and status tabs of each console page.

A ViewDefinition is static configuration; ``compute_view`` combines it with
a FilterState and a record snapshot into a DerivedView. Filter state uses
``None`` for "no constraint", never an ``"all"`` sentinel.
"""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

from mfg_console.application.views.derived_view import (
    Predicate,
    apply_filters,
    build_lookup,
    date_range_predicate,
    distinct_values,
    equals_predicate,
    first_value,
    group_counts,
    join_field,
    resolve_foreign_display,
    search_predicate,
    sum_by_group,
)
from mfg_console.domain.entities import InventoryItem, MasterRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FieldFilter:
    """A categorical filter bound to one (possibly nested) field path."""

    name: str
    path: str
    case_insensitive: bool = False
    default: str | None = None


@dataclass(frozen=True)
class StatusTabs:
    """Tabbed status counts; the total bucket may leave some statuses out."""

    field: str = "status"
    buckets: tuple[str, ...] | None = None
    total_key: str = "all"
    excluded_from_total: frozenset[str] = frozenset()
    default: str = "unknown"


@dataclass
class FilterState:
    """What the user has selected on a page."""

    search: str | None = None
    status: str | None = None
    filters: dict[str, Any] = field(default_factory=dict)
    start_date: str | None = None
    end_date: str | None = None

    @property
    def active_filter_count(self) -> int:
        """Number of dropdown/date constraints in effect (search and tab excluded)."""
        selected = [v for v in self.filters.values() if v not in (None, "")]
        return len(selected) + bool(self.start_date) + bool(self.end_date)


@dataclass
class DerivedView:
    records: list[MasterRecord]
    status_counts: dict[str, int]
    filter_options: dict[str, list[Any]]
    active_filter_count: int
    total: int


@dataclass(frozen=True)
class ViewDefinition:
    name: str
    search_fields: tuple[str, ...]
    filters: tuple[FieldFilter, ...] = ()
    status_tabs: StatusTabs | None = None
    date_field: str | None = None

    def filter_named(self, name: str) -> FieldFilter:
        for candidate in self.filters:
            if candidate.name == name:
                return candidate
        raise ValueError(f"Unknown filter '{name}' for {self.name} view")

    def status_predicate(self, status: str | None) -> Predicate | None:
        """Predicate for the selected status tab (the total tab honours its exclusions)."""
        tabs = self.status_tabs
        if tabs is None or not status:
            return None
        if status == tabs.total_key:
            if not tabs.excluded_from_total:
                return None
            excluded = tabs.excluded_from_total

            def not_excluded(record: MasterRecord) -> bool:
                return first_value(record, (tabs.field,), tabs.default) not in excluded

            return not_excluded
        return equals_predicate(tabs.field, status, default=tabs.default)

    def predicates(self, state: FilterState) -> list[Predicate | None]:
        predicates = [
            search_predicate(state.search, self.search_fields),
            self.status_predicate(state.status),
        ]
        for name, value in state.filters.items():
            field_filter = self.filter_named(name)
            predicates.append(
                equals_predicate(
                    field_filter.path,
                    value,
                    case_insensitive=field_filter.case_insensitive,
                    default=field_filter.default,
                )
            )
        if self.date_field:
            predicates.append(
                date_range_predicate(self.date_field, state.start_date, state.end_date)
            )
        return predicates

    def status_counts(self, records: Sequence[MasterRecord]) -> dict[str, int]:
        tabs = self.status_tabs
        if tabs is None:
            return {}
        return group_counts(
            records,
            tabs.field,
            buckets=tabs.buckets,
            total_key=tabs.total_key,
            excluded_from_total=tabs.excluded_from_total,
            default=tabs.default,
        )

    def filter_options(self, records: Sequence[MasterRecord]) -> dict[str, list[Any]]:
        return {f.name: distinct_values(records, f.path) for f in self.filters}


def compute_view(
    definition: ViewDefinition,
    records: Iterable[MasterRecord],
    state: FilterState | None = None,
) -> DerivedView:
    """Filter a snapshot and derive its tab counts and dropdown options.

    Counts and options are taken over the whole snapshot, so they do not
    shrink as filters are applied.
    """
    state = state or FilterState()
    source = list(records)
    filtered = apply_filters(source, definition.predicates(state))
    logger.debug("%s view: %d of %d records", definition.name, len(filtered), len(source))
    return DerivedView(
        records=filtered,
        status_counts=definition.status_counts(source),
        filter_options=definition.filter_options(source),
        active_filter_count=state.active_filter_count,
        total=len(source),
    )


# ── Definitions ─────────────────────────────────────────────────────

CUSTOMER_VIEW = ViewDefinition(
    name="customer",
    search_fields=("customer_name", "company_name", "email", "phone", "industry"),
    filters=(
        FieldFilter("customer_type", "customer_type"),
        FieldFilter("industry", "industry"),
        FieldFilter("territory", "territory"),
        FieldFilter("market_segment", "market_segment"),
        FieldFilter("company", "company_name"),
        FieldFilter("branch_name", "branches.branch_name"),
        FieldFilter("contact_first_name", "contacts.first_name"),
    ),
    status_tabs=StatusTabs(buckets=("Active", "Inactive"), default="Active"),
)

INQUIRY_STATUSES = ("new", "accepted", "in-progress", "rejected", "quoted", "completed", "pending")

INQUIRY_VIEW = ViewDefinition(
    name="inquiry",
    search_fields=("companyName", "contactPerson", "inquiryNumber", "email", "source"),
    filters=(
        FieldFilter("status", "status"),
        FieldFilter("source", "source"),
        FieldFilter("priority", "priority"),
        FieldFilter("company", "companyName"),
        FieldFilter("product", "products.itemName"),
        FieldFilter("contact_person", "contactPerson"),
        FieldFilter("email", "email"),
    ),
    # pending inquiries follow a separate approval workflow
    status_tabs=StatusTabs(
        buckets=INQUIRY_STATUSES,
        total_key="all-statuses",
        excluded_from_total=frozenset({"rejected", "pending"}),
        default="new",
    ),
)

QUOTATION_VIEW = ViewDefinition(
    name="quotation",
    search_fields=("companyName", "contactPerson", "quotationNumber"),
    filters=(
        FieldFilter("status", "status"),
        FieldFilter("company", "companyName"),
        FieldFilter("contact_person", "contactPerson"),
        FieldFilter("product", "items.partName"),
    ),
)

PURCHASE_VIEW = ViewDefinition(
    name="purchase",
    search_fields=(
        "itemName", "purchaseType", "reasonForPurchase", "clientName", "billingAddress", "date",
    ),
    filters=(FieldFilter("purchase_type", "purchaseType"),),
)

INVENTORY_VIEW = ViewDefinition(
    name="inventory",
    search_fields=("item", "materialGrade", "size", "unit"),
    filters=(FieldFilter("material_grade", "materialGrade"),),
)

JOB_CARD_VIEW = ViewDefinition(
    name="job_card",
    search_fields=(
        "jobNumber", "sale.clientName", "customerName", "sale.itemName", "partName", "workCenter",
    ),
    filters=(
        FieldFilter("status", "status"),
        FieldFilter("work_center", "workCenter"),
    ),
)

SHIFT_HANDOVER_VIEW = ViewDefinition(
    name="shift_handover",
    search_fields=(
        "reportNumber", "items.machineName", "items.operatorName", "items.runningItemDescription",
    ),
    filters=(
        FieldFilter("shift", "productionShift"),
        FieldFilter("machine", "items.machineName", case_insensitive=True),
        FieldFilter("operator", "items.operatorName", case_insensitive=True),
    ),
    date_field="date",
)

REJECTION_LOG_VIEW = ViewDefinition(
    name="rejection_log",
    search_fields=(
        "logbookNumber",
        "items.machineName",
        "items.machineType",
        "items.productDescription",
        "items.productionOrderNo",
    ),
    filters=(
        FieldFilter("machine_type", "items.machineType", case_insensitive=True),
        FieldFilter("machine_name", "items.machineName", case_insensitive=True),
        FieldFilter("rejection_type", "items.rejectionType", case_insensitive=True),
    ),
    date_field="date",
)


# ── Page extras ─────────────────────────────────────────────────────

def resolve_customer_references(
    customers: Iterable[MasterRecord],
    companies: Iterable[MasterRecord],
    customer_types: Iterable[MasterRecord],
) -> list[MasterRecord]:
    """Replace company / customer-type ids on customers with their names."""
    company_lookup = build_lookup(companies, ("company_id", "id"), ("company_name", "name"))
    type_lookup = build_lookup(
        customer_types, ("customer_type_id", "id"), ("name", "customer_type")
    )
    resolved = resolve_foreign_display(customers, company_lookup, "company_name")
    return resolve_foreign_display(resolved, type_lookup, "customer_type")


def normalize_inquiries(records: Iterable[MasterRecord], now: str | None = None) -> list[MasterRecord]:
    """Fill display defaults on inquiries.

    Missing numbers become ``#<position>``, status defaults to ``new`` and
    priority to ``low``; ``followUps`` becomes a count.
    """
    normalized = []
    for index, record in enumerate(records):
        follow_ups = record.get("followUps")
        count = len(follow_ups) if isinstance(follow_ups, list) else 0
        normalized.append({
            **record,
            "inquiryNumber": record.get("inquiryNumber") or f"#{index + 1}",
            "createdAt": record.get("createdAt") or record.get("created_at") or now,
            "status": record.get("status") or "new",
            "priority": record.get("priority") or "low",
            "followUps": count or record.get("followUpsCount") or 0,
            "inquiry_id": record.get("inquiry_id") or record.get("id") or f"inquiry_{index}",
        })
    return normalized


def _number(value: Any) -> float:
    try:
        return float(value or 0)
    except (TypeError, ValueError):
        return 0.0


def quotation_amount(quotation: MasterRecord) -> float:
    """``totalAmount`` when numeric, otherwise Σ quantity × price over the items."""
    total = quotation.get("totalAmount")
    if isinstance(total, (int, float)) and not isinstance(total, bool):
        return float(total)
    items = quotation.get("items")
    if not isinstance(items, list):
        return 0.0
    return sum(
        _number(item.get("quantity")) * _number(item.get("price"))
        for item in items
        if isinstance(item, dict)
    )


DEFAULT_PURCHASE_TYPE = "OTHER PURCHASE A/C"

_PURCHASE_TOTAL_FIELDS = {
    "amount": "amount",
    "sgstAmount": "sgst",
    "cgstAmount": "cgst",
    "igstAmount": "igst",
    "total": "total",
}


def purchase_type_totals(purchases: Iterable[MasterRecord]) -> dict[str, dict[str, float]]:
    """Amount, tax and total sums per purchase type."""
    sums = sum_by_group(
        purchases, "purchaseType", tuple(_PURCHASE_TOTAL_FIELDS), default=DEFAULT_PURCHASE_TYPE
    )
    return {
        purchase_type: {_PURCHASE_TOTAL_FIELDS[name]: value for name, value in fields.items()}
        for purchase_type, fields in sums.items()
    }


def low_stock_records(items: Iterable[InventoryItem]) -> list[MasterRecord]:
    return [item.to_record() for item in items if item.is_low_stock]


def inventory_records(
    items: Iterable[InventoryItem], purchases: Iterable[MasterRecord] = ()
) -> list[MasterRecord]:
    """Inventory as records, each carrying the ``clientName`` of its purchase."""
    return join_field(
        [item.to_record() for item in items],
        purchases,
        local_key="purchaseId",
        related_key=("id", "purchase_id"),
        value_field="clientName",
        into="clientName",
    )


_JOB_CARD_FALLBACKS: dict[str, tuple[str, ...]] = {
    "clientName": ("sale.clientName", "customerName"),
    "itemName": ("sale.itemName", "partName"),
    "quantity": ("sale.quantity", "quantity"),
    "deliveryDate": ("sale.deliveryDate", "deliveryDate"),
}


def job_card_field(job_card: MasterRecord, name: str, default: Any = "") -> Any:
    """Read a job-card field from the nested ``sale`` block, falling back to flat keys."""
    paths = _JOB_CARD_FALLBACKS.get(name, (name,))
    return first_value(job_card, paths, default)


def job_card_summary(job_card: MasterRecord) -> MasterRecord:
    """Flat row for the job card list."""
    return {
        "id": job_card.get("id"),
        "jobNumber": job_card.get("jobNumber", ""),
        "status": job_card.get("status") or "Planned",
        "workCenter": job_card.get("workCenter", ""),
        **{name: job_card_field(job_card, name) for name in _JOB_CARD_FALLBACKS},
    }
