from .derived_view import (
    Predicate,
    apply_filters,
    build_lookup,
    date_range_predicate,
    distinct_values,
    equals_predicate,
    first_value,
    get_values,
    group_counts,
    group_records,
    join_field,
    resolve_foreign_display,
    search_predicate,
    sum_by_group,
)
from .page_views import (
    CUSTOMER_VIEW,
    INQUIRY_VIEW,
    INVENTORY_VIEW,
    JOB_CARD_VIEW,
    PURCHASE_VIEW,
    QUOTATION_VIEW,
    REJECTION_LOG_VIEW,
    SHIFT_HANDOVER_VIEW,
    DerivedView,
    FieldFilter,
    FilterState,
    StatusTabs,
    ViewDefinition,
    compute_view,
    inventory_records,
    job_card_field,
    job_card_summary,
    low_stock_records,
    normalize_inquiries,
    purchase_type_totals,
    quotation_amount,
    resolve_customer_references,
)

__all__ = [
    "Predicate",
    "apply_filters",
    "build_lookup",
    "date_range_predicate",
    "distinct_values",
    "equals_predicate",
    "first_value",
    "get_values",
    "group_counts",
    "group_records",
    "join_field",
    "resolve_foreign_display",
    "search_predicate",
    "sum_by_group",
    "CUSTOMER_VIEW",
    "INQUIRY_VIEW",
    "INVENTORY_VIEW",
    "JOB_CARD_VIEW",
    "PURCHASE_VIEW",
    "QUOTATION_VIEW",
    "REJECTION_LOG_VIEW",
    "SHIFT_HANDOVER_VIEW",
    "DerivedView",
    "FieldFilter",
    "FilterState",
    "StatusTabs",
    "ViewDefinition",
    "compute_view",
    "inventory_records",
    "job_card_field",
    "job_card_summary",
    "low_stock_records",
    "normalize_inquiries",
    "purchase_type_totals",
    "quotation_amount",
    "resolve_customer_references",
]
