"""Unit tests for the derived view engine."""

import pytest

from mfg_console.application.views import (
    apply_filters,
    build_lookup,
    date_range_predicate,
    distinct_values,
    equals_predicate,
    get_values,
    group_counts,
    group_records,
    join_field,
    resolve_foreign_display,
    search_predicate,
    sum_by_group,
)

CUSTOMERS = [
    {
        "id": 1,
        "customer_name": "Ravi Patel",
        "company_name": "Acme Forgings",
        "status": "Active",
        "branches": [{"branch_name": "Pune"}, {"branch_name": "Nashik"}],
    },
    {
        "id": 2,
        "customer_name": "Meera Shah",
        "company_name": "Delta Castings",
        "status": "Inactive",
        "branches": [],
    },
]


# ── Field access ──


def test_get_values_fans_out_over_lists():
    assert get_values(CUSTOMERS[0], "branches.branch_name") == ["Pune", "Nashik"]


def test_get_values_tolerates_missing_fields():
    assert get_values({"name": "x"}, "branches.branch_name") == []
    assert get_values({"branches": None}, "branches.branch_name") == []
    assert get_values({"branches": "Pune"}, "branches.branch_name") == []


# ── Filtering ──


def test_search_is_case_insensitive_substring():
    predicate = search_predicate("acme", ("customer_name", "company_name"))
    assert [r["id"] for r in apply_filters(CUSTOMERS, [predicate])] == [1]


def test_search_matches_nested_values():
    predicate = search_predicate("NASHIK", ("branches.branch_name",))
    assert [r["id"] for r in apply_filters(CUSTOMERS, [predicate])] == [1]


def test_empty_filters_are_inactive():
    assert search_predicate("", ("customer_name",)) is None
    assert search_predicate("   ", ("customer_name",)) is None
    assert equals_predicate("status", None) is None
    assert equals_predicate("status", "") is None
    assert date_range_predicate("date") is None


def test_no_active_filters_is_identity():
    assert apply_filters(CUSTOMERS, []) == CUSTOMERS
    assert apply_filters(CUSTOMERS, [None, None]) == CUSTOMERS


def test_filters_combine_with_and():
    predicates = [
        search_predicate("a", ("customer_name",)),
        equals_predicate("status", "Inactive"),
    ]
    assert [r["id"] for r in apply_filters(CUSTOMERS, predicates)] == [2]


def test_equals_uses_default_for_missing_field():
    records = [{"id": 1}, {"id": 2, "status": "Inactive"}]
    predicate = equals_predicate("status", "Active", default="Active")
    assert [r["id"] for r in apply_filters(records, [predicate])] == [1]


def test_equals_case_insensitive_on_nested_field():
    records = [{"items": [{"machineName": "VMC-01"}]}, {"items": [{"machineName": "Lathe"}]}]
    predicate = equals_predicate("items.machineName", "vmc-01", case_insensitive=True)
    assert apply_filters(records, [predicate]) == [records[0]]


def test_filtering_does_not_mutate_input():
    snapshot = [dict(r) for r in CUSTOMERS]
    apply_filters(CUSTOMERS, [equals_predicate("status", "Active")])
    assert CUSTOMERS == snapshot


def test_date_range_is_inclusive():
    records = [{"date": "2024-03-01"}, {"date": "2024-03-15"}, {"date": "2024-04-01"}, {}]
    predicate = date_range_predicate("date", "2024-03-01", "2024-03-15")
    assert apply_filters(records, [predicate]) == records[:2]


def test_date_range_compares_timestamps_at_day_precision():
    records = [{"createdAt": "2024-03-15T18:30:00.000Z"}]
    assert apply_filters(records, [date_range_predicate("createdAt", end="2024-03-15")]) == records


# ── Grouping ──


def test_group_counts_customer_scenario():
    counts = group_counts(CUSTOMERS, "status", default="Active")
    assert counts == {"all": 2, "Active": 1, "Inactive": 1}


def test_group_counts_total_equals_sum_without_exclusions():
    records = [{"s": "a"}, {"s": "b"}, {"s": "a"}, {}]
    counts = group_counts(records, "s")
    assert counts["all"] == sum(v for k, v in counts.items() if k != "all")
    assert counts["unknown"] == 1


def test_group_counts_exclusion_policy():
    records = [{"status": s} for s in ("new", "new", "rejected", "pending", "quoted")]
    counts = group_counts(
        records,
        "status",
        buckets=("new", "rejected", "pending", "quoted", "completed"),
        total_key="all-statuses",
        excluded_from_total=("rejected", "pending"),
    )
    assert counts == {
        "all-statuses": 3,
        "new": 2,
        "rejected": 1,
        "pending": 1,
        "quoted": 1,
        "completed": 0,
    }


def test_group_counts_empty_input_has_total_bucket():
    assert group_counts([], "status") == {"all": 0}


def test_group_counts_with_key_function():
    counts = group_counts(CUSTOMERS, lambda r: len(r["branches"]) > 0)
    assert counts == {"all": 2, True: 1, False: 1}


def test_object_valued_group_keys_fall_back_to_default():
    records = [
        {"id": 1, "status": {"label": "Active"}},
        {"id": 2, "status": "Inactive"},
        {"id": 3, "status": [{"label": "Active"}]},
    ]

    assert group_counts(records, "status") == {"all": 3, "unknown": 2, "Inactive": 1}
    assert group_counts(records, lambda r: r["status"], default="other") == {
        "all": 3,
        "other": 2,
        "Inactive": 1,
    }
    groups = group_records(records, "status")
    assert [r["id"] for r in groups["unknown"]] == [1, 3]


def test_group_records_and_sums():
    purchases = [
        {"purchaseType": "RAW MATERIAL PURCHASE A/C", "amount": "100", "total": "118"},
        {"purchaseType": "RAW MATERIAL PURCHASE A/C", "amount": "50.5", "total": "junk"},
        {"amount": "10"},
    ]
    groups = group_records(purchases, "purchaseType", default="OTHER")
    assert list(groups) == ["RAW MATERIAL PURCHASE A/C", "OTHER"]

    sums = sum_by_group(purchases, "purchaseType", ("amount", "total"), default="OTHER")
    assert sums["RAW MATERIAL PURCHASE A/C"] == {"amount": 150.5, "total": 118.0}
    assert sums["OTHER"] == {"amount": 10.0, "total": 0.0}


# ── Distinct values ──


def test_distinct_values_sorted_unique_non_empty():
    records = [{"industry": "Steel"}, {"industry": "Auto"}, {"industry": ""}, {"industry": "Steel"}, {}]
    assert distinct_values(records, "industry") == ["Auto", "Steel"]


def test_distinct_values_of_nested_path():
    assert distinct_values(CUSTOMERS, "branches.branch_name") == ["Nashik", "Pune"]


@pytest.mark.parametrize("records", [[], [{}], [{"industry": None}]])
def test_distinct_values_empty(records):
    assert distinct_values(records, "industry") == []


# ── Lookups and joins ──


def test_resolve_foreign_display_replaces_known_ids():
    companies = [{"company_id": 7, "company_name": "Acme"}, {"id": "9", "name": "Delta"}, {"name": "no id"}]
    lookup = build_lookup(companies, ("company_id", "id"), ("company_name", "name"))
    assert lookup == {"7": "Acme", "9": "Delta"}

    records = [{"company_name": 7}, {"company_name": "9"}, {"company_name": "Walk-in"}, {}]
    resolved = resolve_foreign_display(records, lookup, "company_name")

    assert [r.get("company_name") for r in resolved] == ["Acme", "Delta", "Walk-in", None]
    assert records[0]["company_name"] == 7


def test_build_lookup_falls_back_to_id_as_label():
    assert build_lookup([{"id": 3}], ("id",), ("name",)) == {"3": "3"}


def test_join_field_enriches_copies():
    inventory = [{"item": "EN8", "purchaseId": "p1"}, {"item": "EN19"}, {"item": "D2", "purchaseId": "p9"}]
    purchases = [{"id": "p1", "clientName": "Acme"}, {"purchase_id": "p9"}]

    joined = join_field(
        inventory,
        purchases,
        local_key="purchaseId",
        related_key=("id", "purchase_id"),
        value_field="clientName",
        into="clientName",
    )

    assert [r.get("clientName") for r in joined] == ["Acme", None, None]
    assert "clientName" not in inventory[0]
