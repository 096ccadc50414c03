"""Derived view engine — pure filtering, grouping and lookup helpers.

Every function takes a record list and returns new data; inputs are never
mutated. Field paths are dotted (``branches.branch_name``) and fan out over
nested lists, so a path can address values inside array-of-object fields.
Missing fields are simply absent values, never errors.

Inactive filters are represented by ``None`` (a predicate builder given an
empty value returns None), and apply_filters skips them.
"""

from collections.abc import Callable, Hashable, Iterable, Mapping, Sequence
from typing import Any

from mfg_console.domain.entities import MasterRecord

Predicate = Callable[[MasterRecord], bool]
KeyFn = Callable[[MasterRecord], Any]


# ── Field access ────────────────────────────────────────────────────

def get_values(record: Mapping[str, Any], path: str) -> list[Any]:
    """All non-null values at ``path``, flattening lists along the way."""
    current: list[Any] = [record]
    for part in path.split("."):
        found: list[Any] = []
        for value in current:
            if not isinstance(value, Mapping) or part not in value:
                continue
            child = value[part]
            if isinstance(child, list):
                found.extend(child)
            else:
                found.append(child)
        current = found
    return [value for value in current if value is not None]


def first_value(record: Mapping[str, Any], paths: Sequence[str], default: Any = "") -> Any:
    """Value of the first path that yields a non-empty value."""
    for path in paths:
        for value in get_values(record, path):
            if value != "":
                return value
    return default


def _is_empty(value: Any) -> bool:
    return value is None or value == ""


# ── Filtering ───────────────────────────────────────────────────────

def search_predicate(term: str | None, fields: Sequence[str]) -> Predicate | None:
    """Case-insensitive substring match over any of ``fields``."""
    needle = (term or "").strip().lower()
    if not needle:
        return None

    def predicate(record: MasterRecord) -> bool:
        return any(
            needle in str(value).lower()
            for path in fields
            for value in get_values(record, path)
            if not isinstance(value, (Mapping, list))
        )

    return predicate


def equals_predicate(
    path: str,
    value: Any,
    *,
    case_insensitive: bool = False,
    default: Any = None,
) -> Predicate | None:
    """Exact match on any value at ``path``; records without one use ``default``."""
    if _is_empty(value):
        return None

    def normalise(candidate: Any) -> Any:
        if case_insensitive and isinstance(candidate, str):
            return candidate.lower()
        return candidate

    target = normalise(value)

    def predicate(record: MasterRecord) -> bool:
        values = get_values(record, path)
        if not values and default is not None:
            values = [default]
        return any(normalise(v) == target for v in values)

    return predicate


def date_range_predicate(path: str, start: str | None = None, end: str | None = None) -> Predicate | None:
    """Inclusive ISO-date bounds; timestamps are compared at the bound's precision.

    Records without a value at ``path`` are excluded while a bound is active.
    """
    if not start and not end:
        return None

    def within(value: Any) -> bool:
        text = str(value)
        if start and text[: len(start)] < start:
            return False
        if end and text[: len(end)] > end:
            return False
        return True

    def predicate(record: MasterRecord) -> bool:
        return any(within(v) for v in get_values(record, path) if v != "")

    return predicate


def apply_filters(
    records: Iterable[MasterRecord], predicates: Iterable[Predicate | None]
) -> list[MasterRecord]:
    """Records satisfying every active predicate (AND); no predicates → everything."""
    active = [p for p in predicates if p is not None]
    return [r for r in records if all(p(r) for p in active)]


# ── Grouping ────────────────────────────────────────────────────────

def _group_key(record: MasterRecord, key: str | KeyFn, default: Any) -> Any:
    if callable(key):
        value = key(record)
    else:
        values = get_values(record, key)
        value = values[0] if values else None
    if _is_empty(value) or not isinstance(value, Hashable):
        return default
    return value


def group_counts(
    records: Iterable[MasterRecord],
    key: str | KeyFn,
    *,
    buckets: Sequence[str] | None = None,
    total_key: str = "all",
    excluded_from_total: Iterable[str] = (),
    default: Any = "unknown",
) -> dict[str, int]:
    """Count records per group plus a total bucket.

    With ``buckets`` only those groups are reported (each starting at zero);
    without, every observed group is. ``excluded_from_total`` lists groups
    the total deliberately leaves out.
    """
    excluded = set(excluded_from_total)
    counts: dict[str, int] = {total_key: 0}
    for bucket in buckets or ():
        counts[bucket] = 0

    for record in records:
        group = _group_key(record, key, default)
        if buckets is None or group in counts:
            counts[group] = counts.get(group, 0) + 1
        if group not in excluded:
            counts[total_key] += 1
    return counts


def group_records(
    records: Iterable[MasterRecord], key: str | KeyFn, *, default: Any = "unknown"
) -> dict[Any, list[MasterRecord]]:
    """Records grouped by key, in first-seen order."""
    groups: dict[Any, list[MasterRecord]] = {}
    for record in records:
        groups.setdefault(_group_key(record, key, default), []).append(record)
    return groups


def _to_number(value: Any) -> float:
    try:
        return float(value or 0)
    except (TypeError, ValueError):
        return 0.0


def sum_by_group(
    records: Iterable[MasterRecord],
    key: str | KeyFn,
    fields: Sequence[str],
    *,
    default: Any = "unknown",
) -> dict[Any, dict[str, float]]:
    """Per-group sums of numeric (or numeric-string) fields; junk counts as 0."""
    totals: dict[Any, dict[str, float]] = {}
    for group, members in group_records(records, key, default=default).items():
        totals[group] = {
            name: sum(_to_number(member.get(name)) for member in members)
            for name in fields
        }
    return totals


# ── Distinct values ─────────────────────────────────────────────────

def _sort_key(value: Any) -> tuple[int, Any]:
    if isinstance(value, (int, float)):
        return (0, value)
    return (1, str(value))


def distinct_values(records: Iterable[MasterRecord], path: str) -> list[Any]:
    """Sorted unique non-empty values at ``path`` (for filter dropdowns)."""
    seen: set[Any] = set()
    for record in records:
        for value in get_values(record, path):
            if _is_empty(value) or isinstance(value, (Mapping, list)):
                continue
            seen.add(value)
    return sorted(seen, key=_sort_key)


# ── Lookups and joins ───────────────────────────────────────────────

def build_lookup(
    options: Iterable[MasterRecord],
    id_fields: Sequence[str],
    label_fields: Sequence[str],
) -> dict[str, str]:
    """Map stringified ids to display labels (the id itself when no label exists)."""
    lookup: dict[str, str] = {}
    for option in options:
        option_id = first_value(option, id_fields, default=None)
        if _is_empty(option_id):
            continue
        label = first_value(option, label_fields, default=option_id)
        lookup[str(option_id)] = str(label)
    return lookup


def resolve_foreign_display(
    records: Iterable[MasterRecord], lookup: Mapping[str, str], field: str
) -> list[MasterRecord]:
    """Copies of ``records`` with ``field`` replaced by its label, when known."""
    resolved = []
    for record in records:
        copy = dict(record)
        value = record.get(field)
        if not _is_empty(value) and str(value) in lookup:
            copy[field] = lookup[str(value)]
        resolved.append(copy)
    return resolved


def join_field(
    records: Iterable[MasterRecord],
    related: Iterable[MasterRecord],
    *,
    local_key: str,
    related_key: str | Sequence[str],
    value_field: str,
    into: str,
) -> list[MasterRecord]:
    """Enrich copies of ``records`` with ``value_field`` from matching related records.

    The join sees only the ``related`` snapshot it is given, so an enriched
    value is as fresh as that snapshot and no fresher.
    """
    keys = (related_key,) if isinstance(related_key, str) else tuple(related_key)
    index: dict[str, Any] = {}
    for rel in related:
        rel_id = first_value(rel, keys, default=None)
        value = rel.get(value_field)
        if not _is_empty(rel_id) and not _is_empty(value):
            index[str(rel_id)] = value

    joined = []
    for record in records:
        copy = dict(record)
        local = record.get(local_key)
        if not _is_empty(local) and str(local) in index:
            copy[into] = index[str(local)]
        joined.append(copy)
    return joined
