"""Master records — structurally-typed bags of fields scoped to a collection."""

import random
import string
import time
from datetime import datetime, timezone
from typing import Any

MasterRecord = dict[str, Any]

_ID_ALPHABET = string.digits + string.ascii_lowercase


def id_fields(collection: str) -> tuple[str, str, str]:
    """Field names that may carry a record's identity, in lookup order."""
    return ("id", f"{collection}_id", f"{collection}Id")


def record_id(collection: str, record: MasterRecord) -> str | None:
    """Return the record's id as a string, or None if it has none."""
    for name in id_fields(collection):
        value = record.get(name)
        if value not in (None, ""):
            return str(value)
    return None


def matches_id(collection: str, record: MasterRecord, target_id: str) -> bool:
    """True when any of the record's id fields equals ``target_id``."""
    target = str(target_id)
    return any(
        record.get(name) not in (None, "") and str(record.get(name)) == target
        for name in id_fields(collection)
    )


def generate_record_id(prefix: str, suffix_length: int = 6) -> str:
    """Build an application-assigned id: ``<prefix>_<epoch-ms>_<base36>``."""
    millis = int(time.time() * 1000)
    suffix = "".join(random.choices(_ID_ALPHABET, k=suffix_length))
    return f"{prefix}_{millis}_{suffix}"


def utc_timestamp() -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a ``Z`` suffix."""
    now = datetime.now(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"
