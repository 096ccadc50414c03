"""Locally persisted record collections (job cards, shift handovers, rejection logs).

Each collection lives under one storage key as a JSON array. Reads degrade
to an empty list when the key is absent or its content cannot be parsed;
writes rewrite the whole array (last write wins).
"""

import json
import logging
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

from mfg_console.application.interfaces import KeyValueStore
from mfg_console.application.schemas import (
    JobCardCreate,
    RejectionLogbookCreate,
    ShiftHandoverCreate,
)
from mfg_console.domain.entities import MasterRecord, generate_record_id, utc_timestamp
from mfg_console.domain.exceptions import EntityNotFoundError, StorageParseError

logger = logging.getLogger(__name__)


def read_record_list(store: KeyValueStore, key: str) -> list[MasterRecord]:
    """Decode the array under ``key``. Raises StorageParseError on bad content."""
    try:
        raw = store.get(key)
    except UnicodeDecodeError as exc:
        raise StorageParseError(key, str(exc)) from exc
    if raw is None:
        return []
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise StorageParseError(key, str(exc)) from exc
    if not isinstance(data, list):
        raise StorageParseError(key, f"expected a JSON array, got {type(data).__name__}")
    return [record for record in data if isinstance(record, dict)]


def load_record_list(store: KeyValueStore, key: str) -> list[MasterRecord]:
    """Like read_record_list, but malformed content loads as an empty list."""
    try:
        return read_record_list(store, key)
    except StorageParseError as exc:
        logger.warning("Ignoring unreadable storage key: %s", exc)
        return []


def write_record_list(store: KeyValueStore, key: str, records: list[MasterRecord]) -> None:
    store.set(key, json.dumps(records, ensure_ascii=False))


class LocalRecordStore:
    """Generic CRUD over one storage key.

    Subclasses set ``storage_key``, ``id_prefix``, ``entity_name`` and,
    optionally, the pydantic ``schema`` that validates incoming form data.
    """

    storage_key: str = ""
    id_prefix: str = "rec"
    entity_name: str = "Record"
    schema: type[BaseModel] | None = None

    def __init__(self, store: KeyValueStore):
        self._store = store

    def _payload(self, data: BaseModel | Mapping[str, Any]) -> MasterRecord:
        """Validate form data and dump it with the stored (camelCase) keys."""
        if isinstance(data, BaseModel):
            model = data
        elif self.schema is not None:
            model = self.schema.model_validate(dict(data))
        else:
            return dict(data)
        return model.model_dump(mode="json", by_alias=True, exclude_none=True)

    def load(self) -> list[MasterRecord]:
        return load_record_list(self._store, self.storage_key)

    def get(self, record_id: str) -> MasterRecord | None:
        return next((r for r in self.load() if r.get("id") == record_id), None)

    def save(self, data: BaseModel | Mapping[str, Any]) -> MasterRecord:
        """Store a new record at the front of the list and return it."""
        record: MasterRecord = {
            **self._payload(data),
            "id": generate_record_id(self.id_prefix),
            "createdAt": utc_timestamp(),
        }
        records = self.load()
        records.insert(0, record)
        write_record_list(self._store, self.storage_key, records)
        logger.info("Saved %s %s", self.entity_name, record["id"])
        return record

    def update(self, record_id: str, data: BaseModel | Mapping[str, Any]) -> list[MasterRecord]:
        """Overwrite a record's fields, keeping its id and creation time.

        Returns the full, updated list. Raises EntityNotFoundError when no
        record has ``record_id``.
        """
        payload = self._payload(data)
        records = self.load()
        for index, existing in enumerate(records):
            if existing.get("id") == record_id:
                records[index] = {
                    **existing,
                    **payload,
                    "id": record_id,
                    "createdAt": existing.get("createdAt"),
                    "updatedAt": utc_timestamp(),
                }
                break
        else:
            raise EntityNotFoundError(self.entity_name, record_id)

        write_record_list(self._store, self.storage_key, records)
        logger.info("Updated %s %s", self.entity_name, record_id)
        return records

    def delete(self, record_id: str) -> list[MasterRecord]:
        """Remove a record (unknown ids are a no-op) and return what remains."""
        records = self.load()
        remaining = [r for r in records if r.get("id") != record_id]
        if len(remaining) != len(records):
            write_record_list(self._store, self.storage_key, remaining)
            logger.info("Deleted %s %s", self.entity_name, record_id)
        return remaining


class JobCardStore(LocalRecordStore):
    storage_key = "job_card_records"
    id_prefix = "jobCard"
    entity_name = "JobCard"
    schema = JobCardCreate


class ShiftHandoverStore(LocalRecordStore):
    storage_key = "shift_handover_records"
    id_prefix = "sh"
    entity_name = "ShiftHandover"
    schema = ShiftHandoverCreate


class RejectionLogbookStore(LocalRecordStore):
    storage_key = "rejection_logbook_records"
    id_prefix = "rl"
    entity_name = "RejectionLogbook"
    schema = RejectionLogbookCreate
