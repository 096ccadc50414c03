"""Master-data backend persisted in a key-value store.

Storage layout:
    master_data_<collection>   — JSON array of the collection's records
"""

import logging

from mfg_console.application.interfaces import KeyValueStore, MasterDataBackend
from mfg_console.application.services.local_record_store import (
    load_record_list,
    write_record_list,
)
from mfg_console.domain.entities import (
    MasterRecord,
    generate_record_id,
    id_fields,
    matches_id,
)
from mfg_console.domain.exceptions import EntityNotFoundError
from mfg_console.infrastructure.logging.colored_logger import MastersLogger, MastersStage

logger = logging.getLogger(__name__)
mlog = MastersLogger("mfg_console.storage")


def _storage_key(collection: str) -> str:
    return f"master_data_{collection}"


class LocalMasterDataBackend(MasterDataBackend):
    """Infrastructure adapter — every collection is one array under one key."""

    def __init__(self, store: KeyValueStore):
        self._store = store

    def _load(self, collection: str) -> list[MasterRecord]:
        return load_record_list(self._store, _storage_key(collection))

    def _save(self, collection: str, records: list[MasterRecord]) -> None:
        write_record_list(self._store, _storage_key(collection), records)

    async def get_all(self, collection: str) -> list[MasterRecord]:
        records = self._load(collection)
        mlog.detail(f"Loaded {collection}", records=len(records))
        return records

    async def get_by_id(self, collection: str, record_id: str) -> MasterRecord:
        for record in self._load(collection):
            if matches_id(collection, record, record_id):
                return record
        raise EntityNotFoundError(collection, record_id)

    async def create(self, collection: str, record: MasterRecord) -> MasterRecord:
        """Append a record, assigning ``<collection>_id`` when it carries no id."""
        created = dict(record)
        id_field = f"{collection}_id"
        if not created.get(id_field) and not created.get("id"):
            created[id_field] = generate_record_id(collection, suffix_length=9)

        records = self._load(collection)
        records.append(created)
        self._save(collection, records)
        mlog.step_complete(MastersStage.STORAGE, f"Stored new {collection} record")
        return created

    async def update(
        self, collection: str, record_id: str, record: MasterRecord
    ) -> MasterRecord:
        """Replace the record, keeping the identity fields it was stored with."""
        records = self._load(collection)
        for index, existing in enumerate(records):
            if matches_id(collection, existing, record_id):
                replacement = dict(record)
                for name in id_fields(collection):
                    if name in existing:
                        replacement[name] = existing[name]
                records[index] = replacement
                self._save(collection, records)
                mlog.step_complete(MastersStage.STORAGE, f"Replaced {collection} record {record_id}")
                return replacement
        raise EntityNotFoundError(collection, record_id)

    async def delete(self, collection: str, record_id: str) -> None:
        records = self._load(collection)
        remaining = [r for r in records if not matches_id(collection, r, record_id)]
        if len(remaining) == len(records):
            raise EntityNotFoundError(collection, record_id)
        self._save(collection, remaining)
        mlog.step_complete(MastersStage.STORAGE, f"Deleted {collection} record {record_id}")

    async def get_options(self, relation: str) -> list[MasterRecord]:
        return self._load(relation)
