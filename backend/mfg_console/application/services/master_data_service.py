"""Master-data access layer — collection CRUD with a shared, invalidating cache.

Reads go through a keyed cache (one entry per collection). Concurrent reads
of the same collection share a single in-flight fetch. Successful mutations
invalidate exactly the mutated collection and publish a CacheInvalidated
event; the next read refetches.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from mfg_console.application.interfaces import MasterDataBackend
from mfg_console.application.services.invalidation_bus import (
    CacheInvalidated,
    InvalidationBus,
)
from mfg_console.domain.entities import CacheEntry, MasterRecord
from mfg_console.domain.exceptions import MasterDataBackendError
from mfg_console.infrastructure.logging.colored_logger import MastersLogger, MastersStage

logger = logging.getLogger(__name__)
mlog = MastersLogger("mfg_console.masters")

_OPTIONS_PREFIX = "options:"

Loader = Callable[[str], Awaitable[list[MasterRecord]]]


def as_record_list(value: Any) -> list[MasterRecord]:
    """Normalise a backend payload into a list of records.

    Accepts plain sequences and ``{"data"|"results"|"items": [...]}``
    envelopes; anything else (None, scalars, other objects) becomes ``[]``.
    """
    if isinstance(value, (list, tuple)):
        return [item for item in value if isinstance(item, dict)]
    if isinstance(value, dict):
        for key in ("data", "results", "items"):
            if isinstance(value.get(key), list):
                return as_record_list(value[key])
    return []


class MasterDataCache:
    """Keyed store of cache entries shared by every consumer of a service."""

    def __init__(self) -> None:
        self._entries: dict[str, CacheEntry] = {}

    def entry(self, key: str) -> CacheEntry:
        """Return the entry for ``key``, creating an empty one if needed."""
        if key not in self._entries:
            self._entries[key] = CacheEntry(collection=key)
        return self._entries[key]

    def peek(self, key: str) -> CacheEntry | None:
        return self._entries.get(key)

    def keys(self) -> list[str]:
        return list(self._entries)

    def clear(self) -> None:
        self._entries.clear()


class MasterDataService:
    """Uniform CRUD over named collections with refetch-based consistency."""

    def __init__(
        self,
        backend: MasterDataBackend,
        cache: MasterDataCache | None = None,
        bus: InvalidationBus | None = None,
        *,
        stale_after: float = 30.0,
        retry_count: int = 1,
        retry_delay: float = 1.0,
    ):
        self._backend = backend
        self._cache = cache if cache is not None else MasterDataCache()
        self._bus = bus if bus is not None else InvalidationBus()
        self._stale_after = stale_after
        self._retry_count = max(retry_count, 0)
        self._retry_delay = retry_delay
        # key -> (cache generation the fetch started at, task)
        self._inflight: dict[str, tuple[int, asyncio.Task[None]]] = {}

    @property
    def cache(self) -> MasterDataCache:
        return self._cache

    @property
    def bus(self) -> InvalidationBus:
        return self._bus

    # ── Reads ───────────────────────────────────────────────────────

    def entry(self, collection: str) -> CacheEntry:
        """Cache entry of a collection (data plus loading/error flags)."""
        return self._cache.entry(collection)

    async def list_records(self, collection: str) -> list[MasterRecord]:
        """Return the collection's records, refetching when stale.

        Never raises for backend failures: after the retries are spent the
        last-known records are returned and the entry carries the error.
        """
        entry = self._cache.entry(collection)
        if not entry.is_fresh(self._stale_after):
            await self._fetch(collection, entry, self._load_collection, self._retry_count)
        return list(entry.data)

    async def list_options(self, relation: str) -> list[MasterRecord]:
        """Option records for selection controls — always a list."""
        if not relation:
            return []
        key = f"{_OPTIONS_PREFIX}{relation}"
        entry = self._cache.entry(key)
        if not entry.is_fresh(self._stale_after):
            await self._fetch(key, entry, self._load_options, 0)
        return list(entry.data)

    async def _load_collection(self, collection: str) -> list[MasterRecord]:
        payload = await self._backend.get_all(collection)
        if not isinstance(payload, list):
            raise MasterDataBackendError(
                collection, 0, f"expected a list of records, got {type(payload).__name__}"
            )
        return payload

    async def _load_options(self, key: str) -> list[MasterRecord]:
        relation = key[len(_OPTIONS_PREFIX):]
        return as_record_list(await self._backend.get_options(relation))

    async def _fetch(
        self, key: str, entry: CacheEntry, loader: Loader, retries: int
    ) -> None:
        """Run (or join) the single in-flight fetch for ``key``.

        A fetch that started before the latest invalidation is waited out
        rather than joined, and a new one is started after it.
        """
        while True:
            inflight = self._inflight.get(key)
            if inflight is None or inflight[1].done():
                break
            generation, running = inflight
            await asyncio.shield(running)
            if generation == entry.generation:
                return

        generation = entry.generation
        task = asyncio.create_task(self._run_fetch(key, entry, loader, retries, generation))
        self._inflight[key] = (generation, task)

        def _forget(done: asyncio.Task[None]) -> None:
            current = self._inflight.get(key)
            if current is not None and current[1] is done:
                del self._inflight[key]

        task.add_done_callback(_forget)
        await asyncio.shield(task)

    async def _run_fetch(
        self, key: str, entry: CacheEntry, loader: Loader, retries: int, generation: int
    ) -> None:
        entry.mark_loading()
        attempts = retries + 1

        for attempt in range(1, attempts + 1):
            mlog.step_start(MastersStage.FETCH, f"Fetching {key}", attempt=attempt)
            try:
                data = await loader(key)
            except Exception as exc:
                if attempt < attempts:
                    logger.warning(
                        "Fetching %s failed (attempt %d/%d), retrying in %.1fs: %s",
                        key, attempt, attempts, self._retry_delay, exc,
                    )
                    await asyncio.sleep(self._retry_delay)
                    continue
                mlog.step_error(MastersStage.FETCH, f"Fetching {key} failed", error=exc)
                entry.mark_failed(exc)
                return

            entry.mark_success(data, generation)
            mlog.step_complete(MastersStage.FETCH, f"Fetched {key}", records=len(data))
            return

    # ── Mutations ───────────────────────────────────────────────────

    async def create(self, collection: str, record: MasterRecord) -> MasterRecord:
        """Create a record; errors propagate and are never retried."""
        with mlog.timed_step(MastersStage.CREATE, f"Creating {collection} record"):
            created = await self._backend.create(collection, record)
        self.invalidate(collection)
        return created

    async def update(
        self, collection: str, record_id: str, record: MasterRecord
    ) -> MasterRecord:
        """Replace the record with ``record_id``.

        Raises EntityNotFoundError (from the backend) for unknown ids; the
        cache is left untouched on any failure.
        """
        with mlog.timed_step(MastersStage.UPDATE, f"Updating {collection} record {record_id}"):
            updated = await self._backend.update(collection, str(record_id), record)
        self.invalidate(collection)
        return updated

    async def delete(self, collection: str, record_id: str) -> None:
        with mlog.timed_step(MastersStage.DELETE, f"Deleting {collection} record {record_id}"):
            await self._backend.delete(collection, str(record_id))
        self.invalidate(collection)

    async def get(self, collection: str, record_id: str) -> MasterRecord:
        """Fetch one record directly from the backend (uncached)."""
        return await self._backend.get_by_id(collection, str(record_id))

    # ── Invalidation ────────────────────────────────────────────────

    def invalidate(self, collection: str, reason: str = "mutation") -> None:
        """Mark the collection (and its option list) stale and notify subscribers."""
        for key in (collection, f"{_OPTIONS_PREFIX}{collection}"):
            entry = self._cache.peek(key)
            if entry is not None:
                entry.invalidate()
        mlog.step_complete(MastersStage.INVALIDATE, f"Invalidated {collection}", reason=reason)
        self._bus.publish(CacheInvalidated(collection=collection, reason=reason))
