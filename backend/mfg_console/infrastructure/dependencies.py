"""Dependency wiring — builds infrastructure adapters and application services from Settings."""

import logging
from collections.abc import AsyncGenerator
from dataclasses import dataclass
from functools import lru_cache

import httpx

from mfg_console.application.interfaces import KeyValueStore, MasterDataBackend
from mfg_console.application.services import (
    InvalidationBus,
    InventoryStore,
    JobCardStore,
    MasterDataService,
    RejectionLogbookStore,
    ShiftHandoverStore,
)
from mfg_console.config import Settings, get_settings
from mfg_console.infrastructure.http.master_api_client import HttpMasterDataBackend
from mfg_console.infrastructure.storage.key_value_store import JsonFileKeyValueStore
from mfg_console.infrastructure.storage.local_master_backend import LocalMasterDataBackend

logger = logging.getLogger(__name__)


def build_key_value_store(settings: Settings) -> KeyValueStore:
    return JsonFileKeyValueStore(settings.storage_dir)


def build_master_backend(
    settings: Settings,
    store: KeyValueStore | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> MasterDataBackend:
    """The masters API client, or the key-value backed stand-in when configured."""
    if settings.masters_backend == "http":
        logger.info("Master data from %s", settings.masters_api_base_url)
        return HttpMasterDataBackend(
            settings.masters_api_base_url,
            timeout=settings.masters_api_timeout,
            http_client=http_client,
        )
    logger.info("Master data from local storage at %s", settings.storage_dir)
    return LocalMasterDataBackend(store or build_key_value_store(settings))


def build_master_data_service(
    settings: Settings,
    backend: MasterDataBackend,
    bus: InvalidationBus | None = None,
) -> MasterDataService:
    return MasterDataService(
        backend,
        bus=bus,
        stale_after=settings.cache_stale_seconds,
        retry_count=settings.list_retry_count,
        retry_delay=settings.list_retry_delay,
    )


@dataclass
class ConsoleContext:
    """Everything a console session works with, sharing one cache and one store."""

    settings: Settings
    store: KeyValueStore
    masters: MasterDataService
    job_cards: JobCardStore
    shift_handovers: ShiftHandoverStore
    rejection_logs: RejectionLogbookStore
    inventory: InventoryStore


def build_console_context(
    settings: Settings | None = None,
    *,
    store: KeyValueStore | None = None,
    backend: MasterDataBackend | None = None,
) -> ConsoleContext:
    settings = settings or get_settings()
    store = store or build_key_value_store(settings)
    backend = backend or build_master_backend(settings, store)
    return ConsoleContext(
        settings=settings,
        store=store,
        masters=build_master_data_service(settings, backend),
        job_cards=JobCardStore(store),
        shift_handovers=ShiftHandoverStore(store),
        rejection_logs=RejectionLogbookStore(store),
        inventory=InventoryStore(store),
    )


# ── FastAPI providers (development masters server) ──────────────────

@lru_cache
def _server_store() -> KeyValueStore:
    return build_key_value_store(get_settings())


async def get_local_master_backend() -> AsyncGenerator[MasterDataBackend, None]:
    """Provides the key-value backed masters backend the dev server serves from."""
    yield LocalMasterDataBackend(_server_store())
