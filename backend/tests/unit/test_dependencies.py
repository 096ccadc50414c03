"""Unit tests for dependency wiring and logging setup."""

import logging

from mfg_console.config import Settings
from mfg_console.infrastructure.dependencies import (
    build_console_context,
    build_master_backend,
)
from mfg_console.infrastructure.http.master_api_client import HttpMasterDataBackend
from mfg_console.infrastructure.logging.log_config import setup_logging
from mfg_console.infrastructure.storage.key_value_store import InMemoryKeyValueStore
from mfg_console.infrastructure.storage.local_master_backend import LocalMasterDataBackend


def test_build_master_backend_follows_settings(tmp_path):
    http = build_master_backend(Settings(_env_file=None, masters_backend="http"))
    local = build_master_backend(
        Settings(_env_file=None, masters_backend="local", storage_dir=str(tmp_path))
    )

    assert isinstance(http, HttpMasterDataBackend)
    assert isinstance(local, LocalMasterDataBackend)


def test_console_context_shares_one_store():
    store = InMemoryKeyValueStore()
    context = build_console_context(Settings(_env_file=None), store=store)

    context.job_cards.save({
        "jobNumber": "JC-1",
        "srNumber": "1",
        "jobDate": "2024-05-01",
        "jobOrderNumber": "JO-1",
        "sale": {"clientName": "Acme"},
    })

    assert store.get("job_card_records") is not None
    assert context.store is store


def test_setup_logging_applies_category_levels():
    settings = Settings(
        _env_file=None,
        log_level_http="ERROR",
        log_level_masters="DEBUG",
        log_level_storage="not-a-level",
    )

    setup_logging(settings)

    assert logging.getLogger("httpx").level == logging.ERROR
    assert logging.getLogger("mfg_console.masters").level == logging.DEBUG
    assert logging.getLogger("mfg_console.storage").level == logging.INFO
