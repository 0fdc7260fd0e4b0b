"""Tests for container wiring."""

from pathlib import Path

import pytest

from carb_counter.adapters.json_file_document_store import JsonFileDocumentStore
from carb_counter.adapters.memory_document_store import InMemoryDocumentStore
from carb_counter.config import Settings
from carb_counter.containers import build_container, build_document_store


def test_build_container_creates_store(settings: Settings) -> None:
    container = build_container(settings)

    assert isinstance(container.document_store, InMemoryDocumentStore)
    assert container.store.is_loaded is False
    assert container.store.history_service.limit == 20


def test_build_document_store_defaults_to_files(tmp_path: Path) -> None:
    settings = Settings(storage_backend="file", data_dir=str(tmp_path))

    store = build_document_store(settings)

    assert isinstance(store, JsonFileDocumentStore)
    assert store.directory == tmp_path


def test_build_document_store_requires_supabase_credentials() -> None:
    settings = Settings(storage_backend="supabase")

    with pytest.raises(ValueError):
        build_document_store(settings)


def test_container_applies_limits() -> None:
    settings = Settings(
        storage_backend="memory", history_limit=3, usage_window=2, quick_add_limit=1
    )

    store = build_container(settings).store

    assert store.history_service.limit == 3
    assert store.usage_service.window == 2
    assert store.quick_add_limit == 1
