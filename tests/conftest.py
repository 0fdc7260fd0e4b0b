"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

import pytest

from carb_counter.adapters.memory_document_store import InMemoryDocumentStore
from carb_counter.config import Settings
from carb_counter.containers import AppContainer, build_store
from carb_counter.services.persistence import (
    DocumentStore,
    StorageUnavailableError,
)
from carb_counter.services.store import CarbStore


@dataclass
class FakeClock:
    """Clock that advances one second per call."""

    now: datetime = field(
        default_factory=lambda: datetime(2024, 3, 1, 12, 30, tzinfo=UTC)
    )
    step: timedelta = field(default_factory=lambda: timedelta(seconds=1))

    def __call__(self) -> datetime:
        current = self.now
        self.now = current + self.step
        return current


@dataclass
class UnavailableDocumentStore(DocumentStore):
    """Document store whose backend can never be reached."""

    reads: int = 0
    writes: int = 0

    def read(self, key: str) -> str | None:
        self.reads += 1
        raise StorageUnavailableError("storage offline")

    def write(self, key: str, text: str) -> None:
        self.writes += 1
        raise StorageUnavailableError("storage offline")


@pytest.fixture
def settings() -> Settings:
    return Settings(storage_backend="memory", timezone="UTC")


@pytest.fixture
def document_store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store(
    settings: Settings, document_store: InMemoryDocumentStore, clock: FakeClock
) -> CarbStore:
    carb_store = build_store(settings, document_store)
    carb_store.row_service.clock = clock
    carb_store.usage_service.clock = clock
    carb_store.load()
    return carb_store


@pytest.fixture
def container(
    settings: Settings, document_store: InMemoryDocumentStore, clock: FakeClock
) -> AppContainer:
    carb_store = build_store(settings, document_store)
    carb_store.row_service.clock = clock
    carb_store.usage_service.clock = clock
    return AppContainer(
        settings=settings, document_store=document_store, store=carb_store
    )
