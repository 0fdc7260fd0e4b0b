"""Tests for the meal history log."""

import json

from carb_counter.adapters.memory_document_store import InMemoryDocumentStore
from carb_counter.domain.history import HistoryEntry, HistoryItem
from carb_counter.services.history import HistoryService
from carb_counter.services.persistence import PersistenceService


def _entry(index: int) -> HistoryEntry:
    return HistoryEntry(
        date=f"12:{index:02d}",
        items=(HistoryItem(name=f"Meal {index}", carbs=float(index)),),
        total=float(index),
    )


def test_append_prepends_and_persists() -> None:
    store = InMemoryDocumentStore()
    service = HistoryService(PersistenceService(store))

    service.append(_entry(1))
    service.append(_entry(2))

    assert [entry.date for entry in service.entries] == ["12:02", "12:01"]
    persisted = json.loads(store.documents["kh_history"])
    assert persisted[0] == {
        "date": "12:02",
        "items": [{"name": "Meal 2", "carbs": 2.0}],
        "total": 2.0,
    }


def test_append_caps_log_at_twenty() -> None:
    service = HistoryService(PersistenceService(InMemoryDocumentStore()))
    for index in range(1, 21):
        service.append(_entry(index))
    oldest = service.entries[-1]

    service.append(_entry(21))

    assert len(service.entries) == 20
    assert service.entries[0].date == "12:21"
    assert oldest not in service.entries


def test_load_and_recent() -> None:
    store = InMemoryDocumentStore()
    writer = HistoryService(PersistenceService(store))
    for index in range(1, 8):
        writer.append(_entry(index))

    reader = HistoryService(PersistenceService(store))
    reader.load()

    assert len(reader.entries) == 7
    assert [entry.total for entry in reader.recent(5)] == [7, 6, 5, 4, 3]
    assert reader.recent(-1) == []
