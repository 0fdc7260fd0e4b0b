"""Tests for the favorite registry."""

import json

from carb_counter.adapters.memory_document_store import InMemoryDocumentStore
from carb_counter.domain.density import DensityType
from carb_counter.domain.favorites import Favorite
from carb_counter.services.favorites import FavoriteService
from carb_counter.services.persistence import PersistenceService
from carb_counter.services.usage import UsageService
from tests.conftest import FakeClock


def _services(
    store: InMemoryDocumentStore,
) -> tuple[FavoriteService, UsageService]:
    persistence = PersistenceService(store)
    usage_service = UsageService(persistence, clock=FakeClock())
    return FavoriteService(persistence, usage_service), usage_service


def test_add_favorite_persists_list_without_deduplication() -> None:
    store = InMemoryDocumentStore()
    service, _ = _services(store)

    service.add_favorite(Favorite(name="Bread", type=DensityType.KH100, value=48))
    service.add_favorite(Favorite(name="Bread", type=DensityType.TEILER, value=2))

    persisted = json.loads(store.documents["kh_favorites"])
    assert persisted == [
        {"name": "Bread", "type": "KH100", "value": 48},
        {"name": "Bread", "type": "TEILER", "value": 2},
    ]
    assert len(service.favorites) == 2


def test_load_restores_favorites() -> None:
    store = InMemoryDocumentStore(
        documents={
            "kh_favorites": json.dumps(
                [{"name": "Milk", "type": "FAKTOR", "value": 0.05}]
            )
        }
    )
    service, _ = _services(store)

    service.load()

    assert service.favorites == [
        Favorite(name="Milk", type=DensityType.FAKTOR, value=0.05)
    ]


def test_load_discards_unknown_density_type() -> None:
    store = InMemoryDocumentStore(
        documents={
            "kh_favorites": json.dumps([{"name": "Milk", "type": "CUP", "value": 1}])
        }
    )
    service, _ = _services(store)

    service.load()

    assert service.favorites == []


def test_delete_favorite_cascades_usage_by_name() -> None:
    store = InMemoryDocumentStore()
    service, usage_service = _services(store)
    service.add_favorite(Favorite(name="X", type=DensityType.KH100, value=10))
    service.add_favorite(Favorite(name="X", type=DensityType.FAKTOR, value=0.3))
    service.add_favorite(Favorite(name="Y", type=DensityType.KH100, value=5))
    usage_service.track_usage("X", 100)
    usage_service.track_usage("Y", 50)

    deleted = service.delete_favorite(0)

    assert deleted == Favorite(name="X", type=DensityType.KH100, value=10)
    assert [fav.name for fav in service.favorites] == ["X", "Y"]
    assert usage_service.get("X") is None
    persisted = json.loads(store.documents["kh_favorite_usage"])
    assert [row["favName"] for row in persisted] == ["Y"]


def test_delete_favorite_out_of_range_is_noop() -> None:
    store = InMemoryDocumentStore()
    service, _ = _services(store)
    service.add_favorite(Favorite(name="X", type=DensityType.KH100, value=10))

    assert service.delete_favorite(3) is None
    assert service.delete_favorite(-1) is None
    assert len(service.favorites) == 1


def test_find_index_matches_full_tuple() -> None:
    service, _ = _services(InMemoryDocumentStore())
    service.add_favorite(Favorite(name="Bread", type=DensityType.KH100, value=48))
    service.add_favorite(Favorite(name="Bread", type=DensityType.TEILER, value=2))

    assert service.find_index("Bread", DensityType.TEILER, 2) == 1
    assert service.find_index("Bread", DensityType.TEILER, 3) is None
