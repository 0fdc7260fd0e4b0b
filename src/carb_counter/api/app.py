"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request, status

from carb_counter.api.models import (
    ApplyFavoritePayload,
    FavoritePayload,
    QuickAddPayload,
    RowPresetPayload,
    RowTypePayload,
    RowUpdatePayload,
    SaveFavoritePayload,
    UsagePayload,
)
from carb_counter.app_logging import configure_logging
from carb_counter.containers import AppContainer
from carb_counter.domain.density import DensityType
from carb_counter.domain.favorites import Favorite, TopFavorite
from carb_counter.domain.history import HistoryEntry
from carb_counter.domain.rows import CarbRow, RowPreset
from carb_counter.services.conversion import (
    coerce_density_type,
    coerce_number,
    density_label,
)
from carb_counter.services.favorites import favorite_to_document
from carb_counter.services.history import history_entry_to_document
from carb_counter.services.store import CarbStore


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        app.state.container.store.load()
        logger.info(
            "Carb counter ready (storage=%s)", container.settings.storage_backend
        )
        yield

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/state")
    async def state(request: Request) -> dict[str, object]:
        """Return everything the UI needs for a full render."""
        return _state_payload(_store(request))

    @app.post("/rows")
    async def add_row(
        request: Request, payload: RowPresetPayload | None = None
    ) -> dict[str, object]:
        """Add an empty row, or one pre-filled from a preset."""
        preset = None
        if payload is not None:
            preset = RowPreset(
                name=payload.name,
                weight=coerce_number(payload.weight),
                type=coerce_density_type(payload.type) or DensityType.KH100,
                value=coerce_number(payload.value),
            )
        row = _store(request).add_row(preset)
        return {"row": _row_payload(row)}

    @app.patch("/rows/{row_id}")
    async def update_row(
        row_id: str, payload: RowUpdatePayload, request: Request
    ) -> dict[str, object]:
        """Merge edited fields into a row."""
        row = _store(request).update_row(row_id, payload.model_dump(exclude_unset=True))
        return {"row": _row_payload(row) if row else None}

    @app.post("/rows/{row_id}/type")
    async def change_row_type(
        row_id: str, payload: RowTypePayload, request: Request
    ) -> dict[str, object]:
        """Switch a row's density type, keeping its carbs per gram."""
        new_type = _require_type(payload.type)
        row = _store(request).change_row_type(row_id, new_type)
        return {"row": _row_payload(row) if row else None}

    @app.post("/rows/{row_id}/favorite")
    async def apply_favorite(
        row_id: str, payload: ApplyFavoritePayload, request: Request
    ) -> dict[str, object]:
        """Load a favorite's density into a row."""
        row = _store(request).apply_favorite(row_id, payload.index)
        return {"row": _row_payload(row) if row else None}

    @app.post("/rows/{row_id}/commit-weight")
    async def commit_row_weight(row_id: str, request: Request) -> dict[str, object]:
        """Record the row's weight as a favorite usage."""
        store = _store(request)
        store.commit_row_weight(row_id)
        return {"topFavorites": _top_favorites_payload(store.get_top_favorites())}

    @app.post("/rows/{row_id}/save-favorite")
    async def save_row_as_favorite(
        row_id: str, payload: SaveFavoritePayload, request: Request
    ) -> dict[str, object]:
        """Save a row's density as a named favorite."""
        favorite = _store(request).save_row_as_favorite(row_id, payload.name)
        return {"favorite": _favorite_payload(favorite) if favorite else None}

    @app.delete("/rows/{row_id}")
    async def delete_row(row_id: str, request: Request) -> dict[str, object]:
        """Remove a row."""
        store = _store(request)
        store.delete_row(row_id)
        return {"rows": [_row_payload(row) for row in store.rows]}

    @app.delete("/rows")
    async def clear_rows(request: Request) -> dict[str, object]:
        """Finish the meal: record it in history and empty the rows."""
        entry = _store(request).clear_rows()
        return {"entry": history_entry_to_document(entry) if entry else None}

    @app.get("/favorites")
    async def list_favorites(request: Request) -> dict[str, object]:
        """Return all favorites in display order."""
        return {
            "favorites": [
                _favorite_payload(fav) for fav in _store(request).favorites
            ]
        }

    @app.post("/favorites")
    async def add_favorite(
        payload: FavoritePayload, request: Request
    ) -> dict[str, object]:
        """Add a favorite preset."""
        name = payload.name.strip()
        if not name:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Favorite name must not be blank",
            )
        favorite = Favorite(
            name=name,
            type=_require_type(payload.type),
            value=coerce_number(payload.value),
        )
        _store(request).add_favorite(favorite)
        return {"favorite": _favorite_payload(favorite)}

    @app.delete("/favorites/{index}")
    async def delete_favorite(index: int, request: Request) -> dict[str, object]:
        """Delete a favorite and the usage statistics for its name."""
        deleted = _store(request).delete_favorite(index)
        return {"deleted": _favorite_payload(deleted) if deleted else None}

    @app.get("/favorites/top")
    async def top_favorites(
        request: Request, limit: int | None = None
    ) -> dict[str, object]:
        """Return the most used favorites for quick add."""
        top = _store(request).get_top_favorites(limit)
        return {"topFavorites": _top_favorites_payload(top)}

    @app.post("/usage")
    async def track_usage(payload: UsagePayload, request: Request) -> dict[str, object]:
        """Record a portion weight for a favorite name."""
        store = _store(request)
        store.track_usage(payload.name, coerce_number(payload.weight))
        return {"topFavorites": _top_favorites_payload(store.get_top_favorites())}

    @app.post("/quick-add")
    async def quick_add(
        payload: QuickAddPayload, request: Request
    ) -> dict[str, object]:
        """Add a row from a top favorite with its average portion."""
        row = _store(request).quick_add(
            payload.name,
            coerce_number(payload.weight),
            _require_type(payload.type),
            coerce_number(payload.value),
        )
        return {"row": _row_payload(row)}

    @app.get("/history")
    async def history(
        request: Request, limit: int | None = None
    ) -> dict[str, object]:
        """Return the newest recorded meals."""
        entries = _store(request).recent_history(limit)
        return {"history": _history_payload(entries)}

    return app


def _store(request: Request) -> CarbStore:
    container: AppContainer = request.app.state.container
    return container.store


def _require_type(raw: str) -> DensityType:
    type_ = coerce_density_type(raw)
    if type_ is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unknown density type: {raw}",
        )
    return type_


def _state_payload(store: CarbStore) -> dict[str, object]:
    return {
        "isLoaded": store.is_loaded,
        "rows": [_row_payload(row) for row in store.rows],
        "totalCarbs": store.total_carbs,
        "favorites": [_favorite_payload(fav) for fav in store.favorites],
        "topFavorites": _top_favorites_payload(store.get_top_favorites()),
        "history": _history_payload(store.history),
    }


def _row_payload(row: CarbRow) -> dict[str, object]:
    return {
        "id": str(row.id),
        "weight": row.weight,
        "type": row.type.value,
        "value": row.value,
        "name": row.name,
        "carbs": row.carbs,
    }


def _favorite_payload(favorite: Favorite) -> dict[str, object]:
    return {
        **favorite_to_document(favorite),
        "label": density_label(favorite.type, favorite.value),
        "longLabel": density_label(favorite.type, favorite.value, long=True),
    }


def _top_favorites_payload(top: list[TopFavorite]) -> list[dict[str, object]]:
    return [
        {
            **favorite_to_document(item.favorite),
            "usageCount": item.usage_count,
            "avgWeight": item.avg_weight,
            "avgCarbs": item.avg_carbs,
        }
        for item in top
    ]


def _history_payload(entries: list[HistoryEntry]) -> list[dict[str, object]]:
    return [history_entry_to_document(entry) for entry in entries]
