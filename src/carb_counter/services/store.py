"""Session store combining rows, favorites, usage and history."""

import logging
from dataclasses import dataclass
from uuid import UUID

from carb_counter.domain.density import DensityType
from carb_counter.domain.favorites import Favorite, TopFavorite
from carb_counter.domain.history import HistoryEntry
from carb_counter.domain.rows import CarbRow, RowPreset
from carb_counter.services.favorites import FavoriteService
from carb_counter.services.history import HistoryService
from carb_counter.services.rows import RowService
from carb_counter.services.usage import UsageService

_logger = logging.getLogger(__name__)


@dataclass
class CarbStore:
    """Explicit store object handed to every UI collaborator.

    Built once per session. Persisted state is only available after
    ``load()``; ``is_loaded`` tells callers when that has happened.
    """

    row_service: RowService
    favorite_service: FavoriteService
    usage_service: UsageService
    history_service: HistoryService
    quick_add_limit: int = 4
    recent_history_limit: int = 5
    is_loaded: bool = False

    def load(self) -> None:
        """Read the persisted favorites, usage statistics and history."""
        self.favorite_service.load()
        self.usage_service.load()
        self.history_service.load()
        self.is_loaded = True
        _logger.info(
            "Store loaded: favorites=%s usage=%s history=%s",
            len(self.favorite_service.favorites),
            len(self.usage_service.usages),
            len(self.history_service.entries),
        )

    @property
    def rows(self) -> list[CarbRow]:
        return self.row_service.rows

    @property
    def favorites(self) -> list[Favorite]:
        return self.favorite_service.favorites

    @property
    def history(self) -> list[HistoryEntry]:
        return self.history_service.entries

    @property
    def total_carbs(self) -> float:
        return self.row_service.total_carbs

    def add_row(self, preset: RowPreset | None = None) -> CarbRow:
        return self.row_service.add_row(preset)

    def update_row(
        self, row_id: UUID | str, fields: dict[str, object]
    ) -> CarbRow | None:
        return self.row_service.update_row(row_id, fields)

    def delete_row(self, row_id: UUID | str) -> None:
        self.row_service.delete_row(row_id)

    def clear_rows(self) -> HistoryEntry | None:
        return self.row_service.clear_rows()

    def add_favorite(self, favorite: Favorite) -> Favorite:
        return self.favorite_service.add_favorite(favorite)

    def delete_favorite(self, index: int) -> Favorite | None:
        return self.favorite_service.delete_favorite(index)

    def track_usage(self, fav_name: str, weight: float) -> None:
        self.usage_service.track_usage(fav_name, weight)

    def get_top_favorites(self, limit: int | None = None) -> list[TopFavorite]:
        """Return the most used favorites for quick add."""
        resolved = self.quick_add_limit if limit is None else limit
        return self.usage_service.get_top_favorites(self.favorites, resolved)

    def recent_history(self, limit: int | None = None) -> list[HistoryEntry]:
        """Return the newest history entries for display."""
        resolved = self.recent_history_limit if limit is None else limit
        return self.history_service.recent(resolved)

    def change_row_type(
        self, row_id: UUID | str, new_type: DensityType
    ) -> CarbRow | None:
        """Switch a row to another density type without changing its carbs."""
        return self.row_service.change_type(row_id, new_type)

    def apply_favorite(self, row_id: UUID | str, index: int) -> CarbRow | None:
        """Load the favorite at ``index`` into a row."""
        favorite = self.favorite_service.get(index)
        if favorite is None:
            return None
        return self.row_service.update_row(
            row_id,
            {"type": favorite.type, "value": favorite.value, "name": favorite.name},
        )

    def commit_row_weight(self, row_id: UUID | str) -> None:
        """Record a usage when a named row's weight is committed."""
        row = self.row_service.get(row_id)
        if row is None or not row.name or row.weight <= 0:
            return
        self.usage_service.track_usage(row.name, row.weight)

    def quick_add(
        self, name: str, weight: float, type_: DensityType, value: float
    ) -> CarbRow:
        """Record a usage and add a row pre-filled with the favorite."""
        self.usage_service.track_usage(name, weight)
        return self.row_service.add_row(
            RowPreset(name=name, weight=weight, type=type_, value=value)
        )

    def save_row_as_favorite(self, row_id: UUID | str, name: str) -> Favorite | None:
        """Store a row's density under a name; blank names are ignored."""
        cleaned = name.strip()
        row = self.row_service.get(row_id)
        if row is None or not cleaned:
            return None
        return self.favorite_service.add_favorite(
            Favorite(name=cleaned, type=row.type, value=row.value)
        )

    def find_favorite_index(
        self, name: str, type_: DensityType, value: float
    ) -> int | None:
        """Return the index of the favorite a row was loaded from, if any."""
        return self.favorite_service.find_index(name, type_, value)
