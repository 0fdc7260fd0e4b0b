"""Favorite registry."""

import logging
from dataclasses import dataclass, field

from carb_counter.domain.density import DensityType
from carb_counter.domain.favorites import Favorite
from carb_counter.services.persistence import FAVORITES_KEY, PersistenceService
from carb_counter.services.usage import UsageService

_logger = logging.getLogger(__name__)


@dataclass
class FavoriteService:
    """Application service for the persisted favorites list."""

    persistence: PersistenceService
    usage_service: UsageService
    favorites: list[Favorite] = field(default_factory=list)

    def load(self) -> None:
        """Replace in-memory favorites with the persisted document."""
        self.favorites = self.persistence.load(
            FAVORITES_KEY, [], parse=_parse_favorites_document
        )

    def add_favorite(self, favorite: Favorite) -> Favorite:
        """Append a favorite and persist the full list."""
        self.favorites = [*self.favorites, favorite]
        self._save()
        return favorite

    def delete_favorite(self, index: int) -> Favorite | None:
        """Remove the favorite at ``index`` along with usage stats for its name.

        Usage records are keyed by name only, so deleting one of several
        favorites that share a name clears the stats for all of them.
        """
        if index < 0 or index >= len(self.favorites):
            return None
        deleted = self.favorites[index]
        self.favorites = [
            favorite for position, favorite in enumerate(self.favorites)
            if position != index
        ]
        self._save()
        self.usage_service.remove_name(deleted.name)
        _logger.info("Deleted favorite %s", deleted.name)
        return deleted

    def get(self, index: int) -> Favorite | None:
        """Return the favorite at ``index``, if present."""
        if 0 <= index < len(self.favorites):
            return self.favorites[index]
        return None

    def find_index(self, name: str, type_: DensityType, value: float) -> int | None:
        """Return the index of the first favorite matching the identity tuple."""
        for position, favorite in enumerate(self.favorites):
            if (favorite.name, favorite.type, favorite.value) == (name, type_, value):
                return position
        return None

    def _save(self) -> None:
        self.persistence.save(
            FAVORITES_KEY, [favorite_to_document(fav) for fav in self.favorites]
        )


def favorite_to_document(favorite: Favorite) -> dict[str, object]:
    """Serialize a favorite to its persisted shape."""
    return {
        "name": favorite.name,
        "type": favorite.type.value,
        "value": favorite.value,
    }


def _parse_favorites_document(raw: object) -> list[Favorite]:
    if not isinstance(raw, list):
        raise ValueError("favorites document must be a list")
    return [
        Favorite(
            name=str(row["name"]),
            type=DensityType(row["type"]),
            value=float(row["value"]),
        )
        for row in raw
    ]
