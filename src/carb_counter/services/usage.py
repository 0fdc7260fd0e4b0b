"""Favorite usage tracking and quick-add ranking."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime

from carb_counter.domain.favorites import (
    Favorite,
    FavoriteUsage,
    FavoriteUsageEntry,
    TopFavorite,
)
from carb_counter.services.conversion import compute
from carb_counter.services.persistence import FAVORITE_USAGE_KEY, PersistenceService

_logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class UsageService:
    """Keeps the last uses of each favorite name and their average weight."""

    persistence: PersistenceService
    window: int = 10
    clock: Callable[[], datetime] = _utc_now
    usages: list[FavoriteUsage] = field(default_factory=list)

    def load(self) -> None:
        """Replace in-memory usage records with the persisted document."""
        self.usages = self.persistence.load(
            FAVORITE_USAGE_KEY, [], parse=_parse_usage_document
        )

    def get(self, fav_name: str) -> FavoriteUsage | None:
        """Return the usage record for a favorite name, if any."""
        for usage in self.usages:
            if usage.fav_name == fav_name:
                return usage
        return None

    def track_usage(self, fav_name: str, weight: float) -> FavoriteUsage | None:
        """Record a portion weight for a favorite name and persist."""
        if not fav_name or weight <= 0:
            return None
        entry = FavoriteUsageEntry(
            weight=weight, timestamp=int(self.clock().timestamp() * 1000)
        )
        existing = self.get(fav_name)
        previous = existing.usages if existing else ()
        window = (*previous, entry)[-self.window :]
        updated = FavoriteUsage(
            fav_name=fav_name,
            usages=window,
            avg_weight=_average_weight(window),
        )
        if existing is None:
            self.usages = [*self.usages, updated]
        else:
            self.usages = [
                updated if usage is existing else usage for usage in self.usages
            ]
        self._save()
        _logger.debug(
            "Tracked usage: fav=%s weight=%s count=%s", fav_name, weight, len(window)
        )
        return updated

    def remove_name(self, fav_name: str) -> None:
        """Drop every usage record for a favorite name and persist."""
        self.usages = [usage for usage in self.usages if usage.fav_name != fav_name]
        self._save()

    def get_top_favorites(
        self, favorites: list[Favorite], limit: int = 4
    ) -> list[TopFavorite]:
        """Rank used favorites by usage count, keeping list order on ties."""
        ranked: list[TopFavorite] = []
        for favorite in favorites:
            usage = self.get(favorite.name)
            if usage is None or not usage.usages:
                continue
            ranked.append(
                TopFavorite(
                    favorite=favorite,
                    usage_count=len(usage.usages),
                    avg_weight=usage.avg_weight,
                    avg_carbs=compute(
                        usage.avg_weight, favorite.type, favorite.value
                    ),
                )
            )
        ranked.sort(key=lambda item: item.usage_count, reverse=True)
        return ranked[: max(limit, 0)]

    def _save(self) -> None:
        self.persistence.save(
            FAVORITE_USAGE_KEY, [usage_to_document(usage) for usage in self.usages]
        )


def _average_weight(usages: tuple[FavoriteUsageEntry, ...]) -> int:
    total = sum(entry.weight for entry in usages)
    return _round_half_up(total / len(usages))


def _round_half_up(value: float) -> int:
    # Halves round up, so 12.5 becomes 13.
    return int((value + 0.5) // 1)


def usage_to_document(usage: FavoriteUsage) -> dict[str, object]:
    """Serialize a usage record to its persisted shape."""
    return {
        "favName": usage.fav_name,
        "usages": [
            {"weight": entry.weight, "timestamp": entry.timestamp}
            for entry in usage.usages
        ],
        "avgWeight": usage.avg_weight,
    }


def _parse_usage_document(raw: object) -> list[FavoriteUsage]:
    if not isinstance(raw, list):
        raise ValueError("usage document must be a list")
    return [_parse_usage(row) for row in raw]


def _parse_usage(row: dict[str, object]) -> FavoriteUsage:
    entries = tuple(
        FavoriteUsageEntry(
            weight=float(entry["weight"]), timestamp=int(entry["timestamp"])
        )
        for entry in row["usages"]
    )
    return FavoriteUsage(
        fav_name=str(row["favName"]),
        usages=entries,
        avg_weight=int(row.get("avgWeight", 0)),
    )
