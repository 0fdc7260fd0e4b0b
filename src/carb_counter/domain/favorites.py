"""Domain models for favorites and their usage statistics."""

from dataclasses import dataclass

from carb_counter.domain.density import DensityType


@dataclass(frozen=True)
class Favorite:
    """Named, reusable density preset."""

    name: str
    type: DensityType
    value: float


@dataclass(frozen=True)
class FavoriteUsageEntry:
    """Portion weight recorded for one use of a favorite."""

    weight: float
    timestamp: int


@dataclass(frozen=True)
class FavoriteUsage:
    """Rolling usage window for a favorite name."""

    fav_name: str
    usages: tuple[FavoriteUsageEntry, ...]
    avg_weight: int


@dataclass(frozen=True)
class TopFavorite:
    """Favorite ranked for quick add."""

    favorite: Favorite
    usage_count: int
    avg_weight: int
    avg_carbs: float
