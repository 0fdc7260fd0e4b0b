"""Domain models for the meal history."""

from dataclasses import dataclass


@dataclass(frozen=True)
class HistoryItem:
    """A food recorded in a finished meal."""

    name: str
    carbs: float


@dataclass(frozen=True)
class HistoryEntry:
    """Snapshot of a cleared meal."""

    date: str
    items: tuple[HistoryItem, ...]
    total: float
