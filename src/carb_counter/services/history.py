"""Meal history log."""

from dataclasses import dataclass, field

from carb_counter.domain.history import HistoryEntry, HistoryItem
from carb_counter.services.persistence import HISTORY_KEY, PersistenceService


@dataclass
class HistoryService:
    """Newest-first, capped log of cleared meals."""

    persistence: PersistenceService
    limit: int = 20
    entries: list[HistoryEntry] = field(default_factory=list)

    def load(self) -> None:
        """Replace in-memory history with the persisted document."""
        self.entries = self.persistence.load(
            HISTORY_KEY, [], parse=_parse_history_document
        )

    def append(self, entry: HistoryEntry) -> None:
        """Prepend an entry, keep the newest ``limit`` entries and persist."""
        self.entries = [entry, *self.entries][: self.limit]
        self.persistence.save(
            HISTORY_KEY, [history_entry_to_document(item) for item in self.entries]
        )

    def recent(self, limit: int = 5) -> list[HistoryEntry]:
        """Return the newest entries."""
        return self.entries[: max(limit, 0)]


def history_entry_to_document(entry: HistoryEntry) -> dict[str, object]:
    """Serialize a history entry to its persisted shape."""
    return {
        "date": entry.date,
        "items": [{"name": item.name, "carbs": item.carbs} for item in entry.items],
        "total": entry.total,
    }


def _parse_history_document(raw: object) -> list[HistoryEntry]:
    if not isinstance(raw, list):
        raise ValueError("history document must be a list")
    return [
        HistoryEntry(
            date=str(row["date"]),
            items=tuple(
                HistoryItem(name=str(item["name"]), carbs=float(item["carbs"]))
                for item in row["items"]
            ),
            total=float(row["total"]),
        )
        for row in raw
    ]
