"""Row management for the meal being tallied."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID, uuid4
from zoneinfo import ZoneInfo

from carb_counter.domain.density import DensityType
from carb_counter.domain.history import HistoryEntry, HistoryItem
from carb_counter.domain.rows import CarbRow, RowPreset
from carb_counter.services.conversion import (
    coerce_density_type,
    coerce_number,
    compute,
    convert,
)
from carb_counter.services.history import HistoryService

DEFAULT_ITEM_NAME = "Lebensmittel"

_logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class RowService:
    """Owns the session-only list of meal rows.

    Every mutation replaces the row list and recomputes ``carbs`` for the
    rows it touches.
    """

    history_service: HistoryService
    clock: Callable[[], datetime] = _utc_now
    timezone: ZoneInfo | None = None
    rows: list[CarbRow] = field(default_factory=list)

    @property
    def total_carbs(self) -> float:
        """Sum of all current rows' carbs."""
        return sum(row.carbs for row in self.rows)

    def get(self, row_id: UUID | str) -> CarbRow | None:
        """Return the row with the given id, if present."""
        parsed = _parse_uuid(row_id)
        for row in self.rows:
            if row.id == parsed:
                return row
        return None

    def add_row(self, preset: RowPreset | None = None) -> CarbRow:
        """Append a row, empty or pre-filled from a preset."""
        if preset is None:
            row = _build_row(uuid4(), 0.0, DensityType.KH100, 0.0, "")
        else:
            row = _build_row(
                uuid4(),
                _clamp_weight(preset.weight),
                preset.type,
                preset.value,
                preset.name,
            )
        self.rows = [*self.rows, row]
        return row

    def update_row(
        self, row_id: UUID | str, fields: dict[str, object]
    ) -> CarbRow | None:
        """Merge fields into a row and recompute its carbs.

        Unknown ids are ignored. Numeric fields are coerced, unknown density
        types leave the current type in place. A type switch without a new
        value converts the current value and detaches the favorite name.
        """
        row = self.get(row_id)
        if row is None:
            return None
        weight = row.weight
        if "weight" in fields:
            weight = _clamp_weight(coerce_number(fields["weight"]))
        value = coerce_number(fields["value"]) if "value" in fields else row.value
        name = str(fields["name"] or "") if "name" in fields else row.name
        type_ = row.type
        if "type" in fields:
            type_ = coerce_density_type(fields["type"]) or row.type
        if type_ != row.type and "value" not in fields:
            value = convert(row.type, type_, row.value)
            if "name" not in fields:
                name = ""
        return self._replace(row, _build_row(row.id, weight, type_, value, name))

    def change_type(
        self, row_id: UUID | str, new_type: DensityType
    ) -> CarbRow | None:
        """Switch a row's density type, converting its value to keep the factor."""
        row = self.get(row_id)
        if row is None:
            return None
        value = convert(row.type, new_type, row.value)
        return self._replace(row, _build_row(row.id, row.weight, new_type, value, ""))

    def delete_row(self, row_id: UUID | str) -> None:
        """Remove a row; unknown ids are ignored."""
        parsed = _parse_uuid(row_id)
        self.rows = [row for row in self.rows if row.id != parsed]

    def clear_rows(self) -> HistoryEntry | None:
        """Record the meal in history and empty the row list.

        Rows without a positive weight and value are left out of the
        history entry and discarded with the rest.
        """
        if not self.rows:
            return None
        items = tuple(
            HistoryItem(name=row.name or DEFAULT_ITEM_NAME, carbs=row.carbs)
            for row in self.rows
            if row.weight > 0 and row.value > 0
        )
        entry = None
        if items:
            entry = HistoryEntry(
                date=self._format_time(),
                items=items,
                total=sum(item.carbs for item in items),
            )
            self.history_service.append(entry)
            _logger.info(
                "Meal recorded: items=%s total=%.1f", len(items), entry.total
            )
        self.rows = []
        return entry

    def _replace(self, current: CarbRow, updated: CarbRow) -> CarbRow:
        self.rows = [updated if row is current else row for row in self.rows]
        return updated

    def _format_time(self) -> str:
        now = self.clock()
        local = now.astimezone(self.timezone) if self.timezone else now.astimezone()
        return local.strftime("%H:%M")


def _clamp_weight(weight: float) -> float:
    return max(weight, 0.0)


def _build_row(
    row_id: UUID, weight: float, type_: DensityType, value: float, name: str
) -> CarbRow:
    return CarbRow(
        id=row_id,
        weight=weight,
        type=type_,
        value=value,
        name=name,
        carbs=compute(weight, type_, value),
    )


def _parse_uuid(value: object) -> UUID | None:
    if isinstance(value, UUID):
        return value
    if isinstance(value, str):
        try:
            return UUID(value)
        except ValueError:
            return None
    return None
