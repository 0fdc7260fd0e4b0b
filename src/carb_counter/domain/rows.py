"""Domain models for the current meal."""

from dataclasses import dataclass
from uuid import UUID

from carb_counter.domain.density import DensityType


@dataclass(frozen=True)
class RowPreset:
    """Values used to pre-fill a new row (from a favorite or quick add)."""

    name: str
    weight: float
    type: DensityType
    value: float


@dataclass(frozen=True)
class CarbRow:
    """One line item of the meal being tallied.

    ``carbs`` is derived from ``weight``, ``type`` and ``value``; rows are
    only built and updated through ``RowService`` which recomputes it.
    """

    id: UUID
    weight: float
    type: DensityType
    value: float
    name: str
    carbs: float
