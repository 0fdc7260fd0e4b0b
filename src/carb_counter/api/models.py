"""Pydantic models for API request payloads."""

from pydantic import BaseModel, ConfigDict, Field


class _Payload(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class RowPresetPayload(_Payload):
    """Optional preset for a new row."""

    name: str = ""
    weight: float | str | None = None
    type: str | None = None
    value: float | str | None = None


class RowUpdatePayload(_Payload):
    """Partial row fields; only the fields present are merged."""

    weight: float | str | None = None
    type: str | None = None
    value: float | str | None = None
    name: str | None = None


class RowTypePayload(_Payload):
    """New density type for an in-place switch."""

    type: str


class ApplyFavoritePayload(_Payload):
    """Favorite position to load into a row."""

    index: int


class SaveFavoritePayload(_Payload):
    """Name under which a row is saved as a favorite."""

    name: str


class FavoritePayload(_Payload):
    """Favorite preset."""

    name: str = Field(min_length=1)
    type: str
    value: float | str | None = None


class UsagePayload(_Payload):
    """A committed portion weight for a favorite name."""

    name: str = Field(alias="favName")
    weight: float | str | None = None


class QuickAddPayload(_Payload):
    """Top favorite chosen from the quick-add list."""

    name: str
    weight: float | str | None = None
    type: str
    value: float | str | None = None
