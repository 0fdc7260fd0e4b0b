"""Carbohydrate arithmetic for the three density conventions."""

import math

from carb_counter.domain.density import DensityType

_CONVERT_PRECISION = 3


def density_factor(type_: DensityType, value: float) -> float:
    """Return grams of carbohydrate per gram of food.

    A ``TEILER`` of zero means "no carbs" and yields a factor of zero.
    """
    if type_ == DensityType.KH100:
        return value / 100
    if type_ == DensityType.FAKTOR:
        return value
    if type_ == DensityType.TEILER and value != 0:
        return 1 / value
    return 0.0


def compute(weight: float, type_: DensityType, value: float) -> float:
    """Return carbohydrate grams for a portion. No rounding is applied."""
    return weight * density_factor(type_, value)


def convert(old_type: DensityType, new_type: DensityType, value: float) -> float:
    """Re-express a density value under another type, keeping the factor."""
    factor = density_factor(old_type, value)
    if old_type == new_type or value == 0:
        return value
    if factor == 0:
        return 0.0
    if new_type == DensityType.KH100:
        converted = factor * 100
    elif new_type == DensityType.FAKTOR:
        converted = factor
    else:
        converted = 1 / factor
    return round(converted, _CONVERT_PRECISION)


def coerce_number(raw: object) -> float:
    """Coerce UI input to a float, mapping anything unparsable to zero."""
    if isinstance(raw, bool):
        return 0.0
    if isinstance(raw, int | float):
        number = float(raw)
    elif isinstance(raw, str):
        cleaned = raw.strip().replace(",", ".")
        try:
            number = float(cleaned)
        except ValueError:
            return 0.0
    else:
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


def coerce_density_type(raw: object) -> DensityType | None:
    """Return the density type named by ``raw`` or None if unknown."""
    if isinstance(raw, DensityType):
        return raw
    if isinstance(raw, str):
        try:
            return DensityType(raw.strip().upper())
        except ValueError:
            return None
    return None


def density_label(type_: DensityType, value: float, *, long: bool = False) -> str:
    """Format a density for display, e.g. ``50g/100g``, ``x0.2`` or ``/12``."""
    shown = _format_value(value)
    if type_ == DensityType.KH100:
        return f"{shown}g/100g"
    if type_ == DensityType.FAKTOR:
        return f"Faktor x{shown}" if long else f"x{shown}"
    return f"Teiler /{shown}" if long else f"/{shown}"


def _format_value(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))
