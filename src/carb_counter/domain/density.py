"""Carbohydrate density expressions."""

from enum import Enum


class DensityType(str, Enum):
    """The three nutrition-label conventions for carb density."""

    KH100 = "KH100"
    FAKTOR = "FAKTOR"
    TEILER = "TEILER"
