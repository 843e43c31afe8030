"""Unit conversion, per-100g scaling and macro aggregation."""
import logging
from typing import Dict, Iterable

from src.data_layer.models import MacroNutrients

logger = logging.getLogger(__name__)


# Mass units only. Unrecognized units pass through as grams.
UNIT_TO_GRAMS: Dict[str, float] = {
    "g": 1.0,
    "gram": 1.0,
    "grams": 1.0,
    "kg": 1000.0,
    "kilogram": 1000.0,
    "kilograms": 1000.0,
    "mg": 0.001,
    "milligram": 0.001,
    "milligrams": 0.001,
    "oz": 28.3495,
    "ounce": 28.3495,
    "ounces": 28.3495,
    "lb": 453.592,
    "lbs": 453.592,
    "pound": 453.592,
    "pounds": 453.592,
}


def to_grams(quantity: float, unit: str) -> float:
    """Convert a quantity in *unit* to grams.

    Args:
        quantity: Amount in the given unit
        unit: Unit name (case and surrounding whitespace ignored)

    Returns:
        Weight in grams. Unrecognized units return *quantity* unchanged.
    """
    key = (unit or "").strip().lower()
    factor = UNIT_TO_GRAMS.get(key)
    if factor is None:
        logger.debug("Unrecognized unit %r, treating quantity as grams", unit)
        return quantity
    return quantity * factor


def scale_per_100g(macros: MacroNutrients, grams: float) -> MacroNutrients:
    """Scale per-100g nutrient values to *grams*."""
    factor = grams / 100
    return MacroNutrients(
        calories=macros.calories * factor,
        protein=macros.protein * factor,
        carbs=macros.carbs * factor,
        fat=macros.fat * factor,
        fiber=(macros.fiber or 0.0) * factor,
    )


def sum_macros(items: Iterable[MacroNutrients]) -> MacroNutrients:
    """Sum macros elementwise; None values count as 0."""
    total = MacroNutrients()
    for m in items:
        total.calories += m.calories or 0.0
        total.protein += m.protein or 0.0
        total.carbs += m.carbs or 0.0
        total.fat += m.fat or 0.0
        total.fiber += m.fiber or 0.0
    return total
