"""Output formatting for nutrition, alternatives and targets."""

from src.output.formatters import (
    format_alternatives_json,
    format_alternatives_markdown,
    format_meal_nutrition_json,
    format_meal_nutrition_json_string,
    format_meal_nutrition_markdown,
    format_targets_json,
    format_targets_markdown,
    format_validation_json,
)

__all__ = [
    "format_alternatives_json",
    "format_alternatives_markdown",
    "format_meal_nutrition_json",
    "format_meal_nutrition_json_string",
    "format_meal_nutrition_markdown",
    "format_targets_json",
    "format_targets_markdown",
    "format_validation_json",
]
