"""Formatters for nutrition, alternatives and target output (JSON and Markdown)."""

import json
from typing import Any, Dict, List, Sequence

from src.data_layer.models import (
    DailyTargets,
    Exercise,
    MealNutrition,
    ValidationResult,
)


def format_validation_json(result: ValidationResult) -> Dict[str, Any]:
    """Format a ValidationResult as a JSON-serializable dict.

    Keys mirror the public API (camelCase); unset values are omitted.
    """
    payload: Dict[str, Any] = {
        "verified": result.verified,
        "confidence": result.confidence.value,
    }
    optional = {
        "fdcId": result.fdc_id,
        "actualCalories": result.actual_calories,
        "actualProtein": result.actual_protein,
        "actualCarbs": result.actual_carbs,
        "actualFat": result.actual_fat,
        "fiber": result.fiber,
        "matchedName": result.matched_name,
    }
    payload.update({key: value for key, value in optional.items() if value is not None})
    return payload


def format_meal_nutrition_json(meal: MealNutrition) -> Dict[str, Any]:
    """Format MealNutrition as a JSON-serializable dict."""
    return {
        "totalCalories": meal.total_calories,
        "totalProtein": meal.total_protein,
        "totalCarbs": meal.total_carbs,
        "totalFat": meal.total_fat,
        "totalFiber": meal.total_fiber,
        "ingredients": [
            {"name": item.name, "nutrition": format_validation_json(item.nutrition)}
            for item in meal.ingredients
        ],
    }


def format_meal_nutrition_json_string(meal: MealNutrition, indent: int = 2) -> str:
    return json.dumps(format_meal_nutrition_json(meal), indent=indent)


def format_meal_nutrition_markdown(meal: MealNutrition) -> str:
    """Format MealNutrition as a Markdown report.

    Args:
        meal: Validated meal

    Returns:
        Markdown with a per-ingredient table and a totals section
    """
    lines: List[str] = ["# Meal Nutrition\n"]

    if meal.ingredients:
        lines.append("| Ingredient | USDA match | Confidence | Calories | Protein | Carbs | Fat | Fiber |")
        lines.append("|---|---|---|---|---|---|---|---|")
        for item in meal.ingredients:
            n = item.nutrition
            macros = n.macros()
            badge = "✅" if n.verified else "⚠️"
            lines.append(
                f"| {item.name} | {n.matched_name or '-'} | {badge} {n.confidence.value} "
                f"| {macros.calories:.0f} | {macros.protein:.1f}g | {macros.carbs:.1f}g "
                f"| {macros.fat:.1f}g | {macros.fiber:.1f}g |"
            )
        lines.append("")
    else:
        lines.append("_No ingredients._\n")

    lines.append("## Totals\n")
    lines.append(f"**Calories:** {meal.total_calories:.0f} kcal")
    lines.append(f"**Protein:** {meal.total_protein:.1f}g")
    lines.append(f"**Carbs:** {meal.total_carbs:.1f}g")
    lines.append(f"**Fat:** {meal.total_fat:.1f}g")
    lines.append(f"**Fiber:** {meal.total_fiber:.1f}g")

    return "\n".join(lines)


def format_alternatives_json(alternatives: Sequence[Exercise]) -> Dict[str, Any]:
    return {"alternatives": [exercise.to_dict() for exercise in alternatives]}


def format_alternatives_markdown(exercise_id: str, alternatives: Sequence[Exercise]) -> str:
    """Format alternative exercises as a Markdown list."""
    lines = [f"# Alternatives for {exercise_id}\n"]
    if not alternatives:
        lines.append("No similar exercises found.")
        return "\n".join(lines)

    for i, exercise in enumerate(alternatives, 1):
        muscles = ", ".join(exercise.target_muscles) or "-"
        equipment = ", ".join(exercise.equipments) or "-"
        lines.append(f"{i}. **{exercise.name or exercise.id}** ({exercise.id})")
        lines.append(f"   - Target: {muscles}")
        lines.append(f"   - Equipment: {equipment}")
    return "\n".join(lines)


def format_targets_json(targets: DailyTargets) -> Dict[str, Any]:
    return {
        "bmr": targets.bmr,
        "tdee": targets.tdee,
        "targetCalories": targets.target_calories,
        "macros": {
            "protein": targets.macros.protein,
            "carbs": targets.macros.carbs,
            "fat": targets.macros.fat,
        },
    }


def format_targets_markdown(targets: DailyTargets) -> str:
    lines = [
        "# Daily Targets\n",
        f"**BMR:** {targets.bmr} kcal",
        f"**TDEE:** {targets.tdee} kcal",
        f"**Target:** {targets.target_calories} kcal",
        "",
        "## Macros\n",
        f"- Protein: {targets.macros.protein}g",
        f"- Carbs: {targets.macros.carbs}g",
        f"- Fat: {targets.macros.fat}g",
    ]
    return "\n".join(lines)
