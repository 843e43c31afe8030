"""Daily energy and macro targets from body metrics.

BMR uses the Mifflin-St Jeor equation:
    BMR = 10 * weight_kg + 6.25 * height_cm - 5 * age + s
with s = +5 (male), -161 (female), -78 otherwise.
"""
import math
from typing import Dict, Tuple

from src.data_layer.models import DailyTargets, MacroBreakdown, MetabolicProfile


ACTIVITY_MULTIPLIERS: Dict[str, float] = {
    "sedentary": 1.2,            # little to no exercise
    "lightly-active": 1.375,     # 1-3 days/week
    "moderately-active": 1.55,   # 3-5 days/week
    "very-active": 1.725,        # 6-7 days/week
    "extremely-active": 1.9,     # athlete/physical job
}

GOAL_CALORIE_ADJUSTMENTS: Dict[str, int] = {
    "weight-loss": -500,
    "muscle-gain": 300,
    "maintenance": 0,
    "athletic": 200,
    "general": 0,
}

# (protein, fat, carbs) shares of target calories
GOAL_MACRO_RATIOS: Dict[str, Tuple[float, float, float]] = {
    "weight-loss": (0.35, 0.30, 0.35),
    "muscle-gain": (0.30, 0.25, 0.45),
    "athletic": (0.25, 0.25, 0.50),
    "maintenance": (0.30, 0.30, 0.40),
    "general": (0.30, 0.30, 0.40),
}

KCAL_PER_GRAM_PROTEIN = 4
KCAL_PER_GRAM_CARBS = 4
KCAL_PER_GRAM_FAT = 9


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 always going up."""
    return int(math.floor(value + 0.5))


def calculate_bmr(weight_kg: float, height_cm: float, age: int, gender: str) -> int:
    """Basal metabolic rate in kcal/day."""
    base = 10 * weight_kg + 6.25 * height_cm - 5 * age
    if gender == "male":
        return round_half_up(base + 5)
    if gender == "female":
        return round_half_up(base - 161)
    return round_half_up(base - 78)


def calculate_tdee(bmr: float, activity_level: str) -> int:
    """Total daily energy expenditure in kcal/day.

    Raises:
        ValueError: If activity_level is unknown
    """
    if activity_level not in ACTIVITY_MULTIPLIERS:
        raise ValueError(f"Unknown activity level: {activity_level}")
    return round_half_up(bmr * ACTIVITY_MULTIPLIERS[activity_level])


def calculate_target_calories(tdee: float, goal: str) -> int:
    """Daily calorie target for *goal*.

    Raises:
        ValueError: If goal is unknown
    """
    if goal not in GOAL_CALORIE_ADJUSTMENTS:
        raise ValueError(f"Unknown goal: {goal}")
    return round_half_up(tdee + GOAL_CALORIE_ADJUSTMENTS[goal])


def calculate_macros(target_calories: float, goal: str, weight_kg: float) -> MacroBreakdown:
    """Split target calories into macro grams.

    Protein is raised to at least 1 g per kg of body weight.
    """
    protein_ratio, fat_ratio, carb_ratio = GOAL_MACRO_RATIOS.get(goal, GOAL_MACRO_RATIOS["general"])

    protein = round_half_up(target_calories * protein_ratio / KCAL_PER_GRAM_PROTEIN)
    fat = round_half_up(target_calories * fat_ratio / KCAL_PER_GRAM_FAT)
    carbs = round_half_up(target_calories * carb_ratio / KCAL_PER_GRAM_CARBS)

    return MacroBreakdown(protein=max(protein, round_half_up(weight_kg)), carbs=carbs, fat=fat)


def calculate_all_metrics(profile: MetabolicProfile) -> DailyTargets:
    """Compute BMR, TDEE, calorie target and macros in one pass."""
    bmr = calculate_bmr(profile.weight_kg, profile.height_cm, profile.age, profile.gender)
    tdee = calculate_tdee(bmr, profile.activity_level)
    target_calories = calculate_target_calories(tdee, profile.goal)
    macros = calculate_macros(target_calories, profile.goal, profile.weight_kg)
    return DailyTargets(bmr=bmr, tdee=tdee, target_calories=target_calories, macros=macros)


# Unit conversions

def cm_to_feet_inches(cm: float) -> Tuple[int, int]:
    total_inches = cm / 2.54
    return int(total_inches // 12), round_half_up(total_inches % 12)


def feet_inches_to_cm(feet: int, inches: float) -> int:
    return round_half_up((feet * 12 + inches) * 2.54)


def kg_to_lbs(kg: float) -> int:
    return round_half_up(kg * 2.20462)


def lbs_to_kg(lbs: float) -> int:
    return round_half_up(lbs / 2.20462)


# Range checks

def validate_height(cm: float) -> bool:
    return 120 <= cm <= 250


def validate_weight(kg: float) -> bool:
    return 30 <= kg <= 300


def validate_age(age: int) -> bool:
    return 18 <= age <= 100


def validate_meals_per_day(meals: int) -> bool:
    return 3 <= meals <= 6
