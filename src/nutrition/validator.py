"""Ingredient and meal validation against USDA FoodData Central.

Each ingredient is searched by name, the closest description (token-set
Jaccard) is taken as the match, and its per-100g macros are scaled to the
ingredient's quantity. A meal is validated by fanning out one lookup per
ingredient and summing the results once all of them have returned.

Soft failures (empty name, no matches) come back as unverified,
low-confidence results. Request failures raise USDAApiError and abort the
whole meal.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence

from src.data_layer.models import (
    Confidence,
    IngredientNutrition,
    MealIngredient,
    MealNutrition,
    ValidationResult,
)
from src.ingestion.usda_client import TRUSTED_DATA_TYPES, USDAClient, extract_macros
from src.nutrition.calculator import scale_per_100g, sum_macros, to_grams
from src.nutrition.matching import confidence_for_score, rank_matches

logger = logging.getLogger(__name__)

SEARCH_PAGE_SIZE = 10


class NutritionValidator:
    """Validates ingredients and meals using a USDAClient."""

    def __init__(self, client: USDAClient):
        self.client = client

    def validate_ingredient(self, ingredient: MealIngredient) -> ValidationResult:
        """Match one ingredient and scale its nutrition to the given quantity.

        Args:
            ingredient: Ingredient name, quantity and unit

        Returns:
            ValidationResult; unverified/low when the name is empty or
            the search finds nothing

        Raises:
            USDAApiError: If the search request fails
        """
        query = (ingredient.name or "").strip()
        if not query:
            return ValidationResult.unverified()

        response = self.client.search_foods(
            query,
            data_types=TRUSTED_DATA_TYPES,
            page_size=SEARCH_PAGE_SIZE,
            page_number=1,
        )
        foods = response.get("foods") or []
        if not foods:
            logger.info("No USDA match for %r", query)
            return ValidationResult.unverified()

        best_food, best_score = rank_matches(query, foods)[0]
        confidence = confidence_for_score(best_score)

        grams = to_grams(ingredient.quantity, ingredient.unit)
        scaled = scale_per_100g(extract_macros(best_food), grams)

        logger.debug(
            "Matched %r to %r (score=%.3f, confidence=%s)",
            query, best_food.get("description"), best_score, confidence.value,
        )

        return ValidationResult(
            verified=confidence is not Confidence.LOW,
            confidence=confidence,
            fdc_id=best_food.get("fdcId"),
            actual_calories=scaled.calories,
            actual_protein=scaled.protein,
            actual_carbs=scaled.carbs,
            actual_fat=scaled.fat,
            fiber=scaled.fiber,
            matched_name=best_food.get("description"),
        )

    def validate_meal(self, ingredients: Sequence[MealIngredient]) -> MealNutrition:
        """Validate every ingredient concurrently and total the results.

        All lookups are joined before aggregation. If any lookup raises,
        the error propagates and no totals are produced.

        Args:
            ingredients: Ingredient lines of the meal

        Returns:
            MealNutrition with totals and the breakdown in input order
        """
        ingredients = list(ingredients)
        results: List[ValidationResult] = []
        if ingredients:
            with ThreadPoolExecutor(max_workers=len(ingredients)) as executor:
                # map() yields in submission order and re-raises worker errors
                results = list(executor.map(self.validate_ingredient, ingredients))

        totals = sum_macros(result.macros() for result in results)

        return MealNutrition(
            total_calories=totals.calories,
            total_protein=totals.protein,
            total_carbs=totals.carbs,
            total_fat=totals.fat,
            total_fiber=totals.fiber,
            ingredients=[
                IngredientNutrition(name=ing.name, nutrition=result)
                for ing, result in zip(ingredients, results)
            ],
        )


def validate_ingredient(ingredient: MealIngredient,
                        client: Optional[USDAClient] = None) -> ValidationResult:
    """Validate one ingredient (client defaults to USDAClient.from_env())."""
    return NutritionValidator(client or USDAClient.from_env()).validate_ingredient(ingredient)


def validate_meal(ingredients: Sequence[MealIngredient],
                  client: Optional[USDAClient] = None) -> MealNutrition:
    """Validate a meal (client defaults to USDAClient.from_env())."""
    return NutritionValidator(client or USDAClient.from_env()).validate_meal(ingredients)
