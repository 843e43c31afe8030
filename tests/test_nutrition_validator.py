"""Tests for ingredient and meal validation."""

import threading

import pytest
from unittest.mock import Mock

from src.data_layer.exceptions import USDAApiError, USDAMissingKeyError
from src.data_layer.models import Confidence, MealIngredient, ValidationResult
from src.ingestion.usda_client import DataType, USDAClient
from src.nutrition.validator import NutritionValidator, validate_ingredient, validate_meal


def food(fdc_id, description, calories=0.0, protein=0.0, carbs=0.0, fat=0.0, fiber=0.0):
    return {
        "fdcId": fdc_id,
        "description": description,
        "foodNutrients": [
            {"nutrientId": 1008, "value": calories},
            {"nutrientId": 1003, "value": protein},
            {"nutrientId": 1005, "value": carbs},
            {"nutrientId": 1004, "value": fat},
            {"nutrientId": 1079, "value": fiber},
        ],
    }


CHICKEN = food(171077, "Chicken breast", calories=165, protein=31, fat=3.6)
RICE = food(169756, "Rice, white, cooked", calories=130, protein=2.7, carbs=28, fat=0.3, fiber=0.4)
OLIVE_OIL = food(171413, "Oil, olive, salad or cooking", calories=884, fat=100)

CATALOG = {
    "chicken breast": [food(1, "Chicken, thigh, raw", calories=120), CHICKEN],
    "white rice": [RICE],
    "olive oil": [OLIVE_OIL],
}


@pytest.fixture
def client():
    """USDAClient mock answering from CATALOG."""
    mock = Mock(spec=USDAClient)
    mock.search_foods.side_effect = lambda query, **kwargs: {"foods": CATALOG.get(query, [])}
    return mock


@pytest.fixture
def validator(client):
    return NutritionValidator(client)


class TestValidateIngredient:
    """Tests for NutritionValidator.validate_ingredient."""

    def test_scales_best_match(self, validator):
        result = validator.validate_ingredient(MealIngredient("chicken breast", 150, "g"))

        assert result.fdc_id == 171077
        assert result.matched_name == "Chicken breast"
        assert result.actual_calories == pytest.approx(247.5)
        assert result.actual_protein == pytest.approx(46.5)
        assert result.actual_fat == pytest.approx(5.4)
        assert result.confidence is Confidence.HIGH
        assert result.verified is True

    def test_search_restricted_to_trusted_datasets(self, validator, client):
        validator.validate_ingredient(MealIngredient("chicken breast", 100, "g"))

        client.search_foods.assert_called_once_with(
            "chicken breast",
            data_types=(DataType.FOUNDATION, DataType.SR_LEGACY),
            page_size=10,
            page_number=1,
        )

    def test_name_is_trimmed(self, validator, client):
        validator.validate_ingredient(MealIngredient("  chicken breast ", 100, "g"))
        assert client.search_foods.call_args[0][0] == "chicken breast"

    def test_empty_name_skips_network(self, validator, client):
        result = validator.validate_ingredient(MealIngredient("", 1, "g"))

        assert result == ValidationResult.unverified()
        assert result.verified is False
        assert result.confidence is Confidence.LOW
        client.search_foods.assert_not_called()

    def test_whitespace_name_skips_network(self, validator, client):
        result = validator.validate_ingredient(MealIngredient("   ", 1, "g"))
        assert result.verified is False
        client.search_foods.assert_not_called()

    def test_no_matches_is_unverified(self, validator):
        result = validator.validate_ingredient(MealIngredient("dragonfruit jerky", 50, "g"))

        assert result.verified is False
        assert result.confidence is Confidence.LOW
        assert result.fdc_id is None
        assert result.actual_calories is None

    def test_medium_confidence(self, validator, client):
        # {plain, white, rice} vs {rice, white, cooked} -> 2/4
        client.search_foods.side_effect = lambda query, **kwargs: {"foods": [RICE]}
        result = validator.validate_ingredient(MealIngredient("plain white rice", 100, "g"))

        assert result.confidence is Confidence.MEDIUM
        assert result.verified is True

    def test_low_confidence_match_still_returns_values(self, validator, client):
        """A weak best match keeps its nutrition but is not verified."""
        client.search_foods.side_effect = lambda query, **kwargs: {"foods": [OLIVE_OIL]}
        result = validator.validate_ingredient(MealIngredient("evoo", 10, "g"))

        assert result.confidence is Confidence.LOW
        assert result.verified is False
        assert result.fdc_id == 171413
        assert result.actual_calories == pytest.approx(88.4)

    def test_converts_units(self, validator):
        result = validator.validate_ingredient(MealIngredient("white rice", 1, "kg"))
        assert result.actual_calories == pytest.approx(1300)

    def test_unrecognized_unit_treated_as_grams(self, validator):
        result = validator.validate_ingredient(MealIngredient("white rice", 100, "handful"))
        assert result.actual_calories == pytest.approx(130)

    def test_transport_error_propagates(self, validator, client):
        client.search_foods.side_effect = USDAApiError("boom", status=500)
        with pytest.raises(USDAApiError):
            validator.validate_ingredient(MealIngredient("white rice", 100, "g"))

    def test_missing_key_propagates(self):
        validator = NutritionValidator(USDAClient(api_key=None))
        with pytest.raises(USDAMissingKeyError):
            validator.validate_ingredient(MealIngredient("white rice", 100, "g"))


class TestValidateMeal:
    """Tests for NutritionValidator.validate_meal."""

    def test_empty_meal(self, validator, client):
        meal = validator.validate_meal([])

        assert meal.total_calories == 0
        assert meal.total_protein == 0
        assert meal.total_carbs == 0
        assert meal.total_fat == 0
        assert meal.total_fiber == 0
        assert meal.ingredients == []
        client.search_foods.assert_not_called()

    def test_totals_and_order(self, validator):
        ingredients = [
            MealIngredient("chicken breast", 150, "g"),
            MealIngredient("white rice", 200, "g"),
            MealIngredient("olive oil", 10, "g"),
        ]
        meal = validator.validate_meal(ingredients)

        assert [item.name for item in meal.ingredients] == ["chicken breast", "white rice", "olive oil"]
        assert meal.total_calories == pytest.approx(247.5 + 260 + 88.4)
        assert meal.total_protein == pytest.approx(46.5 + 5.4)
        assert meal.total_carbs == pytest.approx(56)
        assert meal.total_fat == pytest.approx(5.4 + 0.6 + 10)
        assert meal.total_fiber == pytest.approx(0.8)

    def test_unverified_ingredients_count_as_zero(self, validator):
        meal = validator.validate_meal([
            MealIngredient("white rice", 100, "g"),
            MealIngredient("", 100, "g"),
            MealIngredient("unknown thing", 100, "g"),
        ])

        assert meal.total_calories == pytest.approx(130)
        assert len(meal.ingredients) == 3
        assert meal.ingredients[1].nutrition.verified is False

    def test_lookups_run_concurrently(self):
        """All lookups are in flight at once before any completes."""
        ingredients = [MealIngredient(name, 100, "g") for name in CATALOG]
        barrier = threading.Barrier(len(ingredients), timeout=5)

        def search(query, **kwargs):
            barrier.wait()
            return {"foods": CATALOG[query]}

        client = Mock(spec=USDAClient)
        client.search_foods.side_effect = search

        meal = NutritionValidator(client).validate_meal(ingredients)
        assert len(meal.ingredients) == len(ingredients)

    def test_any_failure_fails_whole_meal(self, client):
        def search(query, **kwargs):
            if query == "white rice":
                raise USDAApiError("Service unavailable", status=503)
            return {"foods": CATALOG.get(query, [])}

        client.search_foods.side_effect = search
        with pytest.raises(USDAApiError):
            NutritionValidator(client).validate_meal([
                MealIngredient("chicken breast", 100, "g"),
                MealIngredient("white rice", 100, "g"),
            ])


class TestModuleHelpers:
    def test_helpers_use_given_client(self, client):
        result = validate_ingredient(MealIngredient("white rice", 100, "g"), client=client)
        assert result.fdc_id == 169756

        meal = validate_meal([MealIngredient("white rice", 100, "g")], client=client)
        assert meal.total_calories == pytest.approx(130)
