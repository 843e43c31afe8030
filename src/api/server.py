"""FastAPI server for exercise alternatives, nutrition validation and daily targets."""

import logging
from functools import lru_cache
from typing import Any, Dict, List

import uvicorn
from fastapi import Depends, FastAPI, HTTPException, Query, Response
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from src.config import AppConfig, configure_logging
from src.data_layer.exceptions import (
    ExerciseDBError,
    ExerciseNotFoundError,
    USDAApiError,
    USDAMissingKeyError,
)
from src.data_layer.models import MealIngredient, MetabolicProfile
from src.ingestion.exercisedb_client import ExerciseDBClient
from src.ingestion.usda_client import USDAClient
from src.nutrition.targets import (
    calculate_all_metrics,
    validate_age,
    validate_height,
    validate_weight,
)
from src.nutrition.validator import NutritionValidator
from src.output.formatters import (
    format_alternatives_json,
    format_meal_nutrition_json,
    format_targets_json,
    format_validation_json,
)
from src.scoring.alternatives import AlternativeFinder
from src.scoring.exercise_similarity import ExerciseSimilarityScorer

logger = logging.getLogger(__name__)

CACHE_CONTROL = "public, s-maxage=3600, stale-while-revalidate=86400"

app = FastAPI(title="Fitness Nutrition API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Local development
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class IngredientRequest(BaseModel):
    name: str
    quantity: float = Field(gt=0)
    unit: str = "g"


class MealRequest(BaseModel):
    ingredients: List[IngredientRequest] = Field(default_factory=list)


class MetricsRequest(BaseModel):
    weight_kg: float
    height_cm: float
    age: int
    gender: str
    activity_level: str
    goal: str


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    return AppConfig.load()


@lru_cache(maxsize=1)
def get_usda_client() -> USDAClient:
    config = get_config()
    return USDAClient(
        api_key=config.usda_api_key,
        base_url=config.usda_base_url,
        timeout=config.http_timeout,
    )


@lru_cache(maxsize=1)
def get_exercise_client() -> ExerciseDBClient:
    config = get_config()
    return ExerciseDBClient(base_url=config.exercisedb_base_url, timeout=config.http_timeout)


def get_alternative_finder(
    client: ExerciseDBClient = Depends(get_exercise_client),
) -> AlternativeFinder:
    config = get_config()
    return AlternativeFinder(
        client,
        scorer=ExerciseSimilarityScorer(config.scoring),
        pool_size=config.alternatives_pool_size,
    )


def _to_ingredient(request: IngredientRequest) -> MealIngredient:
    return MealIngredient(name=request.name, quantity=request.quantity, unit=request.unit)


def _usda_http_error(exc: USDAApiError) -> HTTPException:
    if isinstance(exc, USDAMissingKeyError):
        return HTTPException(status_code=503, detail=exc.message)
    return HTTPException(status_code=502, detail=f"USDA request failed: {exc.message}")


@app.get("/api/exercises/{exercise_id}")
def get_exercise(
    exercise_id: str,
    response: Response,
    client: ExerciseDBClient = Depends(get_exercise_client),
) -> Dict[str, Any]:
    try:
        exercise = client.get_exercise_by_id(exercise_id)
    except ExerciseNotFoundError as exc:
        raise HTTPException(status_code=404, detail=exc.message) from exc
    except ExerciseDBError as exc:
        logger.error("Error fetching exercise %s: %s", exercise_id, exc)
        raise HTTPException(status_code=502, detail="Failed to fetch exercise data") from exc

    response.headers["Cache-Control"] = CACHE_CONTROL
    return exercise.to_dict()


@app.get("/api/exercises/{exercise_id}/alternatives")
def get_alternatives(
    exercise_id: str,
    response: Response,
    limit: int = Query(5, ge=1, le=50),
    finder: AlternativeFinder = Depends(get_alternative_finder),
) -> Dict[str, Any]:
    try:
        alternatives = finder.alternatives_for_exercise(exercise_id, limit=limit)
    except ExerciseDBError as exc:
        logger.error("Error fetching alternative exercises for %s: %s", exercise_id, exc)
        raise HTTPException(status_code=500, detail="Failed to fetch alternative exercises") from exc

    response.headers["Cache-Control"] = CACHE_CONTROL
    return format_alternatives_json(alternatives)


@app.post("/api/nutrition/validate-ingredient")
def validate_ingredient(
    request: IngredientRequest,
    client: USDAClient = Depends(get_usda_client),
) -> Dict[str, Any]:
    try:
        result = NutritionValidator(client).validate_ingredient(_to_ingredient(request))
    except USDAApiError as exc:
        logger.error("Ingredient validation failed for %r: %s", request.name, exc)
        raise _usda_http_error(exc) from exc
    return format_validation_json(result)


@app.post("/api/nutrition/validate-meal")
def validate_meal(
    request: MealRequest,
    client: USDAClient = Depends(get_usda_client),
) -> Dict[str, Any]:
    try:
        meal = NutritionValidator(client).validate_meal(
            [_to_ingredient(ing) for ing in request.ingredients]
        )
    except USDAApiError as exc:
        logger.error("Meal validation failed: %s", exc)
        raise _usda_http_error(exc) from exc
    return format_meal_nutrition_json(meal)


@app.post("/api/metrics")
def calculate_metrics(request: MetricsRequest) -> Dict[str, Any]:
    if not validate_weight(request.weight_kg):
        raise HTTPException(status_code=400, detail="Weight must be between 30 and 300 kg")
    if not validate_height(request.height_cm):
        raise HTTPException(status_code=400, detail="Height must be between 120 and 250 cm")
    if not validate_age(request.age):
        raise HTTPException(status_code=400, detail="Age must be between 18 and 100")

    try:
        targets = calculate_all_metrics(MetabolicProfile(**request.model_dump()))
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return format_targets_json(targets)


if __name__ == "__main__":
    configure_logging(get_config().log_level)
    uvicorn.run(app, host="0.0.0.0", port=8000)
