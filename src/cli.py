#!/usr/bin/env python3
"""Command-line interface for meal validation, exercise alternatives and daily targets."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List

import yaml

from src.config import AppConfig, configure_logging
from src.data_layer.exceptions import ExerciseDBError, USDAApiError
from src.data_layer.models import MealIngredient, MetabolicProfile
from src.ingestion.exercisedb_client import ExerciseDBClient
from src.ingestion.usda_client import USDAClient
from src.nutrition.targets import calculate_all_metrics
from src.nutrition.validator import NutritionValidator
from src.output.formatters import (
    format_alternatives_json,
    format_alternatives_markdown,
    format_meal_nutrition_json_string,
    format_meal_nutrition_markdown,
    format_targets_json,
    format_targets_markdown,
)
from src.scoring.alternatives import AlternativeFinder
from src.scoring.exercise_similarity import ExerciseSimilarityScorer

logger = logging.getLogger(__name__)

EXIT_INPUT_ERROR = 1
EXIT_API_ERROR = 3


def load_document(path: Path) -> Dict[str, Any]:
    """Load a YAML or JSON mapping from *path*."""
    with open(path, "r") as f:
        if path.suffix.lower() == ".json":
            data = json.load(f)
        else:
            data = yaml.safe_load(f)
    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a mapping")
    return data


def parse_ingredients(data: Dict[str, Any]) -> List[MealIngredient]:
    """Build MealIngredient objects from a document's `ingredients` list.

    Raises:
        ValueError: If an entry lacks a name or has a non-positive quantity
    """
    ingredients = []
    for i, item in enumerate(data.get("ingredients") or [], 1):
        try:
            quantity = float(item["quantity"])
            name = str(item["name"])
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Ingredient #{i} is malformed: {item!r}") from e
        if quantity <= 0:
            raise ValueError(f"Ingredient #{i} ({name}) must have a positive quantity")
        ingredients.append(MealIngredient(name=name, quantity=quantity, unit=str(item.get("unit", "g"))))
    return ingredients


def write_output(text: str, output_file: str = None) -> None:
    if output_file:
        Path(output_file).write_text(text)
        print(f"Output saved to {output_file}", file=sys.stderr)
    else:
        print(text)


def cmd_validate_meal(args, config: AppConfig) -> int:
    meal_path = Path(args.meal)
    if not meal_path.exists():
        print(f"Error: Meal file not found: {meal_path}", file=sys.stderr)
        return EXIT_INPUT_ERROR

    try:
        ingredients = parse_ingredients(load_document(meal_path))
    except (ValueError, yaml.YAMLError, json.JSONDecodeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_INPUT_ERROR

    client = USDAClient(api_key=config.usda_api_key, base_url=config.usda_base_url,
                        timeout=config.http_timeout)
    print(f"Validating {len(ingredients)} ingredients...", file=sys.stderr)
    try:
        meal = NutritionValidator(client).validate_meal(ingredients)
    except USDAApiError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_API_ERROR

    if args.output == "json":
        write_output(format_meal_nutrition_json_string(meal, indent=2), args.output_file)
    else:
        write_output(format_meal_nutrition_markdown(meal), args.output_file)
    return 0


def cmd_alternatives(args, config: AppConfig) -> int:
    if args.limit < 1:
        print("Error: --limit must be a positive integer", file=sys.stderr)
        return EXIT_INPUT_ERROR

    client = ExerciseDBClient(base_url=config.exercisedb_base_url, timeout=config.http_timeout)
    finder = AlternativeFinder(
        client,
        scorer=ExerciseSimilarityScorer(config.scoring),
        pool_size=config.alternatives_pool_size,
    )
    try:
        alternatives = finder.alternatives_for_exercise(args.exercise_id, limit=args.limit)
    except ExerciseDBError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_API_ERROR

    if args.output == "json":
        write_output(json.dumps(format_alternatives_json(alternatives), indent=2), args.output_file)
    else:
        write_output(format_alternatives_markdown(args.exercise_id, alternatives), args.output_file)
    return 0


def cmd_targets(args, config: AppConfig) -> int:
    profile_path = Path(args.profile)
    if not profile_path.exists():
        print(f"Error: Profile file not found: {profile_path}", file=sys.stderr)
        return EXIT_INPUT_ERROR

    try:
        data = load_document(profile_path)
        profile = MetabolicProfile(
            weight_kg=float(data["weight_kg"]),
            height_cm=float(data["height_cm"]),
            age=int(data["age"]),
            gender=str(data.get("gender", "other")),
            activity_level=str(data["activity_level"]),
            goal=str(data.get("goal", "general")),
        )
        targets = calculate_all_metrics(profile)
    except (KeyError, ValueError, yaml.YAMLError, json.JSONDecodeError) as e:
        print(f"Error: invalid profile: {e}", file=sys.stderr)
        return EXIT_INPUT_ERROR

    if args.output == "json":
        write_output(json.dumps(format_targets_json(targets), indent=2), args.output_file)
    else:
        write_output(format_targets_markdown(targets), args.output_file)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Validate meals against USDA data, suggest exercise alternatives, compute daily targets"
    )
    parser.add_argument(
        "--config",
        type=str,
        help="Path to settings YAML file (default: config/settings.yaml if present)"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        help="Logging level (default: LOG_LEVEL env var or INFO)"
    )

    output_args = argparse.ArgumentParser(add_help=False)
    output_args.add_argument(
        "--output",
        choices=["markdown", "json"],
        default="markdown",
        help="Output format: markdown (default) or json"
    )
    output_args.add_argument(
        "--output-file",
        type=str,
        help="Optional file path to save output (default: print to stdout)"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    meal_parser = subparsers.add_parser(
        "validate-meal", parents=[output_args],
        help="Validate a meal's ingredients against USDA FoodData Central"
    )
    meal_parser.add_argument("--meal", required=True, help="YAML or JSON file with an `ingredients` list")
    meal_parser.set_defaults(handler=cmd_validate_meal)

    alt_parser = subparsers.add_parser(
        "alternatives", parents=[output_args],
        help="Suggest alternatives for an exercise"
    )
    alt_parser.add_argument("exercise_id", help="ExerciseDB exercise id")
    alt_parser.add_argument("--limit", type=int, default=5, help="Maximum alternatives (default: 5)")
    alt_parser.set_defaults(handler=cmd_alternatives)

    targets_parser = subparsers.add_parser(
        "targets", parents=[output_args],
        help="Compute BMR, TDEE, calorie and macro targets"
    )
    targets_parser.add_argument("--profile", required=True, help="YAML or JSON file with body metrics")
    targets_parser.set_defaults(handler=cmd_targets)

    return parser


def main(argv: List[str] = None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    try:
        config = AppConfig.load(args.config)
    except (OSError, ValueError, TypeError, yaml.YAMLError) as e:
        print(f"Error: invalid configuration: {e}", file=sys.stderr)
        return EXIT_INPUT_ERROR

    configure_logging(args.log_level or config.log_level)
    return args.handler(args, config)


if __name__ == "__main__":
    sys.exit(main())
