"""Ingestion layer: clients for the external food and exercise catalogs."""

from src.ingestion.usda_client import (
    USDAClient,
    DataType,
    NUTRIENT_IDS,
    TRUSTED_DATA_TYPES,
    extract_macros,
)

from src.ingestion.exercisedb_client import ExerciseDBClient

__all__ = [
    # USDA API client
    "USDAClient",
    "DataType",
    "NUTRIENT_IDS",
    "TRUSTED_DATA_TYPES",
    "extract_macros",
    # Exercise catalog client
    "ExerciseDBClient",
]
