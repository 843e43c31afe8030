"""Application configuration from environment variables and optional YAML."""
import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from src.scoring.exercise_similarity import ScoringWeights

DEFAULT_CONFIG_PATH = "config/settings.yaml"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# Environment variable -> AppConfig field
ENV_VARS = {
    "USDA_API_KEY": "usda_api_key",
    "USDA_API_BASE_URL": "usda_base_url",
    "EXERCISEDB_API_URL": "exercisedb_base_url",
    "NUTRITION_HTTP_TIMEOUT": "http_timeout",
    "LOG_LEVEL": "log_level",
}


@dataclass
class AppConfig:
    """Runtime settings shared by the CLI and the HTTP server."""

    usda_api_key: Optional[str] = None
    usda_base_url: Optional[str] = None
    exercisedb_base_url: Optional[str] = None
    http_timeout: float = 10.0
    log_level: str = "INFO"
    alternatives_pool_size: int = 200
    scoring: ScoringWeights = field(default_factory=ScoringWeights)

    @classmethod
    def load(cls, path: Optional[str] = None) -> "AppConfig":
        """Load settings from YAML (if present), then apply env overrides.

        Args:
            path: YAML file path; defaults to config/settings.yaml when it exists

        Raises:
            FileNotFoundError: If an explicit *path* does not exist
            ValueError: If a value cannot be converted
        """
        data: Dict[str, Any] = {}
        yaml_path = Path(path or DEFAULT_CONFIG_PATH)
        if path or yaml_path.exists():
            with open(yaml_path, "r") as f:
                data = yaml.safe_load(f) or {}

        for env_var, key in ENV_VARS.items():
            value = os.environ.get(env_var)
            if value:
                data[key] = value

        scoring_data = data.pop("scoring", None) or {}
        known = {f.name for f in fields(cls)} - {"scoring"}
        kwargs = {key: value for key, value in data.items() if key in known}

        if "http_timeout" in kwargs:
            kwargs["http_timeout"] = float(kwargs["http_timeout"])
        if "alternatives_pool_size" in kwargs:
            kwargs["alternatives_pool_size"] = int(kwargs["alternatives_pool_size"])

        scoring = ScoringWeights(**{k: float(v) for k, v in scoring_data.items()})
        return cls(scoring=scoring, **kwargs)


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging with the application format."""
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)
