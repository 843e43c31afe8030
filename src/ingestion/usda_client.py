"""USDA FoodData Central API client for food search.

API Reference: https://fdc.nal.usda.gov/api-guide.html

DESIGN DECISIONS:
- Searches are restricted to curated datasets (Foundation, SR Legacy) by default
- Raw search payload returned as-is; macro extraction is a separate step
- Missing credentials and failed requests raise (no silent fallbacks)
"""

import logging
import os
from enum import Enum
from typing import Any, Dict, Optional, Sequence

import requests

from src.data_layer.exceptions import USDAApiError, USDAMissingKeyError
from src.data_layer.models import MacroNutrients

logger = logging.getLogger(__name__)


class DataType(Enum):
    """USDA food data types."""
    FOUNDATION = "Foundation"
    SR_LEGACY = "SR Legacy"
    SURVEY = "Survey (FNDDS)"
    BRANDED = "Branded"


# Laboratory-analyzed reference data, no user-submitted brand data
TRUSTED_DATA_TYPES = (DataType.FOUNDATION, DataType.SR_LEGACY)

# Nutrient IDs from the USDA database
NUTRIENT_IDS: Dict[str, int] = {
    "calories": 1008,  # Energy, kcal
    "protein": 1003,   # g
    "fat": 1004,       # Total lipid, g
    "carbs": 1005,     # Carbohydrate, by difference, g
    "fiber": 1079,     # Fiber, total dietary, g
}


def extract_macros(food: Dict[str, Any]) -> MacroNutrients:
    """Extract per-100g macros from a search result's nutrient list.

    Args:
        food: Food item from a search response

    Returns:
        MacroNutrients; nutrients absent from the list are 0
    """
    values: Dict[int, float] = {}
    for nutrient in food.get("foodNutrients") or []:
        nutrient_id = nutrient.get("nutrientId")
        if nutrient_id is not None and nutrient_id not in values:
            values[nutrient_id] = nutrient.get("value") or 0.0

    return MacroNutrients(**{
        name: float(values.get(nutrient_id, 0.0))
        for name, nutrient_id in NUTRIENT_IDS.items()
    })


class USDAClient:
    """Client for USDA FoodData Central API.

    Usage:
        client = USDAClient(api_key="your_key")
        # or
        client = USDAClient.from_env()  # reads USDA_API_KEY env var

        response = client.search_foods("chicken breast", page_size=10)
        for food in response.get("foods", []):
            print(food["fdcId"], food["description"])
    """

    BASE_URL = "https://api.nal.usda.gov/fdc"
    DEFAULT_TIMEOUT = 10

    def __init__(self, api_key: Optional[str], base_url: Optional[str] = None,
                 timeout: float = DEFAULT_TIMEOUT):
        """Initialize USDA client.

        A missing key is accepted here; searches raise USDAMissingKeyError
        so callers see a clear error on request.

        Args:
            api_key: USDA FoodData Central API key
            base_url: API root (default: https://api.nal.usda.gov/fdc)
            timeout: Request timeout in seconds
        """
        self.api_key = api_key.strip() if api_key else ""
        self.base_url = (base_url or self.BASE_URL).rstrip("/")
        self.timeout = timeout
        if not self.api_key:
            logger.warning("USDA API key is not set. Set USDA_API_KEY to enable nutrition lookups")

    @classmethod
    def from_env(cls, env_var: str = "USDA_API_KEY", timeout: float = DEFAULT_TIMEOUT) -> "USDAClient":
        """Create client from environment variables.

        Reads the key from *env_var* and the API root from USDA_API_BASE_URL.
        """
        return cls(
            api_key=os.environ.get(env_var),
            base_url=os.environ.get("USDA_API_BASE_URL"),
            timeout=timeout,
        )

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key)

    def search_foods(
        self,
        query: str,
        data_types: Sequence[DataType] = TRUSTED_DATA_TYPES,
        page_size: int = 25,
        page_number: int = 1,
    ) -> Dict[str, Any]:
        """Search foods by free-text name.

        Args:
            query: Search text
            data_types: Datasets to search (default: Foundation, SR Legacy)
            page_size: Results per page
            page_number: 1-based page index

        Returns:
            Parsed JSON response ({"foods": [...], "totalHits": ...})

        Raises:
            USDAMissingKeyError: If no API key is configured
            USDAApiError: If the request fails or returns a non-2xx status
        """
        if not self.api_key:
            raise USDAMissingKeyError()

        params = {
            "api_key": self.api_key,
            "query": query,
            "dataType": ",".join(dt.value for dt in data_types),
            "pageNumber": page_number,
            "pageSize": page_size,
        }
        return self._make_request("/v1/foods/search", params)

    def _make_request(self, path: str, params: Dict[str, Any]) -> Dict[str, Any]:
        """Make a GET request against the API.

        Raises:
            USDAApiError: If API request fails
        """
        url = f"{self.base_url}{path}"
        logger.debug("USDA request %s query=%r", path, params.get("query"))

        try:
            response = requests.get(url, params=params, timeout=self.timeout)
        except requests.exceptions.Timeout as e:
            raise USDAApiError("USDA API request timed out") from e
        except requests.exceptions.ConnectionError as e:
            raise USDAApiError("Failed to connect to USDA API") from e
        except requests.exceptions.RequestException as e:
            raise USDAApiError(f"Request failed: {e}") from e

        if response.status_code == 429:
            raise USDAApiError(
                "Too many requests. Please wait before trying again.",
                status=429,
            )

        if not response.ok:
            text = response.text or ""
            raise USDAApiError(
                text or f"USDA request failed with {response.status_code}",
                status=response.status_code,
            )

        return response.json()
