"""ExerciseDB v1 API client (self-hosted, no API key).

Returns Exercise models built from the catalog's camelCase payloads.
Failed requests raise ExerciseDBError; an unknown id raises
ExerciseNotFoundError.
"""

import logging
import os
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, List, Optional, Sequence

import requests

from src.data_layer.exceptions import ExerciseDBError, ExerciseNotFoundError
from src.data_layer.models import Exercise

logger = logging.getLogger(__name__)


class ExerciseDBClient:
    """Client for the ExerciseDB v1 REST API.

    Usage:
        client = ExerciseDBClient.from_env()  # reads EXERCISEDB_API_URL
        pool = client.get_all_exercises(limit=200)
        bench = client.get_exercise_by_id("EIeI8Vf")
    """

    BASE_URL = "https://gym-bro-exercisedb-api-v1.vercel.app/api/v1"
    DEFAULT_TIMEOUT = 10

    def __init__(self, base_url: Optional[str] = None, timeout: float = DEFAULT_TIMEOUT):
        self.base_url = (base_url or self.BASE_URL).rstrip("/")
        self.timeout = timeout

    @classmethod
    def from_env(cls, env_var: str = "EXERCISEDB_API_URL",
                 timeout: float = DEFAULT_TIMEOUT) -> "ExerciseDBClient":
        return cls(base_url=os.environ.get(env_var), timeout=timeout)

    def get_all_exercises(self, limit: int = 10, offset: int = 0) -> List[Exercise]:
        """Get a page of exercises from /exercises."""
        payload = self._make_request("/exercises", {"limit": limit, "offset": offset})
        return self._exercise_list(payload)

    def get_exercise_by_id(self, exercise_id: str) -> Exercise:
        """Get a single exercise.

        Raises:
            ExerciseNotFoundError: If the catalog has no such exercise
            ExerciseDBError: If the request fails
        """
        try:
            payload = self._make_request(f"/exercises/{exercise_id}")
        except ExerciseDBError as e:
            if e.status == 404:
                raise ExerciseNotFoundError(exercise_id) from e
            raise

        # Single exercises come back as an object, not a list
        data = payload.get("data")
        if not data:
            raise ExerciseNotFoundError(exercise_id)
        return Exercise.from_api(data)

    def get_exercises_by_body_part(self, body_part: str, limit: int = 20,
                                   offset: int = 0) -> List[Exercise]:
        payload = self._make_request(
            f"/bodyparts/{body_part}/exercises", {"limit": limit, "offset": offset}
        )
        return self._exercise_list(payload)

    def get_exercises_by_target(self, target: str, limit: int = 20,
                                offset: int = 0) -> List[Exercise]:
        payload = self._make_request(
            f"/muscles/{target}/exercises", {"limit": limit, "offset": offset}
        )
        return self._exercise_list(payload)

    def get_exercises_by_equipment(self, equipment: str, limit: int = 20,
                                   offset: int = 0) -> List[Exercise]:
        payload = self._make_request(
            f"/equipments/{equipment}/exercises", {"limit": limit, "offset": offset}
        )
        return self._exercise_list(payload)

    def search_exercises_by_name(self, name: str) -> List[Exercise]:
        payload = self._make_request("/exercises/search", {"name": name})
        return self._exercise_list(payload)

    def get_exercise_with_retry(self, exercise_id: str, max_retries: int = 3) -> Exercise:
        """Get an exercise, retrying with exponential backoff (2**attempt seconds).

        The last error is re-raised once retries are exhausted.
        """
        for attempt in range(1, max_retries + 1):
            try:
                return self.get_exercise_by_id(exercise_id)
            except ExerciseDBError as e:
                if attempt == max_retries:
                    raise
                delay = 2 ** attempt
                logger.warning(
                    "Fetching exercise %s failed (attempt %d/%d): %s; retrying in %ds",
                    exercise_id, attempt, max_retries, e, delay,
                )
                time.sleep(delay)
        raise ExerciseDBError("Max retries exceeded")

    def get_exercises_by_ids(self, exercise_ids: Sequence[str]) -> List[Exercise]:
        """Fetch several exercises concurrently; failed fetches are dropped."""
        if not exercise_ids:
            return []

        def fetch(exercise_id: str) -> Optional[Exercise]:
            try:
                return self.get_exercise_by_id(exercise_id)
            except ExerciseDBError as e:
                logger.warning("Skipping exercise %s: %s", exercise_id, e)
                return None

        with ThreadPoolExecutor(max_workers=len(exercise_ids)) as executor:
            exercises = list(executor.map(fetch, exercise_ids))
        return [ex for ex in exercises if ex is not None]

    @staticmethod
    def _exercise_list(payload: Dict[str, Any]) -> List[Exercise]:
        return [Exercise.from_api(item) for item in payload.get("data") or []]

    def _make_request(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Make a GET request against the catalog.

        Raises:
            ExerciseDBError: If API request fails
        """
        url = f"{self.base_url}{path}"
        logger.debug("ExerciseDB request %s params=%s", path, params)

        try:
            response = requests.get(url, params=params, timeout=self.timeout)
        except requests.exceptions.Timeout as e:
            raise ExerciseDBError("ExerciseDB request timed out") from e
        except requests.exceptions.ConnectionError as e:
            raise ExerciseDBError("Failed to connect to ExerciseDB") from e
        except requests.exceptions.RequestException as e:
            raise ExerciseDBError(f"Request failed: {e}") from e

        if not response.ok:
            raise ExerciseDBError(
                f"ExerciseDB API error: {response.reason or response.status_code}",
                status=response.status_code,
            )

        return response.json()
