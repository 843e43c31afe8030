"""Custom exceptions for external catalog access."""
from typing import Optional


class USDAApiError(Exception):
    """Raised when the USDA FoodData Central request fails.

    Attributes:
        error_code: Machine-readable error code
        message: Human-readable error message
        status: HTTP status code, if a response was received
    """

    error_code = "API_ERROR"

    def __init__(self, message: str, status: Optional[int] = None):
        self.message = message
        self.status = status
        super().__init__(f"{self.error_code}: {message}")


class USDAMissingKeyError(USDAApiError):
    """Raised when no USDA API key is configured."""

    error_code = "MISSING_API_KEY"

    def __init__(self, message: str = "USDA API key missing. Set the USDA_API_KEY environment variable."):
        super().__init__(message)


class ExerciseDBError(Exception):
    """Raised when the exercise catalog request fails."""

    error_code = "API_ERROR"

    def __init__(self, message: str, status: Optional[int] = None):
        self.message = message
        self.status = status
        super().__init__(f"{self.error_code}: {message}")


class ExerciseNotFoundError(ExerciseDBError):
    """Raised when an exercise id is unknown to the catalog."""

    error_code = "NOT_FOUND"

    def __init__(self, exercise_id: str):
        """Initialize exception with exercise id.

        Args:
            exercise_id: Identifier that was not found
        """
        self.exercise_id = exercise_id
        super().__init__(f"Exercise '{exercise_id}' not found", status=404)
