"""Data models for the fitness and nutrition core."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


@dataclass
class Exercise:
    """Represents an exercise from the external exercise catalog."""

    id: str  # Catalog identifier (e.g., "VPPtusI")
    name: str = ""
    target_muscles: List[str] = field(default_factory=list)  # e.g., ["upper back"]
    body_parts: List[str] = field(default_factory=list)  # e.g., ["back"]
    equipments: List[str] = field(default_factory=list)  # e.g., ["body weight"]
    secondary_muscles: List[str] = field(default_factory=list)
    instructions: List[str] = field(default_factory=list)
    gif_url: str = ""

    @classmethod
    def from_api(cls, payload: Dict[str, Any]) -> "Exercise":
        """Build an Exercise from an ExerciseDB JSON object.

        Args:
            payload: Raw exercise dict with camelCase keys

        Returns:
            Exercise instance
        """
        return cls(
            id=str(payload.get("exerciseId", "")),
            name=payload.get("name", "") or "",
            target_muscles=list(payload.get("targetMuscles") or []),
            body_parts=list(payload.get("bodyParts") or []),
            equipments=list(payload.get("equipments") or []),
            secondary_muscles=list(payload.get("secondaryMuscles") or []),
            instructions=list(payload.get("instructions") or []),
            gif_url=payload.get("gifUrl", "") or "",
        )

    def to_dict(self) -> Dict[str, Any]:
        """Return the camelCase shape used by the catalog and the HTTP API."""
        return {
            "exerciseId": self.id,
            "name": self.name,
            "gifUrl": self.gif_url,
            "targetMuscles": list(self.target_muscles),
            "bodyParts": list(self.body_parts),
            "equipments": list(self.equipments),
            "secondaryMuscles": list(self.secondary_muscles),
            "instructions": list(self.instructions),
        }


@dataclass
class AlternativeExerciseQuery:
    """Attributes to match when suggesting alternative exercises."""

    target_muscles: List[str] = field(default_factory=list)
    body_parts: List[str] = field(default_factory=list)
    equipments: List[str] = field(default_factory=list)
    exclude_id: Optional[str] = None  # Exercise to omit from results
    limit: int = 5

    def __post_init__(self):
        if self.limit < 1:
            raise ValueError(f"limit must be a positive integer, got {self.limit}")

    @classmethod
    def for_exercise(cls, exercise: Exercise, limit: int = 5) -> "AlternativeExerciseQuery":
        """Query describing *exercise*, excluding the exercise itself."""
        return cls(
            target_muscles=list(exercise.target_muscles),
            body_parts=list(exercise.body_parts),
            equipments=list(exercise.equipments),
            exclude_id=exercise.id,
            limit=limit,
        )


@dataclass
class SimilarityScore:
    """An exercise paired with its similarity score (0-100)."""

    exercise: Exercise
    score: float


@dataclass
class MealIngredient:
    """Represents a caller-supplied ingredient line."""

    name: str  # Free text (e.g., "chicken breast")
    quantity: float  # Amount in `unit`
    unit: str  # e.g., "g", "oz", "lb"


@dataclass
class MacroNutrients:
    """Calories (kcal) and macros (grams)."""

    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0
    fiber: float = 0.0


class Confidence(Enum):
    """Trust level attached to a nutrition match."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass
class ValidationResult:
    """Outcome of validating one ingredient against USDA data.

    Nutrient values are scaled to the ingredient's actual quantity.
    They are None when no match was found.
    """

    verified: bool
    confidence: Confidence
    fdc_id: Optional[int] = None
    actual_calories: Optional[float] = None
    actual_protein: Optional[float] = None
    actual_carbs: Optional[float] = None
    actual_fat: Optional[float] = None
    fiber: Optional[float] = None
    matched_name: Optional[str] = None

    @classmethod
    def unverified(cls) -> "ValidationResult":
        """Soft failure: no usable match."""
        return cls(verified=False, confidence=Confidence.LOW)

    def macros(self) -> MacroNutrients:
        """Return scaled values as MacroNutrients (missing values become 0)."""
        return MacroNutrients(
            calories=self.actual_calories or 0.0,
            protein=self.actual_protein or 0.0,
            carbs=self.actual_carbs or 0.0,
            fat=self.actual_fat or 0.0,
            fiber=self.fiber or 0.0,
        )


@dataclass
class IngredientNutrition:
    """Validation result for a named ingredient."""

    name: str
    nutrition: ValidationResult


@dataclass
class MealNutrition:
    """Aggregated nutrition for a meal plus per-ingredient breakdown."""

    total_calories: float
    total_protein: float
    total_carbs: float
    total_fat: float
    total_fiber: float
    ingredients: List[IngredientNutrition] = field(default_factory=list)


@dataclass
class MetabolicProfile:
    """Body metrics used to derive daily energy and macro targets."""

    weight_kg: float
    height_cm: float
    age: int
    gender: str  # "male", "female", or anything else
    activity_level: str  # "sedentary" ... "extremely-active"
    goal: str  # "weight-loss", "muscle-gain", "maintenance", "athletic", "general"


@dataclass
class MacroBreakdown:
    """Daily macro targets in grams."""

    protein: int
    carbs: int
    fat: int


@dataclass
class DailyTargets:
    """Derived daily energy and macro targets."""

    bmr: int
    tdee: int
    target_calories: int
    macros: MacroBreakdown
