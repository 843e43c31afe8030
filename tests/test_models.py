"""Tests for data layer models."""
import pytest

from src.data_layer.models import (
    AlternativeExerciseQuery,
    Confidence,
    Exercise,
    MacroNutrients,
    ValidationResult,
)


class TestExercise:
    """Tests for Exercise model."""

    def test_from_api(self):
        """Test building an exercise from a catalog payload."""
        exercise = Exercise.from_api({
            "exerciseId": "VPPtusI",
            "name": "inverted row bent knees",
            "gifUrl": "https://static.example/VPPtusI.gif",
            "targetMuscles": ["upper back"],
            "bodyParts": ["back"],
            "equipments": ["body weight"],
            "secondaryMuscles": ["biceps", "forearms"],
            "instructions": ["Step:1 Set up a bar."],
        })
        assert exercise.id == "VPPtusI"
        assert exercise.target_muscles == ["upper back"]
        assert exercise.body_parts == ["back"]
        assert exercise.equipments == ["body weight"]
        assert exercise.secondary_muscles == ["biceps", "forearms"]

    def test_from_api_missing_lists(self):
        """Null or absent label lists become empty lists."""
        exercise = Exercise.from_api({"exerciseId": "x", "targetMuscles": None})
        assert exercise.target_muscles == []
        assert exercise.body_parts == []
        assert exercise.gif_url == ""

    def test_to_dict_round_trips_keys(self):
        exercise = Exercise(id="x", name="plank", body_parts=["waist"])
        data = exercise.to_dict()
        assert data["exerciseId"] == "x"
        assert data["bodyParts"] == ["waist"]
        assert Exercise.from_api(data) == exercise


class TestAlternativeExerciseQuery:
    def test_defaults(self):
        query = AlternativeExerciseQuery()
        assert query.limit == 5
        assert query.exclude_id is None
        assert query.target_muscles == []

    def test_for_exercise(self):
        exercise = Exercise(id="bench", target_muscles=["pectorals"],
                            body_parts=["chest"], equipments=["barbell"])
        query = AlternativeExerciseQuery.for_exercise(exercise, limit=3)
        assert query.exclude_id == "bench"
        assert query.target_muscles == ["pectorals"]
        assert query.limit == 3
        # Query lists are copies
        query.target_muscles.append("triceps")
        assert exercise.target_muscles == ["pectorals"]

    def test_negative_limit_rejected(self):
        with pytest.raises(ValueError):
            AlternativeExerciseQuery(limit=-1)


class TestValidationResult:
    def test_unverified(self):
        result = ValidationResult.unverified()
        assert result.verified is False
        assert result.confidence is Confidence.LOW
        assert result.fdc_id is None
        assert result.matched_name is None

    def test_macros_treat_missing_as_zero(self):
        result = ValidationResult(verified=True, confidence=Confidence.HIGH,
                                  actual_calories=100.0, actual_protein=5.0)
        assert result.macros() == MacroNutrients(calories=100.0, protein=5.0)

    def test_confidence_values(self):
        assert [c.value for c in Confidence] == ["high", "medium", "low"]
