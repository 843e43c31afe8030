"""Scoring module for exercise similarity and alternative suggestions."""

from .exercise_similarity import (
    ExerciseSimilarityScorer,
    ScoringWeights,
    calculate_similarity,
    find_alternatives,
    score_candidates,
)

__all__ = [
    "ExerciseSimilarityScorer",
    "ScoringWeights",
    "calculate_similarity",
    "find_alternatives",
    "score_candidates",
]
