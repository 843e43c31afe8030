"""Exercise similarity scoring for alternative exercise suggestions.

Candidates are scored by weighted attribute overlap with a query:

    score = muscle_ratio * 50 + body_part_ratio * 30 + equipment_ratio * 20

Each ratio is the share of query labels found on the candidate
(case-insensitive exact match). Only candidates scoring strictly above
the relevance threshold are returned, best first.

Broadening a query that yields nothing is the caller's job
(see src.scoring.alternatives).
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from src.data_layer.models import AlternativeExerciseQuery, Exercise, SimilarityScore


@dataclass
class ScoringWeights:
    """Configurable weights for exercise similarity scoring."""
    muscle_weight: float = 50.0      # target muscle overlap
    body_part_weight: float = 30.0   # body part overlap
    equipment_weight: float = 20.0   # equipment overlap
    relevance_threshold: float = 20.0  # scores <= this are discarded

    def __post_init__(self):
        """Validate weights are non-negative."""
        weights = [self.muscle_weight, self.body_part_weight,
                   self.equipment_weight, self.relevance_threshold]
        if any(w < 0 for w in weights):
            raise ValueError("All scoring weights must be non-negative")

    @property
    def max_score(self) -> float:
        return self.muscle_weight + self.body_part_weight + self.equipment_weight


def overlap_ratio(query_labels: Sequence[str], candidate_labels: Iterable[str]) -> float:
    """Share of query labels present on the candidate (0.0-1.0).

    Args:
        query_labels: Labels requested by the query
        candidate_labels: Labels carried by the candidate exercise

    Returns:
        Matched query labels / max(1, len(query_labels)); 0.0 for an empty query
    """
    if not query_labels:
        return 0.0
    candidate = {label.lower() for label in candidate_labels or []}
    matched = sum(1 for label in query_labels if label.lower() in candidate)
    return matched / max(1, len(query_labels))


def calculate_similarity(
    exercise: Exercise,
    query: AlternativeExerciseQuery,
    weights: Optional[ScoringWeights] = None,
) -> float:
    """Score how closely *exercise* matches *query*.

    Returns:
        Score from 0.0 to weights.max_score (100.0 with default weights)
    """
    weights = weights or ScoringWeights()
    return (
        overlap_ratio(query.target_muscles, exercise.target_muscles) * weights.muscle_weight
        + overlap_ratio(query.body_parts, exercise.body_parts) * weights.body_part_weight
        + overlap_ratio(query.equipments, exercise.equipments) * weights.equipment_weight
    )


def score_candidates(
    candidates: Sequence[Exercise],
    query: AlternativeExerciseQuery,
    weights: Optional[ScoringWeights] = None,
) -> List[SimilarityScore]:
    """Score, filter and rank a candidate pool.

    The excluded exercise is dropped, scores at or below the relevance
    threshold are discarded, and the rest are sorted by descending score.
    sorted() is stable, so ties keep the pool's order.
    """
    weights = weights or ScoringWeights()
    scored = [
        SimilarityScore(exercise=exercise, score=calculate_similarity(exercise, query, weights))
        for exercise in candidates
        if exercise.id != query.exclude_id
    ]
    relevant = [s for s in scored if s.score > weights.relevance_threshold]
    return sorted(relevant, key=lambda s: s.score, reverse=True)


def find_alternatives(
    candidates: Sequence[Exercise],
    query: AlternativeExerciseQuery,
    weights: Optional[ScoringWeights] = None,
) -> List[Exercise]:
    """Return at most query.limit exercises most similar to the query."""
    ranked = score_candidates(candidates, query, weights)
    return [s.exercise for s in ranked[:query.limit]]


class ExerciseSimilarityScorer:
    """Scores candidate exercises against a query with configured weights."""

    def __init__(self, weights: Optional[ScoringWeights] = None):
        self.weights = weights or ScoringWeights()

    def score(self, exercise: Exercise, query: AlternativeExerciseQuery) -> float:
        return calculate_similarity(exercise, query, self.weights)

    def rank(self, candidates: Sequence[Exercise],
             query: AlternativeExerciseQuery) -> List[SimilarityScore]:
        return score_candidates(candidates, query, self.weights)

    def find_alternatives(self, candidates: Sequence[Exercise],
                          query: AlternativeExerciseQuery) -> List[Exercise]:
        return find_alternatives(candidates, query, self.weights)
