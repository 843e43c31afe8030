"""Two-stage alternative exercise lookup against the exercise catalog.

Stage 1 scores a general catalog page against the full attributes of the
target exercise. If that yields nothing, stage 2 fetches exercises for the
target's first body part and scores them on body part alone.
"""

import logging
from typing import List, Optional, Sequence

from src.data_layer.exceptions import ExerciseNotFoundError
from src.data_layer.models import AlternativeExerciseQuery, Exercise
from src.ingestion.exercisedb_client import ExerciseDBClient
from src.scoring.exercise_similarity import ExerciseSimilarityScorer

logger = logging.getLogger(__name__)


class AlternativeFinder:
    """Suggests alternatives for catalog exercises."""

    def __init__(self, client: ExerciseDBClient,
                 scorer: Optional[ExerciseSimilarityScorer] = None,
                 pool_size: int = 200):
        """Initialize finder.

        Args:
            client: Exercise catalog client
            scorer: Similarity scorer (default weights if omitted)
            pool_size: Number of catalog exercises scored in stage 1
        """
        self.client = client
        self.scorer = scorer or ExerciseSimilarityScorer()
        self.pool_size = pool_size

    def alternatives_for_exercise(self, exercise_id: str, limit: int = 5) -> List[Exercise]:
        """Return up to *limit* alternatives for *exercise_id*.

        Returns an empty list when the exercise is unknown.

        Raises:
            ExerciseDBError: If the catalog request fails
        """
        pool = self.client.get_all_exercises(limit=self.pool_size, offset=0)
        target = self._find_target(exercise_id, pool)
        if target is None:
            logger.info("Exercise %s not found; no alternatives", exercise_id)
            return []

        alternatives = self.narrow(target, pool, limit)
        if alternatives:
            return alternatives

        logger.debug("No alternatives for %s in catalog page, broadening by body part", exercise_id)
        return self.broaden(target, limit)

    def narrow(self, target: Exercise, pool: Sequence[Exercise], limit: int) -> List[Exercise]:
        """Score *pool* against every attribute of *target*."""
        query = AlternativeExerciseQuery.for_exercise(target, limit=limit)
        return self.scorer.find_alternatives(pool, query)

    def broaden(self, target: Exercise, limit: int) -> List[Exercise]:
        """Score the target's body-part pool on body part only."""
        if not target.body_parts:
            return []
        body_part = target.body_parts[0]
        pool = self.client.get_exercises_by_body_part(body_part, limit=self.pool_size)
        query = AlternativeExerciseQuery(
            body_parts=[body_part],
            exclude_id=target.id,
            limit=limit,
        )
        return self.scorer.find_alternatives(pool, query)

    def _find_target(self, exercise_id: str, pool: Sequence[Exercise]) -> Optional[Exercise]:
        for exercise in pool:
            if exercise.id == exercise_id:
                return exercise
        try:
            return self.client.get_exercise_by_id(exercise_id)
        except ExerciseNotFoundError:
            return None
