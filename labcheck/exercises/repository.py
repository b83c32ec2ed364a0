"""
Hydrated exercise lookup with an explicit, injected cache.
"""

import structlog

from labcheck.core.utils.caching import ExpiringCache
from labcheck.exercises.hydrator import hydrate_exercise
from labcheck.exercises.interface import ExerciseSource
from labcheck.exercises.models import Exercise

logger = structlog.get_logger(__name__)


class ExerciseRepository:
    """
    Looks up exercises by id, hydrating on a cache miss.

    Unknown ids are not cached, so an exercise added to the source becomes
    visible on the next lookup. Admin writes should call invalidate().
    """

    def __init__(self, source: ExerciseSource, cache: ExpiringCache | None = None):
        self.source = source
        self.cache = cache if cache is not None else ExpiringCache()

    def get_exercise(self, exercise_id: str) -> Exercise | None:
        cached = self.cache.get(exercise_id)
        if cached is not None:
            return cached

        definition = self.source.get_definition(exercise_id)
        if definition is None:
            logger.info("Exercise not found", exercise_id=exercise_id)
            return None

        exercise = hydrate_exercise(definition)
        self.cache.set(exercise_id, exercise)
        return exercise

    def list_ids(self) -> list[str]:
        return self.source.list_ids()

    def invalidate(self, exercise_id: str | None = None) -> None:
        """Drop one cached exercise, or all of them when no id is given."""
        if exercise_id is None:
            self.cache.clear()
        else:
            self.cache.invalidate(exercise_id)
