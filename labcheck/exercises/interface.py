from abc import ABC, abstractmethod

from labcheck.exercises.models import ExerciseDefinition


class ExerciseSource(ABC):
    """
    Abstract interface for fetching stored exercise definitions.

    This interface allows us to swap out different exercise sources
    (YAML files, database rows, etc.) without changing the engine.
    """

    @abstractmethod
    def get_definition(self, exercise_id: str) -> ExerciseDefinition | None:
        """
        Fetch one exercise definition.

        Args:
            exercise_id: The exercise identifier (e.g. "k8s-01-invalid-pod")

        Returns:
            The stored definition, or None if the source has no such exercise
        """
        pass

    @abstractmethod
    def list_ids(self) -> list[str]:
        """Return the ids of all exercises this source knows, in source order."""
        pass
