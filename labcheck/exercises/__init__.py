# Exercises package: stored records, hydration, sources and lookup

from labcheck.exercises.hydrator import hydrate_exercise, hydrate_terminal_command, hydrate_validation
from labcheck.exercises.interface import ExerciseSource
from labcheck.exercises.models import (
    ExecutableRule,
    Exercise,
    ExerciseDefinition,
    StoredTerminalResponse,
    StoredValidation,
    TerminalCommandHandler,
)
from labcheck.exercises.repository import ExerciseRepository
from labcheck.exercises.sources import InMemoryExerciseSource, YamlExerciseSource

__all__ = [
    "ExecutableRule",
    "Exercise",
    "ExerciseDefinition",
    "ExerciseRepository",
    "ExerciseSource",
    "InMemoryExerciseSource",
    "StoredTerminalResponse",
    "StoredValidation",
    "TerminalCommandHandler",
    "YamlExerciseSource",
    "hydrate_exercise",
    "hydrate_terminal_command",
    "hydrate_validation",
]
