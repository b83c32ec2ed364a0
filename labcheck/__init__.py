"""Exercise verification engine: Check DSL, custom check scripts, hint progression and terminal simulation."""

from labcheck.exercises import Exercise, ExerciseRepository, hydrate_exercise
from labcheck.service import ExerciseService, create_service
from labcheck.terminal import route_command
from labcheck.validation import ValidationVerdict, validate_exercise

__version__ = "0.1.0"

__all__ = [
    "Exercise",
    "ExerciseRepository",
    "ExerciseService",
    "ValidationVerdict",
    "create_service",
    "hydrate_exercise",
    "route_command",
    "validate_exercise",
]
