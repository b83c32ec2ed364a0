"""
Exercise source configuration.
"""

from dataclasses import dataclass


@dataclass
class ExerciseConfig:
    """Where exercise definitions live and how learners are addressed."""

    base_path: str = "exercises"
    default_language: str = "es"
