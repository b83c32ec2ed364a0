"""
Public entry points by exercise id.

ExerciseService is what an HTTP handler calls: it resolves the exercise
through an explicit lookup function and turns an unknown id into a
ready-to-render response instead of an exception.
"""

from collections.abc import Callable

import structlog

from labcheck.core.config import Config
from labcheck.core.i18n import resolve_language, translate
from labcheck.core.models import TerminalResponse
from labcheck.core.utils.caching import ExpiringCache
from labcheck.exercises.models import Exercise
from labcheck.exercises.repository import ExerciseRepository
from labcheck.exercises.sources import YamlExerciseSource
from labcheck.terminal.router import route_command
from labcheck.validation.models import ValidationVerdict
from labcheck.validation.orchestrator import validate_exercise

logger = structlog.get_logger(__name__)

ExerciseLookup = Callable[[str], Exercise | None]


class ExerciseService:
    """
    Validation and terminal simulation for exercises looked up by id.

    Args:
        get_exercise: Returns the hydrated exercise for an id, or None
        default_lang: Language used when a call names none (or an unknown one)
    """

    def __init__(self, get_exercise: ExerciseLookup, default_lang: str = "es"):
        self.get_exercise = get_exercise
        self.default_lang = default_lang

    def _lang(self, lang: str | None) -> str:
        return resolve_language(lang, self.default_lang)

    def validate(
        self,
        exercise_id: str,
        code: str,
        failure_count: int = 0,
        lang: str | None = None,
    ) -> ValidationVerdict:
        language = self._lang(lang)
        exercise = self.get_exercise(exercise_id)
        if exercise is None:
            logger.warning("Validation requested for unknown exercise", exercise_id=exercise_id)
            return ValidationVerdict(
                passed=False,
                results=[],
                summary=translate("exercise_not_found", language),
                hints_used=0,
            )
        return validate_exercise(exercise, code, failure_count, language)

    def execute_command(
        self,
        exercise_id: str,
        command: str,
        code: str,
        lang: str | None = None,
    ) -> TerminalResponse:
        language = self._lang(lang)
        exercise = self.get_exercise(exercise_id)
        if exercise is None:
            logger.warning("Terminal command for unknown exercise", exercise_id=exercise_id)
            return TerminalResponse(
                output=translate("terminal_exercise_not_found", language, exercise_id=exercise_id),
                exit_code=1,
            )
        return route_command(exercise, command, code, language)


def create_service(app_config: Config | None = None) -> ExerciseService:
    """Wire a YAML-backed, cached service from configuration."""
    if app_config is None:
        from labcheck.core.config import config as app_config

    repository = ExerciseRepository(
        YamlExerciseSource(app_config.exercises.base_path),
        ExpiringCache.from_config(app_config.cache),
    )
    return ExerciseService(repository.get_exercise, default_lang=app_config.exercises.default_language)
