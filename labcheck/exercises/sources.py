"""
Exercise sources.

YamlExerciseSource reads authored exercise files from a directory tree,
implementing the ExerciseSource interface. InMemoryExerciseSource serves
definitions a host already holds (database rows, fixtures).
"""

from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

import structlog
import yaml
from pydantic import ValidationError

from labcheck.core.errors import ExerciseDefinitionError
from labcheck.custom.executor import check_custom_syntax
from labcheck.exercises.interface import ExerciseSource
from labcheck.exercises.models import ExerciseDefinition
from labcheck.rules.models import StoredCheck

logger = structlog.get_logger(__name__)

EXERCISE_SUFFIXES = (".yaml", ".yml")


class InMemoryExerciseSource(ExerciseSource):
    """Serves a fixed set of definitions, keyed by id in the given order."""

    def __init__(self, definitions: Iterable[ExerciseDefinition | Mapping[str, Any]] = ()):
        self._definitions: dict[str, ExerciseDefinition] = {}
        for item in definitions:
            self.add(item)

    def add(self, definition: ExerciseDefinition | Mapping[str, Any]) -> ExerciseDefinition:
        if not isinstance(definition, ExerciseDefinition):
            definition = ExerciseDefinition.model_validate(dict(definition))
        self._definitions[definition.id] = definition
        return definition

    def get_definition(self, exercise_id: str) -> ExerciseDefinition | None:
        return self._definitions.get(exercise_id)

    def list_ids(self) -> list[str]:
        return list(self._definitions)


class YamlExerciseSource(ExerciseSource):
    """
    Loads exercises from YAML files under a base directory.

    Every *.yaml / *.yml file below base_path holds one exercise. Files whose
    name starts with "_" (module configuration such as _modules.yaml) are
    skipped. A file that fails to parse or validate is logged and skipped so
    one broken exercise does not take the others down.
    """

    def __init__(self, base_path: str | Path):
        self.base_path = Path(base_path)

    def get_definition(self, exercise_id: str) -> ExerciseDefinition | None:
        return self.load_all().get(exercise_id)

    def list_ids(self) -> list[str]:
        return list(self.load_all())

    def load_all(self) -> dict[str, ExerciseDefinition]:
        """Read every exercise file; the first file seen wins on duplicate ids."""
        definitions: dict[str, ExerciseDefinition] = {}
        if not self.base_path.is_dir():
            logger.warning("Exercise directory not found", base_path=str(self.base_path))
            return definitions

        for path in self._exercise_files():
            try:
                definition = self.load_file(path)
            except ExerciseDefinitionError as e:
                logger.error("Skipping exercise file", path=str(path), error=str(e))
                continue

            if definition.id in definitions:
                logger.warning("Duplicate exercise id, keeping first", exercise_id=definition.id, path=str(path))
                continue
            definitions[definition.id] = definition

        logger.debug("Loaded exercises", count=len(definitions), base_path=str(self.base_path))
        return definitions

    def _exercise_files(self) -> list[Path]:
        return sorted(
            path
            for path in self.base_path.rglob("*")
            if path.is_file() and path.suffix in EXERCISE_SUFFIXES and not path.name.startswith("_")
        )

    @staticmethod
    def load_file(path: Path) -> ExerciseDefinition:
        """
        Parse and validate a single exercise file.

        Raises:
            ExerciseDefinitionError: If the file cannot be read, parsed or validated
        """
        try:
            raw = yaml.safe_load(path.read_text(encoding="utf-8"))
        except (OSError, yaml.YAMLError) as e:
            raise ExerciseDefinitionError(f"Cannot read {path}: {e}") from e

        if not isinstance(raw, dict):
            raise ExerciseDefinitionError(f"{path} does not contain a mapping")

        try:
            definition = ExerciseDefinition.model_validate(raw)
        except ValidationError as e:
            raise ExerciseDefinitionError(f"Invalid exercise in {path}: {e}") from e

        _warn_on_broken_scripts(definition, path)
        return definition


def _iter_checks(check: StoredCheck | None) -> Iterable[StoredCheck]:
    if check is None:
        return
    yield check
    for child in (check.all_ or []) + (check.any_ or []):
        yield from _iter_checks(child)
    yield from _iter_checks(check.not_)


def _warn_on_broken_scripts(definition: ExerciseDefinition, path: Path) -> None:
    checks = [rule.check for rule in definition.validations]
    checks += [response.when for responses in definition.terminal_commands.values() for response in responses]
    for root in checks:
        for check in _iter_checks(root):
            if check.custom is None:
                continue
            valid, error = check_custom_syntax(check.custom)
            if not valid:
                logger.warning(
                    "Custom check will always fail",
                    exercise_id=definition.id,
                    path=str(path),
                    error=error,
                )
