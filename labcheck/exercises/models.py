"""
Exercise records.

Stored* models describe exercises as authored (YAML files, JSON columns) and
validate them with pydantic. Exercise is the hydrated, read-only form the
engine runs: its rules and terminal handlers are ready to call.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from labcheck.core.models import TerminalResponse, ValidationKind, ValidationResult
from labcheck.rules.models import StoredCheck


class StoredValidation(BaseModel):
    """A validation rule as authored."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    type: ValidationKind
    error_message: str = Field(alias="errorMessage")
    check: StoredCheck
    fail_message: str = Field(alias="failMessage")


class StoredTerminalResponse(BaseModel):
    """One canned terminal response; no `when` makes it the unconditional fallback."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    when: StoredCheck | None = None
    output: str
    exit_code: int = Field(alias="exitCode")


class ExerciseTranslation(BaseModel):
    """Per-language overrides of an exercise's learner-facing text."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    title: str | None = None
    briefing: str | None = None
    hints: list[str] | None = None
    success_message: str | None = Field(default=None, alias="successMessage")


class ExerciseDefinition(BaseModel):
    """A complete exercise as authored."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str = Field(min_length=1)
    module: str | None = None
    title: str = ""
    briefing: str = ""
    language: str | None = None
    initial_code: str = Field(default="", alias="initialCode")
    prerequisites: list[str] = Field(default_factory=list)
    difficulty: str | None = None
    hints: list[str] = Field(default_factory=list)
    success_message: str = Field(alias="successMessage")
    validations: list[StoredValidation] = Field(default_factory=list)
    # dicts keep authored order; hydration turns this into an ordered list of pairs
    terminal_commands: dict[str, list[StoredTerminalResponse]] = Field(
        default_factory=dict, alias="terminalCommands"
    )
    i18n: dict[str, ExerciseTranslation] = Field(default_factory=dict)


@dataclass(frozen=True)
class ExecutableRule:
    """A hydrated validation rule."""

    kind: ValidationKind
    error_message: str
    fail_message: str
    run: Callable[[str], ValidationResult] = field(repr=False, compare=False)

    def check(self, source: str) -> ValidationResult:
        return self.run(source)


@dataclass(frozen=True)
class TerminalCommandHandler:
    """Picks the canned response for one registered command."""

    pattern: str
    respond: Callable[[str], TerminalResponse] = field(repr=False, compare=False)

    def __call__(self, source: str) -> TerminalResponse:
        return self.respond(source)


@dataclass(frozen=True)
class Exercise:
    """A hydrated exercise snapshot. The engine never mutates it."""

    id: str
    validations: tuple[ExecutableRule, ...]
    terminal_commands: tuple[TerminalCommandHandler, ...]
    hints: tuple[str, ...]
    success_message: str
    module: str | None = None
    title: str = ""
    briefing: str = ""
    language: str | None = None
    initial_code: str = ""
    prerequisites: tuple[str, ...] = ()
    difficulty: str | None = None
    translations: dict[str, ExerciseTranslation] = field(default_factory=dict, compare=False)

    @property
    def command_patterns(self) -> list[str]:
        return [handler.pattern for handler in self.terminal_commands]

    def localized_hints(self, lang: str | None) -> tuple[str, ...]:
        translation = self.translations.get(lang) if lang else None
        if translation and translation.hints:
            return tuple(translation.hints)
        return self.hints

    def localized_success_message(self, lang: str | None) -> str:
        translation = self.translations.get(lang) if lang else None
        if translation and translation.success_message:
            return translation.success_message
        return self.success_message

    def metadata(self, lang: str | None = None) -> dict[str, Any]:
        """Learner-facing fields without any executable parts."""
        translation = self.translations.get(lang) if lang else None
        return {
            "id": self.id,
            "module": self.module,
            "title": (translation and translation.title) or self.title,
            "briefing": (translation and translation.briefing) or self.briefing,
            "language": self.language,
            "initialCode": self.initial_code,
            "prerequisites": list(self.prerequisites),
            "difficulty": self.difficulty,
        }
