"""
Hydration: stored exercise records into executable rules and handlers.

A rule whose check is nothing but a custom script reports that script's
verdict as-is, including any message the script chose. Every other rule runs
the full check tree and, on failure, reports the rule's single failMessage
whichever leaf failed.
"""

from collections.abc import Callable, Mapping
from typing import Any

import structlog

from labcheck.core.models import TerminalResponse, ValidationResult
from labcheck.custom.executor import run_custom
from labcheck.exercises.models import (
    ExecutableRule,
    Exercise,
    ExerciseDefinition,
    StoredTerminalResponse,
    StoredValidation,
    TerminalCommandHandler,
)
from labcheck.rules.evaluator import CheckEvaluator
from labcheck.rules.models import StoredCheck, is_pure_custom

logger = structlog.get_logger(__name__)

_evaluator = CheckEvaluator()

# Returned when no response in a command's list applies
EMPTY_RESPONSE = TerminalResponse(output="", exit_code=0)


def hydrate_validation(
    stored: StoredValidation | Mapping[str, Any], evaluator: CheckEvaluator = _evaluator
) -> ExecutableRule:
    """
    Convert a stored validation rule into an ExecutableRule.

    Args:
        stored: StoredValidation or its authored mapping
        evaluator: Evaluator used for DSL checks

    Returns:
        ExecutableRule whose check(source) returns a ValidationResult

    Raises:
        pydantic.ValidationError: If required fields are missing
    """
    if not isinstance(stored, StoredValidation):
        stored = StoredValidation.model_validate(dict(stored))

    if is_pure_custom(stored.check):
        snippet = stored.check.custom

        def run(source: str) -> ValidationResult:
            return run_custom(snippet, source)

    else:
        node = stored.check.to_node()
        fail_message = stored.fail_message

        def run(source: str) -> ValidationResult:
            if not evaluator.evaluate(node, source):
                return ValidationResult(passed=False, error_message=fail_message)
            return ValidationResult(passed=True)

    return ExecutableRule(
        kind=stored.type,
        error_message=stored.error_message,
        fail_message=stored.fail_message,
        run=run,
    )


def _condition(when: StoredCheck, evaluator: CheckEvaluator) -> Callable[[str], bool]:
    # a script-only `when` selects on the verdict's `passed`, not on truthiness
    if is_pure_custom(when):
        snippet = when.custom
        return lambda source: run_custom(snippet, source).passed
    node = when.to_node()
    return lambda source: evaluator.evaluate(node, source)


def hydrate_terminal_command(
    pattern: str,
    responses: list[StoredTerminalResponse] | list[Mapping[str, Any]],
    evaluator: CheckEvaluator = _evaluator,
) -> TerminalCommandHandler:
    """
    Convert a command's stored response list into a handler.

    The handler returns the first response whose `when` holds, or the first
    one without a `when`, scanning in authored order. If none applies it
    returns an empty response with exit code 0.

    A `when` holding nothing but a custom script holds when the script's
    verdict passes. A script returning `{passed: false, ...}` therefore does
    not select its response, even though the returned mapping is itself a
    truthy value.
    """
    entries: list[tuple[Callable[[str], bool] | None, TerminalResponse]] = []
    for item in responses:
        stored = item if isinstance(item, StoredTerminalResponse) else StoredTerminalResponse.model_validate(dict(item))
        condition = _condition(stored.when, evaluator) if stored.when is not None else None
        entries.append((condition, TerminalResponse(output=stored.output, exit_code=stored.exit_code)))

    def respond(source: str) -> TerminalResponse:
        for condition, response in entries:
            if condition is None or condition(source):
                return response
        logger.debug("No terminal response matched", pattern=pattern)
        return EMPTY_RESPONSE

    return TerminalCommandHandler(pattern=pattern, respond=respond)


def hydrate_exercise(definition: ExerciseDefinition | Mapping[str, Any]) -> Exercise:
    """
    Convert a stored exercise into its executable form.

    Args:
        definition: ExerciseDefinition or its authored mapping

    Returns:
        Hydrated Exercise with terminal commands kept in authored order
    """
    if not isinstance(definition, ExerciseDefinition):
        definition = ExerciseDefinition.model_validate(dict(definition))

    exercise = Exercise(
        id=definition.id,
        validations=tuple(hydrate_validation(rule) for rule in definition.validations),
        terminal_commands=tuple(
            hydrate_terminal_command(pattern, responses)
            for pattern, responses in definition.terminal_commands.items()
        ),
        hints=tuple(definition.hints),
        success_message=definition.success_message,
        module=definition.module,
        title=definition.title,
        briefing=definition.briefing,
        language=definition.language,
        initial_code=definition.initial_code,
        prerequisites=tuple(definition.prerequisites),
        difficulty=definition.difficulty,
        translations=dict(definition.i18n),
    )
    logger.debug(
        "Hydrated exercise",
        exercise_id=exercise.id,
        validations=len(exercise.validations),
        commands=len(exercise.terminal_commands),
    )
    return exercise
