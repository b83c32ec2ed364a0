"""
Validation orchestrator.

Runs every rule of an exercise against submitted code, in order and without
stopping at the first failure, so the learner can be shown every problem.
A rule that raises is reported as failed; it never aborts the others.
"""

import structlog

from labcheck.core.i18n import translate
from labcheck.core.models import ValidationResult
from labcheck.core.utils.logging import log_operation
from labcheck.exercises.models import ExecutableRule, Exercise
from labcheck.validation.hints import select_hint
from labcheck.validation.models import RuleOutcome, ValidationVerdict

logger = structlog.get_logger(__name__)

INTERNAL_ERROR_PREFIX = "internal validation error"


def run_rule(rule: ExecutableRule, source: str) -> ValidationResult:
    """Run one rule, turning any exception into a failed result."""
    try:
        return rule.check(source)
    except Exception as e:
        logger.error(
            "Rule raised during validation",
            rule=rule.error_message,
            kind=str(rule.kind),
            error=str(e),
            exc_info=True,
        )
        return ValidationResult(passed=False, error_message=f"{INTERNAL_ERROR_PREFIX}: {rule.error_message}")


def build_summary(exercise: Exercise, outcomes: list[RuleOutcome], lang: str | None = None) -> str:
    failed = [outcome for outcome in outcomes if not outcome.passed]
    if not failed:
        return exercise.localized_success_message(lang)

    summary = failed[0].error_message or translate("validation_failed", lang)
    if len(failed) > 1:
        summary += f"\n\n({len(failed) - 1} more error(s))"
    return summary


def validate_exercise(
    exercise: Exercise,
    source: str,
    failure_count: int = 0,
    lang: str | None = None,
) -> ValidationVerdict:
    """
    Validate submitted code against an exercise.

    Args:
        exercise: Hydrated exercise
        source: Submitted code
        failure_count: Failed attempts so far; drives hint progression
        lang: Optional language for localized hints and messages

    Returns:
        ValidationVerdict with one outcome per rule, in declared order
    """
    with log_operation("exercise_validation", exercise_id=exercise.id, failure_count=failure_count):
        outcomes = []
        for rule in exercise.validations:
            result = run_rule(rule, source)
            outcomes.append(
                RuleOutcome(type=rule.kind, passed=result.passed, error_message=result.error_message)
            )

        passed = all(outcome.passed for outcome in outcomes)
        hints_used, next_hint = select_hint(exercise.localized_hints(lang), failure_count, passed)

        verdict = ValidationVerdict(
            passed=passed,
            results=outcomes,
            summary=build_summary(exercise, outcomes, lang),
            hints_used=hints_used,
            next_hint=next_hint,
        )

    logger.info(
        "Validated submission",
        exercise_id=exercise.id,
        passed=passed,
        failed=verdict.failed_count,
        hints_used=hints_used,
    )
    return verdict
