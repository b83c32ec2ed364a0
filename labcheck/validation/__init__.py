# Validation package: orchestrator, verdict models and hint progression

from labcheck.validation.hints import select_hint
from labcheck.validation.models import RuleOutcome, ValidationVerdict
from labcheck.validation.orchestrator import validate_exercise

__all__ = [
    "RuleOutcome",
    "ValidationVerdict",
    "select_hint",
    "validate_exercise",
]
