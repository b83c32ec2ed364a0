"""
Custom check execution.

Authored check scripts run through the interpreter in
labcheck.custom.interpreter, never through Python's eval/exec. Before a
script is parsed it is screened against a fixed denylist of identifiers
tied to ambient capabilities (processes, filesystem, network, dynamic code,
timers). The interpreter has no way to reach any of those anyway; the
denylist is kept because existing content was written against it, and it
is a best-effort guard rather than a security boundary. Scripts are written
by trusted exercise authors.
"""

import re
from functools import lru_cache
from typing import Any

import structlog

from labcheck.core.errors import CustomCodeError, DeniedIdentifierError
from labcheck.core.models import ValidationResult
from labcheck.custom import syntax as ast
from labcheck.custom.interpreter import Interpreter, to_text, truthy
from labcheck.custom.parser import parse

logger = structlog.get_logger(__name__)

# Part of the authoring contract: content relies on exactly this list.
DENYLIST_PATTERNS: tuple[str, ...] = (
    r"\brequire\s*\(",
    r"\bimport\s+",
    r"\bprocess\b",
    r"\bglobal\b",
    r"\b__dirname\b",
    r"\b__filename\b",
    r"\beval\s*\(",
    r"\bFunction\s*\(",
    r"\bsetTimeout\b",
    r"\bsetInterval\b",
    r"\bfetch\b",
    r"\bXMLHttpRequest\b",
)
_DENYLIST = tuple(re.compile(pattern) for pattern in DENYLIST_PATTERNS)

ERROR_PREFIX = "Validation error"


def check_denylist(snippet: str) -> None:
    """Raise DeniedIdentifierError if the snippet mentions a denylisted identifier."""
    for pattern in _DENYLIST:
        if pattern.search(snippet):
            raise DeniedIdentifierError(pattern.pattern)


@lru_cache(maxsize=512)
def compile_snippet(snippet: str) -> ast.Program:
    """
    Screen and parse a check script.

    Raises:
        DeniedIdentifierError: If the denylist matches
        CheckScriptSyntaxError: If the script does not parse
    """
    check_denylist(snippet)
    return parse(snippet)


def check_custom_syntax(snippet: str) -> tuple[bool, str | None]:
    """
    Validate a script without running it.

    Returns:
        Tuple of (valid, error message or None)
    """
    try:
        compile_snippet(snippet)
    except (CustomCodeError, RecursionError) as e:
        return False, str(e)
    return True, None


def coerce_result(value: Any) -> ValidationResult:
    """
    Turn a script's return value into a verdict.

    A bool is the verdict itself, a mapping with "passed" may carry its own
    "errorMessage", anything else is judged by truthiness.
    """
    if isinstance(value, bool):
        return ValidationResult(passed=value)
    if isinstance(value, dict) and "passed" in value:
        message = value.get("errorMessage")
        return ValidationResult(
            passed=truthy(value["passed"]),
            error_message=None if message is None else to_text(message),
        )
    return ValidationResult(passed=truthy(value))


def run_custom(snippet: str, source: str) -> ValidationResult:
    """
    Run an authored check script against submitted code.

    The script sees `code` (the submission), the parse_yaml/get/has helpers
    and basic value constructors; nothing from the host environment.

    Args:
        snippet: Check script text
        source: Submitted code

    Returns:
        ValidationResult; any failure to screen, parse or run the script is
        reported as passed=False with a "Validation error: ..." message
    """
    try:
        program = compile_snippet(snippet)
        value = Interpreter({"code": source}).run(program)
    except Exception as e:
        logger.warning("Custom check failed to run", error=str(e), error_type=type(e).__name__)
        return ValidationResult(passed=False, error_message=f"{ERROR_PREFIX}: {e}")
    return coerce_result(value)
