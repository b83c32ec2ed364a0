"""
Core error classes for labcheck.

Content-author errors (bad regex, bad check script) derive from
CheckDefinitionError and are contained at the rule boundary by the
orchestrator. Input errors (unparsable YAML) are not exceptions at all.
"""


class LabcheckError(Exception):
    """Base class for all labcheck errors."""

    pass


class CheckDefinitionError(LabcheckError):
    """Raised when an authored check cannot be evaluated as written."""

    pass


class InvalidPatternError(CheckDefinitionError):
    """Raised when a match/not_match check carries an invalid regular expression."""

    def __init__(self, pattern: str, reason: str) -> None:
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid regular expression {pattern!r}: {reason}")


class CustomCodeError(CheckDefinitionError):
    """Base class for failures of an authored check script."""

    pass


class DeniedIdentifierError(CustomCodeError):
    """Raised when a check script mentions a denylisted identifier."""

    def __init__(self, pattern: str) -> None:
        self.pattern = pattern
        super().__init__(f"Potentially dangerous code detected: {pattern}")


class CheckScriptSyntaxError(CustomCodeError):
    """Raised when a check script cannot be tokenized or parsed."""

    def __init__(self, message: str, line: int | None = None, column: int | None = None) -> None:
        self.line = line
        self.column = column
        location = f" (line {line}, column {column})" if line is not None else ""
        super().__init__(f"{message}{location}")


class CheckScriptRuntimeError(CustomCodeError):
    """Raised when a check script fails while running."""

    pass


class ExerciseDefinitionError(LabcheckError):
    """Raised when a stored exercise definition cannot be read."""

    pass
