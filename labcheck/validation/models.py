from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from labcheck.core.models import ValidationKind


class RuleOutcome(BaseModel):
    """How one rule fared in a validation attempt."""

    model_config = ConfigDict(populate_by_name=True)

    type: ValidationKind
    passed: bool
    error_message: str | None = Field(default=None, alias="errorMessage")


class ValidationVerdict(BaseModel):
    """Aggregated result of validating a submission."""

    model_config = ConfigDict(populate_by_name=True)

    passed: bool
    results: list[RuleOutcome] = Field(default_factory=list)
    summary: str
    hints_used: int = Field(default=0, alias="hintsUsed")
    next_hint: str | None = Field(default=None, alias="nextHint")

    @property
    def failed_count(self) -> int:
        return sum(1 for outcome in self.results if not outcome.passed)

    def to_response(self) -> dict[str, Any]:
        """JSON-shaped payload; absent errorMessage/nextHint are omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
