from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ValidationKind(str, Enum):
    """The stage of understanding a validation rule checks."""

    SYNTAX = "syntax"
    SEMANTIC = "semantic"
    INTENTION = "intention"

    def __str__(self) -> str:
        return self.value


class ValidationResult(BaseModel):
    """Outcome of running one hydrated rule against submitted code."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    passed: bool
    error_message: str | None = Field(default=None, alias="errorMessage")


class TerminalResponse(BaseModel):
    """Canned command output shown in the simulated terminal."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    output: str = ""
    exit_code: int = Field(default=0, alias="exitCode")

    def to_response(self) -> dict[str, Any]:
        """JSON-shaped payload for the HTTP layer."""
        return self.model_dump(by_alias=True)
