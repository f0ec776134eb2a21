from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Severity(str, Enum):
    error = "error"
    warning = "warning"


class ReasonCode(str, Enum):
    missing = "missing"
    out_of_range = "out_of_range"
    non_finite = "non_finite"
    not_integer = "not_integer"
    invalid_uri = "invalid_uri"
    vector_too_short = "vector_too_short"
    dimension_mismatch = "dimension_mismatch"
    duplicate_listing_id = "duplicate_listing_id"
    text_too_long = "text_too_long"


class ValidationIssue(BaseModel):
    model_config = ConfigDict(frozen=True)

    field: str
    reason: ReasonCode
    severity: Severity = Severity.error
    message: str = ""


class ValidationResult(BaseModel):
    """Ordered issues found on one Place. Valid when it holds no errors."""

    model_config = ConfigDict(frozen=True)

    issues: tuple[ValidationIssue, ...] = Field(default_factory=tuple)

    @property
    def errors(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == Severity.error]

    @property
    def warnings(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == Severity.warning]

    @property
    def is_valid(self) -> bool:
        return not self.errors
